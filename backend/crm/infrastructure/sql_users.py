"""SQL User Repository — login subjects on SQLAlchemy async."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crm.infrastructure.database import translate_db_errors
from crm.infrastructure.records import user_record
from crm.models.user import User


class SqlUserRepository:
    """Implements UserRepository (core/repository_protocols.py)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_username(self, username: str) -> dict | None:
        result = await self.db.execute(
            select(User).where(User.username == username),
        )
        user = result.scalar_one_or_none()
        return user_record(user) if user else None

    async def get_by_id(self, user_id: UUID) -> dict | None:
        user = await self.db.get(User, user_id)
        return user_record(user) if user else None

    async def insert(self, data: dict) -> dict:
        user = User(**data)
        self.db.add(user)
        async with translate_db_errors(self.db, "insert", "User"):
            await self.db.commit()
        return user_record(user)
