"""Create User — provision a login account from the command line.

Usage:
    python -m crm.create_user --username admin --password secret
    python -m crm.create_user --username admin     # prompts for the password

Invariants:
    - The password is stored only as a scrypt hash (core/credentials.py)
    - An existing username is reported, never overwritten
"""

import argparse
import asyncio
import getpass
import logging
import sys
from datetime import timedelta

from crm.config import get_settings
from crm.core.errors import CrmError
from crm.db.session import create_session_factory
from crm.infrastructure.observability import setup_logging
from crm.infrastructure.sql_users import SqlUserRepository
from crm.services.auth_service import AuthService

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a CRM login user")
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", default=None)
    parser.add_argument("--database-url", default=None)
    return parser.parse_args(argv)


async def create_user(database_url: str, username: str, password: str) -> dict:
    settings = get_settings()
    engine, factory = create_session_factory(database_url)
    try:
        async with factory() as db:
            service = AuthService(
                SqlUserRepository(db),
                settings.jwt_secret,
                algorithm=settings.jwt_algorithm,
                credential_ttl=timedelta(hours=settings.credential_ttl_hours),
            )
            return await service.create_user(username, password)
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level, "text")
    password = args.password or getpass.getpass("Password: ")
    try:
        user = asyncio.run(create_user(
            args.database_url or settings.database_url, args.username, password,
        ))
    except (CrmError, ValueError) as e:
        logger.error(f"User not created: {getattr(e, 'message', e)}")
        return 1
    print(f"Created user {user['username']} ({user['id']})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
