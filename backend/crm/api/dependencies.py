"""API Dependencies — per-request services and the bearer-credential gate.

Invariants:
    - Every service built here shares the request's single AsyncSession
    - require_credential accepts only `Authorization: Bearer <token>`; anything
      else is UnauthorizedError (401)
    - guard_mutation is a no-op unless Settings.protect_mutations is True

Design Decisions:
    - Providers are plain functions wired with Depends, so tests override get_db
      once and every repository follows
"""

from datetime import timedelta

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from crm.config import Settings, get_settings
from crm.core.credentials import verify_credential
from crm.core.errors import UnauthorizedError
from crm.infrastructure.database import get_db
from crm.infrastructure.sql_catalog import SqlCategoryRepository, SqlSubCategoryRepository
from crm.infrastructure.sql_customers import SqlCustomerRepository
from crm.infrastructure.sql_users import SqlUserRepository
from crm.services.auth_service import AuthService
from crm.services.category_service import CategoryService
from crm.services.customer_service import CustomerService
from crm.services.subcategory_service import SubCategoryService


# --- Services -----------------------------------------------------------------

def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    return CategoryService(
        SqlCategoryRepository(db),
        SqlSubCategoryRepository(db),
        SqlCustomerRepository(db),
    )


def get_subcategory_service(
    db: AsyncSession = Depends(get_db),
) -> SubCategoryService:
    return SubCategoryService(
        SqlCategoryRepository(db),
        SqlSubCategoryRepository(db),
        SqlCustomerRepository(db),
    )


def get_customer_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> CustomerService:
    return CustomerService(
        SqlCustomerRepository(db),
        SqlCategoryRepository(db),
        SqlSubCategoryRepository(db),
        reset_statuses=settings.reset_statuses_on_update,
    )


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(
        SqlUserRepository(db),
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        credential_ttl=timedelta(hours=settings.credential_ttl_hours),
    )


# --- Auth Gate ----------------------------------------------------------------

def bearer_token(request: Request) -> str:
    """Extract the token from the Authorization header or raise 401."""
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Authentication required")
    return token.strip()


def require_credential(
    request: Request, settings: Settings = Depends(get_settings),
) -> dict:
    """Verified claims of the caller's credential."""
    return verify_credential(
        bearer_token(request), settings.jwt_secret, settings.jwt_algorithm,
    )


def guard_mutation(
    request: Request, settings: Settings = Depends(get_settings),
) -> None:
    """Attach to write routes; enforced only when protect_mutations is on."""
    if settings.protect_mutations:
        require_credential(request, settings)
