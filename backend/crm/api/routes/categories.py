"""Category Routes — /api/categories CRUD.

Invariants:
    - Path ids arrive as plain strings; the service parses them (400 on malformed)
    - Bodies are taken as raw JSON and normalized by the service, so every field
      violation is reported together
    - Write routes pass through guard_mutation
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from crm.api.dependencies import get_category_service, guard_mutation
from crm.schemas.catalog import CategoryResponse
from crm.services.category_service import CategoryService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    service: CategoryService = Depends(get_category_service),
):
    """All categories, newest first."""
    return await service.list_categories()


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: str,
    service: CategoryService = Depends(get_category_service),
):
    return await service.get_category(category_id)


@router.post(
    "", response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(guard_mutation)],
)
async def create_category(
    payload: Any = Body(None),
    service: CategoryService = Depends(get_category_service),
):
    return await service.create_category({} if payload is None else payload)


@router.put(
    "/{category_id}", response_model=CategoryResponse,
    dependencies=[Depends(guard_mutation)],
)
async def update_category(
    category_id: str,
    payload: Any = Body(None),
    service: CategoryService = Depends(get_category_service),
):
    return await service.update_category(
        category_id, {} if payload is None else payload,
    )


@router.delete("/{category_id}", dependencies=[Depends(guard_mutation)])
async def delete_category(
    category_id: str,
    service: CategoryService = Depends(get_category_service),
):
    return await service.delete_category(category_id)
