"""SubCategory Routes — /api/subcategories CRUD and per-category listing.

Invariants:
    - /category/{category_id} is declared before /{subcategory_id} so it is
      never captured as a subcategory id
    - Write routes pass through guard_mutation
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from crm.api.dependencies import get_subcategory_service, guard_mutation
from crm.schemas.catalog import SubCategoryResponse
from crm.services.subcategory_service import SubCategoryService

router = APIRouter(prefix="/api/subcategories", tags=["subcategories"])


@router.get("", response_model=list[SubCategoryResponse])
async def list_subcategories(
    service: SubCategoryService = Depends(get_subcategory_service),
):
    """All subcategories with their category populated, newest first."""
    return await service.list_subcategories()


@router.get("/category/{category_id}", response_model=list[SubCategoryResponse])
async def list_subcategories_by_category(
    category_id: str,
    service: SubCategoryService = Depends(get_subcategory_service),
):
    """Subcategories of one category; 404 when the category does not exist."""
    return await service.list_by_category(category_id)


@router.get("/{subcategory_id}", response_model=SubCategoryResponse)
async def get_subcategory(
    subcategory_id: str,
    service: SubCategoryService = Depends(get_subcategory_service),
):
    return await service.get_subcategory(subcategory_id)


@router.post(
    "", response_model=SubCategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(guard_mutation)],
)
async def create_subcategory(
    payload: Any = Body(None),
    service: SubCategoryService = Depends(get_subcategory_service),
):
    return await service.create_subcategory({} if payload is None else payload)


@router.put(
    "/{subcategory_id}", response_model=SubCategoryResponse,
    dependencies=[Depends(guard_mutation)],
)
async def update_subcategory(
    subcategory_id: str,
    payload: Any = Body(None),
    service: SubCategoryService = Depends(get_subcategory_service),
):
    return await service.update_subcategory(
        subcategory_id, {} if payload is None else payload,
    )


@router.delete("/{subcategory_id}", dependencies=[Depends(guard_mutation)])
async def delete_subcategory(
    subcategory_id: str,
    service: SubCategoryService = Depends(get_subcategory_service),
):
    return await service.delete_subcategory(subcategory_id)
