"""Customer Routes — /api/customers listing with filters, and CRUD.

Invariants:
    - Query parameters keep their camelCase wire names (sortBy, sortOrder)
    - Listing parameters are passed through raw; the query builder decides
      what is absent and what is malformed
    - Write routes pass through guard_mutation
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from crm.api.dependencies import get_customer_service, guard_mutation
from crm.schemas.customer import CustomerResponse
from crm.services.customer_service import CustomerService

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.get("", response_model=list[CustomerResponse])
async def list_customers(
    search: str | None = None,
    status_filter: str | None = Query(None, alias="status"),
    service_filter: str | None = Query(None, alias="service"),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    service: CustomerService = Depends(get_customer_service),
):
    """Customers matching search/status/service, sorted by sortBy."""
    return await service.list_customers(
        search=search,
        status=status_filter,
        service=service_filter,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
):
    return await service.get_customer(customer_id)


@router.post(
    "", response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(guard_mutation)],
)
async def create_customer(
    payload: Any = Body(None),
    service: CustomerService = Depends(get_customer_service),
):
    return await service.create_customer({} if payload is None else payload)


@router.put(
    "/{customer_id}", response_model=CustomerResponse,
    dependencies=[Depends(guard_mutation)],
)
async def update_customer(
    customer_id: str,
    payload: Any = Body(None),
    service: CustomerService = Depends(get_customer_service),
):
    return await service.update_customer(
        customer_id, {} if payload is None else payload,
    )


@router.delete("/{customer_id}", dependencies=[Depends(guard_mutation)])
async def delete_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
):
    return await service.delete_customer(customer_id)
