"""Status Routes — distinct customer statuses currently in use."""

from fastapi import APIRouter, Depends

from crm.api.dependencies import get_customer_service
from crm.services.customer_service import CustomerService

router = APIRouter(prefix="/api/statuses", tags=["statuses"])


@router.get("", response_model=list[str])
async def list_statuses(
    service: CustomerService = Depends(get_customer_service),
):
    return await service.list_statuses()
