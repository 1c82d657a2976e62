"""Transaction status passthrough endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from stk_gateway.application.services import ChargeService
from stk_gateway.core.dependencies import get_charge_service
from stk_gateway.presentation.schemas import (
    ErrorResponseSchema,
    TransactionStatusResponseSchema,
)

status_router = APIRouter(prefix="/transaction-status")


@status_router.get(
    "/{reference}",
    response_model=TransactionStatusResponseSchema,
    summary="Get Transaction Status",
    description="Return PayHero's current status payload for a charge reference.",
    responses={
        200: {"description": "Status retrieved"},
        400: {"model": ErrorResponseSchema, "description": "Reference missing"},
        500: {"model": ErrorResponseSchema, "description": "PayHero error"},
    },
)
async def get_transaction_status(
    reference: str,
    charge_service: Annotated[ChargeService, Depends(get_charge_service)],
) -> TransactionStatusResponseSchema:
    data = await charge_service.get_transaction_status(reference)
    return TransactionStatusResponseSchema(success=True, data=data)


@status_router.get("", include_in_schema=False)
@status_router.get("/", include_in_schema=False)
async def missing_reference(
    charge_service: Annotated[ChargeService, Depends(get_charge_service)],
) -> TransactionStatusResponseSchema:
    data = await charge_service.get_transaction_status(None)
    return TransactionStatusResponseSchema(success=True, data=data)
