"""Health check endpoint for service monitoring."""

from typing import Annotated

from fastapi import APIRouter, Depends

from stk_gateway import __version__
from stk_gateway.application.services import ChargeService
from stk_gateway.core.dependencies import get_charge_service
from stk_gateway.presentation.schemas import HealthResponseSchema

health_router = APIRouter()


@health_router.get(
    "/health",
    response_model=HealthResponseSchema,
    response_model_exclude_none=True,
    summary="Health Check",
    description="""
    Reports whether the gateway can reach PayHero, using a service
    wallet balance lookup. Always answers 200; check `success`.
    """,
)
async def health_check(
    charge_service: Annotated[ChargeService, Depends(get_charge_service)],
) -> HealthResponseSchema:
    result = await charge_service.check_health()
    return HealthResponseSchema(
        success=result.success,
        message=result.message,
        timestamp=result.timestamp,
        version=__version__,
        account_id=result.account_id,
        provider=result.provider,
        balance=result.balance,
        error=result.error,
    )
