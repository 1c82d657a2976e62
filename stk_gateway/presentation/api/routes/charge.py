"""Charge API endpoints."""

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from stk_gateway.application.dto import ChargeRequest
from stk_gateway.application.services import ChargeService
from stk_gateway.core.dependencies import get_charge_service
from stk_gateway.presentation.schemas import (
    ChargeDataSchema,
    ChargeRequestSchema,
    ChargeResponseSchema,
    ErrorResponseSchema,
)

DISCONNECT_CHECK_SECONDS = 1.0

charge_router = APIRouter(
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid phone or amount"},
        500: {"model": ErrorResponseSchema, "description": "Charge could not be submitted"},
    },
)


async def watch_disconnect(
    request: Request,
    cancel_event: asyncio.Event,
    interval: float = DISCONNECT_CHECK_SECONDS,
) -> None:
    """Set cancel_event once the client has gone away."""
    while not cancel_event.is_set():
        if await request.is_disconnected():
            cancel_event.set()
            return
        await asyncio.sleep(interval)


@charge_router.post(
    "/charge",
    response_model=ChargeResponseSchema,
    response_model_exclude_unset=True,
    status_code=200,
    summary="Charge Subscriber",
    description="""
    Send an STK push to the subscriber and wait for it to resolve.

    The request is held open for up to the confirmation window. A
    charge that has not resolved by then is returned with
    `verified: false`; it may still complete afterwards.
    """,
    responses={
        200: {"description": "Charge submitted; see success/verified for the outcome"},
    },
)
@charge_router.post(
    "/stk-push",
    response_model=ChargeResponseSchema,
    response_model_exclude_unset=True,
    include_in_schema=False,
)
async def create_charge(
    body: ChargeRequestSchema,
    request: Request,
    charge_service: Annotated[ChargeService, Depends(get_charge_service)],
) -> ChargeResponseSchema:
    dto = ChargeRequest(
        phone_number=body.phone_number,
        amount=body.amount,
        external_reference=body.external_reference,
        customer_name=body.customer_name,
    )

    cancel_event = asyncio.Event()
    watcher = asyncio.create_task(watch_disconnect(request, cancel_event))
    try:
        result = await charge_service.charge(dto, cancel_event=cancel_event)
    finally:
        watcher.cancel()

    # status is only reported once the provider gave a final answer
    data = {"reference": result.reference, "details": result.details}
    if result.status is not None:
        data["status"] = result.status

    return ChargeResponseSchema(
        success=result.success,
        verified=result.verified,
        message=result.message,
        data=ChargeDataSchema(**data),
    )
