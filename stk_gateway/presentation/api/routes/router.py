from fastapi import APIRouter

from .charge import charge_router
from .transaction_status import status_router
from .health import health_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(charge_router, tags=["Charges"])
router.include_router(status_router, tags=["Transactions"])
