from fastapi import APIRouter

from .health import health_router
from .transactions import transactions_router
from .advances import advances_router
from .merchants import merchants_router
from .risk_config import risk_config_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(transactions_router, tags=["Transactions"])
router.include_router(advances_router, tags=["Advances"])
router.include_router(merchants_router, tags=["Merchants"])
router.include_router(risk_config_router, tags=["Risk Config"])
