from fastapi import APIRouter

from procurement.api.v1.health import router as health_router
from procurement.api.v1.projects import router as projects_router
from procurement.api.v1.bids import router as bids_router
from procurement.api.v1.ledger import router as ledger_router


v1_router = APIRouter()

# ------------------------------------------------------------------
# SYSTEM
# ------------------------------------------------------------------
v1_router.include_router(health_router, tags=["health"])

# ------------------------------------------------------------------
# PROCUREMENT
# ------------------------------------------------------------------
v1_router.include_router(projects_router, tags=["projects"])
v1_router.include_router(bids_router, tags=["bids"])

# ------------------------------------------------------------------
# LEDGER
# ------------------------------------------------------------------
v1_router.include_router(ledger_router)
