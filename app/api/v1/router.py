"""
API v1 router setup
Organized into: public booking routes and tenant dashboard routes
"""
from fastapi import APIRouter

from app.api.v1.public import booking
from app.api.v1.dashboard import onboarding, settings, services, appointments

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES (No authentication required)
# ============================================================================
api_v1_router.include_router(
    booking.router,
    # No prefix needed - booking.router already has "/book" prefix
    tags=["Public"]
)

# ============================================================================
# DASHBOARD ROUTES (tenant resolved from X-Tenant-Slug)
# ============================================================================
api_v1_router.include_router(
    onboarding.router,
    prefix="/dashboard/onboarding",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    settings.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    services.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    appointments.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and available endpoints.
    """
    return {
        "version": "1.0",
        "authentication": {
            "public": "No authentication required",
            "dashboard": "X-Tenant-Slug header identifies the shop"
        }
    }
