"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.clubs import router as clubs_router
from api.v1.routes.events import router as events_router
from api.v1.routes.membership import router as membership_router
from api.v1.routes.notifications import router as notifications_router

router = APIRouter()
# clubs first so /club/nearby resolves before /club/{club_id}
router.include_router(clubs_router)
router.include_router(membership_router)
router.include_router(events_router)
router.include_router(notifications_router)
