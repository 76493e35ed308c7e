from fastapi import APIRouter

from app.api.routes import health, insights


router = APIRouter()

router.include_router(insights.router)
router.include_router(health.router)
