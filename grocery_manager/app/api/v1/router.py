from fastapi import APIRouter

from grocery_manager.app.api.v1.endpoints.health import router as health_router
from grocery_manager.app.api.v1.endpoints.items import router as items_router
from grocery_manager.app.api.v1.endpoints.reorder import router as reorder_router
from grocery_manager.app.api.v1.endpoints.readings import router as readings_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(items_router, tags=["items"])
router.include_router(reorder_router, tags=["reorder"])
router.include_router(readings_router, tags=["readings"])
