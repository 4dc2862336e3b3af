from fastapi import APIRouter

from app.api.v1.routers.health import router as health_router
from app.api.v1.routers.nextsense_form import router as nextsense_form_router
from app.api.v1.routers.blockyfy_form import router as blockyfy_form_router


# form paths are public frontend contract, so no version prefix
api_v1_routers = APIRouter()
api_v1_routers.include_router(health_router, tags=["health"])
api_v1_routers.include_router(nextsense_form_router, prefix="/nextsense-form", tags=["Nextsense Form"])
api_v1_routers.include_router(blockyfy_form_router, prefix="/blockyfy-form", tags=["Blockyfy Form"])
