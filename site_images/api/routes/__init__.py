from fastapi import APIRouter

from site_images.api.routes import health, images, site_assets

api_router = APIRouter()
api_router.include_router(site_assets.router)
api_router.include_router(images.router)
api_router.include_router(health.router)
