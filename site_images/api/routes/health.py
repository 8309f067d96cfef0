from fastapi import APIRouter, Depends

from site_images.api.deps import get_site_asset_service
from site_images.api.schemas import HealthOut
from site_images.delivery.cache import OverridesReady
from site_images.delivery.policy import SiteAssetService


router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health(service: SiteAssetService = Depends(get_site_asset_service)) -> HealthOut:
    state = service.cache.state
    count = len(state.records) if isinstance(state, OverridesReady) else 0
    return HealthOut(overrides=state.status, override_count=count)
