from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from site_images.api.deps import get_site_asset_service
from site_images.api.schemas import CatalogOut, ResolvedAssetOut, ResolvedAssetsOut
from site_images.delivery.policy import LoadingPolicy, SiteAssetService


router = APIRouter(prefix="/site-assets", tags=["site-assets"])


@router.get("", response_model=ResolvedAssetsOut)
def list_resolved_assets(
    policy: LoadingPolicy = LoadingPolicy.DEFERRED,
    service: SiteAssetService = Depends(get_site_asset_service),
) -> ResolvedAssetsOut:
    resolved = service.get_all_resolved_assets(policy)
    return ResolvedAssetsOut(assets=resolved.assets, ready=resolved.ready)


@router.get("/catalog", response_model=CatalogOut)
def asset_catalog(
    service: SiteAssetService = Depends(get_site_asset_service),
) -> CatalogOut:
    return CatalogOut(**asdict(service.catalog()))


@router.get("/{asset_id}", response_model=ResolvedAssetOut)
def resolved_asset(
    asset_id: str,
    policy: LoadingPolicy = LoadingPolicy.DEFERRED,
    service: SiteAssetService = Depends(get_site_asset_service),
) -> ResolvedAssetOut:
    if not service.has_asset(asset_id):
        raise HTTPException(status_code=404, detail=f"Unknown asset: {asset_id}")

    resolved = service.get_all_resolved_assets(policy)
    return ResolvedAssetOut(
        asset_id=asset_id,
        url=resolved.assets.get(asset_id) or None,
        ready=resolved.ready,
    )
