import logging
import time

from fastapi import FastAPI, Request

from site_images.api.deps import get_site_asset_service
from site_images.api.routes import api_router
from site_images.core.logging import (
    REQUEST_ID_HEADER,
    configure_logging,
    get_request_id,
    reset_request_id,
    set_request_id,
)
from site_images.core.settings import settings

logger = logging.getLogger("site-images")

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Site image resolution and responsive delivery",
    version=settings.VERSION
)


app.include_router(api_router, prefix=settings.API_V1_STR)


@app.middleware("http")
async def request_context(request: Request, call_next):
    token = set_request_id(request.headers.get(REQUEST_ID_HEADER))
    started = time.perf_counter()
    try:
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = get_request_id()
        logger.info(
            "Request handled.",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return response
    finally:
        reset_request_id(token)


@app.on_event("startup")
def prime_overrides() -> None:
    configure_logging()
    get_site_asset_service().cache.prime()


@app.on_event("shutdown")
def drain_overrides() -> None:
    get_site_asset_service().cache.wait(timeout=5)
