import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from folio.config import load_config
from folio.log import setup_logging
from folio.routers.build import limiter, router as build_router
from folio.routers.check import router as check_router
from folio.routers.preview import router as preview_router, serve

setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title="folio – personal site builder",
    description="Builds the static site, checks its content, and previews the output under the base path.",
    version="1.0.0",
)

app.state.config = load_config()

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


app.include_router(build_router)
app.include_router(check_router)


@app.get("/health", summary="Health check")
async def health() -> dict:
    return {"status": "ok"}


@app.get("/", include_in_schema=False)
async def root(request: Request) -> Response:
    base = request.app.state.config.base
    if base == "/":
        return serve(request, "")
    return RedirectResponse(url=base, status_code=307)


# Catch-all; must be registered last
app.include_router(preview_router)
