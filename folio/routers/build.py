import asyncio
import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from slowapi import Limiter
from slowapi.util import get_remote_address

from folio.models.report import BuildReport
from folio.services.builder import BuildError, build_site

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()

# One build at a time; concurrent requests wait for the running build
_build_lock = asyncio.Lock()


@router.post("/build", response_model=BuildReport, summary="Rebuild the static site")
@limiter.limit("5/minute")
async def build(request: Request) -> BuildReport:
    """Rebuild the site into the configured output directory.

    Returns the build report, including the content digest of the output
    tree.  Unchanged inputs always produce the same digest.
    """
    config = request.app.state.config
    logger.info("Build request received", extra={"out_dir": str(config.out_dir)})

    async with _build_lock:
        try:
            return await run_in_threadpool(build_site, config)
        except BuildError as exc:
            logger.warning("Build rejected: %s", exc)
            raise HTTPException(
                status_code=422,
                detail=[issue.model_dump() for issue in exc.issues],
            )
        except ValueError as exc:
            logger.error("Build failed: %s", exc)
            raise HTTPException(status_code=400, detail=str(exc))
