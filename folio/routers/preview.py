"""Serve the built output under the configured base path, like a static host would."""

import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse, RedirectResponse, Response

from folio.services.builder import NOT_FOUND_PATH

logger = logging.getLogger(__name__)

router = APIRouter()


def _inside(root: Path, candidate: Path) -> bool:
    return candidate == root or root in candidate.parents


def resolve_file(out_dir: Path, rel: str) -> Path | None:
    """Map a request path (relative to the base) to a file under *out_dir*.

    Returns ``None`` for misses and for paths that escape *out_dir*.
    """
    root = out_dir.resolve()
    candidate = (root / rel.lstrip("/")).resolve()
    if not _inside(root, candidate):
        return None
    if candidate.is_dir():
        candidate = candidate / "index.html"
    if candidate.is_file():
        return candidate
    return None


def serve(request: Request, rel: str) -> Response:
    config = request.app.state.config
    out_dir = Path(config.out_dir)
    found = resolve_file(out_dir, rel)
    if found is not None:
        return FileResponse(found)

    logger.info("Preview miss for %s", request.url.path)
    not_found = resolve_file(out_dir, NOT_FOUND_PATH)
    if not_found is not None:
        return FileResponse(not_found, status_code=404)
    raise HTTPException(status_code=404, detail="Not found. Has the site been built?")


@router.get("/{path:path}", include_in_schema=False)
async def preview(request: Request, path: str) -> Response:
    base = request.app.state.config.base
    full = "/" + path
    if full == base.rstrip("/") and base != "/":
        return RedirectResponse(url=base, status_code=307)
    if not full.startswith(base):
        raise HTTPException(status_code=404, detail="Not found.")
    return serve(request, full[len(base):])
