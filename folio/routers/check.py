import logging

from fastapi import APIRouter, Query, Request

from folio import consts
from folio.models.report import CheckResponse
from folio.services.integrity import check_site, load_collections
from folio.services.linkcheck import check_links, external_links

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/check", response_model=CheckResponse, summary="Check configuration and content integrity")
async def check(
    request: Request,
    online: bool = Query(default=False, description="Also probe external links over the network."),
) -> CheckResponse:
    config = request.app.state.config
    collections, load_issues = load_collections(config)
    report = check_site(config, consts, collections)
    issues = load_issues + report.issues

    links = []
    if online:
        urls = external_links(consts.SOCIALS, collections.get("projects", []))
        links = await check_links(urls)

    ok = not any(i.level == "error" for i in issues) and all(link.ok for link in links)
    return CheckResponse(ok=ok, issues=issues, links=links)
