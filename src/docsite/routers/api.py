"""
API router — the content pipeline as JSON endpoints.

GET  /api/breadcrumbs?path=...  → Breadcrumb trail for a URL path
POST /api/format                → Format one code snippet

No auth. Both are pure functions of their input, used by the navigation
chrome and by tooling that pre-formats snippets.
"""
from typing import List

from fastapi import APIRouter

from src.docsite.breadcrumb import build_breadcrumbs
from src.docsite.format_code import format_code_block, format_code_block_sync
from src.docsite.schemas import BreadcrumbItem, FormatCodeRequest, FormatCodeResponse

router = APIRouter(prefix="/api", tags=["api"])


@router.get("/breadcrumbs", response_model=List[BreadcrumbItem])
async def get_breadcrumbs(path: str = ""):
    """
    Breadcrumb trail for a path.

    Input: path query param, e.g. /apis/sessions-api/reference/create-session
    Output: list of {name, url}; the last item (current page) has no url
    """
    return build_breadcrumbs(path)


@router.post("/format", response_model=FormatCodeResponse)
async def format_snippet(req: FormatCodeRequest):
    """
    Format a code snippet for display.

    Input: code, language tag, sync flag
    Output: the formatted code

    With sync=true only whitespace cleanup runs. Otherwise JS/TS/JSON are
    pretty-printed. Never errors on bad code — you get your input back.
    """
    if req.sync:
        return FormatCodeResponse(code=format_code_block_sync(req.code, req.language))
    return FormatCodeResponse(code=await format_code_block(req.code, req.language))
