"""
LLM export router — the docs as plain markdown for language models.

GET /llms-full.txt        → Every page (changelog excluded), one after another
GET /llms.mdx/{slug}      → A single page
GET /{slug}.mdx           → Same, addressed by the page URL plus ".mdx"

Code blocks are cleaned up the same way as on the rendered pages.
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from src.docsite.config import LLM_EXPORT_EXCLUDE
from src.docsite.content import ContentSource, get_llm_text, get_source

router = APIRouter(tags=["llms"])


def _exported(page) -> bool:
    return not any(fragment in page.url for fragment in LLM_EXPORT_EXCLUDE)


@router.get("/llms-full.txt", response_class=PlainTextResponse)
async def llms_full(source: ContentSource = Depends(get_source)):
    """
    All docs pages as one text file.

    Input: nothing
    Output: each page's LLM text, separated by a blank line
    """
    texts = [get_llm_text(page) for page in source.get_pages() if _exported(page)]
    return PlainTextResponse("\n\n".join(texts))


def _page_text(slug: str, source: ContentSource) -> PlainTextResponse:
    page = source.get_page(slug)
    if page is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return PlainTextResponse(get_llm_text(page), media_type="text/markdown")


@router.get("/llms.mdx/{slug:path}", response_class=PlainTextResponse)
async def llms_page(slug: str, source: ContentSource = Depends(get_source)):
    """One page as markdown. 404 if there's no page at that slug."""
    return _page_text(slug, source)


@router.get("/{slug:path}.mdx", response_class=PlainTextResponse)
async def page_as_mdx(slug: str, source: ContentSource = Depends(get_source)):
    """/overview/intro.mdx → the markdown for /overview/intro"""
    return _page_text(slug, source)
