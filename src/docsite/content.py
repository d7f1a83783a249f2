"""
Content source — the markdown pages that make up the docs.

Pages are *.md files under CONTENT_DIR. Each may start with YAML
frontmatter:

    ---
    title: Quickstart
    description: Run your first session
    ---

URLs follow the file layout: content/overview/intro.md → /overview/intro,
and index.md stands for its folder.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from src.docsite import config
from src.docsite.breadcrumb import format_breadcrumb_name, path_segments
from src.docsite.format_code import format_markdown_code_blocks

logger = logging.getLogger(__name__)


@dataclass
class Page:
    url: str
    title: str
    description: str
    content: str
    path: Path


def split_frontmatter(text: str, source: str = "<page>"):
    """
    Separate YAML frontmatter from the markdown body.

    Input: raw file text, a name for log messages
    Output: (frontmatter dict, body)

    Missing or broken frontmatter gives an empty dict and the text unchanged.
    """
    if not text.startswith("---\n"):
        return {}, text

    parts = text.split("---\n", 2)
    if len(parts) < 3:
        logger.warning(f"{source} has unterminated frontmatter, ignoring it")
        return {}, text

    try:
        data = yaml.safe_load(parts[1]) or {}
    except yaml.YAMLError as e:
        logger.warning(f"{source} has invalid YAML frontmatter: {e}")
        return {}, text

    if not isinstance(data, dict):
        logger.warning(f"{source} frontmatter is not a mapping, ignoring it")
        return {}, text

    return data, parts[2]


def url_for(relative: Path) -> str:
    """content-relative file path → page URL"""
    parts = list(relative.with_suffix("").parts)
    if parts and parts[-1] == "index":
        parts = parts[:-1]
    return "/" + "/".join(parts)


def _title_from_body(body: str) -> Optional[str]:
    for line in body.split("\n"):
        if line.startswith("# "):
            return line[2:].strip()
    return None


def load_page(root: Path, path: Path) -> Page:
    text = path.read_text(encoding="utf-8")
    meta, body = split_frontmatter(text, source=str(path))
    url = url_for(path.relative_to(root))

    title = meta.get("title") or _title_from_body(body)
    if not title:
        segments = path_segments(url)
        title = format_breadcrumb_name(segments[-1]) if segments else config.SITE_NAME

    return Page(
        url=url,
        title=str(title),
        description=str(meta.get("description") or ""),
        content=body.lstrip("\n"),
        path=path,
    )


class ContentSource:
    """
    All pages under a content directory, loaded once.

    Input: root directory
    Output: pages by URL via get_pages() / get_page()
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self._pages: Optional[Dict[str, Page]] = None

    def _load(self) -> Dict[str, Page]:
        if self._pages is None:
            pages = {}
            if self.root.is_dir():
                for path in sorted(self.root.rglob("*.md")):
                    try:
                        page = load_page(self.root, path)
                    except (OSError, UnicodeDecodeError) as e:
                        logger.warning(f"Skipping {path}: {e}")
                        continue
                    pages[page.url] = page
            else:
                logger.warning(f"Content directory {self.root} not found, serving no pages")
            logger.info(f"Loaded {len(pages)} pages from {self.root}")
            self._pages = pages
        return self._pages

    def get_pages(self) -> List[Page]:
        return sorted(self._load().values(), key=lambda page: page.url)

    def get_page(self, slug: str) -> Optional[Page]:
        url = "/" + "/".join(path_segments(slug))
        return self._load().get(url)


def get_llm_text(page: Page) -> str:
    """
    A page rendered for LLM consumption.

    # <title>
    URL: <url>

    <markdown body with code blocks cleaned up>
    """
    processed = format_markdown_code_blocks(page.content)
    return f"# {page.title}\nURL: {page.url}\n\n{processed}"


_source = None


def get_source() -> ContentSource:
    """FastAPI dependency — the content source for CONTENT_DIR."""
    global _source
    if _source is None:
        _source = ContentSource(config.CONTENT_DIR)
    return _source
