"""
Breadcrumbs — turns the current URL path into a navigation trail.

/integrations/browser-use/quickstart
  → Integrations › Browser Use › Quickstart

Generated API reference pages live at /apis/<api>/reference/<operation>.
The "reference" segment and the one right after it aren't real pages,
so they're left out of the trail.
"""
import enum
from typing import List

from src.docsite.schemas import BreadcrumbItem


class SkipState(enum.Enum):
    IDLE = "idle"
    SKIP_ONE_PENDING = "skip_one_pending"


def path_segments(path: str) -> List[str]:
    """Split a URL path on "/" and drop the empty tokens."""
    return [segment for segment in (path or "").split("/") if segment]


def format_breadcrumb_name(name: str) -> str:
    """
    Turn a path segment into a display label.

    - hyphenated: each part formatted on its own, joined by spaces
      ("sessions-api" → "Sessions API")
    - contains "api" anywhere: the whole segment uppercased ("apis" → "APIS")
    - otherwise: first letter capitalized, the rest left alone
    """
    if "-" in name:
        return " ".join(format_breadcrumb_name(part) for part in name.split("-"))

    # Substring match, so "mapiary" becomes "MAPIARY" too
    if "api" in name.lower():
        return name.upper()

    return name[:1].upper() + name[1:]


def _step(state, segment, is_api_section):
    """
    One step of the scan.

    Input: current state, the segment, whether the path starts with /apis
    Output: (next state, keep this segment?)
    """
    if state is SkipState.SKIP_ONE_PENDING:
        return SkipState.IDLE, False
    if is_api_section and segment == "reference":
        return SkipState.SKIP_ONE_PENDING, False
    return SkipState.IDLE, True


def build_breadcrumbs(path: str) -> List[BreadcrumbItem]:
    """
    Build the breadcrumb trail for a URL path.

    Input: a path like "/apis/sessions-api/reference/create-session"
    Output: one BreadcrumbItem per kept segment, left to right

    Every item links to the path up to and including its segment,
    except the last one (the current page). An empty path gives [].
    """
    segments = path_segments(path)
    is_api_section = bool(segments) and segments[0] == "apis"

    kept = []  # (segment, cumulative path)
    current_path = ""
    state = SkipState.IDLE

    for segment in segments:
        current_path += f"/{segment}"
        state, keep = _step(state, segment, is_api_section)
        if keep:
            kept.append((segment, current_path))

    items = []
    for index, (segment, url) in enumerate(kept):
        name = format_breadcrumb_name(segment)
        if index == len(kept) - 1:
            items.append(BreadcrumbItem(name=name))
        else:
            items.append(BreadcrumbItem(name=name, url=url))
    return items
