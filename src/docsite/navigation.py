"""
Navigation config and per-route page metadata.

NAV_SECTIONS drives the top nav. The metadata dicts mirror what ends up in
<head>: title, description, OpenGraph and Twitter card fields.
"""
import copy

from src.docsite.config import BASE_URL, SITE_DESCRIPTION, SITE_NAME

LOGO_IMAGE = {"url": "/images/logo.png", "width": 800, "height": 600}

# Top nav, in display order
NAV_SECTIONS = [
    {"title": "Overview", "url": "/overview"},
    {"title": "Integrations", "url": "/integrations"},
    {"title": "Cookbook", "url": "/cookbook"},
    {"title": "API Reference", "url": "/apis"},
    {"title": "Changelog", "url": "/changelog"},
]

DEFAULT_METADATA = {
    "title": SITE_NAME,
    "description": SITE_DESCRIPTION,
    "openGraph": {
        "title": SITE_NAME,
        "description": SITE_DESCRIPTION,
        "url": BASE_URL,
        "siteName": SITE_NAME,
        "images": [LOGO_IMAGE],
        "locale": "en_US",
        "type": "website",
    },
    "twitter": {
        "card": "summary_large_image",
        "title": SITE_NAME,
        "description": SITE_DESCRIPTION,
        "creator": "@steelsystems",
        "images": [LOGO_IMAGE["url"]],
    },
}


def _section_metadata(title, description):
    """Same title/description in every slot, logo as the share image."""
    return {
        "title": title,
        "description": description,
        "openGraph": {"title": title, "description": description, "images": [LOGO_IMAGE]},
        "twitter": {"title": title, "description": description, "images": [LOGO_IMAGE["url"]]},
    }


# URL prefix -> metadata override. First match wins.
ROUTE_METADATA = [
    ("/overview", _section_metadata(
        "Steel Documentation",
        "Find all the guides and resources you need to build with Steel's browser automation platform.",
    )),
    ("/integrations", _section_metadata(
        "Integrations",
        "Learn how to integrate Steel with popular browser agents and automation tools.",
    )),
    ("/cookbook", _section_metadata(
        "Cookbook",
        "Practical recipes and examples for automating browsers and workflows with Steel.",
    )),
    ("/changelog", _section_metadata(
        "Changelog",
        "Stay up to date with the latest features, improvements, and fixes in Steel.",
    )),
]


def get_route_metadata(path: str) -> dict:
    """Metadata override for a path, or {} for plain docs pages."""
    for prefix, metadata in ROUTE_METADATA:
        if path.startswith(prefix):
            return copy.deepcopy(metadata)
    return {}


def create_metadata(override: dict) -> dict:
    """
    Merge an override onto the site defaults.

    Top-level keys are replaced; openGraph and twitter are merged key by key
    so an override only needs the fields it changes.
    """
    merged = copy.deepcopy(DEFAULT_METADATA)
    for key, value in override.items():
        if key in ("openGraph", "twitter"):
            merged[key].update(value or {})
        else:
            merged[key] = value
    return merged


def section_for(path: str):
    """The NAV_SECTIONS entry a path belongs to, if any."""
    for section in NAV_SECTIONS:
        if path == section["url"] or path.startswith(section["url"] + "/"):
            return section
    return None
