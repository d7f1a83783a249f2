"""
Application configuration.
Reads from environment variables with sensible defaults for local dev.
"""
import os
from pathlib import Path


# Site identity — shown in page titles, metadata and the /api root
SITE_NAME = os.getenv("SITE_NAME", "Steel Docs")
SITE_DESCRIPTION = os.getenv(
    "SITE_DESCRIPTION",
    "Find all the guides and resources you need to build with Steel's browser automation platform",
)

# Public URL of the site. Used for absolute links in metadata.
# Vercel-style deployments only give us a host, so we add the scheme here.
_raw_base_url = os.getenv("BASE_URL", "http://localhost:3030")
if not _raw_base_url.startswith(("http://", "https://")):
    BASE_URL = f"https://{_raw_base_url}"
else:
    BASE_URL = _raw_base_url.rstrip("/")

# Where the markdown pages live. Relative paths resolve from the working directory.
CONTENT_DIR = Path(os.getenv("CONTENT_DIR", "content"))

# External formatter for JavaScript/TypeScript snippets.
# If the binary is missing, snippets are shown unformatted.
PRETTIER_BIN = os.getenv("PRETTIER_BIN", "prettier")
PRETTIER_TIMEOUT_SECONDS = float(os.getenv("PRETTIER_TIMEOUT_SECONDS", "10"))

# Logging level for the whole app (DEBUG, INFO, WARNING, ...)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Pages under these URL fragments are left out of /llms-full.txt
LLM_EXPORT_EXCLUDE = ["/changelog/"]
