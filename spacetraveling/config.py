"""Configuration constants and paths for SpaceTraveling."""

import os
from pathlib import Path

# Content API root, e.g. https://spacetraveling.cdn.prismic.io/api/v2
# Override via SPACETRAVELING_API_ENDPOINT environment variable
API_ENDPOINT = os.getenv(
    "SPACETRAVELING_API_ENDPOINT",
    "https://spacetraveling.cdn.prismic.io/api/v2",
).rstrip("/")

# Only needed for private repositories
ACCESS_TOKEN = os.getenv("SPACETRAVELING_ACCESS_TOKEN") or None

USER_AGENT = os.getenv("SPACETRAVELING_USER_AGENT", "SpaceTraveling/0.1")

# Cache location - user-level, survives project moves
CACHE_DIR = Path(
    os.getenv("SPACETRAVELING_CACHE_DIR", Path.home() / ".spacetraveling" / "cache")
)

# Client-side request pacing (requests per second)
RATE_LIMIT = 20

# HTTP client settings
CONNECT_TIMEOUT = 10.0
READ_TIMEOUT = 30.0
MAX_RETRIES = 3

# How long the API root (and its master ref) is trusted before re-reading
REVALIDATE_SECONDS = 60 * 30

# Content model
POSTS_TYPE = "posts"
PAGE_SIZE = 3
WORDS_PER_MINUTE = 200

# Site
SITE_TITLE = "SpaceTraveling"

# Comments (utteranc.es); the widget is left out when no repo is configured
UTTERANCES_REPO = os.getenv("SPACETRAVELING_UTTERANCES_REPO") or None
UTTERANCES_THEME = os.getenv("SPACETRAVELING_UTTERANCES_THEME", "github-dark")
UTTERANCES_ISSUE_TERM = "pathname"
UTTERANCES_SCRIPT = "https://utteranc.es/client.js"
