"""Blog core: listing, reading time and sibling navigation."""

from .listing import ListingAggregator, ListingExhaustedError, LoadInProgressError
from .models import (
    ContentBlock,
    Mark,
    PageLink,
    Pagination,
    PostDetail,
    PostsPage,
    PostSummary,
    TextSpan,
)
from .pagination import resolve_pagination
from .reading_time import count_words, estimate
from .richtext import as_html, as_text

__all__ = [
    "ListingAggregator",
    "ListingExhaustedError",
    "LoadInProgressError",
    "ContentBlock",
    "Mark",
    "PageLink",
    "Pagination",
    "PostDetail",
    "PostsPage",
    "PostSummary",
    "TextSpan",
    "resolve_pagination",
    "count_words",
    "estimate",
    "as_html",
    "as_text",
]
