"""Content API access."""

from .api import ContentAPI, QueryResult, at
from .cache import DiskCache
from .client import CMSClient, HTTPError
from .errors import FetchError, NotFoundError
from .posts import PostRepository, detail_from_document, summary_from_document

__all__ = [
    "ContentAPI",
    "QueryResult",
    "at",
    "DiskCache",
    "CMSClient",
    "HTTPError",
    "FetchError",
    "NotFoundError",
    "PostRepository",
    "detail_from_document",
    "summary_from_document",
]
