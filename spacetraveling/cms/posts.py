"""Posts adapter: listing pages, single posts and siblings as validated models."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from ..blog.models import PostDetail, PostsPage, PostSummary
from ..config import PAGE_SIZE, POSTS_TYPE
from .api import ContentAPI, QueryResult, at
from .errors import FetchError

NEWEST_FIRST = "[document.first_publication_date desc]"
OLDEST_FIRST = "[document.first_publication_date]"

SUMMARY_FIELDS = [f"{POSTS_TYPE}.title", f"{POSTS_TYPE}.subtitle", f"{POSTS_TYPE}.author"]


def _data(doc: Any) -> dict[str, Any]:
    if not isinstance(doc, dict) or not isinstance(doc.get("data"), dict):
        raise FetchError("Malformed document: missing data")
    return doc["data"]


def _plain(value: Any) -> Any:
    """Title-like fields may come as rich text; flatten those to a string."""
    if isinstance(value, list):
        return " ".join(str(el.get("text") or "") for el in value if isinstance(el, dict))
    return value


def _optional(value: Any) -> Any:
    value = _plain(value)
    if isinstance(value, str) and not value.strip():
        return None
    return value


def summary_from_document(doc: Any) -> PostSummary:
    """Map a raw posts document to a PostSummary.

    Raises:
        FetchError: A required field (uid, title, author) is missing or invalid
    """
    data = _data(doc)
    try:
        return PostSummary(
            uid=doc.get("uid"),
            publication_date=doc.get("first_publication_date"),
            title=_plain(data.get("title")),
            subtitle=_optional(data.get("subtitle")),
            author=_plain(data.get("author")),
        )
    except ValidationError as e:
        raise FetchError(f"Malformed post summary {doc.get('id') or doc.get('uid')!r}: {e}") from e


def detail_from_document(doc: Any) -> PostDetail:
    """Map a raw posts document to a PostDetail.

    ``last_modified_date`` is only kept when it differs from the first
    publication date.

    Raises:
        FetchError: A required field is missing or invalid
    """
    data = _data(doc)
    first = doc.get("first_publication_date")
    last = doc.get("last_publication_date")
    banner = data.get("banner")
    try:
        return PostDetail(
            id=doc.get("id"),
            uid=doc.get("uid"),
            publication_date=first,
            last_modified_date=last if last and last != first else None,
            title=_plain(data.get("title")),
            subtitle=_optional(data.get("subtitle")),
            author=_plain(data.get("author")),
            banner_url=_optional(banner.get("url")) if isinstance(banner, dict) else None,
            content=data.get("content") or [],
        )
    except ValidationError as e:
        raise FetchError(f"Malformed post {doc.get('id') or doc.get('uid')!r}: {e}") from e


def _page(result: QueryResult) -> PostsPage:
    return PostsPage(
        results=[summary_from_document(doc) for doc in result.results],
        next_cursor=result.next_cursor,
    )


class PostRepository:
    """Posts as seen by the blog: newest first, summaries restricted to listing fields."""

    def __init__(self, api: ContentAPI):
        self.api = api

    @property
    def preview(self) -> bool:
        return self.api.preview

    async def first_page(self, page_size: int = PAGE_SIZE) -> PostsPage:
        result = await self.api.query(
            [at("document.type", POSTS_TYPE)],
            orderings=NEWEST_FIRST,
            page_size=page_size,
            fetch=SUMMARY_FIELDS,
        )
        return _page(result)

    async def fetch_page(self, cursor: str) -> PostsPage:
        result = await self.api.query([at("document.type", POSTS_TYPE)], page_cursor=cursor)
        return _page(result)

    async def get_post(self, uid: str) -> PostDetail:
        return detail_from_document(await self.api.get_by_uid(POSTS_TYPE, uid))

    async def adjacent_post(self, post_id: str, *, descending: bool) -> PostSummary | None:
        result = await self.api.query(
            [at("document.type", POSTS_TYPE)],
            orderings=NEWEST_FIRST if descending else OLDEST_FIRST,
            page_size=1,
            fetch=SUMMARY_FIELDS,
            after=post_id,
        )
        if not result.results:
            return None
        return summary_from_document(result.results[0])
