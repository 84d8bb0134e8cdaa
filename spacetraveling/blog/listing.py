"""Incremental post listing driven by an opaque page cursor."""

from __future__ import annotations

import logging
from typing import Protocol

from ..config import PAGE_SIZE
from .models import PostsPage, PostSummary

logger = logging.getLogger(__name__)


class LoadInProgressError(RuntimeError):
    """load_more was called while a previous call is still waiting on its fetch."""


class ListingExhaustedError(RuntimeError):
    """load_more was called after the last page was reached."""


class PageFetcher(Protocol):
    async def first_page(self, page_size: int) -> PostsPage: ...

    async def fetch_page(self, cursor: str) -> PostsPage: ...


class ListingAggregator:
    """Accumulates post summaries page by page.

    Results are appended in fetch order, never reordered or de-duplicated.
    Only one fetch may be outstanding at a time; a failed fetch leaves both the
    accumulated posts and the cursor untouched.
    """

    def __init__(self, fetcher: PageFetcher, initial: PostsPage):
        self._fetcher = fetcher
        self._posts: list[PostSummary] = list(initial.results)
        self._cursor: str | None = initial.next_cursor
        self._loading = False

    @classmethod
    async def start(cls, fetcher: PageFetcher, page_size: int = PAGE_SIZE) -> "ListingAggregator":
        """Fetch the first page and return an aggregator seeded with it."""
        return cls(fetcher, await fetcher.first_page(page_size))

    @property
    def posts(self) -> tuple[PostSummary, ...]:
        return tuple(self._posts)

    @property
    def cursor(self) -> str | None:
        return self._cursor

    @property
    def has_more(self) -> bool:
        return self._cursor is not None

    @property
    def loading(self) -> bool:
        return self._loading

    async def load_more(self) -> tuple[list[PostSummary], str | None]:
        """Fetch the page after the current cursor and append it.

        Returns:
            The newly fetched summaries and the new cursor

        Raises:
            LoadInProgressError: Another load_more is still running
            ListingExhaustedError: There is no next page
        """
        if self._loading:
            raise LoadInProgressError("a page fetch is already in progress")
        cursor = self._cursor
        if cursor is None:
            raise ListingExhaustedError("no more pages to load")

        self._loading = True
        try:
            page = await self._fetcher.fetch_page(cursor)
        finally:
            self._loading = False

        new_posts = list(page.results)
        self._posts.extend(new_posts)
        self._cursor = page.next_cursor
        logger.debug("Loaded %d posts, %d held, more=%s", len(new_posts), len(self._posts), self.has_more)
        return new_posts, page.next_cursor

    async def load_all(self, limit: int | None = None) -> tuple[PostSummary, ...]:
        """Keep loading until the listing is exhausted or holds ``limit`` posts."""
        while self.has_more and (limit is None or len(self._posts) < limit):
            await self.load_more()
        return self.posts
