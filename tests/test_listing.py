"""Tests for the incremental post listing."""

from __future__ import annotations

import asyncio
import unittest

from spacetraveling.blog.listing import (
    ListingAggregator,
    ListingExhaustedError,
    LoadInProgressError,
)
from spacetraveling.blog.models import PostsPage, PostSummary
from spacetraveling.cms.errors import FetchError


def summary(uid: str) -> PostSummary:
    return PostSummary(uid=uid, title=f"Title {uid}", author="Ana")


class FakeFetcher:
    """Serves pages by cursor; a page may be an exception to raise instead."""

    def __init__(self, pages: dict[str, PostsPage | Exception], first: PostsPage | None = None):
        self.pages = pages
        self.first = first
        self.calls: list[str] = []

    async def first_page(self, page_size: int) -> PostsPage:
        self.calls.append(f"first:{page_size}")
        assert self.first is not None
        return self.first

    async def fetch_page(self, cursor: str) -> PostsPage:
        self.calls.append(cursor)
        await asyncio.sleep(0)
        page = self.pages[cursor]
        if isinstance(page, Exception):
            raise page
        return page


class GatedFetcher:
    """fetch_page blocks until the test releases it."""

    def __init__(self, page: PostsPage):
        self.page = page
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.calls = 0

    async def first_page(self, page_size: int) -> PostsPage:  # pragma: no cover - unused
        raise NotImplementedError

    async def fetch_page(self, cursor: str) -> PostsPage:
        self.calls += 1
        self.started.set()
        await self.release.wait()
        return self.page


class TestListingAggregator(unittest.IsolatedAsyncioTestCase):
    async def test_pages_are_appended_in_fetch_order(self) -> None:
        p1, p2, p3 = summary("p1"), summary("p2"), summary("p3")
        fetcher = FakeFetcher({
            "c1": PostsPage(results=[p1, p2], next_cursor="c2"),
            "c2": PostsPage(results=[p3], next_cursor=None),
        })
        listing = ListingAggregator(fetcher, PostsPage(results=[], next_cursor="c1"))

        new, cursor = await listing.load_more()
        self.assertEqual(new, [p1, p2])
        self.assertEqual(cursor, "c2")

        new, cursor = await listing.load_more()
        self.assertEqual(new, [p3])
        self.assertIsNone(cursor)

        self.assertEqual(listing.posts, (p1, p2, p3))
        self.assertFalse(listing.has_more)

        with self.assertRaises(ListingExhaustedError):
            await listing.load_more()
        self.assertEqual(fetcher.calls, ["c1", "c2"])

    async def test_initial_page_is_kept_first(self) -> None:
        first = PostsPage(results=[summary("a")], next_cursor="c1")
        fetcher = FakeFetcher({"c1": PostsPage(results=[summary("b")])}, first=first)

        listing = await ListingAggregator.start(fetcher, page_size=1)
        self.assertEqual([p.uid for p in listing.posts], ["a"])
        self.assertEqual(listing.cursor, "c1")

        await listing.load_more()
        self.assertEqual([p.uid for p in listing.posts], ["a", "b"])
        self.assertEqual(fetcher.calls, ["first:1", "c1"])

    async def test_failed_fetch_leaves_state_unchanged(self) -> None:
        fetcher = FakeFetcher({
            "c1": PostsPage(results=[summary("a")], next_cursor="c2"),
            "c2": FetchError("backend down"),
        })
        listing = ListingAggregator(fetcher, PostsPage(results=[], next_cursor="c1"))
        await listing.load_more()
        before = listing.posts

        with self.assertRaises(FetchError):
            await listing.load_more()

        self.assertEqual(listing.posts, before)
        self.assertEqual(listing.cursor, "c2")
        self.assertFalse(listing.loading)

        # The same cursor can be retried by the caller.
        fetcher.pages["c2"] = PostsPage(results=[summary("b")])
        await listing.load_more()
        self.assertEqual([p.uid for p in listing.posts], ["a", "b"])

    async def test_duplicate_uids_are_preserved(self) -> None:
        fetcher = FakeFetcher({"c1": PostsPage(results=[summary("a"), summary("b")])})
        listing = ListingAggregator(fetcher, PostsPage(results=[summary("a")], next_cursor="c1"))
        await listing.load_more()
        self.assertEqual([p.uid for p in listing.posts], ["a", "a", "b"])

    async def test_concurrent_load_more_is_rejected(self) -> None:
        fetcher = GatedFetcher(PostsPage(results=[summary("a")], next_cursor=None))
        listing = ListingAggregator(fetcher, PostsPage(results=[], next_cursor="c1"))

        first = asyncio.create_task(listing.load_more())
        await fetcher.started.wait()
        self.assertTrue(listing.loading)

        with self.assertRaises(LoadInProgressError):
            await listing.load_more()

        fetcher.release.set()
        new, cursor = await first
        self.assertEqual([p.uid for p in new], ["a"])
        self.assertIsNone(cursor)
        self.assertEqual(fetcher.calls, 1)
        self.assertEqual([p.uid for p in listing.posts], ["a"])

    async def test_load_all_stops_at_limit(self) -> None:
        fetcher = FakeFetcher({
            "c1": PostsPage(results=[summary("b"), summary("c")], next_cursor="c2"),
            "c2": PostsPage(results=[summary("d")], next_cursor=None),
        })
        listing = ListingAggregator(fetcher, PostsPage(results=[summary("a")], next_cursor="c1"))

        posts = await listing.load_all(limit=2)
        self.assertEqual([p.uid for p in posts], ["a", "b", "c"])
        self.assertTrue(listing.has_more)

        posts = await listing.load_all()
        self.assertEqual([p.uid for p in posts], ["a", "b", "c", "d"])
        self.assertEqual(fetcher.calls, ["c1", "c2"])

    async def test_posts_view_is_read_only(self) -> None:
        listing = ListingAggregator(FakeFetcher({}), PostsPage(results=[summary("a")]))
        self.assertIsInstance(listing.posts, tuple)
        self.assertFalse(listing.has_more)


if __name__ == "__main__":
    unittest.main()
