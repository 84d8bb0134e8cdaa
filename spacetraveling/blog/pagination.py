"""Previous/next navigation between posts by publication date."""

from __future__ import annotations

from typing import Protocol

from .models import PageLink, Pagination, PostDetail, PostSummary


class SiblingSource(Protocol):
    async def adjacent_post(self, post_id: str, *, descending: bool) -> PostSummary | None:
        """First post after ``post_id`` in ascending or descending publication order."""
        ...


def post_href(uid: str) -> str:
    return f"/post/{uid}"


def _page_link(post: PostSummary | None) -> PageLink | None:
    if post is None:
        return None
    return PageLink(title=post.title, href=post_href(post.uid))


async def resolve_pagination(source: SiblingSource, post: PostDetail) -> Pagination:
    """Look up the posts published right after and right before ``post``.

    The two lookups are independent and run one after the other. There is no
    wrap-around: the newest post has no next, the oldest no previous.
    """
    newer = await source.adjacent_post(post.id, descending=False)
    older = await source.adjacent_post(post.id, descending=True)
    return Pagination(previous=_page_link(older), next=_page_link(newer))
