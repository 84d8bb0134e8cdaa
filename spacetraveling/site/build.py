"""Static site generator for the blog."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import BaseModel

from ..blog.listing import ListingAggregator
from ..blog.models import PageLink, Pagination, PostDetail, PostSummary
from ..blog.pagination import post_href, resolve_pagination
from ..blog.reading_time import estimate
from ..blog.richtext import as_html
from ..cms.posts import PostRepository
from ..config import PAGE_SIZE, UTTERANCES_REPO, UTTERANCES_THEME
from .templates import (
    PostRow,
    Sibling,
    comments,
    format_reading_time,
    html_doc,
    page_title,
    pagination_nav,
    post_article,
    post_info,
    post_list,
    preview_aside,
)

logger = logging.getLogger(__name__)

# uids become directory names
_SAFE_UID = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


class SiteReport(BaseModel):
    """Result of building the site."""

    out_dir: Path
    posts: int
    listing_pages: int
    warnings: list[str]
    total_bytes: int


async def build_site(
    repo: PostRepository,
    out_dir: Path,
    base_url: str = "",
    page_size: int = PAGE_SIZE,
    utterances_repo: str | None = UTTERANCES_REPO,
    utterances_theme: str = UTTERANCES_THEME,
) -> SiteReport:
    """Fetch every post and write the listing pages and one page per post.

    Args:
        repo: Posts adapter to read from
        out_dir: Site output directory
        base_url: Prefix for site-absolute links (e.g. ``/blog``)
        page_size: Posts per listing page
        utterances_repo: GitHub repo for the comment widget; None disables it
        utterances_theme: Comment widget theme

    Returns:
        SiteReport with counts and warnings

    Raises:
        FetchError: The content API failed; nothing is retried
        NotFoundError: A listed post could not be fetched by uid
    """
    out_dir = out_dir.resolve()
    out_dir.mkdir(parents=True, exist_ok=True)
    base = base_url.rstrip("/")
    warnings: list[str] = []

    # Listing: page N shows everything accumulated after N fetches.
    listing = await ListingAggregator.start(repo, page_size)
    page_no = 1
    _write_listing_page(out_dir, base, listing.posts, page_no, listing.has_more)
    while listing.has_more:
        await listing.load_more()
        page_no += 1
        _write_listing_page(out_dir, base, listing.posts, page_no, listing.has_more)

    seen: set[str] = set()
    written = 0
    for summary in listing.posts:
        uid = summary.uid
        if uid in seen:
            warnings.append(f"Duplicate post uid {uid!r} in listing, page written once")
            continue
        seen.add(uid)
        if not _SAFE_UID.match(uid):
            warnings.append(f"Skipped post with unsafe uid {uid!r}")
            continue

        post = await repo.get_post(uid)
        pagination = _linkable(await resolve_pagination(repo, post))
        html = render_post_page(
            post,
            pagination,
            base,
            preview=repo.preview,
            utterances_repo=utterances_repo,
            utterances_theme=utterances_theme,
        )
        target = out_dir / "post" / uid / "index.html"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(html, encoding="utf-8")
        written += 1
        logger.info("Wrote %s", target)

    return SiteReport(
        out_dir=out_dir,
        posts=written,
        listing_pages=page_no,
        warnings=warnings,
        total_bytes=_dir_size_bytes(out_dir),
    )


def listing_href(base: str, page_no: int) -> str:
    if page_no <= 1:
        return f"{base}/"
    return f"{base}/page/{page_no}/"


def _listing_path(out_dir: Path, page_no: int) -> Path:
    if page_no <= 1:
        return out_dir / "index.html"
    return out_dir / "page" / str(page_no) / "index.html"


def _write_listing_page(
    out_dir: Path,
    base: str,
    posts: tuple[PostSummary, ...],
    page_no: int,
    has_more: bool,
) -> None:
    rows = [
        PostRow(
            title=p.title,
            subtitle=p.subtitle,
            author=p.author,
            publication_date=p.publication_date,
            href=f"{base}{post_href(p.uid)}",
        )
        for p in posts
        # Posts with unsafe uids get no page, so they get no link either.
        if _SAFE_UID.match(p.uid)
    ]
    more = listing_href(base, page_no + 1) if has_more else None
    html = html_doc(title=page_title("Posts"), home_href=listing_href(base, 1), body=post_list(rows, more))
    path = _listing_path(out_dir, page_no)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    logger.info("Wrote listing page %d (%d posts)", page_no, len(posts))


def render_post_page(
    post: PostDetail,
    pagination: Pagination,
    base: str = "",
    preview: bool = False,
    utterances_repo: str | None = None,
    utterances_theme: str = UTTERANCES_THEME,
) -> str:
    minutes = estimate(post.content)
    info = post_info(
        post.publication_date,
        post.author,
        reading_time=format_reading_time(minutes),
        edited=post.last_modified_date,
    )

    footer = [pagination_nav(_sibling(pagination.previous, base), _sibling(pagination.next, base))]
    if utterances_repo:
        footer.append(comments(utterances_repo, utterances_theme))
    if preview:
        footer.append(preview_aside(listing_href(base, 1)))

    body = post_article(
        title=post.title,
        banner_url=post.banner_url,
        info_html=info,
        blocks=[(block.heading, as_html(block.body)) for block in post.content],
        footer_html="\n".join(part for part in footer if part),
    )
    return html_doc(title=page_title(post.title), home_href=listing_href(base, 1), body=body)


def _linkable(pagination: Pagination) -> Pagination:
    """Drop sibling links to posts whose uid gets no page."""

    def keep(page_link: PageLink | None) -> PageLink | None:
        if page_link is None or not _SAFE_UID.match(page_link.href.rsplit("/", 1)[-1]):
            return None
        return page_link

    return Pagination(previous=keep(pagination.previous), next=keep(pagination.next))


def _sibling(page_link: PageLink | None, base: str) -> Sibling | None:
    if page_link is None:
        return None
    return Sibling(title=page_link.title, href=f"{base}{page_link.href}")


def _dir_size_bytes(path: Path) -> int:
    total = 0
    for p in path.rglob("*"):
        if p.is_file():
            total += p.stat().st_size
    return total
