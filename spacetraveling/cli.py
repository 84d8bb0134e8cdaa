"""CLI entry point for SpaceTraveling."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .config import PAGE_SIZE


def app(argv: list[str] | None = None) -> None:
    """Console script entrypoint."""
    raise SystemExit(main(argv))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="spacetraveling",
        description="Build a static blog from a headless content API.",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"SpaceTraveling {__version__}",
    )
    parser.add_argument("--verbose", action="store_true", help="Log requests and written pages")

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_build = sub.add_parser("build", help="Generate the static site")
    p_build.add_argument("--out", "-o", type=Path, default=Path("./site"), help="Site output directory")
    p_build.add_argument("--page-size", type=int, default=PAGE_SIZE, help="Posts per listing page")
    p_build.add_argument("--base-url", default="", help="Prefix for site-absolute links, e.g. /blog")
    p_build.add_argument("--ref", help="Preview ref to build instead of the published content")
    p_build.add_argument("--force", action="store_true", help="Bypass cache")

    p_list = sub.add_parser("list", help="List posts, newest first")
    p_list.add_argument("--limit", "-n", type=int, default=None, help="Stop after this many posts")
    p_list.add_argument("--page-size", type=int, default=PAGE_SIZE, help="Posts per API page")
    p_list.add_argument("--force", action="store_true", help="Bypass cache")

    p_post = sub.add_parser("post", help="Show one post with reading time and siblings")
    p_post.add_argument("uid", help="Post uid (slug)")
    p_post.add_argument("--ref", help="Preview ref")
    p_post.add_argument("--force", action="store_true", help="Bypass cache")

    p_cache = sub.add_parser("cache", help="Show cache info or clear cache")
    p_cache.add_argument("--clear", action="store_true", help="Clear the cache")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "build":
        return _cmd_build(args)
    if args.cmd == "list":
        return _cmd_list(args)
    if args.cmd == "post":
        return _cmd_post(args)
    if args.cmd == "cache":
        return _cmd_cache(args)

    parser.print_help()
    return 2


def _repository(args: Any):
    from .cms.api import ContentAPI
    from .cms.posts import PostRepository

    api = ContentAPI(ref=getattr(args, "ref", None), force=bool(getattr(args, "force", False)))
    return PostRepository(api)


def _cmd_build(args: Any) -> int:
    async def _run() -> int:
        from .site.build import build_site

        try:
            report = await build_site(
                _repository(args),
                args.out,
                base_url=args.base_url,
                page_size=int(args.page_size),
            )
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print("✓ Site generated")
        print(f"  Output: {report.out_dir}")
        print(f"  Posts: {report.posts}")
        print(f"  Listing pages: {report.listing_pages}")
        print(f"  Size: {report.total_bytes / 1024:.1f} KB")

        if report.warnings:
            print(f"\nWarnings ({len(report.warnings)}):")
            for w in report.warnings[:10]:
                print(f"  - {w}")
            if len(report.warnings) > 10:
                print(f"  ... and {len(report.warnings) - 10} more")
        return 0

    return asyncio.run(_run())


def _cmd_list(args: Any) -> int:
    async def _run() -> int:
        from .blog.listing import ListingAggregator

        try:
            listing = await ListingAggregator.start(_repository(args), int(args.page_size))
            posts = await listing.load_all(limit=args.limit)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        if args.limit is not None:
            posts = posts[: args.limit]
        if not posts:
            print("No posts found")
            return 0

        for p in posts:
            date = p.publication_date.date().isoformat() if p.publication_date else "unpublished"
            print(f"  {date}  {p.uid:32} {p.title} ({p.author})")
        return 0

    return asyncio.run(_run())


def _cmd_post(args: Any) -> int:
    async def _run() -> int:
        from .blog.pagination import resolve_pagination
        from .blog.reading_time import count_words, estimate
        from .site.templates import format_reading_time

        repo = _repository(args)
        try:
            post = await repo.get_post(args.uid)
            pagination = await resolve_pagination(repo, post)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print(post.title)
        if post.subtitle:
            print(f"  {post.subtitle}")
        print(f"  Author: {post.author}")
        print(f"  Published: {post.publication_date.isoformat() if post.publication_date else 'unpublished'}")
        if post.last_modified_date:
            print(f"  Edited: {post.last_modified_date.isoformat()}")
        print(f"  Words: {count_words(post.content):,}")
        print(f"  Reading time: {format_reading_time(estimate(post.content))}")
        if pagination.previous:
            print(f"  Previous: {pagination.previous.title} -> {pagination.previous.href}")
        if pagination.next:
            print(f"  Next: {pagination.next.title} -> {pagination.next.href}")
        return 0

    return asyncio.run(_run())


def _cmd_cache(args: Any) -> int:
    from .cms.cache import DiskCache
    from .config import CACHE_DIR

    cache = DiskCache(CACHE_DIR)
    cache_dir = cache.cache_dir

    if not cache_dir.exists():
        print(f"Cache directory: {cache_dir} (empty)")
        return 0

    if args.clear:
        try:
            cache.clear()
        except OSError as e:
            print(f"Error clearing cache: {e}", file=sys.stderr)
            return 1
        print(f"Cleared cache: {cache_dir}")
        return 0

    file_count, total_size = cache.stats()
    print(f"Cache directory: {cache_dir}")
    print(f"Files: {file_count}")
    print(f"Size: {total_size / (1024 * 1024):.1f} MB")
    return 0


if __name__ == "__main__":
    app()
