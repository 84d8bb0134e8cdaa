"""HTML templates for the static site generator."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from html import escape

from ..config import (
    SITE_TITLE,
    UTTERANCES_ISSUE_TERM,
    UTTERANCES_SCRIPT,
)
from .styles import CSS

# date-fns pt-BR "MMM" abbreviations
MONTHS_PT_BR = ["jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez"]

LABELS = {
    "load_more": "Carregar mais posts",
    "previous": "Post anterior",
    "next": "Próximo post",
    "reading_time": "Tempo de leitura",
    "publication_date": "Data de publicação",
    "exit_preview": "Sair do modo Preview",
}


def format_date(value: datetime) -> str:
    """``dd MMM yyyy`` with pt-BR month abbreviations, e.g. ``25 mar 2021``."""
    return f"{value.day:02d} {MONTHS_PT_BR[value.month - 1]} {value.year}"


def format_edited(value: datetime) -> str:
    return f"* editado em {format_date(value)}, às {value.hour:02d}:{value.minute:02d}"


def format_reading_time(minutes: int | None) -> str:
    # Zero or unknown shows the placeholder, never "0 min".
    return f"{minutes} min" if minutes else LABELS["reading_time"]


def html_doc(title: str, home_href: str, body: str) -> str:
    return (
        "<!doctype html>\n"
        '<html lang="pt-BR">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1">\n'
        f"<title>{escape(title)}</title>\n"
        f"<style>{CSS}</style>\n"
        "</head>\n"
        "<body>\n"
        '<header class="site"><div class="container">'
        f'<a class="logo" href="{escape(home_href, quote=True)}">spacetraveling<span>.</span></a>'
        "</div></header>\n"
        f"{body}\n"
        "</body>\n"
        "</html>\n"
    )


def page_title(title: str | None = None) -> str:
    return f"{title} | {SITE_TITLE}" if title else SITE_TITLE


def link(href: str, text: str, cls: str | None = None) -> str:
    attr = f' class="{escape(cls, quote=True)}"' if cls else ""
    return f'<a{attr} href="{escape(href, quote=True)}">{escape(text)}</a>'


def post_info(
    publication_date: datetime | None,
    author: str,
    reading_time: str | None = None,
    edited: datetime | None = None,
) -> str:
    date_text = format_date(publication_date) if publication_date else LABELS["publication_date"]
    parts = [
        f"<time>{escape(date_text)}</time>",
        f"<span>{escape(author)}</span>",
    ]
    if reading_time is not None:
        parts.append(f"<span>{escape(reading_time)}</span>")
    if edited is not None:
        parts.append(f'<span class="edited">{escape(format_edited(edited))}</span>')
    return '<div class="info">' + "".join(parts) + "</div>"


@dataclass(frozen=True)
class PostRow:
    title: str
    subtitle: str | None
    author: str
    publication_date: datetime | None
    href: str


def post_list(rows: Iterable[PostRow], load_more_href: str | None) -> str:
    lines = ['<main class="container">', '<ul class="posts">']
    for r in rows:
        subtitle = f"<p>{escape(r.subtitle)}</p>" if r.subtitle else ""
        lines.append(
            "<li>"
            f'<a href="{escape(r.href, quote=True)}"><strong>{escape(r.title)}</strong></a>'
            f"{subtitle}"
            f"{post_info(r.publication_date, r.author)}"
            "</li>"
        )
    lines.append("</ul>")
    if load_more_href:
        lines.append(link(load_more_href, LABELS["load_more"], cls="load-more"))
    lines.append("</main>")
    return "\n".join(lines)


@dataclass(frozen=True)
class Sibling:
    title: str
    href: str


def pagination_nav(previous: Sibling | None, next_: Sibling | None) -> str:
    if previous is None and next_ is None:
        return ""
    lines = ['<nav class="pagination">']
    if previous is not None:
        lines.append(f"<span>{escape(previous.title)}{link(previous.href, LABELS['previous'])}</span>")
    if next_ is not None:
        lines.append(f'<span class="next">{escape(next_.title)}{link(next_.href, LABELS["next"])}</span>')
    lines.append("</nav>")
    return "\n".join(lines)


def comments(repo: str, theme: str) -> str:
    return (
        '<section class="comments">'
        f'<script src="{UTTERANCES_SCRIPT}" '
        f'repo="{escape(repo, quote=True)}" '
        f'issue-term="{UTTERANCES_ISSUE_TERM}" '
        f'theme="{escape(theme, quote=True)}" '
        'crossorigin="anonymous" async></script>'
        "</section>"
    )


def preview_aside(exit_href: str) -> str:
    return f'<aside class="preview">{link(exit_href, LABELS["exit_preview"])}</aside>'


def post_article(
    title: str,
    banner_url: str | None,
    info_html: str,
    blocks: Iterable[tuple[str, str]],
    footer_html: str,
) -> str:
    """Blocks: (heading, body_html). Body HTML is already rendered and escaped."""
    lines = ["<main><article>"]
    if banner_url:
        src = escape(banner_url, quote=True)
        lines.append(f'<img class="banner" src="{src}" alt="{escape(title, quote=True)}">')
    lines.append('<div class="container">')
    lines.append(f"<h1>{escape(title)}</h1>")
    lines.append(info_html)
    for heading, body_html in blocks:
        lines.append('<div class="post-content">')
        if heading:
            lines.append(f"<h2>{escape(heading)}</h2>")
        lines.append(body_html)
        lines.append("</div>")
    lines.append(footer_html)
    lines.append("</div>")
    lines.append("</article></main>")
    return "\n".join(lines)
