"""Rich text to plain text and HTML.

Rich text arrives as a list of elements, each with a ``text`` and inline
``marks`` given as character ranges. Marks may overlap, so the text is cut at
every mark boundary and each piece is wrapped in the marks that cover it.
"""

from __future__ import annotations

from collections.abc import Sequence
from html import escape

from .models import Mark, TextSpan

_BLOCK_TAGS = {
    "paragraph": "p",
    "heading1": "h1",
    "heading2": "h2",
    "heading3": "h3",
    "heading4": "h4",
    "heading5": "h5",
    "heading6": "h6",
    "preformatted": "pre",
}

_LIST_TAGS = {"list-item": "ul", "o-list-item": "ol"}


def as_text(spans: Sequence[TextSpan], join: str = " ") -> str:
    """Plain text of a rich-text body, elements joined by ``join``."""
    return join.join(span.text for span in spans)


def as_html(spans: Sequence[TextSpan]) -> str:
    out: list[str] = []
    open_list: str | None = None

    for span in spans:
        list_tag = _LIST_TAGS.get(span.type)
        if open_list and list_tag != open_list:
            out.append(f"</{open_list}>")
            open_list = None
        if list_tag:
            if open_list is None:
                out.append(f"<{list_tag}>")
                open_list = list_tag
            out.append(f"<li>{_inline(span)}</li>")
            continue

        if span.type == "image":
            if span.url:
                src = escape(span.url, quote=True)
                alt = escape(span.alt or "", quote=True)
                out.append(f'<p class="block-img"><img src="{src}" alt="{alt}" /></p>')
            continue

        if span.type == "embed":
            oembed = span.oembed or {}
            embed_html = oembed.get("html")
            if embed_html:
                # Embed markup is produced by the CMS oEmbed integration and is trusted.
                kind = escape(str(oembed.get("type") or ""), quote=True)
                out.append(f'<div data-oembed-type="{kind}">{embed_html}</div>')
            continue

        tag = _BLOCK_TAGS.get(span.type, "p")
        out.append(f"<{tag}>{_inline(span)}</{tag}>")

    if open_list:
        out.append(f"</{open_list}>")
    return "".join(out)


def _inline(span: TextSpan) -> str:
    text = span.text
    marks = [m for m in span.marks if 0 <= m.start < m.end <= len(text)]
    if not marks:
        return _text(text)

    cuts = sorted({0, len(text), *(m.start for m in marks), *(m.end for m in marks)})
    pieces: list[str] = []
    for a, b in zip(cuts, cuts[1:]):
        covering = [m for m in marks if m.start <= a and m.end >= b]
        # Widest mark outermost.
        covering.sort(key=lambda m: (m.start, -m.end))
        html = _text(text[a:b])
        for mark in reversed(covering):
            html = _wrap(mark, html)
        pieces.append(html)
    return "".join(pieces)


def _wrap(mark: Mark, inner: str) -> str:
    if mark.type == "strong":
        return f"<strong>{inner}</strong>"
    if mark.type == "em":
        return f"<em>{inner}</em>"
    if mark.type == "hyperlink":
        href = _safe_href(mark.data.get("url"))
        if not href:
            return inner
        target = mark.data.get("target")
        attrs = f' href="{escape(href, quote=True)}"'
        if target:
            attrs += f' target="{escape(str(target), quote=True)}" rel="noopener"'
        return f"<a{attrs}>{inner}</a>"
    if mark.type == "label":
        label = escape(str(mark.data.get("label") or ""), quote=True)
        return f'<span class="{label}">{inner}</span>'
    return inner


def _text(text: str) -> str:
    return escape(text, quote=False).replace("\n", "<br />")


def _safe_href(href: object) -> str | None:
    if not isinstance(href, str):
        return None
    cleaned = href.strip()
    if not cleaned:
        return None
    if cleaned.lower().startswith(("javascript:", "data:", "vbscript:")):
        return None
    return cleaned
