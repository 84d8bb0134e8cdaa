"""Reading-time estimation for post content."""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Sequence

from ..config import WORDS_PER_MINUTE
from .models import ContentBlock, TextSpan
from .richtext import as_text

_WHITESPACE = re.compile(r"\s+")


def _tokens(text: str) -> int:
    # Empty strings are not filtered out: an empty body still counts as one token.
    return len(_WHITESPACE.split(text))


def count_words(
    blocks: Sequence[ContentBlock],
    to_text: Callable[[Sequence[TextSpan]], str] = as_text,
) -> int:
    """Count words over every block: heading (when present) plus rendered body."""
    total = 0
    for block in blocks:
        if block.heading:
            total += _tokens(block.heading)
        total += _tokens(to_text(block.body))
    return total


def estimate(
    blocks: Sequence[ContentBlock] | None,
    to_text: Callable[[Sequence[TextSpan]], str] = as_text,
    words_per_minute: int = WORDS_PER_MINUTE,
) -> int | None:
    """Estimated minutes to read ``blocks``.

    Returns None when there is no content to estimate from (as opposed to an
    empty content list, which is 0 minutes).
    """
    if blocks is None:
        return None
    return math.ceil(count_words(blocks, to_text) / words_per_minute)
