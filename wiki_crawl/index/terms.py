"""wiki_crawl.index.terms: term counting over content blocks."""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterable

from bs4.element import Tag

__all__ = ["tokenize", "count_terms"]

_PUNCT_RE = re.compile(r"[^\w\s]|_")


def tokenize(text: str) -> list[str]:
    """Punctuation becomes whitespace, then lower-case split; empty terms dropped."""
    return _PUNCT_RE.sub(" ", text).lower().split()


def count_terms(blocks: Iterable[Tag]) -> Counter[str]:
    """Count terms across every text node of every block."""
    counts: Counter[str] = Counter()
    for block in blocks:
        for text in block.strings:
            counts.update(tokenize(text))
    return counts
