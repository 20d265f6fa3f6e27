"""
Marker keyword recognition inside comment text.
"""

import re
from dataclasses import dataclass
from typing import Iterable

from .models import DEFAULT_MARKER_TYPES


@dataclass(frozen=True)
class MarkerMatch:
    """
    A marker found in a comment.

    Attributes:
        marker_type: Upper-cased keyword
        tag: Text inside the parentheses after the keyword, if any
        content: Remainder of the comment, trimmed
        start: 0-based offset of the keyword within the searched text
    """

    marker_type: str
    tag: str | None
    content: str
    start: int


class MarkerMatcher:
    """
    Finds the first marker keyword in a piece of comment text.

    Recognised shape (keyword case-insensitive, whole word)::

        KEYWORD [ (tag) ] [ : | - ] content

    Example:
        >>> MarkerMatcher().match(" FIXME(alice): handle nil")
        MarkerMatch(marker_type='FIXME', tag='alice', content='handle nil', start=1)
    """

    def __init__(self, marker_types: Iterable[str] = DEFAULT_MARKER_TYPES):
        keywords = sorted({k.strip().upper() for k in marker_types if k.strip()}, key=len, reverse=True)
        if not keywords:
            raise ValueError("At least one marker type is required")

        self._marker_types = frozenset(keywords)
        alternation = "|".join(re.escape(k) for k in keywords)
        self._pattern = re.compile(
            rf"(?<!\w)(?P<keyword>(?i:{alternation}))(?!\w)"
            r"\s*(?:\((?P<tag>[^)]+)\))?"
            r"\s*[:\-]?"
            r"\s*(?P<content>.*)$",
            re.DOTALL,
        )

    @property
    def marker_types(self) -> frozenset[str]:
        return self._marker_types

    def match(self, comment_text: str) -> MarkerMatch | None:
        """
        Search comment text for a marker.

        Args:
            comment_text: Comment payload with the comment delimiters removed

        Returns:
            MarkerMatch for the first keyword found, or None
        """
        m = self._pattern.search(comment_text)
        if m is None:
            return None
        return MarkerMatch(
            marker_type=m.group("keyword").upper(),
            tag=m.group("tag"),
            content=m.group("content").strip(),
            start=m.start("keyword"),
        )
