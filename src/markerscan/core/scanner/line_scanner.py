"""
Per-file comment scanner.

Each physical line is fed through a two-state machine:

- ``Normal``: outside any block comment. A line whose trimmed text starts
  with a single-line prefix is a comment; otherwise the first block-comment
  start token found opens a block (closed on the same line when its end
  token follows it). Anything else is code.
- ``InBlockComment(pair_index)``: inside a block comment opened by that
  delimiter pair. The line is comment text up to the end token, if any.

Only one comment payload is taken per line. Text after a closing token is
not scanned again, and state never survives past the end of a file.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .errors import BinaryContentError, SizeLimitExceededError
from .fingerprint import compute_fingerprint
from .language_registry import UNKNOWN_GRAMMAR, LanguageGrammar, LanguageRegistry, get_default_registry
from .marker_matcher import MarkerMatcher
from .models import MAX_FILE_SIZE_BYTES, ExtractedMarker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Normal:
    """Outside of any block comment."""


@dataclass(frozen=True)
class InBlockComment:
    """Inside a block comment opened by ``multi_line_delimiters[pair_index]``."""

    pair_index: int


ScanState = Normal | InBlockComment

NORMAL = Normal()


@dataclass(frozen=True)
class CommentSpan:
    """Comment text taken from one line and where it starts in the raw line."""

    offset: int
    text: str


def step(
    state: ScanState, line: str, grammar: LanguageGrammar
) -> tuple[ScanState, CommentSpan | None]:
    """
    Advance the state machine by one line.

    Args:
        state: State before the line
        line: Raw line without its newline
        grammar: Comment grammar of the file

    Returns:
        Tuple of (state after the line, comment span or None for code)
    """
    if isinstance(state, InBlockComment):
        end_token = grammar.multi_line_delimiters[state.pair_index][1]
        end = line.find(end_token)
        if end == -1:
            return state, CommentSpan(0, line)
        return NORMAL, CommentSpan(0, line[:end])

    stripped = line.lstrip()
    indent = len(line) - len(stripped)
    trimmed = stripped.rstrip()
    for prefix in grammar.single_line_prefixes:
        if trimmed.startswith(prefix):
            return NORMAL, CommentSpan(indent + len(prefix), trimmed[len(prefix):])

    for index, (start_token, end_token) in enumerate(grammar.multi_line_delimiters):
        start = line.find(start_token)
        if start == -1:
            continue
        body = start + len(start_token)
        end = line.find(end_token, body)
        if end == -1:
            return InBlockComment(index), CommentSpan(body, line[body:])
        return NORMAL, CommentSpan(body, line[body:end])

    return NORMAL, None


def read_source(file_path: Path, max_bytes: int = MAX_FILE_SIZE_BYTES) -> str:
    """
    Read a source file, refusing oversized and binary files.

    Bytes that are not valid UTF-8 are replaced rather than rejected.

    Raises:
        SizeLimitExceededError: If the file is larger than ``max_bytes``
        BinaryContentError: If the first line contains a NUL byte
        OSError: If the file cannot be read
    """
    size_bytes = file_path.stat().st_size
    if size_bytes > max_bytes:
        raise SizeLimitExceededError(size_bytes, max_bytes)

    data = file_path.read_bytes()
    if b"\x00" in data.partition(b"\n")[0]:
        raise BinaryContentError(f"NUL byte in first line of {file_path}")

    return data.decode("utf-8", errors="replace")


class LineScanner:
    """
    Extracts markers from the comments of a single file.

    The scanner holds no per-file state between calls, so one instance can
    serve many files, including from several threads.
    """

    def __init__(
        self,
        matcher: MarkerMatcher | None = None,
        language_registry: LanguageRegistry | None = None,
        max_file_size: int = MAX_FILE_SIZE_BYTES,
    ):
        self._matcher = matcher or MarkerMatcher()
        self._language_registry = language_registry or get_default_registry()
        self._max_file_size = max_file_size

    def resolve_grammar(self, file_path: Path | str, first_line: str = "") -> LanguageGrammar | None:
        """Pick a grammar by extension, then by shebang line."""
        grammar = self._language_registry.lookup_path(file_path)
        if grammar is None and first_line:
            grammar = self._language_registry.lookup_shebang(first_line)
        return grammar

    def scan_text(
        self,
        text: str,
        relative_path: str,
        grammar: LanguageGrammar | None,
        discovered_at: datetime | None = None,
    ) -> list[ExtractedMarker]:
        """
        Scan file contents for markers.

        Args:
            text: Whole file contents
            relative_path: Path reported on each marker and used in its fingerprint
            grammar: Comment grammar, or None to use the '#' heuristic for unknown files
            discovered_at: Timestamp stamped on each marker (defaults to now, UTC)

        Returns:
            Markers in line order
        """
        discovered_at = discovered_at or datetime.now(timezone.utc)
        rules = grammar or UNKNOWN_GRAMMAR
        language = grammar.name if grammar is not None else None

        markers: list[ExtractedMarker] = []
        state: ScanState = NORMAL
        for line_number, raw in enumerate(text.split("\n"), start=1):
            line = raw[:-1] if raw.endswith("\r") else raw
            state, span = step(state, line, rules)
            if span is None:
                continue

            found = self._matcher.match(span.text)
            if found is None:
                continue

            markers.append(
                ExtractedMarker(
                    relative_path=relative_path,
                    line_number=line_number,
                    column=span.offset + found.start + 1,
                    marker_type=found.marker_type,
                    content=found.content,
                    discovered_at=discovered_at,
                    fingerprint=compute_fingerprint(
                        relative_path, line_number, found.marker_type, found.content
                    ),
                    tag=found.tag,
                    language=language,
                )
            )

        return markers

    def scan_file(self, file_path: Path, relative_path: str) -> list[ExtractedMarker]:
        """
        Read and scan one file.

        Raises:
            SkippedFileError: If the file is too large or binary
            OSError: If the file cannot be read
        """
        text = read_source(file_path, self._max_file_size)
        first_line = text.partition("\n")[0]
        grammar = self.resolve_grammar(file_path, first_line)
        markers = self.scan_text(text, relative_path, grammar)
        if markers:
            logger.debug(f"Found {len(markers)} markers in {relative_path}")
        return markers
