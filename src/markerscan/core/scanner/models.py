"""
Data models and constants for the marker scanner.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# Marker keywords recognised when the caller does not configure any
DEFAULT_MARKER_TYPES: tuple[str, ...] = ("TODO", "FIXME", "HACK", "BUG", "NOTE", "XXX")

# Files above this size are skipped without being read
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True)
class ScanConfig:
    """
    Per-invocation scan settings.

    Attributes:
        include_patterns: Globs a file's relative path must match (empty = all files)
        exclude_patterns: Names or globs that remove files and directories
        marker_types: Marker keywords to recognise (matched case-insensitively)
    """

    include_patterns: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()
    marker_types: frozenset[str] = field(default_factory=lambda: frozenset(DEFAULT_MARKER_TYPES))

    @classmethod
    def create(
        cls,
        include: list[str] | None = None,
        exclude: list[str] | None = None,
        marker_types: list[str] | None = None,
    ) -> "ScanConfig":
        """Build a ScanConfig from plain lists, falling back to the default keywords."""
        return cls(
            include_patterns=tuple(include or ()),
            exclude_patterns=tuple(exclude or ()),
            marker_types=frozenset(t.upper() for t in (marker_types or DEFAULT_MARKER_TYPES)),
        )


@dataclass(frozen=True)
class ExtractedMarker:
    """
    A marker comment discovered in a source file.

    Attributes:
        relative_path: POSIX path of the file relative to the scan root
        line_number: 1-based line of the marker
        column: 1-based offset of the keyword within the raw line
        marker_type: Upper-cased keyword (e.g. 'TODO')
        content: Text after the keyword, tag and separator
        discovered_at: When the marker was extracted (UTC)
        fingerprint: SHA-256 hex digest identifying the marker across scans
        tag: Parenthesised tag after the keyword, without the parentheses
        language: Name of the grammar used, or None for unknown files
    """

    relative_path: str
    line_number: int
    column: int
    marker_type: str
    content: str
    discovered_at: datetime
    fingerprint: str
    tag: str | None = None
    language: str | None = None

    @property
    def dedup_key(self) -> tuple[str, str, int]:
        """Key a persistence layer uses to recognise an already-known marker."""
        return (self.fingerprint, self.relative_path, self.line_number)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "relative_path": self.relative_path,
            "line_number": self.line_number,
            "column": self.column,
            "marker_type": self.marker_type,
            "tag": self.tag,
            "content": self.content,
            "language": self.language,
            "discovered_at": self.discovered_at.isoformat(),
            "fingerprint": self.fingerprint,
        }


@dataclass
class ScanResult:
    """Summary of one complete walk."""

    markers: list[ExtractedMarker] = field(default_factory=list)
    files_scanned: int = 0
    files_skipped: int = 0
    duration_seconds: float = 0.0

    def counts_by_type(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for marker in self.markers:
            counts[marker.marker_type] = counts.get(marker.marker_type, 0) + 1
        return counts
