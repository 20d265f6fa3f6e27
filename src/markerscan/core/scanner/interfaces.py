"""
Abstract interfaces for marker scanning operations.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from threading import Event

from .models import ExtractedMarker


class MarkerScannerInterface(ABC):
    """
    Abstract interface for walking a source tree for marker comments.

    Implementations must be restartable: every call re-reads the tree.
    """

    @abstractmethod
    def walk(self, root_path: Path, cancel_event: Event | None = None) -> Iterator[ExtractedMarker]:
        """
        Recursively scan a directory and yield ExtractedMarker objects.

        Args:
            root_path: Root directory to scan
            cancel_event: Optional event; once set, the walk stops at the next file boundary

        Yields:
            ExtractedMarker objects in traversal order

        Notes:
            - Skips directories and files removed by the path filter
            - Logs and skips unreadable, oversized and binary files
        """
        pass
