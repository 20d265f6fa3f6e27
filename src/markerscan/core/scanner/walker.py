"""
Tree walker producing markers for every eligible file under a root.
"""

import itertools
import logging
import os
import time
from collections import deque
from collections.abc import Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from threading import Event

from .errors import BinaryContentError, SizeLimitExceededError
from .interfaces import MarkerScannerInterface
from .language_registry import LanguageRegistry
from .line_scanner import LineScanner
from .marker_matcher import MarkerMatcher
from .models import MAX_FILE_SIZE_BYTES, ExtractedMarker, ScanConfig, ScanResult
from .path_filter import PathFilter, normalize_relative

logger = logging.getLogger(__name__)


@dataclass
class _WalkStats:
    """File counters for a single walk, updated from the consuming thread."""

    files_scanned: int = 0
    files_skipped: int = 0

    def record(self, markers: list[ExtractedMarker] | None) -> list[ExtractedMarker]:
        if markers is None:
            self.files_skipped += 1
            return []
        self.files_scanned += 1
        return markers


class MarkerScanner(MarkerScannerInterface):
    """
    Concrete implementation of MarkerScannerInterface.

    Provides:
    - Depth-first traversal with entries sorted by name
    - Include/exclude filtering via PathFilter
    - Soft skips for unreadable, oversized and binary files
    - Optional thread pool for reading and scanning files
    - Cooperative cancellation between files

    The configuration is validated here, once: an invalid glob raises
    InvalidGlobPatternError from the constructor.
    """

    def __init__(
        self,
        config: ScanConfig | None = None,
        language_registry: LanguageRegistry | None = None,
        max_workers: int = 1,
        max_file_size: int = MAX_FILE_SIZE_BYTES,
    ):
        """
        Initialize the MarkerScanner.

        Args:
            config: Scan settings. If None, uses ScanConfig() defaults.
            language_registry: Custom LanguageRegistry. If None, uses the global default.
            max_workers: Files scanned concurrently; 1 scans sequentially.
            max_file_size: Files larger than this many bytes are skipped.
        """
        self._config = config or ScanConfig()
        self._path_filter = PathFilter(
            include_patterns=self._config.include_patterns,
            exclude_patterns=self._config.exclude_patterns,
        )
        self._line_scanner = LineScanner(
            matcher=MarkerMatcher(self._config.marker_types),
            language_registry=language_registry,
            max_file_size=max_file_size,
        )
        self._max_workers = max(1, max_workers)

    @property
    def config(self) -> ScanConfig:
        return self._config

    def walk(self, root_path: Path, cancel_event: Event | None = None) -> Iterator[ExtractedMarker]:
        """
        Recursively scan a directory and yield ExtractedMarker objects.

        Args:
            root_path: Root directory to scan
            cancel_event: Optional event checked between files

        Yields:
            ExtractedMarker objects, file by file in traversal order
        """
        return self._walk(root_path, cancel_event, _WalkStats())

    def scan(self, root_path: Path, cancel_event: Event | None = None) -> ScanResult:
        """Walk a directory and collect the markers with scan statistics."""
        start = time.perf_counter()
        stats = _WalkStats()
        markers = list(self._walk(root_path, cancel_event, stats))
        return ScanResult(
            markers=markers,
            files_scanned=stats.files_scanned,
            files_skipped=stats.files_skipped,
            duration_seconds=time.perf_counter() - start,
        )

    def _walk(self, root_path: Path, cancel_event: Event | None, stats: _WalkStats) -> Iterator[ExtractedMarker]:
        root_path = Path(root_path).resolve()

        if not root_path.exists():
            logger.error(f"Root path does not exist: {root_path}")
            return

        if not root_path.is_dir():
            logger.error(f"Root path is not a directory: {root_path}")
            return

        files = self._iter_files(root_path, root_path)
        if self._max_workers == 1:
            for file_path, relative in files:
                if cancel_event is not None and cancel_event.is_set():
                    logger.info("Scan cancelled")
                    return
                yield from stats.record(self._scan_file(file_path, relative))
            return

        # At most `window` files are read ahead of the consumer.
        window = self._max_workers * 2
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            pending: deque[Future] = deque()
            try:
                for file_path, relative in itertools.islice(files, window):
                    pending.append(executor.submit(self._scan_file, file_path, relative))
                while pending:
                    if cancel_event is not None and cancel_event.is_set():
                        logger.info("Scan cancelled")
                        return
                    future = pending.popleft()
                    for file_path, relative in itertools.islice(files, 1):
                        pending.append(executor.submit(self._scan_file, file_path, relative))
                    yield from stats.record(future.result())
            finally:
                for future in pending:
                    future.cancel()

    def _iter_files(self, root_path: Path, current_path: Path) -> Iterator[tuple[Path, str]]:
        """
        Recursively list the files to scan.

        Yields:
            Tuples of (absolute path, POSIX path relative to the root)
        """
        try:
            with os.scandir(current_path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except PermissionError as e:
            logger.warning(f"Permission denied accessing directory: {current_path} - {e}")
            return
        except OSError as e:
            logger.warning(f"Error accessing directory: {current_path} - {e}")
            return

        for entry in entries:
            entry_path = Path(entry.path)
            relative = normalize_relative(entry_path.relative_to(root_path))

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_symlink_dir = not is_dir and entry.is_symlink() and entry.is_dir()
                is_file = entry.is_file()
            except OSError as e:
                logger.warning(f"Error reading directory entry: {entry_path} - {e}")
                continue

            if is_symlink_dir:
                logger.debug(f"Skipping symlinked directory: {entry_path}")
                continue

            if is_dir:
                if not self._path_filter.should_descend(relative):
                    logger.debug(f"Ignoring directory: {relative}")
                    continue
                yield from self._iter_files(root_path, entry_path)
            elif is_file:
                if not self._path_filter.should_scan(relative):
                    logger.debug(f"Ignoring: {relative}")
                    continue
                yield entry_path, relative

    def _scan_file(self, file_path: Path, relative: str) -> list[ExtractedMarker] | None:
        """
        Scan one file.

        Returns:
            Markers found, or None if the file was skipped
        """
        try:
            return self._line_scanner.scan_file(file_path, relative)
        except SizeLimitExceededError as e:
            logger.info(f"Skipping large file ({e.size_bytes} bytes): {relative}")
        except BinaryContentError:
            logger.debug(f"Skipping binary file: {relative}")
        except PermissionError as e:
            logger.warning(f"Permission denied reading file: {file_path} - {e}")
        except OSError as e:
            logger.warning(f"Error reading file: {file_path} - {e}")
        return None
