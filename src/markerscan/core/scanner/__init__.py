"""
Marker scanner module for markerscan.

Walks a source tree, recognises comment syntax per language and extracts
TODO/FIXME-style markers as fingerprinted records.
"""

from .errors import (
    BinaryContentError,
    InvalidGlobPatternError,
    ScanError,
    SizeLimitExceededError,
    SkippedFileError,
)
from .fingerprint import compute_fingerprint
from .interfaces import MarkerScannerInterface
from .language_registry import (
    UNKNOWN_GRAMMAR,
    LanguageGrammar,
    LanguageRegistry,
    get_default_registry,
)
from .line_scanner import LineScanner, read_source
from .marker_matcher import MarkerMatch, MarkerMatcher
from .models import (
    DEFAULT_MARKER_TYPES,
    MAX_FILE_SIZE_BYTES,
    ExtractedMarker,
    ScanConfig,
    ScanResult,
)
from .path_filter import PathFilter, compile_glob
from .walker import MarkerScanner

__all__ = [
    # Main classes
    "MarkerScanner",
    "MarkerScannerInterface",
    "LineScanner",
    "MarkerMatcher",
    "MarkerMatch",
    "PathFilter",
    # Models
    "ScanConfig",
    "ExtractedMarker",
    "ScanResult",
    # Language registry
    "LanguageGrammar",
    "LanguageRegistry",
    "UNKNOWN_GRAMMAR",
    "get_default_registry",
    # Functions
    "compile_glob",
    "compute_fingerprint",
    "read_source",
    # Errors
    "ScanError",
    "InvalidGlobPatternError",
    "SkippedFileError",
    "SizeLimitExceededError",
    "BinaryContentError",
    # Constants
    "DEFAULT_MARKER_TYPES",
    "MAX_FILE_SIZE_BYTES",
]
