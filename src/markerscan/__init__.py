"""
markerscan - find TODO/FIXME-style marker comments in source trees.
"""

from markerscan.core import (
    ExtractedMarker,
    InvalidGlobPatternError,
    MarkerScanConfig,
    MarkerScanner,
    ScanConfig,
    ScanResult,
    load_config,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "MarkerScanner",
    "ScanConfig",
    "ScanResult",
    "ExtractedMarker",
    "InvalidGlobPatternError",
    "MarkerScanConfig",
    "load_config",
]
