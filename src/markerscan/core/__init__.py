"""
Core Layer - Configuration and the marker scanning engine.
"""

from markerscan.core.config import (
    LoggingConfig,
    MarkerScanConfig,
    ScanSettings,
    load_config,
)
from markerscan.core.scanner import (
    DEFAULT_MARKER_TYPES,
    ExtractedMarker,
    InvalidGlobPatternError,
    LanguageGrammar,
    LanguageRegistry,
    MarkerScanner,
    MarkerScannerInterface,
    ScanConfig,
    ScanResult,
    get_default_registry,
)

__all__ = [
    # Config
    "MarkerScanConfig",
    "ScanSettings",
    "LoggingConfig",
    "load_config",
    # Scanner
    "ScanConfig",
    "ExtractedMarker",
    "ScanResult",
    "MarkerScannerInterface",
    "MarkerScanner",
    "LanguageGrammar",
    "LanguageRegistry",
    "get_default_registry",
    "InvalidGlobPatternError",
    "DEFAULT_MARKER_TYPES",
]
