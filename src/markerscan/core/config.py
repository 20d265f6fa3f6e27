"""
Configuration module for markerscan.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from markerscan.core.scanner.models import DEFAULT_MARKER_TYPES, MAX_FILE_SIZE_BYTES, ScanConfig

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config (lists are copied)."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section, {})
    value = section_defaults.get(key, fallback)
    return list(value) if isinstance(value, list) else value


@dataclass
class ScanSettings:
    """Configuration for directory scanning."""

    include_patterns: list[str] = field(
        default_factory=lambda: _get_default("scan", "include_patterns", [])
    )
    exclude_patterns: list[str] = field(
        default_factory=lambda: _get_default(
            "scan",
            "exclude_patterns",
            [".git", "node_modules", "vendor", "dist", "build", ".next", "__pycache__", ".cache", "coverage"],
        )
    )
    marker_types: list[str] = field(
        default_factory=lambda: _get_default("scan", "marker_types", list(DEFAULT_MARKER_TYPES))
    )
    max_workers: int = field(default_factory=lambda: _get_default("scan", "max_workers", 4))
    max_file_size_bytes: int = field(
        default_factory=lambda: _get_default("scan", "max_file_size_bytes", MAX_FILE_SIZE_BYTES)
    )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "WARNING"))
    format: str = field(default_factory=lambda: _get_default("logging", "format", "%(message)s"))


@dataclass
class MarkerScanConfig:
    """Main configuration class for markerscan."""

    scan: ScanSettings = field(default_factory=ScanSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "MarkerScanConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            MarkerScanConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the file format is unsupported
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        if not isinstance(data, dict):
            raise ValueError(f"Invalid config format: expected mapping, got {type(data).__name__}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "MarkerScanConfig":
        """Create MarkerScanConfig from a dictionary."""
        config = cls()

        try:
            if "scan" in data:
                config.scan = ScanSettings(**data["scan"])
            if "logging" in data:
                config.logging = LoggingConfig(**data["logging"])
        except TypeError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

        return config

    def apply_env_overrides(self) -> "MarkerScanConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: MARKERSCAN_<SECTION>_<KEY>
        Examples:
            - MARKERSCAN_SCAN_EXCLUDE_PATTERNS=.git,node_modules
            - MARKERSCAN_SCAN_MAX_WORKERS=8
            - MARKERSCAN_LOGGING_LEVEL=DEBUG

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # Scan config
            "MARKERSCAN_SCAN_INCLUDE_PATTERNS": ("scan", "include_patterns", _parse_list),
            "MARKERSCAN_SCAN_EXCLUDE_PATTERNS": ("scan", "exclude_patterns", _parse_list),
            "MARKERSCAN_SCAN_MARKER_TYPES": ("scan", "marker_types", _parse_list),
            "MARKERSCAN_SCAN_MAX_WORKERS": ("scan", "max_workers", int),
            "MARKERSCAN_SCAN_MAX_FILE_SIZE_BYTES": ("scan", "max_file_size_bytes", int),
            # Logging config
            "MARKERSCAN_LOGGING_LEVEL": ("logging", "level", str),
            "MARKERSCAN_LOGGING_FORMAT": ("logging", "format", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                setattr(section_obj, key, converter(value))

        return self

    def to_scan_config(self) -> ScanConfig:
        """Build the engine's per-walk ScanConfig from these settings."""
        return ScanConfig.create(
            include=self.scan.include_patterns,
            exclude=self.scan.exclude_patterns,
            marker_types=self.scan.marker_types,
        )

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def to_json(self) -> str:
        """Serialize configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: Path | str) -> None:
        """
        Save configuration to a file.

        Args:
            path: Path to save the configuration (.yaml, .yml, or .json)

        Raises:
            ValueError: If the file format is unsupported
        """
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            content = self.to_yaml()
        elif path.suffix == ".json":
            content = self.to_json()
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated string into a list, dropping empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> MarkerScanConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        MarkerScanConfig instance
    """
    if config_path:
        config = MarkerScanConfig.from_file(config_path)
    else:
        config = MarkerScanConfig()

    if apply_env:
        config.apply_env_overrides()

    return config
