"""
Property-based tests for MarkerScanConfig loading and serialization.
"""

import tempfile
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from markerscan.core.config import (
    LoggingConfig,
    MarkerScanConfig,
    ScanSettings,
    load_config,
)
from markerscan.core.scanner import DEFAULT_MARKER_TYPES, MAX_FILE_SIZE_BYTES

# Strategies for generating valid configuration values
safe_text = st.text(
    alphabet=st.characters(
        whitelist_categories=("L", "N", "P", "S"),
        blacklist_characters="\x00\n\r\t",
    ),
    min_size=1,
    max_size=50,
).filter(lambda s: s.strip() != "")

glob_pattern = st.from_regex(r"[a-zA-Z0-9_\-\*\.]+", fullmatch=True).filter(lambda s: len(s) > 0)

marker_type = st.from_regex(r"[A-Z]{2,8}", fullmatch=True)

log_level = st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])


@st.composite
def scan_settings_strategy(draw):
    """Generate valid ScanSettings instances."""
    return ScanSettings(
        include_patterns=draw(st.lists(glob_pattern, min_size=0, max_size=5)),
        exclude_patterns=draw(st.lists(glob_pattern, min_size=0, max_size=20)),
        marker_types=draw(st.lists(marker_type, min_size=1, max_size=8, unique=True)),
        max_workers=draw(st.integers(min_value=1, max_value=32)),
        max_file_size_bytes=draw(st.integers(min_value=1, max_value=100 * 1024 * 1024)),
    )


@st.composite
def logging_config_strategy(draw):
    """Generate valid LoggingConfig instances."""
    return LoggingConfig(
        level=draw(log_level),
        format=draw(safe_text),
    )


@st.composite
def markerscan_config_strategy(draw):
    """Generate valid MarkerScanConfig instances."""
    return MarkerScanConfig(
        scan=draw(scan_settings_strategy()),
        logging=draw(logging_config_strategy()),
    )


@given(config=markerscan_config_strategy())
@settings(max_examples=100)
def test_config_yaml_round_trip(config: MarkerScanConfig):
    """Saving to YAML and loading back yields an equivalent configuration."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.yaml"
        config.save(path)
        loaded = MarkerScanConfig.from_file(path)

    assert loaded.to_dict() == config.to_dict()


@given(config=markerscan_config_strategy())
@settings(max_examples=100)
def test_config_json_round_trip(config: MarkerScanConfig):
    """Saving to JSON and loading back yields an equivalent configuration."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.json"
        config.save(path)
        loaded = MarkerScanConfig.from_file(path)

    assert loaded.to_dict() == config.to_dict()


class TestDefaults:
    """Values loaded from defaults.yaml."""

    def test_default_scan_settings(self):
        config = MarkerScanConfig()

        assert config.scan.include_patterns == []
        assert ".git" in config.scan.exclude_patterns
        assert "node_modules" in config.scan.exclude_patterns
        assert config.scan.marker_types == list(DEFAULT_MARKER_TYPES)
        assert config.scan.max_workers == 4
        assert config.scan.max_file_size_bytes == MAX_FILE_SIZE_BYTES

    def test_default_lists_are_not_shared(self):
        first = MarkerScanConfig()
        first.scan.exclude_patterns.append("extra")

        assert "extra" not in MarkerScanConfig().scan.exclude_patterns

    def test_to_scan_config(self):
        config = MarkerScanConfig()
        config.scan.include_patterns = ["*.go"]
        config.scan.marker_types = ["todo", "Review"]
        scan_config = config.to_scan_config()

        assert scan_config.include_patterns == ("*.go",)
        assert scan_config.exclude_patterns == tuple(config.scan.exclude_patterns)
        assert scan_config.marker_types == frozenset({"TODO", "REVIEW"})


class TestLoading:
    """File loading and environment overrides."""

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("scan:\n  exclude_patterns: [target]\n", encoding="utf-8")
        config = MarkerScanConfig.from_file(path)

        assert config.scan.exclude_patterns == ["target"]
        assert config.scan.max_workers == 4
        assert config.logging.level == "WARNING"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            MarkerScanConfig.from_file(tmp_path / "nope.yaml")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[scan]\n", encoding="utf-8")
        with pytest.raises(ValueError):
            MarkerScanConfig.from_file(path)

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("scan:\n  colour: red\n", encoding="utf-8")
        with pytest.raises(ValueError):
            MarkerScanConfig.from_file(path)

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("", encoding="utf-8")
        assert MarkerScanConfig.from_file(path).to_dict() == MarkerScanConfig().to_dict()

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("MARKERSCAN_SCAN_EXCLUDE_PATTERNS", "target, .idea ,,out")
        monkeypatch.setenv("MARKERSCAN_SCAN_MAX_WORKERS", "8")
        monkeypatch.setenv("MARKERSCAN_LOGGING_LEVEL", "DEBUG")
        config = load_config()

        assert config.scan.exclude_patterns == ["target", ".idea", "out"]
        assert config.scan.max_workers == 8
        assert config.logging.level == "DEBUG"

    def test_env_overrides_can_be_disabled(self, monkeypatch):
        monkeypatch.setenv("MARKERSCAN_SCAN_MAX_WORKERS", "8")
        assert load_config(apply_env=False).scan.max_workers == 4
