"""
Language registry mapping file extensions to comment grammars.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

# Default path to the languages configuration file
_DEFAULT_LANGUAGES_CONFIG = Path(__file__).parent.parent / "languages.yaml"


@dataclass(frozen=True)
class LanguageGrammar:
    """
    Comment syntax for one language.

    Attributes:
        name: Display name (e.g. 'Go')
        extensions: Lower-cased extensions including the dot
        single_line_prefixes: Line comment prefixes, checked in order
        multi_line_delimiters: (start, end) block comment pairs, checked in order
        shebang_hints: First-line prefixes identifying extension-less scripts
    """

    name: str
    extensions: frozenset[str]
    single_line_prefixes: tuple[str, ...] = ()
    multi_line_delimiters: tuple[tuple[str, str], ...] = ()
    shebang_hints: tuple[str, ...] = ()


# Grammar used for files no registry entry recognises: '#' lines only
UNKNOWN_GRAMMAR = LanguageGrammar(
    name="unknown",
    extensions=frozenset(),
    single_line_prefixes=("#",),
)


class LanguageRegistry:
    """
    Ordered, read-only table of comment grammars.

    Lookups walk the grammars in table order and return the first match, so
    the order of the YAML file is significant.

    Example:
        >>> registry = get_default_registry()
        >>> registry.lookup(".GO").name
        'Go'
        >>> registry.lookup(".txt") is None
        True
    """

    def __init__(self, grammars: list[LanguageGrammar] | tuple[LanguageGrammar, ...] = ()):
        self._grammars: tuple[LanguageGrammar, ...] = tuple(grammars)

    @classmethod
    def from_yaml(cls, config_path: Path | str) -> "LanguageRegistry":
        """
        Create a LanguageRegistry from a YAML configuration file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            LanguageRegistry instance with the grammars in file order

        Raises:
            ValueError: If the config file format is invalid
        """
        config_path = Path(config_path)
        if not config_path.exists():
            logger.warning(f"Languages config not found: {config_path}, using empty registry")
            return cls()

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse languages config: {e}")
            raise ValueError(f"Invalid YAML in languages config: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Invalid languages config format: expected dict, got {type(data)}")

        return cls([_parse_grammar(str(name), entry) for name, entry in data.items()])

    @property
    def grammars(self) -> tuple[LanguageGrammar, ...]:
        """All grammars in lookup order."""
        return self._grammars

    def lookup(self, extension: str) -> LanguageGrammar | None:
        """
        Find the grammar for a file extension.

        Args:
            extension: Extension including the dot (e.g. '.py'), any case

        Returns:
            First grammar listing the extension, or None
        """
        ext = extension.lower()
        for grammar in self._grammars:
            if ext in grammar.extensions:
                return grammar
        return None

    def lookup_path(self, file_path: Path | str) -> LanguageGrammar | None:
        """Find the grammar for a file path by its suffix."""
        suffix = Path(file_path).suffix
        if not suffix:
            return None
        return self.lookup(suffix)

    def lookup_shebang(self, first_line: str) -> LanguageGrammar | None:
        """Find the grammar whose shebang hint prefixes the given first line."""
        line = first_line.strip()
        if not line.startswith("#!"):
            return None
        for grammar in self._grammars:
            if any(line.startswith(hint) for hint in grammar.shebang_hints):
                return grammar
        return None

    def supported_extensions(self) -> set[str]:
        """Get all registered file extensions."""
        return {ext for grammar in self._grammars for ext in grammar.extensions}


def _parse_grammar(name: str, entry: object) -> LanguageGrammar:
    """Build a LanguageGrammar from one YAML table entry."""
    if not isinstance(entry, dict):
        raise ValueError(f"Invalid grammar for {name}: expected dict, got {type(entry)}")

    extensions = entry.get("extensions") or []
    if not isinstance(extensions, list) or not extensions:
        raise ValueError(f"Invalid grammar for {name}: 'extensions' must be a non-empty list")

    pairs = []
    for pair in entry.get("multi_line") or []:
        if not isinstance(pair, (list, tuple)) or len(pair) != 2 or not all(pair):
            raise ValueError(f"Invalid grammar for {name}: bad multi_line pair {pair!r}")
        pairs.append((str(pair[0]), str(pair[1])))

    return LanguageGrammar(
        name=name,
        extensions=frozenset(str(ext).lower() for ext in extensions),
        single_line_prefixes=tuple(str(p) for p in entry.get("single_line") or []),
        multi_line_delimiters=tuple(pairs),
        shebang_hints=tuple(str(h) for h in entry.get("shebangs") or []),
    )


# Global default registry instance
_default_registry = LanguageRegistry.from_yaml(_DEFAULT_LANGUAGES_CONFIG)


def get_default_registry() -> LanguageRegistry:
    """Get the global default language registry."""
    return _default_registry
