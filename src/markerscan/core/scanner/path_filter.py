"""
Include/exclude filtering of paths relative to the scan root.

Patterns use shell-glob semantics restricted to one path segment: ``*`` and
``?`` never match ``/`` and there is no recursive ``**``. An exclude pattern
also matches any entry whose base name equals it exactly, so ``node_modules``
prunes every directory of that name at any depth.
"""

import logging
import re
from pathlib import PurePath

from .errors import InvalidGlobPatternError

logger = logging.getLogger(__name__)


def compile_glob(pattern: str) -> re.Pattern[str]:
    """
    Compile a glob into a regular expression matched against a whole path.

    Args:
        pattern: Glob pattern (e.g. 'src/*.go', 'build', '[!_]*.py')

    Returns:
        Compiled pattern; use ``fullmatch``

    Raises:
        InvalidGlobPatternError: If the pattern is empty or malformed
    """
    if not pattern:
        raise InvalidGlobPatternError(pattern, "pattern is empty")

    parts: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "*":
            parts.append("[^/]*")
        elif c == "?":
            parts.append("[^/]")
        elif c == "\\":
            if i >= n:
                raise InvalidGlobPatternError(pattern, "trailing backslash")
            parts.append(re.escape(pattern[i]))
            i += 1
        elif c == "[":
            char_class, i = _translate_class(pattern, i)
            parts.append(char_class)
        else:
            parts.append(re.escape(c))

    try:
        return re.compile("".join(parts), re.DOTALL)
    except re.error as e:
        raise InvalidGlobPatternError(pattern, str(e)) from e


def _translate_class(pattern: str, i: int) -> tuple[str, int]:
    """Translate a ``[...]`` class starting just after the bracket."""
    n = len(pattern)
    negate = i < n and pattern[i] in "!^"
    if negate:
        i += 1

    members: list[str] = []
    while True:
        if i >= n:
            raise InvalidGlobPatternError(pattern, "unterminated character class")
        c = pattern[i]
        i += 1
        if c == "]":
            break
        if c == "\\":
            if i >= n:
                raise InvalidGlobPatternError(pattern, "trailing backslash")
            members.append(re.escape(pattern[i]))
            i += 1
        elif c == "-" and members and i < n and pattern[i] != "]":
            members.append("-")
        else:
            members.append(re.escape(c))

    if not members:
        raise InvalidGlobPatternError(pattern, "empty character class")

    body = "".join(members)
    if negate:
        return f"[^/{body}]", i
    return f"[{body}]", i


def normalize_relative(path: PurePath | str) -> str:
    """Render a relative path with '/' separators and no leading './'."""
    text = PurePath(path).as_posix()
    while text.startswith("./"):
        text = text[2:]
    return "" if text == "." else text


class PathFilter:
    """
    Decides which directories are walked and which files are scanned.

    Rules, in order:
    1. The scan root itself is never excluded.
    2. Directories whose name starts with '.' are skipped.
    3. An entry whose base name equals an exclude pattern is skipped.
    4. An entry whose relative path matches an exclude glob is skipped.
    5. When include patterns exist, a file must match one of them.
       Directories are never pruned by include patterns.

    Patterns are compiled on construction so a bad pattern is reported once,
    before any file is touched.
    """

    def __init__(
        self,
        include_patterns: tuple[str, ...] | list[str] = (),
        exclude_patterns: tuple[str, ...] | list[str] = (),
    ):
        self._exclude_names = frozenset(exclude_patterns)
        self._exclude = [compile_glob(p) for p in exclude_patterns]
        self._include = [compile_glob(p) for p in include_patterns]

    def is_excluded(self, relative_path: PurePath | str, is_dir: bool = False) -> bool:
        """Check whether an entry is removed by the hidden-directory or exclude rules."""
        rel = normalize_relative(relative_path)
        if not rel:
            return False

        name = rel.rsplit("/", 1)[-1]
        if is_dir and name.startswith("."):
            return True
        if name in self._exclude_names:
            return True
        return any(p.fullmatch(rel) for p in self._exclude)

    def is_included(self, relative_path: PurePath | str) -> bool:
        """Check whether a file passes the include patterns (always true without any)."""
        if not self._include:
            return True
        rel = normalize_relative(relative_path)
        return any(p.fullmatch(rel) for p in self._include)

    def should_descend(self, relative_path: PurePath | str) -> bool:
        """Check whether the walker should enter a directory."""
        return not self.is_excluded(relative_path, is_dir=True)

    def should_scan(self, relative_path: PurePath | str) -> bool:
        """Check whether a file should be scanned; exclusion wins over inclusion."""
        if self.is_excluded(relative_path):
            return False
        return self.is_included(relative_path)
