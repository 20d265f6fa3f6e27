"""Exception types for the marker scanner."""


class ScanError(Exception):
    """Base exception for marker scanning errors."""

    pass


class InvalidGlobPatternError(ScanError, ValueError):
    """A configured include/exclude pattern is not a valid glob.

    Raised once, when the scan configuration is validated, never per file.
    """

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid glob pattern {pattern!r}: {reason}")


class SkippedFileError(ScanError):
    """A file was deliberately left out of the scan (soft skip)."""

    pass


class SizeLimitExceededError(SkippedFileError):
    """File is larger than the configured size limit."""

    def __init__(self, size_bytes: int, limit_bytes: int):
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(f"file is {size_bytes} bytes, limit is {limit_bytes}")


class BinaryContentError(SkippedFileError):
    """File looks binary (NUL byte in its first line)."""

    pass
