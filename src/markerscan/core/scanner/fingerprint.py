"""
Stable identity for discovered markers.
"""

import hashlib


def compute_fingerprint(relative_path: str, line_number: int, marker_type: str, content: str) -> str:
    """
    Compute the SHA-256 fingerprint of a marker.

    The digest covers the path, line, type and content concatenated in that
    order, which is the layout stored fingerprints already use. The fields are
    joined without a separator, so distinct markers can collide (e.g. path
    "a.go" line 11 and path "a.go1" line 1). Do not use the fingerprint alone
    as a key; pair it with the relative path and line number.

    Returns:
        64-character lowercase hex digest
    """
    payload = f"{relative_path}{line_number}{marker_type}{content}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
