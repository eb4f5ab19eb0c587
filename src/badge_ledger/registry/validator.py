"""Badge metadata URI validation."""

from typing import Any

MAX_URI_LENGTH = 256


def is_valid_uri(uri: Any, max_length: int = MAX_URI_LENGTH) -> bool:
    """Return True if uri is an ASCII string of 1..max_length characters.

    Pure check with no side effects. The registry calls it before every mint
    and URI update; batch mint uses it to decide which entries to skip.
    """
    if not isinstance(uri, str):
        return False
    if not uri.isascii():
        return False
    return 1 <= len(uri) <= max_length
