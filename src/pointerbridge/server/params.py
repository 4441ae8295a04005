"""Query string parsing for the automation routes.

Parameters are lenient: malformed numbers read as 0 and out-of-range
capture delays fall back to the default instead of failing the request.
"""

from __future__ import annotations

import re
from urllib.parse import unquote_plus

DEFAULT_CAPTURE_DELAY = 3
MAX_CAPTURE_DELAY = 30

_INT_RE = re.compile(r"[+-]?[0-9]+")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def parse_int(value: str | None) -> int:
    """Parse a decimal integer, returning 0 for missing or malformed input."""
    if value is None or not _INT_RE.fullmatch(value):
        return 0
    return int(value)


def parse_flag(value: str | None) -> bool:
    """Boolean query flags are set only by the literal '1'."""
    return value == "1"


def parse_delay(
    value: str | None,
    default: int = DEFAULT_CAPTURE_DELAY,
    maximum: int = MAX_CAPTURE_DELAY,
) -> int:
    """Parse a delay in seconds; values outside [0, maximum] are ignored."""
    if value is None or not _INT_RE.fullmatch(value):
        return default
    delay = int(value)
    if 0 <= delay <= maximum:
        return delay
    return default


def decode_text(value: str | None) -> str:
    """Apply one more URL-unescape pass to an already decoded parameter.

    Clients that double-encode text (``hello%2520world``) get the literal
    they meant. A stray '%' that is not a valid escape leaves the value
    untouched.
    """
    if not value:
        return ""
    if _BAD_ESCAPE_RE.search(value):
        return value
    return unquote_plus(value)
