"""Escaping for CQ code markup.

Two contexts:
  plain text:     & [ ] are replaced with HTML-style entities
  inside a code:  additionally , is escaped and a fixed set of
                   pictographs is replaced with a space, since they
                   are not accepted inside field values
"""

import re
from typing import Any

# Exact ranges accepted by existing renderers; do not widen.
_PICTOGRAPH_RE = re.compile(
    "["
    "\U0001F300-\U0001F3FF"
    "\U0001F400-\U0001F64F"
    "\U0001F680-\U0001F6FF"
    "\u2600-\u2B55"
    "]"
)


def escape(value: Any, inside_code: bool = False) -> Any:
    """Escape a value for embedding in CQ markup.

    Args:
        value: Value to escape. Non-string values are returned unchanged.
        inside_code: Use the stricter escaping for keys/values inside a code.

    Returns:
        Escaped string, or the original value when it is not a string.
    """
    if not isinstance(value, str):
        return value
    # & first, so the entities added below are not escaped again
    result = value.replace("&", "&amp;").replace("[", "&#91;").replace("]", "&#93;")
    if not inside_code:
        return result
    result = result.replace(",", "&#44;")
    return _PICTOGRAPH_RE.sub(" ", result)


def escape_inside_code(value: Any) -> Any:
    """Escape a key or value placed inside a CQ code."""
    return escape(value, inside_code=True)


def unescape(value: Any) -> Any:
    """Reverse `escape`. Non-string values are returned unchanged."""
    if not isinstance(value, str):
        return value
    return (
        value.replace("&#44;", ",")
        .replace("&#91;", "[")
        .replace("&#93;", "]")
        .replace("&amp;", "&")
    )
