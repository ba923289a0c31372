"""CQ code scanner.

Finds every well-formed ``[CQ:type,key=value,...]`` in free text. The
scanner never raises: malformed spans (unbalanced brackets, a stray
``[CQ:`` with no closing ``]``) are skipped and scanning resumes just
after the ``[`` that started the failed attempt.

Grammar of one code:
  "[CQ:" type ("," key "=" value)* "]"
  type:  one or more chars, not , [ ]
  key:   one or more chars, not , = [ ]
  value: zero or more chars, not , [ ]   (a second = is part of the value)

Codes are never nested and their content is never re-scanned.
"""

import enum
from typing import Iterator, Optional

from .code import CQCode
from .escape import unescape

_PREFIX = "[CQ:"


class _State(enum.Enum):
    TYPE = "type"
    KEY = "key"
    VALUE = "value"


def _scan_code(text: str, start: int) -> Optional[tuple[int, CQCode]]:
    """Try to read one code whose ``[CQ:`` prefix begins at `start`.

    Returns:
        (end, code) where end is the index just past the closing ``]``,
        or None when the text at `start` is not a well-formed code.
    """
    state = _State.TYPE
    mark = start + len(_PREFIX)
    code_type = ""
    key = ""
    pairs: list[tuple[str, str]] = []

    for i in range(mark, len(text)):
        ch = text[i]
        if ch == "[":
            return None

        if state is _State.TYPE:
            if ch not in ",]":
                continue
            if i == mark:
                return None
            code_type = text[mark:i]

        elif state is _State.KEY:
            if ch in ",]":
                return None
            if ch == "=":
                if i == mark:
                    return None
                key = text[mark:i]
                state = _State.VALUE
                mark = i + 1
            continue

        else:  # VALUE
            if ch not in ",]":
                continue
            pairs.append((key, text[mark:i]))

        # at a "," or "]" closing the type or a value
        if ch == "]":
            code = CQCode(code_type)
            for raw_key, raw_value in pairs:
                code.set(unescape(raw_key), unescape(raw_value))
            return i + 1, code
        state = _State.KEY
        mark = i + 1

    return None


def iter_codes(text: str) -> Iterator[tuple[int, int, CQCode]]:
    """Yield (start, end) spans and parsed codes, left to right.

    Args:
        text: Arbitrary chat text.

    Yields:
        Tuples of (start, end, code) with text[start:end] being the raw markup.
    """
    if not text:
        return
    pos = 0
    while True:
        start = text.find(_PREFIX, pos)
        if start < 0:
            return
        found = _scan_code(text, start)
        if found is None:
            pos = start + 1
            continue
        end, code = found
        yield start, end, code
        pos = end


def parse_all(text: str) -> list[CQCode]:
    """Extract all well-formed CQ codes from text in order of appearance."""
    return [code for _, _, code in iter_codes(text)]


def strip_codes(text: str) -> str:
    """Remove every well-formed CQ code from text, leaving the rest as is."""
    if not text:
        return text
    parts = []
    last_end = 0
    for start, end, _ in iter_codes(text):
        parts.append(text[last_end:start])
        last_end = end
    parts.append(text[last_end:])
    return "".join(parts)
