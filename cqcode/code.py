"""CQ code entity — a type name plus an ordered set of fields."""

import math
from typing import Any, Iterable, Iterator, Mapping, Optional

from .escape import escape_inside_code


def _wire_value(value: Any) -> str:
    """Text form of a field value, matching what existing renderers emit.

    Booleans are lowercase and whole-number floats drop the trailing .0.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(escape_inside_code(value))


class CQCode:
    """A single inline code such as ``[CQ:image,file=a.png]``.

    Fields keep insertion order so serialization is deterministic.
    Setting an existing key overwrites the value in place. Fields whose
    value is None are skipped when serializing.
    """

    def __init__(self, type: str, data: Optional[Mapping[str, Any]] = None):
        self.type = type
        self._entries: list[list[Any]] = []
        self._index: dict[str, int] = {}
        if data:
            self.mset(data)

    def get(self, key: str) -> Any:
        pos = self._index.get(key)
        if pos is None:
            return None
        return self._entries[pos][1]

    def set(self, key: str, value: Any) -> "CQCode":
        pos = self._index.get(key)
        if pos is None:
            self._index[key] = len(self._entries)
            self._entries.append([key, value])
        else:
            self._entries[pos][1] = value
        return self

    def mset(self, data: Mapping[str, Any]) -> "CQCode":
        for key, value in data.items():
            self.set(key, value)
        return self

    def delete(self, key: str) -> "CQCode":
        pos = self._index.pop(key, None)
        if pos is not None:
            del self._entries[pos]
            self._index = {k: i for i, (k, _) in enumerate(self._entries)}
        return self

    def pick(self, keys: Iterable[str]) -> dict[str, Any]:
        """Return the requested fields that are currently set.

        Missing keys are left out of the result rather than mapped to None.
        """
        return {key: self.get(key) for key in keys if key in self._index}

    def items(self) -> list[tuple[str, Any]]:
        return [(key, value) for key, value in self._entries]

    def serialize(self) -> str:
        """Render as ``[CQ:type,key=value,...]`` with inside-code escaping."""
        parts = [f"CQ:{self.type}"]
        for key, value in self._entries:
            if value is None:
                continue
            parts.append(f"{escape_inside_code(key)}={_wire_value(value)}")
        return "[" + ",".join(parts) + "]"

    @classmethod
    def from_text(cls, text: str) -> list["CQCode"]:
        """Parse every well-formed code in text."""
        from .parser import parse_all
        return parse_all(text)

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f"CQCode({self.type!r}, {dict(self.items())!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CQCode):
            return NotImplemented
        return self.serialize() == other.serialize()

    __hash__ = None  # mutable

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[str]:
        return iter([key for key, _ in self._entries])
