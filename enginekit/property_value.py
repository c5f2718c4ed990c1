"""Text values from property files and their typed views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

_STRIP_CHARS = str.maketrans("", "", " ()[];")
_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def _erase(text: str) -> str:
    return text.translate(_STRIP_CHARS)


def _tokens(text: str, sep: str) -> list[str]:
    return [t for t in text.split(sep) if t]


def _parse_float(text: str) -> float:
    return float(text.strip())


def _parse_int(text: str) -> int:
    return int(text.strip())


def _parse_bool(text: str) -> bool:
    word = text.strip().lower()
    if word in _TRUE:
        return True
    if word in _FALSE:
        return False
    raise ValueError(f"not a boolean: {text!r}")


def _format(value: Any) -> str:
    if isinstance(value, PropertyValue):
        return value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (tuple, list)):
        return "(" + ", ".join(_format(v) for v in value) + ")"
    return str(value)


@dataclass
class PropertyValue:
    """A single raw value; typed accessors raise ValueError on bad text."""

    value: str = ""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_value(cls, value: Any) -> PropertyValue:
        """A value holding the text form of a number, bool, string or tuple."""
        return cls(_format(value))

    def as_string(self) -> str:
        return self.value

    def as_float(self) -> float:
        return _parse_float(self.value)

    def as_int(self) -> int:
        return _parse_int(self.value)

    def as_bool(self) -> bool:
        return _parse_bool(self.value)

    def _components(self, count: int, parse: Callable[[str], Any], zero: Any) -> tuple:
        tokens = _tokens(_erase(self.value), ",")
        if len(tokens) < count:
            return (zero,) * count
        return tuple(parse(t) for t in tokens[:count])

    def as_float2(self) -> tuple[float, float]:
        return self._components(2, _parse_float, 0.0)

    def as_float3(self) -> tuple[float, float, float]:
        return self._components(3, _parse_float, 0.0)

    def as_float4(self) -> tuple[float, float, float, float]:
        return self._components(4, _parse_float, 0.0)

    def as_int2(self) -> tuple[int, int]:
        return self._components(2, _parse_int, 0)

    def as_int3(self) -> tuple[int, int, int]:
        return self._components(3, _parse_int, 0)

    def as_int4(self) -> tuple[int, int, int, int]:
        return self._components(4, _parse_int, 0)

    def as_bool2(self) -> tuple[bool, bool]:
        return self._components(2, _parse_bool, False)

    def as_bool3(self) -> tuple[bool, bool, bool]:
        return self._components(3, _parse_bool, False)

    def as_bool4(self) -> tuple[bool, bool, bool, bool]:
        return self._components(4, _parse_bool, False)

    def as_object(self) -> Optional[tuple[str, str]]:
        """The (type, name) of an ``Type(name);`` reference, or None."""
        tokens = _tokens(self.value, "(")
        if len(tokens) != 2:
            return None
        return _erase(tokens[0]), _erase(tokens[1])

    def set_as_object(self, object_type: str, object_name: str) -> None:
        self.value = f"{object_type}({object_name});"

    def matches_object(self, object_type: str, object_name: str) -> bool:
        return self.as_object() == (object_type, object_name)

    def or_default(self, default: Any, convert: Optional[Callable[[PropertyValue], Any]] = None) -> Any:
        """``default`` when the value is empty, else the converted value."""
        if not self.value:
            return default
        return self.value if convert is None else convert(self)