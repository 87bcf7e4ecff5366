"""Route pattern parsing: validation and parameter tags of URL rules."""

from __future__ import annotations

from enum import IntEnum

__all__ = [
    "ParamType",
    "is_valid_route",
    "get_parameter_tag",
    "is_parameter_tag_compatible",
    "tag_argument_types",
]


class ParamType(IntEnum):
    """Kind of a parameter placeholder in a route; the value is its tag digit."""

    INT = 1
    UINT = 2
    DOUBLE = 3
    STRING = 4
    PATH = 5

    @property
    def python_type(self) -> type:
        """The Python type a matched value of this kind is converted to."""
        return _PYTHON_TYPES[self]


_PYTHON_TYPES = {
    ParamType.INT: int,
    ParamType.UINT: int,
    ParamType.DOUBLE: float,
    ParamType.STRING: str,
    ParamType.PATH: str,
}

_PLACEHOLDERS = (
    ("<int>", ParamType.INT),
    ("<uint>", ParamType.UINT),
    ("<float>", ParamType.DOUBLE),
    ("<double>", ParamType.DOUBLE),
    ("<str>", ParamType.STRING),
    ("<string>", ParamType.STRING),
    ("<path>", ParamType.PATH),
)

_BASE = 6


def is_valid_route(url: str) -> bool:
    """Check that the angle brackets of a route are balanced and not nested."""
    depth = 0
    for char in url:
        if depth < 0 or depth >= 2:
            return False
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
    return depth == 0


def _placeholders(url: str):
    """Yield the parameter kind of every placeholder in *url*, left to right."""
    pos = url.find("<")
    while pos != -1:
        for token, kind in _PLACEHOLDERS:
            if url.startswith(token, pos):
                yield kind
                pos = url.find("<", pos + len(token) - 1)
                break
        else:
            raise ValueError("invalid parameter type")


def get_parameter_tag(url: str) -> int:
    """Encode the placeholders of *url* as a base-6 number, first one lowest."""
    tag = 0
    weight = 1
    for kind in _placeholders(url):
        tag += int(kind) * weight
        weight *= _BASE
    return tag


def is_parameter_tag_compatible(a: int, b: int) -> bool:
    """True when both tags describe the same number of parameters."""
    while True:
        if a == 0:
            return b == 0
        if b == 0:
            return False
        a //= _BASE
        b //= _BASE


def tag_argument_types(tag: int) -> tuple[type, ...]:
    """Python types of the handler arguments a parameter tag stands for."""
    if tag < 0:
        raise ValueError("parameter tag must not be negative")
    types = []
    while tag:
        tag, digit = divmod(tag, _BASE)
        if digit == 0:
            raise ValueError("parameter tag holds an empty slot")
        types.append(ParamType(digit).python_type)
    return tuple(types)