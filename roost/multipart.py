"""Parsing and serialising of ``multipart/*`` message bodies."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from multidict import CIMultiDict

__all__ = [
    "CRLF",
    "DEFAULT_CONTENT_TYPE",
    "Header",
    "Part",
    "Message",
    "get_header_object",
]

CRLF = "\r\n"
_DASHES = "--"
_CONTENT_TYPE_PREFIX = "multipart/form-data; boundary="
DEFAULT_CONTENT_TYPE = _CONTENT_TYPE_PREFIX + "CROW-BOUNDARY"


@dataclass
class Header:
    """One header of a part: its main value and its ``key=value`` parameters."""

    value: str = ""
    params: dict[str, str] = field(default_factory=dict)

    def __int__(self) -> int:
        return int(self.value)

    def __float__(self) -> float:
        return float(self.value)


def get_header_object(headers: Mapping[str, Header], key: str) -> Header:
    """Return the first header stored under *key*, or an empty header."""
    found = headers.get(key)
    return found if found is not None else Header()


@dataclass
class Part:
    """One section of a multipart message: its headers and its body."""

    headers: CIMultiDict = field(default_factory=CIMultiDict)
    body: str = ""

    def __int__(self) -> int:
        return int(self.body)

    def __float__(self) -> float:
        return float(self.body)

    def get_header_object(self, key: str) -> Header:
        """Return the header stored under *key* (case-insensitive), or an empty one."""
        return get_header_object(self.headers, key)


def _part_name(part: Part) -> str:
    disposition = part.get_header_object("Content-Disposition")
    try:
        return disposition.params["name"]
    except KeyError:
        raise ValueError("multipart section has no name parameter") from None


def _unquote(text: str, excess: str = '"') -> str:
    if len(text) > 1 and text[0] == excess and text[-1] == excess:
        return text[1:-1]
    return text


def _split_first(text: str, separator: str) -> tuple[str, str]:
    """Split at the first *separator*; the rest is empty when it is absent."""
    head, _, rest = text.partition(separator)
    return head, rest


def _parse_header_line(line: str) -> tuple[str, Header]:
    header = Header()
    key = ""
    if line:
        main, line = _split_first(line, "; ")
        split = main.find(": ")
        if split >= 0:
            key, header.value = main[:split], main[split + 2 :]
        else:
            key, header.value = main, main[1:]
    while line:
        param, line = _split_first(line, "; ")
        split = param.find("=")
        if split >= 0:
            name, value = param[:split], param[split + 1 :]
        else:
            name, value = param, param
        header.params.setdefault(name, _unquote(value))
    return key, header


def _parse_section_head(lines: str) -> CIMultiDict:
    headers: CIMultiDict = CIMultiDict()
    while lines:
        line, lines = _split_first(lines, CRLF)
        key, header = _parse_header_line(line)
        headers.add(key, header)
    return headers


def _parse_section(section: str) -> Part:
    found = section.find(CRLF + CRLF)
    if found >= 0:
        head, rest = section[: found + 2], section[found + 4 :]
    else:
        head, rest = section, ""
    body = rest[:-2] if len(rest) >= 2 else rest
    return Part(headers=_parse_section_head(head), body=body)


def _parse_body(body: str, boundary: str) -> list[Part]:
    delimiter = _DASHES + boundary
    parts = []
    while body != CRLF:
        found = body.find(delimiter)
        if found < 0:
            # No further delimiter: the rest is ill-formed and ignored.
            break
        section = body[:found]
        body = body[found + len(delimiter) + 2 :]
        if section:
            parts.append(_parse_section(section))
    return parts


def _boundary_from(content_type: str) -> str:
    marker = "boundary="
    found = content_type.find(marker)
    if found < 0:
        return ""
    boundary = content_type[found + len(marker) :]
    if boundary.startswith('"'):
        boundary = boundary[1:-1]
    return boundary


class Message:
    """A parsed multipart message with its parts, also reachable by name."""

    def __init__(
        self,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] = (),
        boundary: str = "",
        parts: Iterable[Part] = (),
    ) -> None:
        self.headers: CIMultiDict = CIMultiDict(headers)
        self.boundary = boundary
        self.parts: list[Part] = list(parts)
        self.content_type = _CONTENT_TYPE_PREFIX + boundary if boundary else DEFAULT_CONTENT_TYPE
        self.part_map: CIMultiDict = CIMultiDict()
        for part in self.parts:
            self.part_map.add(_part_name(part), part)

    @classmethod
    def from_request(cls, headers: Mapping[str, str] | Iterable[tuple[str, str]], body: str) -> Message:
        """Parse a request body using the boundary from its Content-Type header."""
        header_map: CIMultiDict = CIMultiDict(headers)
        boundary = _boundary_from(header_map.get("Content-Type", ""))
        return cls(header_map, boundary, _parse_body(body, boundary))

    def get_header_value(self, key: str) -> str:
        """Value of a message header, or an empty string."""
        return self.headers.get(key, "")

    def get_part_by_name(self, name: str) -> Part:
        """The first part whose name parameter is *name*, or an empty part."""
        found = self.part_map.get(name)
        return found if found is not None else Part()

    def dump(self) -> str:
        """Serialise all parts with their delimiters, without message headers."""
        delimiter = _DASHES + self.boundary
        sections = "".join(delimiter + CRLF + self.dump_part(index) for index in range(len(self.parts)))
        return sections + delimiter + _DASHES + CRLF

    def dump_part(self, index: int) -> str:
        """Serialise the headers and body of one part."""
        part = self.parts[index]
        lines = []
        for key, header in part.headers.items():
            params = "".join(f'; {name}="{value}"' for name, value in header.params.items())
            lines.append(f"{key}: {header.value}{params}{CRLF}")
        return "".join(lines) + CRLF + part.body + CRLF

    def __str__(self) -> str:
        return self.dump()