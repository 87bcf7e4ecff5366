"""Parsing of URL query strings into key/value pairs, lists and dictionaries."""

from __future__ import annotations

__all__ = [
    "MAX_KEY_VALUE_PAIRS",
    "qs_decode",
    "qs_scanvalue",
    "QueryString",
]

MAX_KEY_VALUE_PAIRS = 256

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_NON_QS_CHARS = frozenset("=#&\0")


def _char_at(text: str, pos: int) -> str:
    """Character at *pos*, or NUL past the end of *text*."""
    return text[pos] if 0 <= pos < len(text) else "\0"


def _is_qs_char(char: str) -> bool:
    return char not in _NON_QS_CHARS


def _is_hex(char: str) -> bool:
    return char in _HEX_DIGITS


def _next_unit(text: str, pos: int) -> tuple[int, int]:
    """Decode one unit of *text* at *pos*; return its code and the next position.

    A code of 0 marks the end of a key or value.
    """
    char = _char_at(text, pos)
    pos += 1
    if not _is_qs_char(char):
        return 0, pos
    if char == "+":
        return ord(" "), pos
    if char == "%":
        high, low = _char_at(text, pos), _char_at(text, pos + 1)
        pos += 2
        if _is_hex(high) and _is_hex(low):
            return int(high + low, 16), pos
        return 0, pos
    return ord(char), pos


def _matches(key: str, entry: str) -> bool:
    """True when *entry* starts with *key*, comparing both sides URL-decoded."""
    key_pos = entry_pos = 0
    for _ in range(len(key)):
        key_unit, key_pos = _next_unit(key, key_pos)
        entry_unit, entry_pos = _next_unit(entry, entry_pos)
        if key_unit != entry_unit:
            return False
        if key_unit == 0:
            return True
    return not _is_qs_char(_char_at(entry, entry_pos))


def qs_decode(text: str) -> str:
    """URL-decode *text* up to the first ``=``, ``#`` or ``&``.

    ``+`` becomes a space and ``%XX`` a byte; a malformed escape ends the value.
    """
    out = bytearray()
    pos = 0
    while _is_qs_char(_char_at(text, pos)):
        char = text[pos]
        if char == "+":
            out += b" "
        elif char == "%":
            high, low = _char_at(text, pos + 1), _char_at(text, pos + 2)
            if not (_is_hex(high) and _is_hex(low)):
                break
            out.append(int(high + low, 16))
            pos += 2
        else:
            out += char.encode("utf-8")
        pos += 1
    return bytes(out).split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _decode_segment(segment: str) -> str:
    """Decode the value part of one ``key=value`` segment, keeping the key raw."""
    for pos, char in enumerate(segment):
        if char in "=#":
            return segment[: pos + 1] + qs_decode(segment[pos + 1 :])
    return segment


def _value_of(entry: str) -> str:
    eq = entry.find("=")
    return entry[eq + 1 :] if eq >= 0 else ""


def _dict_item(entry: str) -> tuple[str, str] | None:
    """Split ``name[key]=value`` into ``(key, value)``, or None if malformed."""
    end = len(entry)
    eq = entry.find("=")
    value_start = eq + 1 if eq >= 0 else end
    open_ = entry.find("[")
    open_ = open_ + 1 if open_ >= 0 else end
    close = entry.find("]")
    close = close if close >= 0 else end
    if open_ <= close and open_ > 0 and close > 0:
        return entry[open_:close], entry[value_start:]
    return None


def qs_scanvalue(key: str, qs: str) -> str | None:
    """Look up *key* in the raw query string *qs* without parsing it first.

    Returns the decoded value, an empty string for a key without value,
    or None when the key is absent.
    """
    question = qs.find("?")
    if question >= 0:
        qs = qs[question + 1 :]

    pos = 0
    while pos < len(qs) and qs[pos] != "#":
        if _matches(key, qs[pos:]):
            break
        amp = qs.find("&", pos)
        pos = (amp if amp >= 0 else len(qs)) + 1

    if pos >= len(qs):
        return None

    rest = qs[pos:]
    stop = next((i for i, char in enumerate(rest) if char in "=&#"), len(rest))
    if _char_at(rest, stop) == "=":
        return qs_decode(rest[stop + 1 :])
    return ""


class QueryString:
    """Key/value pairs taken from the part of a URL after ``?``.

    Keys are kept as written; values are URL-decoded. Lookups decode both sides.
    """

    def __init__(self, params: str = "", parse_url: bool = True) -> None:
        self._pairs: list[str] = []
        if not params:
            return
        text = params.split("\0", 1)[0]
        if parse_url:
            cuts = [i for i in (text.find("?"), text.find("#")) if i >= 0]
            if not cuts:
                return
            text = text[min(cuts) + 1 :]
        segments = text.split("&")[:MAX_KEY_VALUE_PAIRS]
        self._pairs = [_decode_segment(segment) for segment in segments]

    def _values(self, name: str):
        return (_value_of(entry) for entry in self._pairs if _matches(name, entry))

    def get(self, name: str) -> str | None:
        """Value of the first ``name=value`` pair, or None."""
        return next(self._values(name), None)

    def pop(self, name: str) -> str | None:
        """Like :meth:`get`, and remove that pair from the query string."""
        value = self.get(name)
        if value is not None:
            prefix = name + "="
            for index, entry in enumerate(self._pairs):
                if entry.startswith(prefix):
                    del self._pairs[index]
                    break
        return value

    def get_list(self, name: str, use_brackets: bool = True) -> list[str]:
        """All values of ``name[]=value`` (or ``name=value``) pairs, in order."""
        key = name + "[]" if use_brackets else name
        return list(self._values(key))

    def pop_list(self, name: str, use_brackets: bool = True) -> list[str]:
        """Like :meth:`get_list`, and remove those pairs."""
        values = self.get_list(name, use_brackets)
        if values:
            prefix = name + ("[]=" if use_brackets else "=")
            self._pairs = [entry for entry in self._pairs if not entry.startswith(prefix)]
        return values

    def get_dict(self, name: str) -> dict[str, str]:
        """Values of ``name[key]=value`` pairs by key; the first of a key wins."""
        result: dict[str, str] = {}
        for entry in self._pairs:
            if not entry.startswith(name):
                continue
            item = _dict_item(entry)
            if item is None:
                break
            result.setdefault(*item)
        return result

    def pop_dict(self, name: str) -> dict[str, str]:
        """Like :meth:`get_dict`, and remove those pairs."""
        result = self.get_dict(name)
        if result:
            prefix = name + "["
            self._pairs = [entry for entry in self._pairs if not entry.startswith(prefix)]
        return result

    def keys(self) -> list[str]:
        """Raw keys of all pairs, in order."""
        return [entry.split("=", 1)[0] for entry in self._pairs]

    def clear(self) -> None:
        """Remove every pair."""
        self._pairs.clear()

    def __str__(self) -> str:
        return "[ " + ", ".join(self._pairs) + " ]"