"""String and encoding helpers shared across the framework."""

from __future__ import annotations

import base64
import os
import secrets

__all__ = [
    "STANDARD_ALPHABET",
    "URLSAFE_ALPHABET",
    "base64encode",
    "base64encode_urlsafe",
    "base64decode",
    "sanitize_filename",
    "random_alphanum",
    "join_path",
    "string_equals",
    "trim",
]

STANDARD_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
URLSAFE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"

_ALPHANUM = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
_WHITESPACE = " \t\n\v\f\r"
_MAX_FILENAME = 255

# Windows device names (and directory traversal) checked at the start of a path segment.
_SPECIAL_ENTRIES = {
    "A": (("AUX", False),),
    "C": (("CON", False), ("COM", True)),
    "L": (("LPT", True),),
    "N": (("NUL", False),),
    "P": (("PRN", False),),
    ".": (("..", False),),
}
_SPECIAL_TERMINATORS = ".:/\\"
_FORBIDDEN_CHARS = frozenset('?<>:*|"')


def _to_bytes(data: bytes | bytearray | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def base64encode(data: bytes | bytearray | str, key: str = STANDARD_ALPHABET) -> str:
    """Encode *data* as padded base64 using the 64-character alphabet *key*."""
    if len(key) != 64:
        raise ValueError("base64 alphabet must have exactly 64 characters")
    encoded = base64.b64encode(_to_bytes(data)).decode("ascii")
    if key != STANDARD_ALPHABET:
        encoded = encoded.translate(str.maketrans(STANDARD_ALPHABET, key))
    return encoded


def base64encode_urlsafe(data: bytes | bytearray | str) -> str:
    """Encode *data* as padded base64 with the URL-safe alphabet."""
    return base64encode(data, URLSAFE_ALPHABET)


def _b64_value(char: str) -> int:
    if "A" <= char <= "Z":
        return ord(char) - ord("A")
    if "a" <= char <= "z":
        return ord(char) - ord("a") + 26
    if "0" <= char <= "9":
        return ord(char) - ord("0") + 52
    if char in "+-":
        return 62
    if char in "/_":
        return 63
    return 0


def _decoded_size(text: str) -> int:
    n = len(text)
    if n % 4 == 2:
        size = n // 4 * 3 + 1
    elif n % 4 == 3:
        size = n // 4 * 3 + 2
    elif n >= 2 and text[-2] == "=":
        size = n // 4 * 3 - 2
    elif n >= 1 and text[-1] == "=":
        size = n // 4 * 3 - 1
    else:
        size = n // 4 * 3
    return max(size, 0)


def base64decode(data: bytes | bytearray | str) -> bytes:
    """Decode base64 text, accepting both the standard and URL-safe alphabets.

    Padding is optional; characters outside the alphabets count as zero.
    """
    text = data.decode("latin-1") if isinstance(data, (bytes, bytearray)) else data
    size = _decoded_size(text)
    values = (_b64_value(char) for char in text)
    out = bytearray()

    while size >= 3:
        first, second, third, fourth = (next(values) for _ in range(4))
        out.append((first << 2) | ((second & 0x30) >> 4))
        out.append(((second & 0x0F) << 4) | ((third & 0x3C) >> 2))
        out.append(((third & 0x03) << 6) | fourth)
        size -= 3

    if size == 2:
        first, second, third = (next(values) for _ in range(3))
        out.append((first << 2) | ((second & 0x30) >> 4))
        out.append(((second & 0x0F) << 4) | ((third & 0x3C) >> 2))
    elif size == 1:
        first, second = (next(values) for _ in range(2))
        out.append((first << 2) | ((second & 0x30) >> 4))
    return bytes(out)


def _ascii_upper(char: str) -> str:
    return chr(ord(char) - 32) if "a" <= char <= "z" else char


def _neutralize_special(chars: list[str], start: int, pattern: str, with_number: bool, replacement: str) -> None:
    pos = start
    for expected in pattern:
        if pos >= len(chars) or _ascii_upper(chars[pos]) != expected:
            return
        pos += 1
    if with_number:
        if pos >= len(chars) or not "1" <= chars[pos] <= "9":
            return
        pos += 1
    if pos >= len(chars) or chars[pos] in _SPECIAL_TERMINATORS:
        chars[start:pos] = [replacement]


def sanitize_filename(data: str, replacement: str = "_") -> str:
    """Return a copy of *data* that is safe to use as a relative file path.

    The name is cut to 255 characters; control and reserved characters,
    a leading slash, ``..`` segments and Windows device names are replaced.
    """
    if len(replacement) != 1:
        raise ValueError("replacement must be a single character")
    chars = list(data[:_MAX_FILENAME])
    check_special = True
    pos = 0
    while pos < len(chars):
        if check_special:
            check_special = False
            for pattern, with_number in _SPECIAL_ENTRIES.get(_ascii_upper(chars[pos]), ()):
                _neutralize_special(chars, pos, pattern, with_number, replacement)

        char = chars[pos]
        code = ord(char)
        if code < 0x20 or 0x80 <= code <= 0x9F or char in _FORBIDDEN_CHARS:
            chars[pos] = replacement
        elif char in "/\\":
            if pos == 0:
                chars[pos] = replacement
            else:
                check_special = True
        pos += 1
    return "".join(chars)


def random_alphanum(size: int) -> str:
    """Return *size* random ASCII letters and digits."""
    if size < 0:
        raise ValueError("size must not be negative")
    return "".join(secrets.choice(_ALPHANUM) for _ in range(size))


def join_path(path: str, fname: str) -> str:
    """Join a directory and a file name."""
    return os.path.join(path, fname)


def string_equals(left: str, right: str, case_sensitive: bool = False) -> bool:
    """Compare two strings; ASCII case is ignored unless *case_sensitive*."""
    if len(left) != len(right):
        return False
    if case_sensitive:
        return left == right
    return all(_ascii_upper(a) == _ascii_upper(b) for a, b in zip(left, right))


def trim(value: str) -> str:
    """Return *value* without leading and trailing whitespace."""
    return value.strip(_WHITESPACE)