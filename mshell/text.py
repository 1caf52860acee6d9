"""String helpers with C-string semantics: searching, splitting, trimming."""

from __future__ import annotations

from collections.abc import Callable
from itertools import zip_longest

_INT_BITS = 32
_INT_MIN = -(1 << (_INT_BITS - 1))
_INT_MAX = (1 << (_INT_BITS - 1)) - 1
_WHITESPACE = " \t\n\v\f\r"


def _to_int32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""
    value &= (1 << _INT_BITS) - 1
    if value > _INT_MAX:
        value -= 1 << _INT_BITS
    return value


def atoi(text: str) -> int:
    """Parse a leading decimal integer, wrapping like a 32-bit int.

    Leading whitespace is skipped and one optional sign is accepted.
    Parsing stops at the first non-digit; no digits yields 0.
    """
    rest = text.lstrip(_WHITESPACE)
    negative = False
    if rest[:1] in ("-", "+"):
        negative = rest[0] == "-"
        rest = rest[1:]
    digits = ""
    for ch in rest:
        if not "0" <= ch <= "9":
            break
        digits += ch
    result = _to_int32(int(digits)) if digits else 0
    return _to_int32(-result if negative else result)


def itoa(n: int) -> str:
    """Render a 32-bit signed integer as decimal text."""
    if not _INT_MIN <= n <= _INT_MAX:
        raise OverflowError(f"{n} does not fit in a 32-bit int")
    return str(n)


def split(text: str, sep: str) -> list[str]:
    """Split on a single separator character, dropping empty words."""
    if len(sep) != 1:
        raise ValueError("separator must be a single character")
    return [word for word in text.split(sep) if word]


def strtrim(text: str, chars: str) -> str:
    """Remove every character in ``chars`` from both ends of ``text``."""
    return text.strip(chars)


def substr(text: str, start: int, length: int) -> str:
    """Return at most ``length`` characters of ``text`` from ``start``."""
    if start < 0 or length < 0:
        raise ValueError("start and length must not be negative")
    if start >= len(text):
        return ""
    return text[start:start + length]


def strnstr(haystack: str, needle: str, length: int) -> str | None:
    """Find ``needle`` wholly inside the first ``length`` characters.

    Returns the rest of ``haystack`` from the match, ``haystack`` itself
    for an empty needle, or None when there is no match.
    """
    if not needle:
        return haystack
    if length <= 0:
        return None
    index = haystack[:length].find(needle)
    return haystack[index:] if index >= 0 else None


def strncmp(s1: str, s2: str, n: int) -> int:
    """Compare at most ``n`` characters; return the difference of the first mismatch."""
    if n <= 0:
        return 0
    for a, b in zip_longest(s1[:n], s2[:n], fillvalue="\0"):
        if a != b:
            return ord(a) - ord(b)
    return 0


def strchr(text: str, char: str) -> str | None:
    """Return ``text`` from the first ``char`` on, or None if absent.

    Searching for the NUL character finds the end of the string.
    """
    if char == "\0":
        return ""
    index = text.find(char)
    return text[index:] if index >= 0 else None


def strrchr(text: str, char: str) -> str | None:
    """Return ``text`` from the last ``char`` on, or None if absent."""
    if char == "\0":
        return ""
    index = text.rfind(char)
    return text[index:] if index >= 0 else None


def strmapi(text: str, func: Callable[[int, str], str]) -> str:
    """Build a new string by applying ``func(index, char)`` to every character."""
    return "".join(func(index, ch) for index, ch in enumerate(text))