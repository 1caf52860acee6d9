"""ASCII character classification and case conversion.

Every function accepts either a one-character string or an integer
character code. The case converters return a value of the same kind
they were given.
"""

from __future__ import annotations


def _code(c: str | int) -> int:
    """Return the integer code of ``c``."""
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError("expected a single character")
        return ord(c)
    if isinstance(c, int):
        return c
    raise TypeError(f"expected str or int, got {type(c).__name__}")


def isalpha(c: str | int) -> bool:
    """True for an ASCII letter."""
    code = _code(c)
    return ord("A") <= code <= ord("Z") or ord("a") <= code <= ord("z")


def isdigit(c: str | int) -> bool:
    """True for an ASCII decimal digit."""
    return ord("0") <= _code(c) <= ord("9")


def isalnum(c: str | int) -> bool:
    """True for an ASCII letter or digit."""
    return isalpha(c) or isdigit(c)


def isascii(c: str | int) -> bool:
    """True for a code in the 7-bit ASCII range."""
    return 0 <= _code(c) <= 127


def isprint(c: str | int) -> bool:
    """True for a printable ASCII character, space included."""
    return 32 <= _code(c) <= 126


def _convert(c: str | int, low: str, high: str, shift: int) -> str | int:
    code = _code(c)
    if ord(low) <= code <= ord(high):
        code += shift
    return chr(code) if isinstance(c, str) else code


def toupper(c: str | int) -> str | int:
    """Map an ASCII lowercase letter to uppercase; leave anything else."""
    return _convert(c, "a", "z", ord("A") - ord("a"))


def tolower(c: str | int) -> str | int:
    """Map an ASCII uppercase letter to lowercase; leave anything else."""
    return _convert(c, "A", "Z", ord("a") - ord("A"))