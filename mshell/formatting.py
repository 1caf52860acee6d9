"""A small printf family and stream writers."""

from __future__ import annotations

import sys
from typing import Any, TextIO

_DIGITS = "0123456789ABCDEF"
_NULL_TEXT = "(null)"


def _wrap_signed32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _wrap_unsigned32(value: int) -> int:
    return value & 0xFFFFFFFF


def convert_number(num: int, base: int, uppercase: bool = True) -> str:
    """Render a non-negative integer in ``base`` (2 to 16)."""
    if not 2 <= base <= 16:
        raise ValueError("base must be between 2 and 16")
    if num < 0:
        raise ValueError("number must not be negative")
    if num == 0:
        return "0"
    digits = []
    while num:
        num, rem = divmod(num, base)
        digits.append(_DIGITS[rem])
    text = "".join(reversed(digits))
    return text if uppercase else text.lower()


def _format_char(value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise ValueError("%c expects a single character")
        return value
    return chr(int(value) & 0xFF)


def _format_pointer(value: Any) -> str:
    address = value if isinstance(value, int) else id(value)
    return "0x" + convert_number(address, 16, uppercase=False)


def _format_one(conv: str, args: list[Any]) -> str:
    if conv == "%":
        return "%"
    if conv not in "csXxdiup":
        return ""
    if not args:
        raise TypeError(f"not enough arguments for %{conv}")
    value = args.pop(0)
    if conv == "c":
        return _format_char(value)
    if conv == "s":
        return _NULL_TEXT if value is None else str(value)
    if conv == "X":
        return convert_number(_wrap_unsigned32(value), 16, uppercase=True)
    if conv == "x":
        return convert_number(_wrap_unsigned32(value), 16, uppercase=False)
    if conv in "di":
        number = _wrap_signed32(value)
        sign = "-" if number < 0 else ""
        return sign + convert_number(abs(number), 10)
    if conv == "u":
        return convert_number(_wrap_unsigned32(value), 10)
    return _format_pointer(value)


def sprintf(fmt: str, *args: Any) -> str:
    """Format ``args`` by ``fmt`` with conversions c, s, x, X, d, i, u, p and %.

    An unknown conversion prints nothing; a lone trailing '%' ends output.
    """
    pending = list(args)
    parts: list[str] = []
    chars = iter(fmt)
    for ch in chars:
        if ch != "%":
            parts.append(ch)
            continue
        conv = next(chars, None)
        if conv is None:
            break
        parts.append(_format_one(conv, pending))
    return "".join(parts)


def printf(fmt: str, *args: Any) -> int:
    """Write the formatted text to standard output; return its length."""
    text = sprintf(fmt, *args)
    sys.stdout.write(text)
    return len(text)


def putnbr(n: int, stream: TextIO | None = None) -> None:
    """Write ``n`` in decimal to ``stream`` (standard output by default)."""
    (stream or sys.stdout).write(str(n))


def putendl(text: str | None, stream: TextIO | None = None) -> None:
    """Write ``text`` followed by a newline; None writes only the newline."""
    out = stream or sys.stdout
    if text is not None:
        out.write(text)
    out.write("\n")