"""Ordered shell environment with the variable-assignment rules of ``export``."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


def _parse_assignment(var: str) -> tuple[str, str | None]:
    """Split ``KEY=VALUE`` at the first '='; no '=' means no value."""
    key, sep, value = var.partition("=")
    return key, (value if sep else None)


class Environment:
    """Variables in insertion order; a variable may exist without a value.

    A variable with no value is listed by ``export`` but not by ``env``.
    """

    def __init__(
        self,
        entries: Mapping[str, str | None] | Iterable[str] | None = None,
    ):
        self._vars: dict[str, str | None] = {}
        if entries is None:
            return
        if isinstance(entries, Mapping):
            for key, value in entries.items():
                self._vars[key] = value
        else:
            for entry in entries:
                key, value = _parse_assignment(entry)
                self._vars[key] = value

    def get(self, key: str) -> str | None:
        """Return the value of ``key``, or None if unset or without value."""
        return self._vars.get(key)

    def update_existing(self, key: str, value: str | None) -> bool:
        """Update ``key`` if it exists; return whether it was found.

        A ``value`` of None leaves an existing variable untouched. When
        ``key`` ends in '=' and no value is given, the first variable
        whose name starts with ``key`` minus its last character has its
        value cleared.
        """
        prefix = key[:-1] if "=" in key and value is None else None
        for name in self._vars:
            if name == key:
                if value is not None:
                    self._vars[name] = value
                return True
            if prefix is not None and name.startswith(prefix):
                self._vars[name] = None
                return True
        return False

    def add(self, var: str) -> None:
        """Apply an ``export`` argument such as ``KEY=VALUE``, ``KEY=`` or ``KEY``.

        With a non-empty value after the last '=', an existing variable
        takes the second '='-separated word as its value; otherwise a new
        variable is appended. Without one, an existing variable is kept
        (``KEY=`` clears its value) and a missing one is appended.
        """
        key, value = _parse_assignment(var)
        if not key:
            raise ValueError(f"not a valid identifier: {var!r}")
        last_eq = var.rfind("=")
        if last_eq >= 0 and len(var) - last_eq > 1:
            words = [word for word in var.split("=") if word]
            if self.update_existing(words[0], words[1]):
                return
            self._vars[key] = value
            return
        if not self.update_existing(var, None):
            self._vars[key] = value

    def unset(self, key: str) -> bool:
        """Remove ``key``; return whether it was present."""
        return self._vars.pop(key, _MISSING) is not _MISSING

    def items(self) -> list[tuple[str, str | None]]:
        """Return ``(key, value)`` pairs in order."""
        return list(self._vars.items())

    def __len__(self) -> int:
        return len(self._vars)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._vars))

    def __contains__(self, key: object) -> bool:
        return key in self._vars


_MISSING = object()