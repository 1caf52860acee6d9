"""The shell's built-in commands: echo, env, pwd, cd, export, unset and exit.

Each built-in takes its arguments without the command name. An argument
may be None where an expansion produced nothing. Every built-in returns
its exit status; ``exit_builtin`` raises ShellExit to end the shell.
"""

from __future__ import annotations

import errno
import os
import sys
from collections.abc import Sequence
from typing import TextIO

from .environment import Environment

_PROMPT_NAME = "Minishell"
_WHITESPACE = " \t\n\v\f\r"
_LONG_BITS = 64


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with ``code``."""

    def __init__(self, code: int):
        super().__init__(code)
        self.code = code


def _out(stream: TextIO | None) -> TextIO:
    return sys.stdout if stream is None else stream


def _err(stream: TextIO | None) -> TextIO:
    return sys.stderr if stream is None else stream


def _is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _parse_long(text: str) -> int:
    """Parse a leading decimal integer, wrapping like a 64-bit long."""
    rest = text.lstrip(_WHITESPACE)
    negative = False
    if rest[:1] in ("-", "+"):
        negative = rest[0] == "-"
        rest = rest[1:]
    value = 0
    for ch in rest:
        if not _is_ascii_digit(ch):
            break
        value = value * 10 + ord(ch) - ord("0")
    if negative:
        value = -value
    value &= (1 << _LONG_BITS) - 1
    if value >= 1 << (_LONG_BITS - 1):
        value -= 1 << _LONG_BITS
    return value


def _is_n_flag(option: str | None) -> bool:
    """True for '-' followed only by 'n' characters (a lone '-' counts)."""
    return bool(option) and option[0] == "-" and option[1:].lstrip("n") == ""


def echo(args: Sequence[str | None], out: TextIO | None = None) -> int:
    """Print the arguments separated by spaces; leading ``-n`` flags drop the newline."""
    stream = _out(out)
    index = 0
    newline = True
    if args and args[0] is not None and args[0].startswith("-"):
        while index < len(args) and _is_n_flag(args[index]):
            newline = False
            index += 1
    stream.write(" ".join(arg or "" for arg in args[index:]))
    if newline:
        stream.write("\n")
    return 0


def env(environment: Environment, out: TextIO | None = None) -> int:
    """Print every variable that has a value as ``KEY=VALUE``."""
    stream = _out(out)
    for key, value in environment.items():
        if value is not None:
            stream.write(f"{key}={value}\n")
    return 0


def pwd(out: TextIO | None = None, err: TextIO | None = None) -> int:
    """Print the current working directory."""
    try:
        cwd = os.getcwd()
    except OSError:
        _err(err).write(f"{_PROMPT_NAME}: getcwd() error\n")
        return 1
    _out(out).write(cwd + "\n")
    return 0


def _not_set(key: str, err: TextIO) -> int:
    err.write(f"{_PROMPT_NAME}: cd: {key} not set\n")
    return 1


def _current_dir() -> str | None:
    try:
        return os.getcwd()
    except OSError:
        return None


def cd(
    environment: Environment,
    args: Sequence[str | None],
    err: TextIO | None = None,
) -> int:
    """Change directory to the argument, HOME without one, or OLDPWD for '-'.

    Existing PWD and OLDPWD variables are updated on success.
    """
    stream = _err(err)
    if args and args[0] is None:
        return 0
    if not args:
        target = environment.get("HOME")
        if target is None:
            return _not_set("HOME", stream)
    elif args[0] == "-":
        target = environment.get("OLDPWD")
        if target is None:
            return _not_set("OLDPWD", stream)
    else:
        target = args[0]
    old_path = _current_dir()
    try:
        os.chdir(target)
    except OSError as exc:
        if exc.errno == errno.EACCES:
            stream.write(f"{_PROMPT_NAME}: cd: {target}: Permission denied\n")
        elif exc.errno == errno.ENOENT:
            stream.write(
                f"{_PROMPT_NAME}: cd: {target}: No such file or directory\n"
            )
        return 1
    new_path = _current_dir()
    if new_path is None:
        stream.write(f"{_PROMPT_NAME}: getcwd\n")
        return 1
    environment.update_existing("PWD", new_path)
    environment.update_existing("OLDPWD", old_path)
    return 0


def _invalid_identifier(command: str, arg: str | None, stream: TextIO) -> None:
    stream.write(
        f"{_PROMPT_NAME}: {command}: `{arg or ''}': not a valid identifier\n"
    )


def _print_export(environment: Environment, stream: TextIO) -> None:
    for key, value in environment.items():
        shown = value if value is not None else ""
        stream.write(f'declare -x {key}="{shown}"\n')


def export(
    environment: Environment,
    args: Sequence[str | None],
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Set variables from ``KEY=VALUE`` arguments, or list them all without any."""
    stream = _out(out)
    if not args:
        _print_export(environment, stream)
        return 0
    status = 0
    for arg in args:
        if not arg or _is_ascii_digit(arg[0]) or arg[0] in (" ", "="):
            _invalid_identifier("export", arg, stream)
            status = 1
            continue
        try:
            environment.add(arg)
        except ValueError:
            _invalid_identifier("export", arg, _err(err))
            return 1
    return status


def unset(
    environment: Environment,
    args: Sequence[str | None],
    out: TextIO | None = None,
) -> int:
    """Remove the named variables; names with '=' or a leading digit are refused."""
    stream = _out(out)
    status = 0
    if len(environment) == 0:
        return status
    for arg in args:
        if arg is None or (arg and _is_ascii_digit(arg[0])) or "=" in arg:
            _invalid_identifier("unset", arg, stream)
            status = 1
        else:
            environment.unset(arg)
    return status


def _is_numeric_argument(arg: str) -> bool:
    index = 0
    while index < len(arg):
        if arg[index] in "+-":
            index += 1
        if (
            index >= len(arg)
            or not _is_ascii_digit(arg[index])
            or (arg != "0" and _parse_long(arg) == 0)
        ):
            return False
        index += 1
    return True


def exit_builtin(
    args: Sequence[str | None],
    last_status: int = 0,
    is_parent: bool = True,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """End the shell with the given code or ``last_status``.

    Raises ShellExit, except with too many arguments, where it reports
    the error and returns 1.
    """
    if not args:
        if is_parent:
            _out(out).write("exit\n")
        raise ShellExit(last_status)
    first = args[0]
    if first is None:
        _err(err).write(
            f"exit\n{_PROMPT_NAME}: exit: : numeric argument required\n"
        )
        raise ShellExit(255)
    if not _is_numeric_argument(first):
        _err(err).write(
            f"exit\n{_PROMPT_NAME}: exit: {first}: numeric argument required\n"
        )
        raise ShellExit(255)
    if len(args) > 1 and args[1] is not None:
        stream = _err(err)
        if is_parent:
            stream.write("exit\n")
        stream.write(f"{_PROMPT_NAME}: exit: too many arguments\n")
        return 1
    _out(out).write("exit\n")
    raise ShellExit(_parse_long(first) & 0xFF)