# mshell

`mshell` holds the pieces a small POSIX-style shell is built from. It needs
nothing outside the standard library.

## Modules

- `mshell.environment` provides `Environment`, an ordered set of shell variables.
  A variable may exist without a value. `export` lists such a variable, but `env`
  does not. It has these methods:
  - `get(key)` returns the value of a variable.
  - `update_existing(key, value)` changes a variable only if it is already there.
  - `add(var)` applies one `export` argument such as `KEY=VALUE`, `KEY=` or `KEY`.
  - `unset(key)` removes a variable.
  - `items()` returns the variables in order.

  `len()`, iteration over the names and `in` also work on an `Environment`.
- `mshell.builtins` provides the builtin commands `echo`, `env`, `pwd`, `cd`,
  `export`, `unset` and `exit_builtin`. Each one takes its arguments as a list,
  without the command name. It writes to the streams you pass it, or to
  standard output and standard error when you pass none, and it returns its
  exit status. `exit_builtin` raises `ShellExit`, whose `code` attribute holds
  the exit status. There is one case where it does not raise: with too many
  arguments it reports an error and returns 1.
- `mshell.text` holds string helpers: `atoi`, `itoa`, `split`, `strtrim`,
  `substr`, `strnstr`, `strncmp`, `strchr`, `strrchr` and `strmapi`.
- `mshell.chars` holds ASCII classification and case conversion: `isalpha`,
  `isdigit`, `isalnum`, `isascii`, `isprint`, `toupper` and `tolower`.
- `mshell.formatting` holds `convert_number` and a small printf family. `sprintf`
  and `printf` accept the conversions `c s x X d i u p %`. It also has `putnbr`
  and `putendl`.
- `mshell.lines` provides `LineReader` and `read_lines`. They read a stream in
  chunks of a fixed size and return it one line at a time, with each newline
  kept.

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install .[test]
```

## Example

```python
import sys

from mshell.builtins import ShellExit, echo, env, exit_builtin, export
from mshell.environment import Environment

environment = Environment(["HOME=/home/user", "PATH=/usr/bin:/bin"])

export(environment, ["GREETING=hello"], sys.stdout, sys.stderr)
echo(["-n", environment.get("GREETING")], sys.stdout)   # prints "hello", no newline
env(environment, sys.stdout)   # HOME=..., PATH=..., GREETING=hello

try:
    exit_builtin(["42"], 0, True, sys.stdout, sys.stderr)
except ShellExit as stop:
    print("shell would exit with", stop.code)   # 42
```

The line reader:

```python
import io

from mshell.lines import read_lines

for line in read_lines(io.StringIO("first\nsecond\n"), 8):
    print(repr(line))   # 'first\n', then 'second\n'
```

## What it does not do

`mshell` is a library of parts and has no command of its own. It does not read
input at a prompt. It does not tokenize command lines, expand `$` variables or
quotes, or build a command tree. It does not handle pipes, redirections or
here-documents. It does not search `PATH` or start external programs. A program
that uses these parts has to supply all of that itself.

## Running the tests

```
pytest
```