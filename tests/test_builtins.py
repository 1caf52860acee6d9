import io
import os

import pytest

from mshell.builtins import (
    ShellExit,
    cd,
    echo,
    env,
    exit_builtin,
    export,
    pwd,
    unset,
)
from mshell.environment import Environment


def _run_echo(args):
    out = io.StringIO()
    status = echo(args, out)
    return status, out.getvalue()


def test_echo_joins_arguments_with_newline():
    assert _run_echo(["hello", "world"]) == (0, "hello world\n")


def test_echo_no_arguments_prints_newline():
    assert _run_echo([]) == (0, "\n")


def test_echo_n_flag_suppresses_newline():
    assert _run_echo(["-n", "hi"]) == (0, "hi")


def test_echo_repeated_n_flags_are_all_consumed():
    assert _run_echo(["-nnn", "-n", "x"]) == (0, "x")


def test_echo_invalid_flag_is_printed():
    assert _run_echo(["-nx", "a"]) == (0, "-nx a\n")


def test_echo_flag_after_text_is_printed():
    assert _run_echo(["a", "-n"]) == (0, "a -n\n")


def test_echo_lone_dash_counts_as_flag():
    assert _run_echo(["-"]) == (0, "")


def test_echo_none_argument_keeps_separators():
    assert _run_echo(["a", None, "b"]) == (0, "a  b\n")


def test_env_prints_only_valued_variables():
    environment = Environment({"A": "1", "B": None, "C": "x=y"})
    out = io.StringIO()
    assert env(environment, out) == 0
    assert out.getvalue() == "A=1\nC=x=y\n"


def test_pwd_prints_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    assert pwd(out, io.StringIO()) == 0
    assert out.getvalue() == os.getcwd() + "\n"


def test_cd_changes_directory_and_updates_env(tmp_path, monkeypatch):
    sub = tmp_path / "sub"
    sub.mkdir()
    monkeypatch.chdir(tmp_path)
    before = os.getcwd()
    stale_dir = str(sub)
    environment = Environment({"PWD": before, "OLDPWD": stale_dir})
    assert cd(environment, ["sub"], io.StringIO()) == 0
    assert os.getcwd() == os.path.realpath(sub)
    assert environment.get("PWD") == os.getcwd()
    assert environment.get("OLDPWD") == before


def test_cd_does_not_add_missing_pwd_variables(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "d").mkdir()
    environment = Environment({})
    assert cd(environment, ["d"], io.StringIO()) == 0
    assert "PWD" not in environment
    assert "OLDPWD" not in environment


def test_cd_missing_directory_reports_error(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    err = io.StringIO()
    assert cd(Environment({}), ["nope"], err) == 1
    assert err.getvalue() == "Minishell: cd: nope: No such file or directory\n"
    assert os.getcwd() == os.path.realpath(tmp_path)


def test_cd_without_home_reports_not_set(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    err = io.StringIO()
    assert cd(Environment({}), [], err) == 1
    assert err.getvalue() == "Minishell: cd: HOME not set\n"


def test_cd_without_args_goes_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(tmp_path)
    environment = Environment({"HOME": str(home)})
    assert cd(environment, [], io.StringIO()) == 0
    assert os.getcwd() == os.path.realpath(home)


def test_cd_dash_uses_oldpwd(tmp_path, monkeypatch):
    other = tmp_path / "other"
    other.mkdir()
    monkeypatch.chdir(tmp_path)
    environment = Environment({"OLDPWD": str(other)})
    assert cd(environment, ["-"], io.StringIO()) == 0
    assert os.getcwd() == os.path.realpath(other)


def test_cd_dash_without_oldpwd_reports_not_set(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    err = io.StringIO()
    assert cd(Environment({}), ["-"], err) == 1
    assert err.getvalue() == "Minishell: cd: OLDPWD not set\n"


def test_cd_none_argument_does_nothing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert cd(Environment({}), [None], io.StringIO()) == 0
    assert os.getcwd() == os.path.realpath(tmp_path)


def test_export_without_args_lists_all():
    environment = Environment({"A": "1", "B": None})
    out = io.StringIO()
    assert export(environment, [], out, io.StringIO()) == 0
    assert out.getvalue() == 'declare -x A="1"\ndeclare -x B=""\n'


def test_export_adds_variable():
    environment = Environment({})
    assert export(environment, ["NAME=value"], io.StringIO(), io.StringIO()) == 0
    assert environment.get("NAME") == "value"


def test_export_replaces_existing_value():
    environment = Environment({"NAME": "old"})
    export(environment, ["NAME=new"], io.StringIO(), io.StringIO())
    assert environment.get("NAME") == "new"
    assert len(environment) == 1


@pytest.mark.parametrize("arg", ["1abc", "=x", " a", "", None])
def test_export_rejects_invalid_identifier(arg):
    environment = Environment({})
    out = io.StringIO()
    assert export(environment, [arg], out, io.StringIO()) == 1
    assert out.getvalue().endswith("': not a valid identifier\n")
    assert len(environment) == 0


def test_export_continues_after_invalid_identifier():
    environment = Environment({})
    out = io.StringIO()
    assert export(environment, ["9x", "OK=1"], out, io.StringIO()) == 1
    assert out.getvalue() == "Minishell: export: `9x': not a valid identifier\n"
    assert environment.get("OK") == "1"


def test_unset_removes_variable():
    environment = Environment({"A": "1", "B": "2"})
    assert unset(environment, ["A"], io.StringIO()) == 0
    assert list(environment) == ["B"]


@pytest.mark.parametrize("arg", ["1A", "A=1", None])
def test_unset_rejects_invalid_identifier(arg):
    environment = Environment({"A": "1"})
    out = io.StringIO()
    assert unset(environment, [arg], out) == 1
    assert out.getvalue().startswith("Minishell: unset: `")
    assert "A" in environment


def test_unset_on_empty_environment_reports_nothing():
    out = io.StringIO()
    assert unset(Environment({}), ["1A"], out) == 0
    assert out.getvalue() == ""


def test_exit_without_args_uses_last_status():
    out = io.StringIO()
    with pytest.raises(ShellExit) as info:
        exit_builtin([], 7, True, out, io.StringIO())
    assert info.value.code == 7
    assert out.getvalue() == "exit\n"


def test_exit_without_args_in_child_prints_nothing():
    out = io.StringIO()
    with pytest.raises(ShellExit) as info:
        exit_builtin([], 3, False, out, io.StringIO())
    assert info.value.code == 3
    assert out.getvalue() == ""


def test_exit_with_number():
    out = io.StringIO()
    with pytest.raises(ShellExit) as info:
        exit_builtin(["42"], 0, True, out, io.StringIO())
    assert info.value.code == 42
    assert out.getvalue() == "exit\n"


def test_exit_negative_wraps_to_byte():
    with pytest.raises(ShellExit) as info:
        exit_builtin(["-1"], 0, True, io.StringIO(), io.StringIO())
    assert info.value.code == 255


@pytest.mark.parametrize("arg", ["abc", "00", "+0", "-", "5-", "--5"])
def test_exit_non_numeric_argument(arg):
    err = io.StringIO()
    with pytest.raises(ShellExit) as info:
        exit_builtin([arg], 0, True, io.StringIO(), err)
    assert info.value.code == 255
    assert err.getvalue() == (
        f"exit\nMinishell: exit: {arg}: numeric argument required\n"
    )


def test_exit_none_argument():
    err = io.StringIO()
    with pytest.raises(ShellExit) as info:
        exit_builtin([None], 0, True, io.StringIO(), err)
    assert info.value.code == 255
    assert err.getvalue() == "exit\nMinishell: exit: : numeric argument required\n"


def test_exit_too_many_arguments_returns_error():
    err = io.StringIO()
    assert exit_builtin(["1", "2"], 0, True, io.StringIO(), err) == 1
    assert err.getvalue() == "exit\nMinishell: exit: too many arguments\n"


def test_exit_too_many_arguments_in_child():
    err = io.StringIO()
    assert exit_builtin(["1", "2"], 0, False, io.StringIO(), err) == 1
    assert err.getvalue() == "Minishell: exit: too many arguments\n"


def test_exit_zero_argument():
    with pytest.raises(ShellExit) as info:
        exit_builtin(["0"], 9, True, io.StringIO(), io.StringIO())
    assert info.value.code == 0