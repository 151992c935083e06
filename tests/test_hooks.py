import sys

import pytest

from rustico.hooks import CommandInput, HookError, Hooks, OnFailure

_RECORD = "import sys; open(sys.argv[1], 'a').write(sys.argv[2] + '\\n')"


def _recorder(path, label):
    return CommandInput(sys.executable, ("-c", _RECORD, str(path), label))


def _failing(on_failure=OnFailure.ERROR):
    return CommandInput(sys.executable, ("-c", "raise SystemExit(3)"), on_failure)


def _lines(path):
    return path.read_text().splitlines() if path.exists() else []


def _hooks(path, before=None, after=None):
    return Hooks(
        [before or _recorder(path, "before")],
        [after or _recorder(path, "after")],
        [_recorder(path, "failed")],
        [_recorder(path, "finally")],
    ).with_context("repository")


class Boom(Exception):
    pass


def test_parse_splits_like_a_shell():
    assert CommandInput.parse("echo 'a b' c") == CommandInput("echo", ("a b", "c"))


def test_parse_empty_is_unset():
    assert CommandInput.parse("   ").is_set() is False


def test_parse_rejects_unbalanced_quotes():
    with pytest.raises(HookError):
        CommandInput.parse("echo 'oops")


def test_str_round_trip():
    cmd = CommandInput("my tool", ("--flag", "a b"))
    assert CommandInput.parse(str(cmd)) == cmd


def test_dict_round_trip():
    hooks = Hooks(
        [CommandInput.parse("echo start")],
        [],
        [CommandInput("notify", ("x",), OnFailure.WARN)],
        [CommandInput.parse("echo end")],
    )
    assert Hooks.from_dict(hooks.to_dict()) == hooks


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError):
        Hooks.from_dict({"run-sometimes": ["echo"]})


def test_merge_appends_in_order():
    first = Hooks([CommandInput.parse("a")])
    first.merge(Hooks([CommandInput.parse("b")], [CommandInput.parse("c")]))
    assert first.before_commands == [CommandInput.parse("a"), CommandInput.parse("b")]
    assert first.after_commands == [CommandInput.parse("c")]


def test_with_context_copies():
    hooks = Hooks([CommandInput.parse("a")])
    copy = hooks.with_context("backup")
    copy.before_commands.append(CommandInput.parse("b"))
    assert copy.context == "backup"
    assert hooks.context == ""
    assert len(hooks.before_commands) == 1


def test_use_with_success_order(tmp_path):
    log = tmp_path / "log"
    assert _hooks(log).use_with(lambda: 42) == 42
    assert _lines(log) == ["before", "after", "finally"]


def test_use_with_function_failure(tmp_path):
    log = tmp_path / "log"

    def fail():
        raise Boom()

    with pytest.raises(Boom):
        _hooks(log).use_with(fail)
    assert _lines(log) == ["before", "failed", "finally"]


def test_use_with_before_failure_skips_function(tmp_path):
    log = tmp_path / "log"
    called = []
    with pytest.raises(HookError):
        _hooks(log, before=_failing()).use_with(lambda: called.append(1))
    assert called == []
    assert _lines(log) == ["failed", "finally"]


def test_use_with_after_failure_runs_finally(tmp_path):
    log = tmp_path / "log"
    with pytest.raises(HookError):
        _hooks(log, after=_failing()).use_with(lambda: 1)
    assert _lines(log) == ["before", "finally"]


def test_warn_failure_does_not_raise(tmp_path):
    log = tmp_path / "log"
    hooks = _hooks(log, before=_failing(OnFailure.WARN))
    assert hooks.use_with(lambda: "ok") == "ok"
    assert _lines(log) == ["after", "finally"]


def test_missing_program_raises(tmp_path):
    cmd = CommandInput(str(tmp_path / "does-not-exist"))
    with pytest.raises(HookError):
        cmd.run("repository", "run-before")