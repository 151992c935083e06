"""Commands run before, after and around operations."""

from __future__ import annotations

import contextlib
import logging
import shlex
import subprocess
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

__all__ = ["HookError", "OnFailure", "CommandInput", "Hooks"]

log = logging.getLogger(__name__)

T = TypeVar("T")


class HookError(RuntimeError):
    """A hook command failed or could not be run."""


class OnFailure(str, Enum):
    """What to do when a hook command fails."""

    ERROR = "error"
    WARN = "warn"
    IGNORE = "ignore"


@dataclass(frozen=True)
class CommandInput:
    """An external command with its arguments."""

    command: str = ""
    args: tuple[str, ...] = ()
    on_failure: OnFailure = OnFailure.ERROR

    @classmethod
    def parse(cls, text: str) -> CommandInput:
        """Parse a shell-like command line."""
        try:
            parts = shlex.split(text)
        except ValueError as exc:
            raise HookError(f"cannot parse command {text!r}: {exc}") from exc
        if not parts:
            return cls()
        return cls(parts[0], tuple(parts[1:]))

    @classmethod
    def _from_value(cls, value: Any) -> CommandInput:
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, Mapping):
            unknown = set(value) - {"command", "args", "on-failure"}
            if unknown:
                raise ValueError(f"unknown command fields: {', '.join(sorted(unknown))}")
            base = cls.parse(value.get("command", ""))
            args = base.args + tuple(str(arg) for arg in value.get("args", ()))
            return cls(base.command, args, OnFailure(value.get("on-failure", "error")))
        raise ValueError(f"invalid command specification: {value!r}")

    def _to_value(self) -> str | dict[str, Any]:
        if self.on_failure is OnFailure.ERROR:
            return str(self)
        return {
            "command": self.command,
            "args": list(self.args),
            "on-failure": self.on_failure.value,
        }

    def is_set(self) -> bool:
        return bool(self.command)

    def __str__(self) -> str:
        return shlex.join([self.command, *self.args]) if self.command else ""

    def run(self, context: str, what: str) -> None:
        """Run the command; handle a failure as ``on_failure`` demands."""
        if not self.command:
            return
        log.debug("running %s hook for %s: %s", what, context, self)
        try:
            completed = subprocess.run([self.command, *self.args], check=False)
        except OSError as exc:
            self._fail(f"{what} hook for {context}: command {self} could not be started: {exc}")
            return
        if completed.returncode != 0:
            self._fail(
                f"{what} hook for {context}: command {self} "
                f"exited with status {completed.returncode}"
            )

    def _fail(self, message: str) -> None:
        if self.on_failure is OnFailure.ERROR:
            log.error("%s", message)
            raise HookError(message)
        if self.on_failure is OnFailure.WARN:
            log.warning("%s", message)


_KEYS = {
    "run-before": "before_commands",
    "run-after": "after_commands",
    "run-failed": "failed_commands",
    "run-finally": "finally_commands",
}


@dataclass
class Hooks:
    """Commands to run before, after, on failure of and finally after an operation."""

    before_commands: list[CommandInput] = field(default_factory=list)
    after_commands: list[CommandInput] = field(default_factory=list)
    failed_commands: list[CommandInput] = field(default_factory=list)
    finally_commands: list[CommandInput] = field(default_factory=list)
    context: str = field(default="", compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Hooks:
        unknown = set(data) - set(_KEYS)
        if unknown:
            raise ValueError(f"unknown hooks fields: {', '.join(sorted(unknown))}")
        values: dict[str, list[CommandInput]] = {}
        for key, attr in _KEYS.items():
            entries = data.get(key, [])
            if not isinstance(entries, list):
                raise ValueError(f"{key} must be a list of commands")
            values[attr] = [CommandInput._from_value(entry) for entry in entries]
        return cls(**values)

    def to_dict(self) -> dict[str, list[Any]]:
        return {
            key: [cmd._to_value() for cmd in getattr(self, attr)]
            for key, attr in _KEYS.items()
        }

    def merge(self, other: Hooks) -> None:
        """Append the commands of ``other`` after the own ones."""
        for attr in _KEYS.values():
            getattr(self, attr).extend(getattr(other, attr))

    def with_context(self, context: str) -> Hooks:
        return Hooks(
            list(self.before_commands),
            list(self.after_commands),
            list(self.failed_commands),
            list(self.finally_commands),
            context,
        )

    def _run_all(self, commands: list[CommandInput], what: str) -> None:
        for cmd in commands:
            cmd.run(self.context, what)

    def run_before(self) -> None:
        self._run_all(self.before_commands, "run-before")

    def run_after(self) -> None:
        self._run_all(self.after_commands, "run-after")

    def run_failed(self) -> None:
        self._run_all(self.failed_commands, "run-failed")

    def run_finally(self) -> None:
        self._run_all(self.finally_commands, "run-finally")

    def _cleanup_after_failure(self, *, failed: bool) -> None:
        if failed:
            with contextlib.suppress(Exception):
                self.run_failed()
        with contextlib.suppress(Exception):
            self.run_finally()

    def use_with(self, func: Callable[[], T]) -> T:
        """Call ``func`` surrounded by the hooks.

        Errors of the failed and finally hooks after a failure are not
        raised; the original error is.
        """
        try:
            self.run_before()
            result = func()
        except Exception:
            self._cleanup_after_failure(failed=True)
            raise
        try:
            self.run_after()
        except Exception:
            self._cleanup_after_failure(failed=False)
            raise
        self.run_finally()
        return result