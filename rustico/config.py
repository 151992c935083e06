"""Configuration files, profiles and their merging."""

from __future__ import annotations

import copy
import logging
import os
import sys
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import platformdirs
import tomli_w

from .filtering import SnapshotFilter
from .hooks import Hooks
from .progress import ProgressOptions

__all__ = [
    "ConfigError",
    "GlobalOptions",
    "Config",
    "global_config_path",
    "get_config_paths",
]

_APP = "rustic"


class ConfigError(Exception):
    """A configuration file could not be read or is invalid."""


def global_config_path() -> Path | None:
    """The system-wide configuration directory, if there is one."""
    if sys.platform == "win32":
        program_data = os.environ.get("PROGRAMDATA")
        if program_data is None:
            return None
        return Path(program_data) / "rustic" / "config"
    return Path("/etc/rustic")


def get_config_paths(filename: str) -> list[Path]:
    """Candidate locations of a config file, in order of preference."""
    dirs = [
        platformdirs.user_config_path(_APP, appauthor=False),
        global_config_path(),
        Path("."),
    ]
    return [d / filename for d in dirs if d is not None]


def _fill_missing(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        if key not in target:
            target[key] = copy.deepcopy(value)
        elif isinstance(target[key], dict) and isinstance(value, Mapping):
            _fill_missing(target[key], value)


def _table(key: str, value: Any) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{key} must be a table")
    return dict(value)


_PROGRESS_KEYS = ("no-progress", "progress-interval")
_GLOBAL_KEYS = {
    "use-profiles",
    "dry-run",
    "check-index",
    "log-level",
    "log-file",
    "hooks",
    "env",
    *_PROGRESS_KEYS,
}


@dataclass
class GlobalOptions:
    """Options that apply to every command."""

    use_profiles: list[str] = field(default_factory=list)
    dry_run: bool = False
    check_index: bool = False
    log_level: str | None = None
    log_file: Path | None = None
    progress_options: ProgressOptions = field(default_factory=ProgressOptions)
    hooks: Hooks = field(default_factory=Hooks)
    env: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GlobalOptions:
        unknown = set(data) - _GLOBAL_KEYS
        if unknown:
            raise ValueError(f"unknown global fields: {', '.join(sorted(unknown))}")
        profiles = data.get("use-profiles", [])
        if not isinstance(profiles, list) or not all(isinstance(p, str) for p in profiles):
            raise ValueError("use-profiles must be a list of strings")
        env = _table("env", data.get("env", {}))
        log_level = data.get("log-level")
        log_file = data.get("log-file")
        return cls(
            use_profiles=list(profiles),
            dry_run=bool(data.get("dry-run", False)),
            check_index=bool(data.get("check-index", False)),
            log_level=None if log_level is None else str(log_level),
            log_file=None if log_file is None else Path(str(log_file)),
            progress_options=ProgressOptions.from_dict(
                {k: data[k] for k in _PROGRESS_KEYS if k in data}
            ),
            hooks=Hooks.from_dict(_table("hooks", data.get("hooks", {}))),
            env={str(k): str(v) for k, v in env.items()},
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "use-profiles": list(self.use_profiles),
            "dry-run": self.dry_run,
            "check-index": self.check_index,
        }
        if self.log_level is not None:
            result["log-level"] = self.log_level
        if self.log_file is not None:
            result["log-file"] = str(self.log_file)
        result.update(self.progress_options.to_dict())
        result["hooks"] = self.hooks.to_dict()
        result["env"] = dict(self.env)
        return result

    def merge(self, other: GlobalOptions) -> None:
        """Merge ``other`` in; own settings take precedence."""
        self.use_profiles.extend(other.use_profiles)
        self.dry_run = self.dry_run or other.dry_run
        self.check_index = self.check_index or other.check_index
        if self.log_level is None:
            self.log_level = other.log_level
        if self.log_file is None:
            self.log_file = other.log_file
        self.progress_options.merge(other.progress_options)
        self.hooks.merge(other.hooks)
        for key, value in other.env.items():
            self.env.setdefault(key, value)


_TOP_KEYS = {
    "global",
    "repository",
    "snapshot-filter",
    "backup",
    "copy",
    "forget",
    "mount",
    "webdav",
}


@dataclass
class Config:
    """The complete configuration."""

    global_options: GlobalOptions = field(default_factory=GlobalOptions)
    repository: dict[str, Any] = field(default_factory=dict)
    repository_hooks: Hooks = field(default_factory=Hooks)
    snapshot_filter: SnapshotFilter = field(default_factory=SnapshotFilter)
    backup: dict[str, Any] = field(default_factory=dict)
    copy: dict[str, Any] = field(default_factory=dict)
    forget: dict[str, Any] = field(default_factory=dict)
    mount: dict[str, Any] | None = None
    webdav: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Config:
        unknown = set(data) - _TOP_KEYS
        if unknown:
            raise ValueError(f"unknown config sections: {', '.join(sorted(unknown))}")
        repository = _table("repository", data.get("repository", {}))
        repo_hooks = Hooks.from_dict(_table("hooks", repository.pop("hooks", {})))
        return cls(
            global_options=GlobalOptions.from_dict(_table("global", data.get("global", {}))),
            repository=repository,
            repository_hooks=repo_hooks,
            snapshot_filter=SnapshotFilter.from_dict(
                _table("snapshot-filter", data.get("snapshot-filter", {}))
            ),
            backup=_table("backup", data.get("backup", {})),
            copy=_table("copy", data.get("copy", {})),
            forget=_table("forget", data.get("forget", {})),
            mount=None if "mount" not in data else _table("mount", data["mount"]),
            webdav=None if "webdav" not in data else _table("webdav", data["webdav"]),
        )

    @classmethod
    def from_toml(cls, text: str) -> Config:
        try:
            return cls.from_dict(tomllib.loads(text))
        except (ValueError, TypeError) as exc:
            raise ConfigError(f"invalid configuration: {exc}") from exc

    @classmethod
    def load_toml_file(cls, path: str | os.PathLike[str]) -> Config:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"I/O error reading {path}: {exc}") from exc
        try:
            return cls.from_toml(text)
        except ConfigError as exc:
            raise ConfigError(f"{path}: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "global": self.global_options.to_dict(),
            "repository": {
                **copy.deepcopy(self.repository),
                "hooks": self.repository_hooks.to_dict(),
            },
            "snapshot-filter": self.snapshot_filter.to_dict(),
            "backup": copy.deepcopy(self.backup),
            "copy": copy.deepcopy(self.copy),
            "forget": copy.deepcopy(self.forget),
        }
        if self.mount is not None:
            result["mount"] = copy.deepcopy(self.mount)
        if self.webdav is not None:
            result["webdav"] = copy.deepcopy(self.webdav)
        return result

    def to_toml(self) -> str:
        return tomli_w.dumps(self.to_dict())

    def __str__(self) -> str:
        try:
            return self.to_toml()
        except (TypeError, ValueError):
            return "<Error serializing config>"

    def merge(self, other: Config) -> None:
        """Merge ``other`` in; own settings take precedence."""
        self.global_options.merge(other.global_options)
        _fill_missing(self.repository, other.repository)
        self.repository_hooks.merge(other.repository_hooks)
        self.snapshot_filter.merge(other.snapshot_filter)
        _fill_missing(self.backup, other.backup)
        _fill_missing(self.copy, other.copy)
        _fill_missing(self.forget, other.forget)
        for name in ("mount", "webdav"):
            mine, theirs = getattr(self, name), getattr(other, name)
            if mine is None:
                setattr(self, name, copy.deepcopy(theirs))
            elif theirs is not None:
                _fill_missing(mine, theirs)

    def merge_profile(
        self, profile: str, logs: list[tuple[int, str]], level_missing: int
    ) -> None:
        """Merge the file ``<profile>.toml`` and, first, the profiles it uses.

        Messages are appended to ``logs`` as (logging level, text); a missing
        profile is reported at ``level_missing``, nested ones as warnings.
        """
        paths = get_config_paths(f"{profile}.toml")
        found = next((path for path in paths if path.exists()), None)
        if found is None:
            listing = ", ".join(str(path) for path in paths)
            logs.append(
                (level_missing, f"using no config file, none of these exist: {listing}")
            )
            return
        logs.append((logging.INFO, f"using config {found}"))
        try:
            resolved = found.resolve(strict=True)
        except OSError as exc:
            raise ConfigError(f"I/O error resolving {found}: {exc}") from exc
        config = Config.load_toml_file(resolved)
        for nested in list(config.global_options.use_profiles):
            config.merge_profile(nested, logs, logging.WARNING)
        self.merge(config)