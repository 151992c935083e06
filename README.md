# rustico

Building blocks for a snapshot-based backup tool: configuration profiles,
snapshot filtering, hooks, progress reporting and the state logic of
terminal widgets.

## Modules

- **`rustico.config`**: `Config` and `GlobalOptions` are read from TOML
  (`Config.from_toml`, `Config.load_toml_file`), written back
  (`Config.to_toml`, `Config.to_dict`) and merged (`Config.merge`), with the
  settings already present taking precedence. `Config.merge_profile(profile,
  logs, level_missing)` looks for `<profile>.toml` in the user configuration
  directory, the system-wide directory (`global_config_path()`) and the
  current directory, in that order, and uses the first that exists. Profiles
  named in `use-profiles` inside that file are merged first, recursively.
  Messages are appended to `logs` as `(logging level, text)` pairs. Errors
  are raised as `ConfigError`. Sections other than `global`, `repository`,
  `snapshot-filter` and the `hooks` inside them are kept as plain
  dictionaries.
- **`rustico.filtering`**: `SnapshotFilter.matches(snapshot)` checks a
  `Snapshot` by host, label, paths, tags (`StringList`), time window
  (`AfterDate`, `BeforeDate`, parsed with `python-dateutil`) and size
  (`SizeRange`, e.g. `"1 MB .. 1 GiB"`). `filter_fn` may be set to a Python
  callable that takes a `Snapshot` and returns a bool.
- **`rustico.hooks`**: `Hooks` holds `CommandInput` commands to run before
  an operation, after it succeeds, after it fails and finally.
  `Hooks.use_with(func)` calls `func` surrounded by them. A failing command
  raises `HookError`, logs a warning, or is ignored, depending on its
  `on-failure` setting.
- **`rustico.progress`**: `ProgressOptions` creates spinner, counter, byte and
  hidden `Progress` objects that write their state to standard error.
  `parse_duration`, `format_duration` and `fmt_duration` parse and format
  durations.
- **`rustico.bytesize`**: `parse_bytes("1 GiB")` and
  `format_bytes(1_000_000)`.
- **`rustico.tables`**: `Table`, `table_with_titles` and `table_right_from`
  render plain-text tables in Markdown layout.
- **Terminal widget logic**: `rustico.tree.Tree` for collapsible tree views,
  `rustico.select_table.SelectTable` for row selection and paging,
  `rustico.text_input.TextInput` for text entry, and `rustico.events.Prompt`
  for yes/no prompts driven by `KeyEvent`s. `rustico.sizing` provides the
  size helpers `SizedTable`, `SizedParagraph`, `SizedGauge`, `Bordered` and
  `center_popup`.

## Installing

```
pip install .
```

## Example

```python
from rustico.config import Config
from rustico.filtering import SizeRange

config = Config.from_toml("""
[global]
dry-run = true

[snapshot-filter]
filter-hosts = ["myhost"]
filter-size = "1 MB .. 1 GiB"
""")
print(config.to_toml())

size_range = SizeRange.parse("10 .. 20")
assert size_range.matches(15)
```

## What it does not do

The package is a library only. It has no command-line program, and it does
not open, read or write backup repositories. It cannot take backups,
restore them or serve them over the network. The widget classes keep
selection, cursor and size state, but they do not draw anything on a
terminal. A `filter-fn` entry in a configuration file is rejected: a filter
function can only be given as a Python callable.

## Running the tests

```
pip install .[test]
pytest
```