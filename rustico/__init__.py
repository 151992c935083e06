"""Configuration profiles, snapshot filtering, hooks, progress reporting and terminal widget logic for a backup tool."""

__version__ = "0.1.0"