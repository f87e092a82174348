"""Reading and parsing the operator version."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from semver import Version

DEFAULT_VERSION_FILE = "version.txt"


def get_string_from_file(file_name: str | Path) -> str:
    """Return the first line of a file, without its line ending.

    Raises OSError if the file cannot be opened.
    """
    with open(file_name, encoding="utf-8", newline="") as handle:
        line = handle.readline()
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _read_version_txt() -> str:
    return get_string_from_file(DEFAULT_VERSION_FILE)


def get_version_from_string(version_string: str) -> Version:
    """Parse a semantic version, allowing a single leading ``v``.

    Raises ValueError if the string is not a valid semantic version.
    """
    trimmed = version_string[1:] if version_string.startswith("v") else version_string
    try:
        return Version.parse(trimmed)
    except ValueError as err:
        raise ValueError(f"invalid version {version_string!r}: {err}") from err


def get_version(reader: Callable[[], str] | None = None) -> Version:
    """Return the version supplied by ``reader``, by default the first line of version.txt."""
    source = reader if reader is not None else _read_version_txt
    return get_version_from_string(source())