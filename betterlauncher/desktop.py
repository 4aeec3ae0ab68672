"""Discovery, parsing and launching of desktop application entries."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from .logger import Logger, LogLevel

_LOG = Logger(LogLevel.DEBUG)

_FIELD_CODES = ("%f", "%F", "%u", "%U", "%i", "%c", "%k")
_DEFAULT_DATA_DIRS = ("/usr/local/share", "/usr/share")


@dataclass(frozen=True)
class DesktopEntry:
    """A visible application: its display name, icon name and command line."""

    name: str
    icon: str
    exec_command: str


def _lines(content: str) -> Iterator[str]:
    for line in content.split("\n"):
        yield line[:-1] if line.endswith("\r") else line


def _value_after(line: str, key: str) -> str | None:
    prefix = key + "="
    if not line.startswith(prefix):
        return None
    while line.startswith(prefix):
        line = line[len(prefix):]
    return line


def parse_desktop_file(path: str | os.PathLike) -> DesktopEntry | None:
    """Parse a ``.desktop`` file; return ``None`` unless it is a shown application."""
    try:
        content = Path(path).read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError):
        return None

    fields: dict[str, str] = {}
    no_display = hidden = False
    for line in _lines(content):
        for key in ("Name", "Icon", "Exec", "Type"):
            value = _value_after(line, key)
            if value is not None:
                fields.setdefault(key, value)
        if (_value_after(line, "NoDisplay") or "").lower() == "true":
            no_display = True
        if (_value_after(line, "Hidden") or "").lower() == "true":
            hidden = True

    if no_display or hidden or fields.get("Type") != "Application":
        return None
    try:
        return DesktopEntry(fields["Name"], fields["Icon"], fields["Exec"])
    except KeyError:
        return None


def _walk_desktop_files(directory: Path) -> Iterator[Path]:
    try:
        entries = list(os.scandir(directory))
    except OSError:
        return
    for entry in entries:
        path = Path(entry.path)
        if path.is_file() and path.suffix == ".desktop":
            yield path
        elif path.is_dir():
            yield from _walk_desktop_files(path)


def collect_desktop_files(directory: str | os.PathLike) -> list[Path]:
    """Return every ``.desktop`` file below ``directory``; unreadable dirs are skipped."""
    return list(_walk_desktop_files(Path(directory)))


def _absolute(value: str | None) -> Path | None:
    if value:
        path = Path(value)
        if path.is_absolute():
            return path
    return None


def _home(env: Mapping[str, str]) -> Path:
    home = env.get("HOME")
    if home:
        return Path(home)
    try:
        return Path.home()
    except (RuntimeError, KeyError) as exc:
        raise RuntimeError("cannot determine the home directory") from exc


def application_dirs(environ: Mapping[str, str] | None = None) -> list[Path]:
    """Return the XDG ``applications`` directories, user data first."""
    env = os.environ if environ is None else environ
    data_home = _absolute(env.get("XDG_DATA_HOME")) or _home(env) / ".local" / "share"
    data_dirs = [
        path
        for path in map(_absolute, (env.get("XDG_DATA_DIRS") or "").split(":"))
        if path is not None
    ]
    if not data_dirs:
        data_dirs = [Path(p) for p in _DEFAULT_DATA_DIRS]
    return [data_home / "applications", *(d / "applications" for d in data_dirs)]


def find_desktop_files(environ: Mapping[str, str] | None = None) -> list[Path]:
    """Return all desktop files from the XDG directories, sorted and unique."""
    found = {
        path
        for directory in application_dirs(environ)
        for path in collect_desktop_files(directory)
    }
    return sorted(found)


def load_desktop_entries(environ: Mapping[str, str] | None = None) -> list[DesktopEntry]:
    """Parse every visible application, in sorted file order."""
    entries = (parse_desktop_file(path) for path in find_desktop_files(environ))
    return [entry for entry in entries if entry is not None]


def clean_exec_command(exec_command: str) -> str:
    """Strip the file, URL, icon, name and location field codes from a command."""
    for code in _FIELD_CODES:
        exec_command = exec_command.replace(code, "")
    return exec_command.strip()


def launch_application(
    exec_command: str, logger: Logger | None = None
) -> subprocess.Popen | None:
    """Start the command in the background; log and return ``None`` on failure."""
    parts = clean_exec_command(exec_command).split()
    if not parts:
        return None
    try:
        return subprocess.Popen(parts)
    except OSError as exc:
        (logger or _LOG).error(f"Failed to launch application: {exc}")
        return None