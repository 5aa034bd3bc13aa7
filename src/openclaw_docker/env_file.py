"""Reconcile the persisted .env file with this run's configuration values.

Only recognized keys are touched. Comments, blank lines, unknown keys and any
repeat of an already-updated key are kept verbatim and in place; recognized
keys missing from the file are appended in key order. Running it twice with
the same values leaves the file byte-identical.
"""

from __future__ import annotations

import logging
import os
import re
import stat
import tempfile
from collections.abc import Mapping, Sequence
from pathlib import Path

log = logging.getLogger(__name__)

# Key is everything before the first '=', non-empty, and may not contain '#'.
_KEY_VALUE_RE = re.compile(r"^([^=#]+)=(.*)$")


def parse_env_line(line: str) -> tuple[str, str] | None:
    """Return (key, raw_value) for a KEY=VALUE line, else None (comment, blank, other)."""
    m = _KEY_VALUE_RE.match(line)
    if not m:
        return None
    return m.group(1), m.group(2)


def reconcile_lines(
    lines: Sequence[str],
    keys: Sequence[str],
    values: Mapping[str, str | None],
) -> list[str]:
    """Apply current values to existing lines; append defined keys that were never seen.

    Only the first occurrence of a recognized key is rewritten. Keys whose value
    is None are neither rewritten nor appended.
    """
    recognized = set(keys)
    handled: set[str] = set()
    out: list[str] = []
    for line in lines:
        parsed = parse_env_line(line)
        if parsed is not None:
            key = parsed[0]
            if key in recognized and key not in handled and values.get(key) is not None:
                eol = "\r" if line.endswith("\r") else ""
                out.append(f"{key}={values[key]}{eol}")
                handled.add(key)
                continue
        out.append(line)
    for key in keys:
        value = values.get(key)
        if value is None or key in handled:
            continue
        log.debug("Appending %s to env file", key)
        out.append(f"{key}={value}")
    return out


def read_env_lines(path: Path) -> list[str]:
    """Lines of path split on '\\n' only; [] when the file does not exist."""
    if not path.exists():
        return []
    with path.open(encoding="utf-8", newline="") as f:
        text = f.read()
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


def existing_env_value(path: Path, key: str) -> str | None:
    """Value of the first KEY=VALUE line for key in path, or None when absent."""
    for line in read_env_lines(path):
        parsed = parse_env_line(line)
        if parsed is not None and parsed[0] == key:
            return parsed[1].removesuffix("\r")
    return None


def _write_atomic(path: Path, text: str) -> None:
    """Replace the file a symlink points at (not the link), keeping its permission bits."""
    target = path.resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        if target.exists():
            os.chmod(tmp, stat.S_IMODE(target.stat().st_mode))
        os.replace(tmp, target)
    finally:
        if os.path.exists(tmp):
            os.unlink(tmp)


def reconcile_env_file(
    path: Path,
    keys: Sequence[str],
    values: Mapping[str, str | None],
) -> list[str]:
    """Read path (if present), reconcile it and overwrite it in full. Returns the lines written."""
    lines = reconcile_lines(read_env_lines(path), keys, values)
    _write_atomic(path, "".join(f"{line}\n" for line in lines))
    log.debug("Reconciled %s (%d lines)", path, len(lines))
    return lines
