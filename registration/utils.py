# registration/utils.py
"""
Utility helpers used across the service.

Goals:
- Resolve the repository root deterministically (where `.env` lives)
- Resolve configured paths to absolute paths on all OS
- Provide JSON-file helpers with clear errors and atomic writes
"""

from __future__ import annotations

import json
import os
import pathlib
import tempfile
from typing import Any, Union


# ----------------------------------------------------------------------
# 1) Repo root resolution
# ----------------------------------------------------------------------
def _find_repo_root(start: pathlib.Path) -> pathlib.Path:
    """
    Walk up from `start` to find a folder that looks like the project root.

    Markers we accept:
    - `.env` (preferred)
    - `pyproject.toml`
    - `README.md`
    """
    markers = {".env", "pyproject.toml", "README.md"}
    for p in [start, *start.parents]:
        if any((p / m).exists() for m in markers):
            return p

    # Fallback: registration/ is directly under the repo root
    parents = list(start.parents)
    return parents[1] if len(parents) > 1 else start.parent


REPO_ROOT = _find_repo_root(pathlib.Path(__file__).resolve())


# ----------------------------------------------------------------------
# 2) Helper: env var (or default) -> absolute Path
# ----------------------------------------------------------------------
def env_path(key: str, default: Union[str, pathlib.Path]) -> pathlib.Path:
    """
    Return a pathlib.Path guaranteed to be absolute.

    - If env var `key` is missing or blank, fallback to `default`
    - Relative values are interpreted as relative to REPO_ROOT
    """
    raw = (os.getenv(key) or "").strip() or str(default)
    p = pathlib.Path(raw)

    if not p.is_absolute():
        p = REPO_ROOT / p

    return p.resolve()


# ----------------------------------------------------------------------
# 3) JSON helpers
# ----------------------------------------------------------------------
def load_json_file(path: pathlib.Path) -> Any:
    """
    Read a JSON file and return its content.

    Returns Any and lets callers validate the type.
    """
    if not path.is_file():
        raise FileNotFoundError(f"JSON file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def save_json_file(path: pathlib.Path, content: Any) -> None:
    """
    Write JSON atomically (UTF-8, pretty-printed).

    The content goes to a temporary file in the same directory which then
    replaces `path`, so readers never see a half-written file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(content, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


__all__ = [
    "REPO_ROOT",
    "env_path",
    "load_json_file",
    "save_json_file",
]
