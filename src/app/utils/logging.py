"""
Project metadata for log records and the OSM User-Agent.

Values come from the installed distribution when there is one, else from the nearest
`pyproject.toml` above this package (a source checkout).
"""

import tomllib
from functools import lru_cache
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any

DISTRIBUTION_NAME = "campus-coffee"


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    p = start
    for _ in range(max_up):
        candidate = p / "pyproject.toml"
        if candidate.exists():
            return candidate
        if p.parent == p:
            break
        p = p.parent
    return None


@lru_cache()
def _load_pyproject(start: Path, max_up: int) -> dict:
    pyproject = find_pyproject(start, max_up=max_up)
    if pyproject is None:
        return {}
    try:
        with pyproject.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def get_pyproject_value(key: str, start: str | Path | None = None, max_up: int = 5, default: Any = None) -> Any:
    """
    Return the value for a dot-separated `key` ("project.version") from the nearest
    pyproject.toml, or `default` when the file or the key is missing.
    """
    start_path = Path(start).resolve() if start is not None else Path(__file__).resolve().parent
    cur: Any = _load_pyproject(start_path, max_up)
    for part in key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def get_project_name(start: Path | str | None = None, default: str | None = DISTRIBUTION_NAME) -> str | None:
    return get_pyproject_value("project.name", start=start, default=default)


def get_project_version(start: Path | str | None = None, default: str = "unknown") -> str:
    """Installed distribution version first, then project.version, then `default`."""
    name = get_project_name(start=start)
    if name:
        try:
            return importlib_metadata.version(name)
        except importlib_metadata.PackageNotFoundError:
            pass

    version = get_pyproject_value("project.version", start=start, default=None)
    return version if version is not None else default


__all__ = [
    "find_pyproject",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
