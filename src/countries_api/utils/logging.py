"""
Project metadata lookups used to stamp log lines.

The installed distribution metadata is preferred; when running from a source
checkout that was never installed, the nearest pyproject.toml is read instead.
"""

import tomllib
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any

DISTRIBUTION_NAME = "countries-api"


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


def get_pyproject_value(key: str, start: str | Path | None = None, default: Any = None) -> Any:
    """
    Return the value for dot-separated `key` (e.g. "project.version") from the nearest
    pyproject.toml, or `default` when the file or key is missing.
    """
    start_path = Path(start).resolve() if start is not None else Path(__file__).resolve().parent
    pyproject = find_pyproject(start_path, max_up=6)
    if pyproject is None:
        return default

    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return default

    value: Any = data
    for part in key.split("."):
        if not isinstance(value, dict) or part not in value:
            return default
        value = value[part]
    return value


def get_project_version(default: str = "0.0.0") -> str:
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        return get_pyproject_value("project.version", default=default)
