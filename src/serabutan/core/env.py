"""
Project-root and `.env` helpers.

The API, the CLI and the tests can start from any working directory; relative
settings paths (catalog snapshot, cache dir) are resolved against the project root
found here rather than against the cwd.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

_PACKAGE_DIR = Path(__file__).resolve().parents[1]


def _is_root(path: Path) -> bool:
    if (path / ".env").is_file() or (path / ".git").exists():
        return True
    return (path / "pyproject.toml").is_file() and (path / "data" / "catalogs").is_dir()


@lru_cache
def get_project_root() -> Path:
    """Return the project root (`SERABUTAN_PROJECT_ROOT` wins; cached)."""
    override = os.getenv("SERABUTAN_PROJECT_ROOT")
    if override:
        return Path(override).expanduser().resolve()

    cwd = Path.cwd().resolve()
    for start in (cwd, _PACKAGE_DIR):
        for candidate in (start, *start.parents):
            if _is_root(candidate):
                return candidate
    return cwd


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load `<project root>/.env` once without overriding the real environment."""
    env_path = get_project_root() / ".env"
    if not env_path.is_file():
        return None
    load_dotenv(dotenv_path=env_path, override=False)
    return env_path


def resolve_project_path(path: str | Path) -> Path:
    """Resolve a relative path against the project root; absolute paths pass through."""
    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    return (get_project_root() / p).resolve()
