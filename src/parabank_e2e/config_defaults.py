"""Helpers for loading config defaults from .env.defaults, .env and .env.<TEST_ENV>.

These layers are used as a fallback when environment variables are not set.
The process environment always wins.
"""
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict

REPO_ROOT = Path(__file__).resolve().parent.parent.parent


def candidate_dirs() -> list[Path]:
    """Repo root first, then the working directory if it differs."""
    dirs: list[Path] = [REPO_ROOT]

    # Try Path.cwd() but catch OSError if working directory was deleted.
    try:
        cwd = Path.cwd()
        if cwd.resolve() != REPO_ROOT.resolve():
            dirs.append(cwd)
    except (OSError, FileNotFoundError):
        pass
    return dirs


@lru_cache(maxsize=8)
def load_defaults(test_env: str | None = None) -> Dict[str, str]:
    """Load key/value defaults from `.env.defaults`, then overlay `.env`,
    then overlay `.env.<test_env>` when an environment is selected.

    Returns empty dict if none of the files exist (e.g. in CI where all
    config is supplied via environment variables).
    """
    dirs = candidate_dirs()
    layers = [".env.defaults", ".env"]
    if test_env:
        layers.append(f".env.{test_env}")

    merged: Dict[str, str] = {}
    for layer in layers:
        for directory in dirs:
            path = directory / layer
            if path.exists():
                merged.update(parse_env_file(path))
    return merged


def get_setting(key: str, fallback: str | None = None, test_env: str | None = None) -> str | None:
    """Return a setting from the environment or the file layers (or fallback)."""
    value = os.environ.get(key)
    if value not in (None, ""):
        return value
    return load_defaults(test_env).get(key, fallback)


def parse_env_file(env_path: Path) -> Dict[str, str]:
    defaults: Dict[str, str] = {}
    with env_path.open("r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[len("export "):]
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            value = value.strip()
            # Strip surrounding quotes (single or double)
            if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
                value = value[1:-1]
            defaults[key.strip()] = value
    return defaults
