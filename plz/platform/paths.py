"""Platform-aware user directories.

The manifest lives in the per-user cache directory and the optional
config file in the per-user config directory, both under ``APP_NAME``.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from .detection import is_macos, is_windows

__all__ = [
    "APP_NAME",
    "clear_caches",
    "home",
    "manifest_path",
    "user_cache_dir",
    "user_config_dir",
]

APP_NAME = "git-plz"

MANIFEST_JSON = "manifest.json"
MANIFEST_LINES = "manifest.txt"


@lru_cache(maxsize=1)
def home() -> Path:
    """Get the user's home directory.

    Environment variables win over ``Path.home()`` so containers and CI
    can redirect it. Raises RuntimeError if no home can be determined.
    """
    if is_windows():
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            return Path(userprofile)
    else:
        home_env = os.environ.get("HOME")
        if home_env:
            return Path(home_env)

    return Path.home()


@lru_cache(maxsize=1)
def user_cache_dir() -> Path:
    """Get the user-level cache directory for git-plz.

    Location:
        Linux:   $XDG_CACHE_HOME/git-plz or ~/.cache/git-plz
        macOS:   ~/Library/Caches/git-plz
        Windows: %LOCALAPPDATA%/git-plz
    """
    if is_windows():
        local_app_data = os.environ.get("LOCALAPPDATA")
        if local_app_data:
            return Path(local_app_data) / APP_NAME
        return home() / "AppData" / "Local" / APP_NAME

    if is_macos():
        return home() / "Library" / "Caches" / APP_NAME

    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache) / APP_NAME
    return home() / ".cache" / APP_NAME


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """Get the user-level configuration directory for git-plz.

    Location: ~/.config/git-plz/ (Linux/macOS) or %APPDATA%/git-plz/ (Windows)
    """
    if is_windows():
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME
        return home() / "AppData" / "Roaming" / APP_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME


def manifest_path(cache_dir: Path, *, lines: bool = False) -> Path:
    """Path of the manifest document inside ``cache_dir``."""
    return cache_dir / (MANIFEST_LINES if lines else MANIFEST_JSON)


def clear_caches() -> None:
    """Forget cached directories (tests change environment variables)."""
    home.cache_clear()
    user_cache_dir.cache_clear()
    user_config_dir.cache_clear()
