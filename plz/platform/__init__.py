"""Platform abstraction layer."""

from .detection import (
    Platform,
    detect_platform,
    is_macos,
    is_windows,
)
from .files import replace_text
from .paths import (
    APP_NAME,
    home,
    manifest_path,
    user_cache_dir,
    user_config_dir,
)
from .process import GIT_ENV, ProcessError, run, run_git

__all__ = [
    # detection
    "Platform",
    "detect_platform",
    "is_macos",
    "is_windows",
    # files
    "replace_text",
    # paths
    "APP_NAME",
    "home",
    "manifest_path",
    "user_cache_dir",
    "user_config_dir",
    # process
    "GIT_ENV",
    "ProcessError",
    "run",
    "run_git",
]
