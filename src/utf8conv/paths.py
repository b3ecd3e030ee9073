"""Shared filesystem path helpers for utf8conv."""
from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs

_APP_NAME = "utf8conv"


def runtime_config_dir() -> Path:
    """Return the per-user configuration directory."""
    dirs = PlatformDirs(appname=_APP_NAME, appauthor=None, roaming=True)
    return Path(dirs.user_config_path)


def project_config_path(root: Path | None = None) -> Path:
    """Return the project-local config file location under ``root`` (default: cwd)."""
    return (root or Path.cwd()) / ".utf8conv" / "config.yaml"
