# src/tasktree/storage/paths.py

"""
Where project documents live.

Platform conventions:
- Windows: %APPDATA%/<app> (fallback ~/AppData/Roaming/<app>)
- macOS:   ~/Library/Application Support/<app>
- Linux:   ~/.local/share/<app>
- other:   ~/.<app>

A legacy relative directory (data/projects) wins while it holds at
least one document. The check runs on every call; nothing is cached.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path

logger = logging.getLogger(__name__)

PROJECTS_DIRNAME = "projects"
DEFAULT_LEGACY_DIR = Path("data") / PROJECTS_DIRNAME
DEFAULT_EXTENSION = ".json"


class OperatingSystem(StrEnum):
    WINDOWS = "windows"
    MAC = "mac"
    LINUX = "linux"
    UNKNOWN = "unknown"

    @classmethod
    def detect(cls, platform: str | None = None) -> OperatingSystem:
        name = (platform if platform is not None else sys.platform).lower()
        if name.startswith("win") or name == "cygwin":
            return cls.WINDOWS
        if name == "darwin" or "mac" in name:
            return cls.MAC
        if name.startswith(("linux", "aix", "freebsd", "openbsd", "netbsd", "sunos")):
            return cls.LINUX
        return cls.UNKNOWN


class PlatformPaths:
    """
    Resolve the storage directory for project documents.

    `data_dir` (from settings) replaces the platform convention entirely;
    `home`, `environ` and `platform` are injectable for tests.
    """

    def __init__(
        self,
        app_name: str = "tasktree",
        *,
        data_dir: str | Path | None = None,
        legacy_dir: str | Path = DEFAULT_LEGACY_DIR,
        extension: str = DEFAULT_EXTENSION,
        home: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
        platform: str | None = None,
    ) -> None:
        self.app_name = app_name
        self.extension = extension
        self._data_dir = Path(data_dir).expanduser() if data_dir else None
        self._legacy_dir = Path(legacy_dir)
        self._home = Path(home) if home is not None else None
        self._environ = environ if environ is not None else os.environ
        self.os = OperatingSystem.detect(platform)
        self._last_resolved: Path | None = None

    def _user_home(self) -> Path:
        return self._home if self._home is not None else Path.home()

    def app_data_dir(self) -> Path:
        if self._data_dir is not None:
            return self._data_dir

        home = self._user_home()
        if self.os is OperatingSystem.WINDOWS:
            appdata = self._environ.get("APPDATA")
            if appdata:
                return Path(appdata) / self.app_name
            return home / "AppData" / "Roaming" / self.app_name
        if self.os is OperatingSystem.MAC:
            return home / "Library" / "Application Support" / self.app_name
        if self.os is OperatingSystem.LINUX:
            return home / ".local" / "share" / self.app_name
        return home / f".{self.app_name}"

    def platform_dir(self) -> Path:
        return self.app_data_dir() / PROJECTS_DIRNAME

    def legacy_dir(self) -> Path:
        return self._legacy_dir

    def has_legacy_documents(self) -> bool:
        legacy = self._legacy_dir
        if not legacy.is_dir():
            return False
        return any(p.is_file() for p in legacy.glob(f"*{self.extension}"))

    def storage_dir(self) -> Path:
        """Directory to read/write right now (legacy first, else platform)."""
        resolved = self._legacy_dir if self.has_legacy_documents() else self.platform_dir()
        if resolved != self._last_resolved:
            logger.info("Project storage directory: %s", resolved)
            self._last_resolved = resolved
        return resolved
