"""Platform adapters: font directories and font cache refresh.

Two variants are provided (Linux and macOS). Apps may inject their own
implementation of ``PlatformProtocol`` (tests use a temporary directory).
"""

import logging
import os
import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol
from typing import runtime_checkable

from .exceptions import CacheRefreshError
from .exceptions import PlatformError
from .settings import FontManagerSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontPaths:
    """System-wide and per-user font directories."""

    system_dir: Path
    user_dir: Path


@runtime_checkable
class PlatformProtocol(Protocol):
    """Protocol for OS-specific font operations."""

    def get_font_paths(self) -> FontPaths:
        """Return font directories, creating the user directory if missing.

        Raises:
            PlatformError: If the directories cannot be determined or created
        """
        ...

    def update_font_cache(self) -> None:
        """Refresh the OS font cache.

        Raises:
            CacheRefreshError: If the refresh failed (callers may downgrade to a warning)
        """
        ...


def _run_command(*args: str) -> None:
    try:
        result = subprocess.run(args, capture_output=True, text=True, check=False)
    except OSError as e:
        raise CacheRefreshError(f"{args[0]} failed: {e}", context={"command": " ".join(args)}) from e

    if result.returncode != 0:
        output = (result.stdout + result.stderr).strip()
        raise CacheRefreshError(
            f"{args[0]} failed:\nCommand: {' '.join(args)}\nOutput: {output}\nExit code: {result.returncode}",
            context={"command": " ".join(args)},
        )


class _BasePlatform:
    default_system_dir: Path
    default_user_subdir: str

    def __init__(self, system_dir: Path | None = None, user_dir: Path | None = None):
        self._system_dir = system_dir
        self._user_dir = user_dir

    def get_font_paths(self) -> FontPaths:
        if self._user_dir is not None:
            user_dir = self._user_dir.expanduser()
        else:
            try:
                user_dir = Path.home() / self.default_user_subdir
            except RuntimeError as e:
                raise PlatformError(f"getting user home directory: {e}") from e

        paths = FontPaths(
            system_dir=(self._system_dir or self.default_system_dir).expanduser(),
            user_dir=user_dir,
        )

        try:
            paths.user_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PlatformError(
                f"creating user fonts directory: {e}",
                context={"user_dir": str(paths.user_dir)},
            ) from e

        return paths


class LinuxPlatform(_BasePlatform):
    """Linux: fontconfig directories, refreshed with ``fc-cache -f``."""

    default_system_dir = Path("/usr/local/share/fonts")
    default_user_subdir = ".local/share/fonts"

    def update_font_cache(self) -> None:
        try:
            _run_command("fc-cache", "-f")
            return
        except CacheRefreshError as e:
            if os.geteuid() == 0:
                raise
            logger.debug(f"fc-cache failed without elevated privileges: {e}")

        # Some distros lock the cache; retry with sudo
        if shutil.which("sudo") is None:
            raise CacheRefreshError(
                "font cache update failed. Please run 'fc-cache -f' manually with root privileges"
            )

        logger.warning(
            "Unable to update font cache with current permissions. "
            "Attempting to update with elevated privileges; you may be prompted for your password."
        )
        try:
            _run_command("sudo", "fc-cache", "-f")
        except CacheRefreshError as e:
            raise CacheRefreshError(f"updating font cache with elevated privileges: {e}") from e


class DarwinPlatform(_BasePlatform):
    """macOS: ``~/Library/Fonts``; new fonts are picked up automatically."""

    default_system_dir = Path("/Library/Fonts")
    default_user_subdir = "Library/Fonts"

    def update_font_cache(self) -> None:
        user_dir = self.get_font_paths().user_dir
        try:
            os.utime(user_dir)
        except OSError as e:
            raise CacheRefreshError(f"updating directory timestamp: {e}") from e

        # Older macOS releases need the font server restarted
        try:
            _run_command("atsutil", "databases", "-remove")
        except CacheRefreshError:
            return

        try:
            _run_command("atsutil", "server", "-shutdown")
        except CacheRefreshError as e:
            raise CacheRefreshError(f"restarting font server: {e}") from e


def get_platform(settings: FontManagerSettings | None = None) -> PlatformProtocol:
    """
    Return the platform adapter for the running OS.

    Args:
        settings: Optional settings; ``user_font_dir`` / ``system_font_dir`` override defaults

    Returns:
        DarwinPlatform on macOS, LinuxPlatform otherwise
    """
    settings = settings or FontManagerSettings()
    platform_cls = DarwinPlatform if sys.platform == "darwin" else LinuxPlatform
    return platform_cls(system_dir=settings.system_font_dir, user_dir=settings.user_font_dir)
