"""font-manager - Install fonts from remote sources into the user font directory.

Public API exports. Apps inject policy (platform adapter, sources); the
library provides the mechanism (resolution, installation, listing).
"""

from .discovery import discover_fonts
from .exceptions import BulkInstallError
from .exceptions import CacheRefreshError
from .exceptions import DuplicateSourceError
from .exceptions import FontAlreadyInstalledError
from .exceptions import FontArchiveError
from .exceptions import FontDownloadError
from .exceptions import FontError
from .exceptions import FontNotFoundError
from .exceptions import FontNotInstalledError
from .exceptions import FontProtectionError
from .exceptions import FontSourceError
from .exceptions import PlatformError
from .exceptions import SourceNotFoundError
from .installer import FontInstaller
from .manager import FontManager
from .platform import DarwinPlatform
from .platform import FontPaths
from .platform import LinuxPlatform
from .platform import PlatformProtocol
from .platform import get_platform
from .protocols import FontSourceProtocol
from .resolver import FontResolver
from .schema import Font
from .schema import FontSpec
from .settings import FontManagerSettings
from .utils import sanitize_font_name

__all__ = [
    # Descriptors
    "Font",
    "FontSpec",
    # Orchestration
    "FontManager",
    "FontInstaller",
    "FontResolver",
    "discover_fonts",
    # Sources
    "FontSourceProtocol",
    # Platform
    "FontPaths",
    "PlatformProtocol",
    "LinuxPlatform",
    "DarwinPlatform",
    "get_platform",
    # Settings
    "FontManagerSettings",
    # Exceptions
    "FontError",
    "FontNotFoundError",
    "FontAlreadyInstalledError",
    "FontNotInstalledError",
    "FontArchiveError",
    "FontProtectionError",
    "FontSourceError",
    "FontDownloadError",
    "SourceNotFoundError",
    "DuplicateSourceError",
    "PlatformError",
    "CacheRefreshError",
    "BulkInstallError",
    # Utilities
    "sanitize_font_name",
]

__version__ = "0.1.0"
