"""Font manager exceptions.

Every error carries a human-readable message plus optional context
(font name, directory, source) for callers that want structured detail.
"""


class FontError(Exception):
    """Base exception for font operations."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (font name, paths, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class FontNotFoundError(FontError):
    """Font not found in a source (or in any source)."""


class FontAlreadyInstalledError(FontError):
    """Font is already installed; batch callers treat this as a skip."""


class FontNotInstalledError(FontError):
    """Font is not installed."""


class FontArchiveError(FontError):
    """Downloaded archive is not a zip or holds no font files."""


class FontProtectionError(FontError):
    """Refused to touch a font outside the user font directory."""


class FontSourceError(FontError):
    """Source lookup or download failed (network, status, decode)."""


class FontDownloadError(FontSourceError):
    """Direct URL download failed."""


class SourceNotFoundError(FontError):
    """Requested source is not registered."""


class DuplicateSourceError(FontError):
    """A source with the same name is already registered."""


class PlatformError(FontError):
    """Platform font directory lookup failed."""


class CacheRefreshError(PlatformError):
    """Font cache refresh command failed."""


class BulkInstallError(FontError):
    """One or more entries of a bulk install failed."""

    def __init__(self, message: str, errors: list[Exception], context: dict | None = None):
        super().__init__(message, context=context)
        self.errors = errors
