"""Font manager - resolve, install, list and uninstall fonts.

Composes registered sources, direct URL downloads, the installer and the
platform adapter. The filesystem is the only state: every query walks the
user and system font directories afresh.

Resolution order for ``install(name)``:
1. Refuse if already installed
2. ``http(s)://...`` → direct URL download
3. ``name@source`` → that registered source only
4. Otherwise each registered source in registration order, first success wins
"""

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

import httpx

from .exceptions import BulkInstallError
from .exceptions import CacheRefreshError
from .exceptions import DuplicateSourceError
from .exceptions import FontAlreadyInstalledError
from .exceptions import FontDownloadError
from .exceptions import FontError
from .exceptions import FontNotFoundError
from .exceptions import FontNotInstalledError
from .exceptions import FontProtectionError
from .exceptions import FontSourceError
from .exceptions import SourceNotFoundError
from .installer import FontInstaller
from .platform import FontPaths
from .platform import PlatformProtocol
from .protocols import FontSourceProtocol
from .resolver import FontResolver
from .schema import Font
from .schema import FontSpec
from .settings import FontManagerSettings
from .sources.http import fetch
from .sources.http import open_client

logger = logging.getLogger(__name__)


class FontManager:
    """
    Font manager (with injected platform and sources).

    Example:
        >>> from font_manager import FontManager, get_platform
        >>> from font_manager.sources import default_sources
        >>> manager = FontManager(platform=get_platform(), sources=default_sources())
        >>> await manager.install("FiraCode@nerdfonts")
    """

    def __init__(
        self,
        platform: PlatformProtocol,
        sources: Iterable[FontSourceProtocol] | None = None,
        client: httpx.AsyncClient | None = None,
        settings: FontManagerSettings | None = None,
    ):
        """Initialize manager.

        Args:
            platform: Platform adapter (font directories + cache refresh)
            sources: Sources to register, in priority order
            client: Optional HTTP client for direct URL downloads
            settings: Optional settings (HTTP timeout, User-Agent)

        Raises:
            PlatformError: If font directories cannot be determined
            DuplicateSourceError: If two sources share a name
        """
        self.platform = platform
        self.client = client
        self.settings = settings or FontManagerSettings()
        self.sources: list[FontSourceProtocol] = []

        self.installer = FontInstaller(self.font_paths().user_dir)

        for source in sources or []:
            self.register_source(source)

    def font_paths(self) -> FontPaths:
        return self.platform.get_font_paths()

    def update_cache(self) -> None:
        """Refresh the OS font cache.

        Raises:
            CacheRefreshError: If the refresh command failed
        """
        self.platform.update_font_cache()

    def _update_cache_best_effort(self) -> None:
        try:
            self.update_cache()
        except CacheRefreshError as e:
            logger.warning(f"Failed to update font cache: {e}")

    def register_source(self, source: FontSourceProtocol | None) -> None:
        """
        Add a source. Registration order is search priority.

        Raises:
            FontError: If source is None
            DuplicateSourceError: If a source with the same name is registered
        """
        if source is None:
            raise FontError("cannot register nil source")

        if any(existing.name == source.name for existing in self.sources):
            raise DuplicateSourceError(
                f"source {source.name!r} is already registered", context={"source": source.name}
            )

        self.sources.append(source)
        logger.debug(f"Registered source {source.name}")

    def get_source(self, name: str) -> FontSourceProtocol | None:
        for source in self.sources:
            if source.name == name:
                return source
        return None

    def _resolver(self) -> FontResolver:
        paths = self.font_paths()
        return FontResolver(search_paths=[paths.user_dir], optional_paths=[paths.system_dir])

    async def list_fonts(self) -> list[Font]:
        """
        List installed fonts (user directory first, then system directory).

        Returns:
            Fonts merged by name, first seen wins

        Raises:
            FontError: If the user font directory cannot be walked
        """
        try:
            return self._resolver().list_fonts()
        except OSError as e:
            raise FontError(f"listing user fonts: {e}") from e

    async def is_installed(self, name: str) -> bool:
        """Check whether any listed font sanitizes to the same name."""
        try:
            return self._resolver().resolve(name) is not None
        except OSError as e:
            raise FontError(f"checking installation status: {e}") from e

    async def install(self, name: str) -> None:
        """
        Install a font by name, ``name@source`` or direct URL.

        Args:
            name: Install request

        Raises:
            FontAlreadyInstalledError: If the font is already installed
            SourceNotFoundError: If ``@source`` names an unregistered source
            FontNotFoundError: If no source could install the font
            FontDownloadError: If a direct URL download failed
            FontArchiveError: If the archive is invalid or holds no fonts
            CacheRefreshError: If the cache refresh after a URL install failed
        """
        try:
            spec = FontSpec.parse(name)
        except ValueError as e:
            raise FontError(str(e), context={"font": name}) from e
        if spec is None:
            raise FontError(f"invalid font name {name!r}")
        await self.install_spec(spec)

    async def install_spec(self, spec: FontSpec) -> None:
        """Install a parsed font spec (see ``install``)."""
        request = spec.url or spec.name
        if await self.is_installed(spec.name):
            raise FontAlreadyInstalledError(
                f"font {request!r} is already installed", context={"font": spec.name}
            )

        if spec.is_url:
            await self.install_from_url(spec.url)
            return

        if spec.source:
            source = self.get_source(spec.source)
            if source is None:
                raise SourceNotFoundError(f"source {spec.source!r} not found", context={"source": spec.source})
            await self._install_from_source(spec.name, source)
            return

        last_error: Exception | None = None
        for source in self.sources:
            try:
                await self._install_from_source(spec.name, source)
                return
            except FontError as e:
                logger.debug(f"{source.name} could not install {spec.name}: {e}")
                last_error = e

        if last_error is not None:
            raise FontNotFoundError(
                f"font {request!r} not found in any source: {last_error}",
                context={"font": spec.name},
            ) from last_error

        raise FontNotFoundError(f"font {request!r} not found: no sources registered", context={"font": spec.name})

    async def _install_from_source(self, name: str, source: FontSourceProtocol) -> Path:
        try:
            fonts = await source.search(name)
        except FontError as e:
            raise type(e)(f"searching in {source.name}: {e}", context=e.context) from e
        except Exception as e:
            raise FontSourceError(f"searching in {source.name}: {e}", context={"source": source.name}) from e

        if not fonts:
            raise FontNotFoundError(f"font not found in {source.name}", context={"source": source.name})

        font = fonts[0]
        try:
            data = await source.download(font)
        except FontError as e:
            raise type(e)(f"downloading from {source.name}: {e}", context=e.context) from e
        except Exception as e:
            raise FontSourceError(f"downloading from {source.name}: {e}", context={"source": source.name}) from e

        font_path = self._install_font(font, data)
        self._update_cache_best_effort()
        return font_path

    def _install_font(self, font: Font, data: bytes) -> Path:
        try:
            return self.installer.install(font, data)
        except FontError as e:
            raise type(e)(f"installing font: {e}", context=e.context) from e

    async def install_from_url(self, url: str) -> Path:
        """
        Install a font archive from a direct URL.

        The display name is the last path segment without ``.zip``/``.ttf``/``.otf``.

        Args:
            url: ``http://`` or ``https://`` archive URL

        Returns:
            Installed font directory

        Raises:
            FontDownloadError: On transport errors or non-200 responses
            FontArchiveError: If the body is not a zip with font files
            CacheRefreshError: If the font cache refresh failed
        """
        spec = FontSpec.parse(url)
        if spec is None or not spec.is_url:
            raise FontError(f"invalid URL {url!r}")
        if not spec.name:
            raise FontError(f"cannot derive a font name from URL {url!r}")

        async with open_client(self.client, self.settings.http_timeout, self.settings.user_agent) as client:
            response = await fetch(client, url, "downloading font", error_cls=FontDownloadError)

        logger.info(f"Downloaded {spec.name} from {url}")
        font_path = self._install_font(spec.to_font(), response.content)

        self.update_cache()
        return font_path

    async def install_from_config(self, reader: Iterable[str]) -> None:
        """
        Install every font listed in a spec file, one per line.

        Lines are processed sequentially. Parse and install errors are
        collected; nothing stops the remaining lines from being tried.

        Args:
            reader: Text stream or iterable of lines

        Raises:
            BulkInstallError: If any line failed (``errors`` holds each failure)
        """
        errors: list[Exception] = []

        try:
            for line_number, line in enumerate(reader, start=1):
                try:
                    spec = FontSpec.parse(line)
                except ValueError as e:
                    errors.append(FontError(f"line {line_number}: {e}"))
                    continue
                if spec is None:
                    continue

                try:
                    await self.install_spec(spec)
                except FontError as e:
                    errors.append(e.__class__(f"failed to install {spec}: {e}", context=e.context))
        except OSError as e:
            errors.append(FontError(f"error reading config: {e}"))

        if errors:
            details = "; ".join(str(e) for e in errors)
            raise BulkInstallError(f"encountered errors during installation: {details}", errors=errors)

    async def uninstall(self, name: str) -> None:
        """
        Uninstall a font from the user font directory.

        Raises:
            FontNotInstalledError: If no installed font matches
            FontProtectionError: If the font lives outside the user font directory
            FontError: If removal failed
        """
        try:
            font = self._resolver().resolve(name)
        except OSError as e:
            raise FontError(f"checking font installation: {e}") from e
        if font is None:
            raise FontNotInstalledError(f"font {name!r} is not installed", context={"font": name})

        font_dir = font.meta.get("directory")
        if not font_dir:
            raise FontError("font directory information missing", context={"font": name})

        user_dir = self.font_paths().user_dir.resolve()
        resolved = Path(font_dir).resolve()
        if resolved == user_dir:
            raise FontProtectionError(
                f"cannot uninstall font {name!r} at the root of the user font directory",
                context={"font": name, "directory": font_dir},
            )
        if not resolved.is_relative_to(user_dir):
            raise FontProtectionError(
                f"cannot uninstall system font {name!r}",
                context={"font": name, "directory": font_dir},
            )

        # Remove the whole per-font directory, not just the subdirectory holding the first file
        target = user_dir / resolved.relative_to(user_dir).parts[0]
        try:
            shutil.rmtree(target)
        except OSError as e:
            raise FontError(f"removing font directory: {e}", context={"directory": str(target)}) from e

        self._update_cache_best_effort()
        logger.info(f"Uninstalled {name}")
