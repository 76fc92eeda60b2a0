"""Protocols for font sources and platform adapters.

The library only requires these interfaces. Concrete sources live in
``font_manager.sources``; platform adapters in ``font_manager.platform``.
"""

from typing import Protocol
from typing import runtime_checkable

from .schema import Font


@runtime_checkable
class FontSourceProtocol(Protocol):
    """Protocol for remote font sources.

    Example implementations:
    - NerdFontsSource: GitHub release archives, no search API
    - FontSourceAPI: fontsource.org search + download
    """

    @property
    def name(self) -> str:
        """Stable identifier used for ``font@source`` selection."""
        ...

    async def search(self, name: str) -> list[Font]:
        """Look up candidate fonts by name.

        Args:
            name: Font name as requested by the user

        Returns:
            Candidate descriptors; empty list means "not found here"

        Raises:
            FontSourceError: If the lookup itself failed (network, decode)
        """
        ...

    async def download(self, font: Font) -> bytes:
        """Retrieve the zip archive for a font.

        Args:
            font: Descriptor, usually from search(); source-specific meta may be missing

        Returns:
            Archive bytes

        Raises:
            FontSourceError: If the download failed
        """
        ...
