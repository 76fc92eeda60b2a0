"""Installed font resolver - Resolve font names against font directories.

Search paths are injected by the caller (the manager passes the user
directory first, then the system directory). Direct filesystem walks, no
caching: a listing right after an install always reflects it.
"""

import logging
from pathlib import Path

from .discovery import discover_fonts
from .schema import Font
from .utils import sanitize_font_name

logger = logging.getLogger(__name__)


class FontResolver:
    """
    Resolve font names to installed fonts (with injected search paths).

    Fonts found in earlier paths win over same-named fonts in later paths;
    both copies stay on disk, only the first is reported.
    """

    def __init__(self, search_paths: list[Path], optional_paths: list[Path] | None = None):
        """Initialize resolver with caller-provided font directories.

        Args:
            search_paths: Directories in precedence order (highest first).
                Walk errors propagate.
            optional_paths: Directories searched after ``search_paths`` whose walk
                errors are skipped (e.g. a system directory we may not be able to read).

        Example:
            >>> resolver = FontResolver(
            ...     search_paths=[Path.home() / ".local/share/fonts"],
            ...     optional_paths=[Path("/usr/local/share/fonts")],
            ... )
        """
        self.search_paths = search_paths
        self.optional_paths = optional_paths or []

    def list_fonts(self) -> list[Font]:
        """
        List installed fonts from all paths, merged by name (first seen wins).

        Returns:
            Fonts in walk order

        Raises:
            OSError: If a required search path cannot be walked
        """
        fonts: dict[str, Font] = {}

        for search_path in self.search_paths:
            for font in discover_fonts(search_path):
                fonts.setdefault(font.name, font)

        for optional_path in self.optional_paths:
            try:
                discovered = discover_fonts(optional_path)
            except OSError as e:
                logger.debug(f"Skipping unreadable font directory {optional_path}: {e}")
                continue
            for font in discovered:
                fonts.setdefault(font.name, font)

        return list(fonts.values())

    def resolve(self, name: str) -> Font | None:
        """
        Resolve a font name to its installed record.

        Names are compared after sanitization, so ``"Fira Code"`` resolves a
        font installed as ``Fira-Code``.

        Args:
            name: Font name as given by the user

        Returns:
            Installed Font if found, None otherwise
        """
        wanted = sanitize_font_name(name)
        for font in self.list_fonts():
            if sanitize_font_name(font.name) == wanted:
                return font
        return None
