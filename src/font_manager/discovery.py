"""Installed font discovery - rebuild Font records from a font directory.

Convention: the first directory component below the font root is the font
name; a font file sitting directly in the root is named after its file stem.
Provenance comes from the sidecar files next to the first payload file found.

No caching: every call walks the filesystem.
"""

import logging
import os
from pathlib import Path

from .schema import Font
from .sidecar import read_sidecars
from .utils import is_font_file

logger = logging.getLogger(__name__)


def _raise_walk_error(error: OSError) -> None:
    raise error


def iter_font_files(font_dir: Path):
    """Yield payload font files below ``font_dir`` in lexical order.

    Raises:
        OSError: If part of the tree cannot be read
    """
    for dirpath, dirnames, filenames in os.walk(font_dir, onerror=_raise_walk_error):
        dirnames.sort()
        for filename in sorted(filenames):
            if is_font_file(filename):
                yield Path(dirpath) / filename


def discover_fonts(font_dir: Path) -> list[Font]:
    """
    Discover installed fonts in a font root directory.

    Args:
        font_dir: Font root (e.g. ~/.local/share/fonts)

    Returns:
        One Font per font name, in walk order. ``meta`` holds ``installed_at``
        (if recorded), every ``.metadata`` key, and the derived ``path`` and
        ``directory`` keys. Empty list if ``font_dir`` does not exist.

    Raises:
        OSError: If the directory tree cannot be walked

    Example:
        >>> fonts = discover_fonts(Path("~/.local/share/fonts").expanduser())
        >>> for font in fonts:
        ...     print(font.name, font.source, font.meta["directory"])
    """
    if not font_dir.exists():
        return []

    fonts: dict[str, Font] = {}

    for path in iter_font_files(font_dir):
        relative_dir = path.parent.relative_to(font_dir)
        name = relative_dir.parts[0] if relative_dir.parts else path.stem

        if name in fonts:
            continue

        sidecars = read_sidecars(path.parent)
        meta = sidecars.to_meta()
        meta["path"] = str(path)
        meta["directory"] = str(path.parent)

        fonts[name] = Font(name=name, source=sidecars.source, meta=meta)
        logger.debug(f"Discovered font {name} at {path.parent}")

    return list(fonts.values())


def has_font_files(font_dir: Path) -> bool:
    """Check whether a directory holds at least one payload file (stops at the first)."""
    if not font_dir.is_dir():
        return False
    return next(iter_font_files(font_dir), None) is not None
