"""Font installation mechanism - archive bytes to a per-font directory.

The installer knows nothing about where archives come from: the manager
fetches them (from a source or a URL) and hands over the bytes. The font
root directory is injected.

Layout written for a font named "Fira Code":

    <font_dir>/Fira-Code/
        FiraCode-Regular.ttf     payload files, flattened
        FiraCode-Regular.otf
        LICENSE
        .source  .metadata  .installed

Extraction is not transactional: a failure partway through leaves the files
extracted so far in place.
"""

import io
import logging
import shutil
import zipfile
import zlib
from pathlib import Path
from pathlib import PurePosixPath
from typing import BinaryIO

from .discovery import has_font_files
from .exceptions import FontArchiveError
from .exceptions import FontError
from .exceptions import FontNotInstalledError
from .schema import Font
from .sidecar import write_sidecars
from .utils import is_font_file
from .utils import is_license_file
from .utils import sanitize_font_name

logger = logging.getLogger(__name__)

# Raised while reading a damaged or unreadable member
ARCHIVE_MEMBER_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, RuntimeError, NotImplementedError)


def _extract_member(archive: zipfile.ZipFile, member: zipfile.ZipInfo, dest_dir: Path) -> Path:
    """Copy one archive member into ``dest_dir`` under its base name."""
    dest = dest_dir / PurePosixPath(member.filename).name
    with archive.open(member) as src:
        try:
            with open(dest, "wb") as dst:
                shutil.copyfileobj(src, dst)
        except BaseException:
            # Never leave a truncated payload behind
            dest.unlink(missing_ok=True)
            raise
    return dest


class FontInstaller:
    """Installs fonts from zip archives into a font root directory."""

    def __init__(self, font_dir: Path):
        """Initialize installer with the font root (usually the user font directory).

        Args:
            font_dir: Directory that holds one subdirectory per installed font
        """
        self.font_dir = font_dir

    def font_path(self, name: str) -> Path:
        return self.font_dir / sanitize_font_name(name)

    def install(self, font: Font, data: bytes | BinaryIO) -> Path:
        """
        Install a font from a zip archive.

        Process:
        1. Buffer the archive in memory
        2. Create <font_dir>/<sanitized name>/
        3. Extract every .ttf/.otf entry (flattened) plus any LICENSE entry
        4. Write provenance sidecars

        Args:
            font: Descriptor (name, source, meta are recorded on disk)
            data: Archive bytes or a binary stream

        Returns:
            Installed font directory

        Raises:
            FontArchiveError: If data is not a zip, a member cannot be read, or no font files are present
            FontError: If reading data or writing files failed
        """
        if isinstance(data, (bytes, bytearray)):
            buffer = bytes(data)
        else:
            try:
                buffer = data.read()
            except OSError as e:
                raise FontError(f"reading font data: {e}") from e

        font_path = self.font_path(font.name)
        try:
            font_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FontError(f"creating font directory: {e}", context={"path": str(font_path)}) from e

        try:
            archive = zipfile.ZipFile(io.BytesIO(buffer))
        except zipfile.BadZipFile as e:
            raise FontArchiveError(f"reading zip data: {e}", context={"font": font.name}) from e

        installed = False
        with archive:
            for member in archive.infolist():
                base_name = PurePosixPath(member.filename).name
                if member.is_dir() or base_name.startswith("."):
                    continue

                if is_font_file(base_name):
                    try:
                        dest = _extract_member(archive, member, font_path)
                    except ARCHIVE_MEMBER_ERRORS as e:
                        raise FontArchiveError(
                            f"extracting font file {member.filename}: {e}", context={"font": font.name}
                        ) from e
                    except OSError as e:
                        raise FontError(f"extracting font file {member.filename}: {e}") from e
                    logger.debug(f"Extracted {member.filename} -> {dest}")
                    installed = True

                if is_license_file(base_name):
                    try:
                        _extract_member(archive, member, font_path)
                    except ARCHIVE_MEMBER_ERRORS as e:
                        raise FontArchiveError(f"extracting license file: {e}", context={"font": font.name}) from e
                    except OSError as e:
                        raise FontError(f"extracting license file: {e}") from e

        if not installed:
            raise FontArchiveError(
                "no valid font files found in archive",
                context={"font": font.name, "path": str(font_path)},
            )

        try:
            write_sidecars(font_path, font)
        except OSError as e:
            raise FontError(f"storing font metadata: {e}") from e

        logger.info(f"Installed {font.name} to {font_path}")
        return font_path

    def uninstall(self, name: str) -> None:
        """
        Remove an installed font directory.

        Args:
            name: Font name (sanitized to find the directory)

        Raises:
            FontNotInstalledError: If the font directory does not exist
            FontError: If removal failed
        """
        font_path = self.font_path(name)

        if not font_path.exists():
            raise FontNotInstalledError(f"font {name} is not installed", context={"path": str(font_path)})

        try:
            shutil.rmtree(font_path)
        except OSError as e:
            raise FontError(f"removing font directory: {e}") from e

        logger.info(f"Removed {font_path}")

    def is_installed(self, name: str) -> bool:
        """Check that the font directory exists and holds at least one font file."""
        font_path = self.font_path(name)
        try:
            return has_font_files(font_path)
        except OSError as e:
            logger.warning(f"Error walking {font_path}: {e}")
            return False
