"""Provenance sidecar files stored next to installed fonts.

Each installed font directory holds up to three hidden files:

- ``.source``: origin source identifier (plain text)
- ``.metadata``: flat JSON object of string keys to string values
- ``.installed``: RFC3339 installation timestamp (plain text)

Sidecars are written once at install time and never updated in place.
"""

import json
import logging
from dataclasses import dataclass
from dataclasses import field
from datetime import UTC
from datetime import datetime
from pathlib import Path

from .schema import Font

logger = logging.getLogger(__name__)

SOURCE_FILE = ".source"
METADATA_FILE = ".metadata"
INSTALLED_FILE = ".installed"


@dataclass
class FontSidecars:
    """Provenance read back from a font directory."""

    source: str = ""
    installed_at: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)

    def to_meta(self) -> dict[str, str]:
        """Merge into a Font meta mapping (``installed_at`` first, metadata keys after)."""
        meta: dict[str, str] = {}
        if self.installed_at is not None:
            meta["installed_at"] = self.installed_at
        meta.update(self.metadata)
        return meta


def _timestamp() -> str:
    return datetime.now(UTC).replace(microsecond=0).isoformat()


def write_sidecars(font_dir: Path, font: Font) -> None:
    """
    Write provenance sidecars for a freshly installed font.

    Args:
        font_dir: Installed font directory
        font: Descriptor the font was installed from

    Raises:
        OSError: If a sidecar cannot be written
    """
    if font.source:
        (font_dir / SOURCE_FILE).write_text(font.source, encoding="utf-8")

    if font.meta:
        (font_dir / METADATA_FILE).write_text(json.dumps(font.meta), encoding="utf-8")

    (font_dir / INSTALLED_FILE).write_text(_timestamp(), encoding="utf-8")
    logger.debug(f"Wrote sidecars for {font.name} in {font_dir}")


def read_sidecars(font_dir: Path) -> FontSidecars:
    """
    Read provenance sidecars from a font directory.

    Missing files are skipped. An unreadable or malformed ``.metadata`` is
    ignored with a warning; its keys are merged as-is otherwise.

    Args:
        font_dir: Font directory to inspect

    Returns:
        FontSidecars (empty fields where files are absent)
    """
    sidecars = FontSidecars()

    source_path = font_dir / SOURCE_FILE
    if source_path.is_file():
        sidecars.source = source_path.read_text(encoding="utf-8").strip()

    installed_path = font_dir / INSTALLED_FILE
    if installed_path.is_file():
        sidecars.installed_at = installed_path.read_text(encoding="utf-8").strip()

    metadata_path = font_dir / METADATA_FILE
    if metadata_path.is_file():
        try:
            data = json.loads(metadata_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable metadata in {metadata_path}: {e}")
        else:
            if isinstance(data, dict):
                sidecars.metadata = {str(k): str(v) for k, v in data.items()}
            else:
                logger.warning(f"Ignoring non-object metadata in {metadata_path}")

    return sidecars
