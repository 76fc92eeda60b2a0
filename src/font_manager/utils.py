"""Naming helpers shared by the installer, resolver and manager."""

import re
from pathlib import PurePosixPath
from urllib.parse import urlparse

FONT_EXTENSIONS = (".ttf", ".otf")
URL_PREFIXES = ("http://", "https://")
LICENSE_NAME = "LICENSE"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_font_name(name: str) -> str:
    """Map a font name to its directory name.

    Every character outside ``[A-Za-z0-9_-]`` becomes ``-`` and leading or
    trailing dashes are trimmed. Distinct names may collide.

    Examples:
        >>> sanitize_font_name("Fira Code")
        'Fira-Code'
        >>> sanitize_font_name("  JetBrains Mono! ")
        'JetBrains-Mono'
    """
    return _UNSAFE_CHARS.sub("-", name).strip("-")


def is_font_file(filename: str) -> bool:
    """Check whether a file name carries a payload font extension (case-insensitive)."""
    return PurePosixPath(filename).suffix.lower() in FONT_EXTENSIONS


def is_license_file(filename: str) -> bool:
    return PurePosixPath(filename).name.upper() == LICENSE_NAME


def is_url(name: str) -> bool:
    return name.startswith(URL_PREFIXES)


def font_name_from_url(url: str) -> str:
    """Derive a display name from the last path segment of a URL.

    Examples:
        >>> font_name_from_url("https://example.com/fonts/Inter.zip")
        'Inter'
    """
    filename = urlparse(url).path.split("/")[-1]
    for ext in (".zip", ".ttf", ".otf"):
        filename = filename.removesuffix(ext)
    return filename
