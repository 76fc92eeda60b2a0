"""Test doubles and archive builders shared across test modules."""

import io
import struct
import zipfile
from pathlib import Path

from font_manager import CacheRefreshError
from font_manager import Font
from font_manager import FontPaths


def build_zip(entries: dict[str, bytes | str]) -> bytes:
    """Build an in-memory zip archive from {entry name: content}."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in entries.items():
            archive.writestr(name, content)
    return buffer.getvalue()


def font_zip(name: str, *formats: str, license_text: str = "Test License") -> bytes:
    """Archive with ``<name>.<format>`` for every format plus a LICENSE."""
    entries: dict[str, bytes | str] = {f"{name}.{fmt}": f"fake {fmt} content" for fmt in formats or ("ttf",)}
    entries["LICENSE"] = license_text
    return build_zip(entries)


def corrupt_font_zip(name: str) -> bytes:
    """Deflated archive whose directory is valid but whose font data is damaged."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(f"{name}.ttf", b"fake ttf content " * 64)
    data = bytearray(buffer.getvalue())

    # Local file header: 30 fixed bytes, then file name and extra field
    name_len, extra_len = struct.unpack_from("<HH", data, 26)
    start = 30 + name_len + extra_len
    data[start : start + 8] = b"\xff" * 8
    return bytes(data)


class MockPlatform:
    """Platform adapter rooted in a temporary directory."""

    def __init__(self, root: Path, fail_cache: bool = False):
        self.root = root
        self.fail_cache = fail_cache
        self.cache_updates = 0

    def get_font_paths(self) -> FontPaths:
        paths = FontPaths(system_dir=self.root / "system", user_dir=self.root / "user")
        paths.user_dir.mkdir(parents=True, exist_ok=True)
        return paths

    def update_font_cache(self) -> None:
        self.cache_updates += 1
        if self.fail_cache:
            raise CacheRefreshError("fc-cache failed: simulated")


class MockSource:
    """Mock font source serving in-memory archives."""

    def __init__(self, name: str = "testsource"):
        self._name = name
        self.fonts: dict[str, bytes] = {}
        self.failures: dict[str, Exception] = {}
        self.searches: list[str] = []
        self.downloads: list[Font] = []

    @property
    def name(self) -> str:
        return self._name

    async def search(self, name: str) -> list[Font]:
        self.searches.append(name)
        if name in self.failures:
            raise self.failures[name]
        if name in self.fonts:
            return [Font(name=name, source=self._name)]
        return []

    async def download(self, font: Font) -> bytes:
        self.downloads.append(font)
        if font.name in self.failures:
            raise self.failures[font.name]
        if font.name not in self.fonts:
            raise RuntimeError("font not found")
        return self.fonts[font.name]
