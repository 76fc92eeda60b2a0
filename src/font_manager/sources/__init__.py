"""Built-in font sources."""

from .fontsource import FontSourceAPI
from .nerdfonts import NerdFontsSource

__all__ = [
    "FontSourceAPI",
    "NerdFontsSource",
    "default_sources",
]


def default_sources(**kwargs) -> list:
    """Built-in sources in default priority order (Nerd Fonts first, then Fontsource)."""
    return [NerdFontsSource(**kwargs), FontSourceAPI(**kwargs)]
