"""Font descriptor and font spec line parsing.

``Font`` is the unit exchanged between sources, the installer and the
manager. ``FontSpec`` is the parsed form of one install request, shared by
``FontManager.install`` and bulk installs so both read ``name@source`` and
URL requests the same way.
"""

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from .utils import font_name_from_url
from .utils import is_url

URL_SOURCE = "url"


class Font(BaseModel):
    """
    Font descriptor.

    ``meta`` holds source bookkeeping (e.g. a remote font id) and, for fonts
    returned by listing, the derived keys ``installed_at``, ``path`` and
    ``directory``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    source: str = ""
    url: str | None = None
    meta: dict[str, str] = Field(default_factory=dict)


class FontSpec(BaseModel):
    """One parsed install request: a URL, ``name`` or ``name@source``."""

    model_config = ConfigDict(frozen=True)

    name: str
    source: str = ""
    url: str | None = None

    @property
    def is_url(self) -> bool:
        return self.url is not None

    @classmethod
    def parse(cls, line: str) -> "FontSpec | None":
        """
        Parse a font spec line.

        Format:
        - blank line or ``# comment`` → None
        - ``http://...`` / ``https://...`` → direct URL (source "url")
        - ``name@source`` → explicit source
        - ``name`` → search all registered sources

        Args:
            line: Raw line (surrounding whitespace is ignored)

        Returns:
            FontSpec, or None for lines that request nothing

        Raises:
            ValueError: If the line has an empty font name

        Example:
            >>> FontSpec.parse("FiraCode@nerdfonts")
            FontSpec(name='FiraCode', source='nerdfonts', url=None)
        """
        line = line.strip()
        if not line or line.startswith("#"):
            return None

        if is_url(line):
            return cls(name=font_name_from_url(line), source=URL_SOURCE, url=line)

        name, _, source = line.partition("@")
        name = name.strip()
        if not name:
            raise ValueError(f"invalid font spec {line!r}: empty font name")

        return cls(name=name, source=source.strip())

    def to_font(self) -> Font:
        return Font(name=self.name, source=self.source, url=self.url)

    def __str__(self) -> str:
        if self.url:
            return self.url
        return f"{self.name}@{self.source}" if self.source else self.name
