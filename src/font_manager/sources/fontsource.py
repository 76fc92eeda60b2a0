"""Fontsource source (https://fontsource.org).

search() filters the upstream catalogue on ``family`` and carries the
upstream font id in ``Font.meta["id"]`` for download().
"""

import logging

import httpx

from ..exceptions import FontNotFoundError
from ..exceptions import FontSourceError
from ..schema import Font
from ..settings import DEFAULT_HTTP_TIMEOUT
from ..settings import DEFAULT_USER_AGENT
from .http import fetch
from .http import open_client

logger = logging.getLogger(__name__)

SEARCH_URL = "https://api.fontsource.org/v1/fonts"
DOWNLOAD_URL = "https://r2.fontsource.org/fonts/{font_id}@latest/download.zip"


class FontSourceAPI:
    """Font source backed by the fontsource.org API."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.client = client
        self.timeout = timeout
        self.user_agent = user_agent

    @property
    def name(self) -> str:
        return "fontsource"

    async def search(self, name: str) -> list[Font]:
        async with open_client(self.client, self.timeout, self.user_agent) as client:
            return await self._search(client, name)

    async def _search(self, client: httpx.AsyncClient, name: str) -> list[Font]:
        response = await fetch(client, SEARCH_URL, "searching fonts", params={"family": name})
        try:
            entries = response.json()
            fonts = [
                Font(name=entry["family"], source=self.name, meta={"id": entry["id"]}) for entry in entries
            ]
        except (ValueError, KeyError, TypeError) as e:
            raise FontSourceError(f"decoding response: {e}", context={"url": SEARCH_URL}) from e

        logger.debug(f"fontsource: {len(fonts)} result(s) for {name!r}")
        return fonts

    async def download(self, font: Font) -> bytes:
        async with open_client(self.client, self.timeout, self.user_agent) as client:
            font_id = font.meta.get("id")
            if font_id is None:
                try:
                    fonts = await self._search(client, font.name)
                except FontSourceError as e:
                    raise FontSourceError(f"searching for font ID: {e}", context=e.context) from e
                if not fonts:
                    raise FontNotFoundError(f"font not found: {font.name}", context={"source": self.name})
                font_id = fonts[0].meta["id"]

            url = DOWNLOAD_URL.format(font_id=font_id)
            logger.info(f"Downloading {font.name} from fontsource ({font_id})")
            response = await fetch(client, url, "downloading font")
            return response.content
