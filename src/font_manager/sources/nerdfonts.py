"""Nerd Fonts source (GitHub release archives).

Nerd Fonts has no search API: search() builds a speculative descriptor from
the cleaned name and download() finds out whether it exists, by resolving the
latest release tag and guessing ``<Name>.zip`` as the asset name.
"""

import logging

import httpx

from ..exceptions import FontSourceError
from ..schema import Font
from ..settings import DEFAULT_HTTP_TIMEOUT
from ..settings import DEFAULT_USER_AGENT
from .http import fetch
from .http import open_client

logger = logging.getLogger(__name__)

LATEST_RELEASE_URL = "https://api.github.com/repos/ryanoasis/nerd-fonts/releases/latest"
DOWNLOAD_URL = "https://github.com/ryanoasis/nerd-fonts/releases/download/{version}/{name}.zip"


class NerdFontsSource:
    """Font source for https://github.com/ryanoasis/nerd-fonts releases."""

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
        return "nerdfonts"

    async def search(self, name: str) -> list[Font]:
        clean_name = name.strip().replace(" ", "")
        return [Font(name=clean_name, source=self.name, meta={"pending": "true"})]

    async def get_latest_version(self, client: httpx.AsyncClient) -> str:
        response = await fetch(client, LATEST_RELEASE_URL, "fetching latest release")
        try:
            tag_name = response.json()["tag_name"]
        except (ValueError, KeyError, TypeError) as e:
            raise FontSourceError(f"decoding response: {e}", context={"url": LATEST_RELEASE_URL}) from e
        return str(tag_name)

    async def download(self, font: Font) -> bytes:
        async with open_client(self.client, self.timeout, self.user_agent) as client:
            try:
                version = await self.get_latest_version(client)
            except FontSourceError as e:
                raise FontSourceError(f"getting latest version: {e}", context=e.context) from e

            url = DOWNLOAD_URL.format(version=version, name=font.name)
            logger.info(f"Downloading {font.name} from Nerd Fonts {version}")
            response = await fetch(client, url, "downloading font")
            return response.content
