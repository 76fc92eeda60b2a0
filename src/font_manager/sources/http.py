"""Shared HTTP plumbing for font sources and direct URL downloads."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from ..exceptions import FontSourceError
from ..settings import DEFAULT_HTTP_TIMEOUT
from ..settings import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_client(
    client: httpx.AsyncClient | None,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the injected client, or a short-lived one closed on exit."""
    if client is not None:
        yield client
        return

    async with httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": user_agent},
        follow_redirects=True,
    ) as owned:
        yield owned


async def fetch(
    client: httpx.AsyncClient,
    url: str,
    action: str,
    error_cls: type[FontSourceError] = FontSourceError,
    **kwargs: Any,
) -> httpx.Response:
    """
    GET a URL and require HTTP 200.

    Args:
        client: Client to send the request with
        url: Request URL
        action: Context phrase for error messages (e.g. "downloading font")
        error_cls: FontSourceError subclass to raise
        **kwargs: Passed to ``client.get`` (e.g. ``params``)

    Returns:
        The 200 response, body read

    Raises:
        FontSourceError: On transport errors or any non-200 status
    """
    logger.debug(f"GET {url}")
    try:
        response = await client.get(url, **kwargs)
    except httpx.HTTPError as e:
        raise error_cls(f"{action}: {e}", context={"url": url}) from e

    if response.status_code != httpx.codes.OK:
        raise error_cls(
            f"{action}: unexpected status code: {response.status_code}",
            context={"url": url, "status_code": response.status_code},
        )

    return response
