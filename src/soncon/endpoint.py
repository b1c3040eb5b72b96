# soncon/endpoint.py
from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import aiohttp

from .consts import DEFAULT_REQUEST_TIMEOUT, SDK_LOGGER, SONOS_HTTP_PORT
from .exceptions import SonosBadResponseException, SonosUnreachableException

if TYPE_CHECKING:
    from aiohttp import ClientSession

_DEFAULT_PORTS = {"http": 80, "https": 443}


class SonosApiEndpoint:
    """HTTP access to the web server embedded in a Sonos speaker."""

    def __init__(
        self,
        endpoint: str,
        session: ClientSession,
        protocol: str = "http",
        port: int = SONOS_HTTP_PORT,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self._endpoint = endpoint
        self._session = session
        self._timeout = timeout

        host = f"[{endpoint}]" if ":" in endpoint else endpoint
        if _DEFAULT_PORTS.get(protocol) == port:
            self._base_url = f"{protocol}://{host}"
        else:
            self._base_url = f"{protocol}://{host}:{port}"

    def __str__(self) -> str:
        return self._base_url

    @property
    def host(self) -> str:
        return self._endpoint

    def url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    async def get(self, path: str) -> bytes:
        """GET ``path`` and return the body of a successful response."""
        url = self.url(path)
        try:
            async with self._session.get(
                url, timeout=aiohttp.ClientTimeout(total=self._timeout)
            ) as response:
                if not 200 <= response.status < 300:
                    raise SonosBadResponseException(response.status, url)
                return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            SDK_LOGGER.debug("GET %s failed: %s", url, err)
            raise SonosUnreachableException(f"Failed to call {url}: {err}") from err

    async def post(
        self, path: str, data: str, headers: dict[str, str]
    ) -> tuple[int, bytes]:
        """POST ``data`` to ``path`` and return the status and body.

        The body is returned for every status: UPnP reports faults with
        HTTP 500 and a SOAP envelope the caller has to decode.
        """
        url = self.url(path)
        try:
            async with self._session.post(
                url,
                data=data.encode("utf-8"),
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            ) as response:
                return response.status, await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            SDK_LOGGER.debug("POST %s failed: %s", url, err)
            raise SonosUnreachableException(f"Failed to call {url}: {err}") from err
