# soncon/discovery.py
from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from async_upnp_client.search import async_search

from .consts import (
    DEFAULT_DISCOVERY_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    SDK_LOGGER,
    SONOS_SEARCH_TARGET,
    SONOS_URN,
)
from .descriptor import async_get_identity
from .exceptions import SonosException

if TYPE_CHECKING:
    from aiohttp import ClientSession
    from async_upnp_client.utils import CaseInsensitiveDict

    from .models import DeviceIdentity


def address_from_headers(headers: CaseInsensitiveDict) -> str | None:
    """Return the speaker address of an SSDP response.

    The LOCATION host wins; the packet's source host is the fallback.
    """
    location = (headers.get("location") or "").strip()
    if location:
        try:
            host = urlsplit(location).hostname
        except ValueError:
            host = None
        if host:
            return host
    return headers.get("_host")


def is_sonos_response(headers: CaseInsensitiveDict) -> bool:
    advertised = headers.get("st") or headers.get("usn") or ""
    return SONOS_URN in advertised


async def async_search_addresses(
    timeout: int = DEFAULT_DISCOVERY_TIMEOUT,
) -> list[str]:
    """Run an SSDP search and return the addresses of answering speakers.

    Waits the full ``timeout``; responses keep arriving until it elapses.
    """
    addresses: list[str] = []

    async def on_response(headers: CaseInsensitiveDict) -> None:
        if not is_sonos_response(headers):
            SDK_LOGGER.warning(
                "Misbehaving client responded to our discovery (%s)",
                headers.get("usn") or headers.get("st"),
            )
            return

        address = address_from_headers(headers)
        if not address:
            SDK_LOGGER.warning(
                "Discovery response without a usable location: %s",
                headers.get("location"),
            )
            return
        if address not in addresses:
            addresses.append(address)

    await async_search(
        async_callback=on_response,
        timeout=timeout,
        search_target=SONOS_SEARCH_TARGET,
    )
    SDK_LOGGER.debug("Discovery found %d speaker(s): %s", len(addresses), addresses)
    return addresses


async def async_discover(
    session: ClientSession,
    timeout: int = DEFAULT_DISCOVERY_TIMEOUT,
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> list[DeviceIdentity]:
    """Discover the speakers on the local network.

    Blocks for ``timeout`` seconds. A speaker whose description cannot be
    loaded is logged and left out of the result.
    """
    addresses = await async_search_addresses(timeout)
    if not addresses:
        return []

    results = await asyncio.gather(
        *(
            async_get_identity(session, address, timeout=request_timeout)
            for address in addresses
        ),
        return_exceptions=True,
    )

    identities: list[DeviceIdentity] = []
    for address, result in zip(addresses, results):
        if isinstance(result, SonosException):
            SDK_LOGGER.warning(
                "Device %s: skipped, failed to load description: %s", address, result
            )
            continue
        if isinstance(result, BaseException):
            raise result
        identities.append(result)
    return identities
