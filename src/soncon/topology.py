# soncon/topology.py
"""Group coordinator lookup from the /status/topology document.

The document lists every ZonePlayer on the household::

    <ZPSupportInfo>
      <ZonePlayers>
        <ZonePlayer group="RINCON_1:12" coordinator="true" uuid="RINCON_1"
            location="http://10.0.0.5:1400/xml/device_description.xml">Kitchen</ZonePlayer>
        <ZonePlayer group="RINCON_1:12" coordinator="false" uuid="RINCON_2"
            location="http://10.0.0.6:1400/xml/device_description.xml">Den</ZonePlayer>
      </ZonePlayers>
    </ZPSupportInfo>
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from .consts import (
    COORDINATOR_LOCATION_PATH,
    DEFAULT_REQUEST_TIMEOUT,
    SDK_LOGGER,
    SONOS_HTTP_PORT,
    TOPOLOGY_PATH,
)
from .endpoint import SonosApiEndpoint
from .exceptions import SonosDeviceNotFoundException, SonosParseException
from .xmlutils import get_child, local_name, parse_xml

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from .models import DeviceIdentity

# served by older firmware ahead of the root element
_STYLESHEET_PI = re.compile(rb"<\?xml-stylesheet[^>]*\?>")
# declaration, processing instructions and comments carry no root element
_PROLOG = re.compile(rb"<\?.*?\?>|<!--.*?-->", re.DOTALL)


def coordinator_address_from_location(location: str) -> str:
    """Return the host of a ``http(s)://<host>:1400/xml...`` location."""
    try:
        parts = urlsplit(location.strip())
        port = parts.port
    except ValueError as err:
        raise SonosParseException(f"unparsable location {location!r}") from err

    if (
        parts.scheme not in ("http", "https")
        or port != SONOS_HTTP_PORT
        or not parts.hostname
        or not parts.path.startswith(COORDINATOR_LOCATION_PATH)
    ):
        raise SonosParseException(f"unexpected coordinator location {location!r}")
    return parts.hostname


def coordinator_from_topology(document: bytes, identity: DeviceIdentity) -> str:
    """Resolve the coordinator address of ``identity``'s group."""
    document = _STYLESHEET_PI.sub(b"", document)
    if not _PROLOG.sub(b"", document).strip():
        return identity.address

    root = parse_xml(document, "topology")
    if len(root) == 0:
        return identity.address

    zone_players = get_child(root, "ZonePlayers")
    players = [child for child in zone_players if isinstance(child.tag, str)]
    if not players:
        return identity.address

    own = next(
        (player for player in players if player.get("uuid") == identity.uuid), None
    )
    if own is None:
        raise SonosDeviceNotFoundException(identity.uuid)

    group = own.get("group")
    if group is None:
        raise SonosParseException(
            f"<{local_name(own.tag)}> for {identity.uuid} has no group attribute"
        )

    coordinator = next(
        (
            player
            for player in players
            if player.get("coordinator") == "true" and player.get("group") == group
        ),
        None,
    )
    if coordinator is None:
        raise SonosDeviceNotFoundException(identity.uuid)

    location = coordinator.get("location")
    if location is None:
        raise SonosParseException(f"coordinator of group {group} has no location")
    return coordinator_address_from_location(location)


async def async_get_coordinator(
    session: ClientSession,
    identity: DeviceIdentity,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> str:
    """Fetch the topology from ``identity``'s speaker and find its coordinator."""
    endpoint = SonosApiEndpoint(identity.address, session, timeout=timeout)
    document = await endpoint.get(TOPOLOGY_PATH)
    address = coordinator_from_topology(document, identity)
    SDK_LOGGER.debug("Device %s: coordinator is %s", identity.address, address)
    return address
