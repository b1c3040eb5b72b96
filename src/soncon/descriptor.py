# soncon/descriptor.py
from __future__ import annotations

from typing import TYPE_CHECKING

from .consts import (
    DEFAULT_REQUEST_TIMEOUT,
    DEVICE_DESCRIPTION_PATH,
    SDK_LOGGER,
    UDN_PREFIX,
)
from .endpoint import SonosApiEndpoint
from .exceptions import SonosParseException
from .models import DeviceIdentity
from .xmlutils import get_child, get_child_text, parse_xml

if TYPE_CHECKING:
    from aiohttp import ClientSession


def uuid_from_udn(udn: str) -> str:
    """Strip the ``uuid:`` prefix from a UDN."""
    if not udn.startswith(UDN_PREFIX):
        raise SonosParseException(f"UDN {udn!r} does not start with {UDN_PREFIX!r}")
    uuid = udn[len(UDN_PREFIX) :].strip()
    if not uuid:
        raise SonosParseException(f"UDN {udn!r} carries no uuid")
    return uuid


def parse_device_description(document: bytes | str, address: str) -> DeviceIdentity:
    """Build a DeviceIdentity from a device_description.xml document.

    Every field is required; a missing one raises SonosParseException.
    """
    root = parse_xml(document, "device description")
    device = get_child(root, "device")

    return DeviceIdentity(
        address=address,
        model_name=get_child_text(device, "modelName"),
        model_number=get_child_text(device, "modelNumber"),
        software_version=get_child_text(device, "softwareVersion"),
        hardware_version=get_child_text(device, "hardwareVersion"),
        serial_number=get_child_text(device, "serialNum"),
        room_name=get_child_text(device, "roomName"),
        uuid=uuid_from_udn(get_child_text(device, "UDN").strip()),
    )


async def async_get_identity(
    session: ClientSession,
    address: str,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> DeviceIdentity:
    """Fetch and parse the device description of the speaker at ``address``."""
    endpoint = SonosApiEndpoint(address, session, timeout=timeout)
    document = await endpoint.get(DEVICE_DESCRIPTION_PATH)
    identity = parse_device_description(document, address)
    SDK_LOGGER.debug(
        "Device %s: %s (%s) in room %s",
        address,
        identity.uuid,
        identity.model_name,
        identity.room_name,
    )
    return identity
