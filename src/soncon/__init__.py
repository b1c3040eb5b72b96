"""Control Sonos speakers over UPnP/SOAP."""

from .consts import (
    AV_TRANSPORT,
    CONTENT_DIRECTORY,
    RENDERING_CONTROL,
    TransportState,
    UpnpFault,
    UpnpService,
)
from .descriptor import async_get_identity
from .discovery import async_discover
from .exceptions import (
    SonosBadResponseException,
    SonosDeviceNotFoundException,
    SonosException,
    SonosParseException,
    SonosUnreachableException,
    SonosUpnpFaultException,
    SonosValidationException,
)
from .models import DeviceIdentity, QueueItem, TrackInfo
from .soap import SoapRequest, async_dispatch, build_envelope
from .sonos_device import SonosDevice
from .topology import async_get_coordinator

__all__ = [
    "AV_TRANSPORT",
    "CONTENT_DIRECTORY",
    "RENDERING_CONTROL",
    "DeviceIdentity",
    "QueueItem",
    "SoapRequest",
    "SonosBadResponseException",
    "SonosDevice",
    "SonosDeviceNotFoundException",
    "SonosException",
    "SonosParseException",
    "SonosUnreachableException",
    "SonosUpnpFaultException",
    "SonosValidationException",
    "TrackInfo",
    "TransportState",
    "UpnpFault",
    "UpnpService",
    "async_discover",
    "async_dispatch",
    "async_get_coordinator",
    "async_get_identity",
    "build_envelope",
]
