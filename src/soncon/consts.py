# soncon/consts.py
from __future__ import annotations

import logging
from enum import Enum, StrEnum
from typing import NamedTuple

SDK_LOGGER = logging.getLogger("soncon")

SONOS_HTTP_PORT = 1400
SONOS_URN = "schemas-upnp-org:device:ZonePlayer:1"
SONOS_SEARCH_TARGET = f"urn:{SONOS_URN}"

DEVICE_DESCRIPTION_PATH = "xml/device_description.xml"
TOPOLOGY_PATH = "status/topology"
COORDINATOR_LOCATION_PATH = "/xml"

DEFAULT_REQUEST_TIMEOUT = 10
DEFAULT_DISCOVERY_TIMEOUT = 2

UDN_PREFIX = "uuid:"

SOAP_ENVELOPE_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP_ENCODING_NS = "http://schemas.xmlsoap.org/soap/encoding/"
SOAP_CONTENT_TYPE = "application/xml"

QUEUE_OBJECT_ID = "Q:0"
MAX_VOLUME = 100


class UpnpService(NamedTuple):
    """Control endpoint path and service type of a UPnP service."""

    endpoint: str
    service_type: str


AV_TRANSPORT = UpnpService(
    "MediaRenderer/AVTransport/Control",
    "urn:schemas-upnp-org:service:AVTransport:1",
)
RENDERING_CONTROL = UpnpService(
    "MediaRenderer/RenderingControl/Control",
    "urn:schemas-upnp-org:service:RenderingControl:1",
)
CONTENT_DIRECTORY = UpnpService(
    "MediaServer/ContentDirectory/Control",
    "urn:schemas-upnp-org:service:ContentDirectory:1",
)


class TransportState(StrEnum):
    """Transport state as reported by GetTransportInfo."""

    STOPPED = "STOPPED"
    PLAYING = "PLAYING"
    PAUSED_PLAYBACK = "PAUSED_PLAYBACK"
    PAUSED_RECORDING = "PAUSED_RECORDING"
    RECORDING = "RECORDING"
    TRANSITIONING = "TRANSITIONING"
    NO_MEDIA_PRESENT = "NO_MEDIA_PRESENT"

    @classmethod
    def from_wire(cls, value: str | None) -> TransportState:
        """Map a wire value to a state, falling back to STOPPED."""
        try:
            return cls(value)
        except ValueError:
            SDK_LOGGER.debug(
                "Unknown transport state %r, treating as %s", value, cls.STOPPED
            )
            return cls.STOPPED


class UpnpFault(Enum):
    """UPnP error codes returned in a SOAP Fault."""

    INVALID_ACTION = 401
    INVALID_ARGS = 402
    INVALID_VAR = 404
    ACTION_FAILED = 501
    TRANSITION_NOT_AVAILABLE = 701
    NO_CONTENTS = 702
    READ_ERROR = 703
    FORMAT_NOT_SUPPORTED = 704
    TRANSPORT_LOCKED = 705
    WRITE_ERROR = 706
    MEDIA_NOT_WRITEABLE = 707
    RECORDING_FORMAT_NOT_SUPPORTED = 708
    MEDIA_FULL = 709
    SEEK_MODE_NOT_SUPPORTED = 710
    ILLEGAL_SEEK_TARGET = 711
    PLAY_MODE_NOT_SUPPORTED = 712
    RECORD_QUALITY_NOT_SUPPORTED = 713
    ILLEGAL_MIME_TYPE = 714
    CONTENT_BUSY = 715
    PLAY_SPEED_NOT_SUPPORTED = 717
    INVALID_INSTANCE_ID = 718
    NO_DNS_SERVER = 737
    BAD_DOMAIN_NAME = 738
    SERVER_ERROR = 739
    UNKNOWN = 0

    @classmethod
    def from_code(cls, code: int) -> UpnpFault:
        """Resolve a numeric error code, unknown codes map to UNKNOWN."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN
