# soncon/sonos_device.py
from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any
from xml.sax.saxutils import escape

from .consts import (
    AV_TRANSPORT,
    CONTENT_DIRECTORY,
    DEFAULT_REQUEST_TIMEOUT,
    MAX_VOLUME,
    QUEUE_OBJECT_ID,
    RENDERING_CONTROL,
    SDK_LOGGER,
    TransportState,
    UpnpService,
)
from .descriptor import async_get_identity
from .exceptions import SonosException, SonosValidationException
from .models import DeviceIdentity, QueueItem, TrackInfo
from .parsers import (
    format_duration,
    parse_mute,
    parse_queue,
    parse_track_info,
    parse_transport_state,
    parse_volume,
)
from .soap import SoapRequest, async_dispatch
from .topology import async_get_coordinator

if TYPE_CHECKING:
    import xml.etree.ElementTree as ET

    from aiohttp import ClientSession


def _format_argument(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return escape(str(value))


def build_payload(**kwargs: Any) -> str:
    """Render keyword arguments as the argument elements of an action."""
    return "".join(
        f"<{name}>{_format_argument(value)}</{name}>" for name, value in kwargs.items()
    )


class SonosDevice:
    """
    A Sonos speaker, addressed by its identity, controlled over UPnP/SOAP.

    Holds no playback state: every getter queries the speaker.
    """

    def __init__(
        self,
        identity: DeviceIdentity,
        session: ClientSession,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        """Initialize the Sonos device."""
        self.identity = identity
        self._session = session
        self._timeout = timeout
        self.logger = SDK_LOGGER

    @classmethod
    async def async_from_address(
        cls,
        address: str,
        session: ClientSession,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> SonosDevice:
        """Load the device description of ``address`` and wrap it."""
        identity = await async_get_identity(session, address, timeout=timeout)
        return cls(identity, session, timeout=timeout)

    def __repr__(self) -> str:
        return f"<SonosDevice {self.name} ({self.ip_address})>"

    @property
    def name(self) -> str:
        """Return the room name of the device."""
        return self.identity.room_name

    @property
    def uuid(self) -> str:
        return self.identity.uuid

    @property
    def ip_address(self) -> str:
        return self.identity.address

    @property
    def model_name(self) -> str:
        return self.identity.model_name

    async def async_coordinator(self) -> str:
        """Return the address of the coordinator of this device's group."""
        return await async_get_coordinator(
            self._session, self.identity, timeout=self._timeout
        )

    async def async_call(
        self, request: SoapRequest, use_coordinator: bool = False
    ) -> ET.Element:
        """Send ``request`` to this device or to its group coordinator."""
        address = self.ip_address
        if use_coordinator:
            address = await self.async_coordinator()
        return await async_dispatch(self._session, address, request, timeout=self._timeout)

    async def _invoke_upnp_action(
        self,
        service: UpnpService,
        action_name: str,
        use_coordinator: bool = False,
        **kwargs: Any,
    ) -> ET.Element:
        """Helper to invoke a UPnP action."""
        if service is not CONTENT_DIRECTORY and "InstanceID" not in kwargs:
            kwargs = {"InstanceID": 0, **kwargs}

        request = SoapRequest.for_service(service, action_name, build_payload(**kwargs))
        try:
            self.logger.debug(
                "Device %s: Invoking UPnP Action %s with %s",
                self.name,
                request.soap_action,
                kwargs,
            )
            return await self.async_call(request, use_coordinator)
        except SonosException as err:
            self.logger.warning(
                "Device %s: UPnP action %s failed: %s",
                self.name,
                request.soap_action,
                err,
            )
            raise

    async def async_play(self) -> None:
        """Start or resume playback."""
        await self._invoke_upnp_action(
            AV_TRANSPORT, "Play", use_coordinator=True, Speed=1
        )

    async def async_pause(self) -> None:
        """Pause playback."""
        await self._invoke_upnp_action(AV_TRANSPORT, "Pause", use_coordinator=True)

    async def async_stop(self) -> None:
        """Stop playback."""
        await self._invoke_upnp_action(AV_TRANSPORT, "Stop", use_coordinator=True)

    async def async_next(self) -> None:
        """Play next track."""
        await self._invoke_upnp_action(AV_TRANSPORT, "Next", use_coordinator=True)

    async def async_previous(self) -> None:
        """Play previous track."""
        await self._invoke_upnp_action(AV_TRANSPORT, "Previous", use_coordinator=True)

    async def async_seek(self, position: int | timedelta) -> None:
        """Seek to a position in the current track (seconds or timedelta)."""
        if isinstance(position, timedelta):
            position = int(position.total_seconds())
        self._check_int(position, "Seek position")
        if position < 0:
            raise SonosValidationException(
                f"Seek position must not be negative, got {position}."
            )
        await self._invoke_upnp_action(
            AV_TRANSPORT,
            "Seek",
            use_coordinator=True,
            Unit="REL_TIME",
            Target=format_duration(position),
        )

    async def async_play_queue_item(self, position: int) -> None:
        """Jump to a queue position, beginning at 1."""
        self._check_queue_position(position)
        await self._invoke_upnp_action(
            AV_TRANSPORT, "Seek", use_coordinator=True, Unit="TRACK_NR", Target=position
        )

    async def async_remove_track(self, position: int) -> None:
        """Remove the track at a queue position, beginning at 1."""
        self._check_queue_position(position)
        await self._invoke_upnp_action(
            AV_TRANSPORT,
            "RemoveTrackFromQueue",
            use_coordinator=True,
            ObjectID=f"{QUEUE_OBJECT_ID}/{position}",
        )

    async def async_queue_track(self, uri: str) -> None:
        """Add a track to the end of the queue."""
        await self._add_uri_to_queue(uri, as_next=False)

    async def async_queue_next(self, uri: str) -> None:
        """Add a track to play after the current one."""
        await self._add_uri_to_queue(uri, as_next=True)

    async def _add_uri_to_queue(self, uri: str, as_next: bool) -> None:
        await self._invoke_upnp_action(
            AV_TRANSPORT,
            "AddURIToQueue",
            use_coordinator=True,
            EnqueuedURI=uri,
            EnqueuedURIMetaData="",
            DesiredFirstTrackNumberEnqueued=0,
            EnqueueAsNext=as_next,
        )

    async def async_play_track(self, uri: str) -> None:
        """Replace the current track with ``uri``."""
        await self._invoke_upnp_action(
            AV_TRANSPORT,
            "SetAVTransportURI",
            use_coordinator=True,
            CurrentURI=uri,
            CurrentURIMetaData="",
        )

    async def async_clear_queue(self) -> None:
        """Remove every track from the queue."""
        await self._invoke_upnp_action(
            AV_TRANSPORT, "RemoveAllTracksFromQueue", use_coordinator=True
        )

    async def async_get_volume(self) -> int:
        result = await self._invoke_upnp_action(
            RENDERING_CONTROL, "GetVolume", Channel="Master"
        )
        return parse_volume(result)

    async def async_set_volume(self, volume_percent: int) -> None:
        """Set volume (0-100)."""
        self._check_int(volume_percent, "Volume")
        if not 0 <= volume_percent <= MAX_VOLUME:
            raise SonosValidationException(
                f"Volume must be between 0 and {MAX_VOLUME}, got {volume_percent}."
            )
        await self._invoke_upnp_action(
            RENDERING_CONTROL,
            "SetVolume",
            Channel="Master",
            DesiredVolume=volume_percent,
        )

    async def async_get_mute(self) -> bool:
        result = await self._invoke_upnp_action(
            RENDERING_CONTROL, "GetMute", Channel="Master"
        )
        return parse_mute(result)

    async def async_set_mute(self, mute: bool) -> None:
        """Set mute state."""
        await self._invoke_upnp_action(
            RENDERING_CONTROL, "SetMute", Channel="Master", DesiredMute=mute
        )

    async def async_mute(self) -> None:
        await self.async_set_mute(True)

    async def async_unmute(self) -> None:
        await self.async_set_mute(False)

    async def async_get_transport_state(self) -> TransportState:
        result = await self._invoke_upnp_action(AV_TRANSPORT, "GetTransportInfo")
        return parse_transport_state(result)

    async def async_get_track(self) -> TrackInfo:
        """Get information about the current track."""
        result = await self._invoke_upnp_action(
            AV_TRANSPORT, "GetPositionInfo", use_coordinator=True
        )
        return parse_track_info(result)

    async def async_get_queue(self, start: int = 0, max_items: int = 100) -> list[QueueItem]:
        """List the queue, ``max_items`` entries from index ``start``."""
        self._check_int(start, "Queue start")
        self._check_int(max_items, "Queue size")
        if start < 0 or max_items < 0:
            raise SonosValidationException(
                f"Queue bounds must not be negative, got start={start}, max_items={max_items}."
            )
        result = await self._invoke_upnp_action(
            CONTENT_DIRECTORY,
            "Browse",
            ObjectID=QUEUE_OBJECT_ID,
            BrowseFlag="BrowseDirectChildren",
            Filter="*",
            StartingIndex=start,
            RequestedCount=max_items,
            SortCriteria="",
        )
        return parse_queue(result)

    @staticmethod
    def _check_int(value: Any, what: str) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SonosValidationException(
                f"{what} must be an integer, got {value!r}."
            )

    @classmethod
    def _check_queue_position(cls, position: int) -> None:
        cls._check_int(position, "Queue position")
        if position < 1:
            raise SonosValidationException(
                f"Queue positions begin at 1, got {position}."
            )
