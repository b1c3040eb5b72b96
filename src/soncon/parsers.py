# soncon/parsers.py
from __future__ import annotations

import re
from datetime import timedelta
import xml.etree.ElementTree as ET

from .consts import SDK_LOGGER, TransportState
from .exceptions import SonosParseException
from .models import QueueItem, TrackInfo
from .xmlutils import (
    find_child_text,
    get_child,
    get_child_text,
    get_text,
    local_name,
    parse_xml,
)

_DURATION = re.compile(r"^(\d+):(\d{1,2}):(\d{1,2})(?:\.\d+)?$")


def parse_duration(time_str: str | None) -> timedelta:
    """Parse an ``H:MM:SS`` (optionally ``.mmm``) string; hours are unbounded."""
    match = _DURATION.match(time_str.strip()) if time_str else None
    if match is None:
        raise SonosParseException(f"invalid duration {time_str!r}")
    hours, minutes, seconds = (int(part) for part in match.groups())
    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def format_duration(seconds: int) -> str:
    """Format seconds into HH:MM:SS string."""
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    return f"{h:02}:{m:02}:{s:02}"


def _parse_int(text: str, what: str) -> int:
    try:
        return int(text.strip())
    except ValueError as err:
        raise SonosParseException(f"{what} {text!r} is not an integer") from err


def parse_transport_state(response: ET.Element) -> TransportState:
    return TransportState.from_wire(
        get_child_text(response, "CurrentTransportState").strip()
    )


def parse_volume(response: ET.Element) -> int:
    return _parse_int(get_child_text(response, "CurrentVolume"), "CurrentVolume")


def parse_mute(response: ET.Element) -> bool:
    value = get_child_text(response, "CurrentMute").strip()
    if value not in ("0", "1"):
        raise SonosParseException(f"CurrentMute {value!r} is not 0 or 1")
    return value == "1"


def parse_track_info(response: ET.Element) -> TrackInfo:
    """Build a TrackInfo from a GetPositionInfoResponse element.

    ``TrackMetaData`` carries an escaped DIDL-Lite document; its item must
    have a title and creator, the album is optional.
    """
    metadata = parse_xml(get_child_text(response, "TrackMetaData"), "TrackMetaData")
    item = get_child(metadata, "item")

    return TrackInfo(
        title=get_child_text(item, "title"),
        artist=get_child_text(item, "creator"),
        album=find_child_text(item, "album"),
        queue_position=_parse_int(get_child_text(response, "Track"), "Track"),
        uri=get_child_text(response, "TrackURI"),
        duration=parse_duration(get_child_text(response, "TrackDuration")),
        running_time=parse_duration(get_child_text(response, "RelTime")),
    )


def _queue_position(item_id: str | None) -> int:
    if not item_id:
        raise SonosParseException("queue item has no id")
    return _parse_int(item_id.rsplit("/", 1)[-1], "queue position")


def _parse_queue_item(item: ET.Element) -> QueueItem:
    res = get_child(item, "res")
    duration_str = res.get("duration")

    return QueueItem(
        position=_queue_position(item.get("id")),
        uri=get_text(res).strip(),
        title=get_child_text(item, "title"),
        artist=find_child_text(item, "creator"),
        album=find_child_text(item, "album"),
        album_art_uri=find_child_text(item, "albumArtURI"),
        duration=parse_duration(duration_str) if duration_str else None,
    )


def parse_queue(response: ET.Element) -> list[QueueItem]:
    """Build the queue from a ContentDirectory BrowseResponse element."""
    result = get_child(response, "Result")
    if not result.text or not result.text.strip():
        return []

    didl = parse_xml(result.text, "queue Result")
    items = [
        _parse_queue_item(child)
        for child in didl
        if isinstance(child.tag, str) and local_name(child.tag) == "item"
    ]
    SDK_LOGGER.debug("Parsed %d queue items", len(items))
    return items
