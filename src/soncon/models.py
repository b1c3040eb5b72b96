# soncon/models.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class DeviceIdentity:
    """What a speaker says about itself in its device description."""

    address: str
    model_name: str
    model_number: str
    software_version: str
    hardware_version: str
    serial_number: str
    room_name: str
    uuid: str


@dataclass(frozen=True)
class TrackInfo:
    """The track currently loaded on a speaker."""

    title: str
    artist: str
    album: str | None
    queue_position: int
    uri: str
    duration: timedelta
    running_time: timedelta


@dataclass(frozen=True)
class QueueItem:
    position: int
    uri: str
    title: str
    artist: str | None = None
    album: str | None = None
    album_art_uri: str | None = None
    duration: timedelta | None = None
