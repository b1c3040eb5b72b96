# soncon/exceptions.py
from __future__ import annotations

from .consts import UpnpFault


class SonosException(Exception):
    """Base exception for everything raised by soncon."""


class SonosUnreachableException(SonosException):
    """The device could not be contacted (connection error or timeout)."""


class SonosBadResponseException(SonosException):
    """The device answered with a non-success HTTP status."""

    def __init__(self, status_code: int, url: str | None = None) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Received HTTP {status_code} from {url or 'device'}")


class SonosParseException(SonosException):
    """The response was malformed or did not have the expected structure."""

    def __init__(self, context: str) -> None:
        self.context = context
        super().__init__(f"Failed to parse Sonos response: {context}")


class SonosDeviceNotFoundException(SonosException):
    """A topology or group lookup found no matching device."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Couldn't find a device by the given identifier ({identifier})")


class SonosUpnpFaultException(SonosException):
    """The device answered a SOAP action with a UPnP Fault."""

    def __init__(
        self, fault: UpnpFault, error_code: int, action: str | None = None
    ) -> None:
        self.fault = fault
        self.error_code = error_code
        self.action = action
        super().__init__(
            f"UPnP error {error_code} ({fault.name}) received for {action or 'action'}"
        )


class SonosValidationException(SonosException, ValueError):
    """An argument was rejected before reaching the device."""
