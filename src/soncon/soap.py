# soncon/soap.py
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
import xml.etree.ElementTree as ET

from .consts import (
    DEFAULT_REQUEST_TIMEOUT,
    SDK_LOGGER,
    SOAP_CONTENT_TYPE,
    SOAP_ENCODING_NS,
    SOAP_ENVELOPE_NS,
    UpnpFault,
    UpnpService,
)
from .endpoint import SonosApiEndpoint
from .exceptions import (
    SonosBadResponseException,
    SonosParseException,
    SonosUpnpFaultException,
)
from .xmlutils import find_child, get_child, get_child_text, parse_xml

if TYPE_CHECKING:
    from aiohttp import ClientSession


def build_envelope(service: str, action: str, payload: str) -> str:
    """Wrap an action and its argument fragment in a SOAP 1.1 envelope.

    ``payload`` is inserted verbatim and must already be escaped.
    """
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f'<s:Envelope xmlns:s="{SOAP_ENVELOPE_NS}" s:encodingStyle="{SOAP_ENCODING_NS}">'
        "<s:Body>"
        f'<u:{action} xmlns:u="{service}">'
        f"{payload}"
        f"</u:{action}>"
        "</s:Body>"
        "</s:Envelope>"
    )


@dataclass(frozen=True)
class SoapRequest:
    """One UPnP action call: where it goes, what it carries, what answers it."""

    endpoint: str
    service: str
    action: str
    payload: str = ""

    @classmethod
    def for_service(
        cls, service: UpnpService, action: str, payload: str = ""
    ) -> SoapRequest:
        return cls(service.endpoint, service.service_type, action, payload)

    @property
    def response_tag(self) -> str:
        return f"{self.action}Response"

    @property
    def soap_action(self) -> str:
        return f'"{self.service}#{self.action}"'

    @property
    def headers(self) -> dict[str, str]:
        return {"Content-Type": SOAP_CONTENT_TYPE, "SOAPAction": self.soap_action}

    @property
    def envelope(self) -> str:
        return build_envelope(self.service, self.action, self.payload)


def _decode_fault(fault: ET.Element, request: SoapRequest) -> SonosUpnpFaultException:
    detail = get_child(fault, "detail")
    upnp_error = get_child(detail, "UPnPError")
    code_text = get_child_text(upnp_error, "errorCode").strip()
    try:
        code = int(code_text)
    except ValueError as err:
        raise SonosParseException(f"UPnP errorCode {code_text!r} is not an integer") from err

    fault_kind = UpnpFault.from_code(code)
    SDK_LOGGER.error(
        "Got %s (%s) from %s#%s call", fault_kind.name, code, request.service, request.action
    )
    return SonosUpnpFaultException(fault_kind, code, request.action)


def decode_response(status: int, body: bytes, request: SoapRequest) -> ET.Element:
    """Turn a SOAP response into the ``{action}Response`` element.

    A Fault is decoded whatever the HTTP status is; a non-2xx status
    without a Fault is a bad response.
    """
    ok = 200 <= status < 300
    try:
        envelope = parse_xml(body, f"{request.action} response")
        soap_body = get_child(envelope, "Body")
    except SonosParseException as err:
        if not ok:
            raise SonosBadResponseException(status) from err
        raise

    fault = find_child(soap_body, "Fault")
    if fault is not None:
        raise _decode_fault(fault, request)

    if not ok:
        raise SonosBadResponseException(status)

    return get_child(soap_body, request.response_tag)


async def async_dispatch(
    session: ClientSession,
    address: str,
    request: SoapRequest,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> ET.Element:
    """POST ``request`` to the speaker at ``address`` and decode the answer."""
    endpoint = SonosApiEndpoint(address, session, timeout=timeout)
    SDK_LOGGER.debug("Running %s#%s on %s", request.service, request.action, address)
    status, body = await endpoint.post(request.endpoint, request.envelope, request.headers)
    return decode_response(status, body, request)
