# conftest.py

import pytest
from unittest.mock import MagicMock, AsyncMock

from soncon.models import DeviceIdentity

SOAP_ENVELOPE = (
    '<?xml version="1.0"?>'
    '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/" '
    's:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">'
    "<s:Body>{body}</s:Body>"
    "</s:Envelope>"
)


def _soap_response(action, service, inner=""):
    body = f'<u:{action}Response xmlns:u="{service}">{inner}</u:{action}Response>'
    return SOAP_ENVELOPE.format(body=body).encode()


def _soap_fault(error_code):
    body = (
        "<s:Fault>"
        "<faultcode>s:Client</faultcode>"
        "<faultstring>UPnPError</faultstring>"
        "<detail>"
        '<UPnPError xmlns="urn:schemas-upnp-org:control-1-0">'
        f"<errorCode>{error_code}</errorCode>"
        "</UPnPError>"
        "</detail>"
        "</s:Fault>"
    )
    return SOAP_ENVELOPE.format(body=body).encode()


def _mock_response(status=200, body=b""):
    response = MagicMock(name="mock_response")
    response.status = status
    response.read = AsyncMock(return_value=body)
    return response


def _set_response(session, method, status=200, body=b""):
    context = getattr(session, method).return_value
    context.__aenter__.return_value = _mock_response(status, body)


@pytest.fixture
def soap_response():
    """Builder for a successful SOAP envelope: ``soap_response(action, service, inner)``."""
    return _soap_response


@pytest.fixture
def soap_fault():
    """Builder for a SOAP Fault envelope carrying a UPnP error code."""
    return _soap_fault


@pytest.fixture
def set_response():
    """Make ``session.<method>`` answer with ``status`` and ``body``."""
    return _set_response


@pytest.fixture
def mock_session():
    """
    Fixture for a mocked aiohttp.ClientSession.
    Simulates async context management and responses for GET and POST.
    """
    session = MagicMock(name="mock_aiohttp_session")
    for method in ("get", "post"):
        context = AsyncMock(name=f"mock_session_{method}_context")
        context.__aenter__.return_value = _mock_response()
        setattr(session, method, MagicMock(return_value=context))
    return session


@pytest.fixture
def identity():
    """Identity of a speaker at 10.0.0.6 grouped under RINCON_1."""
    return DeviceIdentity(
        address="10.0.0.6",
        model_name="Sonos One",
        model_number="S13",
        software_version="57.13-34140",
        hardware_version="1.8.3.7-1.0",
        serial_number="5C-AA-FD-49-94-0A:8",
        room_name="Den",
        uuid="RINCON_2",
    )
