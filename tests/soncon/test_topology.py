# test_topology.py
from dataclasses import replace

import pytest
from unittest.mock import ANY

from soncon.exceptions import SonosDeviceNotFoundException, SonosParseException
from soncon.topology import (
    async_get_coordinator,
    coordinator_address_from_location,
    coordinator_from_topology,
)

TOPOLOGY = """<?xml version="1.0" ?>
<?xml-stylesheet type="text/xsl" href="/xml/review.xsl"?>
<ZPSupportInfo>
  <ZonePlayers>
    <ZonePlayer group="RINCON_1:12" coordinator="true" wirelessmode="0"
        uuid="RINCON_1" location="{location}"
        version="57.13-34140" mincompatversion="56.0-00000">Kitchen</ZonePlayer>
    <ZonePlayer group="RINCON_1:12" coordinator="false" wirelessmode="0"
        uuid="RINCON_2" location="http://10.0.0.6:1400/xml/device_description.xml"
        version="57.13-34140">Den</ZonePlayer>
    <ZonePlayer group="RINCON_3:4" coordinator="true"
        uuid="RINCON_3" location="http://10.0.0.7:1400/xml/device_description.xml">Office</ZonePlayer>
  </ZonePlayers>
</ZPSupportInfo>
"""


def topology(location="http://10.0.0.5:1400/xml/device_description.xml"):
    return TOPOLOGY.format(location=location).encode()


class TestCoordinatorAddressFromLocation:
    @pytest.mark.parametrize(
        "location, address",
        [
            ("http://10.0.0.5:1400/xml", "10.0.0.5"),
            ("http://10.0.0.5:1400/xml/device_description.xml", "10.0.0.5"),
            ("https://10.0.0.5:1400/xml/device_description.xml", "10.0.0.5"),
        ],
    )
    def test_extracts_host(self, location, address):
        assert coordinator_address_from_location(location) == address

    @pytest.mark.parametrize(
        "location",
        [
            "ftp://10.0.0.5:1400/xml",
            "http://10.0.0.5:80/xml",
            "http://10.0.0.5/xml",
            "http://10.0.0.5:1400/status",
            "http://:1400/xml",
            "http://10.0.0.5:notaport/xml",
            "not a url",
        ],
    )
    def test_rejects_other_locations(self, location):
        with pytest.raises(SonosParseException):
            coordinator_address_from_location(location)


class TestCoordinatorFromTopology:
    """Tests for resolving a group coordinator from a topology document."""

    def test_member_resolves_to_group_coordinator(self, identity):
        assert coordinator_from_topology(topology(), identity) == "10.0.0.5"

    def test_coordinator_resolves_to_itself(self, identity):
        kitchen = replace(identity, address="10.0.0.5", uuid="RINCON_1")
        assert coordinator_from_topology(topology(), kitchen) == "10.0.0.5"

    def test_other_group_is_not_used(self, identity):
        office = replace(identity, address="10.0.0.7", uuid="RINCON_3")
        assert coordinator_from_topology(topology(), office) == "10.0.0.7"

    @pytest.mark.parametrize(
        "document",
        [
            b"",
            b"   \n",
            b'<?xml version="1.0" ?>\n',
            b'<?xml version="1.0" ?>\n<?xml-stylesheet type="text/xsl" href="/xml/review.xsl"?>\n',
            b'<?xml version="1.0" ?>\n<!-- no players -->\n',
            b"<ZPSupportInfo/>",
            b"<ZPSupportInfo><ZonePlayers/></ZPSupportInfo>",
        ],
    )
    def test_empty_topology_returns_own_address(self, identity, document):
        assert coordinator_from_topology(document, identity) == identity.address

    def test_unknown_uuid_is_device_not_found(self, identity):
        stranger = replace(identity, uuid="RINCON_9")
        with pytest.raises(SonosDeviceNotFoundException) as excinfo:
            coordinator_from_topology(topology(), stranger)
        assert excinfo.value.identifier == "RINCON_9"

    def test_group_without_coordinator_is_device_not_found(self, identity):
        document = topology().replace(b'coordinator="true" wirelessmode', b'coordinator="false" wirelessmode')
        with pytest.raises(SonosDeviceNotFoundException):
            coordinator_from_topology(document, identity)

    def test_unparsable_location_is_parse_error(self, identity):
        with pytest.raises(SonosParseException):
            coordinator_from_topology(topology("http://10.0.0.5:8080/xml"), identity)

    def test_malformed_document_is_parse_error(self, identity):
        with pytest.raises(SonosParseException):
            coordinator_from_topology(b"<ZPSupportInfo><ZonePlayers>", identity)


@pytest.mark.asyncio
class TestAsyncGetCoordinator:
    async def test_fetches_topology_from_device(self, mock_session, identity, set_response):
        set_response(mock_session, "get", body=topology())

        address = await async_get_coordinator(mock_session, identity)

        assert address == "10.0.0.5"
        mock_session.get.assert_called_once_with(
            "http://10.0.0.6:1400/status/topology", timeout=ANY
        )
