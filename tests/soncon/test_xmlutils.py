# test_xmlutils.py
import pytest

from soncon.exceptions import SonosParseException
from soncon.xmlutils import (
    find_child,
    find_child_text,
    get_child,
    get_child_text,
    get_text,
    local_name,
    parse_xml,
)

DOCUMENT = """
<root xmlns="urn:schemas-upnp-org:device-1-0" extra="ignored">
    <device>
        <modelName>Sonos One</modelName>
        <modelNameLong>not this one</modelNameLong>
        <empty/>
        <unknownSibling foo="bar">x</unknownSibling>
    </device>
</root>
"""


class TestXmlUtils:
    """Tests for the XML lookup helpers."""

    def test_local_name(self):
        assert local_name("{urn:x}Body") == "Body"
        assert local_name("Body") == "Body"

    def test_get_child_matches_exact_local_name(self):
        device = get_child(parse_xml(DOCUMENT), "device")
        assert get_child_text(device, "modelName") == "Sonos One"

    def test_no_partial_match(self):
        device = get_child(parse_xml(DOCUMENT), "device")
        with pytest.raises(SonosParseException):
            get_child(device, "model")
        assert find_child(device, "Name") is None

    def test_only_direct_children_are_searched(self):
        root = parse_xml(DOCUMENT)
        assert find_child(root, "modelName") is None

    def test_get_text_without_text_raises(self):
        device = get_child(parse_xml(DOCUMENT), "device")
        with pytest.raises(SonosParseException):
            get_text(get_child(device, "empty"))

    def test_find_child_text_optional(self):
        device = get_child(parse_xml(DOCUMENT), "device")
        assert find_child_text(device, "album") is None
        assert find_child_text(device, "empty") is None

    def test_malformed_document_is_distinct_from_missing_structure(self):
        with pytest.raises(SonosParseException) as malformed:
            parse_xml(b"<root><unclosed></root>", "device description")
        assert "not well-formed" in malformed.value.context

        with pytest.raises(SonosParseException) as missing:
            get_child(parse_xml(b"<root/>"), "device")
        assert "has no child <device>" in missing.value.context
