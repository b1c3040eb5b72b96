# soncon/xmlutils.py
"""Small lookup helpers over ElementTree documents.

Children are matched on their exact local name, so ``Body`` finds
``{http://schemas.xmlsoap.org/soap/envelope/}Body`` and ``title`` finds
``dc:title``. Extra siblings and attributes are ignored.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from .exceptions import SonosParseException


def local_name(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an element tag."""
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return tag


def parse_xml(data: bytes | str, context: str = "document") -> ET.Element:
    """Parse a document, raising SonosParseException if it is not well-formed."""
    try:
        return ET.fromstring(data)
    except ET.ParseError as err:
        raise SonosParseException(f"{context} is not well-formed XML: {err}") from err


def find_child(node: ET.Element, name: str) -> ET.Element | None:
    """Return the first direct child named ``name`` or None."""
    for child in node:
        if isinstance(child.tag, str) and local_name(child.tag) == name:
            return child
    return None


def get_child(node: ET.Element, name: str) -> ET.Element:
    """Return the first direct child named ``name``."""
    child = find_child(node, name)
    if child is None:
        raise SonosParseException(
            f"element <{local_name(node.tag)}> has no child <{name}>"
        )
    return child


def get_text(node: ET.Element) -> str:
    """Return the text of ``node``; an element without text is an error."""
    if node.text is None:
        raise SonosParseException(f"element <{local_name(node.tag)}> has no text")
    return node.text


def get_child_text(node: ET.Element, name: str) -> str:
    return get_text(get_child(node, name))


def find_child_text(node: ET.Element, name: str) -> str | None:
    child = find_child(node, name)
    if child is None:
        return None
    return child.text
