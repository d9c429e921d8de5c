from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING
from uuid import UUID

from .exceptions import MyAquinasProtocolError

if TYPE_CHECKING:
    from requests import Response

__all__ = [
    "build_auth_details",
    "parse_token",
    "parse_xml",
    "qualified_name",
    "xml_to_dict",
]


def build_auth_details(admission_number: str, password: str) -> bytes:
    """The body POSTed to the authentication endpoint."""
    root = ET.Element("AuthDetails")
    ET.SubElement(root, "AdmissionNo").text = admission_number
    ET.SubElement(root, "Password").text = password
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def parse_xml(response: str | bytes | Response) -> ET.Element:
    content = getattr(response, "content", response)

    try:
        return ET.fromstring(content)
    except ET.ParseError as ex:
        raise MyAquinasProtocolError(f"The server didn't return valid XML: {ex}") from ex


def qualified_name(tag: str, namespace: str = "") -> str:
    """ElementTree's `{namespace}tag` notation, or the bare tag without a namespace."""
    if not namespace:
        return tag
    return f"{{{namespace}}}{tag}"


def parse_token(root: ET.Element, namespace: str = "") -> UUID:
    element = root.find(qualified_name("Token", namespace))
    if element is None:
        raise MyAquinasProtocolError("Token not received")

    try:
        return UUID((element.text or "").strip())
    except ValueError:
        raise MyAquinasProtocolError(f"Received an invalid token: {element.text!r}") from None


def xml_to_dict(element, *, depth: int = 0):
    """
    Flatten an XML tree into nested dicts.

    Leaves become their text, repeated tags become lists. Namespaces are kept in the `{ns}tag` form.
    """
    if depth == 0 and isinstance(element, (str, bytes)):
        element = ET.XML(element.strip())

    result = {}

    for child in element:
        tag = child.tag
        if len(child) == 0:  # Leaf node?
            child_data = child.text
        else:
            child_data = xml_to_dict(child, depth=depth + 1)

        if tag in result:
            if not isinstance(result[tag], list):
                result[tag] = [result[tag]]
            result[tag].append(child_data)
        else:
            result[tag] = child_data

    return result
