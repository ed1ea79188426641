"""Parse and serialize XML/Atom payloads."""

from __future__ import annotations

from lxml import etree

from .errors import MalformedResponseError

_STRICT_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


def parse_xml(payload: str | bytes) -> etree._ElementTree:
    """Return the document tree for an XML payload.

    Text payloads are encoded first because lxml rejects unicode strings that
    carry an encoding declaration.
    """
    raw = payload.strip().encode() if isinstance(payload, str) else payload.strip()
    try:
        root = etree.fromstring(raw, _STRICT_PARSER)
    except etree.XMLSyntaxError as exc:
        raise MalformedResponseError(f"Invalid XML payload: {exc}") from exc
    if root is None:
        raise MalformedResponseError("Empty XML payload")
    return root.getroottree()


def ensure_xml_doc(
    content: str | bytes | etree._ElementTree | etree._Element,
) -> etree._ElementTree:
    """Parse ``content`` unless it already is a document or element."""
    if isinstance(content, etree._ElementTree):
        return content
    if isinstance(content, etree._Element):
        return content.getroottree()
    return parse_xml(content)


def serialize_xml(node: etree._ElementTree | etree._Element) -> str:
    """Serialize a document (with its doctype) or a single element to text."""
    return etree.tostring(node, encoding="unicode")


def text_content(node: object) -> str:
    """Return the text of an element, attribute or string XPath result."""
    if isinstance(node, etree._Element):
        return "".join(node.itertext())
    return str(node)
