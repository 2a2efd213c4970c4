"""SOAP envelope parsing.

Converts a raw callback body into a tree of plain Python objects keyed by
element local name, so payload handling never depends on the namespace
prefixes a controller happens to use:

- element with only text -> ``str`` (empty element -> ``""``)
- element with children or XML attributes -> ``dict``; attributes are
  stored under their local name, text content under ``"_"``
- repeated sibling elements -> ``list``

Because a single occurrence of a repeatable element collapses to a scalar,
consumers must coerce repeatable fields with
:func:`dsr_callback.soap.attributes.as_list` before iterating.
"""

import logging
from typing import Any

from lxml import etree

from ..utils.exceptions import EnvelopeParseError

logger = logging.getLogger(__name__)

# Key holding element text when the element also has attributes or children
TEXT_KEY = "_"

# Accepted request body content types
SOAP_CONTENT_TYPES = ("text/xml", "application/soap+xml")


def _make_parser(encoding: str | None = None) -> etree.XMLParser:
    # Callbacks come from devices we do not control
    return etree.XMLParser(
        encoding=encoding,
        remove_blank_text=True,
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
        huge_tree=False,
    )


def element_to_value(element: etree._Element) -> Any:
    """Convert an lxml element into a str, dict or nested structure.

    Args:
        element: Element to convert

    Returns:
        Text for leaf elements without attributes, otherwise a dict of
        attributes and children keyed by local name
    """
    children = [child for child in element.iterchildren() if isinstance(child.tag, str)]
    attributes = {etree.QName(key).localname: value for key, value in element.attrib.items()}
    text = (element.text or "").strip()

    if not children and not attributes:
        return text

    result: dict[str, Any] = dict(attributes)
    if text:
        result[TEXT_KEY] = text

    for child in children:
        key = etree.QName(child).localname
        value = element_to_value(child)
        # Create a list of values for multiple identical keys
        if key in result:
            if isinstance(result[key], list):
                result[key].append(value)
            else:
                result[key] = [result[key], value]
        else:
            result[key] = value

    return result


def parse_envelope_strict(body: str | bytes, encoding: str | None = None) -> dict[str, Any]:
    """Parse a SOAP envelope, raising on failure.

    Args:
        body: Raw request body
        encoding: Charset declared by the transport (Content-Type ``charset``).
            It overrides the XML declaration; without it bytes are decoded
            as the declaration says, or UTF-8. Ignored for ``str`` bodies.

    Returns:
        Single-key dict ``{root_local_name: root_value}``

    Raises:
        EnvelopeParseError: If the body is empty, the charset is unknown or
            the body is not well-formed XML
    """
    if isinstance(body, str):
        body = body.encode("utf-8")
        encoding = "utf-8"

    if not body or not body.strip():
        raise EnvelopeParseError("Empty request body")

    try:
        parser = _make_parser(encoding)
    except LookupError as e:
        raise EnvelopeParseError(f"Unsupported charset: {encoding}") from e

    try:
        root = etree.fromstring(body, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise EnvelopeParseError(f"Malformed XML: {e}") from e

    return {etree.QName(root).localname: element_to_value(root)}


def parse_envelope(
    body: str | bytes | None,
    encoding: str | None = None,
) -> dict[str, Any] | None:
    """Parse a SOAP envelope, returning None instead of raising.

    Args:
        body: Raw request body (None is treated as empty)
        encoding: Charset declared by the transport, see parse_envelope_strict

    Returns:
        Parsed tree, or None if the body could not be parsed
    """
    try:
        return parse_envelope_strict(body or b"", encoding=encoding)
    except EnvelopeParseError as e:
        logger.warning(f"XML parse error: {e}")
        return None
    except Exception as e:
        logger.error(f"Unexpected error parsing SOAP envelope: {e}", exc_info=True)
        return None


def get_path(node: Any, *keys: str) -> Any:
    """Walk nested dicts by key, returning None when any step is missing.

    Example:
        >>> get_path({"Envelope": {"Body": {"x": "1"}}}, "Envelope", "Body", "x")
        '1'
    """
    for key in keys:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def get_body(envelope: dict[str, Any] | None) -> Any:
    """Return the ``Envelope/Body`` subtree or None."""
    return get_path(envelope, "Envelope", "Body")
