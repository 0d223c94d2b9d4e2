from __future__ import annotations

"""Markup parsing and serialisation helpers built on ``lxml``.

These helpers are side-effect-free and contain no disk I/O; they can be used
across all layers of the toolkit. They form the default parser/serializer pair
injected into :class:`grayscale_svg.core.services.GrayscaleConversionService`.
"""

from dataclasses import dataclass
import codecs
import logging
import re
from typing import Iterator, Union

from lxml import etree as ET

from grayscale_svg.core.exceptions import MalformedDocumentError

__all__ = [
    "SvgDocument",
    "parse_svg",
    "serialize_svg",
    "is_element",
    "local_name",
    "iter_elements",
]

logger = logging.getLogger(__name__)

_XML_DECLARATION_RE = re.compile(r"^\s*<\?xml\s")


def _has_xml_declaration(head: str) -> bool:
    # A leading byte-order mark is not whitespace to the regex
    return bool(_XML_DECLARATION_RE.match(head.lstrip("\ufeff")))


@dataclass
class SvgDocument:
    """Parsed document owned by a single conversion call.

    Attributes
    ----------
    tree
        ``lxml`` element tree (keeps DOCTYPE, top-level comments and PIs).
    xml_declaration
        Whether the source text started with an XML declaration; the
        serializer only writes one back in that case.
    """

    tree: ET._ElementTree
    xml_declaration: bool = False

    @property
    def root(self) -> ET._Element:
        return self.tree.getroot()


def _make_parser(encoding: Union[str, None] = None) -> ET.XMLParser:
    # Entities stay unresolved and nothing is fetched from the network.
    return ET.XMLParser(
        encoding=encoding,
        resolve_entities=False,
        no_network=True,
        remove_comments=False,
        remove_pis=False,
        strip_cdata=False,
        huge_tree=True,
    )


def parse_svg(text: Union[str, bytes]) -> SvgDocument:
    """Parse *text* into an :class:`SvgDocument`.

    ``str`` input is encoded as UTF-8 and parsed with the declared encoding
    overridden, so a declaration such as ``encoding="ISO-8859-1"`` does not
    garble already-decoded text. ``bytes`` input (a file read as-is) is
    decoded by the parser according to its BOM or declared encoding.

    Raises
    ------
    MalformedDocumentError
        If *text* is not well-formed XML.
    """
    if isinstance(text, str):
        text = text.lstrip("\ufeff")
        data = text.encode("utf-8")
        parser = _make_parser("utf-8")
        has_declaration = _has_xml_declaration(text)
    else:
        data = text
        parser = _make_parser()
        head = data[:256]
        if head.startswith(codecs.BOM_UTF8):
            head = head[len(codecs.BOM_UTF8):]
        has_declaration = _has_xml_declaration(head.decode("latin-1"))

    try:
        root = ET.fromstring(data, parser)
    except ET.XMLSyntaxError as exc:
        line, column = (exc.position if exc.position else (None, None))
        logger.error("Parse FAIL: malformed markup: %s", exc)
        raise MalformedDocumentError(f"Malformed SVG document: {exc.msg}",
                                     line=line, column=column, cause=exc) from exc

    if root is None:
        raise MalformedDocumentError("Malformed SVG document: no root element")

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Parse: root=%s bytes=%d declaration=%s",
                     local_name(root), len(data), has_declaration)
    return SvgDocument(tree=root.getroottree(), xml_declaration=has_declaration)


def serialize_svg(document: SvgDocument) -> str:
    """Serialise *document* back to text; the inverse of :func:`parse_svg`."""
    if document.xml_declaration:
        xml_bytes = ET.tostring(document.tree, encoding="UTF-8", xml_declaration=True)
        return xml_bytes.decode("utf-8")
    return ET.tostring(document.tree, encoding="unicode")


def is_element(node: ET._Element) -> bool:
    """Return *True* for real elements (not comments, PIs or entities)."""
    return isinstance(node.tag, str)


def local_name(node: ET._Element) -> str:
    """Return the tag name of *node* without its namespace ('' for non-elements)."""
    if not is_element(node):
        return ""
    return ET.QName(node).localname


def iter_elements(node: ET._Element) -> Iterator[ET._Element]:
    """Yield *node* and all descendant elements, depth-first pre-order."""
    return (el for el in node.iter() if is_element(el))
