from __future__ import annotations

"""Inline-style normalisation and ``<style>`` element detection.

``style="fill:red;stroke:blue"`` declarations are lifted into first-class
attributes so the tree walker only has to look at attributes. Style sheets in
``<style>`` elements are not interpreted; they are only reported.
"""

import logging
from typing import Optional, Tuple

from lxml import etree as ET

from grayscale_svg.core.diagnostics import Diagnostic, DiagnosticSink
from grayscale_svg.core.utils import is_element, iter_elements, local_name

__all__ = [
    "COLOR_STYLE_PROPERTIES",
    "parse_style_declarations",
    "expand_style_attributes",
    "detect_style_elements",
]

logger = logging.getLogger(__name__)

COLOR_STYLE_PROPERTIES: Tuple[str, ...] = ("fill", "stroke", "color", "stop-color")

STYLE_ELEMENT_WARNING = (
    "Detected <style> element. Inline/external CSS rules are not supported "
    "by this converter; colors set only through them stay unconverted."
)


def parse_style_declarations(style: str) -> list[Tuple[str, str]]:
    """Split a ``style`` attribute value into ``(property, value)`` pairs.

    Empty declarations and declarations without ``:`` are skipped. Only the
    first ``:`` separates property from value.
    """
    pairs: list[Tuple[str, str]] = []
    for decl in style.split(";"):
        decl = decl.strip()
        if not decl or ":" not in decl:
            continue
        prop, value = decl.split(":", 1)
        pairs.append((prop.strip(), value.strip()))
    return pairs


def expand_style_attributes(element: ET._Element) -> None:
    """Move colour declarations from ``style`` into attributes, recursively.

    Recognised properties overwrite same-named attributes; everything else in
    the declaration is dropped. The ``style`` attribute is always removed.
    """
    if not is_element(element):
        return

    style = element.get("style")
    if style is not None:
        for prop, value in parse_style_declarations(style):
            if prop in COLOR_STYLE_PROPERTIES:
                element.set(prop, value)
        del element.attrib["style"]

    for child in element:
        expand_style_attributes(child)


def detect_style_elements(element: ET._Element, sink: Optional[DiagnosticSink] = None) -> int:
    """Report every ``<style>`` element under *element*; return how many.

    Findings go to *sink* when one is given, otherwise they are logged as
    warnings. Read-only: the tree is never modified and nothing is raised.
    """
    found = 0
    for node in iter_elements(element):
        if local_name(node) != "style":
            continue
        found += 1
        if sink is None:
            logger.warning(STYLE_ELEMENT_WARNING)
            continue
        logger.debug("Detect: <style> element at line %s", node.sourceline)
        sink.emit(Diagnostic(
            level="WARNING",
            code="unsupported-style-element",
            message=STYLE_ELEMENT_WARNING,
            details={"line": node.sourceline},
        ))
    return found
