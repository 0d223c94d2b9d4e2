from __future__ import annotations

"""Depth-first rewrite of colour-bearing attributes.

Only attribute values change: no element is added, removed or reordered.
``none`` and paint-server references (``url(#gradient)``) are left untouched
because they are structural, not chromatic.
"""

import logging
from typing import Optional, Tuple

from lxml import etree as ET

from grayscale_svg.core.color import ColorConverter, ColorParser
from grayscale_svg.core.models import ColorCache, GrayscaleOptions
from grayscale_svg.core.utils import is_element, local_name

__all__ = ["PAINT_ATTRIBUTES", "traverse_and_grayscale"]

logger = logging.getLogger(__name__)

PAINT_ATTRIBUTES: Tuple[str, ...] = ("fill", "stroke", "color")

_NO_PAINT = "none"
_PAINT_SERVER_PREFIX = "url("


def _rewrite_element(element: ET._Element, converter: ColorConverter) -> int:
    changed = 0
    for name in PAINT_ATTRIBUTES:
        value = element.get(name)
        if value is None or value == _NO_PAINT or value.startswith(_PAINT_SERVER_PREFIX):
            continue
        gray = converter.convert(value)
        if gray != value:
            element.set(name, gray)
            changed += 1

    # Gradient stops always hold literal colours.
    if local_name(element) == "stop":
        value = element.get("stop-color")
        if value is not None and value != _NO_PAINT:
            gray = converter.convert(value)
            if gray != value:
                element.set("stop-color", gray)
                changed += 1
    return changed


def traverse_and_grayscale(element: ET._Element, options: Optional[GrayscaleOptions] = None,
                           cache: Optional[ColorCache] = None,
                           color_parser: Optional[ColorParser] = None) -> int:
    """Convert ``fill``/``stroke``/``color`` and stop colours under *element*.

    Expects :func:`grayscale_svg.core.styles.expand_style_attributes` to have
    run first; colours still inside ``style`` are not seen here.

    Returns the number of attribute values that changed.
    """
    converter = ColorConverter(options, cache, color_parser)

    def _walk(node: ET._Element) -> int:
        if not is_element(node):
            return 0
        changed = _rewrite_element(node, converter)
        for child in node:
            changed += _walk(child)
        return changed

    changed = _walk(element)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Walk: method=%s strength=%d changed=%d",
                     converter.options.method.value, converter.options.strength, changed)
    return changed
