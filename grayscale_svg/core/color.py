from __future__ import annotations

"""Colour parsing and grayscale conversion.

Parsing is delegated to Pillow's :func:`PIL.ImageColor.getrgb`, which knows
hex notations (3, 4, 6 and 8 digits), the CSS/X11 colour names, ``rgb()``,
``hsl()`` and ``hsv()``. CSS functional notations with a fractional or
percentage alpha (``rgba(255, 0, 0, 0.5)``, ``hsla(0, 100%, 50%, 50%)``) are
not understood by Pillow, so their alpha is split off here and the colour part
is handed to Pillow on its own.

Two conversions are provided:

* ``GrayscaleMethod.HSL`` keeps HSL lightness and removes saturation, fully
  (strength 100) or proportionally (strength < 100).
* ``GrayscaleMethod.LUMINANCE`` maps each colour to
  ``Y = 0.299 R + 0.587 G + 0.114 B``.

Both keep the source alpha. Output is lowercase ``#rrggbb`` for opaque colours
and ``#rrggbbaa`` otherwise.
"""

import colorsys
import logging
import re
from typing import Callable, Optional

from PIL import ImageColor

from grayscale_svg.core.models import ColorCache, GrayscaleMethod, GrayscaleOptions, RGBAColor

__all__ = [
    "ColorParser",
    "ColorConverter",
    "parse_color",
    "format_hex",
    "luminance_gray",
    "desaturate",
    "to_gray",
]

logger = logging.getLogger(__name__)

ColorParser = Callable[[str], Optional[RGBAColor]]

# rgb()/rgba()/hsl()/hsla() with the arguments captured as one group
_FUNCTIONAL_RE = re.compile(r"^(rgb|hsl)a?\((.*)\)$", re.IGNORECASE)
_ALPHA_RE = re.compile(r"^(\d+(?:\.\d*)?|\.\d+)(%?)$")


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def _parse_alpha(token: str) -> Optional[int]:
    """Return a CSS alpha token (``0.5`` or ``50%``) as a 0-255 byte."""
    match = _ALPHA_RE.match(token.strip())
    if not match:
        return None
    fraction = float(match.group(1))
    if match.group(2):
        fraction /= 100.0
    fraction = max(0.0, min(1.0, fraction))
    return _round_half_up(fraction * 255)


def parse_color(value: str) -> Optional[RGBAColor]:
    """Parse *value* into an :class:`RGBAColor`, or ``None`` if unrecognised.

    Never raises for bad input; ``inherit``, ``currentColor`` and similar
    keywords simply return ``None``.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    alpha = 255

    match = _FUNCTIONAL_RE.match(text)
    if match:
        args = [part.strip() for part in match.group(2).split(",")]
        if len(args) == 4:
            parsed_alpha = _parse_alpha(args[3])
            if parsed_alpha is None:
                return None
            alpha = parsed_alpha
            args = args[:3]
        if len(args) != 3:
            return None
        text = f"{match.group(1).lower()}({', '.join(args)})"

    try:
        channels = ImageColor.getrgb(text)
    except ValueError:
        return None

    if len(channels) == 4:
        r, g, b, a = channels
        if alpha == 255:
            alpha = a
    else:
        r, g, b = channels
    # Pillow does not clamp rgb(300, 0, 0)
    r, g, b = (max(0, min(255, int(c))) for c in (r, g, b))
    return RGBAColor(r, g, b, int(alpha))


def format_hex(color: RGBAColor) -> str:
    """Format *color* as ``#rrggbb`` (opaque) or ``#rrggbbaa``."""
    if color.is_opaque:
        return f"#{color.r:02x}{color.g:02x}{color.b:02x}"
    return f"#{color.r:02x}{color.g:02x}{color.b:02x}{color.a:02x}"


def luminance_gray(color: RGBAColor) -> RGBAColor:
    """Map *color* to the gray of equal perceptual luminance (BT.601 weights)."""
    y = 0.299 * color.r + 0.587 * color.g + 0.114 * color.b
    gray = max(0, min(255, _round_half_up(y)))
    return RGBAColor(gray, gray, gray, color.a)


def desaturate(color: RGBAColor, strength: int = 100) -> RGBAColor:
    """Remove *strength* percent of the HSL saturation, keeping lightness.

    At 100 the saturation is zeroed, so the result is the gray with the same
    HSL lightness. Lower values scale saturation by ``1 - strength / 100``.
    """
    h, l, s = colorsys.rgb_to_hls(color.r / 255.0, color.g / 255.0, color.b / 255.0)
    if strength >= 100:
        s = 0.0
    else:
        s *= 1.0 - strength / 100.0
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return RGBAColor(
        _round_half_up(r * 255),
        _round_half_up(g * 255),
        _round_half_up(b * 255),
        color.a,
    )


class ColorConverter:
    """Converts colour strings to gray for one set of options.

    The optional *cache* is keyed by ``(original, strength, method)``. It is a
    pure optimisation: results are identical with or without it.
    """

    def __init__(self, options: Optional[GrayscaleOptions] = None,
                 cache: Optional[ColorCache] = None,
                 parser: Optional[ColorParser] = None) -> None:
        self.options = options or GrayscaleOptions()
        self.cache = cache
        self.parser = parser or parse_color

    def convert(self, original: str) -> str:
        key = (original, self.options.strength, self.options.method)
        if self.cache is not None and key in self.cache:
            return self.cache[key]

        parsed = self.parser(original)
        if parsed is None:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Color: unparseable value kept as-is value=%r", original)
            result = original
        elif self.options.method is GrayscaleMethod.LUMINANCE:
            result = format_hex(luminance_gray(parsed))
        else:
            result = format_hex(desaturate(parsed, self.options.strength))

        if self.cache is not None:
            self.cache[key] = result
        return result

    __call__ = convert


def to_gray(original: str, options: Optional[GrayscaleOptions] = None,
            cache: Optional[ColorCache] = None,
            parser: Optional[ColorParser] = None) -> str:
    """Convert a single colour string; see :class:`ColorConverter`."""
    return ColorConverter(options, cache, parser).convert(original)
