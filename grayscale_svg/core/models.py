from __future__ import annotations

"""Shared data structures used across the grayscale core.

This module is intentionally free of I/O so that the contained objects can be
reused in any context (unit-tests, CLI, batch runs, etc.).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from grayscale_svg.core.exceptions import InvalidOptionsError

__all__ = [
    "GrayscaleMethod",
    "GrayscaleOptions",
    "RGBAColor",
    "ColorCache",
    "ConversionResult",
]


class GrayscaleMethod(str, Enum):
    """Available grayscale algorithms."""

    HSL = "hsl"
    LUMINANCE = "luminance"

    @classmethod
    def parse(cls, value: Any) -> "GrayscaleMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(m.value for m in cls)
            raise InvalidOptionsError(
                f"Unknown grayscale method {value!r}. Expected one of: {choices}", cause=exc
            ) from exc


@dataclass(frozen=True)
class GrayscaleOptions:
    """Conversion configuration.

    Attributes
    ----------
    method
        Grayscale algorithm. Defaults to the lightness-preserving HSL method.
    strength
        Desaturation amount 0-100. Only the HSL method honours it; the
        luminance method always converts fully.
    """

    method: GrayscaleMethod = GrayscaleMethod.HSL
    strength: int = 100

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", GrayscaleMethod.parse(self.method))
        if isinstance(self.strength, bool) or not isinstance(self.strength, int):
            raise InvalidOptionsError(f"Strength must be an integer, got {self.strength!r}")
        if not 0 <= self.strength <= 100:
            raise InvalidOptionsError(f"Strength must be between 0 and 100, got {self.strength}")

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "GrayscaleOptions":
        """Build options from a config/CLI dictionary.

        Accepts ``method`` or ``grayscale_method`` and ``strength`` or
        ``desaturation_amount``. Missing keys keep the defaults.
        """
        data = data or {}
        method = data.get("method", data.get("grayscale_method", GrayscaleMethod.HSL))
        strength = data.get("strength", data.get("desaturation_amount", 100))
        if isinstance(strength, str) and strength.strip().isdigit():
            strength = int(strength.strip())
        return cls(method=method, strength=strength)


@dataclass(frozen=True)
class RGBAColor:
    """Parsed colour with 0-255 integer channels."""

    r: int
    g: int
    b: int
    a: int = 255

    @property
    def is_opaque(self) -> bool:
        return self.a == 255

    @property
    def alpha(self) -> float:
        """Alpha as a 0.0-1.0 fraction."""
        return self.a / 255.0


# (original colour string, strength, method) -> converted colour string
ColorCache = Dict[Tuple[str, int, GrayscaleMethod], str]


@dataclass
class ConversionResult:
    """Outcome of one document conversion.

    Attributes
    ----------
    content
        Serialised output document.
    options
        Options the conversion ran with.
    diagnostics
        Non-fatal diagnostics collected during the call.
    style_elements
        Number of ``<style>`` elements found (left unconverted).
    converted_attributes
        Number of attribute values whose text changed.
    cached_colors
        Number of distinct colour conversions memoised during the call.
    """

    content: str
    options: GrayscaleOptions
    diagnostics: List[Any] = field(default_factory=list)
    style_elements: int = 0
    converted_attributes: int = 0
    cached_colors: int = 0

    @property
    def has_warnings(self) -> bool:
        return bool(self.diagnostics)
