from __future__ import annotations

"""High-level orchestration services (single conversion, batch runs, comparison page)."""

from .conversion_service import GrayscaleConversionService, convert_svg_to_grayscale  # noqa: F401
from .batch_service import BatchConversionService, BatchItem, BatchReport  # noqa: F401
from .compare_service import build_compare_html, write_compare_page  # noqa: F401

__all__: list[str] = [
    "GrayscaleConversionService",
    "convert_svg_to_grayscale",
    "BatchConversionService",
    "BatchItem",
    "BatchReport",
    "build_compare_html",
    "write_compare_page",
]
