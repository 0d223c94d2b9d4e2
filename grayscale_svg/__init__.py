"""Top-level package for grayscale-svg.

Front-ends (CLI, batch scripts, web handlers) should only depend on the public
API exposed here rather than importing internal modules directly.
"""

from .core.exceptions import GrayscaleError, InvalidOptionsError, MalformedDocumentError
from .core.models import ConversionResult, GrayscaleMethod, GrayscaleOptions
from .core.services import GrayscaleConversionService, convert_svg_to_grayscale

__all__: list[str] = [
    "ConversionResult",
    "GrayscaleConversionService",
    "GrayscaleError",
    "GrayscaleMethod",
    "GrayscaleOptions",
    "InvalidOptionsError",
    "MalformedDocumentError",
    "convert_svg_to_grayscale",
]
