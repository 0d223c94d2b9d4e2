from __future__ import annotations

"""High-level grayscale conversion service.

Entry-point for any front-end (CLI, batch runner, API) that needs to turn an
SVG document into its grayscale equivalent. Parser, serializer and colour
parser are injected so that host-specific wiring stays outside the core.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Optional, Union

from grayscale_svg.core.color import ColorParser, parse_color
from grayscale_svg.core.diagnostics import CollectingSink, DiagnosticSink, FanOutSink, LoggingSink
from grayscale_svg.core.models import ColorCache, ConversionResult, GrayscaleMethod, GrayscaleOptions
from grayscale_svg.core.styles import detect_style_elements, expand_style_attributes
from grayscale_svg.core.utils import SvgDocument, parse_svg, serialize_svg
from grayscale_svg.core.walker import traverse_and_grayscale

logger = logging.getLogger(__name__)

__all__ = ["GrayscaleConversionService", "convert_svg_to_grayscale"]

Parser = Callable[[Union[str, bytes]], SvgDocument]
Serializer = Callable[[SvgDocument], str]

SUPPORTED_EXTENSIONS = (".svg",)


class GrayscaleConversionService:
    """Business-logic façade for one-document conversions.

    The instance only holds its (immutable) collaborators. Every call parses
    its own tree, builds its own colour cache and collects its own
    diagnostics, so one service may be shared between threads.
    """

    def __init__(self, parser: Optional[Parser] = None,
                 serializer: Optional[Serializer] = None,
                 color_parser: Optional[ColorParser] = None,
                 sink: Optional[DiagnosticSink] = None,
                 use_cache: bool = True) -> None:
        self.parser = parser or parse_svg
        self.serializer = serializer or serialize_svg
        self.color_parser = color_parser or parse_color
        self.sink = sink if sink is not None else LoggingSink(logger)
        self.use_cache = use_cache
        self.logger = logger

    # ---------------------------------------------------------------------
    # PUBLIC API
    # ---------------------------------------------------------------------
    def convert_document(self, svg_text: Union[str, bytes],
                         options: Optional[GrayscaleOptions] = None) -> str:
        """Return *svg_text* with every colour converted to gray.

        Raises
        ------
        MalformedDocumentError
            If *svg_text* is not well-formed; no output is produced.
        """
        return self.convert_document_with_report(svg_text, options).content

    def convert_document_with_report(self, svg_text: Union[str, bytes],
                                     options: Optional[GrayscaleOptions] = None) -> ConversionResult:
        """Like :meth:`convert_document` but also return diagnostics and counts.

        *svg_text* may be raw ``bytes``, in which case the parser honours the
        document's BOM or declared encoding.
        """
        options = options or GrayscaleOptions()
        collected = CollectingSink()
        sink = FanOutSink(collected, self.sink)

        self.logger.debug("Convert: parsing document chars=%d", len(svg_text))
        document = self.parser(svg_text)
        root = document.root

        style_elements = detect_style_elements(root, sink)
        expand_style_attributes(root)

        cache: Optional[ColorCache] = {} if self.use_cache else None
        converted = traverse_and_grayscale(root, options, cache, self.color_parser)

        content = self.serializer(document)
        self.logger.info(
            "Convert: done method=%s strength=%d converted=%d style_elements=%d",
            options.method.value, options.strength, converted, style_elements,
        )
        return ConversionResult(
            content=content,
            options=options,
            diagnostics=list(collected.diagnostics),
            style_elements=style_elements,
            converted_attributes=converted,
            cached_colors=len(cache) if cache is not None else 0,
        )

    def can_handle_file(self, file_path: str | Path) -> bool:
        return Path(file_path).suffix.lower() in SUPPORTED_EXTENSIONS

    def convert_file(self, input_path: str | Path, output_path: str | Path | None = None,
                     options: Optional[GrayscaleOptions] = None) -> ConversionResult:
        """Convert the SVG file at *input_path*.

        The file is read as bytes so that its declared encoding is honoured.
        When *output_path* is given the result is also written there (UTF-8).
        """
        input_path = Path(input_path)
        self.logger.debug("Converting file -> grayscale: %s", input_path)

        if not input_path.exists():
            raise FileNotFoundError(f"Input file not found: {input_path}")
        if not input_path.is_file():
            raise ValueError(f"Path is not a file: {input_path}")

        result = self.convert_document_with_report(
            input_path.read_bytes(), options
        )

        if output_path is not None:
            output_path = Path(output_path)
            try:
                output_path.parent.mkdir(parents=True, exist_ok=True)
                output_path.write_text(result.content, encoding="utf-8")
            except OSError:
                self.logger.error("I/O FAIL: write SVG path=%s", output_path, exc_info=True)
                raise
            self.logger.debug("I/O: wrote SVG path=%s chars=%d", output_path, len(result.content))
        return result


def convert_svg_to_grayscale(svg_text: str,
                             method: Union[GrayscaleMethod, str] = GrayscaleMethod.HSL,
                             strength: int = 100,
                             sink: Optional[DiagnosticSink] = None,
                             **collaborators: Any) -> str:
    """Convenience wrapper around :class:`GrayscaleConversionService`.

    Keyword *collaborators* (``parser``, ``serializer``, ``color_parser``)
    are passed through to the service.
    """
    options = GrayscaleOptions(method=method, strength=strength)
    service = GrayscaleConversionService(sink=sink, **collaborators)
    return service.convert_document(svg_text, options)
