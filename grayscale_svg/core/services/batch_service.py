from __future__ import annotations

"""Directory-level batch conversion.

Every ``*.svg`` file in an input directory is converted once per requested
method and written next to the others in an output directory, named
``<prefix><original name>``. Files are read as bytes so each one is decoded
by its own declared encoding. A file that fails (malformed markup or an I/O
error) is recorded in the report; the rest of the batch carries on.
"""

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from grayscale_svg.core.exceptions import BatchConversionError, GrayscaleError
from grayscale_svg.core.models import GrayscaleMethod, GrayscaleOptions
from grayscale_svg.core.services.conversion_service import GrayscaleConversionService

logger = logging.getLogger(__name__)

__all__ = ["BatchItem", "BatchReport", "BatchConversionService"]


@dataclass
class BatchItem:
    """Result for one (file, method) pair.

    Attributes
    ----------
    source
        Input SVG path.
    method
        Method the file was converted with.
    output
        Written file, or ``None`` when the conversion failed.
    original_kb / output_kb
        Sizes in kilobytes: input bytes and output characters, over 1024.
    warnings
        Diagnostic messages produced during the conversion.
    error
        Failure message when the conversion failed.
    """

    source: Path
    method: GrayscaleMethod
    output: Optional[Path] = None
    original_kb: float = 0.0
    output_kb: float = 0.0
    warnings: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchReport:
    input_dir: Path
    output_dir: Path
    items: List[BatchItem] = field(default_factory=list)

    @property
    def succeeded(self) -> List[BatchItem]:
        return [i for i in self.items if i.ok]

    @property
    def failed(self) -> List[BatchItem]:
        return [i for i in self.items if not i.ok]

    @property
    def sources(self) -> List[Path]:
        seen: Dict[Path, None] = {}
        for item in self.items:
            seen.setdefault(item.source, None)
        return list(seen)


def _size_kb(content: Union[str, bytes]) -> float:
    return round(len(content) / 1024, 2)


class BatchConversionService:
    """Runs :class:`GrayscaleConversionService` over a directory."""

    def __init__(self, conversion_service: Optional[GrayscaleConversionService] = None,
                 config: Optional[Dict[str, Any]] = None) -> None:
        self.conversion_service = conversion_service or GrayscaleConversionService()
        self.config = config or {}
        self.logger = logger

    def output_name(self, source_name: str, method: GrayscaleMethod) -> str:
        if method is GrayscaleMethod.LUMINANCE:
            prefix = self.config.get("output_prefix_luminance", "grayscale-lum-")
        else:
            prefix = self.config.get("output_prefix_hsl", "grayscale-hsl-")
        return f"{prefix}{source_name}"

    def convert_directory(self, input_dir: str | Path, output_dir: str | Path,
                          methods: Iterable[GrayscaleMethod | str] = (GrayscaleMethod.HSL,
                                                                      GrayscaleMethod.LUMINANCE),
                          strength: int = 100) -> BatchReport:
        """Convert every SVG in *input_dir* with each of *methods*.

        Raises
        ------
        BatchConversionError
            If *input_dir* does not exist or is not a directory.
        """
        input_dir = Path(input_dir)
        output_dir = Path(output_dir)
        if not input_dir.is_dir():
            raise BatchConversionError(f"Input directory not found: {input_dir}", path=str(input_dir))

        option_sets = [GrayscaleOptions(method=m, strength=strength) for m in methods]
        report = BatchReport(input_dir=input_dir, output_dir=output_dir)

        files = sorted(p for p in input_dir.iterdir()
                       if p.is_file() and self.conversion_service.can_handle_file(p))
        if not files:
            self.logger.warning("No SVG files found in %s", input_dir)
            return report

        output_dir.mkdir(parents=True, exist_ok=True)
        self.logger.info("Batch: %d file(s) from %s -> %s", len(files), input_dir, output_dir)

        for source in files:
            try:
                data = source.read_bytes()
            except OSError as exc:
                self.logger.error("I/O FAIL: read SVG path=%s: %s", source, exc)
                report.items.extend(BatchItem(source=source, method=o.method, error=str(exc))
                                    for o in option_sets)
                continue
            for options in option_sets:
                report.items.append(self._convert_one(source, data, options, output_dir))
        self.logger.info("Batch: done ok=%d failed=%d",
                         len(report.succeeded), len(report.failed))
        return report

    def _convert_one(self, source: Path, data: bytes, options: GrayscaleOptions,
                     output_dir: Path) -> BatchItem:
        item = BatchItem(source=source, method=options.method, original_kb=_size_kb(data))
        target = output_dir / self.output_name(source.name, options.method)
        try:
            result = self.conversion_service.convert_document_with_report(data, options)
            target.write_text(result.content, encoding="utf-8")
        except (GrayscaleError, OSError, UnicodeError) as exc:
            self.logger.error("Error converting %s (%s): %s", source.name, options.method.value, exc)
            item.error = str(exc)
            return item

        item.output = target
        item.output_kb = _size_kb(result.content)
        item.warnings = [d.message for d in result.diagnostics]
        self.logger.info("%s grayscale: %s -> %s (original size: %.2f KB, out: %.2f KB)",
                         options.method.value, source.name, target.name,
                         item.original_kb, item.output_kb)
        return item
