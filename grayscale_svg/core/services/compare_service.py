from __future__ import annotations

"""Side-by-side HTML comparison page for batch results.

Each original SVG is shown next to its HSL and luminance conversions so the
two methods can be judged visually in a browser.
"""

from html import escape
import logging
import os
from pathlib import Path
from typing import List, Optional

from grayscale_svg.core.models import GrayscaleMethod

logger = logging.getLogger(__name__)

__all__ = ["build_compare_html", "write_compare_page"]

DEFAULT_TITLE = "SVG Comparison: Original vs. HSL vs. Luminance"

_PAGE_STYLE = (
    "      body { font-family: sans-serif; margin: 2rem auto; max-width: 1200px; background: #f5f5f5; }\n"
    "      h1 { text-align: center; }\n"
    "      h2 { font-size: 1.1rem; margin-bottom: 0.2rem; }\n"
    "      .item { margin-bottom: 2rem; }\n"
    "      .compare-box { display: flex; gap: 1rem; margin-top: 0.5rem; }\n"
    "      figure { margin: 0; text-align: center; border: 1px solid #ccc; background: #fff; padding: 1rem; flex: 1 1 33%; }\n"
    "      figure img { max-width: 100%; height: auto; border: 1px solid #ddd; margin-bottom: 0.5rem; }\n"
    "      figcaption { font-style: italic; font-size: 0.9rem; color: #666; }\n"
    "      .no-file { color: red; }\n"
)

_LABELS = {
    GrayscaleMethod.HSL: ("HSL", "HSL Grayscale"),
    GrayscaleMethod.LUMINANCE: ("Luminance", "Luminance Grayscale"),
}


def _rel(target: Path, base_dir: Path) -> str:
    return Path(os.path.relpath(target, base_dir)).as_posix()


def _figure(path: Path, label: str, caption: str, source_name: str, base_dir: Path) -> str:
    if not path.exists():
        return (
            "        <figure>\n"
            f"          <p class=\"no-file\">No {escape(label)} file found for {escape(source_name)}</p>\n"
            "        </figure>\n"
        )
    return (
        "        <figure>\n"
        f"          <img src=\"{escape(_rel(path, base_dir))}\" alt=\"{escape(label)}: {escape(source_name)}\" />\n"
        f"          <figcaption>{escape(caption)}: {escape(path.name)}</figcaption>\n"
        "        </figure>\n"
    )


def build_compare_html(originals_dir: str | Path, output_dir: str | Path, page_path: str | Path,
                       title: str = DEFAULT_TITLE,
                       hsl_prefix: str = "grayscale-hsl-",
                       luminance_prefix: str = "grayscale-lum-") -> str:
    """Return the comparison page for all SVGs in *originals_dir*.

    Image ``src`` attributes are relative to the directory of *page_path*.
    """
    originals_dir = Path(originals_dir)
    output_dir = Path(output_dir)
    base_dir = Path(page_path).resolve().parent
    prefixes = {GrayscaleMethod.HSL: hsl_prefix, GrayscaleMethod.LUMINANCE: luminance_prefix}

    originals = sorted(p for p in originals_dir.iterdir()
                       if p.is_file() and p.suffix.lower() == ".svg")
    sections: List[str] = []
    for original in originals:
        name = original.name
        parts = [_figure(original.resolve(), "Original", "Original", name, base_dir)]
        for method, (label, caption) in _LABELS.items():
            converted = (output_dir / f"{prefixes[method]}{name}").resolve()
            parts.append(_figure(converted, label, caption, name, base_dir))
        sections.append(
            "    <div class=\"item\">\n"
            f"      <h2>{escape(name)}</h2>\n"
            "      <div class=\"compare-box\">\n"
            + "".join(parts)
            + "      </div>\n"
            "    </div>\n"
        )

    return (
        "<!DOCTYPE html>\n"
        "<html lang=\"en\">\n"
        "  <head>\n"
        "    <meta charset=\"UTF-8\" />\n"
        f"    <title>{escape(title)}</title>\n"
        "    <style>\n"
        f"{_PAGE_STYLE}"
        "    </style>\n"
        "  </head>\n"
        "  <body>\n"
        f"    <h1>{escape(title)}</h1>\n"
        "    <p>Each original SVG is shown alongside its HSL-based and luminance-based grayscale outputs.</p>\n"
        + "".join(sections)
        + "  </body>\n"
        "</html>\n"
    )


def write_compare_page(originals_dir: str | Path, output_dir: str | Path, page_path: str | Path,
                       title: Optional[str] = None, **prefixes: str) -> Path:
    """Build the comparison page and write it to *page_path* (UTF-8)."""
    page_path = Path(page_path)
    html = build_compare_html(originals_dir, output_dir, page_path,
                              title=title or DEFAULT_TITLE, **prefixes)
    page_path.parent.mkdir(parents=True, exist_ok=True)
    page_path.write_text(html, encoding="utf-8")
    logger.info("compare page generated at: %s", page_path)
    return page_path
