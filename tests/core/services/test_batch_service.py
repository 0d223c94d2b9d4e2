import logging

import pytest

from grayscale_svg.core.diagnostics import CollectingSink
from grayscale_svg.core.exceptions import BatchConversionError
from grayscale_svg.core.models import GrayscaleMethod
from grayscale_svg.core.services import BatchConversionService, GrayscaleConversionService


@pytest.fixture
def batch():
    return BatchConversionService(GrayscaleConversionService(sink=CollectingSink()))


@pytest.fixture
def svg_dir(temp_dir, sample_svg, malformed_svg, style_element_svg):
    source = temp_dir / "svgs"
    source.mkdir()
    (source / "b_sample.svg").write_text(sample_svg, encoding="utf-8")
    (source / "a_styles.svg").write_text(style_element_svg, encoding="utf-8")
    (source / "c_broken.svg").write_text(malformed_svg, encoding="utf-8")
    (source / "notes.txt").write_text("not an svg", encoding="utf-8")
    return source


class TestConvertDirectory:
    """Test cases for BatchConversionService.convert_directory."""

    def test_outputs_for_both_methods(self, batch, svg_dir, temp_dir):
        out = temp_dir / "output"
        report = batch.convert_directory(svg_dir, out)
        assert sorted(p.name for p in out.iterdir()) == [
            "grayscale-hsl-a_styles.svg",
            "grayscale-hsl-b_sample.svg",
            "grayscale-lum-a_styles.svg",
            "grayscale-lum-b_sample.svg",
        ]
        assert "#4c4c4c" in (out / "grayscale-lum-b_sample.svg").read_text(encoding="utf-8")
        assert "#808080" in (out / "grayscale-hsl-b_sample.svg").read_text(encoding="utf-8")
        assert [p.name for p in report.sources] == ["a_styles.svg", "b_sample.svg", "c_broken.svg"]

    def test_failures_are_recorded_and_batch_continues(self, batch, svg_dir, temp_dir):
        report = batch.convert_directory(svg_dir, temp_dir / "output")
        assert len(report.items) == 6
        assert len(report.succeeded) == 4
        assert {(i.source.name, i.method) for i in report.failed} == {
            ("c_broken.svg", GrayscaleMethod.HSL),
            ("c_broken.svg", GrayscaleMethod.LUMINANCE),
        }
        assert all(i.output is None and "Malformed" in i.error for i in report.failed)

    def test_items_carry_sizes_and_warnings(self, batch, svg_dir, temp_dir):
        report = batch.convert_directory(svg_dir, temp_dir / "output")
        styles_items = [i for i in report.succeeded if i.source.name == "a_styles.svg"]
        assert all(len(i.warnings) == 2 for i in styles_items)
        for item in report.succeeded:
            assert item.original_kb > 0
            assert item.output_kb > 0

    def test_single_method_and_strength(self, batch, svg_dir, temp_dir):
        out = temp_dir / "output"
        report = batch.convert_directory(svg_dir, out, methods=["hsl"], strength=0)
        assert {i.method for i in report.items} == {GrayscaleMethod.HSL}
        assert "#ff0000" in (out / "grayscale-hsl-b_sample.svg").read_text(encoding="utf-8")

    def test_configured_prefixes(self, svg_dir, temp_dir):
        batch = BatchConversionService(
            GrayscaleConversionService(sink=CollectingSink()),
            config={"output_prefix_hsl": "h_", "output_prefix_luminance": "l_"},
        )
        out = temp_dir / "output"
        batch.convert_directory(svg_dir, out)
        assert (out / "h_b_sample.svg").exists()
        assert (out / "l_b_sample.svg").exists()

    def test_empty_directory_warns(self, batch, temp_dir, caplog):
        empty = temp_dir / "empty"
        empty.mkdir()
        with caplog.at_level(logging.WARNING, logger="grayscale_svg"):
            report = batch.convert_directory(empty, temp_dir / "output")
        assert report.items == []
        assert "No SVG files found" in caplog.text
        assert not (temp_dir / "output").exists()

    def test_missing_input_directory(self, batch, temp_dir):
        with pytest.raises(BatchConversionError) as exc_info:
            batch.convert_directory(temp_dir / "nope", temp_dir / "output")
        assert exc_info.value.path.endswith("nope")


class TestFileEncodingsAndIO:
    LATIN1_SVG = ('<?xml version="1.0" encoding="ISO-8859-1"?>\n'
                  '<svg xmlns="http://www.w3.org/2000/svg">'
                  '<title>café</title><rect fill="#ff0000"/></svg>')

    def test_latin1_file_converts_alongside_utf8(self, batch, temp_dir, sample_svg):
        source = temp_dir / "svgs"
        source.mkdir()
        (source / "a_latin1.svg").write_bytes(self.LATIN1_SVG.encode("iso-8859-1"))
        (source / "b_ok.svg").write_text(sample_svg, encoding="utf-8")
        out = temp_dir / "output"

        report = batch.convert_directory(source, out)

        assert report.failed == []
        assert len(report.succeeded) == 4
        converted = (out / "grayscale-hsl-a_latin1.svg").read_text(encoding="utf-8")
        assert "<title>café</title>" in converted
        assert 'fill="#808080"' in converted
        assert "encoding='UTF-8'" in converted
        assert (out / "grayscale-lum-b_ok.svg").exists()

    def test_write_failure_is_recorded(self, batch, temp_dir, sample_svg):
        source = temp_dir / "svgs"
        source.mkdir()
        (source / "a.svg").write_text(sample_svg, encoding="utf-8")
        out = temp_dir / "output"
        # a directory where the HSL output file should go
        (out / "grayscale-hsl-a.svg").mkdir(parents=True)

        report = batch.convert_directory(source, out)

        assert [(i.method, i.output) for i in report.failed] == [(GrayscaleMethod.HSL, None)]
        assert report.failed[0].error
        assert [i.method for i in report.succeeded] == [GrayscaleMethod.LUMINANCE]
        assert "#4c4c4c" in (out / "grayscale-lum-a.svg").read_text(encoding="utf-8")
