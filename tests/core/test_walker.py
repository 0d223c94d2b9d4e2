import pytest
from lxml import etree as ET

from grayscale_svg.core.models import GrayscaleMethod, GrayscaleOptions
from grayscale_svg.core.walker import traverse_and_grayscale

LUMINANCE = GrayscaleOptions(GrayscaleMethod.LUMINANCE)


def _root(text):
    return ET.fromstring(text.encode("utf-8"))


class TestTraverseAndGrayscale:
    """Test cases for the attribute rewrite walk."""

    def test_converts_paint_attributes(self):
        rect = _root('<rect fill="#ff0000" stroke="#ffff00" color="red" x="1"/>')
        assert traverse_and_grayscale(rect) == 3
        assert dict(rect.attrib) == {
            "fill": "#808080", "stroke": "#808080", "color": "#808080", "x": "1",
        }

    def test_luminance_option(self):
        rect = _root('<rect fill="#ff0000" stroke="#ffff00"/>')
        traverse_and_grayscale(rect, LUMINANCE)
        assert rect.get("fill") == "#4c4c4c"
        assert rect.get("stroke") == "#e2e2e2"

    @pytest.mark.parametrize("value", ["none", "url(#grad)", "url(other.svg#p) red"])
    def test_structural_tokens_pass_through(self, value):
        rect = _root(f'<rect fill="{value}" stroke="{value}" color="{value}"/>')
        assert traverse_and_grayscale(rect) == 0
        assert rect.get("fill") == rect.get("stroke") == rect.get("color") == value

    def test_unparseable_values_unchanged_and_not_counted(self):
        rect = _root('<rect fill="inherit" stroke="currentColor"/>')
        assert traverse_and_grayscale(rect) == 0
        assert rect.get("fill") == "inherit"
        assert rect.get("stroke") == "currentColor"

    def test_already_gray_value_not_counted(self):
        rect = _root('<rect fill="#808080"/>')
        assert traverse_and_grayscale(rect) == 0

    def test_stop_color_only_on_stop_elements(self):
        root = _root(
            '<svg xmlns="http://www.w3.org/2000/svg"><linearGradient>'
            '<stop stop-color="#ff0000"/><stop stop-color="none"/></linearGradient>'
            '<rect stop-color="#ff0000"/></svg>'
        )
        traverse_and_grayscale(root, LUMINANCE)
        stops = root[0]
        assert stops[0].get("stop-color") == "#4c4c4c"
        assert stops[1].get("stop-color") == "none"
        assert root[1].get("stop-color") == "#ff0000"

    def test_visits_every_element_and_keeps_structure(self):
        root = _root(
            '<svg><g fill="red"><!-- c --><?pi data?><g><rect fill="blue"/>'
            '<circle stroke="lime"/></g></g><text fill="yellow">t</text></svg>'
        )
        before = [(el.tag, len(el)) for el in root.iter()]
        assert traverse_and_grayscale(root, LUMINANCE) == 4
        assert [(el.tag, len(el)) for el in root.iter()] == before
        assert root.xpath("//@fill | //@stroke") == ["#4c4c4c", "#1d1d1d", "#969696", "#e2e2e2"]

    def test_shared_cache_is_filled(self):
        root = _root('<svg><rect fill="red"/><rect fill="red"/><rect stroke="red"/></svg>')
        cache = {}
        assert traverse_and_grayscale(root, LUMINANCE, cache) == 3
        assert cache == {("red", 100, GrayscaleMethod.LUMINANCE): "#4c4c4c"}

    def test_injected_color_parser(self):
        root = _root('<svg><rect fill="red"/></svg>')
        assert traverse_and_grayscale(root, LUMINANCE, color_parser=lambda value: None) == 0
        assert root[0].get("fill") == "red"

    def test_style_attribute_is_not_inspected(self):
        rect = _root('<rect style="fill:red"/>')
        assert traverse_and_grayscale(rect) == 0
        assert rect.get("style") == "fill:red"
