"""
Tests for SVG and PDF output.

The SVG must carry every element's anchor so a parsed file reproduces
the layout to COORD_PRECISION decimals.
"""

import pytest

from data.solutions import get_solution
from sfm.configuration import Configuration
from sfm.layout import LayoutEngine
from sfm.render import (
    COORD_PRECISION,
    SVG_FILENAME,
    parse_svg,
    render_figure,
    render_pdf,
    render_svg,
)
from sfm.scene import KIND_LABEL, Scene, SceneElement


@pytest.fixture
def scene():
    return LayoutEngine(Configuration.UNIQUE_REFERENCES, 2, 4,
                        get_solution(4, 0), 0.7, 1e9, 10e3).scene()


class TestSvg:

    def test_document(self, scene):
        svg = render_svg(scene)
        assert svg.startswith("<?xml")
        assert "<svg" in svg
        assert 'viewBox="0 0 {} {}"'.format(
            round(scene.width, 3), round(scene.height, 3)) in svg

    def test_fragment_has_no_declaration(self, scene):
        fragment = render_svg(scene, standalone=False)
        assert fragment.startswith("<svg")

    def test_deterministic(self, scene):
        assert render_svg(scene) == render_svg(scene)

    def test_anchors_survive(self, scene):
        parsed = parse_svg(render_svg(scene))
        assert len(parsed) == len(scene)
        tol = 10 ** -COORD_PRECISION
        for element, recovered in zip(scene, parsed):
            assert recovered["kind"] == element.kind
            assert abs(recovered["x"] - element.x) <= tol
            assert abs(recovered["y"] - element.y) <= tol
            assert len(recovered["points"]) == len(element.points)
            for (px, py), (rx, ry) in zip(element.points, recovered["points"]):
                assert abs(px - rx) <= tol
                assert abs(py - ry) <= tol
            assert recovered["ref"] == element.ref

    def test_label_text(self, scene):
        parsed = parse_svg(render_svg(scene))
        texts = [p["text"] for p in parsed if p["kind"] == KIND_LABEL]
        expected = [e.text for e in scene if e.kind == KIND_LABEL]
        assert texts == expected

    def test_filename(self):
        assert SVG_FILENAME == "interferometer.svg"

    def test_rounds_coordinates(self):
        s = Scene([SceneElement("coupler", 10.123456, 20.98765, 80, 20)], 100, 50)
        parsed = parse_svg(render_svg(s))
        assert parsed[0]["x"] == 10.123
        assert parsed[0]["y"] == 20.988


class TestPdf:

    def test_pdf_bytes(self, scene):
        pdf = render_pdf(scene)
        assert pdf.startswith(b"%PDF")

    def test_figure_size(self, scene):
        fig = render_figure(scene)
        width, height = fig.get_size_inches() * fig.dpi
        assert abs(width - scene.width) < 1e-6
        assert abs(height - scene.height) < 1e-6
