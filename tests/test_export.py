"""Tests for the export pipeline as a whole."""

import random

import pytest

from siteplan.drawing import LineTo, MoveTo, Stroke, StrokeStyle, Text
from siteplan.export import render
from siteplan.features import CATEGORIES
from siteplan.paper import GeoBoundingBox, PaperSpec
from siteplan.styles import DXF_LAYER_NAMES, STYLES

BERLIN = GeoBoundingBox(13.375, 52.515, 13.405, 52.525)
A4_5000 = PaperSpec(scale=5000, paper_size="A4", orientation="portrait")

ORANGE = STYLES["streets"].color
ANNOTATION_LAYER = DXF_LAYER_NAMES["annotation"]


def _node(nid, lon, lat):
    return {"type": "node", "id": nid, "lon": lon, "lat": lat}


def _way(wid, nodes, **tags):
    return {"type": "way", "id": wid, "nodes": nodes, "tags": tags}


def _styles(ops):
    return [op for op in ops if isinstance(op, StrokeStyle)]


def _feature_styles(ops):
    return [s for s in _styles(ops) if s.layer != ANNOTATION_LAYER]


def _one_of_each():
    return [
        _node(1, 13.38, 52.518), _node(2, 13.40, 52.522),
        _node(3, 13.38, 52.520), _node(4, 13.40, 52.520),
        _way(10, [1, 2], building="yes"),
        _way(11, [3, 4], highway="primary"),
        _way(12, [1, 4], railway="rail"),
        _way(13, [3, 2], waterway="canal"),
    ]


class TestBerlinScenario:
    @pytest.fixture
    def result(self):
        elements = [
            _node(1, 13.38, 52.518),
            _node(2, 13.40, 52.522),
            _way(100, [1, 2], highway="primary"),
        ]
        return render(BERLIN, elements, {"streets"}, A4_5000)

    def test_page_metadata(self, result):
        assert (result.page.width, result.page.height, result.page.margin) == (210, 297, 10)

    def test_single_orange_line(self, result):
        styles = _feature_styles(result.instructions)
        assert len(styles) == 1
        assert styles[0].color == ORANGE

        start = result.instructions.index(styles[0])
        feature_ops = result.instructions[start + 1:start + 4]
        assert isinstance(feature_ops[0], MoveTo)
        assert isinstance(feature_ops[1], LineTo)
        assert isinstance(feature_ops[2], Stroke)

    def test_no_other_categories(self, result):
        colors = {s.color for s in _feature_styles(result.instructions)}
        for category in ("water", "buildings", "railways"):
            assert STYLES[category].color not in colors

    def test_annotations_present(self, result):
        texts = [op.content for op in result.instructions if isinstance(op, Text)]
        assert "N" in texts
        # 0.03 deg of Mercator x is about 3340 m, a quarter is about 835 m
        assert "500 m" in texts

    def test_line_inside_drawable_area(self, result):
        style = _feature_styles(result.instructions)[0]
        start = result.instructions.index(style)
        for op in result.instructions[start + 1:start + 3]:
            assert 10 <= op.x <= 200
            assert 10 <= op.y <= 287


def test_no_data_still_annotated():
    for elements in (None, []):
        result = render(BERLIN, elements, CATEGORIES, A4_5000)
        assert _feature_styles(result.instructions) == []
        texts = [op.content for op in result.instructions if isinstance(op, Text)]
        assert "N" in texts
        assert any(t.endswith(" m") for t in texts)


def test_unselected_category_not_drawn():
    elements = [_node(1, 13.38, 52.518), _node(2, 13.40, 52.522),
                _way(100, [1, 2], highway="residential")]
    result = render(BERLIN, elements, {"water", "buildings"}, A4_5000)
    assert _feature_styles(result.instructions) == []


def test_draw_order_independent_of_input_order():
    expected = [STYLES[c].color for c in ("water", "railways", "streets", "buildings")]
    elements = _one_of_each()
    for seed in range(5):
        shuffled = elements[:]
        random.Random(seed).shuffle(shuffled)
        result = render(BERLIN, shuffled, CATEGORIES, A4_5000)
        assert [s.color for s in _feature_styles(result.instructions)] == expected


def test_railways_are_dashed():
    result = render(BERLIN, _one_of_each(), {"railways"}, A4_5000)
    (style,) = _feature_styles(result.instructions)
    assert style.dash == (2, 2)


def test_deterministic():
    elements = _one_of_each()
    first = render(BERLIN, elements, CATEGORIES, A4_5000)
    second = render(BERLIN, elements, CATEGORIES, A4_5000)
    assert first == second


def test_feature_leaving_and_reentering_is_split():
    elements = [
        _node(1, 13.38, 52.518),
        _node(2, 13.39, 52.530),   # north of the box
        _node(3, 13.40, 52.522),
        _way(100, [1, 2, 3], highway="primary"),
    ]
    result = render(BERLIN, elements, {"streets"}, A4_5000)
    style = _feature_styles(result.instructions)[0]
    start = result.instructions.index(style)
    feature_ops = result.instructions[start + 1:start + 4]
    assert [type(op) for op in feature_ops] == [MoveTo, MoveTo, Stroke]


def test_feature_entirely_outside_draws_nothing():
    elements = [_node(1, 2.35, 48.85), _node(2, 2.36, 48.86),
                _way(100, [1, 2], highway="primary")]
    result = render(BERLIN, elements, {"streets"}, A4_5000)
    assert _feature_styles(result.instructions) == []


def test_landscape_page():
    result = render(BERLIN, None, CATEGORIES, PaperSpec(5000, "A3", "landscape"))
    assert (result.page.width, result.page.height) == (420, 297)
