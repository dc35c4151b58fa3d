"""Tests for element resolution and category classification."""

import pytest

from siteplan.features import (
    CATEGORIES,
    classify,
    is_building,
    is_railway,
    is_street,
    is_water,
    line_features,
    node_table,
)


def _node(nid, lon, lat):
    return {"type": "node", "id": nid, "lon": lon, "lat": lat}


def _way(wid, nodes, **tags):
    return {"type": "way", "id": wid, "nodes": nodes, "tags": tags}


NODES = [_node(1, 13.38, 52.518), _node(2, 13.39, 52.52), _node(3, 13.40, 52.522)]


class TestPredicates:
    def test_water(self):
        assert is_water({"waterway": "river"})
        assert is_water({"natural": "water"})
        assert not is_water({"natural": "wood"})

    def test_streets(self):
        assert is_street({"highway": "residential"})
        assert not is_street({"railway": "rail"})

    def test_buildings(self):
        assert is_building({"building": "yes"})
        assert not is_building({})

    def test_railways_only_mainline_rail(self):
        assert is_railway({"railway": "rail"})
        assert not is_railway({"railway": "tram"})


class TestLineFeatures:
    def test_node_table_skips_malformed_nodes(self):
        table = node_table(NODES + [{"type": "node", "id": 9}])
        assert table == {1: (13.38, 52.518), 2: (13.39, 52.52), 3: (13.40, 52.522)}

    def test_resolves_coordinates_in_order(self):
        feats = line_features(NODES + [_way(10, [3, 1], highway="primary")])
        assert len(feats) == 1
        assert feats[0].coordinates == ((13.40, 52.522), (13.38, 52.518))
        assert feats[0].tags == {"highway": "primary"}

    def test_dangling_ids_are_skipped(self):
        feats = line_features(NODES + [_way(10, [1, 99, 2], highway="primary")])
        assert feats[0].coordinates == ((13.38, 52.518), (13.39, 52.52))

    def test_malformed_ways_are_dropped(self):
        elements = NODES + [
            {"type": "way", "id": 10, "nodes": [1, 2], "tags": "highway"},
            {"type": "way", "id": 11, "nodes": 5, "tags": {"highway": "primary"}},
            {"type": "way", "id": 12, "nodes": [[1], 2], "tags": {"highway": "primary"}},
            _way(13, [1, 2], highway="primary"),
        ]
        feats = line_features(elements)
        assert len(feats) == 1
        assert feats[0].coordinates == ((13.38, 52.518), (13.39, 52.52))
        assert len(classify(elements, ["streets"])["streets"]) == 1

    def test_degenerate_ways_are_dropped(self):
        elements = NODES + [
            _way(10, [1, 99], highway="primary"),
            _way(11, [], highway="primary"),
            {"type": "way", "id": 12},
        ]
        assert line_features(elements) == []


class TestClassify:
    def test_all_keys_present(self):
        result = classify(NODES, ["water"])
        assert set(result) == set(CATEGORIES)
        assert all(v == [] for v in result.values())

    def test_street_only_when_selected(self):
        elements = NODES + [_way(10, [1, 2], highway="residential")]
        selected = classify(elements, ["streets"])
        assert len(selected["streets"]) == 1
        assert all(not selected[c] for c in CATEGORIES if c != "streets")

        unselected = classify(elements, ["water", "buildings", "railways"])
        assert all(not v for v in unselected.values())

    def test_multi_match_is_not_deduplicated(self):
        elements = NODES + [_way(10, [1, 2, 3], highway="service", building="yes")]
        result = classify(elements, CATEGORIES)
        assert len(result["streets"]) == 1
        assert len(result["buildings"]) == 1

    @pytest.mark.parametrize("elements", [None, []])
    def test_no_data(self, elements):
        assert all(v == [] for v in classify(elements, CATEGORIES).values())

    def test_string_node_ids(self):
        elements = [_node("a", 1.0, 1.0), _node("b", 2.0, 2.0), _way("w", ["a", "b"], waterway="canal")]
        assert len(classify(elements, ["water"])["water"]) == 1
