"""Turn raw Overpass elements into line features and sort them by category.

The predicates here are the single source of truth for what counts as
water, streets, buildings or railways.  Both the live preview and the
export pipeline classify through them.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable

CATEGORIES = ["water", "streets", "buildings", "railways"]

# Bottom to top.
DRAW_ORDER = ["water", "railways", "streets", "buildings"]


@dataclass(frozen=True)
class LineFeature:
    coordinates: tuple[tuple[float, float], ...]    # (lon, lat)
    tags: dict = field(default_factory=dict, hash=False)


def is_water(tags: dict) -> bool:
    return bool(tags.get("waterway")) or tags.get("natural") == "water"


def is_street(tags: dict) -> bool:
    return bool(tags.get("highway"))


def is_building(tags: dict) -> bool:
    return bool(tags.get("building"))


def is_railway(tags: dict) -> bool:
    return tags.get("railway") == "rail"


PREDICATES: dict[str, Callable[[dict], bool]] = {
    "water": is_water,
    "streets": is_street,
    "buildings": is_building,
    "railways": is_railway,
}


def node_table(elements: Iterable[dict]) -> dict:
    """Map node id -> (lon, lat) for every well-formed node element."""
    nodes = {}
    for el in elements:
        if el.get("type") != "node":
            continue
        try:
            nodes[el["id"]] = (float(el["lon"]), float(el["lat"]))
        except (KeyError, TypeError, ValueError):
            continue
    return nodes


def line_features(elements: Iterable[dict]) -> list[LineFeature]:
    """Resolve ways against the node table.

    Dangling node ids are skipped; ways left with fewer than two
    coordinates are dropped.
    """
    elements = list(elements)
    nodes = node_table(elements)

    features = []
    for el in elements:
        if el.get("type") != "way":
            continue
        tags = el.get("tags") or {}
        if not isinstance(tags, dict):
            continue
        try:
            coords = tuple(nodes[nid] for nid in el.get("nodes") or [] if nid in nodes)
        except TypeError:
            continue
        if len(coords) < 2:
            continue
        features.append(LineFeature(coordinates=coords, tags=dict(tags)))
    return features


def classify(elements: Iterable[dict] | None,
             categories: Iterable[str]) -> dict[str, list[LineFeature]]:
    """Split elements into per-category feature lists.

    Every category key is present; unselected ones stay empty.  A feature
    matching several predicates appears in each of those lists.
    """
    selected = set(categories)
    result: dict[str, list[LineFeature]] = {c: [] for c in CATEGORIES}
    if not elements or not selected:
        return result

    for feat in line_features(elements):
        for category in CATEGORIES:
            if category in selected and PREDICATES[category](feat.tags):
                result[category].append(feat)
    return result
