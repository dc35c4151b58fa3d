"""Overpass API client for fetching raw way/node elements from OpenStreetMap."""

import logging
from typing import Iterable

import requests

from .features import CATEGORIES
from .paper import GeoBoundingBox

logger = logging.getLogger(__name__)

OVERPASS_URLS = [
    "https://overpass.kumi.systems/api/interpreter",
    "https://overpass-api.de/api/interpreter",
]

DEFAULT_TIMEOUT = 25

HEADERS = {
    "User-Agent": "siteplan/1.0 (site plan generator)",
}

# Overpass way filters per category; kept in line with features.PREDICATES.
CATEGORY_FILTERS: dict[str, list[str]] = {
    "water":     ['way["natural"="water"]', 'way["waterway"]'],
    "streets":   ['way["highway"]'],
    "buildings": ['way["building"]'],
    "railways":  ['way["railway"="rail"]'],
}


def _bbox_param(bbox: GeoBoundingBox) -> str:
    # Overpass expects (south, west, north, east)
    return f"{bbox.min_lat},{bbox.min_lon},{bbox.max_lat},{bbox.max_lon}"


def build_query(bbox: GeoBoundingBox, categories: Iterable[str],
                timeout: int = DEFAULT_TIMEOUT) -> str:
    """Build an Overpass QL union query for the requested categories."""
    bbox_str = _bbox_param(bbox)
    selected = set(categories)
    parts = []
    for category in CATEGORIES:
        if category not in selected:
            continue
        for flt in CATEGORY_FILTERS[category]:
            parts.append(f"{flt}({bbox_str});")

    body = "\n".join(parts)
    return f"""[out:json][timeout:{timeout}];
(
{body}
);
out body;
>;
out skel qt;"""


def _fetch_overpass(query: str, timeout: int) -> dict:
    """Execute an Overpass query, trying multiple mirrors."""
    last_err = None
    for url in OVERPASS_URLS:
        try:
            resp = requests.post(url, data={"data": query}, headers=HEADERS,
                                 timeout=timeout + 30)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as exc:
            logger.warning("Overpass mirror %s failed: %s", url, exc)
            last_err = exc
            continue
    raise last_err  # type: ignore[misc]


def fetch_elements(bbox: GeoBoundingBox, categories: Iterable[str],
                   timeout: int = DEFAULT_TIMEOUT) -> list[dict]:
    """Fetch raw node/way elements for the selected categories.

    Only selected categories are queried.  Returns [] without touching the
    network when nothing is selected.
    """
    categories = [c for c in categories if c in CATEGORY_FILTERS]
    if not categories:
        return []

    query = build_query(bbox, categories, timeout)
    logger.debug("Overpass query:\n%s", query)
    data = _fetch_overpass(query, timeout)
    elements = data.get("elements", [])
    logger.info("Fetched %d elements for %s", len(elements), ", ".join(categories))
    return elements
