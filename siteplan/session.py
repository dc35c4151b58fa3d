"""Editing session: current bbox, paper settings, selection and fetched data.

Paper-setting changes always rebuild the bbox from the current center, so
the framed area on the map and the exported sheet never disagree.  Manual
bbox edits are overwritten by the next settings change.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Optional

from shapely.geometry import LineString, mapping

from .export import ExportResult, render
from .features import CATEGORIES, classify
from .overpass import fetch_elements
from .paper import (
    ORIENTATIONS,
    PAPER_CHOICES,
    GeoBoundingBox,
    PaperSpec,
    preset_bbox,
    recenter,
    size_meters,
)

logger = logging.getLogger(__name__)

DEFAULT_BBOX = GeoBoundingBox(13.375, 52.515, 13.405, 52.525)  # Berlin
DEFAULT_CATEGORIES = ("water", "streets")

FETCH_FAILED = "Failed to fetch OSM data"


class FetchInProgress(RuntimeError):
    """Raised when a fetch is requested while another one is running."""


@dataclass
class Session:
    bbox: GeoBoundingBox = DEFAULT_BBOX
    paper: PaperSpec = field(default_factory=PaperSpec)
    categories: tuple[str, ...] = DEFAULT_CATEGORIES
    elements: Optional[list] = None
    loading: bool = False
    error: Optional[str] = None

    def set_bbox(self, bbox: GeoBoundingBox) -> GeoBoundingBox:
        self.bbox = bbox
        return self.bbox

    def recenter(self, lon: float, lat: float) -> GeoBoundingBox:
        self.bbox = recenter(self.bbox, (lon, lat))
        return self.bbox

    def update_paper(self, scale: Optional[int] = None,
                     paper_size: Optional[str] = None,
                     orientation: Optional[str] = None) -> GeoBoundingBox:
        """Apply new paper settings and reframe the bbox around its center."""
        changes = {}
        if scale is not None:
            changes["scale"] = int(scale)
        if paper_size is not None:
            changes["paper_size"] = paper_size if paper_size in PAPER_CHOICES else "A4"
        if orientation is not None:
            changes["orientation"] = orientation if orientation in ORIENTATIONS else "portrait"
        self.paper = replace(self.paper, **changes)
        self.bbox = preset_bbox(self.bbox.center, self.paper)
        logger.debug("Paper set to %s, bbox reframed to %s", self.paper, self.bbox.as_list())
        return self.bbox

    def set_categories(self, categories) -> tuple[str, ...]:
        unknown = [c for c in categories if c not in CATEGORIES]
        if unknown:
            raise ValueError(f"Unknown categories: {unknown}")
        self.categories = tuple(c for c in CATEGORIES if c in categories)
        return self.categories

    def fetch(self) -> bool:
        """Fetch elements for the current bbox and selection.

        Returns True on success.  On failure the previous data is kept and
        `error` carries a generic message.
        """
        if self.loading:
            raise FetchInProgress("A fetch is already in progress.")
        self.loading = True
        self.error = None
        bbox, categories = self.bbox, self.categories
        try:
            self.elements = fetch_elements(bbox, categories)
            return True
        except Exception as exc:
            logger.warning("OSM fetch failed: %s", exc)
            self.error = FETCH_FAILED
            return False
        finally:
            self.loading = False

    def preview(self) -> dict[str, dict]:
        """GeoJSON FeatureCollection per category, for the map preview."""
        layers = classify(self.elements, self.categories)
        return {
            category: {
                "type": "FeatureCollection",
                "features": [
                    {
                        "type": "Feature",
                        "geometry": mapping(LineString(feat.coordinates)),
                        "properties": feat.tags,
                    }
                    for feat in features
                ],
            }
            for category, features in layers.items()
        }

    def export(self) -> ExportResult:
        # Snapshot values; data may be stale relative to the bbox.
        elements = list(self.elements) if self.elements else None
        return render(self.bbox, elements, self.categories, self.paper)

    def summary(self) -> dict:
        width, height = size_meters(self.bbox)
        return {
            "bbox": self.bbox.as_list(),
            "size_m": {"width": round(width, 1), "height": round(height, 1)},
            "paper": {
                "scale": self.paper.scale,
                "paper_size": self.paper.paper_size,
                "orientation": self.paper.orientation,
            },
            "categories": list(self.categories),
            "elements_loaded": len(self.elements) if self.elements else 0,
            "loading": self.loading,
            "error": self.error,
        }
