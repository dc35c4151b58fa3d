"""Category stroke styles and DXF layer names."""

from dataclasses import dataclass
from typing import Optional

from .drawing import StrokeStyle


@dataclass(frozen=True)
class CategoryStyle:
    color: str                                  # "#RRGGBB"
    width: float                                # page units (mm)
    dash: Optional[tuple[float, float]] = None


# Keyed by feature category.  Same colors as the live map preview.
STYLES: dict[str, CategoryStyle] = {
    "water":     CategoryStyle("#3399FF", 0.7),            # blue
    "railways":  CategoryStyle("#444444", 0.7, (2, 2)),    # dark gray, dashed
    "streets":   CategoryStyle("#FF6600", 0.7),            # orange
    "buildings": CategoryStyle("#888888", 0.7),            # gray
}

DXF_LAYER_NAMES = {
    "water":      "SITEPLAN-WATER",
    "railways":   "SITEPLAN-RAILWAYS",
    "streets":    "SITEPLAN-STREETS",
    "buildings":  "SITEPLAN-BUILDINGS",
    "annotation": "SITEPLAN-ANNOTATION",
}

ANNOTATION_COLOR = "#000000"


def stroke_style(category: str) -> StrokeStyle:
    style = STYLES[category]
    return StrokeStyle(style.color, style.width, style.dash, DXF_LAYER_NAMES[category])


def annotation_style(width: float) -> StrokeStyle:
    return StrokeStyle(ANNOTATION_COLOR, width, None, DXF_LAYER_NAMES["annotation"])
