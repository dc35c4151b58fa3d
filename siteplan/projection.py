"""Mercator projection: WGS84 lon/lat -> planar meters -> page units."""

from dataclasses import dataclass
from typing import Iterable, Optional

from pyproj import Transformer
from shapely.geometry import MultiPoint

from .drawing import PageMetadata
from .paper import GeoBoundingBox

WGS84 = "EPSG:4326"
MERCATOR = "+proj=merc +lon_0=0 +k=1 +x_0=0 +y_0=0 +datum=WGS84 +units=m +no_defs"

PAGE_MARGIN = 10.0  # page units reserved on every side


class Projector:
    """Projects WGS84 coordinates onto the ellipsoidal Mercator plane.

    X = east, Y = north, both in meters from (lon 0, equator).
    """

    def __init__(self):
        self._forward = Transformer.from_crs(WGS84, MERCATOR, always_xy=True)
        self._inverse = Transformer.from_crs(MERCATOR, WGS84, always_xy=True)

    def project(self, lon: float, lat: float) -> tuple[float, float]:
        """Return (x, y) in meters."""
        x, y = self._forward.transform(lon, lat)
        return (x, y)

    def unproject(self, x: float, y: float) -> tuple[float, float]:
        """Return (lon, lat) in degrees."""
        lon, lat = self._inverse.transform(x, y)
        return (lon, lat)


@dataclass(frozen=True)
class PlanarExtent:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y


def export_extent(bbox: GeoBoundingBox, projector: Projector) -> PlanarExtent:
    """Axis-aligned planar rectangle around the projected bbox corners."""
    # MultiPoint.bounds gives (min_x, min_y, max_x, max_y) of the corners
    corners = MultiPoint([projector.project(lon, lat) for lon, lat in bbox.corners])
    min_x, min_y, max_x, max_y = corners.bounds
    return PlanarExtent(min_x, min_y, max_x, max_y)


class PageFrame:
    """Maps geographic points into the drawable area of a page.

    Points outside the export extent map to None.  A degenerate extent
    (zero width or height) maps nothing.
    """

    def __init__(self, projector: Projector, extent: PlanarExtent, page: PageMetadata):
        self.projector = projector
        self.extent = extent
        self.page = page
        self.degenerate = extent.width <= 0 or extent.height <= 0

    def to_page(self, lon: float, lat: float) -> Optional[tuple[float, float]]:
        if self.degenerate:
            return None
        x, y = self.projector.project(lon, lat)
        ext = self.extent
        if not ext.contains(x, y):
            return None
        page = self.page
        px = page.margin + (x - ext.min_x) / ext.width * page.drawable_width
        # page y grows downward, planar y grows north
        py = page.margin + page.drawable_height - (y - ext.min_y) / ext.height * page.drawable_height
        return (px, py)


def page_paths(points: Iterable[Optional[tuple[float, float]]]) -> list[list[tuple[float, float]]]:
    """Split a mapped point sequence into drawable runs.

    A None breaks the current run; the gap is never bridged.
    """
    runs: list[list[tuple[float, float]]] = []
    current: list[tuple[float, float]] = []
    for pt in points:
        if pt is None:
            if current:
                runs.append(current)
                current = []
            continue
        current.append(pt)
    if current:
        runs.append(current)
    return runs
