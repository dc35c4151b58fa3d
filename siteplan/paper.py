"""Paper sizes and bounding-box geometry: paper/scale <-> geographic extent."""

import math
from dataclasses import dataclass

EARTH_RADIUS_M = 6_371_000.0
METERS_PER_DEGREE_LAT = 111_320.0
EQUATOR_CIRCUMFERENCE_M = 40_075_000.0

# Physical paper dimensions in mm (portrait).  Only A3/A4 are defined;
# anything else falls back to A4.
PAPER_SIZES: dict[str, tuple[int, int]] = {
    "A4": (210, 297),
    "A3": (297, 420),
}

PAPER_CHOICES = ["A4", "A3", "A2", "A1", "A0"]
ORIENTATIONS = ["portrait", "landscape"]

DEFAULT_PAPER_SIZE = "A4"
DEFAULT_ORIENTATION = "portrait"


@dataclass(frozen=True)
class GeoBoundingBox:
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    def __post_init__(self):
        if not (-90 <= self.min_lat <= 90 and -90 <= self.max_lat <= 90):
            raise ValueError(
                f"latitudes must lie within [-90, 90], got {self.min_lat}, {self.max_lat}")
        if not self.min_lon < self.max_lon:
            raise ValueError(
                f"min_lon ({self.min_lon}) must be less than max_lon ({self.max_lon})")
        if not self.min_lat < self.max_lat:
            raise ValueError(
                f"min_lat ({self.min_lat}) must be less than max_lat ({self.max_lat})")

    @classmethod
    def from_list(cls, values) -> "GeoBoundingBox":
        min_lon, min_lat, max_lon, max_lat = (float(v) for v in values)
        return cls(min_lon, min_lat, max_lon, max_lat)

    @property
    def center(self) -> tuple[float, float]:
        """(lon, lat) midpoint of the box."""
        return ((self.min_lon + self.max_lon) / 2, (self.min_lat + self.max_lat) / 2)

    @property
    def corners(self) -> list[tuple[float, float]]:
        return [
            (self.min_lon, self.min_lat),
            (self.min_lon, self.max_lat),
            (self.max_lon, self.max_lat),
            (self.max_lon, self.min_lat),
        ]

    def as_list(self) -> list[float]:
        return [self.min_lon, self.min_lat, self.max_lon, self.max_lat]


@dataclass(frozen=True)
class PaperSpec:
    scale: int = 5000
    paper_size: str = DEFAULT_PAPER_SIZE
    orientation: str = DEFAULT_ORIENTATION

    def __post_init__(self):
        if self.scale <= 0:
            raise ValueError(f"scale must be positive, got {self.scale}")


def paper_dimensions(paper: PaperSpec) -> tuple[float, float]:
    """Return (width_mm, height_mm) for the paper, respecting orientation."""
    w_mm, h_mm = PAPER_SIZES.get(paper.paper_size, PAPER_SIZES[DEFAULT_PAPER_SIZE])
    if paper.orientation == "landscape":
        w_mm, h_mm = h_mm, w_mm
    return float(w_mm), float(h_mm)


def coverage_meters(paper: PaperSpec) -> tuple[float, float]:
    """Real-world (width, height) in meters covered by one sheet at scale."""
    w_mm, h_mm = paper_dimensions(paper)
    return w_mm / 1000 * paper.scale, h_mm / 1000 * paper.scale


def size_meters(bbox: GeoBoundingBox) -> tuple[float, float]:
    """Approximate (width, height) of the box in meters on a spherical earth.

    Width is measured at the box's mean latitude.
    """
    lat = math.radians((bbox.min_lat + bbox.max_lat) / 2)
    d_lon = math.radians(bbox.max_lon - bbox.min_lon)
    d_lat = math.radians(bbox.max_lat - bbox.min_lat)
    width = EARTH_RADIUS_M * d_lon * math.cos(lat)
    height = EARTH_RADIUS_M * d_lat
    return abs(width), abs(height)


def preset_bbox(center: tuple[float, float], paper: PaperSpec) -> GeoBoundingBox:
    """Box covering exactly one sheet at the paper's scale, centered on (lon, lat).

    Uses flat meters-per-degree factors taken at the center latitude, so the
    result drifts from true ground size away from the equator.
    """
    center_lon, center_lat = center
    w_m, h_m = coverage_meters(paper)
    meters_per_deg_lon = EQUATOR_CIRCUMFERENCE_M * math.cos(math.radians(center_lat)) / 360
    d_lat = h_m / 2 / METERS_PER_DEGREE_LAT
    d_lon = w_m / 2 / meters_per_deg_lon
    return GeoBoundingBox(
        center_lon - d_lon,
        center_lat - d_lat,
        center_lon + d_lon,
        center_lat + d_lat,
    )


def recenter(bbox: GeoBoundingBox, center: tuple[float, float]) -> GeoBoundingBox:
    """Move the box so its midpoint is (lon, lat), keeping its degree extent."""
    center_lon, center_lat = center
    d_lon = (bbox.max_lon - bbox.min_lon) / 2
    d_lat = (bbox.max_lat - bbox.min_lat) / 2
    return GeoBoundingBox(
        center_lon - d_lon,
        center_lat - d_lat,
        center_lon + d_lon,
        center_lat + d_lat,
    )
