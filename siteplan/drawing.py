"""Drawing instructions emitted by the export pipeline for a document backend."""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class PageMetadata:
    width: float    # page units (mm)
    height: float
    margin: float

    @property
    def drawable_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def drawable_height(self) -> float:
        return self.height - 2 * self.margin


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class StrokeStyle:
    color: str                  # "#RRGGBB"
    width: float                # page units
    dash: Optional[tuple[float, float]] = None
    layer: str = "0"


@dataclass(frozen=True)
class Stroke:
    pass


@dataclass(frozen=True)
class Text:
    content: str
    x: float
    y: float
    align: str = "center"       # left | center | right
    size: float = 10.0          # points


DrawingInstruction = Union[MoveTo, LineTo, StrokeStyle, Stroke, Text]


def line(x0: float, y0: float, x1: float, y1: float) -> list[DrawingInstruction]:
    """A single stroked segment."""
    return [MoveTo(x0, y0), LineTo(x1, y1), Stroke()]
