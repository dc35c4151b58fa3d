"""Export pipeline: bbox + raw elements + paper settings -> drawing instructions."""

from dataclasses import dataclass
from typing import Iterable, Optional

from .annotations import north_arrow, scale_bar
from .drawing import DrawingInstruction, LineTo, MoveTo, PageMetadata, Stroke
from .features import DRAW_ORDER, LineFeature, classify
from .paper import GeoBoundingBox, PaperSpec, paper_dimensions
from .projection import PAGE_MARGIN, PageFrame, Projector, export_extent, page_paths
from .styles import stroke_style


@dataclass(frozen=True)
class ExportResult:
    page: PageMetadata
    instructions: tuple[DrawingInstruction, ...]


def _feature_ops(feature: LineFeature, frame: PageFrame) -> list[DrawingInstruction]:
    runs = page_paths(frame.to_page(lon, lat) for lon, lat in feature.coordinates)
    if not runs:
        return []
    ops: list[DrawingInstruction] = []
    for run in runs:
        ops.append(MoveTo(*run[0]))
        ops.extend(LineTo(*pt) for pt in run[1:])
    ops.append(Stroke())
    return ops


def render(bbox: GeoBoundingBox,
           elements: Optional[Iterable[dict]],
           categories: Iterable[str],
           paper: PaperSpec) -> ExportResult:
    """Render one sheet.

    Layers are drawn water, railways, streets, buildings regardless of input
    order, followed by the scale bar and north arrow.  With no elements the
    sheet carries only the annotations.
    """
    width, height = paper_dimensions(paper)
    page = PageMetadata(width=width, height=height, margin=PAGE_MARGIN)

    projector = Projector()
    extent = export_extent(bbox, projector)
    frame = PageFrame(projector, extent, page)

    layers = classify(elements, categories)

    ops: list[DrawingInstruction] = []
    for category in DRAW_ORDER:
        layer_ops: list[DrawingInstruction] = []
        for feat in layers[category]:
            layer_ops.extend(_feature_ops(feat, frame))
        if layer_ops:
            ops.append(stroke_style(category))
            ops.extend(layer_ops)

    ops.extend(scale_bar(extent.width, page))
    ops.extend(north_arrow(page))
    return ExportResult(page=page, instructions=tuple(ops))
