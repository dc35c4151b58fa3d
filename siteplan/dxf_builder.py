"""DXF generation: replay drawing instructions onto a millimetre sheet."""

from typing import TextIO

import ezdxf
from ezdxf.colors import rgb2int
from ezdxf.enums import TextEntityAlignment

from .drawing import LineTo, MoveTo, Stroke, StrokeStyle, Text
from .export import ExportResult
from .styles import DXF_LAYER_NAMES

# Lineweights AutoCAD accepts, hundredths of mm.
VALID_LINEWEIGHTS = (0, 5, 9, 13, 15, 18, 20, 25, 30, 35, 40, 50, 53, 60,
                     70, 80, 90, 100, 106, 120, 140, 158, 200, 211)

POINTS_TO_MM = 25.4 / 72

TEXT_ALIGNMENT = {
    "left":   TextEntityAlignment.LEFT,
    "center": TextEntityAlignment.CENTER,
    "right":  TextEntityAlignment.RIGHT,
}

DEFAULT_STYLE = StrokeStyle("#000000", 0.25)


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    h = hex_color.lstrip("#")
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def lineweight(width_mm: float) -> int:
    """Nearest valid DXF lineweight for a stroke width in mm."""
    target = width_mm * 100
    return min(VALID_LINEWEIGHTS, key=lambda lw: abs(lw - target))


def _attribs(style: StrokeStyle) -> dict:
    attribs = {
        "layer": style.layer,
        "true_color": rgb2int(hex_to_rgb(style.color)),
        "lineweight": lineweight(style.width),
    }
    if style.dash:
        attribs["linetype"] = "DASHED"
    return attribs


def build_dxf(result: ExportResult) -> ezdxf.document.Drawing:
    """Create a DXF document from an export result.

    Page coordinates (y down) are flipped so the sheet reads upright in CAD
    (y up).  Units are millimetres.
    """
    doc = ezdxf.new("R2010", setup=True)
    doc.header["$INSUNITS"] = 4
    msp = doc.modelspace()

    for dxf_name in DXF_LAYER_NAMES.values():
        doc.layers.add(dxf_name)

    page_h = result.page.height

    def flip(x: float, y: float) -> tuple[float, float]:
        return (x, page_h - y)

    style = DEFAULT_STYLE
    runs: list[list[tuple[float, float]]] = []
    current: list[tuple[float, float]] = []

    for op in result.instructions:
        if isinstance(op, StrokeStyle):
            style = op
        elif isinstance(op, MoveTo):
            if current:
                runs.append(current)
            current = [flip(op.x, op.y)]
        elif isinstance(op, LineTo):
            current.append(flip(op.x, op.y))
        elif isinstance(op, Stroke):
            if current:
                runs.append(current)
            current = []
            for run in runs:
                if len(run) >= 2:
                    msp.add_lwpolyline(run, dxfattribs=_attribs(style))
            runs = []
        elif isinstance(op, Text):
            msp.add_text(
                op.content,
                height=op.size * POINTS_TO_MM,
                dxfattribs={
                    "layer": style.layer,
                    "true_color": rgb2int(hex_to_rgb(style.color)),
                },
            ).set_placement(flip(op.x, op.y),
                            align=TEXT_ALIGNMENT.get(op.align, TextEntityAlignment.CENTER))

    return doc


def write_dxf(result: ExportResult, stream: TextIO) -> None:
    """Write the DXF for an export result to a text stream."""
    build_dxf(result).write(stream)
