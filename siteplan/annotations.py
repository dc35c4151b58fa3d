"""Scale bar and north arrow."""

from .drawing import DrawingInstruction, PageMetadata, Text, line
from .styles import annotation_style

# Nice round scale bar lengths in meters, ascending.
SCALE_BAR_LENGTHS = [1, 2, 5, 10, 20, 50, 100, 200, 500, 1000, 2000, 5000, 10000]

SCALE_BAR_OFFSET_X = 12
SCALE_BAR_OFFSET_Y = 24
SCALE_BAR_TICK = 3
SCALE_BAR_LABEL_GAP = 5
SCALE_BAR_WIDTH = 1.0
SCALE_BAR_FONT_SIZE = 10

ARROW_OFFSET_X = 24
ARROW_OFFSET_Y = 32
ARROW_LENGTH = 18
ARROW_HEAD_HALF_WIDTH = 4
ARROW_HEAD_DEPTH = 7
ARROW_LABEL_GAP = 4
ARROW_WIDTH = 1.2
ARROW_FONT_SIZE = 12


def scale_bar_length(real_width_m: float) -> int:
    """Largest candidate strictly under a quarter of the real width (min 1 m)."""
    length = SCALE_BAR_LENGTHS[0]
    for candidate in SCALE_BAR_LENGTHS:
        if candidate < real_width_m / 4:
            length = candidate
    return length


def format_length(meters: int) -> str:
    return f"{meters} m"


def scale_bar(real_width_m: float, page: PageMetadata) -> list[DrawingInstruction]:
    """Horizontal bar with end ticks and a centered label, bottom left.

    Returns nothing when the extent has no width to measure against.
    """
    if real_width_m <= 0 or page.drawable_width <= 0:
        return []

    length = scale_bar_length(real_width_m)
    meters_per_unit = real_width_m / page.drawable_width
    bar = length / meters_per_unit

    x = page.margin + SCALE_BAR_OFFSET_X
    y = page.height - page.margin - SCALE_BAR_OFFSET_Y
    ops: list[DrawingInstruction] = [annotation_style(SCALE_BAR_WIDTH)]
    ops += line(x, y, x + bar, y)
    ops += line(x, y - SCALE_BAR_TICK, x, y + SCALE_BAR_TICK)
    ops += line(x + bar, y - SCALE_BAR_TICK, x + bar, y + SCALE_BAR_TICK)
    ops.append(Text(format_length(length), x + bar / 2, y + SCALE_BAR_TICK + SCALE_BAR_LABEL_GAP,
                    align="center", size=SCALE_BAR_FONT_SIZE))
    return ops


def north_arrow(page: PageMetadata) -> list[DrawingInstruction]:
    """Shaft, two head strokes and an "N", top left.  Scale independent."""
    x = page.margin + ARROW_OFFSET_X
    y = page.margin + ARROW_OFFSET_Y
    tip = y - ARROW_LENGTH

    ops: list[DrawingInstruction] = [annotation_style(ARROW_WIDTH)]
    ops += line(x, y, x, tip)
    ops += line(x, tip, x - ARROW_HEAD_HALF_WIDTH, tip + ARROW_HEAD_DEPTH)
    ops += line(x, tip, x + ARROW_HEAD_HALF_WIDTH, tip + ARROW_HEAD_DEPTH)
    ops.append(Text("N", x, tip - ARROW_LABEL_GAP, align="center", size=ARROW_FONT_SIZE))
    return ops
