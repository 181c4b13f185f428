import logging
import math
from collections import deque
from dataclasses import dataclass
from enum import Enum

from gem_paint.utils.helpers import normalize_color

logger = logging.getLogger(__name__)


class ToolType(Enum):
    BRUSH = "brush"
    ERASER = "eraser"
    BUCKET = "bucket"


class FillStatus(Enum):
    FILLED = "filled"
    NO_OP = "no_op"
    OUT_OF_BOUNDS = "out_of_bounds"


@dataclass(frozen=True)
class FillResult:
    status: FillStatus
    pixels_changed: int = 0

    @property
    def changed(self) -> bool:
        return self.pixels_changed > 0


def stamp_circle(canvas, center: tuple[float, float], radius: int, color: tuple[int, int, int, int]) -> int:
    """
    Paint a filled circle, overwriting whatever is there.

    The center is truncated to integer pixel coordinates. A pixel is inside
    iff dx*dx + dy*dy < radius*radius, so the boundary circle itself is
    never painted. Returns the number of pixels written on the canvas.
    """
    if radius <= 0:
        return 0
    cx = int(center[0])
    cy = int(center[1])
    r_squared = radius * radius
    painted = 0
    for y in range(cy - radius, cy + radius + 1):
        dy = y - cy
        for x in range(cx - radius, cx + radius + 1):
            dx = x - cx
            if dx * dx + dy * dy >= r_squared:
                continue
            if canvas.set_clamped(x, y, color):
                painted += 1
    return painted


def interpolate_stroke(canvas, start: tuple[float, float], end: tuple[float, float], radius: int,
                       color: tuple[int, int, int, int]) -> list[tuple[float, float]]:
    """
    Stamp circles along the segment start -> end so a fast drag leaves no gaps.

    Stamps are spaced radius / 4 apart and the last one lands exactly on end.
    Nothing is emitted for a non-positive radius, for zero movement, or when
    the samples are already within one step of each other (the caller stamps
    `end` itself). Returns the emitted centers.
    """
    if radius <= 0:
        return []
    step = radius / 4.0
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    distance = math.hypot(dx, dy)
    if distance == 0 or distance <= step:
        return []

    centers = []
    for i in range(math.ceil(distance / step) + 1):
        t = min(i * step, distance)
        point = (start[0] + t / distance * dx, start[1] + t / distance * dy)
        stamp_circle(canvas, point, radius, color)
        centers.append(point)
    return centers


def flood_fill(canvas, start: tuple[int, int], new_color: tuple[int, int, int, int]) -> FillResult:
    """
    Breadth-first 4-connected fill of the region sharing the seed's color.

    There is no visited set: a repainted pixel no longer matches the old
    color, so duplicates in the queue are dropped when they are dequeued.
    """
    new_color = normalize_color(new_color)
    x, y = int(start[0]), int(start[1])
    if not canvas.in_bounds(x, y):
        return FillResult(FillStatus.OUT_OF_BOUNDS)

    old_color = canvas.get(x, y)
    if old_color == new_color:
        return FillResult(FillStatus.NO_OP)

    count = 0
    queue = deque([(x, y)])
    while queue:
        x, y = queue.popleft()
        if not canvas.in_bounds(x, y):
            continue
        if canvas.get(x, y) != old_color:
            continue

        canvas.set_clamped(x, y, new_color)
        count += 1

        queue.append((x + 1, y))
        queue.append((x - 1, y))
        queue.append((x, y + 1))
        queue.append((x, y - 1))

    logger.debug("Flood fill from %s replaced %d pixels", start, count)
    return FillResult(FillStatus.FILLED, count)
