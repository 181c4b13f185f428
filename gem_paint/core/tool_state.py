import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from gem_paint.core.canvas import PixelCanvas
from gem_paint.core.constants import (
    CURSOR_RADIUS_STEP,
    DEFAULT_BACKGROUND,
    DEFAULT_CURSOR_RADIUS,
    LIGHT_GRAY,
    MAX_CURSOR_RADIUS,
    MIN_CURSOR_RADIUS,
    PALETTE,
)
from gem_paint.core.editor_tools import FillStatus, ToolType, flood_fill, interpolate_stroke, stamp_circle
from gem_paint.core.image_handler import CanvasExporter
from gem_paint.utils.helpers import clamp, normalize_color

logger = logging.getLogger(__name__)

# Pointer is not over the canvas / no stroke in progress.
OUTSIDE_CANVAS = None


class PointerKind(Enum):
    ENTER = "enter"
    MOVE = "move"
    PRESS = "press"
    DRAG = "drag"
    RELEASE = "release"
    LEAVE = "leave"


@dataclass(frozen=True)
class PointerEvent:
    kind: PointerKind
    position: tuple[float, float] = (0.0, 0.0)


@dataclass(frozen=True)
class CursorPreview:
    position: tuple[float, float]
    radius: int
    fill: tuple[int, int, int, int]
    ring: tuple[int, int, int, int]


class ToolStateMachine:
    """
    Applies pointer events and tool commands to a PixelCanvas.

    Every call runs to completion on the caller's thread; the canvas is only
    ever mutated from here. Saving works on a snapshot so painting may go on
    while an export is still being written.
    """

    def __init__(self, canvas: PixelCanvas, background=DEFAULT_BACKGROUND, palette=None,
                 radius: int = DEFAULT_CURSOR_RADIUS, min_radius: int = MIN_CURSOR_RADIUS,
                 max_radius: int = MAX_CURSOR_RADIUS, radius_step: int = CURSOR_RADIUS_STEP,
                 exporter: CanvasExporter | None = None, on_status=None):
        if min_radius <= 0 or min_radius > max_radius:
            raise ValueError(f"Invalid radius range [{min_radius}, {max_radius}]")
        self.canvas = canvas
        self.background = normalize_color(background)
        self.palette = {name: normalize_color(c) for name, c in (palette or PALETTE).items()}
        self.min_radius = min_radius
        self.max_radius = max_radius
        self.radius_step = radius_step
        self.exporter = exporter or CanvasExporter()
        self.on_status = on_status or (lambda text: None)

        self.tool = ToolType.BRUSH
        self.color = next(iter(self.palette.values()))
        self.radius = clamp(radius, min_radius, max_radius)
        self.cursor_position: Optional[tuple[float, float]] = OUTSIDE_CANVAS
        self.stroke_anchor: Optional[tuple[float, float]] = OUTSIDE_CANVAS

    # ---------- Commands ----------
    def select_tool(self, tool: ToolType):
        self.tool = ToolType(tool)
        self.stroke_anchor = OUTSIDE_CANVAS
        logger.debug("Current tool: %s", self.tool.value)
        self.on_status(f"Tool: {self.tool.value}")

    def select_color(self, color):
        """Select a palette entry by name, or any RGB/RGBA color."""
        if isinstance(color, str):
            if color not in self.palette:
                raise KeyError(f"Unknown palette color: {color}")
            self.color = self.palette[color]
        else:
            self.color = normalize_color(color)
        self.stroke_anchor = OUTSIDE_CANVAS
        logger.debug("Selected color: %s", self.color)
        self.on_status(f"Color: RGBA{self.color}")

    def increase_radius(self) -> int:
        return self._set_radius(self.radius + self.radius_step)

    def decrease_radius(self) -> int:
        return self._set_radius(self.radius - self.radius_step)

    def _set_radius(self, radius: int) -> int:
        self.radius = clamp(radius, self.min_radius, self.max_radius)
        self.stroke_anchor = OUTSIDE_CANVAS
        logger.debug("Cursor radius: %d", self.radius)
        self.on_status(f"Brush size: {self.radius}")
        return self.radius

    def clear(self):
        self.canvas.fill_all(self.background)
        self.stroke_anchor = OUTSIDE_CANVAS
        logger.debug("Canvas cleared")
        self.on_status("Canvas cleared")

    def request_save(self, destination: str | Path, on_done=None):
        """Snapshot the canvas now and write it in the background."""
        snapshot = self.canvas.snapshot()
        self.on_status(f"Saving {Path(destination).name}...")
        return self.exporter.export(snapshot, destination, on_done)

    # ---------- Pointer events ----------
    @property
    def active_color(self) -> tuple[int, int, int, int]:
        if self.tool == ToolType.ERASER:
            return self.background
        return self.color

    def handle_pointer(self, event: PointerEvent) -> bool:
        """Apply one pointer event. Returns True if the canvas changed."""
        kind = event.kind
        if kind == PointerKind.LEAVE:
            self.cursor_position = OUTSIDE_CANVAS
            self.stroke_anchor = OUTSIDE_CANVAS
            return False
        if kind == PointerKind.RELEASE:
            self.cursor_position = event.position
            self.stroke_anchor = OUTSIDE_CANVAS
            return False

        self.cursor_position = event.position
        if kind == PointerKind.PRESS:
            return self._on_press(event.position)
        if kind == PointerKind.DRAG:
            return self._on_drag(event.position)
        return False

    def _on_press(self, pos) -> bool:
        if self.tool == ToolType.BUCKET:
            result = flood_fill(self.canvas, pos, self.color)
            if result.status == FillStatus.NO_OP:
                logger.debug("Fill at %s skipped: region already has the target color", pos)
            elif result.status == FillStatus.OUT_OF_BOUNDS:
                logger.debug("Fill at %s skipped: outside the canvas", pos)
            else:
                self.on_status(f"Filled {result.pixels_changed} pixels")
            return result.changed

        painted = stamp_circle(self.canvas, pos, self.radius, self.active_color)
        self.stroke_anchor = pos
        return painted > 0

    def _on_drag(self, pos) -> bool:
        if self.tool == ToolType.BUCKET:
            return False

        color = self.active_color
        changed = stamp_circle(self.canvas, pos, self.radius, color) > 0
        if self.stroke_anchor is not OUTSIDE_CANVAS:
            centers = interpolate_stroke(self.canvas, self.stroke_anchor, pos, self.radius, color)
            changed = changed or bool(centers)
        self.stroke_anchor = pos
        return changed

    # ---------- Rendering support ----------
    def cursor_preview(self) -> Optional[CursorPreview]:
        if self.cursor_position is OUTSIDE_CANVAS:
            return None
        if self.tool == ToolType.ERASER:
            return CursorPreview(self.cursor_position, self.radius, self.background, LIGHT_GRAY)
        return CursorPreview(self.cursor_position, self.radius, self.color, self.color)
