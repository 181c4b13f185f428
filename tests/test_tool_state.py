"""
ToolStateMachine tests: pointer handling, tool commands and stroke anchoring.
"""
import pytest
from PIL import Image

from gem_paint.core.canvas import PixelCanvas
from gem_paint.core.constants import LIGHT_GRAY, MAX_CURSOR_RADIUS, MIN_CURSOR_RADIUS
from gem_paint.core.editor_tools import ToolType
from gem_paint.core.tool_state import OUTSIDE_CANVAS, PointerEvent, PointerKind, ToolStateMachine

WHITE = (255, 255, 255, 255)
RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def press(x, y):
    return PointerEvent(PointerKind.PRESS, (x, y))


def drag(x, y):
    return PointerEvent(PointerKind.DRAG, (x, y))


class TestInitialState:
    """Defaults"""

    def test_defaults(self, paint_state):
        assert paint_state.tool == ToolType.BRUSH
        assert paint_state.color == RED
        assert paint_state.radius == 20
        assert paint_state.cursor_position is OUTSIDE_CANVAS
        assert paint_state.stroke_anchor is OUTSIDE_CANVAS
        assert paint_state.cursor_preview() is None

    def test_bad_radius_range(self, white_canvas):
        with pytest.raises(ValueError):
            ToolStateMachine(white_canvas, min_radius=0)
        with pytest.raises(ValueError):
            ToolStateMachine(white_canvas, min_radius=50, max_radius=10)


class TestBrushAndEraser:
    """Press and Drag with the brush and the eraser"""

    def test_press_paints_and_anchors(self, paint_state):
        assert paint_state.handle_pointer(press(50, 50)) is True
        assert paint_state.canvas.get(50, 50) == RED
        assert paint_state.stroke_anchor == (50, 50)
        assert paint_state.cursor_position == (50, 50)

    def test_press_drag_paints_continuous_band(self):
        state = ToolStateMachine(PixelCanvas(100, 250, WHITE), background=WHITE)
        state.handle_pointer(press(10, 10))
        state.handle_pointer(drag(10, 200))

        canvas = state.canvas
        assert all(canvas.get(10, y) == RED for y in range(10, 201))
        assert all(canvas.get(25, y) == RED for y in range(10, 201))
        assert state.stroke_anchor == (10, 200)

    def test_drag_without_anchor_does_not_interpolate(self, paint_state):
        paint_state.decrease_radius()
        paint_state.handle_pointer(press(10, 10))
        paint_state.handle_pointer(PointerEvent(PointerKind.LEAVE))
        paint_state.handle_pointer(drag(10, 90))

        assert paint_state.canvas.get(10, 50) == WHITE
        assert paint_state.canvas.get(10, 90) == RED
        assert paint_state.stroke_anchor == (10, 90)

    def test_release_ends_stroke(self, paint_state):
        paint_state.decrease_radius()
        paint_state.handle_pointer(press(10, 10))
        paint_state.handle_pointer(PointerEvent(PointerKind.RELEASE, (10, 10)))
        assert paint_state.stroke_anchor is OUTSIDE_CANVAS

        paint_state.handle_pointer(drag(10, 90))
        assert paint_state.canvas.get(10, 50) == WHITE

    def test_color_change_breaks_the_stroke(self, paint_state):
        paint_state.decrease_radius()
        paint_state.handle_pointer(press(10, 10))
        paint_state.select_color("Blue")
        assert paint_state.stroke_anchor is OUTSIDE_CANVAS

        paint_state.handle_pointer(drag(10, 90))
        assert paint_state.canvas.get(10, 50) == WHITE
        assert paint_state.canvas.get(10, 90) == BLUE

    def test_tool_change_resets_anchor(self, paint_state):
        paint_state.handle_pointer(press(10, 10))
        paint_state.select_tool(ToolType.ERASER)
        assert paint_state.stroke_anchor is OUTSIDE_CANVAS

    def test_radius_change_resets_anchor(self, paint_state):
        paint_state.handle_pointer(press(10, 10))
        paint_state.increase_radius()
        assert paint_state.stroke_anchor is OUTSIDE_CANVAS

    def test_eraser_paints_background(self, paint_state):
        paint_state.handle_pointer(press(50, 50))
        paint_state.select_tool(ToolType.ERASER)
        paint_state.handle_pointer(press(50, 50))
        assert paint_state.canvas.get(50, 50) == WHITE
        assert paint_state.active_color == WHITE

    def test_painting_at_edge_does_not_raise(self, paint_state):
        paint_state.handle_pointer(press(99.5, 0.2))
        paint_state.handle_pointer(drag(0, 99))
        assert paint_state.canvas.get(99, 0) == RED


class TestBucket:
    """Bucket fill on Press only"""

    def test_press_fills_without_anchor(self):
        state = ToolStateMachine(PixelCanvas(20, 20, WHITE), background=WHITE)
        state.select_tool(ToolType.BUCKET)

        assert state.handle_pointer(press(5, 5)) is True
        assert all(state.canvas.get(x, y) == RED for x in range(20) for y in range(20))
        assert state.stroke_anchor is OUTSIDE_CANVAS

    def test_drag_is_ignored(self):
        state = ToolStateMachine(PixelCanvas(20, 20, WHITE), background=WHITE)
        state.select_tool(ToolType.BUCKET)
        state.handle_pointer(press(5, 5))
        state.select_color("Blue")

        before = state.canvas.tobytes()
        assert state.handle_pointer(drag(5, 5)) is False
        assert state.canvas.tobytes() == before
        assert state.stroke_anchor is OUTSIDE_CANVAS

    def test_press_on_same_color_reports_no_change(self):
        state = ToolStateMachine(PixelCanvas(20, 20, RED), background=WHITE)
        state.select_tool(ToolType.BUCKET)
        assert state.handle_pointer(press(5, 5)) is False


class TestCursorEvents:
    """Enter, Move and Leave"""

    def test_enter_and_move_never_paint(self, paint_state):
        before = paint_state.canvas.tobytes()
        assert paint_state.handle_pointer(PointerEvent(PointerKind.ENTER, (3, 4))) is False
        assert paint_state.cursor_position == (3, 4)
        assert paint_state.handle_pointer(PointerEvent(PointerKind.MOVE, (30, 40))) is False
        assert paint_state.cursor_position == (30, 40)
        assert paint_state.canvas.tobytes() == before

    def test_leave_resets_cursor_and_anchor(self, paint_state):
        paint_state.handle_pointer(press(10, 10))
        paint_state.handle_pointer(PointerEvent(PointerKind.LEAVE))
        assert paint_state.cursor_position is OUTSIDE_CANVAS
        assert paint_state.stroke_anchor is OUTSIDE_CANVAS
        assert paint_state.cursor_preview() is None

    def test_brush_preview(self, paint_state):
        paint_state.handle_pointer(PointerEvent(PointerKind.MOVE, (30, 40)))
        preview = paint_state.cursor_preview()
        assert preview.position == (30, 40)
        assert preview.radius == 20
        assert preview.fill == RED

    def test_eraser_preview(self, paint_state):
        paint_state.select_tool(ToolType.ERASER)
        paint_state.handle_pointer(PointerEvent(PointerKind.MOVE, (30, 40)))
        preview = paint_state.cursor_preview()
        assert preview.fill == WHITE
        assert preview.ring == LIGHT_GRAY


class TestCommands:
    """Radius, color, clear and save commands"""

    def test_radius_clamped(self, paint_state):
        for _ in range(20):
            paint_state.increase_radius()
        assert paint_state.radius == MAX_CURSOR_RADIUS
        for _ in range(20):
            paint_state.decrease_radius()
        assert paint_state.radius == MIN_CURSOR_RADIUS

    def test_radius_steps(self, paint_state):
        assert paint_state.increase_radius() == 30
        assert paint_state.decrease_radius() == 20

    def test_select_color_by_value(self, paint_state):
        paint_state.select_color((1, 2, 3))
        assert paint_state.color == (1, 2, 3, 255)

    def test_select_unknown_palette_name(self, paint_state):
        with pytest.raises(KeyError):
            paint_state.select_color("Magenta")

    def test_clear(self, paint_state):
        paint_state.handle_pointer(press(50, 50))
        paint_state.clear()
        canvas = paint_state.canvas
        assert all(canvas.get(x, y) == WHITE for x in range(100) for y in range(100))
        assert paint_state.stroke_anchor is OUTSIDE_CANVAS

    def test_status_messages(self, white_canvas):
        messages = []
        state = ToolStateMachine(white_canvas, on_status=messages.append)
        state.select_tool(ToolType.BUCKET)
        state.increase_radius()
        state.clear()
        assert messages == ["Tool: bucket", "Brush size: 30", "Canvas cleared"]

    def test_save_uses_snapshot(self, paint_state, tmp_path):
        paint_state.handle_pointer(press(50, 50))
        expected = paint_state.canvas.tobytes()
        results = []
        out = tmp_path / "gem.png"

        thread = paint_state.request_save(out, on_done=results.append)
        paint_state.clear()
        paint_state.handle_pointer(press(10, 10))
        thread.join(timeout=10)

        assert results == [None]
        with Image.open(out) as im:
            assert im.convert("RGBA").tobytes() == expected
