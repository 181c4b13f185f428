import pytest

from gem_paint.core.canvas import PixelCanvas
from gem_paint.core.tool_state import ToolStateMachine

WHITE = (255, 255, 255, 255)
RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
GRAY = (128, 128, 128, 255)


@pytest.fixture
def white_canvas():
    return PixelCanvas(100, 100, WHITE)


@pytest.fixture
def paint_state(white_canvas):
    return ToolStateMachine(white_canvas, background=WHITE)
