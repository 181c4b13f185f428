import logging

from PIL import Image

from gem_paint.core.errors import InvalidDimensionsError, OutOfBoundsError
from gem_paint.utils.helpers import normalize_color

logger = logging.getLogger(__name__)


class PixelCanvas:
    """
    Fixed-size RGBA pixel buffer backed by a Pillow image.

    All painting goes through set_clamped, which silently ignores
    coordinates outside the buffer. get() is strict and raises.
    """

    def __init__(self, width: int, height: int, fill_color=(255, 255, 255, 255)):
        if not isinstance(width, int) or not isinstance(height, int) or width <= 0 or height <= 0:
            raise InvalidDimensionsError(f"Canvas size must be positive, got {width}x{height}")
        self._image = Image.new("RGBA", (width, height), normalize_color(fill_color))
        self._px = self._image.load()
        logger.debug("Created %dx%d canvas", width, height)

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    @property
    def image(self) -> Image.Image:
        # Live buffer, for display only. Use snapshot() for anything that outlives the event.
        return self._image

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._image.width and 0 <= y < self._image.height

    def get(self, x: int, y: int) -> tuple[int, int, int, int]:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)
        return self._px[x, y]

    def set_clamped(self, x: int, y: int, color) -> bool:
        if not self.in_bounds(x, y):
            return False
        self._px[x, y] = color
        return True

    def fill_all(self, color):
        self._image.paste(normalize_color(color), (0, 0, self.width, self.height))

    def snapshot(self) -> Image.Image:
        return self._image.copy()

    def tobytes(self) -> bytes:
        return self._image.tobytes()

    def __repr__(self):
        return f"PixelCanvas({self.width}x{self.height})"
