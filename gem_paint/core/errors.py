class GemPaintError(Exception):
    """Base class for paint engine errors."""


class InvalidDimensionsError(GemPaintError, ValueError):
    pass


class OutOfBoundsError(GemPaintError, IndexError):
    def __init__(self, x, y, width, height):
        super().__init__(f"({x}, {y}) is outside the {width}x{height} canvas")
        self.x = x
        self.y = y


class SaveFailedError(GemPaintError):
    """Raised (or reported) when encoding or writing an export fails."""
