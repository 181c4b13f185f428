import json
import logging
from pathlib import Path

from gem_paint.core.constants import (
    DEFAULT_CANVAS_SIZE,
    DEFAULT_CURSOR_RADIUS,
    MAX_CURSOR_RADIUS,
    MIN_CURSOR_RADIUS,
)
from gem_paint.utils.helpers import clamp

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path.home() / ".gem_paint_config.json"


class AppConfig:
    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path else DEFAULT_PATH
        self._set_defaults()
        self._load()

    def _set_defaults(self):
        self.canvas_width: int = DEFAULT_CANVAS_SIZE[0]
        self.canvas_height: int = DEFAULT_CANVAS_SIZE[1]
        self.default_radius: int = DEFAULT_CURSOR_RADIUS
        self.last_save_dir: str = ""

    def _load(self):
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            self.canvas_width = max(1, int(data.get("canvas_width", self.canvas_width)))
            self.canvas_height = max(1, int(data.get("canvas_height", self.canvas_height)))
            self.default_radius = clamp(data.get("default_radius", self.default_radius),
                                        MIN_CURSOR_RADIUS, MAX_CURSOR_RADIUS)
            self.last_save_dir = str(data.get("last_save_dir", ""))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable config %s: %s", self.path, e)
            self._set_defaults()

    def to_dict(self) -> dict:
        return {
            "canvas_width": self.canvas_width,
            "canvas_height": self.canvas_height,
            "default_radius": self.default_radius,
            "last_save_dir": self.last_save_dir,
        }

    def save(self):
        try:
            self.path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write config %s: %s", self.path, e)
