import argparse
import logging
import sys
from pathlib import Path

from gem_paint.core.constants import MAX_CURSOR_RADIUS, MIN_CURSOR_RADIUS
from gem_paint.utils.config import AppConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="GemPaint - a small raster paint program")
    parser.add_argument("--debug", action="store_true", help="Log tool, color and radius changes")
    parser.add_argument("--width", type=int, help="Canvas width in pixels (overrides config)")
    parser.add_argument("--height", type=int, help="Canvas height in pixels (overrides config)")
    parser.add_argument("--radius", type=int,
                        help=f"Initial brush radius, {MIN_CURSOR_RADIUS}-{MAX_CURSOR_RADIUS}")
    parser.add_argument("--config", type=str, help="Path to a JSON config file")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.debug:
        logging.getLogger(__name__).debug("Debug mode enabled")

    for name in ("width", "height", "radius"):
        value = getattr(args, name)
        if value is not None and value <= 0:
            parser.error(f"--{name} must be a positive integer")

    config = AppConfig(Path(args.config) if args.config else None)

    # Imported late so --help works without a display
    from gem_paint.gui.main_window import run_app

    try:
        run_app(config, width=args.width, height=args.height, radius=args.radius)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
