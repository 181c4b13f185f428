import logging
import threading
from io import BytesIO
from pathlib import Path
from typing import Callable, Optional

from PIL import Image

from gem_paint.core.constants import DEFAULT_SAVE_NAME
from gem_paint.core.errors import SaveFailedError

logger = logging.getLogger(__name__)


def pil_to_png_bytes(im: Image.Image) -> bytes:
    buf = BytesIO()
    im.save(buf, format="PNG", optimize=True)
    return buf.getvalue()


def save_png(image: Image.Image, out_path: str | Path) -> int:
    """Encode to PNG and write it out. Returns the number of bytes written."""
    p = Path(out_path)
    try:
        data = pil_to_png_bytes(image)
    except (OSError, ValueError) as e:
        raise SaveFailedError(f"Failed encoding PNG: {e}") from e
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
    except OSError as e:
        raise SaveFailedError(f"Failed writing {p}: {e}") from e
    return len(data)


def save_png_dialog(parent, initialdir: str | None = None, initialfile: str | None = None) -> str | None:
    from tkinter import filedialog

    path = filedialog.asksaveasfilename(
        parent=parent,
        title="Save PNG",
        defaultextension=".png",
        initialdir=initialdir or None,
        initialfile=initialfile or DEFAULT_SAVE_NAME,
        filetypes=[("PNG", "*.png")],
    )
    return path or None


class CanvasExporter:
    """
    Writes canvas snapshots to PNG on a background thread.

    The caller must hand over a snapshot (an independent image), never the
    live canvas buffer. Completion is reported through on_done(error), where
    error is None on success or a SaveFailedError. on_done runs on the worker
    thread; GUI callers must hop back to their own loop.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._threads: list[threading.Thread] = []

    def export(self, snapshot: Image.Image, destination: str | Path,
               on_done: Optional[Callable[[Optional[SaveFailedError]], None]] = None) -> threading.Thread:
        on_done = on_done or (lambda error: None)
        thread = threading.Thread(
            target=self._run,
            args=(snapshot, Path(destination), on_done),
            name=f"export-{Path(destination).name}",
            daemon=True,
        )
        with self._lock:
            self._threads = [t for t in self._threads if t.is_alive()]
            self._threads.append(thread)
        thread.start()
        return thread

    def pending(self) -> int:
        with self._lock:
            return sum(1 for t in self._threads if t.is_alive())

    def _run(self, snapshot: Image.Image, destination: Path, on_done):
        try:
            size = save_png(snapshot, destination)
        except SaveFailedError as e:
            logger.error("%s", e)
            on_done(e)
            return
        except Exception as e:
            logger.exception("Unexpected error saving %s", destination)
            error = SaveFailedError(f"Failed saving {destination}: {e}")
            error.__cause__ = e
            on_done(error)
            return
        logger.info("Saved %s (%d bytes)", destination, size)
        on_done(None)
