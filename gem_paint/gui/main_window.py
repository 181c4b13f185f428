import logging
import queue
import tkinter as tk
from pathlib import Path
from tkinter import messagebox, ttk

from gem_paint.core.canvas import PixelCanvas
from gem_paint.core.constants import DEFAULT_BACKGROUND, DEFAULT_SAVE_NAME
from gem_paint.core.editor_tools import ToolType
from gem_paint.core.image_handler import save_png_dialog
from gem_paint.core.tool_state import ToolStateMachine
from gem_paint.gui.canvas_view import CanvasView
from gem_paint.gui.toolbar import ToolBar
from gem_paint.utils.config import AppConfig

logger = logging.getLogger(__name__)

SAVE_POLL_MS = 100


class MainWindow(tk.Tk):
    def __init__(self, config: AppConfig, width: int | None = None, height: int | None = None,
                 radius: int | None = None):
        super().__init__()
        self.title("GemPaint")
        self.geometry("1000x800")
        self.minsize(640, 480)

        # Config
        self.config_mgr = config
        width = width or config.canvas_width
        height = height or config.canvas_height

        # State
        self.paint_state = ToolStateMachine(
            PixelCanvas(width, height, DEFAULT_BACKGROUND),
            radius=radius or config.default_radius,
            on_status=self._update_status,
        )
        # (destination, error) tuples posted by export threads
        self._save_results: queue.Queue = queue.Queue()

        # Build order: statusbar -> sidebar -> canvas
        self._build_statusbar()
        self._build_layout()

        self.toolbar.set_radius(self.paint_state.radius)
        self.toolbar.set_selected_color(next(iter(self.paint_state.palette)))
        self._update_image_info(width, height)
        self.after_idle(self.canvas_view.refresh)
        self._update_status("Ready")

        self._bind_shortcuts()
        self.protocol("WM_DELETE_WINDOW", self._on_exit)
        self._poll_id = self.after(SAVE_POLL_MS, self._poll_save_results)

    # -------------------- Shortcuts --------------------
    def _bind_shortcuts(self):
        self.bind_all("<Key-b>", lambda e: self.toolbar.set_tool(ToolType.BRUSH))
        self.bind_all("<Key-e>", lambda e: self.toolbar.set_tool(ToolType.ERASER))
        self.bind_all("<Key-g>", lambda e: self.toolbar.set_tool(ToolType.BUCKET))
        self.bind_all("<Key-plus>", lambda e: self.increase_radius())
        self.bind_all("<Key-equal>", lambda e: self.increase_radius())
        self.bind_all("<Key-minus>", lambda e: self.decrease_radius())
        self.bind_all("<Control-n>", lambda e: self.clear_canvas())
        self.bind_all("<Control-s>", lambda e: self.save_png())

    # -------------------- Layout --------------------
    def _build_layout(self):
        self.main_frame = ttk.Frame(self)
        self.main_frame.grid(row=0, column=0, sticky="nsew")
        self.rowconfigure(0, weight=1)
        self.columnconfigure(0, weight=1)
        self.main_frame.columnconfigure(1, weight=1)
        self.main_frame.rowconfigure(0, weight=1)

        self.toolbar = ToolBar(
            self.main_frame,
            palette=self.paint_state.palette,
            on_tool_change=self.select_tool,
            on_color_change=self.select_color,
            on_increase=self.increase_radius,
            on_decrease=self.decrease_radius,
            on_clear=self.clear_canvas,
            on_save=self.save_png,
        )
        self.toolbar.grid(row=0, column=0, sticky="ns")

        self.canvas_view = CanvasView(
            self.main_frame,
            self.paint_state,
            on_cursor=self._update_cursor,
        )
        self.canvas_view.grid(row=0, column=1, sticky="nsew", padx=8, pady=8)

    # -------------------- Status bar --------------------
    def _build_statusbar(self):
        self.statusbar = ttk.Frame(self)
        self.statusbar.grid(row=1, column=0, sticky="ew")
        self.statusbar.columnconfigure(0, weight=1)

        self.status_label = ttk.Label(self.statusbar, text="Status: Ready", anchor="w")
        self.status_label.grid(row=0, column=0, sticky="ew", padx=8)

        self.cursor_label = ttk.Label(self.statusbar, text="Cursor: -, -", width=20, anchor="e")
        self.cursor_label.grid(row=0, column=1, sticky="e", padx=8)

        self.dim_label = ttk.Label(self.statusbar, text="Canvas: 0x0", width=16, anchor="e")
        self.dim_label.grid(row=0, column=2, sticky="e", padx=8)

    # -------------------- Update handlers --------------------
    def _update_status(self, text):
        if hasattr(self, "status_label"):
            self.status_label.config(text=f"Status: {text}")

    def _update_cursor(self, x, y):
        if x is None or y is None:
            self.cursor_label.config(text="Cursor: -, -")
        else:
            self.cursor_label.config(text=f"Cursor: {x}, {y}")

    def _update_image_info(self, w, h):
        self.dim_label.config(text=f"Canvas: {w}x{h}")

    # -------------------- Commands --------------------
    def select_tool(self, tool: ToolType):
        self.paint_state.select_tool(tool)
        self.canvas_view.refresh()

    def select_color(self, name: str):
        self.paint_state.select_color(name)
        self.toolbar.set_selected_color(name)
        self.canvas_view.refresh()

    def increase_radius(self):
        self.toolbar.set_radius(self.paint_state.increase_radius())
        self.canvas_view.refresh()

    def decrease_radius(self):
        self.toolbar.set_radius(self.paint_state.decrease_radius())
        self.canvas_view.refresh()

    def clear_canvas(self):
        self.paint_state.clear()
        self.canvas_view.refresh()

    def save_png(self):
        out = save_png_dialog(self, initialdir=self.config_mgr.last_save_dir, initialfile=DEFAULT_SAVE_NAME)
        if not out:
            return
        self.config_mgr.last_save_dir = str(Path(out).parent)
        self.paint_state.request_save(out, on_done=lambda error: self._save_results.put((out, error)))

    def _poll_save_results(self):
        while True:
            try:
                out, error = self._save_results.get_nowait()
            except queue.Empty:
                break
            if error is None:
                self._update_status(f"Saved PNG: {Path(out).name}")
            else:
                self._update_status("Save failed")
                messagebox.showerror("Error", f"Failed to save PNG:\n{error}")
        self._poll_id = self.after(SAVE_POLL_MS, self._poll_save_results)

    def _on_exit(self):
        pending = self.paint_state.exporter.pending()
        if pending:
            logger.warning("Exiting with %d save(s) still in progress", pending)
        self.after_cancel(self._poll_id)
        self.config_mgr.save()
        self.destroy()


def run_app(config: AppConfig, width: int | None = None, height: int | None = None,
            radius: int | None = None):
    app = MainWindow(config, width=width, height=height, radius=radius)
    app.mainloop()
