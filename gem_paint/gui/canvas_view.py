import tkinter as tk
from tkinter import ttk

from PIL import ImageTk

from gem_paint.core.tool_state import PointerEvent, PointerKind, ToolStateMachine
from gem_paint.utils.helpers import color_to_hex


class CanvasView(ttk.Frame):
    """Shows the paint buffer unscaled and feeds mouse input to the state machine."""

    def __init__(self, parent, paint_state: ToolStateMachine, on_cursor=None):
        super().__init__(parent)
        self.paint_state = paint_state
        self.on_cursor = on_cursor or (lambda x, y: None)
        self._photo = None
        self._build_ui()

    def _build_ui(self):
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        self.canvas = tk.Canvas(self, bg="#c8c8c8", highlightthickness=0, cursor="none")
        self.canvas.grid(row=0, column=0, sticky="nsew")

        self.hbar = ttk.Scrollbar(self, orient="horizontal", command=self.canvas.xview)
        self.vbar = ttk.Scrollbar(self, orient="vertical", command=self.canvas.yview)
        self.canvas.configure(xscrollcommand=self.hbar.set, yscrollcommand=self.vbar.set)
        self.hbar.grid(row=1, column=0, sticky="ew")
        self.vbar.grid(row=0, column=1, sticky="ns")

        self.canvas.bind("<Enter>", lambda e: self._dispatch(PointerKind.ENTER, e))
        self.canvas.bind("<Motion>", lambda e: self._dispatch(PointerKind.MOVE, e))
        self.canvas.bind("<ButtonPress-1>", lambda e: self._dispatch(PointerKind.PRESS, e))
        self.canvas.bind("<B1-Motion>", lambda e: self._dispatch(PointerKind.DRAG, e))
        self.canvas.bind("<ButtonRelease-1>", lambda e: self._dispatch(PointerKind.RELEASE, e))
        self.canvas.bind("<Leave>", lambda e: self._dispatch(PointerKind.LEAVE, e))

    def _canvas_to_image(self, cx, cy):
        return self.canvas.canvasx(cx), self.canvas.canvasy(cy)

    def _dispatch(self, kind: PointerKind, event):
        x, y = self._canvas_to_image(event.x, event.y)
        inside = 0 <= x < self.paint_state.canvas.width and 0 <= y < self.paint_state.canvas.height
        if not inside and kind != PointerKind.RELEASE:
            # Off-image parts of the widget count as outside the canvas.
            kind = PointerKind.LEAVE

        changed = self.paint_state.handle_pointer(PointerEvent(kind, (x, y)))
        if kind == PointerKind.LEAVE:
            self.on_cursor(None, None)
        else:
            self.on_cursor(int(x), int(y))

        if changed:
            self.refresh()
        else:
            self._draw_preview()

    # ---------- Rendering ----------
    def refresh(self):
        image = self.paint_state.canvas.image
        if self._photo is None or (self._photo.width(), self._photo.height()) != image.size:
            self._photo = ImageTk.PhotoImage(image)
            self.canvas.delete("all")
            self.canvas.config(scrollregion=(0, 0, image.width, image.height))
            self.canvas.create_image(0, 0, image=self._photo, anchor="nw", tags="buffer")
        else:
            self._photo.paste(image)
        self._draw_preview()

    def _draw_preview(self):
        self.canvas.delete("preview")
        preview = self.paint_state.cursor_preview()
        if preview is None:
            return
        x, y = preview.position
        r = preview.radius
        self.canvas.create_oval(x - r, y - r, x + r, y + r,
                                fill=color_to_hex(preview.fill), outline=color_to_hex(preview.ring),
                                width=1, tags="preview")
