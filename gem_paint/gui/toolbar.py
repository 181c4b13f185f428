import tkinter as tk
from tkinter import ttk

from gem_paint.core.editor_tools import ToolType
from gem_paint.utils.helpers import color_to_hex


class ToolBar(ttk.Frame):
    def __init__(self, parent, palette, on_tool_change, on_color_change, on_increase, on_decrease,
                 on_clear, on_save):
        super().__init__(parent, padding=8)
        self.palette = palette
        self.on_tool_change = on_tool_change
        self.on_color_change = on_color_change
        self.on_increase = on_increase
        self.on_decrease = on_decrease
        self.on_clear = on_clear
        self.on_save = on_save
        self.swatches: dict[str, tk.Canvas] = {}
        self._build_ui()

    def set_tool(self, tool: ToolType):
        self.tool_var.set(tool.value)
        self.on_tool_change(tool)

    def set_radius(self, radius: int):
        self.radius_var.set(f"Size: {radius}")

    def set_selected_color(self, name: str):
        for swatch_name, swatch in self.swatches.items():
            selected = swatch_name == name
            swatch.configure(highlightthickness=3 if selected else 1,
                             highlightbackground="#4285f4" if selected else "#666")

    def _build_ui(self):
        tool_frame = ttk.LabelFrame(self, text="Tools", padding=6)
        tool_frame.pack(fill="x")

        self.tool_var = tk.StringVar(value=ToolType.BRUSH.value)
        tools = [
            ("Brush (B)", ToolType.BRUSH),
            ("Eraser (E)", ToolType.ERASER),
            ("Bucket (G)", ToolType.BUCKET),
        ]
        for (label, tool) in tools:
            b = ttk.Radiobutton(tool_frame, text=label, value=tool.value, variable=self.tool_var,
                                command=lambda t=tool: self.on_tool_change(t))
            b.pack(anchor="w", pady=2)

        size_frame = ttk.LabelFrame(self, text="Brush", padding=6)
        size_frame.pack(fill="x", pady=(8, 0))
        self.radius_var = tk.StringVar(value="")
        ttk.Label(size_frame, textvariable=self.radius_var).pack(anchor="w")
        btns = ttk.Frame(size_frame)
        btns.pack(fill="x", pady=(4, 0))
        ttk.Button(btns, text="+", width=3, command=self.on_increase).pack(side="left")
        ttk.Button(btns, text="-", width=3, command=self.on_decrease).pack(side="left", padx=(6, 0))

        color_frame = ttk.LabelFrame(self, text="Colors", padding=6)
        color_frame.pack(fill="x", pady=(8, 0))
        for name, rgba in self.palette.items():
            row = ttk.Frame(color_frame)
            row.pack(fill="x", pady=2)
            swatch = tk.Canvas(row, width=32, height=18, bg=color_to_hex(rgba),
                               highlightthickness=1, highlightbackground="#666", cursor="hand2")
            swatch.pack(side="left")
            swatch.bind("<Button-1>", lambda e, n=name: self.on_color_change(n))
            ttk.Label(row, text=name).pack(side="left", padx=(6, 0))
            self.swatches[name] = swatch

        action_frame = ttk.Frame(self)
        action_frame.pack(fill="x", pady=(12, 0))
        ttk.Button(action_frame, text="Clear", command=self.on_clear).pack(fill="x")
        ttk.Button(action_frame, text="Save", command=self.on_save).pack(fill="x", pady=(6, 0))
