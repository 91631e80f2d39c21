"""Colour theme for the partner management window."""

from __future__ import annotations

from typing import Any

_OVERRIDES = {
    "background": "#ffffff",
    "button": "#f4e8d3",
    "input_background": "#f4e8d3",
    "primary": "#67ba80",
    "focus": "#67ba80",
    "foreground": "#000000",
}

_DEFAULTS = {
    "background": "#f5f5f5",
    "button": "#e6e6e6",
    "input_background": "#f3f3f3",
    "primary": "#2196f3",
    "focus": "#2196f3",
    "foreground": "#1f1f1f",
    "disabled": "#a6a6a6",
    "disabled_button": "#e6e6e6",
    "error": "#f44336",
    "hover": "#e0e0e0",
    "placeholder": "#808080",
    "pressed": "#d0d0d0",
    "scroll_bar": "#999999",
    "selection": "#bbdefb",
    "separator": "#e3e3e3",
    "shadow": "#cccccc",
    "success": "#43a047",
    "warning": "#ff9800",
}


class CustomTheme:
    """Light theme with a beige input colour and a green accent."""

    def color(self, name: str) -> str:
        """Return the colour for a theme colour name as "#rrggbb"."""
        if name in _OVERRIDES:
            return _OVERRIDES[name]
        try:
            return _DEFAULTS[name]
        except KeyError:
            raise ValueError(f"unknown theme colour: {name!r}") from None

    def apply(self, root: Any) -> Any:
        """Apply the theme to a Tk root window and return its ttk style."""
        from tkinter import ttk

        background = self.color("background")
        foreground = self.color("foreground")
        button = self.color("button")
        field = self.color("input_background")
        primary = self.color("primary")

        root.configure(background=background)
        style = ttk.Style(root)
        style.configure(".", background=background, foreground=foreground)
        style.configure("TFrame", background=background)
        style.configure("TLabel", background=background, foreground=foreground)
        style.configure("TButton", background=button, foreground=foreground)
        style.map("TButton", background=[("active", primary), ("focus", primary)])
        style.configure("TEntry", fieldbackground=field, foreground=foreground)
        style.configure("TCombobox", fieldbackground=field, foreground=foreground)
        style.configure("TNotebook", background=background)
        style.map("TNotebook.Tab", background=[("selected", primary)])
        style.configure(
            "Treeview",
            background=background,
            fieldbackground=background,
            foreground=foreground,
        )
        style.map("Treeview", background=[("selected", primary)])
        return style