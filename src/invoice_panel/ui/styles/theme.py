import tkinter as tk
from typing import Dict

import customtkinter as ctk

# Theme definitions
THEMES: Dict[str, dict] = {
    "light": {
        "bg": "#f8f9fc",
        "surface": "#ffffff",
        "panel": "#f2f5f9",
        "muted": "#475467",
        "text": "#0f172a",
        "accent": "#3b82f6",
        "accent_dim": "#2563eb",
        "border": "#d7dde7",
        "danger": "#dc2626",
    },
    "dark": {
        "bg": "#0b111a",
        "surface": "#121a26",
        "panel": "#1b2433",
        "muted": "#9aa3b2",
        "text": "#f2f5f9",
        "accent": "#3b82f6",
        "accent_dim": "#2563eb",
        "border": "#243040",
        "danger": "#f87171",
    },
}

ACTIVE_THEME = "light"
PALETTE = THEMES[ACTIVE_THEME]

# Badge colors for invoice and order statuses.
STATUS_COLORS = {
    "pending": "muted",
    "in_progress": "accent",
    "completed": "accent_dim",
    "cancelled": "danger",
    "draft": "muted",
    "sent": "accent",
    "paid": "accent_dim",
    "overdue": "danger",
}


def apply_theme(root: tk.Misc, name: str = "light") -> dict:
    global ACTIVE_THEME, PALETTE
    if name not in THEMES:
        name = "light"
    ACTIVE_THEME = name
    PALETTE = THEMES[name]
    ctk.set_appearance_mode("Light" if name == "light" else "Dark")
    ctk.set_default_color_theme("blue")
    root.configure(fg_color=PALETTE["bg"])
    return PALETTE


def status_color(status: str) -> str:
    return PALETTE[STATUS_COLORS.get(status, "muted")]
