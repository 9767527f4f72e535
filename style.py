"""Visual style constants: palettes per theme and widget sizes."""

from data import Theme

# ── Palettes ──────────────────────────────────────────────────────────────────
PALETTES = {
    Theme.DARK: {
        "bg": "#1e1f24",
        "surface": "#2a2c33",
        "text": "#e3e3e3",
        "muted": "#8a8d96",
        "accent": "#4682b4",
        "border": "#3a3d46",
        "error": "#ff8a80",
    },
    Theme.LIGHT: {
        "bg": "#f5f5f5",
        "surface": "white",
        "text": "#202124",
        "muted": "#6b6f76",
        "accent": "#4682b4",
        "border": "#ddd",
        "error": "#c62828",
    },
}

# ── Rows ──────────────────────────────────────────────────────────────────────
ROW_BUTTON_WIDTH = 64
ROW_SPACING = 4
PAGE_MARGIN = 8

# ── Window ────────────────────────────────────────────────────────────────────
WINDOW_TITLE = "Task Lists"
WINDOW_SIZE = (520, 600)


def stylesheet(theme: Theme) -> str:
    p = PALETTES[Theme(theme)]
    return (
        f"QWidget {{ background: {p['bg']}; color: {p['text']}; }}"
        f"QLineEdit {{ background: {p['surface']}; border: 1px solid {p['border']};"
        "  border-radius: 4px; padding: 3px; }"
        f"QPushButton {{ background: {p['surface']}; border: 1px solid {p['border']};"
        "  border-radius: 4px; padding: 4px 8px; }"
        f"QPushButton:hover {{ border-color: {p['accent']}; }}"
        f"QFrame#list-item, QFrame#todo {{ background: {p['surface']};"
        f"  border: 1px solid {p['border']}; border-radius: 4px; }}"
        f"QLabel#empty-msg {{ color: {p['muted']}; }}"
        f"QLabel#status {{ color: {p['error']}; }}"
    )
