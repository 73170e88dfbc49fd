"""
Styles and themes for NoteGraph.

Dark theme matching the graph background.
"""

# Dark theme colors
COLORS = {
    "bg_primary": "#0f1117",
    "bg_secondary": "#1a1d27",
    "bg_hover": "#2e323e",
    "text_primary": "#e2e8f0",
    "text_secondary": "#94a3b8",
    "accent": "#a855f7",
    "border": "#2e323e",
}

DARK_STYLESHEET = """
QMainWindow, QWidget {
    background-color: #0f1117;
    color: #e2e8f0;
    font-family: "Segoe UI", sans-serif;
}

QToolBar {
    background-color: #1a1d27;
    border: none;
    border-bottom: 1px solid #2e323e;
    spacing: 6px;
    padding: 4px;
}
QToolButton {
    background-color: transparent;
    color: #e2e8f0;
    border: 1px solid transparent;
    border-radius: 4px;
    padding: 4px 10px;
}
QToolButton:hover {
    background-color: #2e323e;
    border-color: #a855f7;
}

QToolTip {
    background-color: #1a1d27;
    color: #e2e8f0;
    border: 1px solid #2e323e;
    padding: 4px;
}

QStatusBar {
    background-color: #1a1d27;
    color: #94a3b8;
    border-top: 1px solid #2e323e;
}
"""
