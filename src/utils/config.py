"""Application configuration constants."""

from __future__ import annotations

from pathlib import Path

APP_NAME = "VNSceneMockup"
APP_VERSION = "0.2.0"
ORG_NAME = "VNSceneMockup"

# Per-user data directory (logs)
APP_DATA_DIR = Path.home() / ".vnscenemockup"

# Durable autosave slot. Bump the suffix on any incompatible schema change.
AUTOSAVE_KEY = "vn-mockup-autosave-v2"
RECENT_FILES_KEY = "recent/files"
RECENT_FILES_MAX_KEY = "recent/max_files"
RECENT_FILES_MAX_DEFAULT = 10

# File names offered in save dialogs
PROJECT_FILENAME = "vn-scene-project.json"
EXPORT_FILENAME = "vn-scene-export.png"

PROJECT_FILTER = "Scene Project (*.json);;All Files (*)"
EXPORT_FILTER = "PNG Image (*.png)"

# Supported image formats
IMAGE_EXTENSIONS = [".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp", ".tiff"]
IMAGE_FILTER = "Image Files ({});;All Files (*)".format(
    " ".join(f"*{ext}" for ext in IMAGE_EXTENSIONS)
)

# Font tokens: (label, token, Qt family used for painting)
FONTS = [
    ("Sans-serif (Modern)", "sans-serif", "Sans Serif"),
    ("Serif (Classic)", "serif", "Serif"),
    ("Monospace (Retro)", "monospace", "Monospace"),
    ("System UI", "system-ui", ""),
]
FONT_TOKENS = [token for _, token, _ in FONTS]
DEFAULT_FONT_TOKEN = "sans-serif"

# Editing bounds
FONT_SIZE_MIN = 12
FONT_SIZE_MAX = 72
OPACITY_MIN = 0
OPACITY_MAX = 100
PADDING_MIN = 0
PADDING_MAX = 50

# Layout (logical pixels unless noted)
GRADIENT_FADE_MARGIN_PERCENT = 10  # fade above the text block, % of container height
PANEL_SIDE_MARGIN = 32
PANEL_INNER_PADDING = 32
CONTENT_SIDE_PADDING = 64
LINE_SPACING = 8

# Text outline: black copies drawn at these offsets under the text
OUTLINE_COLOR = "#000000"
OUTLINE_OFFSETS = [(2, 2), (-1, -1), (1, -1), (-1, 1), (1, 1)]

# Preview / export
PREVIEW_FIT_SIZE = (1280, 720)
PREVIEW_ORIGINAL_MIN_SIZE = (800, 600)
EXPORT_SCALE = 2
EXPORT_BACKGROUND = "#000000"
