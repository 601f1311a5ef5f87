"""Configuration constants for SVG device output."""

from reportlab.lib import colors

# Presets
DEFAULT_DEVICE = "letter"

# File output
DEFAULT_FILENAME_TEMPLATE = "{stem}.{format}"
OUTPUT_FORMATS = ("svg", "pdf")

# Root element
SVG_OPEN_TEMPLATE = '<svg width="{width}" height="{height}">'
SVG_CLOSE = "</svg>"
FRAGMENT_SEPARATOR = "\n"


class Theme:
    """Stroke and fill choices for emitted elements."""

    STROKE = colors.black
    FILL = colors.black
    TEXT_FILL = colors.black
