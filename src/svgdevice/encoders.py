"""SVG element encoders, one per primitive kind."""

from __future__ import annotations

from xml.sax.saxutils import escape

from .config import SVG_CLOSE, SVG_OPEN_TEMPLATE, Theme
from .events import CircleEvent, LineEvent, PolylineEvent, TextEvent
from .profiles import DeviceSettings
from .theme_profiles import svg_color
from .units import format_number, to_user_units


def _units(value: float) -> str:
    return format_number(to_user_units(value))


def encode_svg_open(settings: DeviceSettings) -> str:
    """Return the root element's opening tag sized in document units."""
    return SVG_OPEN_TEMPLATE.format(width=_units(settings.width), height=_units(settings.height))


def encode_svg_close() -> str:
    return SVG_CLOSE


def encode_circle(event: CircleEvent, *, theme: type = Theme) -> str:
    # Radius is written in device units, unlike the center.
    return (
        f'<circle cx="{_units(event.x)}" cy="{_units(event.y)}" r="{format_number(event.r)}" '
        f'stroke="{svg_color(theme.STROKE)}" fill="{svg_color(theme.FILL)}" />'
    )


def encode_line(event: LineEvent, *, theme: type = Theme) -> str:
    return (
        f'<line x1="{_units(event.x1)}" y1="{_units(event.y1)}" '
        f'x2="{_units(event.x2)}" y2="{_units(event.y2)}" '
        f'stroke="{svg_color(theme.STROKE)}" fill="none" />'
    )


def encode_polyline(event: PolylineEvent, *, theme: type = Theme) -> str:
    points = " ".join(f"{_units(x)},{_units(y)}" for x, y in event.points)
    return f'<polyline points="{points}" stroke="{svg_color(theme.STROKE)}" fill="none" />'


def encode_text(event: TextEvent, *, theme: type = Theme, escape_text: bool = True) -> str:
    """Return a text element rotated about its anchor.

    The host measures rotation counter-clockwise with y pointing up while SVG
    rotates clockwise with y pointing down, so the angle is negated.

    With ``escape_text=False`` the content is written verbatim; markup
    characters in it then end up in the document unescaped.
    """
    x = _units(event.x)
    y = _units(event.y)
    body = escape(event.text) if escape_text else event.text
    return (
        f'<text x="{x}" y="{y}" transform="rotate({format_number(-event.rot)}, {x}, {y})" '
        f'fill="{svg_color(theme.TEXT_FILL)}">{body}</text>'
    )
