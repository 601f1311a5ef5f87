"""Host-side drawing adapters for the SVG device."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Protocol

from reportlab.pdfgen import canvas

from .config import Theme
from .device import device_callback
from .events import (
    CircleEvent,
    CloseEvent,
    Event,
    LineEvent,
    OpenEvent,
    PolylineEvent,
    TextEvent,
    UnknownEvent,
)
from .state import CanvasState, UnopenedCanvas


class DrawingPrimitives(Protocol):
    """Backend-agnostic drawing primitives used to replay device events."""

    def set_fill_color(self, color: Any) -> None: ...
    def set_stroke_color(self, color: Any) -> None: ...
    def draw_string(self, x: float, y: float, text: str) -> None: ...
    def line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...
    def polyline(self, points: Sequence[tuple[float, float]]) -> None: ...
    def circle(
        self, x: float, y: float, radius: float, *, fill: int = 0, stroke: int = 1
    ) -> None: ...
    def save_state(self) -> None: ...
    def restore_state(self) -> None: ...
    def translate(self, x: float, y: float) -> None: ...
    def rotate(self, angle: float) -> None: ...
    def show_page(self) -> None: ...
    def save(self) -> None: ...


class ReportLabPrimitives:
    """ReportLab-backed implementation of DrawingPrimitives."""

    def __init__(self, target: canvas.Canvas) -> None:
        self._target = target

    def set_fill_color(self, color: Any) -> None:
        self._target.setFillColor(color)

    def set_stroke_color(self, color: Any) -> None:
        self._target.setStrokeColor(color)

    def draw_string(self, x: float, y: float, text: str) -> None:
        self._target.drawString(x, y, text)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._target.line(x1, y1, x2, y2)

    def polyline(self, points: Sequence[tuple[float, float]]) -> None:
        path = self._target.beginPath()
        first, *rest = points
        path.moveTo(*first)
        for point in rest:
            path.lineTo(*point)
        self._target.drawPath(path, stroke=1, fill=0)

    def circle(self, x: float, y: float, radius: float, *, fill: int = 0, stroke: int = 1) -> None:
        self._target.circle(x, y, radius, fill=fill, stroke=stroke)

    def save_state(self) -> None:
        self._target.saveState()

    def restore_state(self) -> None:
        self._target.restoreState()

    def translate(self, x: float, y: float) -> None:
        self._target.translate(x, y)

    def rotate(self, angle: float) -> None:
        self._target.rotate(angle)

    def show_page(self) -> None:
        self._target.showPage()

    def save(self) -> None:
        self._target.save()


def create_reportlab_primitives(
    output_path: str,
    *,
    pagesize: tuple[float, float],
) -> ReportLabPrimitives:
    """Create a ReportLab-backed primitives renderer."""
    return ReportLabPrimitives(canvas.Canvas(output_path, pagesize=pagesize))


def replay_to_pdf(
    events: Iterable[Event],
    output_path: str | Path,
    *,
    theme: type = Theme,
) -> Path:
    """Draw a recorded event stream onto a PDF page for visual comparison.

    Device units are PDF points already and both use a y-up origin, so
    coordinates are passed through untouched. The stream must start with an
    ``open`` event, which supplies the page size.
    """
    destination = Path(output_path)
    pdf: DrawingPrimitives | None = None
    closed = False

    for event in events:
        if closed and not isinstance(event, UnknownEvent):
            msg = "cannot replay events after the device has been closed."
            raise ValueError(msg)
        if isinstance(event, OpenEvent):
            if pdf is not None:
                msg = "cannot open: the device is already open."
                raise ValueError(msg)
            pdf = create_reportlab_primitives(
                str(destination),
                pagesize=(event.settings.width, event.settings.height),
            )
            pdf.set_stroke_color(theme.STROKE)
            continue
        if isinstance(event, UnknownEvent):
            continue
        if pdf is None:
            msg = "event stream must start with an 'open' event."
            raise ValueError(msg)

        if isinstance(event, CloseEvent):
            pdf.show_page()
            pdf.save()
            closed = True
        elif isinstance(event, CircleEvent):
            pdf.set_fill_color(theme.FILL)
            pdf.circle(event.x, event.y, event.r, fill=1, stroke=1)
        elif isinstance(event, LineEvent):
            pdf.line(event.x1, event.y1, event.x2, event.y2)
        elif isinstance(event, PolylineEvent):
            pdf.polyline(event.points)
        elif isinstance(event, TextEvent):
            pdf.save_state()
            pdf.set_fill_color(theme.TEXT_FILL)
            pdf.translate(event.x, event.y)
            pdf.rotate(event.rot)
            pdf.draw_string(0, 0, event.text)
            pdf.restore_state()

    if not closed:
        msg = "event stream ended without a 'close' event."
        raise ValueError(msg)
    return destination


class SvgDeviceSession:
    """Minimal host runtime driving the SVG device one call at a time."""

    def __init__(self, **options: Any) -> None:
        self._options = options
        self.state: CanvasState = UnopenedCanvas()

    def call(self, kind: str, **args: Any) -> CanvasState:
        self.state = device_callback(kind, args, self.state, **self._options)
        return self.state

    def open(self, output_target: str | Path, *, width: float, height: float) -> CanvasState:
        return self.call("open", output_target=output_target, width=width, height=height)

    def circle(self, x: float, y: float, r: float) -> CanvasState:
        return self.call("circle", x=x, y=y, r=r)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> CanvasState:
        return self.call("line", x1=x1, y1=y1, x2=x2, y2=y2)

    def polyline(self, x: Sequence[float], y: Sequence[float]) -> CanvasState:
        return self.call("polyline", x=list(x), y=list(y))

    def text(self, x: float, y: float, text: str, *, rot: float = 0) -> CanvasState:
        return self.call("text", x=x, y=y, rot=rot, str=text)

    def close(self) -> CanvasState:
        return self.call("close")
