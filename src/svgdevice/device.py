"""Device callback dispatcher and document lifecycle handlers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .config import FRAGMENT_SEPARATOR, Theme
from .encoders import (
    encode_circle,
    encode_line,
    encode_polyline,
    encode_svg_close,
    encode_svg_open,
    encode_text,
)
from .events import (
    CircleEvent,
    CloseEvent,
    Event,
    LineEvent,
    OpenEvent,
    PolylineEvent,
    TextEvent,
    UnknownEvent,
    is_finite_event,
    parse_event,
)
from .profiles import DeviceSettings
from .state import (
    CanvasState,
    CanvasStateError,
    ClosedCanvas,
    OpenCanvas,
    UnopenedCanvas,
    require_open,
)

logger = logging.getLogger(__name__)


def open_canvas(
    settings: DeviceSettings | None,
    output_target: str | Path | None,
    *,
    theme: type = Theme,
    escape_text: bool = True,
) -> OpenCanvas:
    """Start a document holding only the root element's opening tag."""
    if settings is None:
        msg = "cannot open device: settings are required."
        raise ValueError(msg)
    if output_target is None or not str(output_target):
        msg = "cannot open device: an output target is required."
        raise ValueError(msg)

    state = OpenCanvas(
        output_target=Path(output_target),
        settings=settings,
        theme=theme,
        escape_text=escape_text,
    )
    state.append(encode_svg_open(settings))
    logger.debug(
        "opened %sx%s device writing to %s", settings.width, settings.height, state.output_target
    )
    return state


def close_canvas(state: CanvasState) -> ClosedCanvas:
    """Finish the document and write it to the output target once."""
    canvas = require_open(state, action="close")
    canvas.append(encode_svg_close())
    canvas.active = False

    document = FRAGMENT_SEPARATOR.join(canvas.buffer)
    canvas.output_target.write_text(document, encoding="utf-8")
    logger.debug(
        "wrote %d fragments (%d chars) to %s",
        len(canvas.buffer),
        len(document),
        canvas.output_target,
    )
    return ClosedCanvas(output_target=canvas.output_target, document=document)


def dispatch(
    event: Event,
    state: CanvasState,
    *,
    theme: type = Theme,
    escape_text: bool = True,
) -> CanvasState:
    """Route one event to its handler and return the state for the next call.

    ``theme`` and ``escape_text`` only take effect on ``open``; afterwards the
    open canvas carries them.
    """
    if isinstance(event, UnknownEvent):
        # Hosts may emit calls this device does not implement; ignore them.
        logger.debug("ignoring unsupported device call '%s'", event.kind)
        return state

    if isinstance(event, OpenEvent):
        if not isinstance(state, UnopenedCanvas):
            msg = "cannot open: the device is already open or closed."
            raise CanvasStateError(msg)
        return open_canvas(
            event.settings,
            event.output_target,
            theme=theme,
            escape_text=escape_text,
        )

    if isinstance(event, CloseEvent):
        return close_canvas(state)

    canvas = require_open(state, action=f"draw {type(event).__name__}")
    if not is_finite_event(event):
        logger.warning("non-finite coordinates in %s are written unchanged", event)

    if isinstance(event, CircleEvent):
        return canvas.append(encode_circle(event, theme=canvas.theme))
    if isinstance(event, LineEvent):
        return canvas.append(encode_line(event, theme=canvas.theme))
    if isinstance(event, PolylineEvent):
        return canvas.append(encode_polyline(event, theme=canvas.theme))
    if isinstance(event, TextEvent):
        return canvas.append(
            encode_text(event, theme=canvas.theme, escape_text=canvas.escape_text)
        )

    msg = f"unhandled event type: {type(event).__name__}"
    raise TypeError(msg)


def device_callback(
    kind: str,
    args: Mapping[str, Any] | None,
    state: CanvasState,
    **options: Any,
) -> CanvasState:
    """Host-facing entry point: handle one ``(kind, args)`` device call."""
    return dispatch(parse_event(kind, args), state, **options)


def render_document(
    events: Iterable[Event],
    *,
    theme: type = Theme,
    escape_text: bool = True,
) -> CanvasState:
    """Replay an event sequence from a fresh device and return the final state."""
    state: CanvasState = UnopenedCanvas()
    for event in events:
        state = dispatch(event, state, theme=theme, escape_text=escape_text)
    return state


def check_event_order(events: Iterable[Event]) -> None:
    """Raise ``CanvasStateError`` if a sequence would break the device lifecycle.

    Lets callers reject a recording before anything is written.
    """
    opened = closed = False
    for event in events:
        if isinstance(event, UnknownEvent):
            continue
        if isinstance(event, OpenEvent):
            if opened:
                msg = "cannot open: the device is already open or closed."
                raise CanvasStateError(msg)
            opened = True
            continue

        action = "close" if isinstance(event, CloseEvent) else f"draw {type(event).__name__}"
        if not opened:
            msg = f"cannot {action}: the device has not been opened."
            raise CanvasStateError(msg)
        if closed:
            msg = f"cannot {action}: the device has already been closed."
            raise CanvasStateError(msg)
        closed = isinstance(event, CloseEvent)
