"""Typed device events and parsing of raw host calls."""

from __future__ import annotations

import enum
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from .profiles import DeviceSettings


class EventKind(str, enum.Enum):
    """Closed set of device calls handled by the engine."""

    OPEN = "open"
    CLOSE = "close"
    CIRCLE = "circle"
    LINE = "line"
    POLYLINE = "polyline"
    TEXT = "text"


@dataclass(frozen=True)
class OpenEvent:
    settings: DeviceSettings
    output_target: Path


@dataclass(frozen=True)
class CloseEvent:
    pass


@dataclass(frozen=True)
class CircleEvent:
    x: float
    y: float
    r: float


@dataclass(frozen=True)
class LineEvent:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class PolylineEvent:
    """Vertices as parallel coordinate sequences, in drawing order."""

    x: tuple[float, ...]
    y: tuple[float, ...]

    @property
    def points(self) -> tuple[tuple[float, float], ...]:
        return tuple(zip(self.x, self.y))


@dataclass(frozen=True)
class TextEvent:
    """Text run anchored at (x, y), rotated counter-clockwise by ``rot`` degrees."""

    x: float
    y: float
    rot: float
    text: str


@dataclass(frozen=True)
class UnknownEvent:
    """A call the engine does not handle; passed through untouched."""

    kind: str
    args: Mapping[str, Any] = field(default_factory=dict)


PrimitiveEvent = Union[CircleEvent, LineEvent, PolylineEvent, TextEvent]
Event = Union[OpenEvent, CloseEvent, CircleEvent, LineEvent, PolylineEvent, TextEvent, UnknownEvent]


def _require(args: Mapping[str, Any], key: str, *, kind: str) -> Any:
    if key not in args or args[key] is None:
        msg = f"'{kind}' event is missing required field '{key}'."
        raise ValueError(msg)
    return args[key]


def _as_float(value: int | float, key: str, *, kind: str) -> float:
    try:
        return float(value)
    except OverflowError as exc:
        msg = f"field '{key}' of '{kind}' event is too large to represent as a float."
        raise ValueError(msg) from exc


def _number(args: Mapping[str, Any], key: str, *, kind: str) -> float:
    value = _require(args, key, kind=kind)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = f"field '{key}' of '{kind}' event must be a number, got {value!r}."
        raise ValueError(msg)
    return _as_float(value, key, kind=kind)


def _number_sequence(args: Mapping[str, Any], key: str, *, kind: str) -> tuple[float, ...]:
    values = _require(args, key, kind=kind)
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        msg = f"field '{key}' of '{kind}' event must be a sequence of numbers."
        raise ValueError(msg)
    for value in values:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            msg = f"field '{key}' of '{kind}' event must contain only numbers, got {value!r}."
            raise ValueError(msg)
    return tuple(_as_float(value, key, kind=kind) for value in values)


def _parse_settings(args: Mapping[str, Any]) -> DeviceSettings:
    settings = args.get("settings")
    if isinstance(settings, DeviceSettings):
        return settings
    if settings is None:
        settings = {key: args[key] for key in ("width", "height") if key in args}
    if not isinstance(settings, Mapping) or not settings:
        msg = "'open' event is missing device settings."
        raise ValueError(msg)
    width = _number(settings, "width", kind="open")
    height = _number(settings, "height", kind="open")
    metadata = {key: value for key, value in settings.items() if key not in ("width", "height")}
    return DeviceSettings(width=width, height=height, metadata=metadata)


def parse_event(kind: str, args: Mapping[str, Any] | None = None) -> Event:
    """Build a typed event from a host call's tag and argument mapping.

    Unrecognized tags produce an :class:`UnknownEvent` instead of an error so
    hosts may emit calls this engine does not support yet. Malformed arguments
    for a recognized tag raise ``ValueError``.
    """
    args = dict(args or {})
    try:
        event_kind = EventKind(kind)
    except ValueError:
        return UnknownEvent(kind=str(kind), args=args)

    if event_kind is EventKind.OPEN:
        output_target = _require(args, "output_target", kind=kind)
        return OpenEvent(settings=_parse_settings(args), output_target=Path(output_target))

    if event_kind is EventKind.CLOSE:
        return CloseEvent()

    if event_kind is EventKind.CIRCLE:
        return CircleEvent(
            x=_number(args, "x", kind=kind),
            y=_number(args, "y", kind=kind),
            r=_number(args, "r", kind=kind),
        )

    if event_kind is EventKind.LINE:
        return LineEvent(
            x1=_number(args, "x1", kind=kind),
            y1=_number(args, "y1", kind=kind),
            x2=_number(args, "x2", kind=kind),
            y2=_number(args, "y2", kind=kind),
        )

    if event_kind is EventKind.POLYLINE:
        xs = _number_sequence(args, "x", kind=kind)
        ys = _number_sequence(args, "y", kind=kind)
        if len(xs) != len(ys):
            msg = f"polyline coordinate lengths differ: {len(xs)} x values, {len(ys)} y values."
            raise ValueError(msg)
        if len(xs) < 2:
            msg = "polyline needs at least 2 points."
            raise ValueError(msg)
        return PolylineEvent(x=xs, y=ys)

    if event_kind is EventKind.TEXT:
        text = args["text"] if "text" in args else _require(args, "str", kind=kind)
        if not isinstance(text, str):
            msg = f"field 'str' of 'text' event must be a string, got {text!r}."
            raise ValueError(msg)
        return TextEvent(
            x=_number(args, "x", kind=kind),
            y=_number(args, "y", kind=kind),
            rot=_number(args, "rot", kind=kind),
            text=text,
        )

    raise AssertionError(f"unhandled event kind: {event_kind}")  # pragma: no cover


def is_finite_event(event: Event) -> bool:
    """Return whether every coordinate of a primitive event is finite."""
    if isinstance(event, CircleEvent):
        values: tuple[float, ...] = (event.x, event.y, event.r)
    elif isinstance(event, LineEvent):
        values = (event.x1, event.y1, event.x2, event.y2)
    elif isinstance(event, PolylineEvent):
        values = event.x + event.y
    elif isinstance(event, TextEvent):
        values = (event.x, event.y, event.rot)
    else:
        return True
    return all(math.isfinite(value) for value in values)
