"""Canvas lifecycle states threaded through every device call."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from .config import Theme
from .profiles import DeviceSettings


class CanvasStateError(ValueError):
    """An event arrived in a lifecycle state where it is not allowed."""


@dataclass(frozen=True)
class UnopenedCanvas:
    """No document yet; only ``open`` is accepted."""


@dataclass
class OpenCanvas:
    """Document in progress.

    ``buffer`` only grows until the canvas is closed. ``output_target`` and
    ``settings`` are fixed at open time.
    """

    output_target: Path
    settings: DeviceSettings
    buffer: list[str] = field(default_factory=list)
    theme: type = Theme
    escape_text: bool = True
    active: bool = True

    def append(self, fragment: str) -> OpenCanvas:
        require_open(self, action="append")
        self.buffer.append(fragment)
        return self


@dataclass(frozen=True)
class ClosedCanvas:
    """Finished document; terminal state."""

    output_target: Path
    document: str


CanvasState = Union[UnopenedCanvas, OpenCanvas, ClosedCanvas]


def require_open(state: CanvasState, *, action: str) -> OpenCanvas:
    """Return ``state`` if it is an active open canvas, else raise."""
    if isinstance(state, OpenCanvas) and state.active:
        return state
    if isinstance(state, UnopenedCanvas):
        msg = f"cannot {action}: the device has not been opened."
        raise CanvasStateError(msg)
    if isinstance(state, (OpenCanvas, ClosedCanvas)):
        msg = f"cannot {action}: the device has already been closed."
        raise CanvasStateError(msg)
    msg = f"cannot {action}: {type(state).__name__} is not a canvas state."
    raise TypeError(msg)
