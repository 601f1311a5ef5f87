"""Device settings captured when a document is opened."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .config import DEFAULT_DEVICE


@dataclass(frozen=True)
class DeviceSettings:
    """Physical canvas size in points plus host metadata."""

    width: float
    height: float
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DeviceProfile:
    """Named canvas preset."""

    name: str
    page_width: float
    page_height: float

    def to_settings(self) -> DeviceSettings:
        return DeviceSettings(
            width=self.page_width,
            height=self.page_height,
            metadata={"profile": self.name},
        )


DEVICE_PROFILES = {
    "letter": DeviceProfile(name="US Letter", page_width=612, page_height=792),
    "a4": DeviceProfile(name="ISO A4", page_width=595, page_height=842),
    "square": DeviceProfile(name="Square 10in", page_width=720, page_height=720),
}


def _validate_dimension(value: Any, *, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = f"{key} must be a number."
        raise TypeError(msg)
    if math.isfinite(value) and value <= 0:
        msg = f"{key} must be > 0."
        raise ValueError(msg)
    return value


def resolve_device_settings(
    *,
    device: str | None = None,
    width: float | None = None,
    height: float | None = None,
) -> DeviceSettings:
    """Resolve a preset and apply explicit width/height overrides."""
    if device is None and (width is None or height is None):
        device = DEFAULT_DEVICE

    if device is not None:
        if device not in DEVICE_PROFILES:
            valid = ", ".join(sorted(DEVICE_PROFILES))
            msg = f"unknown device '{device}'. Valid devices: {valid}."
            raise ValueError(msg)
        base = DEVICE_PROFILES[device].to_settings()
    else:
        base = DeviceSettings(width=0, height=0)

    return DeviceSettings(
        width=_validate_dimension(base.width if width is None else width, key="width"),
        height=_validate_dimension(base.height if height is None else height, key="height"),
        metadata=base.metadata,
    )
