"""CLI for rendering recorded device event streams."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path
from typing import Any

from .config import DEFAULT_DEVICE, DEFAULT_FILENAME_TEMPLATE, OUTPUT_FORMATS, Theme
from .device import check_event_order, render_document
from .drawing import replay_to_pdf
from .events import CloseEvent, Event, OpenEvent, UnknownEvent, parse_event
from .profiles import DEVICE_PROFILES, resolve_device_settings
from .state import ClosedCanvas
from .theme_profiles import available_theme_profiles, resolve_theme


def load_event_stream(path: str | Path) -> list[Event]:
    """Read a JSON array of ``{"kind": ..., "args": {...}}`` device calls."""
    source = Path(path)
    if not source.exists():
        msg = f"events file '{source}' does not exist."
        raise ValueError(msg)

    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"events file '{source}' is not valid JSON: {exc}."
        raise ValueError(msg) from exc

    if not isinstance(payload, list):
        msg = "events file content must be a JSON array."
        raise ValueError(msg)

    events: list[Event] = []
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict) or not isinstance(entry.get("kind"), str):
            msg = f"event #{index} must be an object with a string 'kind'."
            raise ValueError(msg)
        args = entry.get("args") or {}
        if not isinstance(args, dict):
            msg = f"event #{index} 'args' must be an object."
            raise ValueError(msg)
        events.append(parse_event(entry["kind"], args))
    return events


def complete_event_stream(
    events: Sequence[Event],
    *,
    output_path: Path,
    device: str | None = None,
    width: float | None = None,
    height: float | None = None,
) -> list[Event]:
    """Frame a recording with ``open``/``close`` and point it at ``output_path``."""
    completed = list(events)
    first = next((event for event in completed if not isinstance(event, UnknownEvent)), None)
    if isinstance(first, OpenEvent):
        index = completed.index(first)
        completed[index] = replace(first, output_target=output_path)
    else:
        settings = resolve_device_settings(device=device, width=width, height=height)
        completed.insert(0, OpenEvent(settings=settings, output_target=output_path))

    if not any(isinstance(event, CloseEvent) for event in completed):
        completed.append(CloseEvent())
    return completed


def render_events_file(
    events_path: str | Path,
    *,
    output_path: str | Path | None = None,
    output_format: str = "svg",
    device: str | None = None,
    width: float | None = None,
    height: float | None = None,
    theme: type = Theme,
    escape_text: bool = True,
) -> Path:
    """Render one recorded event stream to SVG (or PDF) and return its path."""
    if output_format not in OUTPUT_FORMATS:
        valid = ", ".join(OUTPUT_FORMATS)
        msg = f"unknown output format '{output_format}'. Valid formats: {valid}."
        raise ValueError(msg)

    source = Path(events_path)
    destination = Path(
        output_path
        if output_path is not None
        else DEFAULT_FILENAME_TEMPLATE.format(stem=source.stem, format=output_format)
    )
    events = complete_event_stream(
        load_event_stream(source),
        output_path=destination,
        device=device,
        width=width,
        height=height,
    )
    check_event_order(events)

    if output_format == "pdf":
        return replay_to_pdf(events, destination, theme=theme)

    state = render_document(events, theme=theme, escape_text=escape_text)
    if not isinstance(state, ClosedCanvas):  # pragma: no cover - close is always appended
        msg = "event stream did not close the device."
        raise ValueError(msg)
    return state.output_target


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svgdevice",
        description="Render recorded graphics-device event streams.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log device calls to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("devices", help="List device presets.")

    render_parser = subparsers.add_parser("render", help="Render an events JSON file.")
    render_parser.add_argument("events", type=Path, help="JSON array of device calls.")
    render_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output path. Default: <events stem>.<format>",
    )
    render_parser.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default="svg",
        help="Output document format.",
    )
    render_parser.add_argument(
        "--device",
        choices=sorted(DEVICE_PROFILES),
        default=None,
        help=f"Device preset used when the stream has no 'open' call. Default: {DEFAULT_DEVICE}",
    )
    render_parser.add_argument("--width", type=float, default=None, help="Canvas width in points.")
    render_parser.add_argument("--height", type=float, default=None, help="Canvas height in points.")
    render_parser.add_argument(
        "--theme-profile",
        choices=available_theme_profiles(),
        default="default",
        help="Built-in theme profile name.",
    )
    render_parser.add_argument(
        "--theme-file",
        type=Path,
        default=None,
        help="JSON file with theme overrides.",
    )
    render_parser.add_argument(
        "--raw-text",
        action="store_true",
        help="Write text content without escaping markup characters.",
    )
    return parser


def _run(args: Any) -> int:
    if args.command == "devices":
        for key in sorted(DEVICE_PROFILES):
            profile = DEVICE_PROFILES[key]
            print(f"{key}\t{profile.name}\t{profile.page_width}x{profile.page_height}pt")
        return 0

    resolved_theme = resolve_theme(profile=args.theme_profile, theme_file=args.theme_file)
    destination = render_events_file(
        args.events,
        output_path=args.output,
        output_format=args.output_format,
        device=args.device,
        width=args.width,
        height=args.height,
        theme=resolved_theme,
        escape_text=not args.raw_text,
    )
    print(f"Generated document at: {destination}")
    return 0


def main(argv: list[str] | None = None) -> int:
    argv_list = list(sys.argv[1:] if argv is None else argv)
    parser = _build_arg_parser()
    args = parser.parse_args(argv_list)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        return _run(args)
    except ValueError as exc:
        parser.exit(status=2, message=f"error: {exc}\n")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
