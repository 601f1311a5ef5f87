"""Tests for parsing raw host calls into typed events."""

from __future__ import annotations

import unittest
from pathlib import Path

from svgdevice.events import (
    CircleEvent,
    CloseEvent,
    EventKind,
    LineEvent,
    OpenEvent,
    PolylineEvent,
    TextEvent,
    UnknownEvent,
    parse_event,
)
from svgdevice.profiles import DeviceSettings


class ParseEventTests(unittest.TestCase):
    def test_every_kind_is_recognized(self) -> None:
        self.assertEqual(
            {kind.value for kind in EventKind},
            {"open", "close", "circle", "line", "polyline", "text"},
        )

    def test_open_accepts_flat_dimensions(self) -> None:
        event = parse_event("open", {"width": 72, "height": 144, "output_target": "out.svg"})
        self.assertEqual(
            event,
            OpenEvent(settings=DeviceSettings(width=72, height=144), output_target=Path("out.svg")),
        )

    def test_open_accepts_nested_settings_with_metadata(self) -> None:
        event = parse_event(
            "open",
            {"settings": {"width": 10, "height": 20, "bg": "white"}, "output_target": "a.svg"},
        )
        self.assertIsInstance(event, OpenEvent)
        self.assertEqual(event.settings.metadata, {"bg": "white"})

    def test_open_without_settings_is_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "missing device settings"):
            parse_event("open", {"output_target": "out.svg"})

    def test_open_without_output_target_is_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "output_target"):
            parse_event("open", {"width": 72, "height": 72})

    def test_primitives(self) -> None:
        self.assertEqual(parse_event("close"), CloseEvent())
        self.assertEqual(parse_event("circle", {"x": 1, "y": 2, "r": 3}), CircleEvent(1, 2, 3))
        self.assertEqual(
            parse_event("line", {"x1": 0, "y1": 0, "x2": 1.5, "y2": 2}),
            LineEvent(0, 0, 1.5, 2),
        )
        self.assertEqual(
            parse_event("polyline", {"x": [0, 72], "y": [0, 72]}),
            PolylineEvent(x=(0, 72), y=(0, 72)),
        )
        self.assertEqual(
            parse_event("text", {"x": 0, "y": 72, "rot": 30, "str": "hi"}),
            TextEvent(x=0, y=72, rot=30, text="hi"),
        )

    def test_text_accepts_text_key_and_empty_string(self) -> None:
        event = parse_event("text", {"x": 0, "y": 0, "rot": 0, "text": ""})
        self.assertEqual(event, TextEvent(x=0, y=0, rot=0, text=""))

    def test_missing_field_is_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "missing required field 'r'"):
            parse_event("circle", {"x": 1, "y": 2})

    def test_non_numeric_field_is_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "must be a number"):
            parse_event("line", {"x1": "0", "y1": 0, "x2": 1, "y2": 1})
        with self.assertRaisesRegex(ValueError, "must be a number"):
            parse_event("circle", {"x": True, "y": 0, "r": 1})

    def test_numbers_are_converted_to_float(self) -> None:
        event = parse_event("circle", {"x": 36, "y": 0, "r": 5})
        self.assertIsInstance(event.x, float)  # type: ignore[union-attr]
        polyline = parse_event("polyline", {"x": [0, 72], "y": [1, 2]})
        self.assertTrue(all(isinstance(v, float) for v in polyline.x))  # type: ignore[union-attr]

    def test_integers_too_large_for_float_are_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "field 'x' of 'circle' event is too large"):
            parse_event("circle", {"x": 10**400, "y": 0, "r": 1})
        with self.assertRaisesRegex(ValueError, "field 'y' of 'polyline' event is too large"):
            parse_event("polyline", {"x": [0, 1], "y": [0, -(10**400)]})

    def test_polyline_length_mismatch_is_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "lengths differ"):
            parse_event("polyline", {"x": [0, 1, 2], "y": [0, 1]})

    def test_polyline_needs_two_points(self) -> None:
        with self.assertRaisesRegex(ValueError, "at least 2 points"):
            parse_event("polyline", {"x": [0], "y": [0]})

    def test_unknown_kind_never_raises(self) -> None:
        event = parse_event("rect", {"x0": 0})
        self.assertEqual(event, UnknownEvent(kind="rect", args={"x0": 0}))
        self.assertEqual(parse_event("clip", None), UnknownEvent(kind="clip"))


class PolylineEventTests(unittest.TestCase):
    def test_points_pair_coordinates_in_order(self) -> None:
        event = PolylineEvent(x=(0, 72, 144), y=(0, 72, 0))
        self.assertEqual(event.points, ((0, 0), (72, 72), (144, 0)))
