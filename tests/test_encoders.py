"""Tests for SVG element encoders."""

from __future__ import annotations

import unittest

from svgdevice.encoders import (
    encode_circle,
    encode_line,
    encode_polyline,
    encode_svg_close,
    encode_svg_open,
    encode_text,
)
from svgdevice.events import CircleEvent, LineEvent, PolylineEvent, TextEvent
from svgdevice.profiles import DeviceSettings
from svgdevice.theme_profiles import ThemeProfile


class RootElementTests(unittest.TestCase):
    def test_open_tag_uses_document_units(self) -> None:
        self.assertEqual(
            encode_svg_open(DeviceSettings(width=720, height=360)),
            '<svg width="10" height="5">',
        )

    def test_close_tag(self) -> None:
        self.assertEqual(encode_svg_close(), "</svg>")


class CircleEncoderTests(unittest.TestCase):
    def test_center_is_scaled_but_radius_is_not(self) -> None:
        self.assertEqual(
            encode_circle(CircleEvent(x=36, y=36, r=5)),
            '<circle cx="0.5" cy="0.5" r="5" stroke="black" fill="black" />',
        )

    def test_uses_theme_colors(self) -> None:
        theme = ThemeProfile(stroke="#ff0000", fill="#00ff00").to_theme_class()
        fragment = encode_circle(CircleEvent(x=0, y=0, r=1), theme=theme)
        self.assertIn('stroke="#ff0000"', fragment)
        self.assertIn('fill="#00ff00"', fragment)


class LineEncoderTests(unittest.TestCase):
    def test_endpoints_are_scaled(self) -> None:
        self.assertEqual(
            encode_line(LineEvent(x1=0, y1=72, x2=144, y2=36)),
            '<line x1="0" y1="1" x2="2" y2="0.5" stroke="black" fill="none" />',
        )

    def test_zero_length_line_is_encoded_as_is(self) -> None:
        fragment = encode_line(LineEvent(x1=72, y1=72, x2=72, y2=72))
        self.assertIn('x1="1" y1="1" x2="1" y2="1"', fragment)


class PolylineEncoderTests(unittest.TestCase):
    def test_points_are_interleaved_in_input_order(self) -> None:
        self.assertEqual(
            encode_polyline(PolylineEvent(x=(0, 72, 144), y=(0, 72, 0))),
            '<polyline points="0,0 1,1 2,0" stroke="black" fill="none" />',
        )

    def test_degenerate_polyline(self) -> None:
        fragment = encode_polyline(PolylineEvent(x=(36, 36), y=(36, 36)))
        self.assertIn('points="0.5,0.5 0.5,0.5"', fragment)


class TextEncoderTests(unittest.TestCase):
    def test_rotation_is_negated_about_anchor(self) -> None:
        self.assertEqual(
            encode_text(TextEvent(x=0, y=72, rot=30, text="hi")),
            '<text x="0" y="1" transform="rotate(-30, 0, 1)" fill="black">hi</text>',
        )

    def test_zero_rotation(self) -> None:
        fragment = encode_text(TextEvent(x=72, y=72, rot=0, text="a"))
        self.assertIn('transform="rotate(0, 1, 1)"', fragment)

    def test_empty_string_produces_empty_body(self) -> None:
        fragment = encode_text(TextEvent(x=0, y=0, rot=0, text=""))
        self.assertTrue(fragment.endswith('fill="black"></text>'))

    def test_markup_characters_are_escaped_by_default(self) -> None:
        fragment = encode_text(TextEvent(x=0, y=0, rot=0, text="a<b & c>"))
        self.assertIn(">a&lt;b &amp; c&gt;</text>", fragment)

    def test_raw_text_is_written_verbatim(self) -> None:
        fragment = encode_text(TextEvent(x=0, y=0, rot=0, text="a<b & c>"), escape_text=False)
        self.assertIn(">a<b & c></text>", fragment)
