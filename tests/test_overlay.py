from __future__ import annotations

from models import Point
from overlay import popup_origin

SCREEN = (1920, 1080)


def test_popup_sits_above_and_right_of_pointer() -> None:
    assert popup_origin(Point(100, 300), (200, 100), SCREEN) == Point(120, 180)


def test_popup_flips_left_near_right_edge() -> None:
    assert popup_origin(Point(1850, 300), (200, 100), SCREEN) == Point(1630, 180)


def test_popup_flips_below_near_top_edge() -> None:
    assert popup_origin(Point(100, 50), (200, 100), SCREEN) == Point(120, 70)


def test_popup_wider_than_room_keeps_margin() -> None:
    assert popup_origin(Point(100, 300), (2000, 100), SCREEN) == Point(10, 180)
