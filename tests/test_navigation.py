"""
Tests for scroll-driven active category tracking.
"""

import pytest

from storefront.navigation import CategoryPosition, CategoryTracker, measure


@pytest.fixture
def tracker():
    tracker = CategoryTracker(["waffles", "milkshakes", "crepes"])
    tracker.update_positions({
        "waffles": CategoryPosition(top=0, height=500),
        "milkshakes": CategoryPosition(top=500, height=500),
        "crepes": CategoryPosition(top=1000, height=400),
    })
    return tracker


def test_first_category_is_active_initially(tracker):
    assert tracker.active == "waffles"


def test_measure_shifts_for_header_and_lead():
    position = measure(rect_top=200, rect_height=300, scroll_top=1000, header_height=60)
    assert position.top == 1090
    assert position.bottom == 1390


def test_scrolling_down_activates_section_under_anchor(tracker):
    assert tracker.on_scroll(450) == "milkshakes"


def test_scrolling_up_returns_to_previous_section(tracker):
    tracker.on_scroll(450)
    assert tracker.on_scroll(100) == "waffles"


def test_header_height_moves_the_anchor(tracker):
    assert tracker.on_scroll(350, header_height=100) == "milkshakes"


def test_active_category_kept_when_nothing_is_close(tracker):
    tracker.update_positions({"crepes": CategoryPosition(top=5000, height=100)})
    assert tracker.on_scroll(10) == "waffles"


def test_scroll_direction_comes_from_previous_offset():
    tracker = CategoryTracker(["waffles", "milkshakes"], active="milkshakes", last_scroll_top=900)
    tracker.update_positions({
        "waffles": CategoryPosition(top=0, height=500),
        "milkshakes": CategoryPosition(top=500, height=500),
    })
    # Scrolling up to 100 puts the anchor at 200, inside the waffles section
    assert tracker.on_scroll(100) == "waffles"
    assert tracker.last_scroll_top == 100
