"""Tests for the difference rectangle search."""

import math

import numpy as np
import pytest

from image_factory import BLACK, solid
from screendiff.core.diff import PixelMatcher, find_diff_rectangle, find_exact_diff_rectangle, find_top
from screendiff.core.image import Image


def _matcher(old, new, **limits):
    return PixelMatcher(Image.from_array(old), Image.from_array(new), **limits)


def test_find_top_returns_first_pixel_in_raster_order():
    old = solid(8, 8)
    new = old.copy()
    new[3, 6] = BLACK
    new[3, 2] = BLACK
    new[5, 0] = BLACK

    box = find_top(_matcher(old, new))

    assert box.as_tuple() == (2, 3, 2, 3)


def test_find_top_none_when_equal():
    assert find_top(_matcher(solid(4, 4), solid(4, 4))) is None


def test_black_square_on_white():
    old = solid(100, 100)
    new = old.copy()
    new[10:13, 10:13] = BLACK

    box = find_diff_rectangle(_matcher(old, new, color_distance_limit=0))

    assert box.as_tuple() == (10, 10, 12, 12)


def test_single_pixel_box():
    old = solid(20, 15)
    new = old.copy()
    new[7, 11] = BLACK

    assert find_diff_rectangle(_matcher(old, new)).as_tuple() == (11, 7, 11, 7)


@pytest.mark.parametrize("x,y", [(0, 0), (19, 0), (19, 14), (0, 14), (19, 7)])
def test_corner_and_edge_pixels_are_found(x, y):
    old = solid(20, 15)
    new = old.copy()
    new[y, x] = BLACK

    assert find_diff_rectangle(_matcher(old, new)).as_tuple() == (x, y, x, y)


def test_seed_from_find_top_gives_same_rectangle():
    old = solid(30, 30)
    new = old.copy()
    new[4, 20] = BLACK
    new[9, 3] = BLACK
    new[25, 12] = BLACK

    matcher = _matcher(old, new)
    seed = find_top(matcher)
    assert seed.as_tuple() == (20, 4, 20, 4)
    assert find_diff_rectangle(matcher, seed).as_tuple() == (3, 4, 20, 25)
    assert find_diff_rectangle(_matcher(old, new)).as_tuple() == (3, 4, 20, 25)


def test_no_rectangle_for_equal_images():
    assert find_diff_rectangle(_matcher(solid(5, 5), solid(5, 5))) is None
    assert find_exact_diff_rectangle(_matcher(solid(5, 5), solid(5, 5))) is None


def test_color_limit_hides_small_differences():
    old = solid(10, 10)
    new = old.copy()
    new[2, 2] = (250, 250, 250, 255)
    new[8, 8] = BLACK

    assert find_diff_rectangle(_matcher(old, new, color_distance_limit=10)).as_tuple() == (8, 8, 8, 8)
    assert find_diff_rectangle(_matcher(old, new)).as_tuple() == (2, 2, 8, 8)


def test_two_phase_search_agrees_with_full_scan_on_scattered_pixels():
    rng = np.random.default_rng(1234)
    for _ in range(20):
        old = solid(24, 18)
        new = old.copy()
        for _ in range(rng.integers(1, 6)):
            new[rng.integers(0, 18), rng.integers(0, 24)] = BLACK

        fast = find_diff_rectangle(_matcher(old, new))
        exact = find_exact_diff_rectangle(_matcher(old, new))
        assert fast == exact


def test_matcher_tracks_max_color_distance():
    old = solid(6, 6)
    new = old.copy()
    new[1, 1] = (255, 255, 252, 255)
    new[4, 4] = (255, 255, 245, 255)

    matcher = _matcher(old, new, color_distance_limit=20)
    matcher.scan_all()

    assert matcher.max_color_distance == pytest.approx(10.0)
    assert matcher.max_shift_distance == 0


def test_shifted_pixel_matches_and_reports_shift_distance():
    old = solid(12, 12)
    old[5, 5] = BLACK
    new = solid(12, 12)
    new[5, 7] = BLACK

    matcher = _matcher(old, new, color_distance_limit=0, shift_distance_limit=2)
    assert find_top(matcher) is None
    assert matcher.max_shift_distance == 2
    assert matcher.max_color_distance == 0

    unshifted = _matcher(old, new, color_distance_limit=0)
    assert find_diff_rectangle(unshifted).as_tuple() == (5, 5, 7, 5)


def test_shift_beyond_limit_is_a_difference():
    old = solid(12, 12)
    old[5, 5] = BLACK
    new = solid(12, 12)
    new[5, 9] = BLACK

    matcher = _matcher(old, new, shift_distance_limit=2)
    assert find_diff_rectangle(matcher).as_tuple() == (5, 5, 5, 5)
    assert matcher.max_shift_distance == 4


def test_vanished_color_gives_infinite_shift_distance():
    old = solid(6, 6)
    old[2, 2] = BLACK
    new = solid(6, 6)

    matcher = _matcher(old, new, shift_distance_limit=1)
    matcher.scan_all()

    assert matcher.max_shift_distance == math.inf
