import math

import pytest

from image_factory import BLACK, WHITE, solid
from screendiff.core.image import Image
from screendiff.core.shift import neighborhood_distance, ring, shift_distance_at


def test_ring_zero_is_the_pixel_itself():
    assert ring(3, 4, 0, 10, 10) == [(3, 4)]


def test_ring_one_in_the_middle_has_eight_distinct_pixels():
    coords = ring(5, 5, 1, 10, 10)
    assert len(coords) == 8
    assert len(set(coords)) == 8
    assert coords[:3] == [(4, 4), (5, 4), (6, 4)]
    assert (5, 5) not in coords


@pytest.mark.parametrize("x,y", [(0, 0), (9, 0), (4, 7), (9, 7), (0, 5)])
def test_rings_cover_the_clipped_square_exactly_once(x, y):
    width, height = 10, 8
    radius_limit = 4
    seen = []
    for radius in range(radius_limit + 1):
        coords = ring(x, y, radius, width, height)
        assert coords is not None
        seen.extend(coords)

    expected = {
        (dx, dy)
        for dx in range(max(0, x - radius_limit), min(width - 1, x + radius_limit) + 1)
        for dy in range(max(0, y - radius_limit), min(height - 1, y + radius_limit) + 1)
    }
    assert len(seen) == len(set(seen))
    assert set(seen) == expected


def test_ring_outside_the_image_is_none():
    assert ring(0, 0, 1, 1, 1) is None
    assert ring(2, 1, 3, 5, 3) is None
    assert ring(2, 1, 2, 5, 3) is not None


def test_shift_distance_finds_displaced_pixel():
    array = solid(10, 10)
    array[5, 7] = BLACK
    new_img = Image.from_array(array)

    assert shift_distance_at(new_img, BLACK, 5, 5, None) == 2
    assert shift_distance_at(new_img, BLACK, 7, 5, None) == 0
    assert shift_distance_at(new_img, WHITE, 7, 5, None) == 1


def test_shift_distance_is_infinite_without_match():
    new_img = Image.from_array(solid(6, 4))
    assert shift_distance_at(new_img, BLACK, 2, 2, None) == math.inf


def test_shift_distance_respects_max_radius():
    array = solid(10, 10)
    array[0, 9] = BLACK
    new_img = Image.from_array(array)

    assert shift_distance_at(new_img, BLACK, 0, 0, None) == 9
    assert shift_distance_at(new_img, BLACK, 0, 0, None, max_radius=3) == math.inf


def test_shift_distance_uses_color_limit():
    array = solid(5, 5)
    array[2, 4] = (10, 0, 0, 255)
    new_img = Image.from_array(array)

    assert shift_distance_at(new_img, BLACK, 2, 2, 10.0) == 2
    assert shift_distance_at(new_img, BLACK, 2, 2, None) == math.inf


def test_neighborhood_distance_is_minimum_within_radius():
    array = solid(7, 7)
    array[3, 5] = (0, 0, 0, 255)
    new_img = Image.from_array(array)

    assert neighborhood_distance(new_img, BLACK, 3, 3, 1) > 0
    assert neighborhood_distance(new_img, BLACK, 3, 3, 2) == 0
    assert neighborhood_distance(new_img, (250, 255, 255, 255), 0, 0, 1) == pytest.approx(5.0)
