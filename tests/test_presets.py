import pytest

from screendiff.presets import (
    HIGHLIGHT_RED,
    ToleranceConfig,
    get_preset,
    iter_presets,
    parse_color,
    parse_dimensions,
)


def test_default_tolerances_are_exact():
    config = ToleranceConfig()
    assert not config.has_pixel_tolerance
    assert config.to_dict() == {
        "color_distance_limit": None,
        "area_size_limit": None,
        "shift_distance_limit": None,
        "crop_dimensions": None,
    }


def test_copy_overrides_fields_and_keeps_original():
    base = ToleranceConfig(color_distance_limit=5)
    changed = base.copy(shift_distance_limit=2)

    assert changed.color_distance_limit == 5
    assert changed.shift_distance_limit == 2
    assert base.shift_distance_limit is None
    assert changed.has_pixel_tolerance


@pytest.mark.parametrize(
    "kwargs",
    [
        {"color_distance_limit": -1},
        {"area_size_limit": -5},
        {"shift_distance_limit": -1},
        {"crop_dimensions": (0, 10)},
    ],
)
def test_invalid_tolerances_are_rejected(kwargs):
    with pytest.raises(ValueError):
        ToleranceConfig(**kwargs)


def test_presets_lookup_is_case_insensitive():
    assert get_preset("Balanced").tolerances.shift_distance_limit == 1
    assert get_preset("exact").tolerances == ToleranceConfig()
    assert {preset.name for preset in iter_presets()} == {"exact", "strict", "balanced", "loose"}
    assert get_preset("loose").style.color == HIGHLIGHT_RED


def test_unknown_preset():
    with pytest.raises(KeyError):
        get_preset("paranoid")


def test_parse_color():
    assert parse_color("#00ff00") == (0, 255, 0, 255)
    assert parse_color("#00ff0080") == (0, 255, 0, 128)
    assert parse_color("1, 2, 3") == (1, 2, 3, 255)
    assert parse_color("1;2;3;4") == (1, 2, 3, 4)
    assert parse_color("  ") is None
    with pytest.raises(ValueError):
        parse_color("#fff")
    with pytest.raises(ValueError):
        parse_color("300,0,0")


def test_parse_dimensions():
    assert parse_dimensions("800x600") == (800, 600)
    assert parse_dimensions(" 10X20 ") == (10, 20)
    assert parse_dimensions(None) is None
    with pytest.raises(ValueError):
        parse_dimensions("800")
    with pytest.raises(ValueError):
        parse_dimensions("0x10")
    with pytest.raises(ValueError):
        parse_dimensions("axb")
