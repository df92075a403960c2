import pytest

from sollong.colors import TRANSPARENT, color_from_text, lookup_color


@pytest.mark.parametrize(
    "name, expected",
    [
        ("snow", 0xFFFAFA),
        ("black", 0x0),
        ("red", 0xFF0000),
        ("navy", 0x80),
        ("gray50", 0x7F7F7F),
        ("lightgreen", 0x90EE90),
    ],
)
def test_lookup_known_names(name, expected):
    assert lookup_color(name) == expected


def test_lookup_ignores_case():
    assert lookup_color("SNOW") == lookup_color("snow")
    assert lookup_color("Ghost White") == lookup_color("ghost white")


def test_first_entry_wins_for_duplicate_names():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_none_is_transparent():
    assert lookup_color("none") == TRANSPARENT
    assert lookup_color("None") == -1


def test_unknown_name_raises():
    with pytest.raises(KeyError):
        lookup_color("not a colour")


@pytest.mark.parametrize("level", range(101))
def test_gray_and_grey_agree(level):
    assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_spaced_and_joined_names_agree():
    assert lookup_color("ghost white") == lookup_color("ghostwhite")
    assert lookup_color("dark orange") == lookup_color("darkorange")


def test_hex_spec():
    assert color_from_text("#ff0000") == 0xFF0000
    assert color_from_text("#FFFAFA", "ignored") == 0xFFFAFA


def test_hex_spec_stops_at_non_hex():
    assert color_from_text("#12zz") == 0x12


def test_hex_spec_without_digits_is_zero():
    assert color_from_text("#") == 0
    assert color_from_text("#zz") == 0


def test_name_joined_with_suffix():
    assert color_from_text("dark", "slate") == lookup_color("dark slate")
    assert color_from_text("ghost", "WHITE") == lookup_color("ghostwhite")


def test_name_without_suffix():
    assert color_from_text("Red", None) == lookup_color("red")
    assert color_from_text("none") == TRANSPARENT


def test_unknown_name_gives_zero():
    assert color_from_text("mystery") == 0
    assert color_from_text("mystery", "shade") == 0


def test_overlong_joined_name_is_truncated():
    long_name = "x" * 80
    assert color_from_text(long_name, "white") == 0