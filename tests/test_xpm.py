import pytest

from cubcaster.colornames import lookup_color
from cubcaster.xpm import (
    XpmError,
    XpmImage,
    find_unquoted,
    parse_xpm,
    parse_xpm_text,
    read_xpm_file,
    reduce_color,
    split_words,
    strip_comments,
    text_rgb,
)

SAMPLE_TEXT = """/* XPM */
static char *img[] = {
/* columns rows colors chars */
"2 1 2 1",
"a c red",
"b c #0000FF",
// trailing comment
"ab"
};
"""

RGB565 = (11, 5, 5, 6, 0, 5)


def test_split_words():
    assert split_words("  a\tb  c ") == ["a", "b", "c"]
    assert split_words(" \t ") == []


def test_find_unquoted_skips_quoted_text():
    assert find_unquoted('"/*" /*', "/*") == 5
    assert find_unquoted("abc", "x") == -1


def test_find_unquoted_rejects_empty_needle():
    with pytest.raises(ValueError):
        find_unquoted("abc", "")


def test_strip_block_comment():
    assert strip_comments("a/*x*/b") == "a     b"


def test_strip_line_comment_keeps_length():
    text = "x//note\ny"
    result = strip_comments(text)
    assert len(result) == len(text)
    assert result.endswith("y") and "note" not in result


def test_comment_inside_quotes_is_kept():
    assert strip_comments('"/*a*/"') == '"/*a*/"'


def test_text_rgb_hex():
    assert text_rgb("#FF0000") == 0xFF0000
    assert text_rgb("#0x1F") == 0x1F
    assert text_rgb("#zz") == 0


def test_text_rgb_names():
    assert text_rgb("red") == lookup_color("red")
    assert text_rgb("dark", "red") == 0x8B0000
    assert text_rgb("None") == -1
    assert text_rgb("nosuchcolour") == 0


def test_reduce_color_deep_display_is_identity():
    assert reduce_color(0x123456, 24, RGB565) == 0x123456


def test_reduce_color_shallow_display():
    assert reduce_color(0, 16, RGB565) == 0
    red = reduce_color(0xFF0000, 16, RGB565)
    green = reduce_color(0x00FF00, 16, RGB565)
    blue = reduce_color(0x0000FF, 16, RGB565)
    assert red & ~0xF800 == 0 and red
    assert green & ~0x07E0 == 0 and green
    assert blue & ~0x001F == 0 and blue
    assert reduce_color(0xFFFFFF, 16, RGB565) == red | green | blue


def test_reduce_color_needs_six_shifts():
    with pytest.raises(ValueError):
        reduce_color(0, 16, (1, 2, 3))


def test_parse_xpm_pixels():
    image = parse_xpm(["2 2 2 1", "a c #FF0000", "b c None", "ab", "ba"])
    assert (image.width, image.height) == (2, 2)
    assert image.pixels == [0xFF0000, 0xFF000000, 0xFF000000, 0xFF0000]


def test_unknown_pixel_code_is_black():
    image = parse_xpm(["2 1 1 1", "a c #FF0000", "az"])
    assert image.pixels == [0xFF0000, 0]


def test_duplicate_codes_with_short_codes_keep_last():
    image = parse_xpm(["1 1 2 1", "a c #000001", "a c #000002", "a"])
    assert image.pixels == [0x000002]


def test_duplicate_codes_with_long_codes_keep_first():
    image = parse_xpm(["1 1 2 3", "abc c #000001", "abc c #000002", "abc"])
    assert image.pixels == [0x000001]


@pytest.mark.parametrize(
    "lines",
    [
        ["0 1 1 1", "a c red", "a"],
        ["1 1"],
        ["1 2 1 1", "a c red", "a"],
        ["1 1 1 1", "a x red", "a"],
        ["1 1 1 1", "a c", "a"],
        [],
    ],
)
def test_malformed_data_raises(lines):
    with pytest.raises(XpmError):
        parse_xpm(lines)


def test_parse_xpm_text():
    image = parse_xpm_text(SAMPLE_TEXT)
    assert image == XpmImage(2, 1, [lookup_color("red"), 0x0000FF])


def test_read_xpm_file_round_trip(tmp_path):
    path = tmp_path / "sample.xpm"
    path.write_text(SAMPLE_TEXT, encoding="latin-1")
    assert read_xpm_file(path) == parse_xpm_text(SAMPLE_TEXT)


def test_read_missing_file(tmp_path):
    with pytest.raises(XpmError):
        read_xpm_file(tmp_path / "missing.xpm")