import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

from cubcaster.display import (
    BUTTON_PRESS,
    BUTTON_PRESS_MASK,
    EXPOSE,
    EXPOSURE_MASK,
    KEY_RELEASE,
    KEY_RELEASE_MASK,
    MOTION_NOTIFY,
    POINTER_MOTION_MASK,
    Display,
    DisplayError,
    Image,
)

WIN1_SX = 242
WIN1_SY = 242
IM1_SX = 42
IM1_SY = 42


@pytest.fixture
def display():
    disp = Display()
    yield disp
    disp.close()


def _color_map(x, y, w, h):
    return (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)


def _fill(image):
    for y in range(image.height):
        for x in range(image.width):
            image.put_pixel(x, y, _color_map(x, y, image.width, image.height))


def _rgb(window, x, y):
    return tuple(window.surface.get_at((x, y)))[:3]


def test_new_image_layout(display):
    image = display.new_image(IM1_SX, IM1_SY)
    assert image.bits_per_pixel == 32
    assert image.size_line == IM1_SX * 4
    assert image.get_pixel(0, 0) == 0


def test_image_put_and_get(display):
    image = display.new_image(IM1_SX, IM1_SY)
    _fill(image)
    assert image.get_pixel(0, 0) == 0xFF0000
    assert image.get_pixel(41, 41) == _color_map(41, 41, 42, 42)


def test_image_out_of_range():
    image = Image(4, 4)
    with pytest.raises(IndexError):
        image.put_pixel(4, 0, 1)
    with pytest.raises(ValueError):
        Image(0, 3)


def test_put_image_to_window(display):
    window = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    image = display.new_image(IM1_SX, IM1_SY)
    _fill(image)
    window.put_image(image, 20, 20)
    assert _rgb(window, 20, 20) == (0xFF, 0, 0)
    assert _rgb(window, 30, 25) == (
        (image.get_pixel(10, 5) >> 16) & 0xFF,
        (image.get_pixel(10, 5) >> 8) & 0xFF,
        image.get_pixel(10, 5) & 0xFF,
    )
    assert _rgb(window, 10, 10) == (0, 0, 0)


def test_pixel_put_and_clear(display):
    window = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    display.depth = 24
    window.pixel_put(5, 7, 0x123456)
    window.pixel_put(-1, 500, 0xFFFFFF)
    assert _rgb(window, 5, 7) == (0x12, 0x34, 0x56)
    window.clear()
    assert _rgb(window, 5, 7) == (0, 0, 0)


def test_string_put_draws_in_color(display):
    window = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    display.depth = 24
    window.string_put(5, WIN1_SY // 2, 0xFF99FF, "String output")
    found = any(
        _rgb(window, x, y) == (0xFF, 0x99, 0xFF)
        for y in range(WIN1_SY // 2 - 30, WIN1_SY // 2 + 10)
        for x in range(WIN1_SX)
    )
    assert found


def test_get_color_value(display):
    display.depth = 24
    assert display.get_color_value(0x123456) == 0x123456
    display.depth = 16
    display.shifts = (11, 5, 5, 6, 0, 5)
    assert display.get_color_value(0xFFFFFF) == 0xFFFF
    assert display.get_color_value(0) == 0


def test_hooks_registered(display):
    window = display.new_window(WIN1_SX, WIN1_SY, "Title3")

    def key(keysym):
        return keysym

    def mouse(button, x, y):
        return button

    def expose():
        return 0

    def motion(x, y):
        return x

    window.key_hook(key)
    window.mouse_hook(mouse)
    window.expose_hook(expose)
    window.hook(MOTION_NOTIFY, POINTER_MOTION_MASK, motion)
    assert window.hooks[KEY_RELEASE].func is key
    assert window.hooks[KEY_RELEASE].mask == KEY_RELEASE_MASK
    assert window.hooks[BUTTON_PRESS].mask == BUTTON_PRESS_MASK
    assert window.hooks[EXPOSE].mask == EXPOSURE_MASK
    assert window.hooks[MOTION_NOTIFY].func is motion


def test_hook_bad_event(display):
    window = display.new_window(10, 10, "w")
    with pytest.raises(ValueError):
        window.hook(99, 0, print)


def test_windows_and_destroy(display):
    win1 = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    win2 = display.new_window(WIN1_SX, WIN1_SY, "Title2")
    assert display.windows == [win2, win1]
    win1.destroy()
    assert display.windows == [win2]
    with pytest.raises(DisplayError):
        win1.clear()


def test_xpm_to_image(display):
    image = display.xpm_to_image(["2 2 2 1", "a c #FF0000", "b c None", "ab", "ba"])
    assert (image.width, image.height) == (2, 2)
    assert image.get_pixel(0, 0) == 0xFF0000
    assert image.get_pixel(1, 0) == 0xFF000000


def test_xpm_file_to_image(display, tmp_path):
    path = tmp_path / "open.xpm"
    path.write_text(
        '/* XPM */\nstatic char *img[] = {\n"2 1 2 1",\n"a c blue",\n'
        '"b c #00FF00",\n"ab"\n};\n'
    )
    image = display.xpm_file_to_image(path)
    assert (image.width, image.height) == (2, 1)
    assert image.get_pixel(0, 0) == 0xFF
    assert image.get_pixel(1, 0) == 0x00FF00


def test_closed_display_refuses_work():
    disp = Display()
    disp.new_window(20, 20, "w")
    disp.close()
    assert disp.windows == []
    with pytest.raises(DisplayError):
        disp.new_window(20, 20, "again")