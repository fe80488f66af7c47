import pytest

from trackermount.config_store import DEFAULT_BRIGHTNESS, ConfigStore
from trackermount.eeprom import EepromStore, MemoryBackend
from trackermount.lcd_menu import (
    LcdMenu,
    MenuItem,
    SpecialChar,
    TextDisplay,
    adjust_wrap,
)


def make_config():
    return ConfigStore(EepromStore(MemoryBackend()), 314.2, 314.2, 16)


def make_menu(config=None):
    display = TextDisplay(16, 2)
    menu = LcdMenu(display, 16, 2, config)
    menu.startup()
    for name, item_id in (("RA", 1), ("DEC", 2), ("POI", 3), ("HA", 4)):
        menu.add_item(name, item_id)
    return display, menu


def test_adjust_wrap_wraps_both_ways():
    assert adjust_wrap(3, 1, 0, 3) == 0
    assert adjust_wrap(0, -1, 0, 3) == 3
    assert adjust_wrap(1, 1, 1, 3) == 2


def test_adjust_wrap_empty_range_raises():
    with pytest.raises(ValueError):
        adjust_wrap(0, 1, 3, 1)


def test_find_and_activate_items():
    _, menu = make_menu()
    assert menu.find_by_id(2) == MenuItem("DEC", 2)
    assert menu.find_by_id(99) is None
    assert menu.get_active() == 1
    menu.set_active(3)
    assert menu.get_active() == 3
    menu.set_active(99)
    assert menu.get_active() == 3


def test_get_active_on_empty_menu_raises():
    menu = LcdMenu(TextDisplay(), 16, 2, None)
    with pytest.raises(LookupError):
        menu.get_active()


def test_update_display_frames_active_item():
    display, menu = make_menu()
    menu.set_active(2)
    menu.update_display()
    text = display.row_text(0)
    assert len(text) == 16
    assert ">DEC<" in text
    col = text.index(">")
    assert display.cells[0][col] is SpecialChar.RIGHT_ARROW
    assert display.cells[0][col + 4] is SpecialChar.LEFT_ARROW


def test_active_marker_stays_in_place():
    display, menu = make_menu()
    positions = set()
    for item_id in (1, 2, 3, 4):
        menu.set_active(item_id)
        menu.update_display()
        positions.add(display.row_text(0).index(">"))
    assert len(positions) == 1


def test_set_next_active_wraps_and_clears_submenu_line():
    display, menu = make_menu()
    menu.set_active(4)
    display.set_cursor(0, 1)
    for ch in "leftover":
        display.write(ch)
    menu.set_next_active()
    assert menu.get_active() == 1
    assert display.row_text(1) == " " * 16


def test_print_menu_pads_line():
    display, menu = make_menu()
    menu.set_cursor(0, 1)
    menu.print_menu("abc")
    assert display.row_text(1) == "abc".ljust(16)


def test_print_menu_skips_unchanged_line():
    display, menu = make_menu()
    menu.set_cursor(0, 1)
    menu.print_menu("abc")
    display.clear()
    menu.set_cursor(0, 1)
    menu.print_menu("abc")
    assert display.row_text(1) == " " * 16
    menu.print_menu("abd")
    assert display.row_text(1).startswith("abd")


def test_print_at_substitutes_special_glyph():
    display, menu = make_menu()
    menu.print_at(2, 1, "@")
    menu.print_at(3, 1, "x")
    assert display.cells[1][2] is SpecialChar.DEGREES
    assert display.cells[1][3] == "x"
    assert display.row_text(1)[2:4] == "@x"


def test_startup_loads_glyphs():
    display, _ = make_menu()
    assert set(display.custom_glyphs) == set(SpecialChar)
    assert display.custom_glyphs[SpecialChar.DEGREES][0] == 0b01100
    assert all(len(bitmap) == 8 for bitmap in display.custom_glyphs.values())


def test_startup_reads_default_brightness():
    _, menu = make_menu(make_config())
    assert menu.brightness == DEFAULT_BRIGHTNESS


def test_brightness_persistence():
    config = make_config()
    _, menu = make_menu(config)
    menu.set_backlight_brightness(100, persist=False)
    assert menu.brightness == 100
    assert config.brightness == DEFAULT_BRIGHTNESS
    menu.set_backlight_brightness(120, persist=True)
    assert config.brightness == 120


def test_brightness_range():
    _, menu = make_menu()
    assert menu.backlight_brightness_range() == (0, 255)
    menu.bad_hardware = True
    assert menu.backlight_brightness_range() == (0, 1)


def test_clear_blanks_display():
    display, menu = make_menu()
    menu.update_display()
    menu.clear()
    assert display.row_text(0) == " " * 16


def test_text_display_rejects_bad_cursor():
    display = TextDisplay(16, 2)
    with pytest.raises(ValueError):
        display.set_cursor(0, 2)
    with pytest.raises(ValueError):
        display.set_cursor(-1, 0)


def test_special_char_symbols_round_trip():
    display = TextDisplay(16, 2)
    menu = LcdMenu(display, 16, 2, None)
    for col, glyph in enumerate(SpecialChar):
        menu.print_at(col, 0, glyph.symbol)
        assert display.cells[0][col] is glyph
    assert display.row_text(0).startswith("".join(g.symbol for g in SpecialChar))