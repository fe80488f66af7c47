"""A one-line scrolling menu on a small character display."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol, Union

from .config_store import DEFAULT_BRIGHTNESS, ConfigStore

BRIGHTNESS_MAX = 255


def adjust_wrap(value: int, delta: int, low: int, high: int) -> int:
    """Add ``delta`` to ``value``, wrapping around the inclusive range low..high."""
    if high < low:
        raise ValueError(f"empty range: {low}..{high}")
    span = high - low + 1
    return low + (value + delta - low) % span


class SpecialChar(IntEnum):
    """Custom glyphs loaded into the display's character generator."""

    DEGREES = 0
    MINUTES = 1
    LEFT_ARROW = 2
    RIGHT_ARROW = 3
    UP_ARROW = 4
    DOWN_ARROW = 5
    TRACKING = 6
    NO_TRACKING = 7

    @property
    def symbol(self) -> str:
        """The plain character that stands for this glyph in menu text."""
        return _SYMBOLS[self]

    @property
    def bitmap(self) -> tuple[int, ...]:
        """The 5x8 pixel rows of the glyph, top first."""
        return _BITMAPS[self]


_SYMBOLS: dict[SpecialChar, str] = {
    SpecialChar.RIGHT_ARROW: ">",
    SpecialChar.LEFT_ARROW: "<",
    SpecialChar.UP_ARROW: "^",
    SpecialChar.DOWN_ARROW: "~",
    SpecialChar.DEGREES: "@",
    SpecialChar.MINUTES: "'",
    SpecialChar.TRACKING: "&",
    SpecialChar.NO_TRACKING: "`",
}

_CHAR_LOOKUP: dict[str, SpecialChar] = {symbol: glyph for glyph, symbol in _SYMBOLS.items()}

_BITMAPS: dict[SpecialChar, tuple[int, ...]] = {
    SpecialChar.RIGHT_ARROW: (0b00000, 0b01000, 0b01100, 0b01110, 0b01100, 0b01000, 0b00000, 0b00000),
    SpecialChar.LEFT_ARROW: (0b00000, 0b00010, 0b00110, 0b01110, 0b00110, 0b00010, 0b00000, 0b00000),
    SpecialChar.UP_ARROW: (0b00100, 0b01110, 0b11111, 0b00100, 0b00100, 0b00100, 0b00100, 0b00100),
    SpecialChar.DOWN_ARROW: (0b00100, 0b00100, 0b00100, 0b00100, 0b00100, 0b11111, 0b01110, 0b00100),
    SpecialChar.DEGREES: (0b01100, 0b10010, 0b10010, 0b01100, 0b00000, 0b00000, 0b00000, 0b00000),
    SpecialChar.MINUTES: (0b01000, 0b01000, 0b01000, 0b00000, 0b00000, 0b00000, 0b00000, 0b00000),
    SpecialChar.TRACKING: (0b10111, 0b00010, 0b10010, 0b00010, 0b10111, 0b00101, 0b10110, 0b00101),
    SpecialChar.NO_TRACKING: (0b10000, 0b00000, 0b10000, 0b00010, 0b10000, 0b00000, 0b10000, 0b00000),
}

Glyph = Union[str, SpecialChar]


class Display(Protocol):
    """What the menu needs from a character display."""

    def set_cursor(self, col: int, row: int) -> None: ...

    def write(self, glyph: Glyph) -> None: ...

    def clear(self) -> None: ...

    def create_char(self, code: SpecialChar, bitmap: tuple[int, ...]) -> None: ...


@dataclass(frozen=True)
class MenuItem:
    """One entry of the menu; the id has no bearing on its position."""

    display: str
    item_id: int


class TextDisplay:
    """An in-memory character display of fixed size."""

    def __init__(self, columns: int = 16, rows: int = 2) -> None:
        if columns <= 0 or rows <= 0:
            raise ValueError(f"invalid display size: {columns}x{rows}")
        self.columns = columns
        self.rows = rows
        self.cells: list[list[Glyph]] = [[" "] * columns for _ in range(rows)]
        self.custom_glyphs: dict[SpecialChar, tuple[int, ...]] = {}
        self._col = 0
        self._row = 0

    def set_cursor(self, col: int, row: int) -> None:
        if not 0 <= row < self.rows or not 0 <= col <= self.columns:
            raise ValueError(f"cursor position out of range: ({col}, {row})")
        self._col = col
        self._row = row

    def write(self, glyph: Glyph) -> None:
        """Put one glyph at the cursor and advance; text past the edge is lost."""
        if isinstance(glyph, str) and len(glyph) != 1:
            raise ValueError(f"expected a single character: {glyph!r}")
        if self._col < self.columns:
            self.cells[self._row][self._col] = glyph
        self._col += 1

    def create_char(self, code: SpecialChar, bitmap: tuple[int, ...]) -> None:
        self.custom_glyphs[SpecialChar(code)] = tuple(bitmap)

    def clear(self) -> None:
        for row in self.cells:
            row[:] = [" "] * self.columns
        self._col = 0
        self._row = 0

    def row_text(self, row: int) -> str:
        """The row as text, with custom glyphs shown by their symbol."""
        return "".join(g.symbol if isinstance(g, SpecialChar) else g for g in self.cells[row])


class LcdMenu:
    """Drives a display with a horizontal menu whose active item stays centred."""

    def __init__(
        self,
        display: Display,
        cols: int = 16,
        rows: int = 2,
        config: ConfigStore | None = None,
    ) -> None:
        self._display = display
        self._cols = cols
        self._rows = rows
        self._config = config
        self.bad_hardware = False
        self._brightness = DEFAULT_BRIGHTNESS
        self._reset()

    def _reset(self) -> None:
        self._items: list[MenuItem] = []
        self._active_index = 0
        self._longest_display = 0
        self._columns = self._cols
        self._active_row = 0
        self._active_col = 0
        self._last_display: dict[int, str] = {}

    def startup(self) -> None:
        """Load glyphs, restore the stored brightness and empty the menu."""
        brightness = self._config.brightness if self._config is not None else DEFAULT_BRIGHTNESS
        self.set_backlight_brightness(brightness, persist=False)
        self._reset()
        for glyph in SpecialChar:
            self._display.create_char(glyph, glyph.bitmap)

    @property
    def items(self) -> tuple[MenuItem, ...]:
        return tuple(self._items)

    def find_by_id(self, item_id: int) -> MenuItem | None:
        return next((item for item in self._items if item.item_id == item_id), None)

    def add_item(self, display: str, item_id: int) -> None:
        """Append an item; order of addition is the order on screen."""
        self._items.append(MenuItem(display, item_id))
        self._longest_display = max(self._longest_display, len(display))

    def get_active(self) -> int:
        """Id of the active item."""
        if not self._items:
            raise LookupError("the menu has no items")
        return self._items[self._active_index].item_id

    def set_active(self, item_id: int) -> None:
        """Make the item with this id active; unknown ids are ignored."""
        for index, item in enumerate(self._items):
            if item.item_id == item_id:
                self._active_index = index
                break

    def set_cursor(self, col: int, row: int) -> None:
        """Set where the next :meth:`print_menu` writes."""
        self._active_row = row
        self._active_col = col

    def clear(self) -> None:
        self._display.clear()

    @property
    def brightness(self) -> int:
        return self._brightness

    def set_backlight_brightness(self, level: int, persist: bool = True) -> None:
        """Set the backlight level, storing it in the configuration if asked."""
        self._brightness = int(level)
        if persist and self._config is not None:
            self._config.brightness = self._brightness

    def backlight_brightness_range(self) -> tuple[int, int]:
        """Lowest and highest backlight level; faulty panels are on or off only."""
        if self.bad_hardware:
            return 0, 1
        return 0, BRIGHTNESS_MAX

    def set_next_active(self) -> None:
        """Move to the next item, wrapping, and blank the submenu line."""
        if not self._items:
            raise LookupError("the menu has no items")
        self._active_index = adjust_wrap(self._active_index, 1, 0, len(self._items) - 1)
        self.update_display()
        self._display.set_cursor(0, 1)
        for _ in range(self._columns):
            self._display.write(" ")

    def update_display(self) -> None:
        """Draw the menu line with the active item framed and kept in place."""
        parts: list[str] = []
        offset = 0
        offset_to_active = 0
        for index, item in enumerate(self._items):
            is_active = index == self._active_index
            part = f"{'>' if is_active else ' '}{item.display}{'<' if is_active else ' '}"
            if is_active:
                offset_to_active = offset
            parts.append(part)
            offset += len(part)
        menu_string = "".join(parts)

        self._display.set_cursor(0, 0)
        self._active_row = 0
        self._active_col = 0
        usable_columns = self._columns - 1  # keep a gap before the tracking indicator

        margin = int((usable_columns - self._longest_display) / 2)
        start = offset_to_active - margin
        line = " " * max(0, -start)
        start = max(0, start)
        room = max(0, usable_columns - len(line))
        line += menu_string[start:start + room]
        line = line.ljust(self._columns)

        self.print_menu(line)
        self.set_cursor(0, 1)

    def _print_char(self, ch: str) -> None:
        self._display.write(_CHAR_LOOKUP.get(ch, ch))

    def print_at(self, col: int, row: int, ch: str) -> None:
        """Write one character at a position, substituting special glyphs."""
        self._display.set_cursor(col, row)
        self._print_char(ch)

    def print_menu(self, line: str) -> None:
        """Write a line at the cursor, substituting glyphs and padding with spaces.

        Nothing is redrawn when the same line is already shown from column 0.
        """
        if self._last_display.get(self._active_row) == line and self._active_col == 0:
            return
        self._last_display[self._active_row] = line
        self._display.set_cursor(self._active_col, self._active_row)
        for ch in line:
            self._print_char(ch)
        for _ in range(self._columns - len(line)):
            self._display.write(" ")