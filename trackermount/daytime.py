"""Hours, minutes and seconds held as one signed count of seconds."""

from __future__ import annotations

import math
import re

SECONDS_PER_DAY = 24 * 3600

_DIGITS = frozenset("0123456789")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _leading_int(text: str) -> int:
    """Read the integer at the start of ``text``; 0 when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _hms_to_seconds(hours: int, minutes: int, seconds: int) -> int:
    magnitude = (60 * abs(hours) + minutes) * 60 + seconds
    return -magnitude if hours < 0 else magnitude


def parse_meade_seconds(text: str) -> int:
    """Parse a Meade coordinate such as ``-45*32:11`` or ``23:44:22``.

    The sign is optional; the leading field has two or three digits and
    the seconds field may be left out. Returns signed total seconds.
    """
    pos = 0
    sign = 1
    if text[pos:pos + 1] in ("-", "+"):
        sign = -1 if text[pos] == "-" else 1
        pos += 1

    leading = text[pos:pos + 2]
    if len(leading) != 2 or not all(ch in _DIGITS for ch in leading):
        raise ValueError(f"invalid Meade coordinate: {text!r}")
    degrees = int(leading)
    pos += 2

    third = text[pos:pos + 1]
    if third and third in _DIGITS:
        degrees = degrees * 10 + int(third)
        pos += 1
    pos += 1  # separator

    minutes = _leading_int(text[pos:pos + 2])
    seconds = _leading_int(text[pos + 3:pos + 5]) if len(text) > pos + 4 else 0
    return sign * ((degrees * 60 + minutes) * 60 + seconds)


def _format_fields(template: str, sign: str, degrees: int, minutes: int, seconds: int) -> str:
    degree_text = sign
    if degrees >= 100:
        degree_text += str(min(9, degrees // 100))
        degrees %= 100
    fields = {
        "d": f"{degree_text}{degrees:02d}",
        "m": f"{minutes:02d}",
        "s": f"{seconds:02d}",
    }

    out: list[str] = []
    macro = ""
    in_macro = False
    for ch in template:
        if ch == "{":
            in_macro = True
        elif ch == "}":
            if in_macro:
                out.append(fields.get(macro, ""))
                in_macro = False
        elif in_macro:
            macro = ch
        else:
            out.append(ch)
    return "".join(out)


class DayTime:
    """A time of day; arithmetic wraps around 24 hours."""

    def __init__(self, total_seconds: int = 0) -> None:
        self.total_seconds = int(total_seconds)

    @classmethod
    def from_hms(cls, hours: int, minutes: int, seconds: int):
        """Build from components; the sign of ``hours`` applies to the whole."""
        return cls(_hms_to_seconds(hours, minutes, seconds))

    @classmethod
    def from_hours(cls, hours: float):
        """Build from fractional hours, rounded to the nearest second."""
        magnitude = math.floor(abs(hours) * 3600.0 + 0.5)
        return cls(-magnitude if hours < 0 else magnitude)

    @classmethod
    def parse_meade(cls, text: str):
        """Parse a Meade coordinate string without any range correction."""
        return cls(parse_meade_seconds(text))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DayTime):
            return NotImplemented
        return type(self) is type(other) and self.total_seconds == other.total_seconds

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.total_seconds})"

    def __str__(self) -> str:
        return self.to_string()

    def get_time(self) -> tuple[int, int, int]:
        """Return (hours, minutes, seconds); only hours carries the sign."""
        hours, rest = divmod(abs(self.total_seconds), 3600)
        minutes, seconds = divmod(rest, 60)
        if self.total_seconds < 0:
            hours = -hours
        return hours, minutes, seconds

    @property
    def hours(self) -> int:
        return self.get_time()[0]

    @property
    def minutes(self) -> int:
        return self.get_time()[1]

    @property
    def seconds(self) -> int:
        return self.get_time()[2]

    @property
    def total_hours(self) -> float:
        return self.total_seconds / 3600.0

    @property
    def total_minutes(self) -> float:
        return self.total_seconds / 60.0

    def set(self, hours: int, minutes: int, seconds: int) -> None:
        self.total_seconds = _hms_to_seconds(hours, minutes, seconds)
        self.normalize()

    def set_time(self, other: DayTime) -> None:
        self.total_seconds = other.total_seconds
        self.normalize()

    def add_hours(self, delta_hours: int) -> None:
        self.total_seconds += int(delta_hours) * 3600
        self.normalize()

    def add_minutes(self, delta_minutes: int) -> None:
        self.total_seconds += int(delta_minutes) * 60
        self.normalize()

    def add_seconds(self, delta_seconds: int) -> None:
        self.total_seconds += int(delta_seconds)
        self.normalize()

    def add_time(self, other: DayTime) -> None:
        self.total_seconds += other.total_seconds
        self.normalize()

    def subtract_time(self, other: DayTime) -> None:
        self.total_seconds -= other.total_seconds
        self.normalize()

    def normalize(self) -> None:
        """Wrap the value into one day, 00:00:00 up to 23:59:59."""
        self.total_seconds %= SECONDS_PER_DAY

    def format(self, template: str, seconds: int | None = None) -> str:
        """Fill ``{d}``, ``{m}`` and ``{s}`` in ``template``.

        ``{d}`` always carries a sign. ``seconds`` overrides the stored value.
        """
        secs = self.total_seconds if seconds is None else seconds
        sign = "-" if secs < 0 else "+"
        degrees, rest = divmod(abs(secs), 3600)
        minutes, rest = divmod(rest, 60)
        return _format_fields(template, sign, degrees, minutes, rest)

    def to_string(self) -> str:
        """Render as ``HH:MM:SS (hours)``, e.g. ``14:45:06 (14.75167)``."""
        hours, minutes, seconds = self.get_time()
        prefix = "-" if self.total_seconds < 0 else ""
        return f"{prefix}{abs(hours):02d}:{minutes:02d}:{seconds:02d} ({self.total_hours:.5f})"