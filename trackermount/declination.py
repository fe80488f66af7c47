"""Declination stored as an offset from the visible celestial pole."""

from __future__ import annotations

from .daytime import DayTime, parse_meade_seconds

ARC_SECONDS_PER_HEMISPHERE = 180 * 60 * 60
_HALF = ARC_SECONDS_PER_HEMISPHERE // 2


class Declination(DayTime):
    """A DEC coordinate held in the range -180°..0°.

    In the northern hemisphere 0 is the north pole and -180 the south pole;
    in the southern hemisphere 0 is the south pole and -180 the north pole.
    """

    def __init__(self, total_seconds: int = 0, northern_hemisphere: bool = True) -> None:
        super().__init__(total_seconds)
        self.northern_hemisphere = bool(northern_hemisphere)

    @classmethod
    def from_degrees(cls, degrees: float, northern_hemisphere: bool = True) -> Declination:
        """Build from fractional degrees in the stored -180..0 range."""
        return cls(DayTime.from_hours(degrees).total_seconds, northern_hemisphere)

    @classmethod
    def parse_meade(cls, text: str, northern_hemisphere: bool = True) -> Declination:
        """Parse a Meade declination such as ``+45*30:00``."""
        offset = -_HALF if northern_hemisphere else _HALF
        return cls(parse_meade_seconds(text) + offset, northern_hemisphere)

    @classmethod
    def from_seconds(cls, seconds: float, northern_hemisphere: bool = True) -> Declination:
        """Build from celestial declination given in arc-seconds."""
        shifted = seconds + (-_HALF if northern_hemisphere else _HALF)
        return cls.from_degrees(shifted / 3600.0, northern_hemisphere)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Declination):
            return NotImplemented
        return (
            self.total_seconds == other.total_seconds
            and self.northern_hemisphere == other.northern_hemisphere
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Declination({self.total_seconds}, northern_hemisphere={self.northern_hemisphere})"

    @property
    def total_degrees(self) -> float:
        """Stored degrees, -180..0."""
        return self.total_hours

    def add_degrees(self, delta_degrees: int) -> None:
        """Add whole degrees, clamping to -180..0."""
        self.add_hours(delta_degrees)

    def normalize(self) -> None:
        """Clamp the value to the range -180..0 degrees."""
        self.total_seconds = max(-ARC_SECONDS_PER_HEMISPHERE, min(0, self.total_seconds))

    def format(self, template: str, seconds: int | None = None) -> str:
        """Fill ``{d}``, ``{m}`` and ``{s}`` with the celestial declination."""
        raw = self.total_seconds if seconds is None else seconds
        shifted = raw + _HALF if self.northern_hemisphere else raw - _HALF
        return super().format(template, shifted)

    def to_display_string(self, sep1: str, sep2: str) -> str:
        """Render as sign, degrees, ``sep1``, minutes, ``sep2``, seconds."""
        return self.format(f"{{d}}{sep1}{{m}}{sep2}{{s}}")

    def to_string(self) -> str:
        """Render as ``+DD*MM:SS (degrees)``."""
        if self.northern_hemisphere:
            degrees = self.total_hours + 90
        else:
            degrees = -90 - self.total_hours
        return f"{self.to_display_string('*', ':')} ({degrees:.4f})"