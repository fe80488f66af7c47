"""Geographic latitude: +90 at the north pole, -90 at the south pole."""

from __future__ import annotations

from .daytime import DayTime, parse_meade_seconds

_LIMIT_SECONDS = 90 * 3600


class Latitude(DayTime):
    """A latitude in degrees, minutes and arc-seconds, clamped to ±90°."""

    def normalize(self) -> None:
        """Clamp the value to the range -90..+90 degrees."""
        self.total_seconds = max(-_LIMIT_SECONDS, min(_LIMIT_SECONDS, self.total_seconds))

    @property
    def total_degrees(self) -> float:
        return self.total_hours

    @classmethod
    def parse_meade(cls, text: str) -> Latitude:
        """Parse a Meade latitude such as ``+45*30:00`` and clamp it."""
        result = cls(parse_meade_seconds(text))
        result.normalize()
        return result