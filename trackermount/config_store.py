"""Mount configuration values kept in the persistent byte store."""

from __future__ import annotations

import math
from typing import Any

from .daytime import DayTime
from .eeprom import EepromStore, ExtendedItemFlag, ItemAddress, ItemFlag
from .latitude import Latitude

INT16_MIN = -0x8000
INT16_MAX = 0x7FFF

DEFAULT_BRIGHTNESS = 10
DEFAULT_LATITUDE_DEGREES = 45.0
DEFAULT_LONGITUDE_DEGREES = 100.0
DEFAULT_SPEED_FACTOR = 1.0

_ANGLE_OFFSET = 16384


def _clamp16(value: int) -> int:
    return max(INT16_MIN, min(INT16_MAX, value))


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class ConfigStore:
    """Typed configuration items on top of an :class:`EepromStore`.

    Every item is a property. Reading an item that was never stored yields
    its default; assigning an item writes it, marks it present and commits.
    """

    def __init__(
        self,
        store: EepromStore,
        ra_steps_per_degree: float,
        dec_steps_per_degree: float,
        backlash_steps: int,
    ) -> None:
        self.store = store
        self.default_ra_steps_per_degree = float(ra_steps_per_degree)
        self.default_dec_steps_per_degree = float(dec_steps_per_degree)
        self.default_backlash_steps = int(backlash_steps)

    # -- whole-store operations -------------------------------------------

    def clear_configuration(self) -> None:
        """Forget every stored item; subsequent reads return defaults."""
        self.store.clear()

    def contents(self) -> dict[str, Any]:
        """A snapshot of the marker state and every configuration item."""
        marker = self.store.read_uint16(ItemAddress.MAGIC_MARKER_AND_FLAGS_ADDR)
        return {
            "magic_marker": marker,
            "has_values": (marker & ItemFlag.MAGIC_MARKER_MASK) == ItemFlag.MAGIC_MARKER_VALUE,
            "has_extended_values": (marker & ItemFlag.EXTENDED_FLAG) == ItemFlag.EXTENDED_FLAG,
            "extended_present": self.store.is_present(ItemFlag.EXTENDED_FLAG),
            "ha_time": self.ha_time,
            "utc_offset": self.utc_offset,
            "brightness": self.brightness,
            "ra_steps_per_degree": self.ra_steps_per_degree,
            "dec_steps_per_degree": self.dec_steps_per_degree,
            "speed_factor": self.speed_factor,
            "backlash_correction_steps": self.backlash_correction_steps,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "pitch_calibration_angle": self.pitch_calibration_angle,
            "roll_calibration_angle": self.roll_calibration_angle,
            "ra_parking_pos": self.ra_parking_pos,
            "dec_parking_pos": self.dec_parking_pos,
            "dec_lower_limit": self.dec_lower_limit,
            "dec_upper_limit": self.dec_upper_limit,
            "ra_homing_offset": self.ra_homing_offset,
        }

    # -- helpers -------------------------------------------------------------

    def _store_core_int16(self, address: int, value: int, flag: ItemFlag) -> None:
        self.store.update_int16(address, _clamp16(value))
        self.store.update_flags(flag)
        self.store.commit()

    def _read_extended_int32(self, address: int, flag: ExtendedItemFlag) -> int:
        if self.store.is_present_extended(flag):
            return self.store.read_int32(address)
        return 0

    def _store_extended_int32(self, address: int, value: int, flag: ExtendedItemFlag) -> None:
        self.store.update_int32(address, int(value))
        self.store.update_flags_extended(flag)
        self.store.commit()

    def _read_angle(self, address: int, flag: ItemFlag) -> float:
        if self.store.is_present(flag):
            return (self.store.read_uint16(address) - _ANGLE_OFFSET) / 100.0
        return 0.0

    def _store_angle(self, address: int, angle: float, flag: ItemFlag) -> None:
        self._store_core_int16(address, int(angle * 100 + _ANGLE_OFFSET), flag)

    # -- hour angle and display ---------------------------------------------

    @property
    def ha_time(self) -> DayTime:
        """Saved hour angle; always considered present."""
        return DayTime.from_hms(
            self.store.read_uint8(ItemAddress.HA_HOUR_ADDR),
            self.store.read_uint8(ItemAddress.HA_MINUTE_ADDR),
            0,
        )

    @ha_time.setter
    def ha_time(self, ha: DayTime) -> None:
        self.store.update_uint8(ItemAddress.HA_HOUR_ADDR, ha.hours)
        self.store.update_uint8(ItemAddress.HA_MINUTE_ADDR, ha.minutes)
        self.store.commit()

    @property
    def utc_offset(self) -> int:
        """Local offset from UTC in hours; 0 when not stored."""
        if self.store.is_present_extended(ExtendedItemFlag.UTC_OFFSET_MARKER_FLAG):
            return self.store.read_int8(ItemAddress.UTC_OFFSET_ADDR)
        return 0

    @utc_offset.setter
    def utc_offset(self, offset: int) -> None:
        self.store.update_int8(ItemAddress.UTC_OFFSET_ADDR, int(offset))
        self.store.update_flags_extended(ExtendedItemFlag.UTC_OFFSET_MARKER_FLAG)
        self.store.commit()

    @property
    def brightness(self) -> int:
        """Display brightness; a stored zero reads as the minimum of 10."""
        value = self.store.read_uint8(ItemAddress.LCD_BRIGHTNESS_ADDR)
        return value or DEFAULT_BRIGHTNESS

    @brightness.setter
    def brightness(self, value: int) -> None:
        self.store.update_uint8(ItemAddress.LCD_BRIGHTNESS_ADDR, int(value))
        self.store.commit()

    # -- steppers ------------------------------------------------------------

    @property
    def ra_steps_per_degree(self) -> float:
        """RA microsteps per degree, stored in tenths."""
        if self.store.is_present(ItemFlag.RA_STEPS_FLAG):
            return 0.1 * self.store.read_int16(ItemAddress.RA_STEPS_DEGREE_ADDR)
        return self.default_ra_steps_per_degree

    @ra_steps_per_degree.setter
    def ra_steps_per_degree(self, steps: float) -> None:
        self._store_core_int16(ItemAddress.RA_STEPS_DEGREE_ADDR, int(steps * 10), ItemFlag.RA_STEPS_FLAG)

    @property
    def dec_steps_per_degree(self) -> float:
        """DEC microsteps per degree, stored in tenths."""
        if self.store.is_present(ItemFlag.DEC_STEPS_FLAG):
            return 0.1 * self.store.read_int16(ItemAddress.DEC_STEPS_DEGREE_ADDR)
        return self.default_dec_steps_per_degree

    @dec_steps_per_degree.setter
    def dec_steps_per_degree(self, steps: float) -> None:
        self._store_core_int16(ItemAddress.DEC_STEPS_DEGREE_ADDR, int(steps * 10), ItemFlag.DEC_STEPS_FLAG)

    @property
    def speed_factor(self) -> float:
        """Tracking speed factor, stored as ten-thousandths above 1.0."""
        if not self.store.is_present(ItemFlag.SPEED_FACTOR_FLAG):
            return DEFAULT_SPEED_FACTOR
        low = self.store.read_uint8(ItemAddress.SPEED_FACTOR_LOW_ADDR)
        high = self.store.read_uint8(ItemAddress.SPEED_FACTOR_HIGH_ADDR)
        return 1.0 + (low + high * 256) / 10000.0

    @speed_factor.setter
    def speed_factor(self, factor: float) -> None:
        value = _clamp16(int((factor - 1.0) * 10000.0))
        self.store.update_uint8(ItemAddress.SPEED_FACTOR_LOW_ADDR, value & 0xFF)
        self.store.update_uint8(ItemAddress.SPEED_FACTOR_HIGH_ADDR, (value >> 8) & 0xFF)
        self.store.update_flags(ItemFlag.SPEED_FACTOR_FLAG)
        self.store.commit()

    @property
    def backlash_correction_steps(self) -> int:
        if self.store.is_present(ItemFlag.BACKLASH_STEPS_FLAG):
            return self.store.read_int16(ItemAddress.BACKLASH_STEPS_ADDR)
        return self.default_backlash_steps

    @backlash_correction_steps.setter
    def backlash_correction_steps(self, steps: int) -> None:
        self.store.update_int16(ItemAddress.BACKLASH_STEPS_ADDR, int(steps))
        self.store.update_flags(ItemFlag.BACKLASH_STEPS_FLAG)
        self.store.commit()

    # -- location ------------------------------------------------------------

    @property
    def latitude(self) -> Latitude:
        """Site latitude, stored in hundredths of a degree; 45°N by default."""
        if self.store.is_present(ItemFlag.LATITUDE_FLAG):
            return Latitude.from_hours(self.store.read_int16(ItemAddress.LATITUDE_ADDR) / 100.0)
        return Latitude.from_hours(DEFAULT_LATITUDE_DEGREES)

    @latitude.setter
    def latitude(self, latitude: Latitude) -> None:
        value = _round_half_away(latitude.total_hours * 100.0)
        self._store_core_int16(ItemAddress.LATITUDE_ADDR, value, ItemFlag.LATITUDE_FLAG)

    @property
    def longitude(self) -> float:
        """Site longitude in degrees (east positive); 100°E by default."""
        if self.store.is_present(ItemFlag.LONGITUDE_FLAG):
            return self.store.read_int16(ItemAddress.LONGITUDE_ADDR) / 100.0
        return DEFAULT_LONGITUDE_DEGREES

    @longitude.setter
    def longitude(self, degrees: float) -> None:
        value = _round_half_away(degrees * 100.0)
        self._store_core_int16(ItemAddress.LONGITUDE_ADDR, value, ItemFlag.LONGITUDE_FLAG)

    # -- gyro calibration ----------------------------------------------------

    @property
    def pitch_calibration_angle(self) -> float:
        return self._read_angle(ItemAddress.PITCH_OFFSET_ADDR, ItemFlag.PITCH_OFFSET_FLAG)

    @pitch_calibration_angle.setter
    def pitch_calibration_angle(self, angle: float) -> None:
        self._store_angle(ItemAddress.PITCH_OFFSET_ADDR, angle, ItemFlag.PITCH_OFFSET_FLAG)

    @property
    def roll_calibration_angle(self) -> float:
        return self._read_angle(ItemAddress.ROLL_OFFSET_ADDR, ItemFlag.ROLL_OFFSET_FLAG)

    @roll_calibration_angle.setter
    def roll_calibration_angle(self, angle: float) -> None:
        self._store_angle(ItemAddress.ROLL_OFFSET_ADDR, angle, ItemFlag.ROLL_OFFSET_FLAG)

    # -- extended items ------------------------------------------------------

    @property
    def ra_parking_pos(self) -> int:
        return self._read_extended_int32(ItemAddress.RA_PARKING_POS_ADDR, ExtendedItemFlag.PARKING_POS_MARKER_FLAG)

    @ra_parking_pos.setter
    def ra_parking_pos(self, steps: int) -> None:
        self._store_extended_int32(ItemAddress.RA_PARKING_POS_ADDR, steps, ExtendedItemFlag.PARKING_POS_MARKER_FLAG)

    @property
    def dec_parking_pos(self) -> int:
        return self._read_extended_int32(ItemAddress.DEC_PARKING_POS_ADDR, ExtendedItemFlag.PARKING_POS_MARKER_FLAG)

    @dec_parking_pos.setter
    def dec_parking_pos(self, steps: int) -> None:
        self._store_extended_int32(ItemAddress.DEC_PARKING_POS_ADDR, steps, ExtendedItemFlag.PARKING_POS_MARKER_FLAG)

    @property
    def dec_lower_limit(self) -> int:
        return self._read_extended_int32(ItemAddress.DEC_LOWER_LIMIT_ADDR, ExtendedItemFlag.DEC_LIMIT_MARKER_FLAG)

    @dec_lower_limit.setter
    def dec_lower_limit(self, steps: int) -> None:
        self._store_extended_int32(ItemAddress.DEC_LOWER_LIMIT_ADDR, steps, ExtendedItemFlag.DEC_LIMIT_MARKER_FLAG)

    @property
    def dec_upper_limit(self) -> int:
        return self._read_extended_int32(ItemAddress.DEC_UPPER_LIMIT_ADDR, ExtendedItemFlag.DEC_LIMIT_MARKER_FLAG)

    @dec_upper_limit.setter
    def dec_upper_limit(self, steps: int) -> None:
        self._store_extended_int32(ItemAddress.DEC_UPPER_LIMIT_ADDR, steps, ExtendedItemFlag.DEC_LIMIT_MARKER_FLAG)

    @property
    def ra_homing_offset(self) -> int:
        return self._read_extended_int32(ItemAddress.RA_HOMING_OFFSET_ADDR, ExtendedItemFlag.RA_HOMING_MARKER_FLAG)

    @ra_homing_offset.setter
    def ra_homing_offset(self, steps: int) -> None:
        self._store_extended_int32(ItemAddress.RA_HOMING_OFFSET_ADDR, steps, ExtendedItemFlag.RA_HOMING_MARKER_FLAG)