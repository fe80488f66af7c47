"""Pitch, roll and temperature from an MPU-6050 accelerometer."""

from __future__ import annotations

import math
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

MPU6050_I2C_ADDR = 0x68
MPU6050_REG_CONFIG = 0x1A
MPU6050_REG_ACCEL_XOUT_H = 0x3B
MPU6050_REG_TEMP_OUT_H = 0x41
MPU6050_REG_PWR_MGMT_1 = 0x6B
MPU6050_REG_WHO_AM_I = 0x75

_EXPECTED_ID = 0x34
_WINDOW_SIZE = 16
_SAMPLE_INTERVAL = 0.01
_ABSENT_TEMPERATURE = 99.0


class I2CBus(Protocol):
    """The register access the gyro needs from an I2C bus."""

    def read_registers(self, address: int, register: int, count: int) -> bytes: ...

    def write_register(self, address: int, register: int, value: int) -> None: ...


@dataclass(frozen=True)
class Angles:
    """Pitch and roll in degrees."""

    pitch: float = 0.0
    roll: float = 0.0


def _int16(high: int, low: int) -> int:
    return int.from_bytes(bytes((high, low)), "big", signed=True)


def _pitch_roll(x: float, y: float, z: float) -> tuple[float, float]:
    pitch = math.degrees(math.atan2(-x, math.hypot(y, z)))
    roll = math.degrees(math.atan2(-y, math.hypot(x, z)))
    return pitch, roll


def angles_from_samples(samples: Iterable[tuple[float, float, float]], swap_axes: bool = False) -> Angles:
    """Average pitch and roll over raw (x, y, z) accelerometer samples."""
    pitches: list[float] = []
    rolls: list[float] = []
    for x, y, z in samples:
        pitch, roll = _pitch_roll(x, y, z)
        pitches.append(pitch)
        rolls.append(roll)
    if not pitches:
        raise ValueError("at least one accelerometer sample is required")
    pitch = sum(pitches) / len(pitches)
    roll = sum(rolls) / len(rolls)
    if swap_axes:
        pitch, roll = roll, pitch
    return Angles(pitch, roll)


def temperature_from_raw(raw: int) -> float:
    """Convert the raw temperature register to degrees Celsius."""
    return raw / 340.0 + 36.53


class Gyro:
    """An MPU-6050 on an I2C bus."""

    def __init__(self, bus: I2CBus, swap_axes: bool = False) -> None:
        self._bus = bus
        self.swap_axes = swap_axes
        self.is_present = False

    def startup(self) -> bool:
        """Detect the device, wake it and select the lowest filter bandwidth."""
        who_am_i = self._bus.read_registers(MPU6050_I2C_ADDR, MPU6050_REG_WHO_AM_I, 1)[0]
        self.is_present = ((who_am_i >> 1) & 0x3F) == _EXPECTED_ID
        if not self.is_present:
            return False
        self._bus.write_register(MPU6050_I2C_ADDR, MPU6050_REG_PWR_MGMT_1, 0)
        self._bus.write_register(MPU6050_I2C_ADDR, MPU6050_REG_CONFIG, 6)
        return True

    def shutdown(self) -> None:
        """Stop using the device; readings fall back to the absent values until startup."""
        self.is_present = False

    def _read_sample(self) -> tuple[int, int, int]:
        data = self._bus.read_registers(MPU6050_I2C_ADDR, MPU6050_REG_ACCEL_XOUT_H, 6)
        return _int16(data[0], data[1]), _int16(data[2], data[3]), _int16(data[4], data[5])

    def _samples(self):
        for _ in range(_WINDOW_SIZE):
            yield self._read_sample()
            time.sleep(_SAMPLE_INTERVAL)

    def current_angles(self) -> Angles:
        """Average pitch and roll over a window of readings; zero when absent."""
        if not self.is_present:
            return Angles()
        return angles_from_samples(self._samples(), self.swap_axes)

    def current_temperature(self) -> float:
        """Device temperature in Celsius; 99 when the device is absent."""
        if not self.is_present:
            return _ABSENT_TEMPERATURE
        data = self._bus.read_registers(MPU6050_I2C_ADDR, MPU6050_REG_TEMP_OUT_H, 2)
        return temperature_from_raw(_int16(data[0], data[1]))