"""Fixed hardware identifiers, debug flags and the firmware version."""

from __future__ import annotations

import re
from enum import IntEnum, IntFlag

VERSION = "V1.10.2"

SERIAL_BAUDRATE_STELLARIUM_DIRECT = 9600
SERIAL_BAUDRATE_ASCOM = 19200


class Board(IntEnum):
    """Supported controller boards, named by platform and model."""

    AVR_MEGA2560 = 1
    AVR_MKS_GEN_L_V21 = 2
    AVR_MKS_GEN_L_V2 = 3
    AVR_MKS_GEN_L_V1 = 4
    ESP32_ESP32DEV = 1001


class DisplayType(IntEnum):
    """Supported display and keypad combinations."""

    NONE = 0
    LCD_KEYPAD = 1
    LCD_KEYPAD_I2C_MCP23008 = 2
    LCD_KEYPAD_I2C_MCP23017 = 3
    LCD_JOY_I2C_SSD1306 = 4


class StepperType(IntEnum):
    """Whether a stepper motor is fitted to an axis."""

    NONE = -1
    ENABLED = 1


class DriverType(IntEnum):
    """Supported stepper driver models."""

    NONE = -1
    A4988_GENERIC = 1
    TMC2209_STANDALONE = 2
    TMC2209_UART = 3

    @property
    def dynamic_microstepping(self) -> bool:
        """True when the driver can change microstepping at run time."""
        return self is DriverType.TMC2209_UART


class WifiMode(IntEnum):
    """Wifi operating modes."""

    INFRASTRUCTURE = 0
    AP_ONLY = 1
    ATTEMPT_INFRASTRUCTURE_FAIL_TO_AP = 2
    DISABLED = 3


class DebugFlag(IntFlag):
    """Bits selecting the kinds of debug output to emit."""

    NONE = 0x0000
    INFO = 0x0001
    SERIAL = 0x0002
    WIFI = 0x0004
    MOUNT = 0x0008
    MOUNT_VERBOSE = 0x0010
    GENERAL = 0x0020
    MEADE = 0x0040
    VERBOSE = 0x0080
    STEPPERS = 0x0100
    EEPROM = 0x0200
    GYRO = 0x0400
    GPS = 0x0800
    FOCUS = 0x1000
    ANY = 0xFFFF


_VERSION_PATTERN = re.compile(r"[Vv]?(\d{1,2})\.(\d{1,2})\.(\d{1,2})")


def parse_version(text: str) -> tuple[int, int, int]:
    """Split a version like ``V1.10.2`` into comparable integer parts.

    Each part holds at most two digits and is read as a plain number,
    so ``1.12`` is later than ``1.8``.
    """
    match = _VERSION_PATTERN.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"invalid firmware version: {text!r}")
    major, minor, patch = (int(part) for part in match.groups())
    return major, minor, patch