"""Byte-level persistent storage with a magic marker and presence flags."""

from __future__ import annotations

import os
import tempfile
from enum import IntEnum, IntFlag
from pathlib import Path
from typing import Protocol

STORE_SIZE = 64


class ItemFlag(IntEnum):
    """Marker value and the presence bits of the core stored items.

    The 16-bit word at address 4 holds the magic marker in its upper bits
    and one presence bit per core item below it.
    """

    MAGIC_MARKER_VALUE = 0xCE00
    MAGIC_MARKER_MASK = 0xFE00

    RA_STEPS_FLAG = 0x0001
    DEC_STEPS_FLAG = 0x0002
    SPEED_FACTOR_FLAG = 0x0004
    BACKLASH_STEPS_FLAG = 0x0008
    LATITUDE_FLAG = 0x0010
    LONGITUDE_FLAG = 0x0020
    PITCH_OFFSET_FLAG = 0x0040
    ROLL_OFFSET_FLAG = 0x0080
    EXTENDED_FLAG = 0x0100
    FLAGS_MASK = 0x01FF


class ExtendedItemFlag(IntFlag):
    """Presence bits of the extended items, stored at address 21."""

    PARKING_POS_MARKER_FLAG = 0x0001
    DEC_LIMIT_MARKER_FLAG = 0x0002
    UTC_OFFSET_MARKER_FLAG = 0x0004
    RA_HOMING_MARKER_FLAG = 0x0008


class ItemAddress(IntEnum):
    """Offset of the first byte of each stored item."""

    SPEED_FACTOR_LOW_ADDR = 0
    HA_HOUR_ADDR = 1
    HA_MINUTE_ADDR = 2
    SPEED_FACTOR_HIGH_ADDR = 3
    FLAGS_ADDR = 4
    MAGIC_MARKER_AND_FLAGS_ADDR = 4
    MAGIC_MARKER_ADDR = 5
    RA_STEPS_DEGREE_ADDR = 6
    DEC_STEPS_DEGREE_ADDR = 8
    BACKLASH_STEPS_ADDR = 10
    LATITUDE_ADDR = 12
    LONGITUDE_ADDR = 14
    LCD_BRIGHTNESS_ADDR = 16
    PITCH_OFFSET_ADDR = 17
    ROLL_OFFSET_ADDR = 19
    EXTENDED_FLAGS_ADDR = 21
    RA_PARKING_POS_ADDR = 23
    DEC_PARKING_POS_ADDR = 27
    DEC_LOWER_LIMIT_ADDR = 31
    DEC_UPPER_LIMIT_ADDR = 35
    UTC_OFFSET_ADDR = 39
    RA_HOMING_OFFSET_ADDR = 40


class Backend(Protocol):
    """Raw byte storage that an :class:`EepromStore` sits on."""

    def read(self, location: int) -> int: ...

    def update(self, location: int, value: int) -> None: ...

    def commit(self) -> None: ...


def _check_byte(value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"byte value out of range: {value}")
    return value


def _check_location(location: int, size: int) -> int:
    if not 0 <= location < size:
        raise IndexError(f"storage location out of range: {location}")
    return location


def _new_image(size: int) -> bytearray:
    if size <= 0:
        raise ValueError(f"storage size must be positive: {size}")
    return bytearray(size)


class MemoryBackend:
    """Storage held in memory only; starts zero-filled."""

    def __init__(self, size: int = STORE_SIZE) -> None:
        self._data = _new_image(size)

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def read(self, location: int) -> int:
        return self._data[_check_location(location, len(self._data))]

    def update(self, location: int, value: int) -> None:
        self._data[_check_location(location, len(self._data))] = _check_byte(value)

    def commit(self) -> None:
        """Nothing to flush for in-memory storage."""


class FileBackend:
    """Storage kept in a file; changes reach the file on :meth:`commit`."""

    def __init__(self, path: str | os.PathLike[str], size: int = STORE_SIZE) -> None:
        self._data = _new_image(size)
        self._dirty = False
        self.path = Path(path)
        if self.path.exists():
            content = self.path.read_bytes()[:size]
            self._data[: len(content)] = content

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def read(self, location: int) -> int:
        return self._data[_check_location(location, len(self._data))]

    def update(self, location: int, value: int) -> None:
        index = _check_location(location, len(self._data))
        byte = _check_byte(value)
        if self._data[index] != byte:
            self._data[index] = byte
            self._dirty = True

    def commit(self) -> None:
        """Write the whole image to the file atomically when it has changed."""
        if not self._dirty and self.path.exists():
            return
        directory = self.path.parent if str(self.path.parent) else Path(".")
        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(self._data)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        self._dirty = False


class EepromStore:
    """Typed little-endian access and presence flags over a byte backend."""

    def __init__(self, backend: Backend | None = None) -> None:
        self.backend = backend if backend is not None else MemoryBackend()

    def read_uint8(self, location: int) -> int:
        return self.backend.read(location)

    def update_uint8(self, location: int, value: int) -> None:
        self.backend.update(location, value & 0xFF)

    def read_int8(self, location: int) -> int:
        return int.from_bytes(bytes((self.read_uint8(location),)), "little", signed=True)

    def update_int8(self, location: int, value: int) -> None:
        self.update_uint8(location, value & 0xFF)

    def _read_bytes(self, location: int, count: int) -> bytes:
        return bytes(self.backend.read(location + offset) for offset in range(count))

    def _write_bytes(self, location: int, data: bytes) -> None:
        for offset, byte in enumerate(data):
            self.backend.update(location + offset, byte)

    def read_uint16(self, location: int) -> int:
        return int.from_bytes(self._read_bytes(location, 2), "little")

    def update_uint16(self, location: int, value: int) -> None:
        self._write_bytes(location, (value & 0xFFFF).to_bytes(2, "little"))

    def read_int16(self, location: int) -> int:
        return int.from_bytes(self._read_bytes(location, 2), "little", signed=True)

    def update_int16(self, location: int, value: int) -> None:
        self.update_uint16(location, value)

    def read_int32(self, location: int) -> int:
        return int.from_bytes(self._read_bytes(location, 4), "little", signed=True)

    def update_int32(self, location: int, value: int) -> None:
        self._write_bytes(location, (value & 0xFFFFFFFF).to_bytes(4, "little"))

    def is_present(self, item: int) -> bool:
        """True when the magic marker is valid and the item's flag is set."""
        marker = self.read_uint16(ItemAddress.MAGIC_MARKER_AND_FLAGS_ADDR)
        check = ItemFlag.MAGIC_MARKER_MASK | item
        expected = ItemFlag.MAGIC_MARKER_VALUE | item
        return (marker & check) == expected

    def is_present_extended(self, item: int) -> bool:
        """True when extended data exists and the item's extended flag is set."""
        if not self.is_present(ItemFlag.EXTENDED_FLAG):
            return False
        return bool(self.read_uint16(ItemAddress.EXTENDED_FLAGS_ADDR) & item)

    def update_flags(self, item: int) -> None:
        """Mark a core item present; flags only accumulate. Does not commit."""
        new_marker = ItemFlag.MAGIC_MARKER_VALUE | item
        existing = self.read_uint16(ItemAddress.MAGIC_MARKER_AND_FLAGS_ADDR)
        if (existing & ItemFlag.MAGIC_MARKER_MASK) == ItemFlag.MAGIC_MARKER_VALUE:
            new_marker |= existing & ItemFlag.FLAGS_MASK
        self.update_uint16(ItemAddress.MAGIC_MARKER_AND_FLAGS_ADDR, new_marker)

    def update_flags_extended(self, item: int) -> None:
        """Mark an extended item present; flags only accumulate. Does not commit."""
        extended = 0
        if self.is_present(ItemFlag.EXTENDED_FLAG):
            extended = self.read_uint16(ItemAddress.EXTENDED_FLAGS_ADDR)
        self.update_flags(ItemFlag.EXTENDED_FLAG)
        self.update_uint16(ItemAddress.EXTENDED_FLAGS_ADDR, extended | item)

    def clear(self) -> None:
        """Erase the marker and all flags, then commit."""
        self.update_uint16(ItemAddress.MAGIC_MARKER_AND_FLAGS_ADDR, 0)
        self.update_uint16(ItemAddress.EXTENDED_FLAGS_ADDR, 0)
        self.commit()

    def commit(self) -> None:
        self.backend.commit()