"""Coordinate types, configuration storage, gyro conversions and menu logic for a star-tracking mount."""

__version__ = "1.10.2"

__all__ = [
    "config_store",
    "constants",
    "daytime",
    "declination",
    "eeprom",
    "gyro",
    "latitude",
    "lcd_menu",
]