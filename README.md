# trackermount

Building blocks for the controller of a star-tracking telescope mount. The
package has no dependencies beyond the standard library.

## Modules

- `trackermount.constants`: enumerations `Board`, `DisplayType`,
  `StepperType`, `DriverType` (with `dynamic_microstepping`), `WifiMode` and
  the `DebugFlag` bit flags; the serial speeds
  `SERIAL_BAUDRATE_STELLARIUM_DIRECT` and `SERIAL_BAUDRATE_ASCOM`; the
  firmware `VERSION` string and `parse_version(text)`, which turns
  `"V1.10.2"` into `(1, 10, 2)` and raises `ValueError` on anything else.
- `trackermount.daytime`: `DayTime`, a time held as a signed count of
  seconds. Build it with `DayTime(total_seconds)`, `DayTime.from_hms(h, m, s)`,
  `DayTime.from_hours(hours)` or `DayTime.parse_meade(text)` (accepts
  `"23:44:22"`, `"-45*32:11"`, a three-digit leading field and a missing
  seconds field). The `add_*`, `subtract_time`, `set` and `set_time`
  methods wrap the result into one day. `format(template)` fills `{d}`,
  `{m}` and `{s}`; `to_string()` gives `HH:MM:SS (hours)`.
  `parse_meade_seconds(text)` returns the raw signed seconds.
- `trackermount.latitude`: `Latitude`, a `DayTime` clamped to -90…+90 degrees.
- `trackermount.declination`: `Declination`, stored in the mount's internal
  -180…0 degree range and told which hemisphere it is used in. It offers
  `from_degrees`, `from_seconds`, `parse_meade`, `add_degrees`,
  `to_display_string(sep1, sep2)` and `to_string()`.
- `trackermount.eeprom`: `EepromStore`, little-endian 8/16/32-bit fields over
  a byte backend, with the magic marker and presence flags (`ItemFlag`,
  `ExtendedItemFlag`) at fixed addresses (`ItemAddress`). Backends are
  `MemoryBackend` (zero-filled, in memory) and `FileBackend` (loads an
  existing file and writes it atomically on `commit()`).
- `trackermount.config_store`: `ConfigStore`, the mount's saved settings as
  properties: `ha_time`, `utc_offset`, `brightness`, `ra_steps_per_degree`,
  `dec_steps_per_degree`, `speed_factor`, `backlash_correction_steps`,
  `latitude`, `longitude`, `pitch_calibration_angle`,
  `roll_calibration_angle`, `ra_parking_pos`, `dec_parking_pos`,
  `dec_lower_limit`, `dec_upper_limit` and `ra_homing_offset`. Reading an
  item that was never stored gives its default; assigning one writes it,
  marks it present and commits. `contents()` returns a dict snapshot and
  `clear_configuration()` forgets everything.
- `trackermount.gyro`: `angles_from_samples` and `temperature_from_raw`
  convert MPU-6050 accelerometer readings; `Gyro` drives the device through a
  bus object you supply that has `read_registers(address, register, count)`
  and `write_register(address, register, value)`.
- `trackermount.lcd_menu`: `LcdMenu`, a top-line menu whose active item is
  framed with `>`…`<` and kept in place, drawn onto a `TextDisplay` (an
  in-memory character grid) or any object with `set_cursor`, `write`,
  `clear` and `create_char`. Also `adjust_wrap`, `MenuItem` and the
  `SpecialChar` glyphs.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from trackermount.daytime import DayTime
from trackermount.eeprom import EepromStore, MemoryBackend
from trackermount.config_store import ConfigStore
from trackermount.lcd_menu import LcdMenu, TextDisplay

ra = DayTime.parse_meade("23:44:22")
ra.add_hours(2)
print(ra.format("{d}h{m}m{s}s"))   # +01h44m22s

store = EepromStore(MemoryBackend())
config = ConfigStore(store, ra_steps_per_degree=314.2,
                     dec_steps_per_degree=314.2, backlash_steps=16)
config.utc_offset = -5
print(config.utc_offset)           # -5

screen = TextDisplay(16, 2)
menu = LcdMenu(screen, 16, 2, config)
menu.startup()
menu.add_item("RA", 1)
menu.add_item("DEC", 2)
menu.update_display()
print(screen.row_text(0))
```

## What it does not do

- It does not read keypad or joystick buttons; the menu is driven only by
  calling `LcdMenu` methods.
- It does not move stepper motors, track, slew or park a mount, and it does
  not speak the serial command protocol used by planetarium software.
- It has no command-line tool and talks to no real display or I2C bus by
  itself; `TextDisplay` and the `Gyro` bus object stand in for the hardware.