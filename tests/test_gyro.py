import pytest

from trackermount.gyro import (
    MPU6050_I2C_ADDR,
    MPU6050_REG_ACCEL_XOUT_H,
    MPU6050_REG_CONFIG,
    MPU6050_REG_PWR_MGMT_1,
    MPU6050_REG_TEMP_OUT_H,
    MPU6050_REG_WHO_AM_I,
    Angles,
    Gyro,
    angles_from_samples,
    temperature_from_raw,
)


class FakeBus:
    def __init__(self, who_am_i=0x68, accel=(0, 0, 16384), temp=0):
        self.who_am_i = who_am_i
        self.accel = accel
        self.temp = temp
        self.writes = []

    def read_registers(self, address, register, count):
        assert address == MPU6050_I2C_ADDR
        if register == MPU6050_REG_WHO_AM_I:
            return bytes([self.who_am_i])
        if register == MPU6050_REG_ACCEL_XOUT_H:
            return b"".join(v.to_bytes(2, "big", signed=True) for v in self.accel)
        if register == MPU6050_REG_TEMP_OUT_H:
            return self.temp.to_bytes(2, "big", signed=True)
        raise KeyError(register)

    def write_register(self, address, register, value):
        self.writes.append((address, register, value))


def test_startup_detects_device_and_configures():
    bus = FakeBus()
    gyro = Gyro(bus)
    assert gyro.startup() is True
    assert gyro.is_present
    assert bus.writes == [
        (MPU6050_I2C_ADDR, MPU6050_REG_PWR_MGMT_1, 0),
        (MPU6050_I2C_ADDR, MPU6050_REG_CONFIG, 6),
    ]


def test_startup_with_wrong_id_reports_absent():
    bus = FakeBus(who_am_i=0x00)
    gyro = Gyro(bus)
    assert gyro.startup() is False
    assert bus.writes == []


def test_absent_device_gives_defaults():
    gyro = Gyro(FakeBus(who_am_i=0x12))
    gyro.startup()
    assert gyro.current_angles() == Angles(0.0, 0.0)
    assert gyro.current_temperature() == 99.0


def test_level_device_reads_zero_angles():
    gyro = Gyro(FakeBus(accel=(0, 0, 16384)))
    gyro.startup()
    angles = gyro.current_angles()
    assert angles.pitch == pytest.approx(0.0)
    assert angles.roll == pytest.approx(0.0)


def test_device_angles_match_sample_function():
    accel = (1200, -3400, 15000)
    gyro = Gyro(FakeBus(accel=accel), swap_axes=True)
    gyro.startup()
    expected = angles_from_samples([accel], swap_axes=True)
    angles = gyro.current_angles()
    assert angles.pitch == pytest.approx(expected.pitch)
    assert angles.roll == pytest.approx(expected.roll)


def test_tilted_forty_five_degrees():
    angles = angles_from_samples([(16384, 0, 16384)])
    assert angles.pitch == pytest.approx(-45.0)
    assert angles.roll == pytest.approx(0.0)


def test_swap_axes_exchanges_pitch_and_roll():
    samples = [(1000, -2000, 15000), (900, -2100, 15100)]
    plain = angles_from_samples(samples)
    swapped = angles_from_samples(samples, swap_axes=True)
    assert swapped.pitch == pytest.approx(plain.roll)
    assert swapped.roll == pytest.approx(plain.pitch)


def test_empty_samples_raise():
    with pytest.raises(ValueError):
        angles_from_samples([])


def test_temperature_zero_raw():
    assert temperature_from_raw(0) == pytest.approx(36.53)


def test_device_temperature_uses_signed_raw():
    gyro = Gyro(FakeBus(temp=-256))
    gyro.startup()
    assert gyro.current_temperature() == pytest.approx(temperature_from_raw(-256))
    assert gyro.current_temperature() < temperature_from_raw(0)