import pytest

from st7789kit.mpu6050 import (
    ACCEL_XOUT_H,
    GYRO_XOUT_H,
    MPU6050_I2C_ADDRESS,
    MPU6050_WHO_AM_I_VAL,
    PWR_MGMT_1,
    AccelRange,
    Axes,
    ComplementaryFilter,
    GyroRange,
    Mpu6050,
    Mpu6050Error,
    RawAxes,
)


class FakeBus:
    def __init__(self):
        self.registers = {0x75: 0x68, PWR_MGMT_1: 0x40}
        self.addresses = []
        self.fail = False

    def read_registers(self, address, register, length):
        self.addresses.append(address)
        if self.fail:
            raise OSError("nack")
        return bytes(self.registers.get(register + i, 0) for i in range(length))

    def write_registers(self, address, register, data):
        self.addresses.append(address)
        if self.fail:
            raise OSError("nack")
        for i, value in enumerate(data):
            self.registers[register + i] = value

    def load(self, register, data):
        for i, value in enumerate(data):
            self.registers[register + i] = value


@pytest.fixture
def bus():
    return FakeBus()


@pytest.fixture
def sensor(bus):
    mpu = Mpu6050(bus, MPU6050_I2C_ADDRESS)
    mpu.configure(AccelRange.FS_4G, GyroRange.FS_500DPS)
    mpu.wake_up()
    return mpu


def test_sensor_test_sequence(bus, sensor):
    assert sensor.device_id() == MPU6050_WHO_AM_I_VAL
    bus.load(ACCEL_XOUT_H, bytes([0x20, 0x00, 0x00, 0x00, 0xE0, 0x00]))
    bus.load(GYRO_XOUT_H, bytes([0x00, 0x83, 0x00, 0x00, 0x00, 0x00]))
    assert sensor.accel() == Axes(1.0, 0.0, -1.0)
    assert sensor.gyro().x == pytest.approx(131 / 65.5)
    assert set(bus.addresses) == {MPU6050_I2C_ADDRESS}


def test_configure_writes_both_registers(bus, sensor):
    assert bus.registers[0x1B] == GyroRange.FS_500DPS << 3
    assert bus.registers[0x1C] == AccelRange.FS_4G << 3
    assert sensor.accel_sensitivity() == 8192
    assert sensor.gyro_sensitivity() == 65.5


@pytest.mark.parametrize(
    "accel_range, expected",
    [(AccelRange.FS_2G, 16384), (AccelRange.FS_4G, 8192),
     (AccelRange.FS_8G, 4096), (AccelRange.FS_16G, 2048)],
)
def test_accel_sensitivity(bus, accel_range, expected):
    mpu = Mpu6050(bus)
    mpu.configure(accel_range, GyroRange.FS_250DPS)
    assert mpu.accel_sensitivity() == expected


@pytest.mark.parametrize(
    "gyro_range, expected",
    [(GyroRange.FS_250DPS, 131), (GyroRange.FS_500DPS, 65.5),
     (GyroRange.FS_1000DPS, 32.8), (GyroRange.FS_2000DPS, 16.4)],
)
def test_gyro_sensitivity(bus, gyro_range, expected):
    mpu = Mpu6050(bus)
    mpu.configure(AccelRange.FS_2G, gyro_range)
    assert mpu.gyro_sensitivity() == expected


def test_raw_values_are_signed(bus, sensor):
    bus.load(ACCEL_XOUT_H, bytes([0x7F, 0xFF, 0x80, 0x00, 0xFF, 0xFF]))
    assert sensor.raw_accel() == RawAxes(32767, -32768, -1)


def test_wake_up_and_sleep_toggle_bit6(bus):
    mpu = Mpu6050(bus)
    bus.registers[PWR_MGMT_1] = 0x41
    mpu.wake_up()
    assert bus.registers[PWR_MGMT_1] == 0x01
    mpu.sleep()
    assert bus.registers[PWR_MGMT_1] == 0x41


def test_bus_failure_raises(bus):
    mpu = Mpu6050(bus)
    bus.fail = True
    with pytest.raises(Mpu6050Error):
        mpu.device_id()
    with pytest.raises(Mpu6050Error):
        mpu.configure(AccelRange.FS_2G, GyroRange.FS_250DPS)


def test_filter_first_update_uses_accel_only():
    times = iter([0.0, 1.0])
    flt = ComplementaryFilter(lambda: next(times))
    angle = flt.update(Axes(0.0, 0.0, 1.0), Axes(50.0, 50.0, 0.0))
    assert angle.roll == 0.0
    assert angle.pitch == 0.0
    tilted = ComplementaryFilter(lambda: 0.0).update(Axes(0.0, 1.0, 0.0), Axes(0, 0, 0))
    assert tilted.roll == pytest.approx(90.0, rel=1e-3)


def test_filter_steady_state_and_gyro_integration():
    times = iter([0.0, 0.5, 1.0])
    flt = ComplementaryFilter(lambda: next(times))
    level = Axes(0.0, 0.0, 1.0)
    flt.update(level, Axes(0.0, 0.0, 0.0))
    steady = flt.update(level, Axes(0.0, 0.0, 0.0))
    assert steady.roll == pytest.approx(0.0)
    assert flt.dt == pytest.approx(0.5)
    moved = flt.update(level, Axes(10.0, -10.0, 0.0))
    assert moved.roll > 0
    assert moved.pitch < 0