"""MPU6050 accelerometer and gyroscope over an I2C bus."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional, Protocol

MPU6050_I2C_ADDRESS = 0x68
MPU6050_I2C_ADDRESS_1 = 0x69
MPU6050_WHO_AM_I_VAL = 0x68

ALPHA = 0.99
RAD_TO_DEG = 57.27272727

GYRO_CONFIG = 0x1B
ACCEL_CONFIG = 0x1C
ACCEL_XOUT_H = 0x3B
GYRO_XOUT_H = 0x43
PWR_MGMT_1 = 0x6B
WHO_AM_I = 0x75

_SLEEP_BIT = 1 << 6


class _Bus(Protocol):
    def read_registers(self, address: int, register: int, length: int) -> bytes: ...

    def write_registers(self, address: int, register: int, data: bytes) -> None: ...


class Mpu6050Error(Exception):
    """Raised when a transfer with the sensor fails."""


class AccelRange(IntEnum):
    """Accelerometer full scale range."""

    FS_2G = 0
    FS_4G = 1
    FS_8G = 2
    FS_16G = 3

    @property
    def sensitivity(self) -> float:
        """Counts per g."""
        return {0: 16384.0, 1: 8192.0, 2: 4096.0, 3: 2048.0}[self.value]


class GyroRange(IntEnum):
    """Gyroscope full scale range."""

    FS_250DPS = 0
    FS_500DPS = 1
    FS_1000DPS = 2
    FS_2000DPS = 3

    @property
    def sensitivity(self) -> float:
        """Counts per degree per second."""
        return {0: 131.0, 1: 65.5, 2: 32.8, 3: 16.4}[self.value]


@dataclass(frozen=True)
class RawAxes:
    """Signed 16-bit readings of three axes."""

    x: int
    y: int
    z: int


@dataclass(frozen=True)
class Axes:
    """Scaled readings of three axes."""

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class ComplementaryAngle:
    """Roll and pitch in degrees."""

    roll: float
    pitch: float


class Mpu6050:
    """An MPU6050 reached through a bus with read_registers/write_registers."""

    def __init__(self, bus: _Bus, address: int = MPU6050_I2C_ADDRESS) -> None:
        self.bus = bus
        self.address = address

    def _read(self, register: int, length: int) -> bytes:
        try:
            data = bytes(self.bus.read_registers(self.address, register, length))
        except OSError as exc:
            raise Mpu6050Error(f"read of register 0x{register:02x} failed") from exc
        if len(data) != length:
            raise Mpu6050Error(
                f"read of register 0x{register:02x} returned {len(data)} of {length} bytes"
            )
        return data

    def _write(self, register: int, data: bytes) -> None:
        try:
            self.bus.write_registers(self.address, register, bytes(data))
        except OSError as exc:
            raise Mpu6050Error(f"write of register 0x{register:02x} failed") from exc

    def device_id(self) -> int:
        """Return the WHO_AM_I register."""
        return self._read(WHO_AM_I, 1)[0]

    def wake_up(self) -> None:
        """Clear the sleep bit."""
        value = self._read(PWR_MGMT_1, 1)[0]
        self._write(PWR_MGMT_1, bytes([value & ~_SLEEP_BIT & 0xFF]))

    def sleep(self) -> None:
        """Set the sleep bit."""
        value = self._read(PWR_MGMT_1, 1)[0]
        self._write(PWR_MGMT_1, bytes([value | _SLEEP_BIT]))

    def configure(self, accel_range: AccelRange, gyro_range: GyroRange) -> None:
        """Set both full scale ranges."""
        self._write(
            GYRO_CONFIG,
            bytes([(int(gyro_range) << 3) & 0xFF, (int(accel_range) << 3) & 0xFF]),
        )

    def accel_sensitivity(self) -> float:
        """Counts per g for the configured range."""
        value = self._read(ACCEL_CONFIG, 1)[0]
        return AccelRange((value >> 3) & 0x03).sensitivity

    def gyro_sensitivity(self) -> float:
        """Counts per degree per second for the configured range."""
        value = self._read(GYRO_CONFIG, 1)[0]
        return GyroRange((value >> 3) & 0x03).sensitivity

    def _raw(self, register: int) -> RawAxes:
        data = self._read(register, 6)
        x, y, z = (
            int.from_bytes(data[i:i + 2], "big", signed=True) for i in (0, 2, 4)
        )
        return RawAxes(x, y, z)

    def raw_accel(self) -> RawAxes:
        """Unscaled accelerometer readings."""
        return self._raw(ACCEL_XOUT_H)

    def raw_gyro(self) -> RawAxes:
        """Unscaled gyroscope readings."""
        return self._raw(GYRO_XOUT_H)

    def accel(self) -> Axes:
        """Acceleration in g."""
        sensitivity = self.accel_sensitivity()
        raw = self.raw_accel()
        return Axes(raw.x / sensitivity, raw.y / sensitivity, raw.z / sensitivity)

    def gyro(self) -> Axes:
        """Angular rate in degrees per second."""
        sensitivity = self.gyro_sensitivity()
        raw = self.raw_gyro()
        return Axes(raw.x / sensitivity, raw.y / sensitivity, raw.z / sensitivity)


class ComplementaryFilter:
    """Fuses accelerometer and gyroscope readings into roll and pitch."""

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self.clock = clock or time.monotonic
        self.counter = 0
        self.dt = 0.0
        self._last: Optional[float] = None
        self.angle = ComplementaryAngle(0.0, 0.0)

    def update(self, accel: Axes, gyro: Axes) -> ComplementaryAngle:
        """Feed one pair of readings and return the new angle."""
        self.counter += 1
        accel_roll = math.atan2(accel.y, accel.z) * RAD_TO_DEG
        accel_pitch = math.atan2(accel.x, accel.z) * RAD_TO_DEG
        now = self.clock()
        if self.counter == 1 or self._last is None:
            self._last = now
            self.angle = ComplementaryAngle(accel_roll, accel_pitch)
            return self.angle
        self.dt = now - self._last
        self._last = now
        roll = ALPHA * (self.angle.roll + gyro.x * self.dt) + (1 - ALPHA) * accel_roll
        pitch = ALPHA * (self.angle.pitch + gyro.y * self.dt) + (1 - ALPHA) * accel_pitch
        self.angle = ComplementaryAngle(roll, pitch)
        return self.angle