"""Decoding of the RuuviTag data format 5 (RAWv2) advertisement payload."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from typing import Optional

PROTOCOL_VERSION = 5
PAYLOAD_LENGTH = 18

_MIN_INT16 = -0x8000
_MAX_UINT16 = 0xFFFF
_MAX_UINT8 = 0xFF

_LAYOUT = struct.Struct(">hHHhhhHBH")


class ProtocolError(ValueError):
    """Raised when a payload cannot be decoded as data format 5."""


@dataclass(frozen=True)
class AccelerationData:
    """Acceleration along the three axes in G; None where unavailable."""

    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None


@dataclass(frozen=True)
class SensorData:
    """One decoded measurement; every field is None when the tag reports it as unavailable."""

    temperature: Optional[float] = None
    humidity: Optional[float] = None
    pressure: Optional[float] = None
    acceleration: AccelerationData = field(default_factory=AccelerationData)
    battery_voltage: Optional[float] = None
    tx_power: Optional[float] = None
    movement_counter: Optional[int] = None
    sequence_no: Optional[int] = None

    def describe(self) -> str:
        """Return a one-line human readable summary of the measurement."""
        movements = _MAX_UINT8 if self.movement_counter is None else self.movement_counter
        seq = _MAX_UINT16 if self.sequence_no is None else self.sequence_no
        acc = self.acceleration
        return (
            f"temperature: {_fmt(self.temperature)} °C, "
            f"humidity: {_fmt(self.humidity)} %, "
            f"pressure: {_fmt(self.pressure)} hPa, "
            f"acc.: ({_fmt(acc.x)}, {_fmt(acc.y)}, {_fmt(acc.z)}) G, "
            f"battery: {_fmt(self.battery_voltage)} V, "
            f"TX power: {_fmt(self.tx_power)} dBm, "
            f"movements: {movements}, meas. seq.: {seq}"
        )

    def __str__(self) -> str:
        return self.describe()


def value_or_nan(value: Optional[float]) -> float:
    """Return the value itself, or NaN when it is missing."""
    return math.nan if value is None else value


def _fmt(value: Optional[float]) -> str:
    number = value_or_nan(value)
    return "NaN" if math.isnan(number) else f"{number:f}"


def _signed(raw: int, scale: float) -> Optional[float]:
    return None if raw == _MIN_INT16 else float(raw) * scale


def parse_sensor_data(data: bytes) -> SensorData:
    """Decode a data format 5 payload (starting with the version byte)."""
    data = bytes(data)
    if not data:
        raise ProtocolError("empty payload")
    if data[0] != PROTOCOL_VERSION:
        raise ProtocolError("data is not protocol version 5")
    if len(data) < PAYLOAD_LENGTH:
        raise ProtocolError(
            f"payload too short: {len(data)} bytes, need at least {PAYLOAD_LENGTH}"
        )

    (
        temperature_raw,
        humidity_raw,
        pressure_raw,
        acc_x_raw,
        acc_y_raw,
        acc_z_raw,
        power_raw,
        movements_raw,
        sequence_raw,
    ) = _LAYOUT.unpack_from(data, 1)

    humidity = None if humidity_raw == _MAX_UINT16 else float(humidity_raw) * 0.0025
    pressure = None if pressure_raw == _MAX_UINT16 else (float(pressure_raw) + 50000.0) * 0.01

    if power_raw == _MAX_UINT16:
        battery_voltage = tx_power = None
    else:
        battery_voltage = float((power_raw >> 5) + 1600) * 0.001
        tx_power = float(2 * (power_raw & 0b11111)) - 40.0

    return SensorData(
        temperature=_signed(temperature_raw, 0.005),
        humidity=humidity,
        pressure=pressure,
        acceleration=AccelerationData(
            x=_signed(acc_x_raw, 0.001),
            y=_signed(acc_y_raw, 0.001),
            z=_signed(acc_z_raw, 0.001),
        ),
        battery_voltage=battery_voltage,
        tx_power=tx_power,
        movement_counter=None if movements_raw == _MAX_UINT8 else movements_raw,
        sequence_no=None if sequence_raw == _MAX_UINT16 else sequence_raw,
    )