import math

import pytest

from ruuvilog.protocol import (
    AccelerationData,
    ProtocolError,
    SensorData,
    parse_sensor_data,
    value_or_nan,
)

VALID_DATA = "0512FC5394C37C0004FFFC040CAC364200CDCBB8334C884F"
MAX_VALUES = "057FFFFFFEFFFE7FFF7FFF7FFFFFDEFEFFFECBB8334C884F"
MIN_VALUES = "058001000000008001800180010000000000CBB8334C884F"
INVALID_VALUES = "058000FFFFFFFF800080008000FFFFFFFFFFFFFFFFFFFFFF"


def test_valid_data_can_be_interpreted():
    sd = parse_sensor_data(bytes.fromhex(VALID_DATA))
    assert sd.temperature == 24.3
    assert sd.humidity == 53.49
    assert sd.pressure == 1000.44
    assert sd.acceleration.x == 0.004
    assert sd.acceleration.y == -0.004
    assert sd.acceleration.z == 1.036
    assert sd.battery_voltage == 2.977
    assert sd.tx_power == 4.0
    assert sd.movement_counter == 66
    assert sd.sequence_no == 205


def test_max_data_can_be_interpreted():
    sd = parse_sensor_data(bytes.fromhex(MAX_VALUES))
    assert sd.temperature == 163.835
    assert sd.humidity == 163.835
    assert sd.pressure == 1155.34
    assert sd.acceleration.x == 32.767
    assert sd.acceleration.y == 32.767
    assert sd.acceleration.z == 32.767
    assert sd.battery_voltage == 3.646
    assert sd.tx_power == 20.0
    assert sd.movement_counter == 254
    assert sd.sequence_no == 65534


def test_min_data_can_be_interpreted():
    sd = parse_sensor_data(bytes.fromhex(MIN_VALUES))
    assert sd.temperature == -163.835
    assert sd.humidity == 0.0
    assert sd.pressure == 500.0
    assert sd.acceleration.x == -32.767
    assert sd.acceleration.y == -32.767
    assert sd.acceleration.z == -32.767
    assert sd.battery_voltage == 1.6
    assert sd.tx_power == -40.0
    assert sd.movement_counter == 0
    assert sd.sequence_no == 0


def test_invalid_data_is_recognized_as_unavailable():
    sd = parse_sensor_data(bytes.fromhex(INVALID_VALUES))
    assert sd == SensorData()
    assert sd.acceleration == AccelerationData(None, None, None)


def test_wrong_version_is_rejected():
    payload = bytearray.fromhex(VALID_DATA)
    payload[0] = 3
    with pytest.raises(ProtocolError):
        parse_sensor_data(bytes(payload))


@pytest.mark.parametrize("payload", [b"", bytes.fromhex(VALID_DATA)[:10]])
def test_short_payload_is_rejected(payload):
    with pytest.raises(ProtocolError):
        parse_sensor_data(payload)


def test_value_or_nan():
    assert value_or_nan(1.5) == 1.5
    assert math.isnan(value_or_nan(None))


def test_describe_valid_data():
    text = parse_sensor_data(bytes.fromhex(VALID_DATA)).describe()
    assert "movements: 66" in text
    assert "meas. seq.: 205" in text
    assert text.startswith("temperature: 24.300000 °C")


def test_describe_unavailable_data_uses_sentinels():
    text = parse_sensor_data(bytes.fromhex(INVALID_VALUES)).describe()
    assert "movements: 255" in text
    assert "meas. seq.: 65535" in text
    assert "temperature: NaN °C" in text