"""Storage of tags and measurements in the PostgreSQL database."""

from __future__ import annotations

from contextlib import closing
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from .config import DbConfig
from .protocol import SensorData, value_or_nan

_NO_MOVEMENTS = 0xFF

_INSERT_MEASUREMENT = """INSERT INTO measurements
    (time, temperature, humidity, pressure, accel_x, accel_y, accel_z,
     battery_voltage, tx_power, movements, ruuvitag_id)
VALUES
    (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s);"""

_INSERT_RUUVITAG = """INSERT INTO ruuvitag
    (name, address)
VALUES
    (%s, %s)
ON CONFLICT DO NOTHING;"""

_SELECT_RUUVITAG_ID = "SELECT id FROM ruuvitag WHERE address=%s"


class SensorDb:
    """Wraps a DB-API connection to the measurement database."""

    def __init__(self, connection: Any) -> None:
        self.connection = connection

    def _execute(self, query: str, params: tuple) -> None:
        with closing(self.connection.cursor()) as cursor:
            cursor.execute(query, params)
        self.connection.commit()

    def add_ruuvitag(self, name: str, address: str) -> None:
        """Register a tag; an already known one is left unchanged."""
        self._execute(_INSERT_RUUVITAG, (name, address))

    def get_ruuvitag_id(self, address: str) -> int:
        """Return the database id of the tag with this address."""
        with closing(self.connection.cursor()) as cursor:
            cursor.execute(_SELECT_RUUVITAG_ID, (address,))
            row = cursor.fetchone()
        if row is None:
            raise LookupError(f"no Ruuvitag with address {address}")
        return int(row[0])

    def add_measurement(
        self, data: SensorData, ruuvitag_id: int, now: Optional[datetime] = None
    ) -> None:
        """Store one measurement; missing values are written as NaN."""
        timestamp = datetime.now(timezone.utc) if now is None else now
        movements = _NO_MOVEMENTS if data.movement_counter is None else data.movement_counter
        acc = data.acceleration
        self._execute(
            _INSERT_MEASUREMENT,
            (
                timestamp,
                value_or_nan(data.temperature),
                value_or_nan(data.humidity),
                value_or_nan(data.pressure),
                value_or_nan(acc.x),
                value_or_nan(acc.y),
                value_or_nan(acc.z),
                value_or_nan(data.battery_voltage),
                value_or_nan(data.tx_power),
                movements,
                ruuvitag_id,
            ),
        )


def connect_to_db(config: DbConfig, connect: Callable[[str], Any]) -> SensorDb:
    """Open a connection to the configured database with the given driver function."""
    return SensorDb(connect(config.url()))