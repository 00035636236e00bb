"""Tracking of discovered tags and buffering of their latest measurements."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, Set

from .protocol import ProtocolError, SensorData, parse_sensor_data
from .settings import RuuvitagInfo

log = logging.getLogger(__name__)

RUUVI_MANUFACTURER_ID = 0x0499
MANUFACTURER_DATA_PROP = "ManufacturerData"

_NO_SEQUENCE = 0xFFFF


class TagTracker:
    """Remembers which of the configured tags have been found so far."""

    def __init__(self, tags: Iterable[RuuvitagInfo], store: Any) -> None:
        self.tags = list(tags)
        self.store = store
        self._found: Set[int] = set()

    def discover(self, lookup: Callable[[str], Optional[Any]]) -> List[Any]:
        """Look every configured tag up; register and return the newly found devices."""
        discovered = []
        for index, tag in enumerate(self.tags):
            try:
                device = lookup(tag.address)
            except Exception as exc:  # the lookup reports absent devices this way too
                log.warning("error getting device by address: %s", exc)
                continue
            if device is None or index in self._found:
                continue
            self._found.add(index)
            try:
                self.store.add_ruuvitag(tag.name, tag.address)
            except Exception as exc:
                log.error("could not add newly discovered Ruuvitag to the database: %s", exc)
            discovered.append(device)
        return discovered


class MeasurementBuffer:
    """Keeps the newest measurement of one tag until it is written."""

    def __init__(self, store: Any, ruuvitag_id: int, address: str) -> None:
        self.store = store
        self.ruuvitag_id = ruuvitag_id
        self.address = address
        self.latest: Optional[SensorData] = None
        self._last_sequence_no = _NO_SEQUENCE

    def handle_property(self, name: str, value: Any) -> bool:
        """Take a changed device property; return True if a new measurement was kept."""
        if name != MANUFACTURER_DATA_PROP or not isinstance(value, Mapping):
            return False
        payload = value.get(RUUVI_MANUFACTURER_ID)
        if payload is None:
            return False
        try:
            data = parse_sensor_data(bytes(payload))
        except ProtocolError as exc:
            log.warning(
                "error interpreting sensor data from device %s from message %s: %s",
                self.address, bytes(payload).hex(), exc,
            )
            return False
        if data.sequence_no is None or data.sequence_no == self._last_sequence_no:
            return False
        self._last_sequence_no = data.sequence_no
        self.latest = data
        return True

    def flush(self) -> bool:
        """Write the kept measurement, if any; return True when one was written."""
        if self.latest is None:
            return False
        try:
            self.store.add_measurement(self.latest, self.ruuvitag_id)
        except Exception as exc:
            log.error(
                "could not write values %s to DB for sensor %s: %s",
                self.latest.describe(), self.address, exc,
            )
            return False
        self.latest = None
        return True