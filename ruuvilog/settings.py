"""The list of RuuviTags to log, read from a JSON settings file."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, List, Union

log = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "ruuviLogger.json"


class SettingsError(Exception):
    """Raised when the settings cannot be read or understood."""


@dataclass(frozen=True)
class RuuvitagInfo:
    """A tag to watch for: a display name and its Bluetooth address."""

    name: str = ""
    address: str = ""


@dataclass
class Settings:
    """Application settings."""

    ruuvitags: List[RuuvitagInfo] = field(default_factory=list)


def _string_field(obj: dict, key: str) -> str:
    value = ""
    for k, v in obj.items():
        if k.lower() == key:
            if v is None:
                continue
            if not isinstance(v, str):
                raise SettingsError(f"field '{key}' must be a string, got {v!r}")
            value = v
    return value


def _parse_tag(item: Any) -> RuuvitagInfo:
    if item is None:
        return RuuvitagInfo()
    if not isinstance(item, dict):
        raise SettingsError(f"a Ruuvitag entry must be an object, got {item!r}")
    return RuuvitagInfo(name=_string_field(item, "name"), address=_string_field(item, "address"))


def parse_settings(text: Union[str, bytes]) -> Settings:
    """Interpret JSON settings text."""
    try:
        document = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SettingsError(f"could not interpret settings data: {exc}") from exc

    settings = Settings()
    if document is None:
        return settings
    if not isinstance(document, dict):
        raise SettingsError("settings must be a JSON object")

    for key, value in document.items():
        if key.lower() != "ruuvitags":
            continue
        if value is None:
            settings.ruuvitags = []
        elif isinstance(value, list):
            settings.ruuvitags = [_parse_tag(item) for item in value]
        else:
            raise SettingsError("'Ruuvitags' must be a list")
    return settings


def load_settings(path: Union[str, os.PathLike] = SETTINGS_FILE_NAME) -> Settings:
    """Read and interpret the settings file."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise SettingsError(f"could not open file '{path}': {exc}") from exc

    settings = parse_settings(data)
    log.info("using these settings: %s", settings)
    return settings