"""Database configuration taken from a .env file and the environment."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import dotenv_values

log = logging.getLogger(__name__)

PASSWORD = "password"
DEFAULT_DOTENV = ".env"

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass
class DbConfig:
    """Connection settings for the measurement database."""

    host: str = "localhost"
    port: int = 5432
    user: str = "ruuvi"
    password: str = PASSWORD
    name: str = "weatherdb"
    write_interval_sec: int = 60

    def url(self) -> str:
        """Return the PostgreSQL connection URL."""
        return (
            f"postgres://{self.user}:{self.password}@{self.host}:{self.port}/"
            f"{self.name}?sslmode=disable"
        )


def _parse_int(text: Optional[str]) -> Optional[int]:
    if text is None or not _INTEGER.fullmatch(text):
        return None
    return int(text)


def load_config(
    dotenv_path: Union[str, os.PathLike, None] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> DbConfig:
    """Build the configuration.

    When a .env file is present it starts from an empty configuration and its
    values are used where the environment does not set them; otherwise it starts
    from the defaults. Host, user, password and name always come from the
    variables; port and write interval only when they hold an integer.
    """
    path = Path(DEFAULT_DOTENV if dotenv_path is None else dotenv_path)
    env = dict(os.environ if environ is None else environ)

    if path.is_file():
        log.info("loading settings from .env file")
        cfg = DbConfig(host="", port=0, user="", password="", name="", write_interval_sec=0)
        file_values = {k: v for k, v in dotenv_values(path).items() if v is not None}
        env = {**file_values, **env}
    else:
        cfg = DbConfig()

    cfg.password = env.get("DB_PASSWORD", "")
    cfg.user = env.get("DB_USER", "")
    cfg.host = env.get("DB_HOST", "")
    cfg.name = env.get("DB_NAME", "")

    interval = _parse_int(env.get("DB_WRITE_INTERVAL_SEC"))
    if interval is None:
        log.warning(
            "could not determine the DB writing interval from environment variable "
            "'DB_WRITE_INTERVAL_SEC', using the default one"
        )
    else:
        cfg.write_interval_sec = interval

    port = _parse_int(env.get("DB_PORT"))
    if port is None:
        log.warning(
            "could not determine the port from environment variable 'DB_PORT', "
            "using the default one"
        )
    else:
        cfg.port = port

    log.info("using database %s:%d/%s", cfg.host, cfg.port, cfg.name)
    return cfg