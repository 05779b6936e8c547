"""Logging setup for the service process."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def configure_logging(level: str = "INFO", debug: bool = False) -> None:
    """Configure the root logger once, with ISO 8601 timestamps."""
    logging.basicConfig(
        level=logging.DEBUG if debug else level.upper(),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        force=True,
    )
    # psycopg logs every pool event at INFO
    logging.getLogger("psycopg.pool").setLevel(logging.WARNING)
