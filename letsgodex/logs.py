"""Contains logging related functionality."""

import logging
import logging.config
import typing
from pathlib import Path

import yaml


def init_logging(filepath: Path) -> dict[str, typing.Any]:  # pragma: no cover
    """Read logging config yaml file from `filepath` and initialize logging by applying it globally.

    Falls back to ``logging.basicConfig`` at WARNING level when the file is missing.

    :param filepath: Path to the logging configuration yaml file.
    :returns: The logging configuration as dict (empty when the fallback was used).
    """
    if not filepath.exists():
        logging.basicConfig(level=logging.WARNING)
        return {}
    config: dict[str, typing.Any] = yaml.safe_load(filepath.read_text(encoding="utf-8"))
    logging.config.dictConfig(config)
    return config
