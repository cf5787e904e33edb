"""Runtime configuration for the ICS calendar generator."""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import dotenv_values

from icsgenerator.config.constants import (
    ICS_PRODID,
    DEFAULT_TIMEZONE,
    DEFAULT_YEARS_PAST,
    DEFAULT_YEARS_FUTURE,
    DEFAULT_BIRTHDAY_SUFFIX,
    DEFAULT_AGE_FORMAT,
    DEFAULT_BIRTHDAY_DESCRIPTION_FORMAT,
    ENV_DEFAULT_TIMEZONE,
    ENV_YEARS_PAST,
    ENV_YEARS_FUTURE,
    ENV_PRODID,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratorConfig:
    """Settings that shape generated calendars but are not part of the document."""

    default_timezone: str = DEFAULT_TIMEZONE
    years_past: int = DEFAULT_YEARS_PAST
    years_future: int = DEFAULT_YEARS_FUTURE
    prodid: str = ICS_PRODID
    birthday_suffix: str = DEFAULT_BIRTHDAY_SUFFIX
    age_format: str = DEFAULT_AGE_FORMAT
    birthday_description_format: str = DEFAULT_BIRTHDAY_DESCRIPTION_FORMAT


GENERATOR_CONFIG = GeneratorConfig()


def _parse_year_count(name: str, raw: str) -> int:
    try:
        value = int(str(raw).strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def load_config(
    env_path: Optional[Union[str, Path]] = None,
    environ: Optional[Dict[str, str]] = None,
) -> GeneratorConfig:
    """Build a GeneratorConfig from an optional .env file and the environment.

    Values from the process environment override values from the file.

    Args:
        env_path: Optional path to a .env file.
        environ: Mapping used instead of os.environ (mainly for tests).

    Returns:
        A GeneratorConfig with overrides applied.

    Raises:
        ValueError: If a year count is not a non-negative integer.
    """
    values: Dict[str, Optional[str]] = {}
    if env_path is not None:
        path = Path(env_path)
        if path.exists():
            # Parse without mutating os.environ
            values.update(dotenv_values(path))
        else:
            logger.warning("Config file %s not found, using defaults", path)

    env = os.environ if environ is None else environ
    for key in (ENV_DEFAULT_TIMEZONE, ENV_YEARS_PAST, ENV_YEARS_FUTURE, ENV_PRODID):
        if env.get(key):
            values[key] = env[key]

    overrides = {}
    if values.get(ENV_DEFAULT_TIMEZONE):
        overrides["default_timezone"] = str(values[ENV_DEFAULT_TIMEZONE]).strip()
    if values.get(ENV_YEARS_PAST):
        overrides["years_past"] = _parse_year_count(ENV_YEARS_PAST, values[ENV_YEARS_PAST])
    if values.get(ENV_YEARS_FUTURE):
        overrides["years_future"] = _parse_year_count(ENV_YEARS_FUTURE, values[ENV_YEARS_FUTURE])
    if values.get(ENV_PRODID):
        overrides["prodid"] = str(values[ENV_PRODID]).strip()

    if overrides:
        logger.debug("Config overrides: %s", sorted(overrides))
    return replace(GENERATOR_CONFIG, **overrides)
