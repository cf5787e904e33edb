"""Configuration module for the ICS calendar generator."""

from icsgenerator.config.settings import GENERATOR_CONFIG, GeneratorConfig, load_config
from icsgenerator.config.constants import (
    ICS_PRODID,
    ICS_VERSION,
    ICS_CALSCALE,
    DEFAULT_TIMEZONE,
    BUILTIN_VTIMEZONES,
)

__all__ = [
    "GENERATOR_CONFIG",
    "GeneratorConfig",
    "load_config",
    "ICS_PRODID",
    "ICS_VERSION",
    "ICS_CALSCALE",
    "DEFAULT_TIMEZONE",
    "BUILTIN_VTIMEZONES",
]
