"""Configuration handling for license-detector."""
from __future__ import annotations

from license_detector.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_detector.config.loader import (
    find_config_file,
    load_config,
    load_config_file,
)
from license_detector.models.config import DetectorConfig, WellKnownLicenseConfig

__all__ = [
    "DEFAULT_CONFIG_NAMES",
    "DetectorConfig",
    "WellKnownLicenseConfig",
    "find_config_file",
    "get_default_config",
    "load_config",
    "load_config_file",
]
