"""Default configuration values for license-detector."""

from __future__ import annotations

from license_detector.models.config import DetectorConfig

# Default configuration file names to search for
DEFAULT_CONFIG_NAMES = [".license-detector.yaml", ".license-detector.yml"]


def get_default_config() -> DetectorConfig:
    """Get the default configuration.

    Returns:
        DetectorConfig scanning the first 512 KiB of each file and using
        only the packaged well-known licenses.
    """
    return DetectorConfig()
