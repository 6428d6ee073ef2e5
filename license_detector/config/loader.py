"""Configuration file discovery and loading for license-detector."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from license_detector.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_detector.exceptions import ConfigurationError
from license_detector.models.config import DetectorConfig, WellKnownLicenseConfig


def find_config_file(
    start_dir: Path | None = None, search_parents: bool = True
) -> Path | None:
    """Find the configuration file for a source tree.

    Each directory is searched for `.license-detector.yaml`, then
    `.license-detector.yml`, starting at start_dir and moving up towards
    the filesystem root.

    Args:
        start_dir: Directory to start from. Defaults to the current
            working directory.
        search_parents: Whether to continue in parent directories.

    Returns:
        Path to the nearest configuration file, or None.
    """
    search_dir = (start_dir or Path.cwd()).resolve()
    directories = [search_dir, *search_dir.parents] if search_parents else [search_dir]
    for directory in directories:
        for name in DEFAULT_CONFIG_NAMES:
            config_path = directory / name
            if config_path.is_file():
                return config_path
    return None


def _read_mapping(path: Path) -> Optional[dict[str, Any]]:
    """Parse a YAML file whose root must be a mapping.

    Returns:
        The mapping, or None when the file holds no document.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration file '{path}': {e}"
        ) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML syntax in '{path}': {e}"
        ) from e

    # empty file, or only comments
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )
    return data


def load_config_file(path: Path) -> DetectorConfig:
    """Load and validate configuration from a YAML file.

    License bodies given as `body_file` are read here, relative to the
    directory of the configuration file, so that the returned
    configuration can be used without further I/O.

    Args:
        path: Path to the configuration file.

    Returns:
        Validated DetectorConfig instance.

    Raises:
        ConfigurationError: If the file cannot be read, is not a YAML
            mapping, fails validation, or names an unreadable body_file.
    """
    data = _read_mapping(path)
    if data is None:
        return get_default_config()

    try:
        config = DetectorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in '{path}': {_format_validation_errors(e)}"
        ) from e
    return _resolve_bodies(config, path.parent)


def _resolve_bodies(config: DetectorConfig, base_dir: Path) -> DetectorConfig:
    if not config.well_known_licenses:
        return config
    entries = [_load_body(entry, base_dir) for entry in config.well_known_licenses]
    return config.model_copy(update={"well_known_licenses": entries})


def _load_body(entry: WellKnownLicenseConfig, base_dir: Path) -> WellKnownLicenseConfig:
    """Replace an entry's body_file with the text it holds."""
    if entry.body_file is None:
        return entry
    body_path = Path(entry.body_file)
    if not body_path.is_absolute():
        body_path = base_dir / body_path
    try:
        body = body_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read license body for '{entry.key}' from '{body_path}': {e}"
        ) from e
    return entry.model_copy(update={"body": body, "body_file": None})


def _format_validation_errors(error: ValidationError) -> str:
    """Join Pydantic errors as `location: message` pairs."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'root'}: {err['msg']}"
        for err in error.errors()
    )


def load_config(
    config_path: str | Path | None = None, start_dir: Path | None = None
) -> DetectorConfig:
    """Load configuration from an explicit file, a discovered one, or defaults.

    Args:
        config_path: Configuration file to use. It must exist and be valid.
        start_dir: Where discovery starts when config_path is not given.
            Defaults to the current working directory.

    Returns:
        DetectorConfig with loaded or default values.

    Raises:
        ConfigurationError: If the chosen configuration file is invalid.
    """
    if config_path is not None:
        return load_config_file(Path(config_path))

    discovered = find_config_file(start_dir)
    if discovered is None:
        return get_default_config()
    return load_config_file(discovered)
