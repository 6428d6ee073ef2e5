"""Pydantic data models and match results for license-detector."""

from license_detector.models.config import DetectorConfig, WellKnownLicenseConfig
from license_detector.models.license import (
    License,
    LicenseType,
    LicenseVariant,
    variant_for_type,
)
from license_detector.models.match import (
    LicenseMatch,
    LineRange,
    PartialLicenseMatch,
    SplitLicense,
)

__all__ = [
    "DetectorConfig",
    "License",
    "LicenseMatch",
    "LicenseType",
    "LicenseVariant",
    "LineRange",
    "PartialLicenseMatch",
    "SplitLicense",
    "WellKnownLicenseConfig",
    "variant_for_type",
]
