"""Detect the copyrights and licenses that apply to source files."""

from license_detector.detector import LicenseDetector, determine_licenses_for
from license_detector.exceptions import LicenseDetectorError
from license_detector.models.license import License, LicenseType, LicenseVariant
from license_detector.registry import LicenseRegistry
from license_detector.resolvers.base import LicenseSource

__version__ = "0.1.0"

__all__ = [
    "License",
    "LicenseDetector",
    "LicenseDetectorError",
    "LicenseRegistry",
    "LicenseSource",
    "LicenseType",
    "LicenseVariant",
    "__version__",
    "determine_licenses_for",
]
