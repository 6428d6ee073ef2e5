"""License sources package."""

from license_detector.resolvers.base import LicenseSource
from license_detector.resolvers.static import StaticLicenseSource
from license_detector.resolvers.well_known import (
    BUILTIN_LICENSES,
    WellKnownLicense,
    WellKnownLicenses,
    read_packaged_license,
)

__all__ = [
    "BUILTIN_LICENSES",
    "LicenseSource",
    "StaticLicenseSource",
    "WellKnownLicense",
    "WellKnownLicenses",
    "read_packaged_license",
]
