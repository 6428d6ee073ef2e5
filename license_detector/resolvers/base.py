"""License source interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from license_detector.models.license import License, LicenseType


class LicenseSource(ABC):
    """Abstract base class for the licenses that apply to a directory.

    Detection asks the source of the directory holding a file for the
    licenses the file refers to without quoting them. Implementations
    usually look in the directory itself and then in its parents.
    """

    @abstractmethod
    def nearest_licenses_for(self, name: str) -> Sequence[License]:
        """Return the default licenses for the file called name.

        Args:
            name: The file being examined.

        Returns:
            The licenses covering the file. Empty if there is no default.
        """

    @abstractmethod
    def nearest_license_of_type(self, license_type: LicenseType) -> Optional[License]:
        """Return the nearest license of the given type, or None."""

    @abstractmethod
    def nearest_license_with_name(
        self, name: str, authors: Optional[str] = None
    ) -> Optional[License]:
        """Return the nearest license file called name, or None.

        Args:
            name: License file name, e.g. "LICENSE", or a URL.
            authors: Authors named in the referencing copyright, used to
                pick between several license files with the same name.
        """
