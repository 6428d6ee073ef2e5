"""In-memory license source."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union

from license_detector.models.license import License, LicenseType
from license_detector.resolvers.base import LicenseSource

NameKey = Union[str, Tuple[str, Optional[str]]]


class StaticLicenseSource(LicenseSource):
    """License source answering from fixed tables.

    Args:
        defaults: Licenses covering every file without a license of its own.
        by_type: The license to use for each referenced license type.
        by_name: The license to use for each referenced file name. Keys are
            either a name or a (name, authors) pair; the pair wins when the
            reference names authors.
    """

    def __init__(
        self,
        defaults: Optional[Iterable[License]] = None,
        by_type: Optional[Mapping[LicenseType, License]] = None,
        by_name: Optional[Mapping[NameKey, License]] = None,
    ) -> None:
        self._defaults = list(defaults or [])
        self._by_type = dict(by_type or {})
        self._by_name = dict(by_name or {})

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(defaults={len(self._defaults)}, "
            f"types={sorted(t.value for t in self._by_type)}, "
            f"names={sorted(str(k) for k in self._by_name)})"
        )

    def nearest_licenses_for(self, name: str) -> Sequence[License]:
        return list(self._defaults)

    def nearest_license_of_type(self, license_type: LicenseType) -> Optional[License]:
        return self._by_type.get(license_type)

    def nearest_license_with_name(
        self, name: str, authors: Optional[str] = None
    ) -> Optional[License]:
        if authors is not None and (name, authors) in self._by_name:
            return self._by_name[(name, authors)]
        return self._by_name.get(name)
