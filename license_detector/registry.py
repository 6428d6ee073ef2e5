"""Content-addressed store of License instances.

Every License is created through a :class:`LicenseRegistry`, keyed by its
normalized body, so two files carrying the same license text end up
referencing the same instance. Creation validates the body against the
declared type and variant; expansion of a license with a copyright found
elsewhere is dispatched on the variant.
"""

from __future__ import annotations

import threading
from typing import Iterable, Iterator, Optional

from license_detector.analysis.classify import (
    convert_body_to_type,
    convert_license_name_to_type,
)
from license_detector.analysis.normalize import normalize
from license_detector.analysis.split import split_license
from license_detector.exceptions import (
    ClassificationError,
    ExpansionError,
    NormalizationError,
)
from license_detector.log import get_logger
from license_detector.models.license import (
    License,
    LicenseType,
    LicenseVariant,
    variant_for_type,
)
from license_detector.patterns import AUTHORS_PATTERN, LR_APACHE

log = get_logger(__name__)


def _read_authors(body: str) -> Optional[str]:
    matches = AUTHORS_PATTERN.findall(body)
    if not matches:
        return None
    if len(matches) > 1:
        raise ClassificationError("found too many authors for this copyright", excerpt=body)
    return matches[0]


def _check_encoding(body: str) -> None:
    """Reject text that is really UTF-8 bytes decoded as Latin-1."""
    try:
        latin1 = body.encode("latin-1")
    except UnicodeEncodeError:
        return
    if latin1.isascii():
        return
    try:
        latin1.decode("utf-8")
    except UnicodeDecodeError:
        return
    raise ClassificationError(
        "text appears to have been misdecoded as Latin-1 instead of as UTF-8",
        excerpt=body,
    )


class LicenseRegistry:
    """Maps normalized license bodies to their canonical License.

    The registry is injectable: detections that should share licenses
    share a registry. Lookups and insertions are serialized with a lock
    so concurrent detections of the same body converge on one instance.
    """

    def __init__(self) -> None:
        self._licenses: dict[str, License] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._licenses)

    def __contains__(self, body: object) -> bool:
        return body in self._licenses

    def __iter__(self) -> Iterator[License]:
        with self._lock:
            return iter(list(self._licenses.values()))

    def get(self, body: str) -> Optional[License]:
        """Return the license with the given normalized body, if any."""
        return self._licenses.get(body)

    def reset(self) -> None:
        """Forget every license."""
        with self._lock:
            self._licenses.clear()

    def get_or_create(
        self, body: str, license_type: LicenseType, variant: LicenseVariant
    ) -> License:
        """Return the license for body, creating it when it is new.

        Args:
            body: Normalized license text.
            license_type: Declared classification.
            variant: Declared expansion behavior.

        Returns:
            The canonical License for body.

        Raises:
            ClassificationError: If body is already registered with another
                type or variant, or fails validation.
            NormalizationError: If body is not in normalized form.
        """
        with self._lock:
            existing = self._licenses.get(body)
            if existing is not None:
                if existing.type is not license_type or existing.variant is not variant:
                    raise ClassificationError(
                        f"tried to add a {variant.value} {license_type.value} license, "
                        f"but it was a duplicate of a {existing.variant.value} "
                        f"{existing.type.value} license",
                        excerpt=body,
                    )
                return existing
            license = self._create(body, license_type, variant)
            self._licenses[body] = license
        log.debug(
            "Registered %s %s license (%d known)",
            variant.value,
            license_type.value,
            len(self._licenses),
        )
        return license

    def _create(
        self, body: str, license_type: LicenseType, variant: LicenseVariant
    ) -> License:
        if normalize(body) != body:
            raise NormalizationError("license body is not normalized", excerpt=body)
        if variant_for_type(license_type) is not variant:
            raise ClassificationError(
                f"incorrectly created a {variant.value} license for a "
                f"{license_type.value} license",
                excerpt=body,
            )
        if variant is LicenseVariant.TEMPLATE and body.startswith(LR_APACHE):
            raise ClassificationError(
                "the Apache license cannot be used as a template", excerpt=body
            )
        detected = convert_body_to_type(body)
        if detected is not LicenseType.UNKNOWN and detected is not license_type:
            raise ClassificationError(
                f"created a license of type {license_type.value} but it looks like "
                f"{detected.value}",
                excerpt=body,
            )
        _check_encoding(body)
        license = License(
            body=body,
            type=license_type,
            variant=variant,
            authors=_read_authors(body),
        )
        license._registry = self
        return license

    # Factories

    def unique(
        self, body: str, license_type: LicenseType, reformatted: bool = False
    ) -> License:
        if not reformatted:
            body = normalize(body)
        return self.get_or_create(body, license_type, LicenseVariant.UNIQUE)

    def template(
        self, body: str, license_type: LicenseType, reformatted: bool = False
    ) -> License:
        if not reformatted:
            body = normalize(body)
        return self.get_or_create(body, license_type, LicenseVariant.TEMPLATE)

    def message(
        self, body: str, license_type: LicenseType, reformatted: bool = False
    ) -> License:
        if not reformatted:
            body = normalize(body)
        return self.get_or_create(body, license_type, LicenseVariant.MESSAGE)

    def from_body_and_type(
        self, body: str, license_type: LicenseType, reformatted: bool = False
    ) -> License:
        """Create a license whose variant follows from its type."""
        if not reformatted:
            body = normalize(body)
        return self.get_or_create(body, license_type, variant_for_type(license_type))

    def from_body_and_name(self, body: str, name: str) -> License:
        """Create a license read from the license file called name.

        Generic file names (LICENSE, COPYING, ...) fall back to
        classifying the body.
        """
        body = normalize(body)
        license_type = convert_license_name_to_type(name)
        if license_type is LicenseType.UNKNOWN:
            license_type = convert_body_to_type(body)
        return self.from_body_and_type(body, license_type, reformatted=True)

    def from_body(self, body: str) -> License:
        """Create a license classified by its own text."""
        body = normalize(body)
        return self.from_body_and_type(body, convert_body_to_type(body), reformatted=True)

    def from_multiple_blocks(
        self, bodies: Iterable[str], license_type: LicenseType
    ) -> License:
        """Create one unique license out of several separate blocks."""
        body = "\n\n".join(normalize(block) for block in bodies)
        return self.unique(body, license_type, reformatted=True)

    def from_copyright_and_license(
        self, copyright: str, conditions: str, license_type: LicenseType
    ) -> License:
        """Create the template license for copyright followed by conditions."""
        body = normalize(f"{copyright}\n\n{conditions}")
        return self.template(body, license_type, reformatted=True)

    # Template expansion

    def expand(self, license: License, copyright: str) -> list[License]:
        """Combine license with a copyright found outside of it.

        Args:
            license: A license owned by this registry.
            copyright: Normalized copyright statement.

        Returns:
            MESSAGE: a copyright-only unique license, then license itself.
            TEMPLATE: the license's conditions under the new copyright.

        Raises:
            ExpansionError: If license is UNIQUE.
        """
        if license.variant is LicenseVariant.MESSAGE:
            return [self.unique(copyright, LicenseType.UNKNOWN), license]
        if license.variant is LicenseVariant.TEMPLATE:
            license._used_as_template = True
            if license._conditions is None:
                license._conditions = split_license(license.body).conditions
            return [
                self.from_copyright_and_license(
                    copyright, license._conditions, license.type
                )
            ]
        raise ExpansionError(
            f'attempted to expand non-template license with "{copyright}"',
            license=license,
            copyright=copyright,
        )
