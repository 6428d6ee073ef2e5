"""Tests for the License model and its enums."""

import pytest
from pydantic import ValidationError

from license_detector.models.license import (
    License,
    LicenseType,
    LicenseVariant,
    variant_for_type,
)
from license_detector.registry import LicenseRegistry


class TestVariantForType:
    """Tests for variant_for_type function."""

    @pytest.mark.parametrize(
        ("license_type", "expected"),
        [
            (LicenseType.BSD, LicenseVariant.TEMPLATE),
            (LicenseType.MIT, LicenseVariant.TEMPLATE),
            (LicenseType.ZLIB, LicenseVariant.TEMPLATE),
            (LicenseType.UNKNOWN, LicenseVariant.UNIQUE),
            (LicenseType.APACHE_NOTICE, LicenseVariant.UNIQUE),
            (LicenseType.APACHE, LicenseVariant.MESSAGE),
            (LicenseType.GPL, LicenseVariant.MESSAGE),
            (LicenseType.LGPL, LicenseVariant.MESSAGE),
            (LicenseType.MPL, LicenseVariant.MESSAGE),
            (LicenseType.AFL, LicenseVariant.MESSAGE),
            (LicenseType.FREETYPE, LicenseVariant.MESSAGE),
            (LicenseType.ECLIPSE, LicenseVariant.MESSAGE),
            (LicenseType.IJG, LicenseVariant.MESSAGE),
        ],
    )
    def test_variant(self, license_type: LicenseType, expected: LicenseVariant) -> None:
        """Test that every type requires one variant."""
        assert variant_for_type(license_type) is expected

    def test_type_values(self) -> None:
        """Test that types are addressable by their string value."""
        assert LicenseType("apache-notice") is LicenseType.APACHE_NOTICE
        assert LicenseType("bsd") is LicenseType.BSD


class TestLicense:
    """Tests for License model."""

    def test_new_license_is_unused(self, registry: LicenseRegistry) -> None:
        """Test that a fresh license has no licensees."""
        license = registry.unique("Thanks to Jane Doe.", LicenseType.UNKNOWN)
        assert license.licensees == ()
        assert license.is_used is False

    def test_mark_used_accumulates(self, registry: LicenseRegistry) -> None:
        """Test that every mark is recorded, repeats included."""
        license = registry.unique("Thanks to Jane Doe.", LicenseType.UNKNOWN)
        license.mark_used("a.c")
        license.mark_used("a.c")
        license.mark_used("b.c")
        assert license.licensees == ("a.c", "a.c", "b.c")
        assert license.is_used is True

    def test_fields_are_frozen(self, registry: LicenseRegistry) -> None:
        """Test that the body cannot change after construction."""
        license = registry.unique("Thanks to Jane Doe.", LicenseType.UNKNOWN)
        with pytest.raises(ValidationError):
            license.body = "Something else."  # type: ignore[misc]

    def test_extra_fields_forbidden(self) -> None:
        """Test that unknown fields are rejected."""
        with pytest.raises(ValidationError):
            License(
                body="x",
                type=LicenseType.UNKNOWN,
                variant=LicenseVariant.UNIQUE,
                origin="somewhere",  # type: ignore[call-arg]
            )

    def test_registry_is_attached(self, registry: LicenseRegistry) -> None:
        """Test that licenses know the registry that created them."""
        license = registry.unique("Thanks to Jane Doe.", LicenseType.UNKNOWN)
        assert license.registry is registry

    def test_expand_without_registry_fails(self) -> None:
        """Test that a detached license cannot be expanded."""
        license = License(body="x", type=LicenseType.UNKNOWN, variant=LicenseVariant.UNIQUE)
        with pytest.raises(RuntimeError, match="not attached"):
            license.expand_template("Copyright 2020 Foo")

    def test_str_lists_licensees_and_body(self, registry: LicenseRegistry) -> None:
        """Test the text dump of a license."""
        license = registry.unique("Thanks to Jane Doe.", LicenseType.UNKNOWN)
        license.mark_used("src/a.c")
        lines = str(license).split("\n")
        assert lines == [
            "=" * 100,
            "src/a.c",
            "-" * 100,
            "Thanks to Jane Doe.",
            "=" * 100,
        ]
