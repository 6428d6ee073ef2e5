"""Tests for the matching strategies."""

import re

import pytest

from license_detector.exceptions import ResolutionError, ShapeError
from license_detector.models.license import License, LicenseType, LicenseVariant
from license_detector.patterns import (
    ATTRIBUTIONS,
    FORWARD_REFERENCES,
    INDENT,
    LICENSES,
    NO_COPYRIGHTS,
    REFERENCES_BY_FILENAME,
    REFERENCES_BY_TYPE,
    REFERENCES_BY_URL,
    UrlReferencePattern,
)
from license_detector.registry import LicenseRegistry
from license_detector.resolvers.static import StaticLicenseSource
from license_detector.resolvers.well_known import WellKnownLicenses
from license_detector.strategies import (
    try_attribution,
    try_forward_reference,
    try_inline,
    try_none,
    try_reference_by_filename,
    try_reference_by_type,
    try_reference_by_url,
)

GENERATED = "// Code generated by protoc-gen-go. DO NOT EDIT.\n\npackage foo\n"

DART_HEADER = (
    "// Copyright (c) 2020, the Example project authors.  Please see the AUTHORS file\n"
    "// for details. All rights reserved. Use of this source code is governed by a\n"
    "// BSD-style license that can be found in the LICENSE file.\n"
)

CHROMIUM_HEADER = (
    "// Copyright 2020 The Chromium Authors. All rights reserved.\n"
    "// Use of this source code is governed by a BSD-style license that can be\n"
    "// found in the LICENSE file.\n"
)

GOOGLE_URL_HEADER = (
    "// Copyright 2020 Google LLC\n"
    "//\n"
    "// Use of this source code is governed by a BSD-style license that can be\n"
    "// found in the LICENSE file or at\n"
    "// https://developers.google.com/open-source/licenses/bsd\n"
)

RUST_HEADER = (
    "// Licensed under the Apache License, Version 2.0 <LICENSE-APACHE or\n"
    "// https://www.apache.org/licenses/LICENSE-2.0> or the MIT license\n"
    "// <LICENSE-MIT or https://opensource.org/licenses/MIT>, at your\n"
    "// option. This file may not be copied, modified, or distributed\n"
    "// except according to those terms.\n"
)

MIT_HEADER = (
    "// Copyright 2020 Foo Corp.\n"
    "//\n"
    "// Permission is hereby granted, free of charge, to any person obtaining a copy\n"
    "// of this software, to deal in the Software without restriction.\n"
    "//\n"
    '// THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND. IN NO EVENT\n'
    "// SHALL THE AUTHORS BE LIABLE FOR ANY CLAIM, ARISING FROM, OUT OF OR IN\n"
    "// CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER\n"
    "// DEALINGS IN THE SOFTWARE.\n"
)


@pytest.fixture
def well_known() -> WellKnownLicenses:
    """Provide the table of packaged licenses."""
    return WellKnownLicenses()


class TestTryNone:
    """Tests for the default license strategy."""

    def test_default_licenses(self, bsd_template: License, mit_template: License) -> None:
        """Test that generated files get every default license."""
        source = StaticLicenseSource(defaults=[bsd_template, mit_template])
        matches = list(try_none(GENERATED, "foo.pb.go", NO_COPYRIGHTS[0], source))
        assert [m.license for m in matches] == [bsd_template, mit_template]
        assert [m.is_duplicate for m in matches] == [False, True]
        assert matches[0].start == 0
        assert matches[0].end == GENERATED.index("\n")
        assert matches[0].debug == "default license"

    def test_no_match(self, bsd_template: License) -> None:
        """Test that ordinary files are left alone."""
        source = StaticLicenseSource(defaults=[bsd_template])
        assert list(try_none("package foo\n", "foo.go", NO_COPYRIGHTS[0], source)) == []

    def test_missing_default(self) -> None:
        """Test that a default license must exist."""
        with pytest.raises(ResolutionError, match="no default license file found"):
            list(try_none(GENERATED, "foo.pb.go", NO_COPYRIGHTS[0], StaticLicenseSource()))


class TestTryAttribution:
    """Tests for the attribution strategy."""

    def test_attribution(self, registry: LicenseRegistry) -> None:
        """Test that a thank-you line becomes a unique license."""
        body = "// Thanks to Jane Doe.\n"
        [match] = try_attribution(body, ATTRIBUTIONS[0], registry)
        assert match.license.body == "Thanks to Jane Doe."
        assert match.license.variant is LicenseVariant.UNIQUE
        assert (match.start, match.end) == (0, 22)
        assert match.debug == "attribution"

    def test_same_person_same_license(self, registry: LicenseRegistry) -> None:
        """Test that repeated attributions share one license."""
        body = "// Thanks to Jane Doe.\n# Many thanks to Jane Doe\n"
        first, second = try_attribution(body, ATTRIBUTIONS[0], registry)
        assert first.license is second.license


class TestTryReferenceByFilename:
    """Tests for the license file reference strategy."""

    def test_inline_copyright_with_authors(
        self, registry: LicenseRegistry, bsd_template: License
    ) -> None:
        """Test a reference carrying its own copyright and authors."""
        source = StaticLicenseSource(
            by_name={("LICENSE", "the Example project authors"): bsd_template}
        )
        [match] = try_reference_by_filename(DART_HEADER, REFERENCES_BY_FILENAME[0], source)
        assert match.license.type is LicenseType.BSD
        assert match.license.body.startswith(
            "Copyright (c) 2020, the Example project authors.\n\nRedistribution"
        )
        assert match.license.authors == "the Example project authors"
        assert (match.start, match.end) == (0, len(DART_HEADER) - 1)

    def test_inline_copyright_missing_template(self) -> None:
        """Test that the referenced file must exist."""
        with pytest.raises(ResolutionError, match="failed to find template LICENSE"):
            list(
                try_reference_by_filename(
                    DART_HEADER, REFERENCES_BY_FILENAME[0], StaticLicenseSource()
                )
            )

    def test_block_copyright(self, registry: LicenseRegistry, bsd_template: License) -> None:
        """Test a reference below a copyright in the same block."""
        source = StaticLicenseSource(by_name={"LICENSE": bsd_template})
        [match] = try_reference_by_filename(CHROMIUM_HEADER, REFERENCES_BY_FILENAME[1], source)
        assert match.license is not bsd_template
        assert match.license.body.startswith(
            "Copyright 2020 The Chromium Authors. All rights reserved.\n\nRedistribution"
        )
        assert match.license.authors == "The Chromium Authors"
        assert match.debug == "expanding template for reference to LICENSE"

    def test_reference_without_copyright(self, bsd_template: License) -> None:
        """Test that a bare reference uses the license file as is."""
        source = StaticLicenseSource(by_name={"LICENSE": bsd_template})
        [match] = try_reference_by_filename(
            "// See LICENSE file.\n", REFERENCES_BY_FILENAME[2], source
        )
        assert match.license is bsd_template
        assert (match.start, match.end) == (0, 20)
        assert match.debug == "reference to LICENSE"

    def test_reference_with_optional_copyright(self, bsd_template: License) -> None:
        """Test that a copyright above a bare reference is applied."""
        source = StaticLicenseSource(by_name={"LICENSE": bsd_template})
        body = "// Copyright 2020 Foo Corp.\n// See LICENSE file.\n"
        [match] = try_reference_by_filename(body, REFERENCES_BY_FILENAME[2], source)
        assert match.license.body.startswith("Copyright 2020 Foo Corp.\n\nRedistribution")
        assert match.start == 0

    def test_missing_license_file(self) -> None:
        """Test that the referenced file must exist."""
        with pytest.raises(ResolutionError, match='failed to find accompanying "LICENSE"'):
            list(
                try_reference_by_filename(
                    CHROMIUM_HEADER, REFERENCES_BY_FILENAME[1], StaticLicenseSource()
                )
            )

    def test_missing_copyright(self, bsd_template: License) -> None:
        """Test that a Chromium-style reference requires a copyright."""
        source = StaticLicenseSource(by_name={"LICENSE": bsd_template})
        body = CHROMIUM_HEADER.split("\n", 1)[1]
        with pytest.raises(ShapeError, match="could not find copyright"):
            list(try_reference_by_filename(body, REFERENCES_BY_FILENAME[1], source))


class TestTryReferenceByType:
    """Tests for the license type reference strategy."""

    BODY = "// Copyright 2020 Foo Corp.\n// Licensed under the BSD license.\n"

    def test_reference_by_type(self, bsd_template: License) -> None:
        """Test that the nearest license of the type is expanded."""
        source = StaticLicenseSource(by_type={LicenseType.BSD: bsd_template})
        [match] = try_reference_by_type(self.BODY, REFERENCES_BY_TYPE[0], source)
        assert match.license.type is LicenseType.BSD
        assert match.license.body.startswith("Copyright 2020 Foo Corp.\n\n")
        assert match.debug == "expanding template for reference by type"

    def test_missing_license(self) -> None:
        """Test that a license of the type must exist."""
        with pytest.raises(ResolutionError, match="accompanying bsd license"):
            list(try_reference_by_type(self.BODY, REFERENCES_BY_TYPE[0], StaticLicenseSource()))


class TestTryReferenceByUrl:
    """Tests for the URL reference strategy."""

    def test_google_bsd(
        self, registry: LicenseRegistry, well_known: WellKnownLicenses
    ) -> None:
        """Test that a cited URL resolves to the packaged license."""
        [match] = try_reference_by_url(
            GOOGLE_URL_HEADER, REFERENCES_BY_URL[0], StaticLicenseSource(), registry, well_known
        )
        assert match.license.type is LicenseType.BSD
        assert match.license.body.startswith("Copyright 2008 Google Inc.")
        assert match.start == 0
        assert match.debug == "reference to https://developers.google.com/open-source/licenses/bsd"

    def test_dual_license(
        self, registry: LicenseRegistry, well_known: WellKnownLicenses
    ) -> None:
        """Test that the second license of a dual license is a duplicate."""
        apache, mit = try_reference_by_url(
            RUST_HEADER, REFERENCES_BY_URL[2], StaticLicenseSource(), registry, well_known
        )
        assert apache.license.type is LicenseType.APACHE
        assert mit.license.type is LicenseType.MIT
        assert (apache.is_duplicate, mit.is_duplicate) == (False, True)
        assert (apache.start, apache.end) == (mit.start, mit.end) == (0, len(RUST_HEADER) - 1)

    def test_local_copy_first(
        self,
        registry: LicenseRegistry,
        well_known: WellKnownLicenses,
        mit_template: License,
    ) -> None:
        """Test that a local copy of a cited license wins."""
        source = StaticLicenseSource(by_name={"https://opensource.org/licenses/MIT": mit_template})
        _, mit = try_reference_by_url(
            RUST_HEADER, REFERENCES_BY_URL[2], source, registry, well_known
        )
        assert mit.license is mit_template

    def test_unknown_url(self, registry: LicenseRegistry) -> None:
        """Test that the cited URL must be in the table."""
        with pytest.raises(ResolutionError, match="unknown url"):
            list(
                try_reference_by_url(
                    GOOGLE_URL_HEADER,
                    REFERENCES_BY_URL[0],
                    StaticLicenseSource(),
                    registry,
                    WellKnownLicenses(include_builtin=False),
                )
            )

    def test_missing_alternative_url(
        self, registry: LicenseRegistry, well_known: WellKnownLicenses
    ) -> None:
        """Test that a cited group that did not match is an error."""
        reference = UrlReferencePattern(
            re.compile(
                INDENT + r"See (?P<url>https://\S+)(?: or (?P<alternative>https://\S+))?",
                re.MULTILINE,
            ),
            license_groups=("url", "alternative"),
        )
        matches = try_reference_by_url(
            "// See https://opensource.org/licenses/MIT\n",
            reference,
            StaticLicenseSource(),
            registry,
            well_known,
        )
        first = next(matches)
        assert first.license.type is LicenseType.MIT
        with pytest.raises(ResolutionError, match="no alternative URL"):
            next(matches)


class TestTryInline:
    """Tests for the inline license strategy."""

    def test_mit(self, registry: LicenseRegistry) -> None:
        """Test that a quoted license is classified by its text."""
        [match] = try_inline(MIT_HEADER, LICENSES[1], registry, needs_copyright=True)
        assert match.license.type is LicenseType.MIT
        assert match.license.variant is LicenseVariant.TEMPLATE
        assert match.license.body.startswith("Copyright 2020 Foo Corp.\n\nPermission")
        assert match.license.body.endswith("OTHER\nDEALINGS IN THE SOFTWARE.")
        assert (match.start, match.end) == (0, len(MIT_HEADER) - 1)
        assert match.debug == "inline license"

    def test_missing_copyright(self, registry: LicenseRegistry) -> None:
        """Test that a quoted license must carry a copyright."""
        body = MIT_HEADER.split("\n", 2)[2]
        with pytest.raises(ShapeError, match="could not find copyright"):
            list(try_inline(body, LICENSES[1], registry, needs_copyright=True))


class TestTryForwardReference:
    """Tests for the forward reference strategy."""

    def test_same_license_as_above(self, bsd_template: License) -> None:
        """Test that the license above is applied to the new copyright."""
        body = (
            "// Copyright 2021 Bar Corp.\n"
            "// Licensed under the same BSD license as above.\n"
        )
        [match] = try_forward_reference(body, FORWARD_REFERENCES[0], bsd_template)
        assert match.license.body.startswith("Copyright 2021 Bar Corp.\n\nRedistribution")
        assert match.debug == "expanding template for forward reference"

    def test_unexpected_license(self, bsd_template: License) -> None:
        """Test that the license above must be the one named."""
        body = (
            "// Copyright 2021 Bar Corp.\n"
            "// Licensed under the same MIT license as above.\n"
        )
        with pytest.raises(ResolutionError, match="unexpected license"):
            list(try_forward_reference(body, FORWARD_REFERENCES[1], bsd_template))
