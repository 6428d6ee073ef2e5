"""Shared fixtures for license-detector tests."""

import pytest

from license_detector.models.license import License, LicenseType
from license_detector.registry import LicenseRegistry

BSD_TEXT = (
    "Copyright 2015 Example Inc. All rights reserved.\n"
    "\n"
    "Redistribution and use in source and binary forms, with or without\n"
    "modification, are permitted provided that the following conditions are met:\n"
    "\n"
    "1. Redistributions of source code must retain the above copyright notice.\n"
    "\n"
    'THIS SOFTWARE IS PROVIDED "AS IS". IN NO EVENT SHALL THE AUTHORS BE LIABLE\n'
    "FOR ANY DAMAGES, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE."
)

MIT_TEXT = (
    "Copyright 2015 Example Inc.\n"
    "\n"
    "Permission is hereby granted, free of charge, to any person obtaining a copy\n"
    "of this software, subject to the following conditions:\n"
    "\n"
    'THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND.'
)


@pytest.fixture
def registry() -> LicenseRegistry:
    """Provide an empty license registry."""
    return LicenseRegistry()


@pytest.fixture
def bsd_text() -> str:
    """Provide a normalized BSD license with its copyright."""
    return BSD_TEXT


@pytest.fixture
def mit_text() -> str:
    """Provide a normalized MIT license with its copyright."""
    return MIT_TEXT


@pytest.fixture
def bsd_template(registry: LicenseRegistry) -> License:
    """Provide a BSD template license registered in the registry fixture."""
    return registry.template(BSD_TEXT, LicenseType.BSD)


@pytest.fixture
def mit_template(registry: LicenseRegistry) -> License:
    """Provide an MIT template license registered in the registry fixture."""
    return registry.template(MIT_TEXT, LicenseType.MIT)
