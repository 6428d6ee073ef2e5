"""Configuration Pydantic models for license-detector."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from license_detector.constants import MAX_FILE_SIZE
from license_detector.models.license import LicenseType


class WellKnownLicenseConfig(BaseModel):
    """An extra entry for the static (URL, version) license table.

    Exactly one of body and body_file must be given. The loader reads
    body_file (relative to the configuration file) into body.
    """

    model_config = {"extra": "forbid"}

    url: str = Field(description="URL or name cited by source files")
    version: Optional[str] = Field(
        default=None, description="License version cited next to the URL"
    )
    type: LicenseType = Field(description="Classification of the license body")
    body: Optional[str] = Field(default=None, description="License text")
    body_file: Optional[str] = Field(
        default=None, description="File holding the license text"
    )

    @model_validator(mode="after")
    def _check_body(self) -> WellKnownLicenseConfig:
        if (self.body is None) == (self.body_file is None):
            raise ValueError("exactly one of 'body' or 'body_file' must be set")
        return self

    @property
    def key(self) -> str:
        """Lookup key in the well-known license table."""
        if self.version is None:
            return self.url
        return f"{self.url}:{self.version}"


class DetectorConfig(BaseModel):
    """Configuration for license-detector.

    All fields have defaults so that partial configuration files work.
    """

    model_config = {"extra": "forbid"}

    max_file_size: int = Field(
        default=MAX_FILE_SIZE,
        gt=0,
        description="Only this many characters at the top of each file are examined.",
    )
    well_known_licenses: Optional[List[WellKnownLicenseConfig]] = Field(
        default=None,
        description="Licenses cited by URL in addition to the packaged ones.",
    )
