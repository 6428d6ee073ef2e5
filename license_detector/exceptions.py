"""Custom exceptions for license-detector.

Every failure during detection is fatal for the file being examined. Each
exception class belongs to one :class:`ErrorCategory` so that callers can
branch on the kind of failure while keeping the full diagnostic detail.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Optional, Sequence

if TYPE_CHECKING:
    from license_detector.models.license import License
    from license_detector.models.match import LicenseMatch


class ErrorCategory(Enum):
    """Kinds of detection failures."""

    CONFIGURATION = "configuration"
    NORMALIZATION = "normalization"
    CLASSIFICATION = "classification"
    RESOLUTION = "resolution"
    SHAPE = "shape"
    ORCHESTRATION = "orchestration"


class LicenseDetectorError(Exception):
    """Base exception for all license-detector errors.

    Attributes:
        message: Human readable description of the failure.
        filename: File whose detection failed, when known.
        excerpt: The offending piece of text, when there is one.
    """

    category: ClassVar[ErrorCategory] = ErrorCategory.ORCHESTRATION

    def __init__(
        self,
        message: str,
        *,
        filename: Optional[str] = None,
        excerpt: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.filename = filename
        self.excerpt = excerpt

    def __str__(self) -> str:
        text = self.message
        if self.filename is not None:
            text = f"{text} (in {self.filename})"
        if self.excerpt is not None:
            text = f"{text}\n---\n{self.excerpt}\n---"
        return text


class ConfigurationError(LicenseDetectorError):
    """Exception raised when configuration is invalid."""

    category = ErrorCategory.CONFIGURATION


class NormalizationError(LicenseDetectorError):
    """Exception raised when text cannot be normalized (e.g. reformats to nothing)."""

    category = ErrorCategory.NORMALIZATION


class ClassificationError(LicenseDetectorError):
    """Exception raised when a license body and its declared type disagree."""

    category = ErrorCategory.CLASSIFICATION


class ResolutionError(LicenseDetectorError):
    """Exception raised when a referenced license cannot be found."""

    category = ErrorCategory.RESOLUTION


class ShapeError(LicenseDetectorError):
    """Exception raised when a copyright or license block is malformed."""

    category = ErrorCategory.SHAPE


class DetectionError(LicenseDetectorError):
    """Exception raised when the set of matches for a file is inconsistent."""

    category = ErrorCategory.ORCHESTRATION


class OverlapError(DetectionError):
    """Two non-duplicate matches claim the same text.

    Attributes:
        matches: Every match found in the file, in sorted order.
        position: End offset of the earlier match.
        start: Start offset of the later, overlapping match.
    """

    def __init__(
        self,
        message: str,
        *,
        matches: Sequence[LicenseMatch],
        position: int,
        start: int,
        filename: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            filename=filename,
            excerpt="\n".join(match.describe() for match in matches),
        )
        self.matches = list(matches)
        self.position = position
        self.start = start


class UnmatchedTextError(DetectionError):
    """Text between two matches looks like a copyright or license statement."""

    def __init__(
        self,
        message: str,
        *,
        start: int,
        end: int,
        excerpt: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> None:
        super().__init__(message, filename=filename, excerpt=excerpt)
        self.start = start
        self.end = end


class UnexplainedCopyrightError(DetectionError):
    """A file mentions a copyright but no strategy found its license."""


class ExpansionError(DetectionError):
    """A license that cannot be combined with a copyright was asked to be."""

    def __init__(
        self,
        message: str,
        *,
        license: License,
        copyright: str,
        filename: Optional[str] = None,
    ) -> None:
        super().__init__(message, filename=filename, excerpt=copyright)
        self.license = license
        self.copyright = copyright
