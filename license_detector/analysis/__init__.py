"""Text algorithms: normalization, classification, line walking, splitting
and block extraction."""

from license_detector.analysis.blocks import find_license_blocks
from license_detector.analysis.classify import (
    convert_body_to_type,
    convert_license_name_to_type,
)
from license_detector.analysis.lines import (
    LineCursor,
    walk_lines_backwards,
    walk_lines_forwards,
)
from license_detector.analysis.normalize import normalize, strip_decorations
from license_detector.analysis.split import split_license

__all__ = [
    "LineCursor",
    "convert_body_to_type",
    "convert_license_name_to_type",
    "find_license_blocks",
    "normalize",
    "split_license",
    "strip_decorations",
    "walk_lines_backwards",
    "walk_lines_forwards",
]
