"""License type classification.

Two independent classifiers: one from the name of a license file, one
from the text of a license body.
"""

from __future__ import annotations

from license_detector.exceptions import ClassificationError
from license_detector.models.license import LicenseType
from license_detector.patterns import (
    LR_APACHE,
    LR_APACHE_HEADER,
    LR_BSD,
    LR_GPL,
    LR_GPL_HEADER,
    LR_LGPL,
    LR_LGPL_HEADER,
    LR_MIT,
    LR_MPL,
    LR_MPL_HEADER,
    LR_ZLIB,
)

# Names of license files, and the type of license they are known to hold
LICENSE_NAME_TYPES: dict[str, LicenseType] = {
    "Apache": LicenseType.APACHE,
    "apache-license-2.0": LicenseType.APACHE,
    "BSD": LicenseType.BSD,
    "BSD.txt": LicenseType.BSD,
    "LICENSE-LGPL-2": LicenseType.LGPL,
    "LICENSE-LGPL-2.1": LicenseType.LGPL,
    "FTL.TXT": LicenseType.FREETYPE,
    "zlib.h": LicenseType.ZLIB,
    # common file names that don't say what the type is
    "COPYING": LicenseType.UNKNOWN,
    "COPYING.txt": LicenseType.UNKNOWN,
    "COPYING.LIB": LicenseType.UNKNOWN,  # lgpl usually
    "COPYING.RUNTIME": LicenseType.UNKNOWN,  # gcc exception usually
    "LICENSE": LicenseType.UNKNOWN,
    "LICENSE.md": LicenseType.UNKNOWN,
    "license.html": LicenseType.UNKNOWN,
    "LICENSE.txt": LicenseType.UNKNOWN,
    "LICENSE.TXT": LicenseType.UNKNOWN,
    "NOTICE": LicenseType.UNKNOWN,
    "NOTICE.txt": LicenseType.UNKNOWN,
    "Copyright": LicenseType.UNKNOWN,
    "copyright": LicenseType.UNKNOWN,
    # particularly weird file names
    "LICENSE-APPLE": LicenseType.UNKNOWN,
    "extreme.indiana.edu.license.TXT": LicenseType.UNKNOWN,
    "extreme.indiana.edu.license.txt": LicenseType.UNKNOWN,
    "javolution.license.TXT": LicenseType.UNKNOWN,
    "javolution.license.txt": LicenseType.UNKNOWN,
    "libyaml-license.txt": LicenseType.UNKNOWN,
    "license.patch": LicenseType.UNKNOWN,
    "mh-bsd-gcc": LicenseType.UNKNOWN,
    "pivotal.labs.license.txt": LicenseType.UNKNOWN,
}


def convert_license_name_to_type(name: str) -> LicenseType:
    """Determine the license type from the name of a license file or family.

    Args:
        name: File name (e.g. "COPYING") or family name (e.g. "BSD").

    Returns:
        The license type; UNKNOWN for generic names such as "LICENSE".

    Raises:
        ClassificationError: If the name is not a known license name.
    """
    try:
        return LICENSE_NAME_TYPES[name]
    except KeyError:
        raise ClassificationError(f"unknown license type: {name}") from None


def convert_body_to_type(body: str) -> LicenseType:
    """Determine the license type from the text of a license.

    Full license texts are recognized by their title, license headers and
    permissive licenses by a distinctive sentence.

    Args:
        body: Normalized license text.

    Returns:
        The detected license type, or UNKNOWN.
    """
    if body.startswith(LR_APACHE) or LR_APACHE_HEADER in body:
        return LicenseType.APACHE
    if body.startswith(LR_MPL) or LR_MPL_HEADER in body:
        return LicenseType.MPL
    if body.startswith(LR_GPL):
        return LicenseType.GPL
    if body.startswith(LR_LGPL) or LR_LGPL_HEADER.search(body):
        return LicenseType.LGPL
    if LR_GPL_HEADER in body:
        return LicenseType.GPL
    if LR_BSD in body:
        return LicenseType.BSD
    if LR_MIT in body:
        return LicenseType.MIT
    if LR_ZLIB in body:
        return LicenseType.ZLIB
    return LicenseType.UNKNOWN
