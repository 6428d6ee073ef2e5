"""License Pydantic model and its enums."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, Field, PrivateAttr

if TYPE_CHECKING:
    from license_detector.registry import LicenseRegistry


class LicenseType(Enum):
    """Fixed classification taxonomy for license bodies."""

    UNKNOWN = "unknown"
    BSD = "bsd"
    GPL = "gpl"
    LGPL = "lgpl"
    MPL = "mpl"
    AFL = "afl"
    MIT = "mit"
    FREETYPE = "freetype"
    APACHE = "apache"
    APACHE_NOTICE = "apache-notice"
    ECLIPSE = "eclipse"
    IJG = "ijg"
    ZLIB = "zlib"


class LicenseVariant(Enum):
    """How a license combines with a copyright discovered elsewhere.

    MESSAGE licenses are shown verbatim next to a separate copyright-only
    license, TEMPLATE licenses are copyright plus boilerplate conditions
    that can be re-used with another copyright, and UNIQUE licenses cannot
    be combined with an external copyright at all.
    """

    MESSAGE = "message"
    TEMPLATE = "template"
    UNIQUE = "unique"


_TEMPLATE_TYPES = frozenset({LicenseType.BSD, LicenseType.MIT, LicenseType.ZLIB})
_UNIQUE_TYPES = frozenset({LicenseType.UNKNOWN, LicenseType.APACHE_NOTICE})


def variant_for_type(license_type: LicenseType) -> LicenseVariant:
    """Return the variant every license of the given type must have.

    Args:
        license_type: The license classification.

    Returns:
        TEMPLATE for bsd/mit/zlib, UNIQUE for unknown/apache-notice and
        MESSAGE for everything else.
    """
    if license_type in _TEMPLATE_TYPES:
        return LicenseVariant.TEMPLATE
    if license_type in _UNIQUE_TYPES:
        return LicenseVariant.UNIQUE
    return LicenseVariant.MESSAGE


class License(BaseModel):
    """A canonical, deduplicated license body.

    Instances are only created through a :class:`LicenseRegistry`, which
    guarantees that identical normalized bodies share one instance. All
    fields are fixed after construction; the list of files referencing the
    license grows through :meth:`mark_used`.
    """

    model_config = {"extra": "forbid", "frozen": True}

    body: str = Field(description="Normalized license text, the identity key")
    type: LicenseType = Field(description="Classification of the license")
    variant: LicenseVariant = Field(description="Template expansion behavior")
    authors: Optional[str] = Field(
        default=None, description="Authors extracted from a 'The X Authors' copyright"
    )

    _licensees: list[str] = PrivateAttr(default_factory=list)
    _used_as_template: bool = PrivateAttr(default=False)
    _conditions: Optional[str] = PrivateAttr(default=None)
    _registry: Any = PrivateAttr(default=None)

    @property
    def licensees(self) -> tuple[str, ...]:
        """Files that were found to be covered by this license."""
        return tuple(self._licensees)

    @property
    def is_used(self) -> bool:
        """True once a file references this license or it served as a template."""
        return bool(self._licensees) or self._used_as_template

    @property
    def registry(self) -> Optional[LicenseRegistry]:
        """The registry that owns this license."""
        return self._registry

    def mark_used(self, filename: str) -> None:
        """Record that filename is covered by this license.

        Repeated calls with the same filename are all recorded.
        """
        self._licensees.append(filename)

    def expand_template(self, copyright: str) -> list[License]:
        """Combine this license with a copyright found in some file.

        Args:
            copyright: Normalized copyright statement.

        Returns:
            The licenses that together express copyright + this license.

        Raises:
            ExpansionError: If this is a UNIQUE license.
        """
        if self._registry is None:
            raise RuntimeError("License is not attached to a LicenseRegistry")
        return self._registry.expand(self, copyright)

    def __str__(self) -> str:
        rule = "=" * 100
        return "\n".join(
            [rule, *self._licensees, "-" * 100, self.body, rule]
        )
