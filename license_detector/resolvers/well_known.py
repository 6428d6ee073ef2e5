"""Static table of licenses cited by URL.

Source files often cite a license by URL instead of quoting it. The
bodies of the licenses this table knows are shipped with the package and
read once, when the table is built, so detection itself does no I/O.
"""

from __future__ import annotations

from importlib.resources import files
from typing import Iterable, Iterator, NamedTuple, Optional

from license_detector.constants import DATA_DIRECTORY, DATA_PACKAGE
from license_detector.exceptions import ConfigurationError, ResolutionError
from license_detector.log import get_logger
from license_detector.models.config import WellKnownLicenseConfig
from license_detector.models.license import License, LicenseType
from license_detector.registry import LicenseRegistry

log = get_logger(__name__)


class WellKnownLicense(NamedTuple):
    type: LicenseType
    body: str


# key (url, or url:version), license type, packaged file
BUILTIN_LICENSES = (
    ("http://www.apache.org/licenses/LICENSE-2.0", LicenseType.APACHE, "apache-license-2.0.txt"),
    ("https://www.apache.org/licenses/LICENSE-2.0", LicenseType.APACHE, "apache-license-2.0.txt"),
    ("http://www.apache.org/licenses/LICENSE-2.0:2.0", LicenseType.APACHE, "apache-license-2.0.txt"),
    ("https://www.apache.org/licenses/LICENSE-2.0:2.0", LicenseType.APACHE, "apache-license-2.0.txt"),
    ("http://opensource.org/licenses/MIT", LicenseType.MIT, "mit.txt"),
    ("https://opensource.org/licenses/MIT", LicenseType.MIT, "mit.txt"),
    ("https://developers.google.com/open-source/licenses/bsd", LicenseType.BSD, "google-bsd.txt"),
    ("http://polymer.github.io/LICENSE.txt", LicenseType.BSD, "polymer-bsd.txt"),
    ("http://www.eclipse.org/legal/epl-v10.html", LicenseType.ECLIPSE, "eclipse-1.0.txt"),
    ("http://mozilla.org/MPL/2.0/:2.0", LicenseType.MPL, "mozilla-2.0.txt"),
    # GNU licenses are cited by the name of their file or title plus a version
    ("COPYING3:3", LicenseType.GPL, "gpl-3.0.txt"),
    ("COPYING.LIB:2", LicenseType.LGPL, "library-gpl-2.0.txt"),
    # "GNU Lesser 2" was never published; it is cited for 2.1
    ("GNU Lesser:2", LicenseType.LGPL, "lesser-gpl-2.1.txt"),
    ("GNU Lesser:2.1", LicenseType.LGPL, "lesser-gpl-2.1.txt"),
    ("COPYING.RUNTIME:3.1", LicenseType.UNKNOWN, "gpl-gcc-exception-3.1.txt"),
    ("GCC Runtime Library Exception:3.1", LicenseType.UNKNOWN, "gpl-gcc-exception-3.1.txt"),
    ("Academic Free License:3.0", LicenseType.AFL, "academic-3.0.txt"),
)


def read_packaged_license(filename: str) -> str:
    """Return the text of a license shipped in the package data directory."""
    resource = files(DATA_PACKAGE) / DATA_DIRECTORY / filename
    return resource.read_text(encoding="utf-8")


def license_key(url: str, version: Optional[str] = None) -> str:
    if version is None:
        return url
    return f"{url}:{version}"


class WellKnownLicenses:
    """The (URL, version) -> (type, body) table.

    Args:
        extra: Additional entries, typically from the configuration file.
            Their bodies must already be loaded. They replace built-in
            entries with the same key.
        include_builtin: Whether to start from the packaged licenses.
    """

    def __init__(
        self,
        extra: Optional[Iterable[WellKnownLicenseConfig]] = None,
        include_builtin: bool = True,
    ) -> None:
        self._table: dict[str, WellKnownLicense] = {}
        if include_builtin:
            cache: dict[str, str] = {}
            for key, license_type, filename in BUILTIN_LICENSES:
                if filename not in cache:
                    cache[filename] = read_packaged_license(filename)
                self._table[key] = WellKnownLicense(license_type, cache[filename])
        for entry in extra or ():
            if entry.body is None:
                raise ConfigurationError(
                    f"well-known license '{entry.key}' has no body; "
                    "load configuration files with load_config_file()"
                )
            if entry.key in self._table:
                log.debug("Overriding well-known license %s", entry.key)
            self._table[entry.key] = WellKnownLicense(entry.type, entry.body)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, key: object) -> bool:
        return key in self._table

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def lookup(self, url: str, version: Optional[str] = None) -> WellKnownLicense:
        """Return the table entry for url (and version).

        Raises:
            ResolutionError: If the pair is not in the table.
        """
        key = license_key(url, version)
        try:
            return self._table[key]
        except KeyError:
            raise ResolutionError(f"unknown url {key}") from None

    def resolve(
        self, registry: LicenseRegistry, url: str, version: Optional[str] = None
    ) -> License:
        """Return the registered license cited by url (and version)."""
        entry = self.lookup(url, version)
        return registry.from_body_and_type(entry.body, entry.type)
