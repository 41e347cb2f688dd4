"""Discovery of security artifact files in a security root directory.

This module provides the FileLocator filesystem primitives and the
SecurityFileResolver which locates the fixed set of credential and policy
files a node needs, enforcing which of them are mandatory.
"""

import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from dds_security_config.constants import (
    CERT_FILE_NAME,
    GOVERNANCE_FILE_NAME,
    IDENTITY_CA_CERT_FILE_NAME,
    KEY_FILE_NAME,
    LOGGING_FILE_NAME,
    PERMISSIONS_CA_CERT_FILE_NAME,
    PERMISSIONS_FILE_NAME,
)
from dds_security_config.errors import MissingSecurityFile

logger = logging.getLogger(__name__)


class FileLocator:
    """Filesystem primitives used to probe for security files."""

    def join(self, base: Path | str, name: str) -> Path:
        return Path(base) / name

    def is_readable(self, path: Path) -> bool:
        """Check that `path` is a regular file the process can read."""
        return path.is_file() and os.access(path, os.R_OK)


class SecurityFileSet(BaseModel):
    """Resolved paths of the security files found in a security root."""

    model_config = ConfigDict(frozen=True)

    identity_ca_cert: Path
    permissions_ca_cert: Path
    governance: Path
    cert: Path
    key: Path
    permissions: Path
    logging_descriptor: Path | None = None


# Role name -> file name, in probing order
MANDATORY_FILES: dict[str, str] = {
    "identity_ca_cert": IDENTITY_CA_CERT_FILE_NAME,
    "permissions_ca_cert": PERMISSIONS_CA_CERT_FILE_NAME,
    "governance": GOVERNANCE_FILE_NAME,
    "cert": CERT_FILE_NAME,
    "key": KEY_FILE_NAME,
    "permissions": PERMISSIONS_FILE_NAME,
}
OPTIONAL_FILES: dict[str, str] = {
    "logging_descriptor": LOGGING_FILE_NAME,
}


class SecurityFileResolver:
    """Locates the expected security files in a security root directory."""

    def __init__(self, locator: FileLocator | None = None):
        """Initialize the resolver.

        Args:
            locator: Filesystem primitives, defaults to the local filesystem
        """
        self.locator = locator or FileLocator()

    def _find(self, root: Path | str, file_name: str) -> Path | None:
        file_path = self.locator.join(root, file_name)
        if self.locator.is_readable(file_path):
            logger.debug("Found security file '%s'", file_path)
            # Plugins need absolute file URIs
            return file_path.absolute()
        logger.debug("Security file '%s' is missing or unreadable", file_path)
        return None

    def resolve(self, root: Path | str) -> SecurityFileSet:
        """Resolve all security files in `root`.

        Relative roots are resolved against the current working directory.

        Args:
            root: Security root directory

        Returns:
            SecurityFileSet with every mandatory path set as an absolute path;
            the logging path is set only when the logging descriptor is present.

        Raises:
            MissingSecurityFile: If any mandatory file is missing or unreadable
        """
        found: dict[str, Path] = {}
        for role, file_name in MANDATORY_FILES.items():
            file_path = self._find(root, file_name)
            if file_path is None:
                raise MissingSecurityFile(root)
            found[role] = file_path

        # Missing the logging configuration file is non-fatal
        for role, file_name in OPTIONAL_FILES.items():
            file_path = self._find(root, file_name)
            if file_path is not None:
                found[role] = file_path

        return SecurityFileSet(**found)
