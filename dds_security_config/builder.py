"""Top-level assembly of a node's security property policy."""

import enum
import logging
from pathlib import Path

from dds_security_config.constants import (
    ACCESS_PLUGIN,
    ACCESS_PLUGIN_PROPERTY_NAME,
    AUTH_PLUGIN,
    AUTH_PLUGIN_PROPERTY_NAME,
    CRYPTO_PLUGIN,
    CRYPTO_PLUGIN_PROPERTY_NAME,
    FILE_URI_PREFIX,
    GOVERNANCE_PROPERTY_NAME,
    IDENTITY_CA_PROPERTY_NAME,
    IDENTITY_CERTIFICATE_PROPERTY_NAME,
    PERMISSIONS_CA_PROPERTY_NAME,
    PERMISSIONS_PROPERTY_NAME,
    PRIVATE_KEY_PROPERTY_NAME,
)
from dds_security_config.error_state import set_error_message
from dds_security_config.errors import (
    MissingSecurityFile,
    PluginSecuritySupportUnavailable,
    SecurityConfigError,
    SecurityFilesIncomplete,
)
from dds_security_config.files import FileLocator, SecurityFileResolver, SecurityFileSet
from dds_security_config.logging_config import LoggingConfigParser
from dds_security_config.properties import PropertyCollection
from dds_security_config.qos import ProfileResolver
from dds_security_config.settings import SecuritySettings

logger = logging.getLogger(__name__)


class SecurityStatus(enum.Enum):
    """Outcome of a successful configuration pass."""

    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"


class SecurityPolicy:
    """Properties produced by a configuration pass and how they came about."""

    def __init__(self, status: SecurityStatus, properties: PropertyCollection):
        self.status = status
        self.properties = properties

    @property
    def configured(self) -> bool:
        return self.status is SecurityStatus.CONFIGURED

    def __repr__(self) -> str:
        return f"SecurityPolicy({self.status.value}, {len(self.properties)} properties)"


def path_to_uri(file_path: Path | str) -> str:
    return FILE_URI_PREFIX + str(file_path)


def core_properties(security_files: SecurityFileSet) -> PropertyCollection:
    """Build the authentication, crypto and access control properties."""
    return PropertyCollection(
        [
            (AUTH_PLUGIN_PROPERTY_NAME, AUTH_PLUGIN),
            (IDENTITY_CA_PROPERTY_NAME, path_to_uri(security_files.identity_ca_cert)),
            (IDENTITY_CERTIFICATE_PROPERTY_NAME, path_to_uri(security_files.cert)),
            (PRIVATE_KEY_PROPERTY_NAME, path_to_uri(security_files.key)),
            (CRYPTO_PLUGIN_PROPERTY_NAME, CRYPTO_PLUGIN),
            (ACCESS_PLUGIN_PROPERTY_NAME, ACCESS_PLUGIN),
            (
                PERMISSIONS_CA_PROPERTY_NAME,
                path_to_uri(security_files.permissions_ca_cert),
            ),
            (GOVERNANCE_PROPERTY_NAME, path_to_uri(security_files.governance)),
            (PERMISSIONS_PROPERTY_NAME, path_to_uri(security_files.permissions)),
        ]
    )


class SecurityPolicyBuilder:
    """Builds the property policy that enables security for a node.

    Every call is an independent pass over the security root; no state is
    kept between calls, so a failed build may simply be retried.
    """

    def __init__(
        self,
        locator: FileLocator | None = None,
        resolver: ProfileResolver | None = None,
        security_support: bool = True,
    ):
        """Initialize the builder.

        Args:
            locator: Filesystem primitives, defaults to the local filesystem
            resolver: QoS profile lookup used for the logging descriptor
            security_support: Whether the middleware ships security plugins
        """
        self.file_resolver = SecurityFileResolver(locator)
        self.logging_parser = LoggingConfigParser(
            resolver=resolver, security_support=security_support
        )
        self.security_support = security_support

    def _build(self, root: Path | str | None, enforce: bool) -> SecurityPolicy:
        if root is None:
            logger.debug("No security root configured")
            return SecurityPolicy(SecurityStatus.UNCONFIGURED, PropertyCollection())

        if not self.security_support:
            raise PluginSecuritySupportUnavailable()

        logger.info("Looking for security files in '%s'", root)
        try:
            security_files = self.file_resolver.resolve(root)
        except MissingSecurityFile as e:
            if enforce:
                logger.error("Security is enforced but files are missing in '%s'", root)
                raise SecurityFilesIncomplete(root) from e
            logger.warning(
                "Couldn't find all security files in '%s', running without security",
                root,
            )
            return SecurityPolicy(SecurityStatus.UNCONFIGURED, PropertyCollection())

        properties = core_properties(security_files)

        if security_files.logging_descriptor is not None:
            logger.info(
                "Applying security logging configuration '%s'",
                security_files.logging_descriptor,
            )
            properties.merge(
                self.logging_parser.parse_file(security_files.logging_descriptor)
            )

        logger.info("Security configured with %d properties", len(properties))
        return SecurityPolicy(SecurityStatus.CONFIGURED, properties)

    def build_policy(self, root: Path | str | None, enforce: bool) -> SecurityPolicy:
        """Build the security policy for the node using `root`.

        Args:
            root: Security root directory, None if security is not configured
            enforce: Whether missing security files must abort the build

        Returns:
            SecurityPolicy, UNCONFIGURED with no properties when there is
            nothing to configure.

        Raises:
            PluginSecuritySupportUnavailable: If security plugins are missing
            SecurityFilesIncomplete: If enforced and files are missing
            MalformedLoggingDescriptor: If the logging descriptor is malformed
            UnknownQosProfile: If the logging descriptor names an unknown profile
        """
        try:
            return self._build(root, enforce)
        except SecurityConfigError as e:
            set_error_message(str(e))
            raise

    def build(self, root: Path | str | None, enforce: bool) -> PropertyCollection:
        """Build the security properties for the node using `root`."""
        return self.build_policy(root, enforce).properties


def apply_security_options(
    settings: SecuritySettings,
    properties: PropertyCollection,
    builder: SecurityPolicyBuilder | None = None,
) -> SecurityStatus:
    """Merge the security properties described by `settings` into `properties`.

    `properties` is left untouched on failure.
    """
    builder = builder or SecurityPolicyBuilder(
        security_support=settings.security_support
    )
    policy = builder.build_policy(
        settings.security_root_path, settings.enforce_security
    )
    properties.merge(policy.properties)
    return policy.status
