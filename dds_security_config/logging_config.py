"""Security logging descriptor parsing.

This module turns a ``security_log`` XML descriptor into the properties that
configure the builtin security logging plugin. Parsing is all-or-nothing: the
properties are only handed back (or merged into a caller's collection) once
the whole descriptor has been read successfully.
"""

import logging
from pathlib import Path
from typing import Protocol
from xml.etree.ElementTree import Element as XmlElement

import defusedxml.ElementTree as DefusedET
from defusedxml.common import DefusedXmlException

from dds_security_config.constants import (
    DEPTH_TAG,
    DISTRIBUTE_DEPTH_PROPERTY_NAME,
    DISTRIBUTE_ENABLE_PROPERTY_NAME,
    DISTRIBUTE_TAG,
    FILE_TAG,
    LOG_FILE_PROPERTY_NAME,
    LOGGING_PLUGIN,
    LOGGING_PLUGIN_PROPERTY_NAME,
    PROFILE_TAG,
    QOS_TAG,
    SECURITY_LOG_ROOT_TAG,
    VERBOSITY_PROPERTY_NAME,
    VERBOSITY_TAG,
)
from dds_security_config.error_state import set_error_message
from dds_security_config.errors import (
    MalformedField,
    MalformedLoggingDescriptor,
    PluginSecuritySupportUnavailable,
    SecurityConfigError,
)
from dds_security_config.properties import PropertyCollection
from dds_security_config.qos import ProfileResolver

logger = logging.getLogger(__name__)


class Element(Protocol):
    """Read-only view of a single descriptor element."""

    def child(self, tag_name: str) -> "Element | None": ...

    def text(self) -> str | None: ...


class DocumentReader(Protocol):
    """Read-only view of a parsed descriptor document."""

    def root_element(self, name: str) -> Element | None: ...


class XmlNode:
    """Element backed by an ElementTree element."""

    def __init__(self, element: XmlElement):
        self._element = element

    def child(self, tag_name: str) -> "XmlNode | None":
        """Return the first child element named `tag_name`."""
        found = self._element.find(tag_name)
        if found is None:
            return None
        return XmlNode(found)

    def text(self) -> str | None:
        """Return the element text, or None if it has no text content."""
        text = self._element.text
        if text is None or not text.strip():
            return None
        return text


class XmlDocumentReader:
    """DocumentReader over an XML document parsed with defusedxml."""

    def __init__(self, root: XmlElement):
        self._root = root

    @classmethod
    def from_string(cls, text: str) -> "XmlDocumentReader":
        """Parse a descriptor from a string.

        Raises:
            MalformedLoggingDescriptor: If the text is not well-formed XML
        """
        try:
            return cls(DefusedET.fromstring(text))
        except (DefusedET.ParseError, DefusedXmlException) as e:
            logger.error("Failed to parse logger xml: %s", e)
            raise MalformedLoggingDescriptor(
                "not well-formed", f"logger xml file is not well-formed: {e}"
            ) from e

    @classmethod
    def from_path(cls, path: Path | str) -> "XmlDocumentReader":
        """Load and parse a descriptor file.

        Raises:
            MalformedLoggingDescriptor: If the file cannot be read or parsed
        """
        try:
            return cls(DefusedET.parse(str(path)).getroot())
        except OSError as e:
            logger.error("Failed to read logger xml file '%s': %s", path, e)
            raise MalformedLoggingDescriptor(
                "unreadable", f"failed to read logger xml file '{path}': {e}"
            ) from e
        except (DefusedET.ParseError, DefusedXmlException) as e:
            logger.error("Failed to parse logger xml file '%s': %s", path, e)
            raise MalformedLoggingDescriptor(
                "not well-formed", f"logger xml file '{path}' is not well-formed: {e}"
            ) from e

    def root_element(self, name: str) -> XmlNode | None:
        if self._root.tag != name:
            return None
        return XmlNode(self._root)


def add_property_from_element(
    properties: PropertyCollection,
    property_name: str,
    element: Element,
    tag_name: str,
) -> None:
    """Copy the text of an optional child element into a property.

    Args:
        properties: Collection to update
        property_name: Name of the property to set
        element: Parent element
        tag_name: Child element to read

    Raises:
        MalformedField: If the child exists but has no text
    """
    tag = element.child(tag_name)
    if tag is None:
        return

    text = tag.text()
    if text is None:
        raise MalformedField(tag_name)

    logger.debug("Setting '%s' to '%s'", property_name, text)
    properties.upsert(property_name, text)


class LoggingConfigParser:
    """Parses security logging descriptors into plugin properties."""

    def __init__(
        self,
        resolver: ProfileResolver | None = None,
        security_support: bool = True,
    ):
        """Initialize the parser.

        Args:
            resolver: QoS profile lookup, defaults to the builtin catalog
            security_support: Whether the middleware ships security plugins
        """
        self.resolver = resolver or ProfileResolver()
        self.security_support = security_support

    def _parse(self, document: DocumentReader) -> PropertyCollection:
        log_element = document.root_element(SECURITY_LOG_ROOT_TAG)
        if log_element is None:
            raise MalformedLoggingDescriptor(
                "missing root element",
                f"logger xml file missing '{SECURITY_LOG_ROOT_TAG}'",
            )

        properties = PropertyCollection()
        properties.upsert(LOGGING_PLUGIN_PROPERTY_NAME, LOGGING_PLUGIN)

        add_property_from_element(
            properties, LOG_FILE_PROPERTY_NAME, log_element, FILE_TAG
        )
        add_property_from_element(
            properties, VERBOSITY_PROPERTY_NAME, log_element, VERBOSITY_TAG
        )
        add_property_from_element(
            properties, DISTRIBUTE_ENABLE_PROPERTY_NAME, log_element, DISTRIBUTE_TAG
        )

        qos_element = log_element.child(QOS_TAG)
        if qos_element is not None:
            # The profile goes first so explicit settings can customize it
            profile_element = qos_element.child(PROFILE_TAG)
            if profile_element is not None:
                profile_name = profile_element.text()
                if profile_name is None:
                    raise MalformedField(PROFILE_TAG)

                profile = self.resolver.resolve(profile_name)
                logger.debug("Applying QoS profile '%s'", profile_name)
                properties.merge(self.resolver.derive_properties(profile))

            add_property_from_element(
                properties, DISTRIBUTE_DEPTH_PROPERTY_NAME, qos_element, DEPTH_TAG
            )

        return properties

    def parse(self, document: DocumentReader) -> PropertyCollection:
        """Parse a logging descriptor.

        Args:
            document: Parsed descriptor

        Returns:
            Fresh PropertyCollection, the logging plugin property first.

        Raises:
            PluginSecuritySupportUnavailable: If security plugins are missing
            MalformedLoggingDescriptor: If the root is missing or a field is empty
            UnknownQosProfile: If the descriptor names an unsupported profile
        """
        try:
            if not self.security_support:
                raise PluginSecuritySupportUnavailable()
            return self._parse(document)
        except SecurityConfigError as e:
            set_error_message(str(e))
            raise

    def parse_file(self, path: Path | str) -> PropertyCollection:
        """Load and parse a logging descriptor file."""
        try:
            if not self.security_support:
                raise PluginSecuritySupportUnavailable()
            document = XmlDocumentReader.from_path(path)
        except SecurityConfigError as e:
            set_error_message(str(e))
            raise
        logger.debug("Parsing security logging configuration '%s'", path)
        return self.parse(document)


def apply_logging_configuration(
    path: Path | str,
    properties: PropertyCollection,
    parser: LoggingConfigParser | None = None,
) -> None:
    """Merge the logging configuration found in `path` into `properties`.

    `properties` is left untouched when the descriptor cannot be applied.
    """
    parser = parser or LoggingConfigParser()
    properties.merge(parser.parse_file(path))
