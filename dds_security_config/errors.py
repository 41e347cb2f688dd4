"""Errors raised while building a security property policy."""

from pathlib import Path


class SecurityConfigError(Exception):
    """Base exception for security configuration failures."""


class MissingSecurityFile(SecurityConfigError):
    """Exception raised when a mandatory security file cannot be read."""

    def __init__(self, root: Path | str, message: str | None = None):
        self.root = Path(root)
        super().__init__(
            message or f"couldn't find all security files in '{self.root}'"
        )


class SecurityFilesIncomplete(MissingSecurityFile):
    """Exception raised when security is enforced but files are missing."""

    def __init__(self, root: Path | str):
        super().__init__(root, "couldn't find all security files!")


class UnknownQosProfile(SecurityConfigError):
    """Exception raised when a QoS profile name is not in the catalog."""

    def __init__(self, profile_name: str):
        self.profile_name = profile_name
        super().__init__(
            "failed to set security logging profile: "
            f"{profile_name} is not a supported profile"
        )


class MalformedLoggingDescriptor(SecurityConfigError):
    """Exception raised when the logging descriptor cannot be interpreted."""

    def __init__(self, reason: str, message: str | None = None):
        self.reason = reason
        super().__init__(message or f"logger xml file {reason}")


class MalformedField(MalformedLoggingDescriptor):
    """Exception raised when a descriptor element has no text content."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            "improper format",
            f"failed to set security logging {field_name}: improper format",
        )


class PluginSecuritySupportUnavailable(SecurityConfigError):
    """Exception raised when the middleware lacks security plugin support."""

    def __init__(self):
        super().__init__(
            "This middleware build doesn't have the security libraries\n"
            "Please install a build with security plugin support enabled"
        )
