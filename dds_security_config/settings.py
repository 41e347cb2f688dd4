"""Settings for a security configuration pass."""

from pathlib import Path
from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
)

OutputFormat = Literal["json", "yaml"]


class SecuritySettings(BaseModel):
    """Security settings loaded from YAML, environment and CLI arguments.

    Settings are immutable per configuration pass.
    """

    model_config = ConfigDict(frozen=True)

    # None means security is not configured for the node
    security_root_path: Path | None
    enforce_security: bool

    # Optional settings with defaults
    security_support: bool = True
    output_format: OutputFormat = "json"
