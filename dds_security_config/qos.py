"""Named QoS profiles and the properties derived from them."""

import logging
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict, NonNegativeInt

from dds_security_config.constants import DISTRIBUTE_DEPTH_PROPERTY_NAME
from dds_security_config.errors import UnknownQosProfile
from dds_security_config.properties import PropertyCollection

logger = logging.getLogger(__name__)

HistoryPolicy = Literal["system_default", "keep_last", "keep_all"]
ReliabilityPolicy = Literal["system_default", "reliable", "best_effort"]
DurabilityPolicy = Literal["system_default", "transient_local", "volatile"]


class QosProfile(BaseModel):
    """Quality of service settings of a named profile."""

    model_config = ConfigDict(frozen=True)

    history: HistoryPolicy
    depth: NonNegativeInt
    reliability: ReliabilityPolicy
    durability: DurabilityPolicy
    avoid_ros_namespace_conventions: bool = False


SENSOR_DATA = QosProfile(
    history="keep_last", depth=5, reliability="best_effort", durability="volatile"
)
PARAMETERS = QosProfile(
    history="keep_last", depth=1000, reliability="reliable", durability="volatile"
)
DEFAULT = QosProfile(
    history="keep_last", depth=10, reliability="reliable", durability="volatile"
)
SERVICES_DEFAULT = QosProfile(
    history="keep_last", depth=10, reliability="reliable", durability="volatile"
)
PARAMETER_EVENTS = QosProfile(
    history="keep_last", depth=1000, reliability="reliable", durability="volatile"
)
# Depth 0 lets the middleware pick its own default
SYSTEM_DEFAULT = QosProfile(
    history="system_default",
    depth=0,
    reliability="system_default",
    durability="system_default",
)

ProfileCatalog = Mapping[str, QosProfile]

SUPPORTED_PROFILES: ProfileCatalog = {
    "SENSOR_DATA": SENSOR_DATA,
    "PARAMETERS": PARAMETERS,
    "DEFAULT": DEFAULT,
    "SERVICES_DEFAULT": SERVICES_DEFAULT,
    "PARAMETER_EVENTS": PARAMETER_EVENTS,
    "SYSTEM_DEFAULT": SYSTEM_DEFAULT,
}


def derive_properties(profile: QosProfile) -> PropertyCollection:
    """Build the security logging properties implied by a QoS profile.

    Only the history depth is exposed to the logging plugin for now.
    """
    properties = PropertyCollection()
    properties.upsert(DISTRIBUTE_DEPTH_PROPERTY_NAME, str(profile.depth))
    return properties


class ProfileResolver:
    """Looks up QoS profiles by name in a fixed catalog."""

    def __init__(self, catalog: ProfileCatalog = SUPPORTED_PROFILES):
        self.catalog = catalog

    def resolve(self, name: str) -> QosProfile:
        """Return the profile registered under exactly `name`.

        Raises:
            UnknownQosProfile: If the name is not in the catalog
        """
        profile = self.catalog.get(name)
        if profile is None:
            logger.debug("Unknown QoS profile '%s'", name)
            raise UnknownQosProfile(name)
        return profile

    def derive_properties(self, profile: QosProfile) -> PropertyCollection:
        return derive_properties(profile)
