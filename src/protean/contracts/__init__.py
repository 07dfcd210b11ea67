"""Contract types shared by the configurable machinery.

This package is a LEAF MODULE with no outbound dependencies to protean.core.
Settings are NOT re-exported here - import them from protean.core.config.

Import patterns:
    from protean.contracts import PropertyContract, build_contract
    from protean.core.config import ProteanSettings
"""

from protean.contracts.errors import MissingRequiredPropertyError
from protean.contracts.properties import (
    EMPTY_CONTRACT,
    REQUIRED_MARKER,
    PropertyContract,
    RawDeclaration,
    build_contract,
)

__all__ = [
    "EMPTY_CONTRACT",
    "REQUIRED_MARKER",
    "MissingRequiredPropertyError",
    "PropertyContract",
    "RawDeclaration",
    "build_contract",
]
