"""
Protean: declared property contracts for configurable Python types.

A type lists its properties (required ones prefixed with "!"), derived types
inherit and extend that list, and instances validate and copy their
properties from a configuration spec at construction time.
"""

from protean.contracts import (
    REQUIRED_MARKER,
    MissingRequiredPropertyError,
    PropertyContract,
    build_contract,
)
from protean.core.configurable import Configurable, augment, configure, get_contract, is_augmented

__version__ = "0.1.0"

__all__ = [
    "REQUIRED_MARKER",
    "Configurable",
    "MissingRequiredPropertyError",
    "PropertyContract",
    "__version__",
    "augment",
    "build_contract",
    "configure",
    "get_contract",
    "is_augmented",
]
