# src/protean/core/__init__.py
"""Core machinery: augmentation, instance configuration, settings, logging."""

from protean.core.config import ProteanSettings, get_settings, load_settings
from protean.core.configurable import (
    Configurable,
    augment,
    configure,
    get_contract,
    is_augmented,
)
from protean.core.logging import configure_logging, get_logger

__all__ = [
    "Configurable",
    "ProteanSettings",
    "augment",
    "configure",
    "configure_logging",
    "get_contract",
    "get_logger",
    "get_settings",
    "is_augmented",
    "load_settings",
]
