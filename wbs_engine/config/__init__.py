"""
Configuration module for the WBS Classification Engine.

This module contains resolver settings, consolidation rule tables, display
names and the keyword dictionary loader.
"""

from .classification_config import (
    CONFIG_VERSION,
    CLASSIFICATION_CONFIG,
    OVERRIDE_PRIORITY,
    PAIRWISE_RULES,
    LEVEL1_DISPLAY_NAMES,
    LEVEL2_DISPLAY_NAMES,
    CategoryConfigError,
    ClassificationConfig,
    load_classification_config,
    validate_config,
)
from .keyword_loader import load_keyword_csv

__all__ = [
    "CONFIG_VERSION",
    "CLASSIFICATION_CONFIG",
    "OVERRIDE_PRIORITY",
    "PAIRWISE_RULES",
    "LEVEL1_DISPLAY_NAMES",
    "LEVEL2_DISPLAY_NAMES",
    "CategoryConfigError",
    "ClassificationConfig",
    "load_classification_config",
    "validate_config",
    "load_keyword_csv",
]
