"""
Pipeline Module for the WBS Classification Engine.

Orchestrates hierarchy resolution, keyword mapping and consolidation, and
shapes the level-1 and level-2 exports.
"""

from .classification_pipeline import (
    ClassificationPipeline,
    ClassificationResult,
    LEVEL1_COLUMNS,
    LEVEL2_COLUMNS,
)

__all__ = [
    "ClassificationPipeline",
    "ClassificationResult",
    "LEVEL1_COLUMNS",
    "LEVEL2_COLUMNS",
]
