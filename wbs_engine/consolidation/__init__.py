"""
Consolidation Module for the WBS Classification Engine.

Collapses multi-category level-1 labels into one category through ordered
absolute overrides and pairwise precedence rules.
"""

from .consolidator import (
    CategoryConsolidator,
    ConsolidationStep,
    PrecedenceRule,
    UNMAPPED,
)

__all__ = [
    "CategoryConsolidator",
    "ConsolidationStep",
    "PrecedenceRule",
    "UNMAPPED",
]
