"""
Cost Category Definitions for the WBS Classification Engine.

Contains the keyword sets for:
- Level-2 cost categories (design, equipment, construction trades, installation,
  automation, commissioning, indirects)
- Level-1 cost categories (groups of level-2 categories)
"""

from .cost_patterns import (
    LEVEL2_PATTERNS,
    LEVEL1_PATTERNS,
)

__all__ = [
    "LEVEL2_PATTERNS",
    "LEVEL1_PATTERNS",
]
