"""
WBS Engine - Project Cost Element Classification.

Classifies the free-text titles of a work breakdown structure into
standardized cost categories using keyword dictionaries and a deterministic
precedence rule set.

Main Components:
    - hierarchy: Bounded-depth canonical name resolution
    - categorisation: Keyword mapping engine
    - consolidation: Multi-label to single-category resolution
    - patterns: Level-1 and level-2 cost category definitions
    - config: Rule tables, display names and settings
    - pipeline: End-to-end orchestration and export shaping
"""

from typing import Dict, Iterable, Optional

# Core components
from .hierarchy.resolver import (
    HierarchyResolver,
    Node,
    nodes_from_records,
)

from .categorisation.engine import (
    KeywordMappingEngine,
    KeywordCategory,
    MatchResult,
    InvalidInputError,
)

from .consolidation.consolidator import (
    CategoryConsolidator,
    PrecedenceRule,
    UNMAPPED,
)

from .pipeline.classification_pipeline import (
    ClassificationPipeline,
    ClassificationResult,
)

# Configuration
from .config.classification_config import (
    CONFIG_VERSION,
    CLASSIFICATION_CONFIG,
    OVERRIDE_PRIORITY,
    PAIRWISE_RULES,
    CategoryConfigError,
    ClassificationConfig,
    load_classification_config,
)

from .patterns.cost_patterns import (
    LEVEL1_PATTERNS,
    LEVEL2_PATTERNS,
)


__version__ = "1.0.0"
__all__ = [
    # Hierarchy
    "HierarchyResolver",
    "Node",
    "nodes_from_records",
    # Categorisation
    "KeywordMappingEngine",
    "KeywordCategory",
    "MatchResult",
    "InvalidInputError",
    # Consolidation
    "CategoryConsolidator",
    "PrecedenceRule",
    "UNMAPPED",
    # Pipeline
    "ClassificationPipeline",
    "ClassificationResult",
    # Configuration
    "CONFIG_VERSION",
    "CLASSIFICATION_CONFIG",
    "OVERRIDE_PRIORITY",
    "PAIRWISE_RULES",
    "CategoryConfigError",
    "ClassificationConfig",
    "load_classification_config",
    # Patterns
    "LEVEL1_PATTERNS",
    "LEVEL2_PATTERNS",
    # Main function
    "run_wbs_classification",
]


def run_wbs_classification(
    rows: Iterable[Dict],
    keyword_csv: Optional[str] = None,
) -> Dict:
    """
    Main entry point for WBS classification.

    This function runs the complete pipeline:
    1. Resolve canonical names from the hierarchy
    2. Map level-2 categories against canonical names
    3. Map level-1 categories against the level-2 result
    4. Consolidate level-1 to a single category per node

    Args:
        rows: Hierarchy rows with keys:
            - group_id: Project / tree identifier
            - id: Node identifier, unique within its group
            - parent_id: Parent node id (None for roots)
            - title: Raw node title
            - depth_level: 1 for root-most nodes
        keyword_csv: Optional CSV replacing the built-in level-2 keywords

    Returns:
        Dictionary containing:
            - config_version: Version of the rule set used
            - level1: List of level-1 export records (one per node)
            - level2: List of level-2 export records (one per matched category)
            - category_summary: Node count per level-1 category

    Example:
        >>> rows = [
        ...     {"group_id": "g1", "id": "A", "parent_id": None,
        ...      "title": "Site Prep Area", "depth_level": 1},
        ...     {"group_id": "g1", "id": "B", "parent_id": "A",
        ...      "title": "Concrete Works", "depth_level": 2},
        ... ]
        >>> result = run_wbs_classification(rows)
        >>> result["level1"][1]["level1_category"]
        'Construction'
    """
    config = load_classification_config(keyword_csv=keyword_csv)
    result = ClassificationPipeline(config).run(rows)

    return {
        "config_version": result.config_version,
        "level1": result.level1.to_dict(orient="records"),
        "level2": result.level2.to_dict(orient="records"),
        "category_summary": result.category_summary,
    }
