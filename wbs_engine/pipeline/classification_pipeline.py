"""
Classification Pipeline for WBS cost elements.

Wires hierarchy resolution, the two keyword mapping passes and level-1
consolidation together, and shapes the level-1 and level-2 exports.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from ..categorisation.engine import KeywordMappingEngine, MatchResult
from ..config.classification_config import ClassificationConfig, load_classification_config
from ..consolidation.consolidator import UNMAPPED, CategoryConsolidator
from ..hierarchy.resolver import HierarchyResolver, Node, nodes_from_records

logger = logging.getLogger(__name__)

LEVEL1_COLUMNS = [
    "group_id", "id", "title", "canonical_name", "matched_keywords", "level1_category",
]
LEVEL2_COLUMNS = [
    "group_id", "id", "title", "canonical_name", "matched_keywords",
    "level2_category_index", "level2_category",
]


@dataclass
class ClassificationResult:
    """Both exports of a classification run plus the raw match results."""
    level1: pd.DataFrame
    level2: pd.DataFrame
    level2_matches: List[MatchResult] = field(default_factory=list)
    level1_matches: List[MatchResult] = field(default_factory=list)
    config_version: str = ""

    @property
    def category_summary(self) -> Dict[str, int]:
        """Item count per consolidated level-1 category."""
        return self.level1["level1_category"].value_counts(sort=False).to_dict()


class ClassificationPipeline:
    """Classifies WBS nodes into level-2 and consolidated level-1 categories."""

    def __init__(self, config: Optional[ClassificationConfig] = None):
        """
        Initialize the pipeline components.

        Args:
            config: Classification configuration (defaults to the built-in one)
        """
        self.config = config or load_classification_config()
        self.resolver = HierarchyResolver(
            max_depth=self.config.max_depth,
            separator=self.config.separator,
        )
        self.engine = KeywordMappingEngine(case_insensitive=self.config.case_insensitive)
        self.consolidator = CategoryConsolidator(
            override_priority=self.config.override_priority,
            pairwise_rules=self.config.pairwise_rules,
            display_names=self.config.level1_display_names,
        )

    def run(self, rows: Union[pd.DataFrame, Iterable[Dict], Iterable[Node]]) -> ClassificationResult:
        """
        Classify every hierarchy row.

        Args:
            rows: DataFrame, dict rows (group_id, id, parent_id, title,
                depth_level) or Node objects

        Returns:
            ClassificationResult with one level-1 row per node and one
            level-2 row per matched level-2 category
        """
        nodes = self._to_nodes(rows)
        canonical_names = self.resolver.canonical_names(nodes)

        level2_matches = self.engine.map_categories(
            canonical_names, self.config.level2_categories
        )
        level1_matches = self.engine.map_categories(
            [match.matched_categories for match in level2_matches],
            self.config.level1_categories,
        )
        level1_labels = self.consolidator.consolidate(
            [match.matched_categories for match in level1_matches]
        )

        level1 = self._build_level1(nodes, canonical_names, level2_matches, level1_labels)
        level2 = self._build_level2(nodes, canonical_names, level2_matches)

        logger.info(
            "Classified %d nodes (config v%s): %d unmapped, %d level-2 rows",
            len(nodes), self.config.version,
            int((level1["level1_category"] == UNMAPPED).sum()), len(level2)
        )
        return ClassificationResult(
            level1=level1,
            level2=level2,
            level2_matches=level2_matches,
            level1_matches=level1_matches,
            config_version=self.config.version,
        )

    def _to_nodes(self, rows) -> List[Node]:
        if isinstance(rows, pd.DataFrame):
            return nodes_from_records(rows)
        rows = list(rows)
        if rows and all(isinstance(row, Node) for row in rows):
            return rows
        return nodes_from_records(rows)

    def _build_level1(
        self,
        nodes: List[Node],
        canonical_names: List[str],
        level2_matches: List[MatchResult],
        level1_labels: List[str]
    ) -> pd.DataFrame:
        records = [
            {
                "group_id": node.group_id,
                "id": node.id,
                "title": node.raw_title or "",
                "canonical_name": name,
                "matched_keywords": match.matched_keywords,
                "level1_category": label,
            }
            for node, name, match, label in zip(nodes, canonical_names, level2_matches, level1_labels)
        ]
        return pd.DataFrame(records, columns=LEVEL1_COLUMNS)

    def _build_level2(
        self,
        nodes: List[Node],
        canonical_names: List[str],
        level2_matches: List[MatchResult]
    ) -> pd.DataFrame:
        display = self.config.level2_display_names
        records = []
        for node, name, match in zip(nodes, canonical_names, level2_matches):
            tokens = match.categories or [UNMAPPED]
            for position, token in enumerate(tokens, start=1):
                records.append({
                    "group_id": node.group_id,
                    "id": node.id,
                    "title": node.raw_title or "",
                    "canonical_name": name,
                    "matched_keywords": match.matched_keywords,
                    "level2_category_index": position,
                    "level2_category": display.get(token, token),
                })
        return pd.DataFrame(records, columns=LEVEL2_COLUMNS)
