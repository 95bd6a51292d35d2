"""
Classification configuration for WBS cost categorization.
Contains resolver settings, consolidation rule tables and display names.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..patterns.cost_patterns import LEVEL1_PATTERNS, LEVEL2_PATTERNS
from .keyword_loader import load_keyword_csv

logger = logging.getLogger(__name__)

# Bump whenever a keyword set, rule or display name changes
CONFIG_VERSION = "2.3.0"

CLASSIFICATION_CONFIG = {
    # Title segments in a canonical name, the node itself included
    "max_depth": 3,
    "separator": " || ",
    # Case-folds corpus and keywords together, never one without the other
    "case_insensitive": True,
}

# Absolute overrides, applied in order. A label containing the token is
# replaced by that token alone, so an earlier override removes the evidence
# later overrides look for: design_and_nre + process_equipment -> design_and_nre.
OVERRIDE_PRIORITY = [
    "design_and_nre",
    "process_equipment",
]

# Pairwise precedence, applied in order as (category_a, category_b, winner).
# Every pair appears in both orientations; only the first orientation can
# fire, the mirror never finds both tokens again.
PAIRWISE_RULES = [
    ("construction", "standard_equipment", "standard_equipment"),
    ("construction", "installation", "installation"),
    ("construction", "automation", "automation"),
    ("construction", "commissioning", "commissioning"),
    ("project_management", "construction", "construction"),
    ("installation", "standard_equipment", "standard_equipment"),
    ("installation", "automation", "automation"),
    ("installation", "commissioning", "commissioning"),
    ("project_management", "installation", "installation"),
    ("automation", "standard_equipment", "standard_equipment"),
    ("commissioning", "automation", "automation"),
    ("project_management", "automation", "automation"),
    ("commissioning", "standard_equipment", "standard_equipment"),
    ("project_management", "commissioning", "commissioning"),
    ("project_management", "standard_equipment", "standard_equipment"),
    ("standard_equipment", "construction", "construction"),
    ("installation", "construction", "construction"),
    ("automation", "construction", "construction"),
    ("commissioning", "construction", "construction"),
    ("construction", "project_management", "project_management"),
    ("standard_equipment", "installation", "installation"),
    ("automation", "installation", "installation"),
    ("commissioning", "installation", "installation"),
    ("installation", "project_management", "project_management"),
    ("standard_equipment", "automation", "automation"),
    ("automation", "commissioning", "commissioning"),
    ("automation", "project_management", "project_management"),
    ("standard_equipment", "commissioning", "commissioning"),
    ("commissioning", "project_management", "project_management"),
    ("standard_equipment", "project_management", "project_management"),
]

LEVEL2_DISPLAY_NAMES = {
    name: info["description"] for name, info in LEVEL2_PATTERNS.items()
}
LEVEL2_DISPLAY_NAMES["Unmapped"] = "Unmapped"

LEVEL1_DISPLAY_NAMES = {
    name: info["description"] for name, info in LEVEL1_PATTERNS.items()
}
LEVEL1_DISPLAY_NAMES["Unmapped"] = "Unmapped"


class CategoryConfigError(ValueError):
    """Raised when the classification configuration is structurally invalid."""
    pass


@dataclass(frozen=True)
class ClassificationConfig:
    """Versioned, validated classification configuration."""
    version: str
    level2_categories: List[Tuple[str, List[str]]]
    level1_categories: List[Tuple[str, List[str]]]
    override_priority: List[str]
    pairwise_rules: List[Tuple[str, str, str]]
    level2_display_names: Dict[str, str] = field(default_factory=dict)
    level1_display_names: Dict[str, str] = field(default_factory=dict)
    max_depth: int = 3
    separator: str = " || "
    case_insensitive: bool = True

    @property
    def level2_names(self) -> List[str]:
        return [name for name, _ in self.level2_categories]

    @property
    def level1_names(self) -> List[str]:
        return [name for name, _ in self.level1_categories]


def _check_disjoint_tokens(names: List[str], layer: str, case_insensitive: bool = True) -> None:
    """Tokens are located by substring search, so none may contain another."""
    for i, name in enumerate(names):
        for j, other in enumerate(names):
            if i == j:
                continue
            if case_insensitive:
                contained = name.lower() in other.lower()
            else:
                contained = name in other
            if contained:
                raise CategoryConfigError(
                    f"{layer} category '{name}' is contained in '{other}'"
                )


def validate_config(config: ClassificationConfig) -> None:
    """
    Validate structural consistency of a classification configuration.

    Args:
        config: Configuration to check

    Raises:
        CategoryConfigError: On the first inconsistency found
    """
    if config.max_depth < 1:
        raise CategoryConfigError(f"max_depth must be at least 1, got {config.max_depth}")

    level2 = config.level2_names
    level1 = config.level1_names
    if len(set(level2)) != len(level2):
        raise CategoryConfigError("Duplicate level-2 category names")
    if len(set(level1)) != len(level1):
        raise CategoryConfigError("Duplicate level-1 category names")
    _check_disjoint_tokens(level2, "Level-2", config.case_insensitive)
    _check_disjoint_tokens(level1, "Level-1", config.case_insensitive)

    known_level2 = set(level2)
    for name, subsumed in config.level1_categories:
        unknown = [item for item in subsumed if item not in known_level2]
        if unknown:
            raise CategoryConfigError(
                f"Level-1 category '{name}' references unknown level-2 categories: {unknown}"
            )

    known_level1 = set(level1)
    for token in config.override_priority:
        if token not in known_level1:
            raise CategoryConfigError(f"Override '{token}' is not a level-1 category")

    for rule in config.pairwise_rules:
        if len(rule) != 3:
            raise CategoryConfigError(f"Pairwise rule must be a triple, got {rule!r}")
        category_a, category_b, winner = rule
        for token in (category_a, category_b):
            if token not in known_level1:
                raise CategoryConfigError(f"Pairwise rule {rule!r} names unknown category '{token}'")
        if winner not in (category_a, category_b):
            raise CategoryConfigError(f"Winner of pairwise rule {rule!r} is not one of its pair")


def load_classification_config(
    keyword_csv: Optional[str] = None,
    **overrides
) -> ClassificationConfig:
    """
    Assemble and validate the classification configuration.

    Args:
        keyword_csv: Optional CSV whose categories replace the built-in
            keyword set of the same name or are appended after them
        **overrides: Replacement values for CLASSIFICATION_CONFIG settings

    Returns:
        Frozen ClassificationConfig

    Raises:
        CategoryConfigError: If the assembled configuration is inconsistent
    """
    unknown = set(overrides) - set(CLASSIFICATION_CONFIG)
    if unknown:
        raise CategoryConfigError(f"Unknown configuration settings: {sorted(unknown)}")
    settings = {**CLASSIFICATION_CONFIG, **overrides}

    level2_display = dict(LEVEL2_DISPLAY_NAMES)
    keyword_sets = {
        name: list(info["keywords"]) for name, info in LEVEL2_PATTERNS.items()
    }
    if keyword_csv:
        for name, keywords in load_keyword_csv(keyword_csv):
            if name not in keyword_sets:
                logger.info("Adding level-2 category '%s' from %s", name, keyword_csv)
            keyword_sets[name] = keywords
            level2_display.setdefault(name, name)
    level2_categories = list(keyword_sets.items())

    config = ClassificationConfig(
        version=CONFIG_VERSION,
        level2_categories=level2_categories,
        level1_categories=[
            (name, list(info["subsumes"])) for name, info in LEVEL1_PATTERNS.items()
        ],
        override_priority=list(OVERRIDE_PRIORITY),
        pairwise_rules=[tuple(rule) for rule in PAIRWISE_RULES],
        level2_display_names=level2_display,
        level1_display_names=dict(LEVEL1_DISPLAY_NAMES),
        max_depth=settings["max_depth"],
        separator=settings["separator"],
        case_insensitive=settings["case_insensitive"],
    )
    validate_config(config)
    logger.debug(
        "Loaded classification config v%s: %d level-2, %d level-1 categories, %d rules",
        config.version, len(level2_categories), len(config.level1_categories),
        len(config.pairwise_rules)
    )
    return config
