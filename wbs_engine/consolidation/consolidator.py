"""
Category Consolidator for WBS Classification.

Reduces a multi-label level-1 result to a single category. The reduction is
an ordered pipeline of (predicate, rewrite) steps applied to each label:

    1. normalize   - trim, empty becomes "Unmapped"
    2. overrides   - absolute priority tokens, in configured order
    3. pairwise    - PrecedenceRule sequence, in configured order
    4. rename      - internal tokens to display names

Steps 2 and 3 are order-sensitive: every step sees the label as rewritten by
all the steps before it.
"""

import logging
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence

from ..categorisation.preprocess import is_missing, squeeze_whitespace

logger = logging.getLogger(__name__)

UNMAPPED = "Unmapped"


class PrecedenceRule(NamedTuple):
    """When a label holds both tokens, replace them with the winner."""
    category_a: str
    category_b: str
    winner: str


class ConsolidationStep(NamedTuple):
    """A single (predicate, rewrite) step of the consolidation pipeline."""
    name: str
    predicate: Callable[[str], bool]
    rewrite: Callable[[str], str]


def _override_step(token: str) -> ConsolidationStep:
    return ConsolidationStep(
        name=f"override:{token}",
        predicate=lambda label: token in label,
        rewrite=lambda label: token,
    )


def _pairwise_step(rule: PrecedenceRule) -> ConsolidationStep:
    def rewrite(label: str) -> str:
        label = label.replace(rule.category_a, "").replace(rule.category_b, "")
        return squeeze_whitespace(f"{label} {rule.winner}")

    return ConsolidationStep(
        name=f"pairwise:{rule.category_a}+{rule.category_b}->{rule.winner}",
        predicate=lambda label: rule.category_a in label and rule.category_b in label,
        rewrite=rewrite,
    )


class CategoryConsolidator:
    """Collapses multi-category labels into exactly one category."""

    def __init__(
        self,
        override_priority: Sequence[str],
        pairwise_rules: Sequence[Sequence[str]],
        display_names: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize the consolidator.

        Args:
            override_priority: Absolute override tokens, in application order
            pairwise_rules: (category_a, category_b, winner) triples, in application order
            display_names: Internal token to display name table
        """
        self.override_priority = list(override_priority)
        self.pairwise_rules = [PrecedenceRule(*rule) for rule in pairwise_rules]
        self.display_names = dict(display_names or {})
        self.display_names.setdefault(UNMAPPED, UNMAPPED)

        self.steps: List[ConsolidationStep] = (
            [_override_step(token) for token in self.override_priority]
            + [_pairwise_step(rule) for rule in self.pairwise_rules]
        )

    def consolidate(self, labels: Sequence[Optional[str]]) -> List[str]:
        """
        Consolidate the label of every item.

        Args:
            labels: Space separated level-1 category tokens per item

        Returns:
            One display name per item
        """
        return [self.consolidate_label(label) for label in labels]

    def consolidate_label(self, label: Optional[str]) -> str:
        """Run one label through normalize, overrides, pairwise rules and rename."""
        return self.rename(self.resolve(label))

    def resolve(self, label: Optional[str]) -> str:
        """
        Reduce a label to its internal category token.

        Args:
            label: Space separated category tokens (may be missing)

        Returns:
            The surviving internal token, or "Unmapped"
        """
        current = self.normalize(label)
        if current == UNMAPPED:
            return current
        for step in self.steps:
            if step.predicate(current):
                rewritten = step.rewrite(current)
                logger.debug("%s: '%s' -> '%s'", step.name, current, rewritten)
                current = rewritten
        return current

    @staticmethod
    def normalize(label: Optional[str]) -> str:
        if is_missing(label):
            return UNMAPPED
        return str(label).strip() or UNMAPPED

    def rename(self, label: str) -> str:
        """Map every internal token of a label to its display name."""
        return " ".join(self.display_names.get(token, token) for token in label.split())
