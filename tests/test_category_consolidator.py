"""
Tests for level-1 category consolidation.

Tests cover:
- Normalization of empty labels to "Unmapped"
- Absolute override order (design_and_nre over process_equipment)
- Pairwise rule order (standard_equipment over construction)
- Multi-token incremental resolution and order sensitivity
- Display renaming and idempotence on display names
"""

import unittest

from wbs_engine.config.classification_config import (
    LEVEL1_DISPLAY_NAMES,
    OVERRIDE_PRIORITY,
    PAIRWISE_RULES,
)
from wbs_engine.consolidation.consolidator import (
    UNMAPPED,
    CategoryConsolidator,
    PrecedenceRule,
)


def _default_consolidator():
    return CategoryConsolidator(OVERRIDE_PRIORITY, PAIRWISE_RULES, LEVEL1_DISPLAY_NAMES)


class TestNormalization(unittest.TestCase):
    """Test empty and missing labels."""

    def setUp(self):
        self.consolidator = _default_consolidator()

    def test_empty_label_is_unmapped(self):
        """Test that empty, blank and missing labels become Unmapped."""
        self.assertEqual(
            self.consolidator.consolidate(["", "   ", None]),
            [UNMAPPED, UNMAPPED, UNMAPPED]
        )

    def test_label_is_trimmed(self):
        """Test that surrounding whitespace is removed."""
        self.assertEqual(self.consolidator.consolidate_label("  piping_only  "), "piping_only")


class TestAbsoluteOverrides(unittest.TestCase):
    """Test override precedence."""

    def setUp(self):
        self.consolidator = _default_consolidator()

    def test_design_and_nre_beats_process_equipment(self):
        """Test that the earlier override removes the later override's token."""
        self.assertEqual(
            self.consolidator.consolidate_label("design_and_nre process_equipment"),
            "Design & NRE"
        )
        self.assertEqual(
            self.consolidator.consolidate_label("process_equipment design_and_nre"),
            "Design & NRE"
        )

    def test_override_discards_other_tokens(self):
        """Test that an override wins over every pairwise category."""
        self.assertEqual(
            self.consolidator.consolidate_label(
                "standard_equipment construction process_equipment automation"
            ),
            "Process Equipment"
        )

    def test_reversed_override_order(self):
        """Test that swapping the override order swaps the winner."""
        consolidator = CategoryConsolidator(
            ["process_equipment", "design_and_nre"], [], LEVEL1_DISPLAY_NAMES
        )
        self.assertEqual(
            consolidator.consolidate_label("design_and_nre process_equipment"),
            "Process Equipment"
        )


class TestPairwiseRules(unittest.TestCase):
    """Test pairwise precedence resolution."""

    def setUp(self):
        self.consolidator = _default_consolidator()

    def test_standard_equipment_beats_construction(self):
        """Test that construction->standard_equipment fires first and is not reverted."""
        self.assertEqual(
            self.consolidator.consolidate_label("standard_equipment construction"),
            "Standard Equipment"
        )

    def test_mirror_rule_wins_when_listed_first(self):
        """Test that rule order, not rule content, decides the winner."""
        consolidator = CategoryConsolidator(
            OVERRIDE_PRIORITY, list(reversed(PAIRWISE_RULES)), LEVEL1_DISPLAY_NAMES
        )
        self.assertEqual(
            consolidator.consolidate_label("standard_equipment construction"),
            "Construction"
        )

    def test_three_tokens_resolved_incrementally(self):
        """Test that three categories collapse rule by rule."""
        self.assertEqual(
            self.consolidator.resolve("construction installation project_management"),
            "installation"
        )
        self.assertEqual(
            self.consolidator.resolve("project_management commissioning automation construction"),
            "automation"
        )

    def test_all_pairwise_categories_reduce_to_one(self):
        """Test that every non-override category together yields one token."""
        label = "standard_equipment construction installation automation commissioning project_management"
        self.assertEqual(self.consolidator.resolve(label), "standard_equipment")

    def test_every_pair_resolves_to_single_token(self):
        """Test that all pairs of level-1 categories reduce to one token."""
        names = [name for name in LEVEL1_DISPLAY_NAMES if name != UNMAPPED]
        for first in names:
            for second in names:
                if first == second:
                    continue
                resolved = self.consolidator.resolve(f"{first} {second}")
                self.assertIn(resolved, (first, second))
                self.assertEqual(len(resolved.split()), 1)

    def test_single_token_passthrough(self):
        """Test that a single category maps straight to its display name."""
        for name, display in LEVEL1_DISPLAY_NAMES.items():
            self.assertEqual(self.consolidator.consolidate_label(name), display)

    def test_rule_sequence_is_literal(self):
        """Test a three-token case whose result depends on rule order."""
        rules = [
            PrecedenceRule("a_cat", "b_cat", "b_cat"),
            PrecedenceRule("b_cat", "c_cat", "c_cat"),
            PrecedenceRule("c_cat", "a_cat", "a_cat"),
        ]
        forward = CategoryConsolidator([], rules)
        backward = CategoryConsolidator([], list(reversed(rules)))
        self.assertEqual(forward.resolve("a_cat b_cat c_cat"), "c_cat")
        self.assertEqual(backward.resolve("a_cat b_cat c_cat"), "b_cat")

    def test_pipeline_steps_follow_configuration(self):
        """Test that overrides precede pairwise rules in the step list."""
        steps = self.consolidator.steps
        self.assertEqual(len(steps), len(OVERRIDE_PRIORITY) + len(PAIRWISE_RULES))
        self.assertTrue(steps[0].name.startswith("override:design_and_nre"))
        self.assertTrue(steps[len(OVERRIDE_PRIORITY)].name.startswith("pairwise:"))


class TestRenaming(unittest.TestCase):
    """Test display renaming and idempotence."""

    def setUp(self):
        self.consolidator = _default_consolidator()

    def test_display_names_are_idempotent(self):
        """Test that consolidating a display name is a no-op."""
        for display in LEVEL1_DISPLAY_NAMES.values():
            self.assertEqual(self.consolidator.consolidate_label(display), display)

    def test_unmapped_untouched(self):
        """Test that Unmapped survives every step."""
        self.assertEqual(self.consolidator.consolidate_label(UNMAPPED), UNMAPPED)

    def test_no_display_table(self):
        """Test that without a display table tokens pass through."""
        consolidator = CategoryConsolidator(OVERRIDE_PRIORITY, PAIRWISE_RULES)
        self.assertEqual(consolidator.consolidate_label("construction"), "construction")


if __name__ == "__main__":
    unittest.main()
