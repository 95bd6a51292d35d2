"""
Tests for classification configuration loading and validation.

Tests cover:
- The built-in configuration and its rule tables
- Keyword CSV loading and merging into the level-2 layer
- Structural validation errors
"""

import dataclasses
import os
import shutil
import tempfile
import unittest

from wbs_engine.config.classification_config import (
    CONFIG_VERSION,
    OVERRIDE_PRIORITY,
    PAIRWISE_RULES,
    CategoryConfigError,
    load_classification_config,
    validate_config,
)
from wbs_engine.config.keyword_loader import load_keyword_csv


class TestBuiltInConfig(unittest.TestCase):
    """Test the shipped configuration."""

    def setUp(self):
        self.config = load_classification_config()

    def test_defaults(self):
        """Test default settings and version."""
        self.assertEqual(self.config.version, CONFIG_VERSION)
        self.assertEqual(self.config.max_depth, 3)
        self.assertEqual(self.config.separator, " || ")
        self.assertTrue(self.config.case_insensitive)

    def test_rule_tables(self):
        """Test override and pairwise rule tables."""
        self.assertEqual(self.config.override_priority, ["design_and_nre", "process_equipment"])
        self.assertEqual(len(self.config.pairwise_rules), 30)
        self.assertEqual(
            self.config.pairwise_rules[0],
            ("construction", "standard_equipment", "standard_equipment")
        )

    def test_every_pair_in_both_orientations(self):
        """Test that each unordered pair is covered twice."""
        pairs = {}
        for category_a, category_b, _ in PAIRWISE_RULES:
            key = frozenset((category_a, category_b))
            pairs[key] = pairs.get(key, 0) + 1
        self.assertEqual(len(pairs), 15)
        self.assertTrue(all(count == 2 for count in pairs.values()))

    def test_overrides_not_in_pairwise_rules(self):
        """Test that override tokens never appear in pairwise rules."""
        for rule in PAIRWISE_RULES:
            for token in OVERRIDE_PRIORITY:
                self.assertNotIn(token, rule)

    def test_level1_names_cover_display_table(self):
        """Test that every level-1 category has a display name."""
        for name in self.config.level1_names:
            self.assertIn(name, self.config.level1_display_names)
        self.assertEqual(self.config.level1_display_names["Unmapped"], "Unmapped")

    def test_config_is_frozen(self):
        """Test that the assembled config cannot be mutated."""
        with self.assertRaises(dataclasses.FrozenInstanceError):
            self.config.max_depth = 5

    def test_setting_override(self):
        """Test replacing a setting."""
        config = load_classification_config(max_depth=5, separator=" > ")
        self.assertEqual(config.max_depth, 5)
        self.assertEqual(config.separator, " > ")

    def test_unknown_setting(self):
        """Test that unknown settings are rejected."""
        with self.assertRaises(CategoryConfigError):
            load_classification_config(max_dept=5)


class TestValidation(unittest.TestCase):
    """Test structural validation."""

    def setUp(self):
        self.config = load_classification_config()

    def test_builtin_config_valid(self):
        """Test that the shipped configuration validates."""
        validate_config(self.config)

    def test_max_depth_below_one(self):
        with self.assertRaises(CategoryConfigError):
            load_classification_config(max_depth=0)

    def test_overlapping_level1_tokens(self):
        """Test that a token contained in another token is rejected."""
        level1 = self.config.level1_categories + [("construct", ["concrete"])]
        with self.assertRaises(CategoryConfigError):
            validate_config(dataclasses.replace(self.config, level1_categories=level1))

    def test_unknown_level2_reference(self):
        level1 = [("construction", ["concrete", "masonry"])]
        with self.assertRaises(CategoryConfigError):
            validate_config(dataclasses.replace(
                self.config, level1_categories=level1, override_priority=[], pairwise_rules=[]
            ))

    def test_winner_outside_pair(self):
        """Test that a pairwise winner must be one of its pair."""
        rules = [("construction", "installation", "automation")]
        with self.assertRaises(CategoryConfigError):
            validate_config(dataclasses.replace(self.config, pairwise_rules=rules))

    def test_unknown_override(self):
        with self.assertRaises(CategoryConfigError):
            validate_config(dataclasses.replace(self.config, override_priority=["tooling"]))

    def test_duplicate_category(self):
        level2 = self.config.level2_categories + [("concrete", ["grout"])]
        with self.assertRaises(CategoryConfigError):
            validate_config(dataclasses.replace(self.config, level2_categories=level2))

    def test_error_is_value_error(self):
        """Test that CategoryConfigError can be caught as ValueError."""
        self.assertTrue(issubclass(CategoryConfigError, ValueError))


class TestKeywordCsv(unittest.TestCase):
    """Test keyword CSV loading."""

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def _write(self, name, content):
        path = os.path.join(self.tmpdir, name)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        return path

    def test_load_keeps_order(self):
        """Test that categories and keywords keep file order."""
        path = self._write(
            "keywords.csv",
            "category,keyword\nconcrete,grout\npiping,valve\nconcrete,screed\n,orphan\npiping,\n"
        )
        categories = load_keyword_csv(path)
        self.assertEqual(categories, [("concrete", ["grout", "screed"]), ("piping", ["valve"])])

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_keyword_csv(os.path.join(self.tmpdir, "absent.csv"))

    def test_missing_columns(self):
        path = self._write("bad.csv", "name,term\nconcrete,slab\n")
        with self.assertRaises(ValueError):
            load_keyword_csv(path)

    def test_csv_replaces_and_appends(self):
        """Test that CSV categories replace built-ins in place and append new ones."""
        path = self._write("keywords.csv", "category,keyword\nconcrete,grout\nmasonry,brick\n")
        config = load_classification_config(keyword_csv=path)
        names = config.level2_names
        self.assertEqual(names[-1], "masonry")
        self.assertEqual(dict(config.level2_categories)["concrete"], ["grout"])
        self.assertLess(names.index("sitework"), names.index("concrete"))
        self.assertEqual(config.level2_display_names["masonry"], "masonry")
        self.assertEqual(config.level2_display_names["concrete"], "Concrete")

    def test_csv_overlapping_category_rejected(self):
        """Test that a CSV category contained in a built-in name is rejected."""
        path = self._write("keywords.csv", "category,keyword\nsteel,stud\n")
        with self.assertRaises(CategoryConfigError):
            load_classification_config(keyword_csv=path)

    def test_csv_mixed_case_overlap_rejected(self):
        """Test that overlap is checked after case folding."""
        path = self._write("keywords.csv", "category,keyword\nConcrete_Misc,grout\n")
        with self.assertRaises(CategoryConfigError):
            load_classification_config(keyword_csv=path)

    def test_csv_name_equal_after_folding_rejected(self):
        """Test that a name differing only in case from a built-in is rejected."""
        path = self._write("keywords.csv", "category,keyword\nConcrete,grout\n")
        with self.assertRaises(CategoryConfigError):
            load_classification_config(keyword_csv=path)

    def test_mixed_case_allowed_when_case_sensitive(self):
        """Test that case-sensitive matching keeps case-distinct names apart."""
        path = self._write("keywords.csv", "category,keyword\nConcrete_Misc,grout\n")
        config = load_classification_config(keyword_csv=path, case_insensitive=False)
        self.assertEqual(config.level2_names[-1], "Concrete_Misc")


if __name__ == "__main__":
    unittest.main()
