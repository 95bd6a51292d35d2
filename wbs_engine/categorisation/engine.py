"""
Keyword Mapping Engine for WBS Classification.
Detects, for every text item, which keyword categories it matches.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple, Union

import pandas as pd

from .pattern_matching import dedupe_keywords, match_keyword_list
from .preprocess import is_missing

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when the corpus or a keyword set is not text data."""
    pass


@dataclass
class KeywordCategory:
    """A named set of keywords."""
    name: str
    keywords: List[str]


@dataclass
class MatchResult:
    """Keyword matches of a single item at one category layer."""
    keywords: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)

    @property
    def matched_keywords(self) -> str:
        """Quoted, space separated keyword literals ("'slab' 'rebar'")."""
        return " ".join(f"'{keyword}'" for keyword in self.keywords)

    @property
    def matched_categories(self) -> str:
        """Space separated category names ("sitework concrete")."""
        return " ".join(self.categories)

    @property
    def is_matched(self) -> bool:
        return bool(self.categories)


CategoryInput = Union[KeywordCategory, Tuple[str, Iterable]]


class KeywordMappingEngine:
    """Maps text items to every keyword category they match."""

    def __init__(self, case_insensitive: bool = True):
        """Initialize the engine.

        Args:
            case_insensitive: Fold both corpus and keywords to lower case
        """
        self.case_insensitive = case_insensitive

    def map_categories(
        self,
        items: Union[Sequence, pd.Series],
        categories: Sequence[CategoryInput]
    ) -> List[MatchResult]:
        """
        Match every item against an ordered list of keyword categories.

        Categories are processed in the given order, so the category tokens
        of each result follow that order. An item matching nothing gets an
        empty MatchResult.

        Args:
            items: Ordered text items (None/NaN are treated as "")
            categories: Ordered KeywordCategory objects or (name, keywords) pairs

        Returns:
            One MatchResult per item, in item order

        Raises:
            InvalidInputError: If an item or keyword set is not text data
        """
        corpus = self._prepare_corpus(items)
        prepared = [self._prepare_category(category) for category in categories]

        results = [MatchResult() for _ in range(len(corpus))]
        for name, keywords in prepared:
            matched = match_keyword_list(corpus, keywords)
            hit_count = 0
            for idx, keyword in enumerate(matched):
                if keyword is None:
                    continue
                results[idx].keywords.append(keyword)
                results[idx].categories.append(name)
                hit_count += 1
            logger.debug("Category %s matched %d/%d items", name, hit_count, len(corpus))

        return results

    def get_category_summary(self, results: Sequence[MatchResult]) -> Dict[str, int]:
        """
        Count matched items per category.

        Args:
            results: Output of map_categories

        Returns:
            Dict of category name to item count, in first-seen order
        """
        summary: Dict[str, int] = {}
        for result in results:
            for name in result.categories:
                summary[name] = summary.get(name, 0) + 1
        return summary

    def _prepare_corpus(self, items: Union[Sequence, pd.Series]) -> pd.Series:
        """Validate the corpus and return it as a case-folded Series."""
        if isinstance(items, (str, bytes)) or not isinstance(items, Iterable):
            raise InvalidInputError(
                f"Items must be a sequence of text values, got {type(items).__name__}"
            )

        values = []
        for idx, item in enumerate(items):
            if is_missing(item):
                values.append("")
            elif isinstance(item, str):
                values.append(item.lower() if self.case_insensitive else item)
            else:
                raise InvalidInputError(
                    f"Item {idx} is not text: {item!r} ({type(item).__name__})"
                )
        return pd.Series(values, dtype=object)

    def _prepare_category(self, category: CategoryInput) -> Tuple[str, List[str]]:
        """Validate a category definition and de-duplicate its keywords."""
        if isinstance(category, KeywordCategory):
            name, keywords = category.name, category.keywords
        else:
            try:
                name, keywords = category
            except (TypeError, ValueError):
                raise InvalidInputError(f"Invalid category definition: {category!r}")

        if not isinstance(name, str) or not name:
            raise InvalidInputError(f"Category name must be non-empty text, got {name!r}")
        if isinstance(keywords, (str, bytes)) or not isinstance(keywords, Iterable):
            raise InvalidInputError(
                f"Keywords of category '{name}' must be a collection of text values"
            )

        keywords = list(keywords)
        for keyword in keywords:
            if not isinstance(keyword, str):
                raise InvalidInputError(
                    f"Category '{name}' has a non-text keyword: {keyword!r}"
                )

        return name, dedupe_keywords(keywords, self.case_insensitive)
