"""
Generic Keyword Matching for WBS Classification.

Provides the vectorized substring search used by the keyword mapping engine.
Matching is literal (no regex, no fuzzy scoring).
"""

import logging
from typing import Iterable, List

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


def dedupe_keywords(keywords: Iterable[str], case_insensitive: bool = True) -> List[str]:
    """
    Remove duplicate and blank keywords, keeping first-occurrence order.

    Args:
        keywords: Keyword strings
        case_insensitive: Fold keywords to lower case before de-duplicating

    Returns:
        Ordered list of unique keywords
    """
    seen = set()
    unique = []
    for keyword in keywords:
        if case_insensitive:
            keyword = keyword.lower()
        if not keyword.strip():
            logger.warning("Dropping blank keyword")
            continue
        if keyword in seen:
            continue
        seen.add(keyword)
        unique.append(keyword)
    return unique


def match_keyword(corpus: pd.Series, keyword: str) -> np.ndarray:
    """
    Detect a literal keyword in every item of the corpus.

    Args:
        corpus: Series of (already case-folded) text
        keyword: Keyword to search for

    Returns:
        Boolean array, True where the keyword occurs as a substring
    """
    hits = corpus.str.contains(keyword, regex=False, na=False)
    return hits.to_numpy(dtype=bool)


def match_keyword_list(corpus: pd.Series, keywords: List[str]) -> np.ndarray:
    """
    Find, per item, the keyword of a category that occurs in it.

    Keywords are tested in order and a later hit overwrites an earlier one,
    so the recorded literal is the last keyword of the list found in the
    item.

    Args:
        corpus: Series of (already case-folded) text
        keywords: De-duplicated keyword list of a single category

    Returns:
        Object array holding the matched keyword per item, or None

    Example:
        >>> match_keyword_list(pd.Series(["apples and grapes"]), ["apple", "grape"])
        array(['grape'], dtype=object)
    """
    matched = np.full(len(corpus), None, dtype=object)
    for keyword in keywords:
        hits = match_keyword(corpus, keyword)
        if hits.any():
            matched[hits] = keyword
    return matched
