"""
Categorisation Module for the WBS Classification Engine.

Matches canonical WBS names against keyword categories through:
- Preprocessing (title cleaning, whitespace squeezing)
- Pattern matching (vectorized literal substring search)
- Keyword mapping (ordered multi-category accumulation)
"""

from .engine import (
    KeywordMappingEngine,
    KeywordCategory,
    MatchResult,
    InvalidInputError,
)
from .preprocess import (
    clean_title,
    squeeze_whitespace,
    normalize_reference,
    normalize_column_name,
    is_missing,
)
from .pattern_matching import (
    dedupe_keywords,
    match_keyword_list,
)

__all__ = [
    # Main engine
    "KeywordMappingEngine",
    "KeywordCategory",
    "MatchResult",
    "InvalidInputError",
    # Preprocessing utilities
    "clean_title",
    "squeeze_whitespace",
    "normalize_reference",
    "normalize_column_name",
    "is_missing",
    # Pattern matching utilities
    "dedupe_keywords",
    "match_keyword_list",
]
