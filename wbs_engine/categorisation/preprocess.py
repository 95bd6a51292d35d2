"""
Preprocessing utilities for WBS classification.
Handles title cleaning, whitespace squeezing and reference normalization.
"""

import re
from typing import Any, Optional

import pandas as pd


_NON_ALNUM_RE = re.compile(r"[\W_]+")
_WHITESPACE_RE = re.compile(r"\s+")


def is_missing(value: Any) -> bool:
    """Return True for None and pandas/numpy missing scalars (NaN, NA, NaT)."""
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # Array-likes are never treated as a single missing value
        return False


def squeeze_whitespace(text: Optional[str]) -> str:
    """
    Collapse internal whitespace runs to a single space and trim the ends.

    Args:
        text: Text to squeeze

    Returns:
        Squeezed text, "" for missing input
    """
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def clean_title(raw_title: Optional[str]) -> str:
    """
    Clean a raw WBS title for keyword matching.

    Lower-cases the title, collapses every run of non-alphanumeric
    characters to a single space and trims the result.

    Args:
        raw_title: Original title text (may be missing)

    Returns:
        Cleaned title, "" for a missing title

    Example:
        >>> clean_title("Site-Prep  (Area #2)")
        'site prep area 2'
    """
    if is_missing(raw_title):
        return ""
    text = str(raw_title).lower()
    return _NON_ALNUM_RE.sub(" ", text).strip()


def normalize_reference(value: Any) -> Optional[str]:
    """
    Normalize a node/group/parent reference to a comparable string.

    CSV and database sources often deliver integer ids as floats once a
    column contains missing values (12 -> 12.0), so integral floats are
    rendered without the decimal part.

    Args:
        value: Raw reference value

    Returns:
        Reference string, or None when the reference is empty
    """
    if is_missing(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = str(value).strip()
    return text or None


def normalize_column_name(name: Any) -> str:
    """Normalize a column header to snake_case ("Parent ID" -> "parent_id")."""
    return _NON_ALNUM_RE.sub("_", str(name).strip().lower()).strip("_")
