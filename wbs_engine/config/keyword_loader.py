"""
Keyword dictionary loader.
Loads CSV files containing level-2 category keyword sets.
"""

import csv
from typing import List, Tuple
from pathlib import Path


def load_keyword_csv(csv_path: str) -> List[Tuple[str, List[str]]]:
    """
    Load keyword categories from a CSV file.

    Categories keep the order in which they first appear in the file;
    keywords keep file order within their category.

    Args:
        csv_path: Path to CSV file containing keyword rows

    Returns:
        Ordered list of (category_name, keywords) tuples

    Example CSV format:
        category,keyword
        concrete,slab
        concrete,rebar
        piping,valve
    """
    csv_file = Path(csv_path)
    if not csv_file.exists():
        raise FileNotFoundError(f"Keyword file not found: {csv_path}")

    categories = {}

    with open(csv_file, 'r', encoding='utf-8', newline='') as f:
        reader = csv.DictReader(f)
        missing = {'category', 'keyword'} - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"Keyword file {csv_path} is missing columns: {sorted(missing)}")

        for row in reader:
            category = (row.get('category') or '').strip()
            keyword = (row.get('keyword') or '').strip()
            if category and keyword:
                categories.setdefault(category, []).append(keyword)

    return list(categories.items())
