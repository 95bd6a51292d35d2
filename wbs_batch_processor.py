"""
WBS Batch Processor for classifying exported work breakdown structures.
Reads a hierarchy CSV, runs the classification pipeline and writes the
level-1 and level-2 exports.
"""

import argparse
import io
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd

from wbs_engine.categorisation.engine import InvalidInputError
from wbs_engine.categorisation.preprocess import normalize_column_name
from wbs_engine.config.classification_config import (
    CategoryConfigError,
    ClassificationConfig,
    load_classification_config,
)
from wbs_engine.consolidation.consolidator import UNMAPPED
from wbs_engine.pipeline.classification_pipeline import ClassificationPipeline

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["group_id", "id", "parent_id", "title", "depth_level"]

# Header spellings seen in WBS exports, after normalize_column_name
COLUMN_ALIASES = {
    "groupid": "group_id",
    "project_id": "group_id",
    "node_id": "id",
    "wbs_id": "id",
    "parentid": "parent_id",
    "parent": "parent_id",
    "raw_title": "title",
    "rawtitle": "title",
    "name": "title",
    "depthlevel": "depth_level",
    "depth": "depth_level",
    "level": "depth_level",
}

LEVEL1_EXPORT_NAME = "level1_export.csv"
LEVEL2_EXPORT_NAME = "level2_export.csv"


@dataclass
class BatchStats:
    """Statistics for a classification batch."""
    total_items: int = 0
    mapped_items: int = 0
    unmapped_items: int = 0
    level2_rows: int = 0

    # Timing
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def mapped_rate(self) -> float:
        """Mapped items as percentage."""
        if self.total_items == 0:
            return 0.0
        return (self.mapped_items / self.total_items) * 100

    @property
    def processing_time(self) -> float:
        """Calculate total processing time in seconds."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0.0


@dataclass
class BatchResult:
    """Complete result of a classification batch."""
    stats: BatchStats
    level1: pd.DataFrame
    level2: pd.DataFrame
    category_summary: Dict[str, int] = field(default_factory=dict)
    level2_summary: Dict[str, int] = field(default_factory=dict)
    config_version: str = ""


class WBSBatchProcessor:
    """Batch processor for WBS hierarchy exports."""

    def __init__(self, config: Optional[ClassificationConfig] = None):
        """
        Initialize the batch processor.

        Args:
            config: Classification configuration (defaults to the built-in one)
        """
        self.pipeline = ClassificationPipeline(config)
        logger.info(
            "Initialized batch processor: config v%s, max_depth=%d",
            self.pipeline.config.version, self.pipeline.config.max_depth
        )

    def process_file(self, path: str) -> BatchResult:
        """
        Classify every node of a hierarchy CSV file.

        Args:
            path: Path to the hierarchy CSV

        Returns:
            BatchResult with both exports and statistics
        """
        content = Path(path).read_bytes()
        frame = self._read_csv(content, path)
        return self.process_frame(frame)

    def process_frame(self, frame: pd.DataFrame) -> BatchResult:
        """
        Classify every row of a hierarchy DataFrame.

        Args:
            frame: Hierarchy rows (column names are normalized)

        Returns:
            BatchResult with both exports and statistics
        """
        stats = BatchStats(start_time=datetime.now())

        frame = self._normalize_columns(frame)
        self._validate_columns(frame)

        logger.info("Starting classification of %d WBS nodes", len(frame))
        result = self.pipeline.run(frame)

        stats.total_items = len(result.level1)
        stats.unmapped_items = int((result.level1["level1_category"] == UNMAPPED).sum())
        stats.mapped_items = stats.total_items - stats.unmapped_items
        stats.level2_rows = len(result.level2)
        stats.end_time = datetime.now()

        logger.info(
            "Classification complete: %d/%d mapped (%.1f%%), %d level-2 rows, time: %.1fs",
            stats.mapped_items, stats.total_items, stats.mapped_rate,
            stats.level2_rows, stats.processing_time
        )

        return BatchResult(
            stats=stats,
            level1=result.level1,
            level2=result.level2,
            category_summary=result.category_summary,
            level2_summary=self.pipeline.engine.get_category_summary(result.level2_matches),
            config_version=result.config_version,
        )

    def write_exports(self, result: BatchResult, output_dir: str) -> Tuple[Path, Path]:
        """
        Write the level-1 and level-2 exports as CSV files.

        Args:
            result: Output of process_file / process_frame
            output_dir: Target directory (created if missing)

        Returns:
            Tuple of (level1_path, level2_path)
        """
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)

        level1_path = out / LEVEL1_EXPORT_NAME
        level2_path = out / LEVEL2_EXPORT_NAME
        result.level1.to_csv(level1_path, index=False)
        result.level2.to_csv(level2_path, index=False)

        logger.info("Wrote %d rows to %s", len(result.level1), level1_path)
        logger.info("Wrote %d rows to %s", len(result.level2), level2_path)
        return level1_path, level2_path

    def _read_csv(self, content: bytes, filename: str) -> pd.DataFrame:
        """Parse CSV bytes with fallback encoding handling."""
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError:
            # Fallback to cp1252 for Windows-encoded characters (e.g., byte 0x96)
            try:
                text = content.decode("cp1252")
                logger.warning("%s is not UTF-8, decoded as cp1252", filename)
            except UnicodeDecodeError:
                # Final fallback to latin-1 which accepts all byte values
                text = content.decode("latin-1")
                logger.warning("%s is not UTF-8, decoded as latin-1", filename)

        # Ids stay text so "007" and "7" remain different nodes
        return pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False, na_values=[""])

    def _normalize_columns(self, frame: pd.DataFrame) -> pd.DataFrame:
        renamed = {}
        for column in frame.columns:
            name = normalize_column_name(column)
            renamed[column] = COLUMN_ALIASES.get(name, name)
        return frame.rename(columns=renamed)

    def _validate_columns(self, frame: pd.DataFrame) -> None:
        """Validate hierarchy columns."""
        missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
        if missing:
            raise ValueError(f"Hierarchy data is missing required columns: {missing}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Classify WBS cost elements into level-1 and level-2 categories"
    )
    parser.add_argument("input", help="Hierarchy CSV (group_id, id, parent_id, title, depth_level)")
    parser.add_argument("--output-dir", default="output", help="Directory for the export CSVs")
    parser.add_argument("--keywords", default=None, help="CSV of level-2 keywords (category,keyword)")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    try:
        config = load_classification_config(keyword_csv=args.keywords)
        processor = WBSBatchProcessor(config)
        result = processor.process_file(args.input)
        processor.write_exports(result, args.output_dir)
    except (InvalidInputError, CategoryConfigError, ValueError, OSError) as e:
        logger.error("Classification failed: %s", e)
        return 1

    logger.info("Level-1 categories:")
    for category, count in result.category_summary.items():
        logger.info("  %s: %d", category, count)
    logger.info("Level-2 categories:")
    for category, count in result.level2_summary.items():
        logger.info("  %s: %d", category, count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
