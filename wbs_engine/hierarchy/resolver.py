"""
Hierarchy Resolver for WBS Classification.

Builds a canonical, searchable name for every node of a work breakdown
structure by concatenating the node's cleaned title with the cleaned titles
of its closest ancestors, most specific first.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union

import pandas as pd

from ..categorisation.preprocess import clean_title, is_missing, normalize_reference

logger = logging.getLogger(__name__)

NodeKey = Tuple[Optional[str], Optional[str]]


@dataclass
class Node:
    """One element of a work breakdown structure."""
    group_id: Optional[str]
    id: Optional[str]
    parent_id: Optional[str] = None
    raw_title: Optional[str] = None
    depth_level: Optional[int] = None

    @property
    def key(self) -> NodeKey:
        return (self.group_id, self.id)

    @property
    def cleaned_title(self) -> str:
        return clean_title(self.raw_title)

    @property
    def is_root_level(self) -> bool:
        return self.depth_level == 1


def _to_depth(value) -> Optional[int]:
    """Coerce a depth value (int, float, numeric text) to int."""
    if is_missing(value):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        logger.warning("Ignoring non-numeric depth level: %r", value)
        return None


def nodes_from_records(records: Union[pd.DataFrame, Iterable[Dict]]) -> List[Node]:
    """
    Build Node objects from hierarchy rows.

    Expected keys: group_id, id, parent_id, title, depth_level.

    Args:
        records: DataFrame or iterable of dict rows

    Returns:
        Nodes in input order
    """
    if isinstance(records, pd.DataFrame):
        records = records.to_dict(orient="records")

    nodes = []
    for row in records:
        title = row.get("title")
        nodes.append(Node(
            group_id=normalize_reference(row.get("group_id")),
            id=normalize_reference(row.get("id")),
            parent_id=normalize_reference(row.get("parent_id")),
            raw_title=None if is_missing(title) else str(title),
            depth_level=_to_depth(row.get("depth_level")),
        ))
    return nodes


class HierarchyResolver:
    """Resolves bounded-depth canonical names for WBS nodes."""

    DEFAULT_MAX_DEPTH = 3
    DEFAULT_SEPARATOR = " || "

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, separator: str = DEFAULT_SEPARATOR):
        """
        Initialize the resolver.

        Args:
            max_depth: Maximum number of title segments, the node itself included
            separator: Text placed between segments
        """
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.max_depth = max_depth
        self.separator = separator

    def resolve_names(self, nodes: Iterable[Node]) -> Dict[NodeKey, str]:
        """
        Compute the canonical name of every node, keyed by (group_id, id).

        Args:
            nodes: Hierarchy nodes, in any order

        Returns:
            Dict of (group_id, id) to canonical name, in input order
        """
        nodes = list(nodes)
        return dict(zip((node.key for node in nodes), self.canonical_names(nodes)))

    def canonical_names(self, nodes: Iterable[Node]) -> List[str]:
        """
        Compute the canonical name of every node, one per input row.

        Depth-1 nodes resolve to their own cleaned title. Every other node
        walks up its parent chain until the reference is empty, the parent is
        unknown or max_depth segments have been collected. Rows sharing a key
        each keep their own title; only parent lookups see the last of them.

        Args:
            nodes: Hierarchy nodes, in any order

        Returns:
            Canonical names in input order
        """
        nodes = list(nodes)
        index = self._build_index(nodes)

        names = []
        for node in nodes:
            # Roots are kept out of the walk
            if node.is_root_level:
                names.append(node.cleaned_title)
            else:
                names.append(self._walk(node, index))
        return names

    def _build_index(self, nodes: Iterable[Node]) -> Dict[NodeKey, Tuple[str, Optional[str]]]:
        index: Dict[NodeKey, Tuple[str, Optional[str]]] = {}
        for node in nodes:
            if node.key in index:
                logger.warning(
                    "Duplicate node %s in group %s, keeping the last occurrence",
                    node.id, node.group_id
                )
            index[node.key] = (node.cleaned_title, node.parent_id)
        return index

    def _walk(self, node: Node, index: Dict[NodeKey, Tuple[str, Optional[str]]]) -> str:
        """
        Collect the node title and up to max_depth - 1 ancestor titles.

        Iterative with an explicit budget, so a parent cycle ends once the
        budget runs out.
        """
        segments = [node.cleaned_title]
        parent_id = node.parent_id
        remaining = self.max_depth - 1

        while remaining > 0 and parent_id is not None:
            entry = index.get((node.group_id, parent_id))
            if entry is None:
                logger.debug(
                    "Parent %s of node %s not found in group %s",
                    parent_id, node.id, node.group_id
                )
                break
            title, parent_id = entry
            segments.append(title)
            remaining -= 1

        return self.separator.join(segments)
