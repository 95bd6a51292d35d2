"""
Hierarchy Module for the WBS Classification Engine.

Resolves bounded-depth canonical names from parent/child relationships.
"""

from .resolver import HierarchyResolver, Node, nodes_from_records

__all__ = [
    "HierarchyResolver",
    "Node",
    "nodes_from_records",
]
