"""
Snapshot module - element trees and the geometry resolved against them.

Components:
- models: Element, ElementTreeNode, UIContext and geometry types
- indexer: SnapshotIndex for id / marker id lookups
- spatial: smallest element under a point
- coordinates: model scale to page pixels
- synthetic: placeholder elements for uncovered positions
- description: text rendering of a snapshot for the model
"""

from llm_web_inspector.snapshot.models import (
    NodeType,
    Point,
    Size,
    Rect,
    Element,
    ElementTreeNode,
    UIContext,
)
from llm_web_inspector.snapshot.indexer import SnapshotIndex, tree_to_list
from llm_web_inspector.snapshot.spatial import element_by_position, elements_at_position
from llm_web_inspector.snapshot.coordinates import to_absolute
from llm_web_inspector.snapshot.synthetic import create_position_element, generate_hash_id
from llm_web_inspector.snapshot.description import (
    PageDescription,
    describe_user_page,
    describe_elements,
    describe_size,
    description_of_tree,
    format_number,
)

__all__ = [
    "NodeType",
    "Point",
    "Size",
    "Rect",
    "Element",
    "ElementTreeNode",
    "UIContext",
    "SnapshotIndex",
    "tree_to_list",
    "element_by_position",
    "elements_at_position",
    "to_absolute",
    "create_position_element",
    "generate_hash_id",
    "PageDescription",
    "describe_user_page",
    "describe_elements",
    "describe_size",
    "description_of_tree",
    "format_number",
]
