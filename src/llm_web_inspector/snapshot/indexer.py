"""
SnapshotIndex - O(1) element lookups for one snapshot.

The tree is walked once; afterwards elements are found by id or by their
numeric marker id without scanning. The only mutation allowed afterwards is
registering synthetic POSITION elements.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from llm_web_inspector.snapshot.models import Element, ElementTreeNode, Point
from llm_web_inspector.snapshot.spatial import iter_elements
from llm_web_inspector.snapshot.synthetic import create_position_element

logger = logging.getLogger(__name__)


def tree_to_list(tree: ElementTreeNode) -> List[Element]:
    """Flatten the tree into its elements, depth-first pre-order."""
    return list(iter_elements(tree))


@dataclass
class SnapshotIndex:
    """
    Lookup structures for a single snapshot.

    Usage:
        index = SnapshotIndex.build(context.tree)
        element = index.element_by_id("a1b2c3d4")
        element = index.element_by_id("12")  # marker id alias
        element = index.insert_element_by_position(Point(240, 96))
    """

    tree: ElementTreeNode
    by_id: Dict[str, Element] = field(default_factory=dict)
    elements: List[Element] = field(default_factory=list)

    @classmethod
    def build(cls, tree: ElementTreeNode) -> "SnapshotIndex":
        """
        Index every element of a tree.

        A tree without elements gives an empty index.
        """
        index = cls(tree=tree)
        for element in tree_to_list(tree):
            index._register(element)
        logger.debug(f"Indexed {len(index.elements)} elements ({len(index.by_id)} keys)")
        return index

    def _register(self, element: Element) -> None:
        self.elements.append(element)
        self.by_id[element.id] = element
        if element.index_id is not None:
            self.by_id[str(element.index_id)] = element

    def element_by_id(self, element_id: str | int) -> Optional[Element]:
        """Look up an element by id or marker id."""
        return self.by_id.get(str(element_id))

    def __contains__(self, element_id: object) -> bool:
        return str(element_id) in self.by_id

    def __len__(self) -> int:
        return len(self.elements)

    def insert_element_by_position(self, position: Point) -> Element:
        """
        Materialize a synthetic element at a position.

        The element is appended under the tree root and registered in the
        flat list and id index. Insertion is idempotent: a position whose
        rectangle is already registered returns the existing element and
        leaves the tree untouched.

        Args:
            position: Absolute position in pixels

        Returns:
            The registered POSITION element
        """
        element = create_position_element(position)
        existing = self.by_id.get(element.id)
        if existing is not None:
            return existing

        self.tree.children.append(ElementTreeNode(node=element))
        self._register(element)
        logger.debug(f"Inserted synthetic element {element.id} at ({position.x}, {position.y})")
        return element
