"""
Spatial lookup - find the element under a point.
"""

from typing import Iterator, List, Optional

from llm_web_inspector.snapshot.models import Element, ElementTreeNode, Point


def iter_elements(tree: ElementTreeNode) -> Iterator[Element]:
    """Yield every element in the tree, depth-first pre-order."""
    stack = [tree]
    while stack:
        node = stack.pop()
        if node.node is not None:
            yield node.node
        # reversed so the first child is visited first
        stack.extend(reversed(node.children))


def elements_at_position(tree: ElementTreeNode, point: Point) -> List[Element]:
    """All non-container elements whose rect contains the point, in tree order."""
    return [
        element
        for element in iter_elements(tree)
        if not element.is_container and element.rect.contains(point)
    ]


def element_by_position(tree: ElementTreeNode, point: Point) -> Optional[Element]:
    """
    Find the smallest non-container element containing a point.

    Containers only group children, so they never match. When several
    elements contain the point the one with the smallest area wins, which
    prefers an icon over the button around it; equal areas keep the
    element seen first.

    Args:
        tree: Root of the element tree
        point: Absolute position in pixels

    Returns:
        The matching element, or None when nothing covers the point
    """
    smallest: Optional[Element] = None
    for element in elements_at_position(tree, point):
        if smallest is None or element.rect.area < smallest.rect.area:
            smallest = element
    return smallest
