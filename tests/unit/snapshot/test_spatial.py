"""
Tests for spatial element lookup.
"""

from llm_web_inspector.snapshot.models import ElementTreeNode, NodeType, Point
from llm_web_inspector.snapshot.spatial import element_by_position, elements_at_position

from conftest import leaf, make_element


class TestElementByPosition:
    """Test smallest-element hit testing."""
    
    def test_leaf_preferred_over_container(self, sample_tree):
        """Point inside L1 inside container C resolves to L1."""
        element = element_by_position(sample_tree, Point(60, 60))
        
        assert element.id == "L1"
    
    def test_container_never_matches(self, sample_tree):
        """Inside C but outside L1: containers are not actionable."""
        assert element_by_position(sample_tree, Point(150, 150)) is None
    
    def test_smallest_area_wins(self):
        big = make_element("big", 0, 0, 10, 10)
        small = make_element("small", 2, 2, 5, 5)
        tree = ElementTreeNode(children=[leaf(big), leaf(small)])
        
        assert element_by_position(tree, Point(4, 4)).id == "small"
    
    def test_smallest_wins_regardless_of_order(self):
        big = make_element("big", 0, 0, 10, 10)
        small = make_element("small", 2, 2, 5, 5)
        tree = ElementTreeNode(children=[leaf(small), leaf(big)])
        
        assert element_by_position(tree, Point(4, 4)).id == "small"
    
    def test_tie_keeps_first_in_traversal_order(self):
        first = make_element("first", 0, 0, 10, 10)
        second = make_element("second", 5, 5, 10, 10)
        tree = ElementTreeNode(children=[leaf(first), leaf(second)])
        
        assert element_by_position(tree, Point(7, 7)).id == "first"
    
    def test_nested_leaf_inside_leaf(self):
        """An icon nested in a button wins over the button."""
        icon = make_element("icon", 12, 12, 8, 8, node_type=NodeType.IMG)
        button = make_element("button", 10, 10, 80, 20, node_type=NodeType.BUTTON)
        tree = ElementTreeNode(children=[ElementTreeNode(node=button, children=[leaf(icon)])])
        
        assert element_by_position(tree, Point(15, 15)).id == "icon"
        assert element_by_position(tree, Point(50, 15)).id == "button"
    
    def test_edges_inclusive(self, sample_tree):
        assert element_by_position(sample_tree, Point(50, 50)).id == "L1"
        assert element_by_position(sample_tree, Point(70, 70)).id == "L1"
    
    def test_not_found_is_stable(self, sample_tree):
        point = Point(900, 700)
        
        assert element_by_position(sample_tree, point) is None
        assert element_by_position(sample_tree, point) is None
    
    def test_empty_tree(self):
        assert element_by_position(ElementTreeNode(), Point(0, 0)) is None
    
    def test_zero_size_element_matches_exact_point(self):
        dot = make_element("dot", 5, 5, 0, 0)
        tree = ElementTreeNode(children=[leaf(dot)])
        
        assert element_by_position(tree, Point(5, 5)).id == "dot"


class TestElementsAtPosition:
    """Test collecting all matches."""
    
    def test_collects_all_non_containers(self):
        outer = make_element("outer", 0, 0, 100, 100, node_type=NodeType.CONTAINER)
        a = make_element("a", 0, 0, 50, 50)
        b = make_element("b", 10, 10, 10, 10)
        tree = ElementTreeNode(children=[ElementTreeNode(node=outer, children=[leaf(a), leaf(b)])])
        
        assert [e.id for e in elements_at_position(tree, Point(15, 15))] == ["a", "b"]
