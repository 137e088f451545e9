"""
Tests for page descriptions.
"""

import pytest

from llm_web_inspector.exceptions import InvalidInputError
from llm_web_inspector.snapshot.description import (
    describe_elements,
    describe_size,
    describe_user_page,
    description_of_tree,
    format_number,
)
from llm_web_inspector.snapshot.models import ElementTreeNode, Size, UIContext

from conftest import leaf, make_element


class TestFormatNumber:
    """Test number rendering."""
    
    @pytest.mark.parametrize("value,expected", [
        (10, "10"),
        (10.0, "10"),
        (12.5, "12.5"),
        (1.23456, "1.235"),
    ])
    def test_format(self, value, expected):
        assert format_number(value) == expected
    
    def test_describe_size(self):
        assert describe_size(Size(1280, 720)) == "1280 x 720"


class TestDescriptionOfTree:
    """Test the indented tag tree."""
    
    def test_sample_tree(self, sample_tree):
        assert description_of_tree(sample_tree) == "\n".join([
            '<div id="C" left="0" top="0" width="200" height="200">',
            '  <text id="L1" markerId="1" left="50" top="50" width="20" height="20">OK</text>',
            '</div>',
            '<a id="T2" markerId="2" left="300" top="20" width="100" height="30">Sign in</a>',
        ])
    
    def test_filter_non_text_content(self, sample_tree):
        """The container is dropped and its child moves up a level."""
        description = description_of_tree(sample_tree, filter_non_text_content=True)
        
        assert "<div" not in description
        assert description.splitlines()[0].startswith('<text id="L1"')
    
    def test_truncate_text_length(self):
        element = make_element("p", 0, 0, 10, 10, content="a long paragraph of text")
        tree = ElementTreeNode(children=[leaf(element)])
        
        description = description_of_tree(tree, truncate_text_length=6)
        
        assert ">a long...</text>" in description
    
    def test_content_of_parent_on_own_line(self):
        parent = make_element("btn", 0, 0, 50, 20, content="Save", htmlTagName="<button>")
        child = make_element("ico", 2, 2, 8, 8)
        tree = ElementTreeNode(children=[ElementTreeNode(node=parent, children=[leaf(child)])])
        
        lines = description_of_tree(tree).splitlines()
        
        assert lines[0].startswith("<button ")
        assert lines[1] == "  Save"
        assert lines[-1] == "</button>"
    
    def test_empty_tree(self):
        assert description_of_tree(ElementTreeNode()) == ""


class TestDescribeElements:
    """Test the flat row format."""
    
    def test_rows(self, sample_tree):
        l1 = sample_tree.children[0].children[0].node
        t2 = sample_tree.children[1].node
        
        assert describe_elements([l1, t2]) == "L1, 50, 50, 70, 70, OK\nT2, 300, 20, 400, 50, Sign in"
    
    def test_content_sliced(self):
        element = make_element("x", 0, 0, 1, 1, content="y" * 100)
        
        row = describe_elements([element])
        
        assert row.endswith("y" * 80 + "...")


class TestDescribeUserPage:
    """Test full page descriptions."""
    
    def test_uses_context_size(self, sample_context):
        page = describe_user_page(sample_context)
        
        assert page.size == Size(1000, 800)
        assert page.description.startswith("The size of the page: 1000 x 800")
        assert "The page elements tree:" in page.description
        assert 'id="T2"' in page.description
        assert len(page.index) == 3
    
    def test_size_from_screenshot(self, empty_context):
        page = describe_user_page(empty_context)
        
        assert page.size == Size(1000, 800)
        assert len(page.index) == 0
    
    def test_match_by_position_describes_size_only(self, sample_context):
        page = describe_user_page(sample_context, match_by_position=True)
        
        assert page.description == "The size of the page: 1000 x 800"
        assert len(page.index) == 3
    
    def test_undecodable_screenshot_without_size(self, sample_tree):
        context = UIContext(tree=sample_tree, screenshot_base64="")
        
        with pytest.raises(InvalidInputError):
            describe_user_page(context)
