"""
Pytest configuration and fixtures.
"""

import base64
import io
from typing import Any, Optional
from unittest.mock import AsyncMock

import pytest
from PIL import Image

from llm_web_inspector.interfaces.llm import Usage
from llm_web_inspector.llm.service_caller import AICallResult
from llm_web_inspector.snapshot.models import (
    Element,
    ElementTreeNode,
    NodeType,
    Rect,
    Size,
    UIContext,
)


def make_element(
    element_id: str,
    left: float,
    top: float,
    width: float,
    height: float,
    node_type: NodeType = NodeType.TEXT,
    content: str = "",
    index_id: Optional[int] = None,
    **attributes: Any,
) -> Element:
    """Build an element with a rect from plain numbers."""
    return Element(
        id=element_id,
        rect=Rect(left=left, top=top, width=width, height=height),
        content=content,
        node_type=node_type,
        index_id=index_id,
        attributes=attributes,
    )


def leaf(element: Element) -> ElementTreeNode:
    return ElementTreeNode(node=element)


def png_base64(width: int, height: int, data_url: bool = True) -> str:
    """Encode a blank PNG of the given size."""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color="white").save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode()
    return f"data:image/png;base64,{encoded}" if data_url else encoded


@pytest.fixture
def sample_tree():
    """
    Root -> container C (0,0,200,200) -> leaf L1 (50,50,20,20)
         -> link T2 (300,20,100,30)
    """
    container = make_element("C", 0, 0, 200, 200, node_type=NodeType.CONTAINER, htmlTagName="<div>")
    l1 = make_element("L1", 50, 50, 20, 20, content="OK", index_id=1)
    t2 = make_element("T2", 300, 20, 100, 30, content="Sign in", index_id=2, htmlTagName="<a>")
    return ElementTreeNode(
        node=None,
        children=[
            ElementTreeNode(node=container, children=[leaf(l1)]),
            leaf(t2),
        ],
    )


@pytest.fixture
def sample_context(sample_tree):
    """UI context over sample_tree with an explicit 1000x800 size."""
    return UIContext(
        tree=sample_tree,
        screenshot_base64="data:image/png;base64,AAAA",
        size=Size(width=1000, height=800),
    )


@pytest.fixture
def empty_context():
    """UI context with no elements, sized from a real 1000x800 screenshot."""
    return UIContext(tree=ElementTreeNode(), screenshot_base64=png_base64(1000, 800))


@pytest.fixture
def mock_ai():
    """AI caller mock; set .return_value to an AICallResult per test."""
    return AsyncMock(return_value=AICallResult(
        content={"elements": [], "errors": []},
        usage=Usage(prompt_tokens=100, completion_tokens=20, total_tokens=120),
    ))


@pytest.fixture
def snapshot_data():
    """sample_tree as extractor JSON, with a 1000x800 screenshot and no size."""
    def node(element_id, left, top, width, height, node_type, content="", index_id=None, tag=None):
        attributes = {"nodeType": node_type}
        if tag:
            attributes["htmlTagName"] = tag
        data = {
            "id": element_id,
            "rect": {"left": left, "top": top, "width": width, "height": height},
            "content": content,
            "attributes": attributes,
        }
        if index_id is not None:
            data["indexId"] = index_id
        return data

    return {
        "tree": {
            "node": None,
            "children": [
                {
                    "node": node("C", 0, 0, 200, 200, "CONTAINER Node", tag="<div>"),
                    "children": [
                        {"node": node("L1", 50, 50, 20, 20, "TEXT Node", "OK", 1), "children": []},
                    ],
                },
                {
                    "node": node("T2", 300, 20, 100, 30, "TEXT Node", "Sign in", 2, tag="<a>"),
                    "children": [],
                },
            ],
        },
        "screenshotBase64": png_base64(1000, 800),
    }
