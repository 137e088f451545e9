"""
Snapshot data model - elements, element trees and UI contexts.

A snapshot is one captured state of a page: an element tree, a screenshot,
and optionally the page size. Snapshots usually arrive as JSON from the
browser bridge, so every type here can be built from a camelCase dict.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class NodeType(str, Enum):
    """Kind of UI node captured by the extractor."""
    CONTAINER = "CONTAINER Node"
    FORM_ITEM = "FORM_ITEM Node"
    BUTTON = "BUTTON Node"
    IMG = "IMG Node"
    TEXT = "TEXT Node"
    POSITION = "POSITION Node"


@dataclass(frozen=True)
class Point:
    """A point on the page, in pixels or on the 0-1000 model scale."""
    x: float
    y: float

    @classmethod
    def from_value(cls, value: Any) -> "Point":
        """Build from a Point, a ``{"x", "y"}`` mapping or an ``(x, y)`` pair."""
        if isinstance(value, Point):
            return value
        if isinstance(value, dict):
            return cls(x=value["x"], y=value["y"])
        x, y = value
        return cls(x=x, y=y)


@dataclass(frozen=True)
class Size:
    """Full page / screenshot size in pixels."""
    width: float
    height: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Size":
        return cls(width=data["width"], height=data["height"])


@dataclass(frozen=True)
class Rect:
    """Absolute element rectangle."""
    left: float
    top: float
    width: float
    height: float

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rect size must be non-negative, got {self.width}x{self.height}")

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def contains(self, point: Point) -> bool:
        """Inclusive on all four edges."""
        return (
            self.left <= point.x <= self.right
            and self.top <= point.y <= self.bottom
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rect":
        return cls(
            left=data.get("left", 0),
            top=data.get("top", 0),
            width=data.get("width", 0),
            height=data.get("height", 0),
        )


@dataclass
class Element:
    """
    One node of a UI snapshot.

    Attributes:
        id: Identifier, unique within the snapshot
        rect: Absolute bounding rectangle
        content: Text content (may be long; descriptions truncate it)
        node_type: Kind of node
        center: Click point, defaults to the rect center
        index_id: Numeric alias shown as a marker on the screenshot
        attributes: Remaining extractor attributes (htmlTagName, ...)
    """
    id: str
    rect: Rect
    content: str = ""
    node_type: NodeType = NodeType.TEXT
    center: Optional[Tuple[float, float]] = None
    index_id: Optional[int] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.center is None:
            self.center = (
                self.rect.left + self.rect.width / 2,
                self.rect.top + self.rect.height / 2,
            )

    @property
    def is_container(self) -> bool:
        return self.node_type == NodeType.CONTAINER

    @property
    def tag_name(self) -> str:
        """HTML tag without angle brackets, or a name derived from the node type."""
        tag = self.attributes.get("htmlTagName")
        if tag:
            return str(tag).strip("<>").lower()
        return self.node_type.name.lower()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Element":
        """
        Build from extractor JSON.

        The node type lives under ``attributes.nodeType`` in extractor
        output; a top-level ``nodeType`` is accepted as well.
        """
        attributes = dict(data.get("attributes") or {})
        node_type = attributes.pop("nodeType", None) or data.get("nodeType") or NodeType.TEXT
        center = data.get("center")
        return cls(
            id=str(data["id"]),
            rect=Rect.from_dict(data.get("rect") or {}),
            content=data.get("content") or "",
            node_type=NodeType(node_type),
            center=tuple(center) if center else None,
            index_id=data.get("indexId"),
            attributes=attributes,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "rect": self.rect.to_dict(),
            "content": self.content,
            "attributes": {"nodeType": self.node_type.value, **self.attributes},
            "center": list(self.center) if self.center else None,
        }
        if self.index_id is not None:
            data["indexId"] = self.index_id
        return data


@dataclass
class ElementTreeNode:
    """
    A tree node owning at most one element and an ordered list of children.

    The root of a snapshot usually carries no element.
    """
    node: Optional[Element] = None
    children: List["ElementTreeNode"] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ElementTreeNode":
        node_data = data.get("node")
        return cls(
            node=Element.from_dict(node_data) if node_data else None,
            children=[cls.from_dict(child) for child in data.get("children") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "node": self.node.to_dict() if self.node else None,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass
class UIContext:
    """
    Everything captured for one perception cycle.

    Attributes:
        tree: Root of the element tree
        screenshot_base64: Screenshot as a data URL or raw base64
        screenshot_base64_with_element_marker: Same screenshot with marker
            rectangles drawn on it, preferred when sending to the model
        size: Page size; derived from the screenshot when missing
    """
    tree: ElementTreeNode
    screenshot_base64: str = ""
    screenshot_base64_with_element_marker: Optional[str] = None
    size: Optional[Size] = None

    @property
    def screenshot_for_model(self) -> str:
        return self.screenshot_base64_with_element_marker or self.screenshot_base64

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UIContext":
        size = data.get("size")
        return cls(
            tree=ElementTreeNode.from_dict(data.get("tree") or {}),
            screenshot_base64=data.get("screenshotBase64") or "",
            screenshot_base64_with_element_marker=data.get("screenshotBase64WithElementMarker"),
            size=Size.from_dict(size) if size else None,
        )
