"""
Synthetic elements - placeholders for positions no extracted element covers.

The model sometimes points at something the extractor did not capture
(canvas content, custom widgets). A small square element is created at that
spot so the position stays addressable by id like any other element.
"""

import hashlib
import json
from typing import Any, Dict

from llm_web_inspector.snapshot.models import Element, NodeType, Point, Rect

SYNTHETIC_ELEMENT_SIZE = 8


def generate_hash_id(data: Dict[str, Any]) -> str:
    """
    Deterministic short id for a JSON-serializable mapping.

    Keys are sorted, so equal mappings always hash the same.
    """
    payload = json.dumps(data, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode()).hexdigest()[:8]


def position_rect(position: Point) -> Rect:
    """The square centered on a position, clamped to the page origin."""
    half = SYNTHETIC_ELEMENT_SIZE / 2
    return Rect(
        left=max(position.x - half, 0.0),
        top=max(position.y - half, 0.0),
        width=float(SYNTHETIC_ELEMENT_SIZE),
        height=float(SYNTHETIC_ELEMENT_SIZE),
    )


def create_position_element(position: Point) -> Element:
    """
    Build a POSITION element anchored at a point.

    The id is derived from the rectangle with every number as a float, so
    equal rectangles always yield the same id. Registration in a tree and
    index is left to SnapshotIndex.insert_element_by_position.
    """
    rect = position_rect(position)
    return Element(
        id=generate_hash_id({key: float(value) for key, value in rect.to_dict().items()}),
        rect=rect,
        content="",
        node_type=NodeType.POSITION,
        center=(position.x, position.y),
    )
