"""
Page description - render a snapshot as text for the model.

Two formats exist: an indented tag tree that mirrors the element tree (sent
with locate prompts), and a flat row format with right/bottom precomputed so
the model does not have to add numbers.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from llm_web_inspector.snapshot.image import image_info_of_base64
from llm_web_inspector.snapshot.indexer import SnapshotIndex
from llm_web_inspector.snapshot.models import (
    Element,
    ElementTreeNode,
    NodeType,
    Size,
    UIContext,
)

logger = logging.getLogger(__name__)

FLAT_CONTENT_SLICE = 80
INDENT = "  "


def format_number(value: float) -> str:
    """Integers without a trailing .0, everything else to at most 3 decimals."""
    if float(value).is_integer():
        return str(int(value))
    return str(round(value, 3))


def describe_size(size: Size) -> str:
    return f"{format_number(size.width)} x {format_number(size.height)}"


def describe_text_format() -> str:
    return (
        "The following texts elements are formatted in the following way: \n"
        "id(string), left, top, right, bottom, content(may be truncated)"
    )


def _truncate(text: str, length: Optional[int]) -> str:
    if length is not None and len(text) > length:
        return f"{text[:length]}..."
    return text


def describe_elements(elements: Iterable[Element]) -> str:
    """Flat rows: ``id, left, top, right, bottom, content``."""
    return "\n".join(
        ", ".join([
            element.id,
            format_number(element.rect.left),
            format_number(element.rect.top),
            format_number(element.rect.right),
            format_number(element.rect.bottom),
            _truncate(element.content, FLAT_CONTENT_SLICE),
        ])
        for element in elements
    )


def _open_tag(element: Element) -> str:
    parts = [element.tag_name, f'id="{element.id}"']
    if element.index_id is not None:
        parts.append(f'markerId="{element.index_id}"')
    rect = element.rect
    parts.extend([
        f'left="{format_number(rect.left)}"',
        f'top="{format_number(rect.top)}"',
        f'width="{format_number(rect.width)}"',
        f'height="{format_number(rect.height)}"',
    ])
    return f"<{' '.join(parts)}>"


def description_of_tree(
    tree: ElementTreeNode,
    truncate_text_length: Optional[int] = None,
    filter_non_text_content: bool = False,
) -> str:
    """
    Render the element tree as indented tags.

    Args:
        tree: Root of the element tree
        truncate_text_length: Cut element content to this many characters
        filter_non_text_content: Skip non-text nodes; their children are
            still rendered one level up

    Returns:
        Multi-line description, empty for a tree without elements
    """
    lines: List[str] = []

    def render(node: ElementTreeNode, depth: int) -> None:
        element = node.node
        skip = element is None or (
            filter_non_text_content and element.node_type != NodeType.TEXT
        )
        if skip:
            for child in node.children:
                render(child, depth)
            return

        pad = INDENT * depth
        content = _truncate(element.content.strip(), truncate_text_length)
        if not node.children:
            lines.append(f"{pad}{_open_tag(element)}{content}</{element.tag_name}>")
            return

        lines.append(f"{pad}{_open_tag(element)}")
        if content:
            lines.append(f"{pad}{INDENT}{content}")
        for child in node.children:
            render(child, depth + 1)
        lines.append(f"{pad}</{element.tag_name}>")

    render(tree, 0)
    return "\n".join(lines)


@dataclass
class PageDescription:
    """Description text plus the lookup structures built alongside it."""
    description: str
    index: SnapshotIndex
    size: Size


def describe_user_page(
    context: UIContext,
    truncate_text_length: Optional[int] = None,
    filter_non_text_content: bool = False,
    match_by_position: bool = False,
) -> PageDescription:
    """
    Index a snapshot and describe it for the model.

    The page size comes from the context, or from the screenshot when the
    context has none. With match_by_position the model answers in
    coordinates, so only the size is described.

    Raises:
        InvalidInputError: If the size has to be read from an undecodable screenshot
    """
    if context.size is not None:
        size = context.size
    else:
        size = image_info_of_base64(context.screenshot_base64)
        logger.debug(f"Page size read from screenshot: {describe_size(size)}")

    index = SnapshotIndex.build(context.tree)

    description = f"The size of the page: {describe_size(size)}"
    if not match_by_position:
        content_tree = description_of_tree(
            context.tree,
            truncate_text_length=truncate_text_length,
            filter_non_text_content=filter_non_text_content,
        )
        description += (
            "\nSome of the elements are marked with a rectangle in the screenshot, some are not."
            f"\nThe page elements tree:\n{content_tree}"
        )

    return PageDescription(description=description, index=index, size=size)
