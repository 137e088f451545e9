"""
Element inspection - resolve a target description to snapshot elements.

Flow for one call:
1. Index and describe the snapshot
2. Answer from a caller-supplied quick answer when possible (no model call)
3. Otherwise ask the model, then normalize its answer:
   - ``[x, y]`` on the 0-1000 scale is mapped to page pixels and resolved
     to the smallest element under it, or a synthetic element
   - ``{"elements": [...], "errors": [...]}`` is passed through; ids are
     checked by whoever consumes the result

The model call is the only await. The snapshot is only mutated after the
answer has arrived, so an abandoned call leaves it untouched.

ai_extract_element_info and ai_assert reuse the same exchange shape for
reading data off the page and for yes/no checks.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from llm_web_inspector.ai_model.prompts import (
    assert_prompt,
    extract_data_prompt,
    find_element_prompt,
    system_prompt_to_assert,
    system_prompt_to_extract,
    system_prompt_to_locate_element,
)
from llm_web_inspector.ai_model.schemas import (
    AssertResponse,
    ElementListResponse,
    ElementRef,
    ExtractResponse,
    LocateResponse,
    PositionResponse,
    parse_assert_response,
    parse_extract_response,
    parse_locate_response,
)
from llm_web_inspector.config.settings import InspectorSettings
from llm_web_inspector.exceptions import ElementNotFoundError, InvalidInputError
from llm_web_inspector.interfaces.llm import ImageContent, Message, Usage
from llm_web_inspector.llm.service_caller import AICaller
from llm_web_inspector.snapshot.coordinates import to_absolute
from llm_web_inspector.snapshot.description import describe_user_page
from llm_web_inspector.snapshot.indexer import SnapshotIndex
from llm_web_inspector.snapshot.models import Element, ElementTreeNode, Size, UIContext
from llm_web_inspector.snapshot.spatial import element_by_position

logger = logging.getLogger(__name__)

QuickAnswer = Union[ElementRef, Dict[str, Any]]
DataQuery = Union[str, Dict[str, str]]

LITE_TRUNCATE_TEXT_LENGTH = 200


@dataclass
class ResolutionResult:
    """Normalized resolution output, whatever produced it."""
    elements: List[Union[Element, ElementRef]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


@dataclass
class InspectResult:
    """
    Outcome of ai_inspect_element.

    Attributes:
        parse_result: Normalized elements and errors
        raw_response: The model's answer, or the quick answer that was used
        index: Lookups for the snapshot, including synthetic insertions
        usage: Token usage when the model was called
    """
    parse_result: ResolutionResult
    raw_response: Any
    index: SnapshotIndex
    usage: Optional[Usage] = None

    def element_by_id(self, element_id: str) -> Optional[Element]:
        return self.index.element_by_id(element_id)


def _coerce_quick_answer(quick_answer: Optional[QuickAnswer]) -> Optional[ElementRef]:
    if quick_answer is None or isinstance(quick_answer, ElementRef):
        return quick_answer
    try:
        return ElementRef.model_validate(quick_answer)
    except ValidationError as e:
        logger.debug(f"Ignoring unusable quick answer {quick_answer!r}: {e.error_count()} errors")
        return None


def get_quick_answer(
    quick_answer: Optional[QuickAnswer],
    tree: ElementTreeNode,
    index: SnapshotIndex,
) -> Optional[InspectResult]:
    """
    Resolve a caller-supplied candidate without the model.

    An id known to the index wins. Otherwise a position resolves to the
    element under it, or to a synthetic element when nothing is there.

    Returns:
        The result, or None when the quick answer is missing or unusable
    """
    ref = _coerce_quick_answer(quick_answer)
    if ref is None:
        return None

    if ref.id:
        element = index.element_by_id(ref.id)
        if element is not None:
            logger.debug(f"Quick answer hit by id {ref.id}")
            return InspectResult(
                parse_result=ResolutionResult(elements=[element]),
                raw_response=quick_answer,
                index=index,
            )

    if ref.position is not None:
        point = ref.position.to_point()
        element = element_by_position(tree, point)
        if element is None:
            element = index.insert_element_by_position(point)
        logger.debug(f"Quick answer hit by position ({point.x}, {point.y}) -> {element.id}")
        return InspectResult(
            parse_result=ResolutionResult(elements=[element]),
            raw_response=quick_answer,
            index=index,
        )

    return None


def transform_element_position_to_id(
    response: LocateResponse,
    tree: ElementTreeNode,
    index: SnapshotIndex,
    size: Size,
    target_description: Optional[str] = None,
    position_miss_policy: str = "synthesize",
) -> ResolutionResult:
    """
    Normalize a parsed locate answer into a ResolutionResult.

    Raises:
        ElementNotFoundError: For a position answer covering no element
            when position_miss_policy is "raise"
    """
    if isinstance(response, ElementListResponse):
        return ResolutionResult(elements=list(response.elements), errors=list(response.errors))

    if not isinstance(response, PositionResponse):
        raise TypeError(f"Unsupported locate response: {type(response).__name__}")

    absolute = to_absolute(response.to_point(), size)
    element = element_by_position(tree, absolute)
    if element is None:
        if position_miss_policy == "raise":
            raise ElementNotFoundError(
                f"No element found at ({absolute.x}, {absolute.y}) for '{target_description}'",
                target_description=target_description,
                position=(absolute.x, absolute.y),
            )
        element = index.insert_element_by_position(absolute)

    return ResolutionResult(elements=[ElementRef(id=element.id)])


def build_locate_messages(
    page_description: str,
    screenshot: str,
    target_element_description: str,
    multi: bool,
) -> List[Message]:
    """The system + user(image, text) exchange sent to the model."""
    return [
        Message.system(system_prompt_to_locate_element()),
        Message.user(
            find_element_prompt(
                page_description=page_description,
                target_element_description=target_element_description,
                multi=multi,
            ),
            images=[ImageContent(data=screenshot, detail="high")],
        ),
    ]


async def ai_inspect_element(
    context: UIContext,
    target_element_description: str,
    call_ai: AICaller,
    multi: bool = False,
    quick_answer: Optional[QuickAnswer] = None,
    settings: Optional[InspectorSettings] = None,
) -> InspectResult:
    """
    Resolve a target description to elements of a snapshot.

    Args:
        context: The snapshot to resolve against
        target_element_description: What to find, in natural language
        call_ai: Async callable sending messages to the model
        multi: Allow more than one matching element
        quick_answer: ``{"id": ...}`` or ``{"position": {"x", "y"}}`` to try first
        settings: Inspector settings (defaults apply when omitted)

    Returns:
        InspectResult with the normalized answer

    Raises:
        InvalidInputError: If the description is empty and no quick answer applies
        MalformedAIResponseError: If the model answer has an unknown shape
        ElementNotFoundError: If a position answer misses and the policy is "raise"
    """
    settings = settings or InspectorSettings()
    page = describe_user_page(
        context,
        truncate_text_length=settings.truncate_text_length,
        filter_non_text_content=settings.filter_non_text_content,
        match_by_position=settings.match_by_position,
    )

    quick = get_quick_answer(quick_answer, context.tree, page.index)
    if quick is not None:
        return quick

    if not target_element_description or not target_element_description.strip():
        raise InvalidInputError(
            "Cannot find the target element description",
            target_description=target_element_description,
        )

    messages = build_locate_messages(
        page.description,
        context.screenshot_for_model,
        target_element_description,
        multi,
    )
    logger.debug(f"Asking model to locate '{target_element_description}' (multi={multi})")
    result = await call_ai(messages)

    response = parse_locate_response(result.content, target_element_description)
    logger.debug(f"Locate answer for '{target_element_description}': {response.kind}")

    return InspectResult(
        parse_result=transform_element_position_to_id(
            response,
            context.tree,
            page.index,
            page.size,
            target_description=target_element_description,
            position_miss_policy=settings.position_miss_policy,
        ),
        raw_response=result.content,
        index=page.index,
        usage=result.usage,
    )


@dataclass
class ExtractResult:
    """
    Outcome of ai_extract_element_info.

    Attributes:
        parse_result: Validated answer (language, data, errors)
        raw_response: The model's answer
        index: Lookups for the snapshot, for resolving ids named in the data
        usage: Token usage
    """
    parse_result: ExtractResponse
    raw_response: Any
    index: SnapshotIndex
    usage: Optional[Usage] = None


@dataclass
class AssertResult:
    """Outcome of ai_assert."""
    content: AssertResponse
    raw_response: Any
    usage: Optional[Usage] = None


def _query_text(data_query: DataQuery) -> str:
    return data_query if isinstance(data_query, str) else ", ".join(data_query)


async def ai_extract_element_info(
    context: UIContext,
    data_query: DataQuery,
    call_ai: AICaller,
) -> ExtractResult:
    """
    Extract data from a snapshot.

    The page is described in the lite form (text nodes only, content cut to
    LITE_TRUNCATE_TEXT_LENGTH characters) and sent with the plain screenshot.

    Args:
        context: The snapshot to read from
        data_query: What to extract; a string, or a mapping of result key
            to description
        call_ai: Async callable sending messages to the model

    Raises:
        InvalidInputError: If the query is empty
        MalformedAIResponseError: If the answer is not an extraction object
    """
    if not data_query or (isinstance(data_query, str) and not data_query.strip()):
        raise InvalidInputError("Cannot extract without a data query")

    page = describe_user_page(
        context,
        truncate_text_length=LITE_TRUNCATE_TEXT_LENGTH,
        filter_non_text_content=True,
    )
    messages = [
        Message.system(system_prompt_to_extract()),
        Message.user(
            extract_data_prompt(page.description, data_query),
            images=[ImageContent(data=context.screenshot_base64, detail="high")],
        ),
    ]
    logger.debug(f"Asking model to extract '{_query_text(data_query)}'")
    result = await call_ai(messages)

    return ExtractResult(
        parse_result=parse_extract_response(result.content, _query_text(data_query)),
        raw_response=result.content,
        index=page.index,
        usage=result.usage,
    )


async def ai_assert(
    context: UIContext,
    assertion: str,
    call_ai: AICaller,
) -> AssertResult:
    """
    Ask the model whether an assertion about the page holds.

    Only the screenshot and the assertion are sent; the element tree is not
    described.

    Raises:
        InvalidInputError: If the assertion is empty
        MalformedAIResponseError: If the answer has no boolean ``pass``
    """
    if not assertion or not assertion.strip():
        raise InvalidInputError("Assertion should be a non-empty string", target_description=assertion)

    messages = [
        Message.system(system_prompt_to_assert()),
        Message.user(
            assert_prompt(assertion),
            images=[ImageContent(data=context.screenshot_base64, detail="high")],
        ),
    ]
    logger.debug(f"Asking model to assert '{assertion}'")
    result = await call_ai(messages)

    return AssertResult(
        content=parse_assert_response(result.content, assertion),
        raw_response=result.content,
        usage=result.usage,
    )
