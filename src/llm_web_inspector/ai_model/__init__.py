"""
AI model module - model-facing side of element resolution.
"""

from llm_web_inspector.ai_model.schemas import (
    ElementRef,
    PositionModel,
    PositionResponse,
    ElementListResponse,
    LocateResponse,
    ExtractResponse,
    AssertResponse,
    parse_locate_response,
    parse_extract_response,
    parse_assert_response,
)
from llm_web_inspector.ai_model.inspect import (
    ResolutionResult,
    InspectResult,
    get_quick_answer,
    transform_element_position_to_id,
    build_locate_messages,
    ai_inspect_element,
    ExtractResult,
    AssertResult,
    ai_extract_element_info,
    ai_assert,
)

__all__ = [
    "ElementRef",
    "PositionModel",
    "PositionResponse",
    "ElementListResponse",
    "LocateResponse",
    "parse_locate_response",
    "ExtractResponse",
    "AssertResponse",
    "parse_extract_response",
    "parse_assert_response",
    "ResolutionResult",
    "InspectResult",
    "get_quick_answer",
    "transform_element_position_to_id",
    "build_locate_messages",
    "ai_inspect_element",
    "ExtractResult",
    "AssertResult",
    "ai_extract_element_info",
    "ai_assert",
]
