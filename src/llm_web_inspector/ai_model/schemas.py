"""
Schemas - structured shapes of model answers.

A locate answer is one of two variants:
- PositionResponse: a bare ``[x, y]`` pair on the 0-1000 scale, produced by
  models that ground by coordinates
- ElementListResponse: ``{"elements": [...], "errors": [...]}`` where each
  entry names an element id or a position

parse_locate_response is the single place that tells them apart.

Extraction and assertion answers have one shape each: ExtractResponse
(`{language, data, errors}`) and AssertResponse (`{thought, pass}`).
"""

import json
from numbers import Real
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from llm_web_inspector.exceptions import MalformedAIResponseError
from llm_web_inspector.snapshot.models import Point


def _coerce_error_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, list):
        return [e if isinstance(e, str) else json.dumps(e, default=str) for e in value]
    return value


class PositionModel(BaseModel):
    """A point as it appears in JSON."""
    x: float
    y: float

    def to_point(self) -> Point:
        return Point(x=self.x, y=self.y)


class ElementRef(BaseModel):
    """
    Reference to a target element, by id or by absolute position.

    Also the shape of a caller-supplied quick answer; when both fields are
    set the id is tried first.
    """
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    position: Optional[PositionModel] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # models often answer marker ids as numbers
        if isinstance(value, Real) and not isinstance(value, bool):
            return str(int(value)) if float(value).is_integer() else str(value)
        return value


class PositionResponse(BaseModel):
    """Coordinate-only answer on the model scale."""
    kind: Literal["position"] = "position"
    x: float
    y: float

    def to_point(self) -> Point:
        return Point(x=self.x, y=self.y)


class ElementListResponse(BaseModel):
    """Structured answer listing matched elements."""
    kind: Literal["elements"] = "elements"
    elements: List[ElementRef] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    @field_validator("errors", mode="before")
    @classmethod
    def _coerce_errors(cls, value: Any) -> Any:
        return _coerce_error_list(value)


LocateResponse = Union[PositionResponse, ElementListResponse]


def _is_coordinate(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _dump(content: Any) -> str:
    return json.dumps(content, default=str, ensure_ascii=False)


def parse_locate_response(
    content: Any,
    target_description: Optional[str] = None,
) -> LocateResponse:
    """
    Classify and validate a locate answer.

    Args:
        content: JSON value returned by the model
        target_description: Included in the error for diagnosis

    Returns:
        PositionResponse or ElementListResponse

    Raises:
        MalformedAIResponseError: If content matches neither variant
    """
    if isinstance(content, (list, tuple)):
        if len(content) == 2 and all(_is_coordinate(v) for v in content):
            return PositionResponse(x=content[0], y=content[1])
        raise MalformedAIResponseError(
            f"Expected an [x, y] pair for '{target_description}', got a list of {len(content)} items",
            target_description=target_description,
            raw_response=_dump(content),
        )

    if isinstance(content, dict) and isinstance(content.get("elements"), list):
        try:
            return ElementListResponse.model_validate(
                {"elements": content["elements"], "errors": content.get("errors")}
            )
        except ValidationError as e:
            raise MalformedAIResponseError(
                f"Invalid element list for '{target_description}': {e.error_count()} validation errors",
                target_description=target_description,
                raw_response=_dump(content),
            ) from e

    raise MalformedAIResponseError(
        f"Unrecognized locate response for '{target_description}'",
        target_description=target_description,
        raw_response=_dump(content),
    )


class ExtractResponse(BaseModel):
    """Answer to a data extraction request."""
    model_config = ConfigDict(extra="ignore")

    language: Optional[str] = None
    data: Any = None
    errors: List[str] = Field(default_factory=list)

    @field_validator("errors", mode="before")
    @classmethod
    def _coerce_errors(cls, value: Any) -> Any:
        return _coerce_error_list(value)


class AssertResponse(BaseModel):
    """Verdict on an assertion about the page."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    passed: bool = Field(alias="pass")
    thought: str = ""

    @field_validator("thought", mode="before")
    @classmethod
    def _coerce_thought(cls, value: Any) -> Any:
        return "" if value is None else value


def parse_extract_response(content: Any, data_query: Optional[str] = None) -> ExtractResponse:
    """
    Validate an extraction answer.

    Raises:
        MalformedAIResponseError: If content is not an object or fails validation
    """
    if not isinstance(content, dict):
        raise MalformedAIResponseError(
            f"Expected an object for extraction '{data_query}'",
            target_description=data_query,
            raw_response=_dump(content),
        )
    try:
        return ExtractResponse.model_validate(content)
    except ValidationError as e:
        raise MalformedAIResponseError(
            f"Invalid extraction answer for '{data_query}': {e.error_count()} validation errors",
            target_description=data_query,
            raw_response=_dump(content),
        ) from e


def parse_assert_response(content: Any, assertion: Optional[str] = None) -> AssertResponse:
    """
    Validate an assertion verdict; ``pass`` must be a boolean.

    Raises:
        MalformedAIResponseError: If content is not an object with a boolean ``pass``
    """
    if not isinstance(content, dict) or not isinstance(content.get("pass"), bool):
        raise MalformedAIResponseError(
            f"Expected {{thought, pass}} for assertion '{assertion}'",
            target_description=assertion,
            raw_response=_dump(content),
        )
    try:
        return AssertResponse.model_validate(content)
    except ValidationError as e:
        raise MalformedAIResponseError(
            f"Invalid assertion verdict for '{assertion}': {e.error_count()} validation errors",
            target_description=assertion,
            raw_response=_dump(content),
        ) from e
