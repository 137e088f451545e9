"""
Insight - locate, extract and assert against a snapshot, keeping a record of it.

Insight is the consuming side of the ai_model functions: references returned
by the model are checked against the snapshot index here, turned into Element
objects, and every call is written to the dump store. A call is dumped once
when it starts and again under the same log id when it ends, so the store
always holds one record per call.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from llm_web_inspector.ai_model.inspect import (
    DataQuery,
    InspectResult,
    QuickAnswer,
    ai_assert,
    ai_extract_element_info,
    ai_inspect_element,
)
from llm_web_inspector.ai_model.schemas import AssertResponse
from llm_web_inspector.config.settings import Settings
from llm_web_inspector.exceptions import (
    ConfigurationError,
    DataExtractionError,
    ElementNotFoundError,
    MalformedAIResponseError,
    WebInspectorError,
)
from llm_web_inspector.insight.dump import DumpSubscriber, InsightDumpStore
from llm_web_inspector.interfaces.llm import Message, Usage
from llm_web_inspector.llm.service_caller import AICaller, AICallResult
from llm_web_inspector.snapshot.models import Element, UIContext
from llm_web_inspector.snapshot.spatial import element_by_position

logger = logging.getLogger(__name__)


async def _missing_ai_caller(messages: List[Message]) -> AICallResult:
    raise ConfigurationError(
        "No AI caller configured; pass call_ai to Insight to resolve without a quick answer"
    )


def _raw_of(error: WebInspectorError) -> Any:
    return error.raw_response if isinstance(error, MalformedAIResponseError) else None


class Insight:
    """
    Element locator bound to one snapshot.

    Example:
        >>> insight = Insight(context, call_ai=create_ai_caller(provider))
        >>> [button] = await insight.locate("the blue Submit button")
        >>> button.center
        (412.0, 380.0)
        >>> await insight.extract({"title": "the page heading"})
        {'title': 'Welcome back'}
        >>> (await insight.assert_("the cart is empty")).passed
        True
    """

    def __init__(
        self,
        context: UIContext,
        call_ai: Optional[AICaller] = None,
        dump_store: Optional[InsightDumpStore] = None,
        settings: Optional[Settings] = None,
        dump_subscriber: Optional[DumpSubscriber] = None,
    ):
        self.context = context
        self._call_ai = call_ai or _missing_ai_caller
        self._dump_store = dump_store
        self._settings = settings or Settings()
        self._dump_subscriber = dump_subscriber

    async def locate(
        self,
        query: str,
        multi: bool = False,
        quick_answer: Optional[QuickAnswer] = None,
    ) -> List[Element]:
        """
        Find the element(s) matching a description.

        Args:
            query: Natural language description of the target
            multi: Return every match instead of at most one
            quick_answer: Candidate to try before asking the model

        Returns:
            Matched elements (at most one unless multi)

        Raises:
            ElementNotFoundError: If nothing resolved and the model reported errors
            InvalidInputError: If the query is empty and no quick answer applies
            MalformedAIResponseError: If the model answer has an unknown shape
        """
        start = time.time()
        user_query = {"element": query, "multi": multi}
        log_id = self._dump("locate", user_query, start)
        try:
            result = await ai_inspect_element(
                self.context,
                query,
                call_ai=self._call_ai,
                multi=multi,
                quick_answer=quick_answer,
                settings=self._settings.inspector,
            )
        except WebInspectorError as e:
            self._dump("locate", user_query, start, log_id=log_id, error=str(e), raw_response=_raw_of(e))
            raise

        elements, errors = self._consume(result)
        if not multi:
            elements = elements[:1]

        self._dump(
            "locate",
            user_query,
            start,
            log_id=log_id,
            usage=result.usage,
            error="; ".join(errors) or None,
            raw_response=result.raw_response,
            matched_element=[element.to_dict() for element in elements],
        )

        if not elements and errors:
            raise ElementNotFoundError(
                f"Failed to locate '{query}': {'; '.join(errors)}",
                target_description=query,
            )
        return elements

    async def extract(self, data_query: DataQuery) -> Any:
        """
        Read data off the page.

        Args:
            data_query: What to extract; a string, or a mapping of result key
                to description for a key-value answer

        Returns:
            The ``data`` field of the model answer

        Raises:
            DataExtractionError: If the model returned no data and reported errors
            InvalidInputError: If the query is empty
            MalformedAIResponseError: If the answer is not an extraction object
        """
        start = time.time()
        user_query = {"data_demand": data_query}
        log_id = self._dump("extract", user_query, start)
        try:
            result = await ai_extract_element_info(self.context, data_query, call_ai=self._call_ai)
        except WebInspectorError as e:
            self._dump("extract", user_query, start, log_id=log_id, error=str(e), raw_response=_raw_of(e))
            raise

        answer = result.parse_result
        self._dump(
            "extract",
            user_query,
            start,
            log_id=log_id,
            usage=result.usage,
            error="; ".join(answer.errors) or None,
            raw_response=result.raw_response,
            data=answer.data,
        )

        if answer.data is None and answer.errors:
            raise DataExtractionError(
                f"Failed to extract data: {'; '.join(answer.errors)}",
                data_query=str(data_query),
                errors=answer.errors,
            )
        return answer.data

    async def assert_(self, assertion: str) -> AssertResponse:
        """
        Check an assertion about the page.

        A failed assertion is a normal result (``passed`` is False); raising
        on it is up to the caller.

        Raises:
            InvalidInputError: If the assertion is empty
            MalformedAIResponseError: If the answer has no boolean ``pass``
        """
        start = time.time()
        user_query = {"assertion": assertion}
        log_id = self._dump("assert", user_query, start)
        try:
            result = await ai_assert(self.context, assertion, call_ai=self._call_ai)
        except WebInspectorError as e:
            self._dump("assert", user_query, start, log_id=log_id, error=str(e), raw_response=_raw_of(e))
            raise

        self._dump(
            "assert",
            user_query,
            start,
            log_id=log_id,
            usage=result.usage,
            raw_response=result.raw_response,
            assertion_pass=result.content.passed,
            assertion_thought=result.content.thought,
        )
        return result.content

    def _consume(self, result: InspectResult) -> tuple[List[Element], List[str]]:
        """
        Turn references into elements, collecting errors for unknown ids.

        ``position`` entries of an element list are absolute page pixels,
        unlike a bare ``[x, y]`` answer, which is on the 0-1000 scale and has
        already been resolved to an id by ai_inspect_element.
        """
        elements: List[Element] = []
        errors = list(result.parse_result.errors)
        seen = set()

        for item in result.parse_result.elements:
            element: Optional[Element] = None
            if isinstance(item, Element):
                element = item
            else:
                if item.id:
                    element = result.element_by_id(item.id)
                if element is None and item.position is not None:
                    point = item.position.to_point()
                    element = element_by_position(self.context.tree, point)
                    if element is None:
                        element = result.index.insert_element_by_position(point)
                if element is None:
                    message = f"Element id {item.id} not found in snapshot"
                    logger.warning(message)
                    errors.append(message)
                    continue

            if element.id not in seen:
                seen.add(element.id)
                elements.append(element)

        return elements, errors

    def _dump(
        self,
        kind: str,
        user_query: Dict[str, Any],
        start: float,
        log_id: Optional[str] = None,
        usage: Optional[Usage] = None,
        error: Optional[str] = None,
        raw_response: Any = None,
        **fields: Any,
    ) -> Optional[str]:
        """Emit a record for one call; pass the returned log id to update it."""
        if self._dump_store is None or not self._settings.dump.enabled:
            return None

        data: Dict[str, Any] = {
            "type": kind,
            "user_query": user_query,
            "matched_element": [],
            "error": error,
            "raw_response": raw_response,
            "usage": usage.to_dict() if usage else None,
            "task_duration_ms": round((time.time() - start) * 1000),
            **fields,
        }
        return self._dump_store.emit(data, log_id=log_id, subscriber=self._dump_subscriber)
