"""
Tests for ai_inspect_element and its helpers.
"""

import pytest

from llm_web_inspector.ai_model.inspect import (
    ResolutionResult,
    ai_inspect_element,
    build_locate_messages,
    get_quick_answer,
    transform_element_position_to_id,
)
from llm_web_inspector.ai_model.schemas import ElementListResponse, ElementRef, PositionResponse
from llm_web_inspector.config.settings import InspectorSettings
from llm_web_inspector.exceptions import (
    ElementNotFoundError,
    InvalidInputError,
    MalformedAIResponseError,
)
from llm_web_inspector.interfaces.llm import MessageRole, Usage
from llm_web_inspector.llm.service_caller import AICallResult
from llm_web_inspector.snapshot.indexer import SnapshotIndex
from llm_web_inspector.snapshot.models import ElementTreeNode, NodeType, Rect, Size, UIContext

from conftest import leaf, make_element


class TestGetQuickAnswer:
    """Test resolving caller-supplied candidates."""
    
    def test_known_id(self, sample_tree):
        index = SnapshotIndex.build(sample_tree)
        
        result = get_quick_answer({"id": "T2"}, sample_tree, index)
        
        assert result.parse_result.elements[0].id == "T2"
        assert result.raw_response == {"id": "T2"}
        assert result.usage is None
    
    def test_marker_id(self, sample_tree):
        index = SnapshotIndex.build(sample_tree)
        
        result = get_quick_answer(ElementRef(id="1"), sample_tree, index)
        
        assert result.parse_result.elements[0].id == "L1"
    
    def test_unknown_id_falls_back_to_position(self, sample_tree):
        index = SnapshotIndex.build(sample_tree)
        
        result = get_quick_answer({"id": "gone", "position": {"x": 60, "y": 60}}, sample_tree, index)
        
        assert result.parse_result.elements[0].id == "L1"
    
    def test_position_miss_synthesizes(self, sample_tree):
        index = SnapshotIndex.build(sample_tree)
        
        result = get_quick_answer({"position": {"x": 600, "y": 600}}, sample_tree, index)
        
        element = result.parse_result.elements[0]
        assert element.node_type == NodeType.POSITION
        assert index.element_by_id(element.id) is element
    
    @pytest.mark.parametrize("quick_answer", [None, {}, {"id": "gone"}, {"position": "nope"}])
    def test_unusable(self, sample_tree, quick_answer):
        index = SnapshotIndex.build(sample_tree)
        
        assert get_quick_answer(quick_answer, sample_tree, index) is None


class TestTransformElementPositionToId:
    """Test normalizing parsed answers."""
    
    def test_element_list_passthrough(self, sample_tree):
        """Unknown ids are left for the consumer to check."""
        index = SnapshotIndex.build(sample_tree)
        response = ElementListResponse(elements=[ElementRef(id="nope")], errors=["hmm"])
        
        result = transform_element_position_to_id(response, sample_tree, index, Size(1000, 800))
        
        assert result.elements[0].id == "nope"
        assert result.errors == ["hmm"]
    
    def test_position_hit(self, sample_tree):
        index = SnapshotIndex.build(sample_tree)
        
        result = transform_element_position_to_id(
            PositionResponse(x=60, y=75), sample_tree, index, Size(1000, 800)
        )
        
        assert result.elements == [ElementRef(id="L1")]
    
    def test_position_miss_raise_policy(self, sample_tree):
        index = SnapshotIndex.build(sample_tree)
        
        with pytest.raises(ElementNotFoundError) as exc_info:
            transform_element_position_to_id(
                PositionResponse(x=500, y=500),
                sample_tree,
                index,
                Size(1000, 800),
                target_description="the canvas",
                position_miss_policy="raise",
            )
        
        assert exc_info.value.position == (500, 400)
        assert len(index) == 3


class TestBuildLocateMessages:
    """Test the model exchange."""
    
    def test_system_then_user_with_image(self):
        messages = build_locate_messages("desc", "data:image/png;base64,AAAA", "the logo", False)
        
        assert [m.role for m in messages] == [MessageRole.SYSTEM, MessageRole.USER]
        assert messages[1].images[0].url == "data:image/png;base64,AAAA"
        assert messages[1].images[0].detail == "high"
        assert "the logo" in messages[1].content


class TestAIInspectElement:
    """Test the full resolution flow."""
    
    @pytest.mark.asyncio
    async def test_quick_answer_skips_model(self, mock_ai):
        element = make_element("42", 10, 10, 30, 30, content="Checkout")
        context = UIContext(
            tree=ElementTreeNode(children=[leaf(element)]),
            size=Size(1000, 800),
        )
        
        result = await ai_inspect_element(context, "checkout", mock_ai, quick_answer={"id": "42"})
        
        assert result.parse_result.elements == [element]
        mock_ai.assert_not_awaited()
    
    @pytest.mark.asyncio
    async def test_empty_description_rejected(self, sample_context, mock_ai):
        with pytest.raises(InvalidInputError):
            await ai_inspect_element(sample_context, "   ", mock_ai)
        
        mock_ai.assert_not_awaited()
    
    @pytest.mark.asyncio
    async def test_empty_description_with_unknown_quick_answer(self, sample_context, mock_ai):
        with pytest.raises(InvalidInputError):
            await ai_inspect_element(sample_context, "", mock_ai, quick_answer={"id": "missing"})
        
        mock_ai.assert_not_awaited()
    
    @pytest.mark.asyncio
    async def test_messages_sent(self, sample_context, mock_ai):
        sample_context.screenshot_base64_with_element_marker = "data:image/png;base64,MARKED"
        
        await ai_inspect_element(sample_context, "the Sign in link", mock_ai)
        
        messages = mock_ai.await_args.args[0]
        assert messages[0].role == MessageRole.SYSTEM
        assert "The size of the page: 1000 x 800" in messages[1].content
        assert 'id="T2"' in messages[1].content
        assert "the Sign in link" in messages[1].content
        assert messages[1].images[0].url == "data:image/png;base64,MARKED"
    
    @pytest.mark.asyncio
    async def test_element_list_answer(self, sample_context, mock_ai):
        usage = Usage(prompt_tokens=10, completion_tokens=5, total_tokens=15)
        mock_ai.return_value = AICallResult(content={"elements": [{"id": "T2"}], "errors": []}, usage=usage)
        
        result = await ai_inspect_element(sample_context, "the Sign in link", mock_ai)
        
        assert result.parse_result.elements == [ElementRef(id="T2")]
        assert result.raw_response == {"elements": [{"id": "T2"}], "errors": []}
        assert result.usage is usage
        assert result.element_by_id("T2").content == "Sign in"
    
    @pytest.mark.asyncio
    async def test_position_answer_synthesizes(self, empty_context, mock_ai):
        """[500, 500] on a 1000x800 page with nothing there."""
        mock_ai.return_value = AICallResult(content=[500, 500])
        
        result = await ai_inspect_element(empty_context, "the center", mock_ai)
        
        [ref] = result.parse_result.elements
        element = result.element_by_id(ref.id)
        assert element.rect == Rect(496, 396, 8, 8)
        assert element.center == (500, 400)
        assert element.node_type == NodeType.POSITION
        assert empty_context.tree.children[-1].node is element
    
    @pytest.mark.asyncio
    async def test_position_answer_hits_element(self, sample_context, mock_ai):
        mock_ai.return_value = AICallResult(content=[350, 43.75])
        
        result = await ai_inspect_element(sample_context, "the Sign in link", mock_ai)
        
        assert result.parse_result == ResolutionResult(elements=[ElementRef(id="T2")])
        assert len(result.index) == 3
    
    @pytest.mark.asyncio
    async def test_position_miss_raise_policy(self, sample_context, mock_ai):
        mock_ai.return_value = AICallResult(content=[500, 500])
        settings = InspectorSettings(position_miss_policy="raise")
        
        with pytest.raises(ElementNotFoundError):
            await ai_inspect_element(sample_context, "the canvas", mock_ai, settings=settings)
        
        assert len(sample_context.tree.children) == 2
    
    @pytest.mark.asyncio
    async def test_malformed_answer(self, sample_context, mock_ai):
        mock_ai.return_value = AICallResult(content={"answer": "T2"})
        
        with pytest.raises(MalformedAIResponseError) as exc_info:
            await ai_inspect_element(sample_context, "the Sign in link", mock_ai)
        
        assert exc_info.value.target_description == "the Sign in link"
    
    @pytest.mark.asyncio
    async def test_match_by_position_omits_tree(self, sample_context, mock_ai):
        settings = InspectorSettings(match_by_position=True)
        
        await ai_inspect_element(sample_context, "the logo", mock_ai, settings=settings)
        
        assert "The page elements tree" not in mock_ai.await_args.args[0][1].content
    
    @pytest.mark.asyncio
    async def test_model_error_propagates(self, sample_context, mock_ai):
        from llm_web_inspector.exceptions import LLMConnectionError
        mock_ai.side_effect = LLMConnectionError("down")
        
        with pytest.raises(LLMConnectionError):
            await ai_inspect_element(sample_context, "the logo", mock_ai)
        
        assert len(sample_context.tree.children) == 2
