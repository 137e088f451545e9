"""
LLM Web Inspector - resolve UI element descriptions against page snapshots.

Given a captured snapshot (element tree + screenshot) and a description of a
target element, the inspector returns the concrete element(s) automation can
act on. Cheap shortcuts are tried before any model call, and coordinate
answers from vision models are mapped back onto the element tree.

Example:
    >>> from llm_web_inspector import Insight, UIContext, create_ai_caller, OpenAIProvider
    >>> context = UIContext.from_dict(snapshot_json)
    >>> provider = OpenAIProvider(base_url="https://api.openai.com", model="gpt-4o")
    >>> insight = Insight(context, call_ai=create_ai_caller(provider))
    >>> elements = await insight.locate("the search box")
"""

__version__ = "0.1.0"

# Public API exports
from llm_web_inspector.config.settings import Settings
from llm_web_inspector.snapshot.models import Element, ElementTreeNode, NodeType, Point, Size, UIContext
from llm_web_inspector.ai_model.inspect import ai_inspect_element, InspectResult
from llm_web_inspector.llm.openai_provider import OpenAIProvider
from llm_web_inspector.llm.service_caller import create_ai_caller
from llm_web_inspector.insight.insight import Insight
from llm_web_inspector.insight.dump import InsightDumpStore

__all__ = [
    "Settings",
    "Element",
    "ElementTreeNode",
    "NodeType",
    "Point",
    "Size",
    "UIContext",
    "ai_inspect_element",
    "InspectResult",
    "OpenAIProvider",
    "create_ai_caller",
    "Insight",
    "InsightDumpStore",
    "__version__",
]
