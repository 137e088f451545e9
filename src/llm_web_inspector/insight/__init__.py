"""
Insight module - element locating with diagnostic dumps.
"""

from llm_web_inspector.insight.dump import InsightDumpStore, DumpSubscriber
from llm_web_inspector.insight.insight import Insight

__all__ = [
    "Insight",
    "InsightDumpStore",
    "DumpSubscriber",
]
