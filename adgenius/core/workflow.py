"""Workflow builder for the campaign run pipeline"""

import logging
from typing import Any, List, Optional, Protocol, TypedDict

from langgraph.graph import StateGraph, END

from .models import GenerationJob, ProductAnalysis, RunConfiguration
from .state import JobStateStore, RunSnapshot

logger = logging.getLogger(__name__)


class CampaignState(TypedDict, total=False):
    """State passed between run pipeline nodes"""
    config: RunConfiguration
    store: JobStateStore
    analysis: Optional[ProductAnalysis]
    jobs: List[GenerationJob]
    snapshot: Optional[RunSnapshot]


class CampaignNodes(Protocol):
    """Node callables the run pipeline needs (implemented by the orchestrator)"""

    async def validate_input(self, state: CampaignState) -> dict: ...

    async def check_credentials(self, state: CampaignState) -> dict: ...

    async def analyze(self, state: CampaignState) -> dict: ...

    async def synthesize(self, state: CampaignState) -> dict: ...

    async def generate(self, state: CampaignState) -> dict: ...


def build_campaign_workflow(nodes: CampaignNodes) -> Any:
    """
    Build the linear run pipeline

    validate_input -> credential_gate -> analyze -> synthesize -> generate -> END

    Node exceptions propagate out of ainvoke; the caller owns run-level
    error handling.

    Args:
        nodes: Object providing the node coroutines

    Returns:
        Compiled langgraph workflow
    """
    workflow = StateGraph(CampaignState)

    workflow.add_node("validate_input", nodes.validate_input)
    workflow.add_node("credential_gate", nodes.check_credentials)
    workflow.add_node("analyze", nodes.analyze)
    workflow.add_node("synthesize", nodes.synthesize)
    workflow.add_node("generate", nodes.generate)

    workflow.set_entry_point("validate_input")
    workflow.add_edge("validate_input", "credential_gate")
    workflow.add_edge("credential_gate", "analyze")
    workflow.add_edge("analyze", "synthesize")
    workflow.add_edge("synthesize", "generate")
    workflow.add_edge("generate", END)

    compiled_workflow = workflow.compile()
    logger.debug("[Workflow] Campaign workflow compiled")
    return compiled_workflow
