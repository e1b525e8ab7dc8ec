"""Graph builder: constructs the LangGraph daily analysis topology.

Topology:

    START → build_periods → collect_records → assemble_prompt
          → request_narrative → route_narrative
               ├── "end"      → END
               └── "fallback" → deterministic_summary → END
"""

from __future__ import annotations

from langgraph.graph import END, START, StateGraph

from wildlife_insight.graph.nodes import (
    assemble_prompt,
    build_periods,
    deterministic_summary,
    make_collect_records,
    make_request_narrative,
    route_narrative,
)
from wildlife_insight.graph.state import AnalysisState
from wildlife_insight.llm.completion import CompletionClient
from wildlife_insight.store.base import RecordReader


def build_analysis_graph(
    reader: RecordReader,
    completion: CompletionClient,
    *,
    max_tokens: int,
    temperature: float,
):
    """Construct and compile the daily analysis graph.

    Returns:
        A compiled LangGraph application; invoke it with ``ainvoke``.
    """
    graph = StateGraph(AnalysisState)

    # ── Register nodes ───────────────────────────────────────────────────
    graph.add_node("build_periods", build_periods)
    graph.add_node("collect_records", make_collect_records(reader))
    graph.add_node("assemble_prompt", assemble_prompt)
    graph.add_node(
        "request_narrative",
        make_request_narrative(completion, max_tokens=max_tokens, temperature=temperature),
    )
    graph.add_node("deterministic_summary", deterministic_summary)

    # ── Edges ────────────────────────────────────────────────────────────
    graph.add_edge(START, "build_periods")
    graph.add_edge("build_periods", "collect_records")
    graph.add_edge("collect_records", "assemble_prompt")
    graph.add_edge("assemble_prompt", "request_narrative")

    # ── Fallback edge ────────────────────────────────────────────────────
    graph.add_conditional_edges(
        "request_narrative",
        route_narrative,
        {
            "end": END,
            "fallback": "deterministic_summary",
        },
    )
    graph.add_edge("deterministic_summary", END)

    return graph.compile()
