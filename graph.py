# graph.py
import logging
from typing import Callable, Dict, List, Mapping, Optional, TypedDict

from langgraph.graph import StateGraph, END

from agents.answer_writer import ask_llm
from agents.web_search import search_web
from citations import build_citation_map
from config import Settings
from docx_export import render_document
from html_render import render_html

logger = logging.getLogger(__name__)

Searcher = Callable[[str, Settings], List[Dict[str, str]]]
Writer = Callable[[str, str, Mapping[str, str], str, Settings], str]

DEFAULT_QUESTION = "Provide a comprehensive summary of the information related to: {query}"


class AnalysisState(TypedDict, total=False):
    # input
    query: str
    question: Optional[str]
    model_choice: Optional[str]

    # search + citations
    hits: List[Dict[str, str]]
    citations: Dict[str, str]
    context: str

    # answer
    raw_answer: str

    # outputs
    formatted_answer: str
    docx_bytes: bytes


def build_graph(settings: Settings, searcher: Searcher = search_web, writer: Writer = ask_llm):
    """
    search -> cite -> answer -> (render_html, render_docx) -> END

    The two render steps run off the same state and don't see each other.
    """

    def search_node(state: AnalysisState) -> Dict:
        return {"hits": searcher(state["query"], settings)}

    def cite_node(state: AnalysisState) -> Dict:
        citations, context = build_citation_map(state.get("hits") or [])
        logger.info("Built %d citations", len(citations))
        return {"citations": citations, "context": context}

    def answer_node(state: AnalysisState) -> Dict:
        query = state["query"]
        question = (state.get("question") or "").strip() or DEFAULT_QUESTION.format(query=query)
        model = (state.get("model_choice") or "").strip() or settings.default_model
        raw = writer(question, state.get("context") or "", state["citations"], model, settings)
        return {"raw_answer": raw}

    def render_html_node(state: AnalysisState) -> Dict:
        return {"formatted_answer": render_html(state["raw_answer"], state["citations"])}

    def render_docx_node(state: AnalysisState) -> Dict:
        return {"docx_bytes": render_document(state["raw_answer"], state["citations"])}

    graph = StateGraph(AnalysisState)

    graph.add_node("search", search_node)
    graph.add_node("cite", cite_node)
    graph.add_node("answer", answer_node)
    graph.add_node("render_html", render_html_node)
    graph.add_node("render_docx", render_docx_node)

    graph.set_entry_point("search")
    graph.add_edge("search", "cite")
    graph.add_edge("cite", "answer")

    graph.add_edge("answer", "render_html")
    graph.add_edge("answer", "render_docx")

    graph.add_edge("render_html", END)
    graph.add_edge("render_docx", END)

    return graph.compile()
