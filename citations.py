# citations.py
from typing import Any, Dict, Iterable, Mapping, Tuple
import re

from errors import EmptyResultsError


# label -> url, insertion order is the reference order
CitationMap = Dict[str, str]

# exactly "[" + digits + "]", no inner whitespace
CITATION_TOKEN = re.compile(r"\[(\d+)\]")
CITATION_SPLIT = re.compile(r"(\[\d+\])")


def build_citation_map(hits: Iterable[Mapping[str, Any]]) -> Tuple[CitationMap, str]:
    """
    Number search hits into citation labels.

    - label is [i + 1] where i is the hit's position in the FULL list,
      so a skipped hit leaves a gap ([1], [3], ...)
    - hits without a snippet or link are skipped
    - returns (citations, context) where context is the space-joined snippets
    """
    snippets = []
    citations: CitationMap = {}

    for index, hit in enumerate(hits or []):
        if not hit:
            continue
        snippet = hit.get("snippet")
        link = hit.get("link")
        if snippet and link:
            snippets.append(snippet)
            citations[f"[{index + 1}]"] = link

    if not citations:
        raise EmptyResultsError("No search results found")

    return citations, " ".join(snippets)


def anchor_id(label: str) -> str:
    return "ref-" + label.strip("[]")


def link_citations(text: str, citations: Mapping[str, str]) -> str:
    """Replace every known [n] with an in-page link to its reference entry.

    Unknown labels stay as literal text.
    """
    def repl(m: "re.Match[str]") -> str:
        label = m.group(0)
        if label not in citations:
            return label
        return f'<a href="#{anchor_id(label)}" target="_blank">{label}</a>'

    return CITATION_TOKEN.sub(repl, text or "")
