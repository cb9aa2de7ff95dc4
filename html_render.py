# html_render.py
from html import escape
from typing import Iterable, Mapping

from citations import anchor_id, link_citations
from content_processing import Block, BlockKind, sanitize_text, segment_blocks


HEADING_STYLE = "color: #0066cc; font-size: 1.2em;"
REFERENCES_HEADING_STYLE = "color: #0066cc;"
CONTAINER_STYLE = "font-family: Arial, sans-serif; line-height: 1.6; color: #333;"


def render_block(block: Block) -> str:
    if block.kind == BlockKind.HEADING_MERGED:
        return f'<h3 style="{HEADING_STYLE}"><strong>{block.number}</strong> {block.text}</h3>'
    if block.kind == BlockKind.HEADING:
        return f'<h3 style="{HEADING_STYLE}">{block.text}</h3>'
    if block.kind == BlockKind.NUMBERED_POINT:
        return f"<p><strong>{block.text}</strong></p>"
    if block.kind == BlockKind.BULLET_ITEM:
        return f"<li>{block.text}</li>"
    if block.kind == BlockKind.PARAGRAPH:
        return f"<p>{block.text}</p>"
    return ""


def render_blocks(blocks: Iterable[Block]) -> str:
    return "".join(render_block(b) for b in blocks)


def render_references(citations: Mapping[str, str]) -> str:
    items = []
    for label, url in citations.items():
        href = escape(url, quote=True)
        items.append(f'<li id="{anchor_id(label)}">{label}: <a href="{href}" target="_blank">{href}</a></li>')
    return f'<h2 style="{REFERENCES_HEADING_STYLE}">References</h2><ul>{"".join(items)}</ul>'


def render_html(raw_answer: str, citations: Mapping[str, str]) -> str:
    """
    Raw model answer -> HTML fragment.

    sanitize -> link citations -> segment -> render, then the references
    list. Output depends only on the inputs.
    """
    linked = link_citations(sanitize_text(raw_answer), citations)
    body = render_blocks(segment_blocks(linked))
    return f'<div style="{CONTAINER_STYLE}">{body}{render_references(citations)}</div>'
