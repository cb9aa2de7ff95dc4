"""Tests for the HTML fragment renderer."""

import re

from content_processing import Block, BlockKind
from html_render import HEADING_STYLE, render_block, render_html, render_references


class TestRenderBlock:
    def test_merged_heading(self) -> None:
        html = render_block(Block(BlockKind.HEADING_MERGED, "*Intro*", number="1."))
        assert html == f'<h3 style="{HEADING_STYLE}"><strong>1.</strong> *Intro*</h3>'

    def test_heading(self) -> None:
        assert render_block(Block(BlockKind.HEADING, "*Intro*")) == f'<h3 style="{HEADING_STYLE}">*Intro*</h3>'

    def test_numbered_point(self) -> None:
        assert render_block(Block(BlockKind.NUMBERED_POINT, "2.")) == "<p><strong>2.</strong></p>"

    def test_bullet(self) -> None:
        assert render_block(Block(BlockKind.BULLET_ITEM, "point")) == "<li>point</li>"

    def test_paragraph(self) -> None:
        assert render_block(Block(BlockKind.PARAGRAPH, "text")) == "<p>text</p>"

    def test_empty_renders_nothing(self) -> None:
        assert render_block(Block(BlockKind.EMPTY, "")) == ""


class TestRenderReferences:
    def test_one_entry_per_citation_in_order(self, two_citations) -> None:
        html = render_references(two_citations)
        assert html.index('id="ref-1"') < html.index('id="ref-2"')
        assert '<li id="ref-1">[1]: <a href="http://a" target="_blank">http://a</a></li>' in html
        assert '<li id="ref-2">[2]: <a href="http://b" target="_blank">http://b</a></li>' in html

    def test_url_is_attribute_escaped(self) -> None:
        html = render_references({"[1]": 'http://x/?a=1&b="2"'})
        assert 'href="http://x/?a=1&amp;b=&quot;2&quot;"' in html


class TestRenderHtml:
    def test_end_to_end(self, two_citations) -> None:
        html = render_html("Intro [1] and [2].\n- point one", two_citations)

        assert html.startswith('<div style="')
        assert html.endswith("</div>")
        assert '<p>Intro <a href="#ref-1" target="_blank">[1]</a> and <a href="#ref-2" target="_blank">[2]</a>.</p>' in html
        assert "<li>point one</li>" in html
        assert re.findall(r'<li id="(ref-\d+)">', html) == ["ref-1", "ref-2"]

    def test_links_only_labels_in_the_map(self) -> None:
        html = render_html("See [1] and [5]", {"[1]": "http://a"})
        assert '<a href="#ref-1"' in html
        assert "#ref-5" not in html
        assert "and [5]" in html

    def test_every_label_gets_a_reference_link(self) -> None:
        citations = {"[1]": "http://a", "[3]": "http://c"}
        html = render_html("No citations used here.", citations)
        for url in citations.values():
            assert f'<a href="{url}" target="_blank">{url}</a>' in html

    def test_sanitizes_before_segmenting(self) -> None:
        html = render_html("1.\n**Overview**\nBody text...Next", {"[1]": "http://a"})
        assert f'<h3 style="{HEADING_STYLE}"><strong>1.</strong> *Overview*</h3>' in html
        assert "<p>Body text. Next</p>" in html

    def test_markup_in_answer_is_stripped(self) -> None:
        html = render_html("<script>alert(1)</script>", {"[1]": "http://a"})
        assert "<script>" not in html

    def test_output_is_deterministic(self, two_citations) -> None:
        raw = "1.\n*A* [1]\n- b [2]\nc"
        assert render_html(raw, two_citations) == render_html(raw, two_citations)
