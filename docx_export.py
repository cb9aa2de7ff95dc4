# docx_export.py
import io
import re
from typing import List, Mapping

from docx import Document
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt

from citations import CITATION_SPLIT
from errors import StreamError


HEADING_FONT = "Arial"
HEADING_SIZE = Pt(14)
LINK_COLOR = "0000FF"

# XML 1.0 forbids these; python-docx raises on them
_XML_ILLEGAL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


class BufferSink(io.RawIOBase):
    """
    Write-only, non-seekable byte accumulator.

    zipfile falls back to streaming mode (data descriptors) when the target
    can't tell(), so every chunk python-docx emits lands here in order.

    Once closed, writes and flushes are dropped: after a failed save the
    ZipFile python-docx left open still writes its end record from __del__.
    """

    def __init__(self) -> None:
        super().__init__()
        self._chunks: List[bytes] = []

    def writable(self) -> bool:
        return True

    def write(self, b) -> int:
        data = bytes(b)
        if not self.closed:
            self._chunks.append(data)
        return len(data)

    def flush(self) -> None:
        if not self.closed:
            super().flush()

    def getvalue(self) -> bytes:
        return b"".join(self._chunks)


def _xml_safe(text: str) -> str:
    return _XML_ILLEGAL.sub("", text or "")


def add_hyperlink(paragraph, url: str, text: str):
    """Append a native w:hyperlink run pointing at an external url."""
    part = paragraph.part
    r_id = part.relate_to(url, RT.HYPERLINK, is_external=True)

    hyperlink = OxmlElement("w:hyperlink")
    hyperlink.set(qn("r:id"), r_id)

    new_run = OxmlElement("w:r")
    rPr = OxmlElement("w:rPr")
    color = OxmlElement("w:color")
    color.set(qn("w:val"), LINK_COLOR)
    rPr.append(color)
    u = OxmlElement("w:u")
    u.set(qn("w:val"), "single")
    rPr.append(u)
    new_run.append(rPr)

    t = OxmlElement("w:t")
    t.text = _xml_safe(text)
    t.set(qn("xml:space"), "preserve")
    new_run.append(t)

    hyperlink.append(new_run)
    paragraph._p.append(hyperlink)
    return paragraph


def _add_heading_run(doc, text: str) -> None:
    p = doc.add_paragraph()
    run = p.add_run(text)
    run.bold = True
    run.font.name = HEADING_FONT
    run.font.size = HEADING_SIZE


def build_document(raw_answer: str, citations: Mapping[str, str]):
    """
    Answer heading, one paragraph per line of the RAW answer, References.

    No sanitizing and no heading/bullet detection here: lines are plain
    paragraphs, only [n] tokens found in citations become hyperlinks.
    """
    doc = Document()
    _add_heading_run(doc, "Answer")

    for line in (raw_answer or "").split("\n"):
        p = doc.add_paragraph()
        for part in CITATION_SPLIT.split(line):
            if not part:
                continue
            url = citations.get(part)
            if url:
                add_hyperlink(p, url, part)
            else:
                p.add_run(_xml_safe(part))

    _add_heading_run(doc, "References")
    for label, url in citations.items():
        p = doc.add_paragraph()
        p.add_run(f"{label} ")
        add_hyperlink(p, url, url)

    return doc


def render_document(raw_answer: str, citations: Mapping[str, str]) -> bytes:
    doc = build_document(raw_answer, citations)

    sink = BufferSink()
    try:
        doc.save(sink)
        sink.flush()
        return sink.getvalue()
    except (OSError, ValueError) as e:
        raise StreamError(f"Failed to write document: {e}") from e
    finally:
        sink.close()
