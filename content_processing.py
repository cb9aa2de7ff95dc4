from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
import re


_MULTI_STAR = re.compile(r"\*{2,}")
_MULTI_DOT = re.compile(r"\.{2,}")
_DOT_BEFORE_UPPER = re.compile(r"\.(?=[A-Z])")
# ASCII letters/digits only; \s stays Unicode-aware
_DISALLOWED_CHARS = re.compile(r'[^A-Za-z0-9_\s.,;:!?*\[\]()"-]')

_NUMBER_LINE = re.compile(r"^[0-9]+\.$")
# merge target needs at least "*x*" and is matched unstripped, so an indented
# "*x*" does not merge; a lone "*" still counts as a standalone heading
_BOLD_LINE = re.compile(r"^\*.*\*$")


def _sanitize_once(text: str) -> str:
    text = _MULTI_STAR.sub("*", text)
    text = _MULTI_DOT.sub(".", text)
    text = _DOT_BEFORE_UPPER.sub(". ", text)
    return _DISALLOWED_CHARS.sub("", text)


def sanitize_text(text: str) -> str:
    """
    Normalize raw model output before it is segmented.

    Rules, in order:
      1) runs of '*' -> single '*'
      2) runs of '.' -> single '.'
      3) '.' glued to an uppercase letter gets a space
      4) drop anything not alphanumeric, whitespace or .,;:!?*[]()"-

    The pass repeats until nothing changes: dropping characters in (4) can
    glue two dots or two stars together again.
    """
    out = text or ""
    while True:
        cleaned = _sanitize_once(out)
        if cleaned == out:
            return cleaned
        out = cleaned


class BlockKind(str, Enum):
    HEADING_MERGED = "heading_merged"
    HEADING = "heading"
    NUMBERED_POINT = "numbered_point"
    BULLET_ITEM = "bullet_item"
    PARAGRAPH = "paragraph"
    EMPTY = "empty"


@dataclass(frozen=True)
class Block:
    kind: BlockKind
    text: str
    number: Optional[str] = None


def _is_number_line(line: str) -> bool:
    return bool(_NUMBER_LINE.match(line))


def _is_heading_line(line: str) -> bool:
    return line.startswith("*") and line.endswith("*")


def _is_bullet_line(line: str) -> bool:
    return line.startswith("-")


# evaluated top to bottom, first match wins
_LINE_RULES = (
    (BlockKind.EMPTY, lambda line: line == ""),
    (BlockKind.NUMBERED_POINT, _is_number_line),
    (BlockKind.HEADING, _is_heading_line),
    (BlockKind.BULLET_ITEM, _is_bullet_line),
)


def classify_line(line: str) -> BlockKind:
    for kind, matches in _LINE_RULES:
        if matches(line):
            return kind
    return BlockKind.PARAGRAPH


def _make_block(kind: BlockKind, line: str) -> Block:
    if kind == BlockKind.BULLET_ITEM:
        return Block(kind, line[1:].strip())
    return Block(kind, line)


def segment_blocks(text: str) -> List[Block]:
    """
    Split text into typed blocks, one line of look-ahead.

    A bare "N." followed by a "*...*" line becomes one HEADING_MERGED block
    and the heading line is consumed. Only the next line is inspected, so in
    "1." / "*A*" / "*B*" the "*B*" line stays a standalone heading. The
    heading line is checked as-is: "  *A*" after "1." does not merge.
    Blank lines are dropped.
    """
    raw_lines = (text or "").split("\n")
    lines = [ln.strip() for ln in raw_lines]
    blocks: List[Block] = []

    i = 0
    while i < len(lines):
        line = lines[i]
        kind = classify_line(line)

        if kind == BlockKind.NUMBERED_POINT and i + 1 < len(lines) and _BOLD_LINE.match(raw_lines[i + 1]):
            blocks.append(Block(BlockKind.HEADING_MERGED, raw_lines[i + 1], number=line))
            i += 2
            continue

        if kind != BlockKind.EMPTY:
            blocks.append(_make_block(kind, line))
        i += 1

    return blocks
