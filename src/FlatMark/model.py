from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class ListType(Enum):
    ORDERED = "ordered"
    UNORDERED = "unordered"


@dataclass(frozen=True)
class SourceRange:
    """Half-open UTF-8 byte interval into the original source text."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def select(self, source: str) -> str:
        return source.encode("utf-8")[self.start : self.end].decode("utf-8")


@dataclass(frozen=True)
class Inline:
    """Base class for inline nodes."""


@dataclass(frozen=True)
class InlineText(Inline):
    text: str


@dataclass(frozen=True)
class InlineSoftBreak(Inline):
    """Line ending inside a paragraph."""


@dataclass(frozen=True)
class InlineLineBreak(Inline):
    """Hard line break."""


@dataclass(frozen=True)
class InlineCode(Inline):
    text: str


@dataclass(frozen=True)
class InlineEmphasis(Inline):
    children: List[Inline]


@dataclass(frozen=True)
class InlineStrong(Inline):
    children: List[Inline]


@dataclass(frozen=True)
class InlineStrikethrough(Inline):
    children: List[Inline]


@dataclass(frozen=True)
class InlineLink(Inline):
    children: List[Inline]
    title: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class InlineImage(Inline):
    children: List[Inline]
    title: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class InlineHtml(Inline):
    text: str


@dataclass(frozen=True)
class InlineMention(Inline):
    login: str


@dataclass(frozen=True)
class InlineCheckbox(Inline):
    checked: bool
    source_range: SourceRange


@dataclass(frozen=True)
class InlineCustom(Inline):
    literal: str


@dataclass(frozen=True)
class Block:
    """Base class for block-level nodes."""


@dataclass(frozen=True)
class Paragraph(Block):
    inlines: List[Inline]


@dataclass(frozen=True)
class Heading(Block):
    inlines: List[Inline]
    level: int


@dataclass(frozen=True)
class BlockQuote(Block):
    blocks: List[Block]


@dataclass(frozen=True)
class ListBlock(Block):
    items: List[List[Block]]
    kind: ListType


@dataclass(frozen=True)
class CodeBlock(Block):
    text: str
    language: str | None = None


@dataclass(frozen=True)
class HtmlBlock(Block):
    text: str


@dataclass(frozen=True)
class ThematicBreak(Block):
    """Horizontal rule / thematic break."""


@dataclass(frozen=True)
class TableCell(Block):
    inlines: List[Inline]


@dataclass(frozen=True)
class TableRow(Block):
    cells: List[TableCell]


@dataclass(frozen=True)
class TableHeader(Block):
    cells: List[TableCell]


@dataclass(frozen=True)
class TableBlock(Block):
    rows: List[TableHeader | TableRow]


@dataclass(frozen=True)
class CustomBlock(Block):
    literal: str


@dataclass(frozen=True)
class Document:
    blocks: List[Block]
