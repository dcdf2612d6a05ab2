from __future__ import annotations

import logging
from typing import Iterable, List

from .elements import (
    CodeBlockElement,
    DataRow,
    Element,
    HeaderRow,
    HeadingElement,
    HorizontalRule,
    HtmlElement,
    ImageElement,
    ListElement,
    QuoteRun,
    TableElement,
    TextElement,
    TextLine,
    TextRun,
    lower_inline,
    lower_inlines,
)
from .model import (
    Block,
    BlockQuote,
    CodeBlock,
    Document,
    Heading,
    HtmlBlock,
    Inline,
    InlineHtml,
    InlineImage,
    ListBlock,
    Paragraph,
    TableBlock,
    TableHeader,
    TableRow,
    ThematicBreak,
)

logger = logging.getLogger(__name__)


class InlineBuilder:
    """Collapses consecutive text elements into runs, broken by images and html."""

    def __init__(self, quote_depth: int = 0) -> None:
        self.quote_depth = quote_depth
        self.pending_text: TextLine = []
        self.completed_elements: List[Element] = []

    def append(self, element: TextElement) -> None:
        self.pending_text.append(element)

    def break_and_emit(self, element: Element) -> None:
        self._flush()
        self.completed_elements.append(element)

    def finish(self) -> List[Element]:
        self._flush()
        return self.completed_elements

    def _flush(self) -> None:
        if not self.pending_text:
            return
        if self.quote_depth > 0:
            run: Element = QuoteRun(items=self.pending_text, depth=self.quote_depth)
        else:
            run = TextRun(items=self.pending_text)
        self.completed_elements.append(run)
        self.pending_text = []


def fold_inlines(inlines: Iterable[Inline], quote_depth: int = 0) -> List[Element]:
    builder = InlineBuilder(quote_depth)
    for inline in inlines:
        if isinstance(inline, InlineImage):
            # images missing a title or url are dropped entirely
            if inline.title is not None and inline.url is not None:
                builder.break_and_emit(ImageElement(title=inline.title, url=inline.url))
        elif isinstance(inline, InlineHtml):
            builder.break_and_emit(HtmlElement(text=inline.text))
        else:
            element = lower_inline(inline)
            if element is not None:
                builder.append(element)
    return builder.finish()


def fold_block(block: Block, quote_depth: int = 0, list_level: int = 0) -> List[Element]:
    """Flatten one block into elements.

    Quote depth only tags paragraph runs; headings, code and html blocks are
    emitted untagged wherever they sit. List items are folded at the quote
    depth of the list itself; ``list_level`` counts enclosing lists, 0 at the top.
    """
    if isinstance(block, Paragraph):
        return fold_inlines(block.inlines, quote_depth)
    if isinstance(block, Heading):
        return [HeadingElement(text=lower_inlines(block.inlines), level=block.level)]
    if isinstance(block, BlockQuote):
        return fold_blocks(block.blocks, quote_depth + 1, list_level)
    if isinstance(block, CodeBlock):
        return [CodeBlockElement(text=block.text, language=block.language)]
    if isinstance(block, HtmlBlock):
        return [HtmlElement(text=block.text)]
    if isinstance(block, ThematicBreak):
        return [HorizontalRule()]
    if isinstance(block, ListBlock):
        items = [fold_blocks(item, quote_depth, list_level + 1) for item in block.items]
        return [ListElement(items=items, kind=block.kind, level=list_level)]
    if isinstance(block, TableBlock):
        return [_fold_table(block)]
    # table parts outside a table and custom blocks have no mapping
    return []


def fold_blocks(blocks: Iterable[Block], quote_depth: int = 0, list_level: int = 0) -> List[Element]:
    elements: List[Element] = []
    for block in blocks:
        elements.extend(fold_block(block, quote_depth, list_level))
    return elements


def _fold_table(table: TableBlock) -> TableElement:
    rows: List[HeaderRow | DataRow] = []
    for row in table.rows:
        cells = [lower_inlines(cell.inlines) for cell in row.cells]
        if isinstance(row, TableHeader):
            rows.append(HeaderRow(cells=cells))
        elif isinstance(row, TableRow):
            rows.append(DataRow(cells=cells))
    return TableElement(rows=rows)


def flat_elements(document: Document | None) -> List[Element] | None:
    """Fold every top-level block of a parsed document, starting outside any quote.

    ``None`` means the parser produced no document and is passed through, so
    callers can tell it apart from a document with no elements.
    """
    if document is None:
        return None
    elements = fold_blocks(document.blocks, 0)
    logger.debug("Folded %d blocks into %d elements", len(document.blocks), len(elements))
    return elements
