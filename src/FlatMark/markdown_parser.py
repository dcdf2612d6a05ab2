from __future__ import annotations

import logging
from typing import List, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .elements import Element
from .extensions import SOURCE_ENV_KEY, checkbox_plugin, mention_plugin
from .folding import flat_elements
from .model import (
    Block,
    BlockQuote,
    CodeBlock,
    Document,
    Heading,
    HtmlBlock,
    Inline,
    InlineCheckbox,
    InlineCode,
    InlineCustom,
    InlineEmphasis,
    InlineHtml,
    InlineImage,
    InlineLineBreak,
    InlineLink,
    InlineMention,
    InlineSoftBreak,
    InlineStrikethrough,
    InlineStrong,
    InlineText,
    ListBlock,
    ListType,
    Paragraph,
    TableBlock,
    TableCell,
    TableHeader,
    TableRow,
    ThematicBreak,
)

logger = logging.getLogger(__name__)

_CONTAINER_INLINES = {
    "em_open": ("em_close", InlineEmphasis),
    "strong_open": ("strong_close", InlineStrong),
    "s_open": ("s_close", InlineStrikethrough),
}


def create_parser() -> MarkdownIt:
    """Create the markdown-it parser: CommonMark, GFM tables, strikethrough and autolinks, mentions, checkboxes."""
    md = MarkdownIt("commonmark", {"linkify": True})
    md.enable(["table", "strikethrough", "linkify"])
    mention_plugin(md)
    checkbox_plugin(md)
    return md


_parser: MarkdownIt | None = None


def get_parser() -> MarkdownIt:
    global _parser
    if _parser is None:
        _parser = create_parser()
    return _parser


def parse_markdown(source: str | bytes) -> Document | None:
    """Parse Markdown source into a block tree.

    Returns ``None`` when the source cannot be read as UTF-8 text.
    """
    text = _decode(source)
    if text is None:
        return None
    tokens = get_parser().parse(text, {SOURCE_ENV_KEY: text})
    logger.debug("markdown-it produced %d block tokens", len(tokens))
    blocks, _ = _parse_blocks(tokens, 0, stop_types=set())
    return Document(blocks=blocks)


def parse_flat(source: str | bytes) -> List[Element] | None:
    return flat_elements(parse_markdown(source))


def markdown_to_html(source: str) -> str:
    return get_parser().render(source, {SOURCE_ENV_KEY: source})


def _decode(source: str | bytes) -> str | None:
    if isinstance(source, str):
        return source
    try:
        return source.decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.warning("Source is not valid UTF-8: %s", exc)
        return None


def _parse_blocks(tokens: Sequence[Token], index: int, stop_types: set[str]) -> tuple[list[Block], int]:
    blocks: List[Block] = []
    i = index
    while i < len(tokens):
        tok = tokens[i]
        if tok.type in stop_types:
            break
        if tok.type == "heading_open":
            level = int(tok.tag[1])
            blocks.append(Heading(inlines=_parse_inline(tokens[i + 1].children or []), level=level))
            i += 3
        elif tok.type == "paragraph_open":
            blocks.append(Paragraph(inlines=_parse_inline(tokens[i + 1].children or [])))
            i += 3
        elif tok.type == "blockquote_open":
            children, i = _parse_blocks(tokens, i + 1, stop_types={"blockquote_close"})
            blocks.append(BlockQuote(blocks=children))
            i += 1  # skip blockquote_close
        elif tok.type in ("bullet_list_open", "ordered_list_open"):
            ordered = tok.type == "ordered_list_open"
            closing = "ordered_list_close" if ordered else "bullet_list_close"
            i += 1
            items: list[list[Block]] = []
            while i < len(tokens) and tokens[i].type != closing:
                if tokens[i].type == "list_item_open":
                    item_blocks, i = _parse_blocks(tokens, i + 1, stop_types={"list_item_close"})
                    items.append(item_blocks)
                i += 1  # skip list_item_close
            kind = ListType.ORDERED if ordered else ListType.UNORDERED
            blocks.append(ListBlock(items=items, kind=kind))
            i += 1  # skip list close
        elif tok.type in ("fence", "code_block"):
            blocks.append(CodeBlock(text=tok.content, language=_fence_language(tok.info)))
            i += 1
        elif tok.type == "html_block":
            blocks.append(HtmlBlock(text=tok.content))
            i += 1
        elif tok.type == "hr":
            blocks.append(ThematicBreak())
            i += 1
        elif tok.type == "table_open":
            table_block, i = _parse_table(tokens, i)
            blocks.append(table_block)
        else:
            i += 1
    return blocks, i


def _fence_language(info: str) -> str | None:
    words = info.split()
    return words[0] if words else None


def _parse_table(tokens: Sequence[Token], index: int) -> tuple[TableBlock, int]:
    rows: list[TableHeader | TableRow] = []
    in_head = False
    i = index + 1
    while i < len(tokens):
        tok = tokens[i]
        if tok.type == "table_close":
            break
        if tok.type == "thead_open":
            in_head = True
        elif tok.type == "thead_close":
            in_head = False
        elif tok.type == "tr_open":
            cells: list[TableCell] = []
            i += 1
            while tokens[i].type != "tr_close":
                if tokens[i].type in {"th_open", "td_open"}:
                    cells.append(TableCell(inlines=_parse_inline(tokens[i + 1].children or [])))
                    i += 3  # skip cell open, inline, cell close
                else:
                    i += 1
            rows.append(TableHeader(cells=cells) if in_head else TableRow(cells=cells))
        i += 1
    return TableBlock(rows=rows), i + 1


def _parse_inline(children: Sequence[Token]) -> list[Inline]:
    inlines, _ = _parse_inline_until(children, 0, closing_type=None)
    return inlines


def _parse_inline_until(children: Sequence[Token], index: int, closing_type: str | None) -> tuple[list[Inline], int]:
    result: list[Inline] = []
    i = index
    while i < len(children):
        tok = children[i]
        if tok.type == closing_type:
            break
        if tok.type == "text":
            # markdown-it leaves empty text tokens around delimiter runs
            if tok.content:
                result.append(InlineText(tok.content))
        elif tok.type == "softbreak":
            result.append(InlineSoftBreak())
        elif tok.type == "hardbreak":
            result.append(InlineLineBreak())
        elif tok.type == "code_inline":
            result.append(InlineCode(tok.content))
        elif tok.type in _CONTAINER_INLINES:
            close_type, node_type = _CONTAINER_INLINES[tok.type]
            inner, i = _parse_inline_until(children, i + 1, close_type)
            result.append(node_type(children=inner))
        elif tok.type == "link_open":
            inner, close_index = _parse_inline_until(children, i + 1, "link_close")
            result.append(InlineLink(children=inner, title=_attr(tok, "title"), url=_attr(tok, "href")))
            i = close_index
        elif tok.type == "image":
            alt = _parse_inline(tok.children or [])
            result.append(InlineImage(children=alt, title=_attr(tok, "title"), url=_attr(tok, "src")))
        elif tok.type == "html_inline":
            result.append(InlineHtml(tok.content))
        elif tok.type == "mention":
            result.append(InlineMention(login=tok.meta["login"]))
        elif tok.type == "checkbox":
            result.append(InlineCheckbox(checked=tok.meta["checked"], source_range=tok.meta["range"]))
        elif tok.content:
            result.append(InlineCustom(tok.content))
        i += 1
    return result, i


def _attr(tok: Token, name: str) -> str:
    # an absent title or destination is an empty string, never None
    value = tok.attrGet(name)
    return "" if value is None else str(value)
