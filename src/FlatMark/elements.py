from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .model import (
    Inline,
    InlineCheckbox,
    InlineCode,
    InlineCustom,
    InlineEmphasis,
    InlineLineBreak,
    InlineLink,
    InlineMention,
    InlineSoftBreak,
    InlineStrikethrough,
    InlineStrong,
    InlineText,
    ListType,
    SourceRange,
)


def _joined(children: Iterable["TextElement"]) -> str:
    return "".join(str(child) for child in children)


@dataclass(frozen=True)
class TextElement:
    """Base class for lowered inline content."""


@dataclass(frozen=True)
class Text(TextElement):
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class SoftBreak(TextElement):
    def __str__(self) -> str:
        return "\n"


@dataclass(frozen=True)
class LineBreak(TextElement):
    def __str__(self) -> str:
        return "\n"


@dataclass(frozen=True)
class Code(TextElement):
    text: str

    def __str__(self) -> str:
        return f"`{self.text}`"


@dataclass(frozen=True)
class Emphasis(TextElement):
    children: List[TextElement]

    def __str__(self) -> str:
        return f"_{_joined(self.children)}_"


@dataclass(frozen=True)
class Strong(TextElement):
    children: List[TextElement]

    def __str__(self) -> str:
        return f"**{_joined(self.children)}**"


@dataclass(frozen=True)
class Strikethrough(TextElement):
    children: List[TextElement]

    def __str__(self) -> str:
        return f"~~{_joined(self.children)}~~"


@dataclass(frozen=True)
class Link(TextElement):
    children: List[TextElement]
    title: Optional[str] = None
    url: Optional[str] = None

    def __str__(self) -> str:
        return f'[{_joined(self.children)}]({self.url or ""} "{self.title or ""}")'


@dataclass(frozen=True)
class Mention(TextElement):
    login: str

    def __str__(self) -> str:
        return f"@{self.login}"


@dataclass(frozen=True)
class Checkbox(TextElement):
    checked: bool
    source_range: SourceRange

    def __str__(self) -> str:
        return "[x]" if self.checked else "[ ]"


TextLine = List[TextElement]


@dataclass(frozen=True)
class Element:
    """Base class for flattened block-level items."""


@dataclass(frozen=True)
class TextRun(Element):
    items: TextLine

    def __str__(self) -> str:
        return f"text: {_joined(self.items)}"


@dataclass(frozen=True)
class QuoteRun(Element):
    items: TextLine
    depth: int

    def __str__(self) -> str:
        return f"quote: {_joined(self.items)}"


@dataclass(frozen=True)
class ImageElement(Element):
    title: str
    url: str

    def __str__(self) -> str:
        return f"image: {self.url}"


@dataclass(frozen=True)
class HtmlElement(Element):
    text: str

    def __str__(self) -> str:
        return f"html: {self.text}"


@dataclass(frozen=True)
class HeadingElement(Element):
    text: TextLine
    level: int

    def __str__(self) -> str:
        return f"heading-{self.level}: {_joined(self.text)}"


@dataclass(frozen=True)
class ListElement(Element):
    items: List[List[Element]]
    kind: ListType
    level: int = 0

    def __str__(self) -> str:
        joined = "\n".join(
            "[" + ", ".join(str(entry) for entry in item) + "]" for item in self.items
        )
        return f"list-{self.kind.value}: {joined}"


@dataclass(frozen=True)
class HeaderRow:
    cells: List[TextLine]


@dataclass(frozen=True)
class DataRow:
    cells: List[TextLine]


@dataclass(frozen=True)
class TableElement(Element):
    rows: List[HeaderRow | DataRow]

    def __str__(self) -> str:
        return "table"


@dataclass(frozen=True)
class HorizontalRule(Element):
    def __str__(self) -> str:
        return "hr"


@dataclass(frozen=True)
class CodeBlockElement(Element):
    text: str
    language: str | None = None

    def __str__(self) -> str:
        return f"codeBlock: {self.text}"


def lower_inline(inline: Inline) -> TextElement | None:
    """Map one inline node to its text element; images and raw html have none."""
    if isinstance(inline, InlineText):
        return Text(inline.text)
    if isinstance(inline, InlineSoftBreak):
        return SoftBreak()
    if isinstance(inline, InlineLineBreak):
        return LineBreak()
    if isinstance(inline, InlineCode):
        return Code(inline.text)
    if isinstance(inline, InlineEmphasis):
        return Emphasis(lower_inlines(inline.children))
    if isinstance(inline, InlineStrong):
        return Strong(lower_inlines(inline.children))
    if isinstance(inline, InlineStrikethrough):
        return Strikethrough(lower_inlines(inline.children))
    if isinstance(inline, InlineLink):
        return Link(lower_inlines(inline.children), title=inline.title, url=inline.url)
    if isinstance(inline, InlineCustom):
        return Text(inline.literal)
    if isinstance(inline, InlineMention):
        return Mention(inline.login)
    if isinstance(inline, InlineCheckbox):
        return Checkbox(inline.checked, inline.source_range)
    return None


def lower_inlines(inlines: Iterable[Inline]) -> TextLine:
    lowered: TextLine = []
    for inline in inlines:
        element = lower_inline(inline)
        if element is not None:
            lowered.append(element)
    return lowered
