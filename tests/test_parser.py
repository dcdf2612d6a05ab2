import textwrap

from FlatMark import markdown_parser
from FlatMark.model import (
    BlockQuote,
    CodeBlock,
    Heading,
    HtmlBlock,
    InlineEmphasis,
    InlineImage,
    InlineLink,
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


def test_markdown_to_html():
    assert markdown_parser.markdown_to_html("*Hello World*") == "<p><em>Hello World</em></p>\n"


def test_parse_returns_document():
    document = markdown_parser.parse_markdown("*Hello World*")
    assert document is not None
    assert document.blocks == [Paragraph(inlines=[InlineEmphasis(children=[InlineText("Hello World")])])]


def test_parse_blocks():
    md_text = textwrap.dedent(
        """\
        # Heading
        ## Subheading
        Lorem ipsum _dolor sit_ amet.
        * List item 1
        * List item 2
        > Quote
        > > Quote 2
        """
    )
    document = markdown_parser.parse_markdown(md_text)
    assert len(document.blocks) == 5
    heading, subheading, paragraph, bullets, quote = document.blocks
    assert heading == Heading(inlines=[InlineText("Heading")], level=1)
    assert subheading.level == 2
    assert isinstance(paragraph, Paragraph)
    assert isinstance(bullets, ListBlock) and bullets.kind is ListType.UNORDERED
    assert len(bullets.items) == 2
    assert bullets.items[1] == [Paragraph(inlines=[InlineText("List item 2")])]
    assert quote == BlockQuote(
        blocks=[
            Paragraph(inlines=[InlineText("Quote")]),
            BlockQuote(blocks=[Paragraph(inlines=[InlineText("Quote 2")])]),
        ]
    )


def test_parse_table():
    md_text = textwrap.dedent(
        """\
        | foo | bar |
        | --- | --- |
        | baz | bim |
        """
    )
    document = markdown_parser.parse_markdown(md_text)
    assert document.blocks == [
        TableBlock(
            rows=[
                TableHeader(cells=[TableCell([InlineText("foo")]), TableCell([InlineText("bar")])]),
                TableRow(cells=[TableCell([InlineText("baz")]), TableCell([InlineText("bim")])]),
            ]
        )
    ]


def test_parse_strikethrough():
    document = markdown_parser.parse_markdown("~~foo~~")
    assert document.blocks == [Paragraph(inlines=[InlineStrikethrough(children=[InlineText("foo")])])]


def test_parse_code_block():
    md_text = '```swift\nlet a = "foo"\n```\n'
    document = markdown_parser.parse_markdown(md_text)
    assert document.blocks == [CodeBlock(text='let a = "foo"\n', language="swift")]


def test_parse_indented_code_block_has_no_language():
    document = markdown_parser.parse_markdown("    x = 1\n")
    assert document.blocks == [CodeBlock(text="x = 1\n", language=None)]


def test_parse_ordered_list_and_rule():
    document = markdown_parser.parse_markdown("1. one\n2. two\n\n---\n")
    ordered, rule = document.blocks
    assert ordered.kind is ListType.ORDERED
    assert len(ordered.items) == 2
    assert rule == ThematicBreak()


def test_parse_html_block():
    document = markdown_parser.parse_markdown("<div>hi</div>\n")
    assert len(document.blocks) == 1
    assert isinstance(document.blocks[0], HtmlBlock)
    assert document.blocks[0].text.startswith("<div>hi</div>")


def test_links_and_images_default_title_to_empty():
    document = markdown_parser.parse_markdown('[a](http://x.io) ![pic](img.png "Pic")')
    link, _, image = document.blocks[0].inlines
    assert link == InlineLink(children=[InlineText("a")], title="", url="http://x.io")
    assert image == InlineImage(children=[InlineText("pic")], title="Pic", url="img.png")


def test_soft_break_kept():
    document = markdown_parser.parse_markdown("a\nb")
    assert document.blocks[0].inlines == [InlineText("a"), InlineSoftBreak(), InlineText("b")]


def test_undecodable_bytes_yield_no_document():
    assert markdown_parser.parse_markdown(b"\xff\xfe broken") is None
    assert markdown_parser.parse_flat(b"\xff\xfe broken") is None


def test_bytes_are_decoded():
    document = markdown_parser.parse_markdown("héllo".encode("utf-8"))
    assert document.blocks == [Paragraph(inlines=[InlineText("héllo")])]


def test_blank_source_is_an_empty_document():
    document = markdown_parser.parse_markdown("   \n\n")
    assert document is not None
    assert document.blocks == []
    assert markdown_parser.parse_flat("   \n\n") == []


def test_delimiter_runs_leave_no_empty_text():
    document = markdown_parser.parse_markdown("**amet**")
    assert document.blocks[0].inlines == [InlineStrong(children=[InlineText("amet")])]

    document = markdown_parser.parse_markdown("a **b**")
    assert document.blocks[0].inlines == [InlineText("a "), InlineStrong(children=[InlineText("b")])]


def test_bare_urls_are_autolinked():
    document = markdown_parser.parse_markdown("https://github.com")
    assert document.blocks[0].inlines == [
        InlineLink(children=[InlineText("https://github.com")], title="", url="https://github.com")
    ]

    document = markdown_parser.parse_markdown("see www.github.com")
    prefix, link = document.blocks[0].inlines
    assert prefix == InlineText("see ")
    assert link.children == [InlineText("www.github.com")]
    assert link.url == "http://www.github.com"
