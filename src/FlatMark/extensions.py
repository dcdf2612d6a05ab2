"""markdown-it plugins for the two inline extensions: ``@login`` mentions and
task-list checkboxes.

Both emit tokens the parser binding turns into ``InlineMention`` and
``InlineCheckbox`` nodes. A checkbox token carries the byte range of its
``[ ]``/``[x]`` marker in the original source, so the source must be handed in
through the parse env under ``SOURCE_ENV_KEY``; without it the normalized
markdown-it source is used.
"""

from __future__ import annotations

import re

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.rules_core import StateCore
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token

from .model import SourceRange

SOURCE_ENV_KEY = "flatmark_source"

_LOGIN_RE = re.compile(r"(?:[^\W_]|-)+")
_ITEM_CHECKBOX_RE = re.compile(r"\[([ xX])\](?=\s|$)")
_MARKER_RE = re.compile(r"\[[ xX]\]")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def mention_plugin(md: MarkdownIt) -> None:
    md.inline.ruler.before("emphasis", "mention", _mention_rule)
    md.add_render_rule("mention", _render_mention)


def checkbox_plugin(md: MarkdownIt) -> None:
    md.core.ruler.push("checkbox", _checkbox_rule)
    md.add_render_rule("checkbox", _render_checkbox)


def _mention_rule(state: StateInline, silent: bool) -> bool:
    pos = state.pos
    if state.src[pos] != "@":
        return False
    if pos > 0:
        previous = state.src[pos - 1]
        if previous.isalnum():
            return False
    match = _LOGIN_RE.match(state.src, pos + 1, state.posMax)
    if match is None:
        return False
    if not silent:
        token = state.push("mention", "", 0)
        token.markup = "@"
        token.content = match.group()
        token.meta = {"login": match.group()}
    state.pos = match.end()
    return True


def _checkbox_rule(state: StateCore) -> None:
    source = state.env.get(SOURCE_ENV_KEY, state.src)
    tokens = state.tokens
    for i in range(2, len(tokens)):
        inline = tokens[i]
        if inline.type != "inline":
            continue
        if tokens[i - 1].type != "paragraph_open" or tokens[i - 2].type != "list_item_open":
            continue
        match = _ITEM_CHECKBOX_RE.match(inline.content)
        if match is None or not inline.children:
            continue
        first = inline.children[0]
        if first.type != "text" or not first.content.startswith(match.group()):
            continue
        paragraph_map = tokens[i - 1].map
        if paragraph_map is None:
            continue
        source_range = _marker_range(source, paragraph_map[0])
        if source_range is None:
            continue

        checkbox = Token("checkbox", "input", 0)
        checkbox.markup = match.group()
        checkbox.meta = {"checked": match.group(1) in "xX", "range": source_range}
        first.content = first.content[len(match.group()) :]
        if first.content:
            inline.children.insert(0, checkbox)
        else:
            inline.children[0] = checkbox


def _marker_range(source: str, line_index: int) -> SourceRange | None:
    line_start = 0
    for _ in range(line_index):
        line_break = _LINE_BREAK_RE.search(source, line_start)
        if line_break is None:
            return None
        line_start = line_break.end()
    line_break = _LINE_BREAK_RE.search(source, line_start)
    line_end = line_break.start() if line_break else len(source)

    # container markup before the item text never contains "["
    marker = _MARKER_RE.search(source, line_start, line_end)
    if marker is None:
        return None
    start = len(source[: marker.start()].encode("utf-8"))
    return SourceRange(start, start + len(marker.group().encode("utf-8")))


def _render_mention(self, tokens, idx, options, env) -> str:
    return escapeHtml("@" + tokens[idx].meta["login"])


def _render_checkbox(self, tokens, idx, options, env) -> str:
    checked = ' checked="checked"' if tokens[idx].meta["checked"] else ""
    return f'<input class="task-list-item-checkbox" disabled="disabled" type="checkbox"{checked}>'
