"""Markdown to ENML conversion."""

from __future__ import annotations

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.rules_inline import StateInline, emphasis

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
ENML_DOCTYPE = '<!DOCTYPE en-note SYSTEM "http://xml.evernote.com/pub/enml2.dtd">'


def _emphasis_outside_words(state: StateInline, silent: bool) -> bool:
    """Emphasis rule that refuses to open or close inside a word.

    A marker run preceded by a letter or digit cannot open, and a run
    followed by one cannot close, so ``snake_case_name``, ``2*3*4`` and
    ``*foo*bar`` all stay literal.
    """

    start = state.pos
    first_delimiter = len(state.delimiters)
    if not emphasis.tokenize(state, silent):
        return False

    before = state.src[start - 1] if start > 0 else " "
    after = state.src[state.pos] if state.pos < state.posMax else " "
    for delimiter in state.delimiters[first_delimiter:]:
        if before.isalnum():
            delimiter.open = False
        if after.isalnum():
            delimiter.close = False
    return True


def _render_fence(self, tokens, idx, options, env) -> str:
    # ENML rejects the class attribute, so the info string is dropped.
    return f"<pre><code>{escapeHtml(tokens[idx].content)}</code></pre>\n"


def _build_renderer() -> MarkdownIt:
    md = MarkdownIt("commonmark", {"linkify": True, "xhtmlOut": True})
    md.enable("linkify")
    md.inline.ruler.at("emphasis", _emphasis_outside_words)
    md.add_render_rule("fence", _render_fence)
    return md


_renderer = _build_renderer()


def render_markdown(text: str) -> str:
    """Render markdown ``text`` to XHTML."""

    return _renderer.render(text)


def note_markup(text: str) -> str:
    """Wrap the rendered ``text`` in the ENML document shell."""

    body = render_markdown(text)
    return f"{XML_DECLARATION}\n{ENML_DOCTYPE}\n<en-note>\n{body}</en-note>\n"
