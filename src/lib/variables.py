"""
Variable highlighting: <^>name<^> spans

A variable marker wraps a name the reader is expected to substitute:

    Copy the files into `<^>project_root<^>/static`

Every marked span becomes ``<span class="highlight">name</span>``. The text
around the spans is escaped with whatever profile fits where the marker was
found (prose, inline code, fenced code), which is why the core function
takes its two escapers as arguments.

The superscript extension also uses '^' as delimiter, and when it is loaded
"Hello <^>name<^>!" arrives split in five inline children:

    text "Hello <" | sup_open | text ">name<" | sup_close | text ">!"

do_variable_highlights stitches that back together.
"""

import re
from typing import Callable, List

from markdown_it.common.utils import escapeHtml
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from ..config import appsettings
from .escaping import prose_escape
from .log import LOG
from .tokens import TokenCursor, htmlToken_make, tokens_walk


VARIABLE_RE = re.compile(r"<\^>(.+?)<\^>")
SUPERSCRIPT_INNER_RE = re.compile(r"^>(.+)<$")

TextProcessor = Callable[[str], str]


def _identity(text: str) -> str:
    return text


def variables_contain(text: str) -> bool:
    """True if ``text`` holds at least one complete <^>...<^> span"""
    return VARIABLE_RE.search(text) is not None


def highlight_wrap(inner: str) -> str:
    """Wrap already-escaped text in the highlight span"""
    return f'<span class="{appsettings.highlight_class}">{inner}</span>'


def vars_process(
    text: str,
    nonVar_process: TextProcessor = _identity,
    var_process: TextProcessor = _identity,
) -> str:
    """
    Replace every <^>name<^> span in ``text`` with a highlight span.

    Text outside the spans goes through ``nonVar_process`` and the names
    through ``var_process``, segment by segment, so the markup produced here
    is never escaped. Spans never cross a line break.

    Args:
        text: Source text
        nonVar_process: Escaper for the text between spans
        var_process: Escaper for the variable names

    Returns:
        Processed text; without any marker this is nonVar_process(text)

    Example:
        >>> vars_process("cd <^>dir<^> & ls", prose_escape, prose_escape)
        'cd <span class="highlight">dir</span> &amp; ls'
    """
    output: List[str] = []
    pointer = 0
    for match in VARIABLE_RE.finditer(text):
        output.append(nonVar_process(text[pointer:match.start()]))
        output.append(highlight_wrap(var_process(match.group(1))))
        pointer = match.end()
    output.append(nonVar_process(text[pointer:]))
    return "".join(output)


def _superscriptCollisions_stitch(children: List[Token]) -> int:
    """
    Undo every superscript split of a variable span in one children list.

    Returns:
        Number of spans stitched
    """
    stitched = 0
    index = 1
    while index + 3 < len(children):
        before, opener, inner, closer, after = children[index - 1:index + 4]
        inner_match = SUPERSCRIPT_INNER_RE.match(inner.content) if inner.type == "text" else None
        if (
            opener.type == "sup_open"
            and closer.type == "sup_close"
            and before.type == "text"
            and after.type == "text"
            and before.content.endswith("<")
            and after.content.startswith(">")
            and inner_match
        ):
            before.content = before.content[:-1]
            after.content = after.content[1:]
            children[index:index + 3] = [
                htmlToken_make(highlight_wrap(prose_escape(inner_match.group(1))), inner.nesting)
            ]
            stitched += 1
        index += 1
    return stitched


def variableHighlights_rule(state: StateCore) -> None:
    """
    Core rule ``do_variable_highlights``.

    - text tokens holding markers become html_block tokens of prose-escaped
      output (a paragraph of one text child is just a special case of this)
    - superscript-split spans are stitched back together
    - inline code holding markers is re-emitted as literal <code> HTML

    Fenced code is left to do_code_blocks.
    """
    def visit(cursor: TokenCursor) -> None:
        token = cursor.token

        if token.type == "inline" and token.children:
            count = _superscriptCollisions_stitch(token.children)
            if count:
                LOG(f"do_variable_highlights: stitched {count} superscript split(s)", level=3)
            return

        if token.type == "text" and variables_contain(token.content):
            cursor.replaceCurrent(
                htmlToken_make(
                    vars_process(token.content, prose_escape, prose_escape),
                    token.nesting,
                )
            )
            return

        if token.type == "code_inline" and variables_contain(token.content):
            cursor.replaceCurrent(
                htmlToken_make(
                    "<code>" + vars_process(token.content, escapeHtml, escapeHtml) + "</code>",
                    token.nesting,
                )
            )

    tokens_walk(state, visit)
