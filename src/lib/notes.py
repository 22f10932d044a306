"""
Note callouts

    <$>[warning]
    **Warning:** Back up the database first.
    <$>

renders as a paragraph whose content is wrapped in
``<span class='warning'>...</span>`` (single-quoted, as the preview tool
emits it). Only the two delimiters are touched;
the body keeps whatever inline markup markdown-it gave it.
"""

import re
from typing import List, Optional

from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from ..config import appsettings
from .log import LOG
from .tokens import htmlToken_make


NOTE_RE = re.compile(r"\A<\$>\[([^\]\n]+)\](.+)<\$>\Z", re.DOTALL)
NOTE_CLOSE = "<$>"


def note_kind(content: str) -> Optional[str]:
    """
    Return the kind of a note if ``content`` is a whole note block.

    Args:
        content: Content of an inline token

    Returns:
        The kind keyword, or None when the content is not a note or the
        kind is not one of the configured note kinds
    """
    match = NOTE_RE.match(content)
    if not match or not appsettings.noteKind_accepts(match.group(1)):
        return None
    return match.group(1)


def _opening_replace(children: List[Token], kind: str) -> bool:
    opener = f"<$>[{kind}]"
    first = children[0]
    if first.type != "text" or not first.content.startswith(opener):
        return False

    span = htmlToken_make(f"<span class='{kind}'>")
    rest = first.content[len(opener):]
    if rest:
        first.content = rest
        children.insert(0, span)
    else:
        children[0] = span
        if len(children) > 1 and children[1].type == "softbreak":
            del children[1]
    return True


def _closing_replace(children: List[Token]) -> bool:
    last = children[-1]
    if last.type != "text" or not last.content.endswith(NOTE_CLOSE):
        return False

    span = htmlToken_make("</span>")
    rest = last.content[:-len(NOTE_CLOSE)]
    if rest:
        last.content = rest
        children.append(span)
    else:
        children[-1] = span
    return True


def notes_rule(state: StateCore) -> None:
    """
    Core rule ``do_notes``.

    Inline tokens whose whole content is a note of a known kind get their
    delimiters replaced by the opening and closing span. A soft break right
    after the opening span is dropped, the preview tool collapses it.
    """
    for token in state.tokens:
        if token.type != "inline" or not token.children:
            continue
        kind = note_kind(token.content)
        if kind is None:
            continue

        children = token.children
        # Both delimiters must be found before anything is changed
        if children[-1].type != "text" or not children[-1].content.endswith(NOTE_CLOSE):
            continue
        if _opening_replace(children, kind):
            _closing_replace(children)
            LOG(f"do_notes: wrapped note of kind '{kind}'", level=3)
