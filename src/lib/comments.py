"""
HTML comments with literal HTML switched off

With ``html`` off, markdown-it keeps ``<!-- ... -->`` as text. Comments
inside one line of text are dropped when the text is escaped (see
escaping.COMMENTS). This rule handles the two cases escaping cannot see:

- a paragraph holding nothing but a comment, which would otherwise render
  as an empty ``<p></p>``
- a comment opened in one block and closed in a later one, with any number
  of blocks (lists, fences, headings) in between

For the second case, the text before ``<!--`` and after ``-->`` survives on
its own block. Everything in between is removed, except tokens whose
open/close partner lies outside the removed range.
"""

import re
from typing import List, Optional, Tuple

from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from .escaping import brackets_unescape, comments_strip
from .log import LOG
from .tokens import TokenCursor, tokens_walk


COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"

_COMMENT_OR_OPENER_RE = re.compile(r"<!--.*?-->|<!--", re.DOTALL)

_BREAK_TYPES = ("softbreak", "hardbreak")

# Line-spanning comments, for blocks made of nothing else
_COMMENT_MULTILINE_RE = re.compile(r"<!--.*?-->", re.DOTALL)


def opener_find(text: str) -> Optional[int]:
    """
    Position of the first ``<!--`` that is not closed within ``text``.

    Complete comments before it are skipped.
    """
    for match in _COMMENT_OR_OPENER_RE.finditer(text):
        if match.group(0) == COMMENT_OPEN:
            return match.start()
    return None


def _wrapped(tokens: List[Token], index: int) -> bool:
    """True when the token at ``index`` is the whole content of a paragraph"""
    return (
        0 < index < len(tokens) - 1
        and tokens[index - 1].type == "paragraph_open"
        and tokens[index + 1].type == "paragraph_close"
    )


Span = Tuple[int, int]


def _children_text(children: List[Token]) -> str:
    return "".join(child.content for child in children if child.type == "text")


def _children_cut(children: List[Token], spans: List[Span]) -> None:
    """
    Remove [start, end) spans of the text the children hold together.

    Offsets count text children only, so a comment split by inline markup
    (``<!-- *x* -->``) is one span. Markup tokens strictly inside a span
    go with it; text children left empty are dropped.

    Args:
        children: Inline children, edited in place
        spans: Sorted, non-overlapping spans of _children_text(children)
    """
    kept: List[Token] = []
    offset = 0
    for child in children:
        if child.type != "text":
            if not any(start < offset < end for start, end in spans):
                kept.append(child)
            continue

        child_end = offset + len(child.content)
        pieces: List[str] = []
        position = offset
        for start, end in spans:
            cut_start, cut_end = max(start, offset), min(end, child_end)
            if cut_start < cut_end:
                pieces.append(child.content[position - offset:cut_start - offset])
                position = cut_end
        pieces.append(child.content[position - offset:])
        child.content = "".join(pieces)
        if child.content:
            kept.append(child)
        offset = child_end
    children[:] = kept


def _children_truncateAtOpener(token: Token) -> None:
    children = token.children or []
    text = _children_text(children)
    opener = opener_find(text)
    if opener is None:
        return
    # Everything from the unclosed opener on, plus complete comments before it
    spans = [match.span() for match in _COMMENT_MULTILINE_RE.finditer(text[:opener])]
    spans.append((opener, len(text) + 1))
    _children_cut(children, spans)
    while children and children[-1].type in _BREAK_TYPES:
        children.pop()


def _children_trimThroughCloser(token: Token) -> None:
    children = token.children or []
    text = _children_text(children)
    closer = text.find(COMMENT_CLOSE)
    if closer < 0:
        return
    after = closer + len(COMMENT_CLOSE)
    spans: List[Span] = [(-1, after)]
    spans.extend(
        (after + start, after + end)
        for start, end in (match.span() for match in _COMMENT_MULTILINE_RE.finditer(text[after:]))
    )
    _children_cut(children, spans)
    while children and children[0].type in _BREAK_TYPES:
        children.pop(0)


def _closer_find(tokens: List[Token], after: int) -> Optional[int]:
    for index in range(after + 1, len(tokens)):
        token = tokens[index]
        if token.type == "inline" and COMMENT_CLOSE in brackets_unescape(token.content):
            return index
    return None


def balanced_keep(tokens: List[Token]) -> List[Token]:
    """
    From a range about to be removed, pick the tokens that must stay.

    A token stays when its open/close partner is outside the range, so
    removing the rest leaves every pair intact.

    Args:
        tokens: The range, in document order

    Returns:
        Tokens to keep, in document order
    """
    keep = set()
    opened: List[int] = []
    for index, token in enumerate(tokens):
        if token.nesting == 1:
            opened.append(index)
        elif token.nesting == -1:
            if opened:
                opened.pop()
            else:
                keep.add(index)
    keep.update(opened)
    return [token for index, token in enumerate(tokens) if index in keep]


def _range_bounds(
    tokens: List[Token], opener: int, closer: int, opener_content: str, closer_content: str
) -> Tuple[int, int]:
    """
    Work out the [start, end) range to remove, trimming the boundary tokens
    that keep some text.
    """
    before = opener_content[:opener_find(opener_content) or 0]
    if before.strip():
        tokens[opener].content = before
        _children_truncateAtOpener(tokens[opener])
        start = opener + 2 if _wrapped(tokens, opener) else opener + 1
    else:
        start = opener - 1 if _wrapped(tokens, opener) else opener

    after = closer_content.split(COMMENT_CLOSE, 1)[1]
    if after.strip():
        tokens[closer].content = after
        _children_trimThroughCloser(tokens[closer])
        end = closer - 1 if _wrapped(tokens, closer) else closer
    else:
        end = closer + 2 if _wrapped(tokens, closer) else closer + 1

    return start, max(start, end)


def htmlComments_rule(state: StateCore) -> None:
    """
    Core rule ``do_html_comments``. Does nothing when the instance lets
    literal HTML through, since markdown-it then emits comments as
    html_block / html_inline tokens itself.
    """
    if state.md.options["html"]:
        return

    def visit(cursor: TokenCursor) -> None:
        token = cursor.token
        if token.type != "inline":
            return

        content = brackets_unescape(token.content)
        if COMMENT_OPEN not in content:
            return

        position = cursor.position
        remaining = comments_strip(content)

        if not _COMMENT_MULTILINE_RE.sub("", content).strip():
            start = position - 1 if _wrapped(cursor.tokens, position) else position
            count = position + 2 - start if _wrapped(cursor.tokens, position) else 1
            cursor.spliceAt(start, count)
            LOG(f"do_html_comments: removed comment-only block at {position}", level=3)
            cursor.resumeFrom(start)
            return

        if COMMENT_OPEN not in remaining or COMMENT_CLOSE in remaining:
            return

        closer = _closer_find(cursor.tokens, position)
        if closer is None:
            # Unterminated, left as written
            return

        closer_content = brackets_unescape(cursor.tokens[closer].content)
        start, end = _range_bounds(cursor.tokens, position, closer, remaining, closer_content)
        kept = balanced_keep(cursor.tokens[start:end])
        cursor.spliceAt(start, end - start, *kept)
        LOG(
            f"do_html_comments: removed tokens {start}..{end - 1} "
            f"({len(kept)} kept for pairing)",
            level=3,
        )
        cursor.resumeFrom(start)

    tokens_walk(state, visit)
