"""
Token tree traversal for markdown-it token streams

markdown-it hands the core rules a flat list of block tokens, where
``inline`` tokens carry their own list of children. Most rules need to
visit every token of both levels and some need to replace or splice tokens
while doing so. This module provides a pre-order walker over that tree and
a cursor that owns the (array, position) pair, so rules never have to do
their own index bookkeeping after a splice.

Example:
    >>> def visitor(cursor):
    ...     if cursor.token.type == "code_inline":
    ...         cursor.replaceCurrent(htmlToken_make("<code>x</code>"))
    >>> tokens_walk(state, visitor)
"""

from typing import Callable, List, Optional, Union

from markdown_it.rules_core import StateCore
from markdown_it.token import Token


class TokenCursor:
    """
    Position of the walker inside one token array

    The cursor is handed to the visitor for every token. It exposes the
    current token and its neighbours and the only three mutations the
    walker understands. After the visitor returns, the walker continues
    from ``resumeFrom()`` if one was requested, otherwise from the next
    position in walk direction.

    Attributes:
        tokens: The array the current token lives in (mutated in place)
        position: Index of the current token in ``tokens``
    """

    def __init__(self, tokens: List[Token], position: int) -> None:
        self.tokens = tokens
        self.position = position
        self.resume: Optional[int] = None

    @property
    def token(self) -> Token:
        """The token currently visited"""
        return self.tokens[self.position]

    def peek(self, offset: int) -> Optional[Token]:
        """
        Look at a neighbour of the current token.

        Args:
            offset: Relative index (-1 previous, 1 next, ...)

        Returns:
            The token, or None past either end of the array
        """
        index = self.position + offset
        if 0 <= index < len(self.tokens):
            return self.tokens[index]
        return None

    def replaceCurrent(self, token: Token) -> None:
        """Swap the current token for another, keeping the array size"""
        self.tokens[self.position] = token

    def spliceAt(self, index: int, delete_count: int, *tokens: Token) -> List[Token]:
        """
        Remove ``delete_count`` tokens at ``index`` and insert ``tokens`` there.

        Returns:
            The removed tokens
        """
        removed = self.tokens[index:index + delete_count]
        self.tokens[index:index + delete_count] = list(tokens)
        return removed

    def resumeFrom(self, index: int) -> None:
        """
        Make ``index`` the next position the walker visits.

        Use after splicing around or before the current token. The token at
        ``index`` will be visited, so a visitor must not resume at a
        position it left unchanged.
        """
        self.resume = index


Visitor = Callable[[TokenCursor], None]


def tokens_walk(
    source: Union[StateCore, List[Token]],
    visitor: Visitor,
    backwards: bool = False,
) -> None:
    """
    Visit every token of a token tree, parents before their children.

    Args:
        source: Core state (its ``tokens`` are walked) or a token array
        visitor: Callback receiving a TokenCursor for each token
        backwards: Walk each array from its last token to its first
    """
    tokens = source if isinstance(source, list) else source.tokens
    _array_walk(tokens, visitor, backwards)


def _array_walk(tokens: List[Token], visitor: Visitor, backwards: bool) -> None:
    step = -1 if backwards else 1
    position = len(tokens) - 1 if backwards else 0

    while 0 <= position < len(tokens):
        cursor = TokenCursor(tokens, position)
        visitor(cursor)

        if cursor.resume is not None:
            position = cursor.resume
            continue

        # The visitor may have replaced the token; descend into what is there now
        current = tokens[position] if position < len(tokens) else None
        if current is not None and current.children:
            _array_walk(current.children, visitor, backwards)
        position += step


def htmlToken_make(content: str, nesting: int = 0) -> Token:
    """
    Build a token the renderer emits verbatim.

    markdown-it renders ``html_block`` tokens as their raw content at both
    block and inline level, which is how rules inject markup that must not
    be escaped again.
    """
    return Token("html_block", "", nesting, content=content)  # type: ignore[arg-type]


def newlineToken_make(nesting: int = 0) -> Token:
    """Build a text token holding a single line break"""
    return Token("text", "", nesting, content="\n")  # type: ignore[arg-type]
