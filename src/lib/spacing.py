"""
Blank lines between blocks

The preview tool puts an extra line break after some block closings. None
of this changes how a browser displays the page; it only makes the output
byte-identical. The rule only looks at token adjacency, so it has to run
after every rule that adds or removes tokens.
"""

from markdown_it.rules_core import StateCore

from .tokens import TokenCursor, newlineToken_make, tokens_walk


# A line break goes after these...
ADD_AFTER_TYPES = frozenset({
    "paragraph_close",
    "softbreak",
    "bullet_list_close",
    "heading_close",
    "blockquote_close",
})

# ...unless one of these comes next
SKIP_BEFORE_TYPES = frozenset({
    "list_item_close",
    "html_block",
    "fence",
    "blockquote_close",
})


def spacing_rule(state: StateCore) -> None:
    """
    Core rule ``do_spacing``: one line break after each block in
    ADD_AFTER_TYPES. Consecutive paragraphs end up one blank line apart.
    """
    def visit(cursor: TokenCursor) -> None:
        token = cursor.token
        if token.type not in ADD_AFTER_TYPES:
            return

        following = cursor.peek(1)
        if following is not None and following.type in SKIP_BEFORE_TYPES:
            return

        cursor.spliceAt(cursor.position + 1, 0, newlineToken_make(token.nesting))
        # Step over the inserted break
        cursor.resumeFrom(cursor.position + 2)

    tokens_walk(state, visit)
