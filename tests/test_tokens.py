"""
Token walker and cursor tests
"""

from markdown_it import MarkdownIt
from markdown_it.token import Token

from doflavor.lib.tokens import TokenCursor, htmlToken_make, newlineToken_make, tokens_walk


def token_make(type_: str, nesting: int = 0, content: str = "") -> Token:
    return Token(type_, "", nesting, content=content)


def tree_make():
    inline = token_make("inline", content="c1c2")
    inline.children = [token_make("text", content="c1"), token_make("text", content="c2")]
    return [
        token_make("paragraph_open", 1, "open"),
        inline,
        token_make("paragraph_close", -1, "close"),
    ]


class TestTokenCursor:
    """Test cursor operations"""

    def test_token_and_peek(self):
        tokens = tree_make()
        cursor = TokenCursor(tokens, 1)
        assert cursor.token is tokens[1]
        assert cursor.peek(-1) is tokens[0]
        assert cursor.peek(1) is tokens[2]
        assert cursor.peek(2) is None
        assert cursor.peek(-2) is None

    def test_replace_current(self):
        tokens = tree_make()
        cursor = TokenCursor(tokens, 0)
        html = htmlToken_make("<p>")
        cursor.replaceCurrent(html)
        assert tokens[0] is html
        assert len(tokens) == 3

    def test_splice_returns_removed(self):
        tokens = tree_make()
        cursor = TokenCursor(tokens, 0)
        removed = cursor.spliceAt(1, 2, newlineToken_make())
        assert [t.content for t in removed] == ["c1c2", "close"]
        assert [t.content for t in tokens] == ["open", "\n"]

    def test_resume_recorded(self):
        cursor = TokenCursor(tree_make(), 0)
        assert cursor.resume is None
        cursor.resumeFrom(2)
        assert cursor.resume == 2


class TestTokensWalk:
    """Test traversal order and splicing"""

    def test_preorder_forward(self):
        visited = []
        tokens_walk(tree_make(), lambda cursor: visited.append(cursor.token.content))
        assert visited == ["open", "c1c2", "c1", "c2", "close"]

    def test_preorder_backwards(self):
        visited = []
        tokens_walk(tree_make(), lambda cursor: visited.append(cursor.token.content), backwards=True)
        assert visited == ["close", "c1c2", "c2", "c1", "open"]

    def test_walks_core_state(self):
        """A StateCore can be walked directly"""
        md = MarkdownIt("js-default")
        seen = []

        def rule(state):
            tokens_walk(state, lambda cursor: seen.append(cursor.token.type))

        md.core.ruler.push("collect", rule)
        md.render("Hello *there*")
        assert seen[:3] == ["paragraph_open", "inline", "text"]
        assert "em_open" in seen

    def test_insert_after_and_resume(self):
        """Tokens inserted behind the cursor are stepped over, nothing is visited twice"""
        tokens = [token_make("text", content=c) for c in "abc"]
        visited = []

        def visit(cursor):
            visited.append(cursor.token.content)
            if cursor.token.content in "abc":
                cursor.spliceAt(cursor.position + 1, 0, token_make("text", content="-"))
                cursor.resumeFrom(cursor.position + 2)

        tokens_walk(tokens, visit)
        assert visited == ["a", "b", "c"]
        assert "".join(t.content for t in tokens) == "a-b-c-"

    def test_remove_and_resume_at_same_position(self):
        """After removing the current token the walk continues with its successor"""
        tokens = [token_make("text", content=c) for c in "axbxc"]
        visited = []

        def visit(cursor):
            visited.append(cursor.token.content)
            if cursor.token.content == "x":
                cursor.spliceAt(cursor.position, 1)
                cursor.resumeFrom(cursor.position)

        tokens_walk(tokens, visit)
        assert visited == ["a", "x", "b", "x", "c"]
        assert "".join(t.content for t in tokens) == "abc"

    def test_descends_into_replacement(self):
        """Children of a token put in place by the visitor are walked"""
        tokens = [token_make("placeholder")]
        replacement = token_make("inline")
        replacement.children = [token_make("text", content="inner")]
        visited = []

        def visit(cursor):
            visited.append(cursor.token.type)
            if cursor.token.type == "placeholder":
                cursor.replaceCurrent(replacement)

        tokens_walk(tokens, visit)
        assert visited == ["placeholder", "text"]


class TestTokenFactories:
    """Test the token helpers"""

    def test_html_token(self):
        token = htmlToken_make("<b>", nesting=0)
        assert token.type == "html_block"
        assert token.content == "<b>"

    def test_newline_token(self):
        token = newlineToken_make()
        assert token.type == "text"
        assert token.content == "\n"
