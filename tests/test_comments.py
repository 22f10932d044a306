"""
HTML comment removal tests

All cases run with literal HTML off, which is when the rule is active.
"""

import pytest
from markdown_it import MarkdownIt
from markdown_it.token import Token

from doflavor.lib.comments import balanced_keep, htmlComments_rule, opener_find
from doflavor.lib.renderer import lowLevelDefaults_apply


def md_make(html: bool = False) -> MarkdownIt:
    instance = MarkdownIt("js-default", {"html": html, "breaks": True})
    lowLevelDefaults_apply(instance)
    instance.core.ruler.push("do_html_comments", htmlComments_rule)
    return instance


@pytest.fixture
def md():
    return md_make()


class TestOpenerFind:
    """Test locating an unclosed <!--"""

    def test_unclosed(self):
        assert opener_find("text <!-- open") == 5

    def test_closed_comments_skipped(self):
        assert opener_find("a <!-- b --> c <!-- d") == 15

    def test_all_closed(self):
        assert opener_find("a <!-- b --> c") is None

    def test_no_comment(self):
        assert opener_find("plain") is None


class TestBalancedKeep:
    """Test which tokens survive removal of a range"""

    def test_balanced_range_removed_entirely(self):
        tokens = [Token("paragraph_open", "p", 1), Token("inline", "", 0), Token("paragraph_close", "p", -1)]
        assert balanced_keep(tokens) == []

    def test_unmatched_kept_in_order(self):
        closing = Token("list_item_close", "li", -1)
        inline = Token("inline", "", 0)
        opening = Token("list_item_open", "li", 1)
        assert balanced_keep([closing, inline, opening]) == [closing, opening]

    def test_nested_partner_outside(self):
        outer = Token("bullet_list_open", "ul", 1)
        inner_open = Token("list_item_open", "li", 1)
        inner_close = Token("list_item_close", "li", -1)
        assert balanced_keep([outer, inner_open, inner_close]) == [outer]


class TestSingleBlock:
    """Test comments inside one block"""

    def test_inline_comment_dropped(self, md):
        assert md.render("Hello <!-- comment --> World") == "<p>Hello  World</p>\n"

    def test_comment_only_paragraph_removed(self, md):
        assert md.render("Intro\n\n<!-- hidden note -->\n\nOutro") == "<p>Intro</p>\n<p>Outro</p>\n"

    def test_multiline_comment_only_paragraph_removed(self, md):
        assert md.render("Intro\n\n<!-- one\ntwo -->\n\nOutro") == "<p>Intro</p>\n<p>Outro</p>\n"

    def test_whole_document_comment(self, md):
        assert md.render("<!-- nothing to see -->") == ""


class TestAcrossBlocks:
    """Test comments opened in one block and closed in another"""

    def test_blocks_in_between_removed(self, md):
        source = "Before\n\n<!--\n\n## Hidden\n\n-->\n\nAfter"
        assert md.render(source) == "<p>Before</p>\n<p>After</p>\n"

    def test_text_outside_kept(self, md):
        source = "Keep this <!-- start\n\nhidden\n\nend --> and this"
        assert md.render(source) == "<p>Keep this </p>\n<p> and this</p>\n"

    def test_spanning_a_fence(self, md):
        assert md.render("<!--\n\n```js\ncode\n```\n\n-->\nAfter") == "<p>After</p>\n"

    def test_closed_comment_with_markup_before_opener(self, md):
        """A comment closed across inline markup does not hide the text after it"""
        assert md.render("<!-- *x* --> y <!--\n\nmiddle\n\n-->") == "<p> y </p>\n"

    def test_markup_before_opener_kept_balanced(self, md):
        assert md.render("*a*<!-- x\n\n-->") == "<p><em>a</em></p>\n"

    def test_markup_around_closer(self, md):
        assert md.render("<!--\n\nhidden\n\n*a* --> b *c*") == "<p> b <em>c</em></p>\n"

    def test_unterminated_left_alone(self, md):
        assert md.render("Text <!-- never closed\n\nMore text") == (
            "<p>Text &lt;!-- never closed</p>\n<p>More text</p>\n"
        )


class TestLiteralHtml:
    """Test that the rule stands aside when HTML is on"""

    def test_comment_passed_through(self):
        html = md_make(html=True).render("Intro\n\n<!-- hidden note -->\n\nOutro")
        assert "<!-- hidden note -->" in html
        assert "<p>Outro</p>" in html
