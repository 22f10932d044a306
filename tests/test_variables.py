"""
Variable highlight tests

Rule tested in isolation on a js-default instance with html and breaks on.
"""

import pytest
from markdown_it import MarkdownIt
from mdit_py_plugins.superscript import superscript_plugin

from doflavor.lib.escaping import code_escape, prose_escape
from doflavor.lib.renderer import lowLevelDefaults_apply
from doflavor.lib.variables import variableHighlights_rule, vars_process, variables_contain


@pytest.fixture
def md():
    instance = MarkdownIt("js-default", {"html": True, "breaks": True})
    lowLevelDefaults_apply(instance)
    instance.core.ruler.push("do_variable_highlights", variableHighlights_rule)
    return instance


class TestVarsProcess:
    """Test the string-level processor"""

    def test_no_marker(self):
        assert vars_process("plain & simple", prose_escape, prose_escape) == "plain &amp; simple"

    def test_single_marker(self):
        assert vars_process("cd <^>dir<^>") == 'cd <span class="highlight">dir</span>'

    def test_multiple_markers_independent(self):
        """Text between spans is escaped on its own"""
        result = vars_process("<^>a<^> < <^>b<^>", prose_escape, prose_escape)
        assert result == '<span class="highlight">a</span> &lt; <span class="highlight">b</span>'

    def test_escapers_applied_separately(self):
        result = vars_process("x<^>y<^>z", str.upper, lambda s: s + s)
        assert result == 'X<span class="highlight">yy</span>Z'

    def test_markers_do_not_cross_lines(self):
        assert vars_process("<^>a\nb<^>", code_escape, code_escape) == "&lt;^&gt;a\nb&lt;^&gt;"

    def test_variables_contain(self):
        assert variables_contain("a <^>b<^>")
        assert not variables_contain("a <^><^>")
        assert not variables_contain("a <^>b")


class TestVariableHighlightRule:
    """Test the core rule on rendered output"""

    def test_inline_text(self, md):
        assert md.render("Hello <^>Joshua<^>!") == (
            '<p>Hello <span class="highlight">Joshua</span>!</p>\n'
        )

    def test_inline_code(self, md):
        source = (
            "My sample is `hello <^>Joshua<^>, it is <^>Monday<^>!`, "
            "which has two values filled by vars."
        )
        assert md.render(source) == (
            '<p>My sample is <code>hello <span class="highlight">Joshua</span>, it is '
            '<span class="highlight">Monday</span>!</code>, which has two values filled by vars.</p>\n'
        )

    def test_inline_code_only(self, md):
        assert md.render("`<^>var<^>`") == '<p><code><span class="highlight">var</span></code></p>\n'

    def test_inline_code_escapes_html(self, md):
        assert md.render('`<^>a<^> <b> "q"`') == (
            '<p><code><span class="highlight">a</span> &lt;b&gt; &quot;q&quot;</code></p>\n'
        )

    def test_inline_code_without_marker_untouched(self, md):
        assert md.render("`<b>`") == "<p><code>&lt;b&gt;</code></p>\n"

    def test_text_beside_markup(self, md):
        """Only the text token holding the marker is replaced"""
        assert md.render("**bold** and <^>var<^>") == (
            '<p><strong>bold</strong> and <span class="highlight">var</span></p>\n'
        )

    def test_surrounding_text_prose_escaped(self, md):
        assert md.render("Use <^>name<^> & it's done") == (
            '<p>Use <span class="highlight">name</span> &amp; it&rsquo;s done</p>\n'
        )


class TestSuperscriptCollision:
    """Test the five-children split produced by the superscript extension"""

    def test_single_collision(self, md):
        md.use(superscript_plugin)
        assert md.render("Hello <^>Joshua<^>!") == (
            '<p>Hello <span class="highlight">Joshua</span>!</p>\n'
        )

    def test_multiple_collisions(self, md):
        md.use(superscript_plugin)
        assert md.render("Set <^>user<^> and <^>host<^> now") == (
            '<p>Set <span class="highlight">user</span> and '
            '<span class="highlight">host</span> now</p>\n'
        )

    def test_plain_superscript_untouched(self, md):
        md.use(superscript_plugin)
        assert md.render("2^10^ bytes") == "<p>2<sup>10</sup> bytes</p>\n"
