"""
Rule registry tests

Tests rule selection and installation into markdown-it's core ruler.
"""

import pytest
from markdown_it import MarkdownIt

from doflavor.lib.registry import RULES, RuleRegistry, RuleSelectionError, registry
from doflavor.lib.renderer import doflavor_plugin
from doflavor.models.rules import RuleCategory


DEFAULT_NAMES = [
    "do_headings",
    "do_links",
    "do_html_comments",
    "do_notes",
    "do_variable_highlights",
    "do_code_blocks",
]
ALL_NAMES = DEFAULT_NAMES + ["do_spacing"]


def ours(names):
    """Keep only the doflavor rules of a ruler listing"""
    return [name for name in names if name.startswith("do_")]


class TestTable:
    """Test the rule table itself"""

    def test_order(self):
        assert registry.names == ALL_NAMES

    def test_spec_get(self):
        spec = registry.spec_get("do_links")
        assert spec is not None
        assert spec.setup is not None
        assert registry.spec_get("do_nothing") is None

    def test_by_category(self):
        inline = registry.rules_listByCategory(RuleCategory.INLINE)
        assert [spec.name for spec in inline] == ["do_notes", "do_variable_highlights"]

    def test_specs_read_only(self):
        with pytest.raises(TypeError):
            registry.specs["do_extra"] = RULES[0]

    def test_only_spacing_outside_default(self):
        assert [spec.name for spec in RULES if not spec.in_default] == ["do_spacing"]


class TestSelection:
    """Test resolving selections to rule names"""

    def test_default(self):
        assert registry.names_select("default") == DEFAULT_NAMES

    def test_none_is_default(self):
        assert registry.names_select(None) == DEFAULT_NAMES

    def test_all(self):
        assert registry.names_select("all") == ALL_NAMES

    def test_keywords_case_insensitive(self):
        assert registry.names_select(" ALL ") == ALL_NAMES

    def test_comma_string_table_order(self):
        assert registry.names_select("do_spacing, do_notes") == ["do_notes", "do_spacing"]

    def test_iterable_deduplicated(self):
        assert registry.names_select(["do_notes", "do_notes"]) == ["do_notes"]

    def test_unknown_rule(self):
        with pytest.raises(RuleSelectionError, match="do_magic"):
            registry.names_select("do_notes,do_magic")

    def test_custom_table(self):
        custom = RuleRegistry(RULES[:2])
        assert custom.names_select("all") == ["do_headings", "do_links"]
        with pytest.raises(RuleSelectionError):
            custom.names_select("do_spacing")


class TestInstall:
    """Test registration on a MarkdownIt instance"""

    def test_all_appended_in_order(self):
        md = MarkdownIt("js-default")
        assert registry.rules_install(md, "all") == ALL_NAMES
        rules = md.core.ruler.get_all_rules()
        assert ours(rules) == ALL_NAMES
        assert rules.index("text_join") < rules.index("do_headings")

    def test_default_leaves_spacing_out(self):
        md = MarkdownIt("js-default")
        registry.rules_install(md)
        assert "do_spacing" not in md.core.ruler.get_all_rules()

    def test_later_install_keeps_table_order(self):
        md = MarkdownIt("js-default")
        registry.rules_install(md, "do_spacing")
        registry.rules_install(md, "do_notes,do_spacing")
        assert ours(md.core.ruler.get_all_rules()) == ["do_notes", "do_spacing"]

    def test_reinstall_adds_nothing(self):
        md = MarkdownIt("js-default")
        registry.rules_install(md, "all")
        registry.rules_install(md, "all")
        assert ours(md.core.ruler.get_all_rules()) == ALL_NAMES

    def test_unselected_disabled(self):
        md = MarkdownIt("js-default")
        registry.rules_install(md, "all")
        registry.rules_install(md, "do_notes")
        assert ours(md.core.ruler.get_active_rules()) == ["do_notes"]

    def test_reenabled(self):
        md = MarkdownIt("js-default")
        registry.rules_install(md, "all")
        registry.rules_install(md, "do_notes")
        registry.rules_install(md, "all")
        assert ours(md.core.ruler.get_active_rules()) == ALL_NAMES

    def test_unknown_installs_nothing(self):
        md = MarkdownIt("js-default")
        with pytest.raises(RuleSelectionError):
            registry.rules_install(md, "do_notes,bogus")
        assert ours(md.core.ruler.get_all_rules()) == []

    def test_links_setup_runs_once_per_instance(self):
        md = MarkdownIt("js-default")
        registry.rules_install(md, "do_links")
        helpers = md.helpers
        registry.rules_install(md, "do_links")
        assert md.helpers is helpers

    def test_plugin(self):
        md = MarkdownIt("js-default", {"breaks": True}).use(doflavor_plugin, rules="all")
        assert md.render("Hello world") == "<p>Hello world</p>\n\n"
