"""
Rule registry for doflavor

Holds the ordered table of token-rewriting rules and installs a selection of
them into a MarkdownIt instance. The table and its name index are built once
and never change; selecting rules filters the table, it does not edit it.

Order is part of the contract:
    - do_headings and do_links read text that later rules turn into raw HTML
    - do_spacing only looks at adjacency, so it sees everything last
"""

from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from markdown_it import MarkdownIt

from ..models.rules import RuleSpec, RuleCategory, SELECTION_ALL, SELECTION_DEFAULT
from .comments import htmlComments_rule
from .fences import codeBlocks_rule
from .headings import headings_rule
from .links import links_patchInternals, links_rule
from .log import LOG
from .notes import notes_rule
from .spacing import spacing_rule
from .variables import variableHighlights_rule


Selection = Union[str, Iterable[str], None]


class RuleSelectionError(Exception):
    """Raised when a rule selection names a rule that does not exist"""
    pass


RULES: Tuple[RuleSpec, ...] = (
    RuleSpec(
        name="do_headings",
        category=RuleCategory.STRUCTURE,
        description="Heading ids with the preview tool's slugs",
        handler=headings_rule,
    ),
    RuleSpec(
        name="do_links",
        category=RuleCategory.STRUCTURE,
        description="rel attribute on links; scheme or www. required for links",
        handler=links_rule,
        setup=links_patchInternals,
    ),
    RuleSpec(
        name="do_html_comments",
        category=RuleCategory.CLEANUP,
        description="Remove HTML comments when literal HTML is off",
        handler=htmlComments_rule,
    ),
    RuleSpec(
        name="do_notes",
        category=RuleCategory.INLINE,
        description="<$>[kind] ... <$> note callouts",
        handler=notes_rule,
    ),
    RuleSpec(
        name="do_variable_highlights",
        category=RuleCategory.INLINE,
        description="<^>variable<^> highlight spans",
        handler=variableHighlights_rule,
    ),
    RuleSpec(
        name="do_code_blocks",
        category=RuleCategory.BLOCK,
        description="Fenced code with labels and command prefixes",
        handler=codeBlocks_rule,
    ),
    RuleSpec(
        name="do_spacing",
        category=RuleCategory.LAYOUT,
        description="Extra line breaks between blocks",
        handler=spacing_rule,
        in_default=False,
    ),
)


class RuleRegistry:
    """
    Ordered, read-only view of the rule table

    Example:
        >>> registry = RuleRegistry()
        >>> registry.names_select("do_spacing,do_notes")
        ['do_notes', 'do_spacing']
        >>> registry.rules_install(md, "all")
    """

    def __init__(self, rules: Tuple[RuleSpec, ...] = RULES) -> None:
        self.rules: Tuple[RuleSpec, ...] = tuple(rules)
        self.specs: Mapping[str, RuleSpec] = MappingProxyType(
            {spec.name: spec for spec in self.rules}
        )

    @property
    def names(self) -> List[str]:
        """All rule names, in table order"""
        return [spec.name for spec in self.rules]

    def spec_get(self, name: str) -> Optional[RuleSpec]:
        """Get a rule specification by name"""
        return self.specs.get(name)

    def rules_listByCategory(self, category: RuleCategory) -> List[RuleSpec]:
        """Get all rules in a category, in table order"""
        return [spec for spec in self.rules if spec.category == category]

    def names_select(self, selection: Selection = SELECTION_DEFAULT) -> List[str]:
        """
        Resolve a rule selection to rule names.

        Args:
            selection: "default" (everything but do_spacing), "all", a
                comma-separated string of names, or an iterable of names.
                None means "default".

        Returns:
            Selected names, deduplicated, in table order

        Raises:
            RuleSelectionError: If a name is not in the table
        """
        if selection is None:
            selection = SELECTION_DEFAULT

        if isinstance(selection, str):
            keyword = selection.strip().lower()
            if keyword == SELECTION_DEFAULT:
                return [spec.name for spec in self.rules if spec.in_default]
            if keyword == SELECTION_ALL:
                return self.names
            requested = [name.strip() for name in selection.split(",") if name.strip()]
        else:
            requested = [str(name).strip() for name in selection]

        unknown = [name for name in requested if name not in self.specs]
        if unknown:
            raise RuleSelectionError(
                f"Unknown rule(s): {', '.join(unknown)}. "
                f"Available: {', '.join(self.names)}"
            )

        wanted = set(requested)
        return [spec.name for spec in self.rules if spec.name in wanted]

    def rules_install(self, md: MarkdownIt, selection: Selection = SELECTION_DEFAULT) -> List[str]:
        """
        Register the selected rules on ``md.core.ruler``.

        Rules already on the ruler are enabled instead of added twice. A new
        rule goes right before the first rule that follows it in the table
        and is already registered, so table order holds no matter how many
        times this is called. Rules of the table not selected this time are
        disabled.

        Args:
            md: Instance to configure
            selection: See names_select()

        Returns:
            Names of the rules now active

        Raises:
            RuleSelectionError: If a name is not in the table
        """
        selected = self.names_select(selection)
        ruler = md.core.ruler

        for position, spec in enumerate(self.rules):
            if spec.name not in selected:
                continue

            if spec.setup is not None:
                spec.setup(md)

            registered = ruler.get_all_rules()
            if spec.name in registered:
                ruler.enable(spec.name)
                LOG(f"rule {spec.name} re-enabled", level=2)
                continue

            later = [
                other.name for other in self.rules[position + 1:]
                if other.name in registered
            ]
            if later:
                ruler.before(later[0], spec.name, spec.handler)
            else:
                ruler.push(spec.name, spec.handler)
            LOG(f"rule {spec.name} registered", level=2)

        registered = ruler.get_all_rules()
        for spec in self.rules:
            if spec.name not in selected and spec.name in registered:
                ruler.disable(spec.name)
                LOG(f"rule {spec.name} disabled", level=2)

        return selected


# Shared registry instance
registry = RuleRegistry()
