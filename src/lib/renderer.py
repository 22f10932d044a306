"""
Renderer for doflavor

Builds a configured MarkdownIt instance and renders Markdown to the HTML
the preview tool produces. The same setup is available as a plain
markdown-it plugin:

    md = MarkdownIt("js-default", {"breaks": True}).use(doflavor_plugin, rules="all")
"""

from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

from markdown_it import MarkdownIt
from markdown_it.token import Token
from markdown_it.utils import EnvType, OptionsDict
from mdit_py_plugins.superscript import superscript_plugin

from ..config import appsettings
from .escaping import prose_escape
from .log import LOG
from .registry import Selection, registry

if TYPE_CHECKING:
    from .profile import Profile


def softbreak_render(
    self: Any, tokens: Sequence[Token], idx: int, options: OptionsDict, env: EnvType
) -> str:
    """``<br>`` without the newline markdown-it normally adds after it"""
    if options.breaks:
        return "<br />" if options.xhtmlOut else "<br>"
    return "\n"


def text_render(
    self: Any, tokens: Sequence[Token], idx: int, options: OptionsDict, env: EnvType
) -> str:
    """Text goes through the prose escaping profile (smart quotes, symbols)"""
    return prose_escape(tokens[idx].content)


def lowLevelDefaults_apply(md: MarkdownIt) -> None:
    """Install the softbreak and text render rules every rule relies on"""
    md.add_render_rule("softbreak", softbreak_render)
    md.add_render_rule("text", text_render)


def doflavor_plugin(md: MarkdownIt, rules: Selection = "default") -> None:
    """
    markdown-it plugin: low-level defaults plus the selected rules.

    Args:
        md: Instance to configure
        rules: "default", "all", or rule names (see RuleRegistry.names_select)

    Raises:
        RuleSelectionError: If a rule name is unknown
    """
    lowLevelDefaults_apply(md)
    registry.rules_install(md, rules)


class Renderer:
    """
    Markdown to preview-tool HTML

    Every option left as None takes its value from AppSettings
    (DOFLAVOR_* environment variables).

    Example:
        >>> Renderer(rules="all").render("Hello world")
        '<p>Hello world</p>\\n\\n'
    """

    def __init__(
        self,
        rules: Selection = None,
        html: Optional[bool] = None,
        breaks: Optional[bool] = None,
        linkify: Optional[bool] = None,
        superscript: Optional[bool] = None,
        xhtml_out: Optional[bool] = None,
    ) -> None:
        """
        Build the MarkdownIt instance and install the rules

        Args:
            rules: Rule selection
            html: Let literal HTML through the parser
            breaks: Render single line breaks as <br>
            linkify: Turn bare URLs into links
            superscript: Load the ^superscript^ extension
            xhtml_out: Close void elements XHTML style

        Raises:
            RuleSelectionError: If a rule name is unknown
        """
        self.options: Dict[str, bool] = {
            "html": appsettings.html if html is None else html,
            "breaks": appsettings.breaks if breaks is None else breaks,
            "linkify": appsettings.linkify if linkify is None else linkify,
            "xhtmlOut": appsettings.xhtml_out if xhtml_out is None else xhtml_out,
        }
        self.superscript = appsettings.superscript if superscript is None else superscript

        selection = appsettings.rules if rules is None else rules
        self.rules: List[str] = registry.names_select(selection)

        self.md = MarkdownIt("js-default", self.options)
        if self.superscript:
            self.md.use(superscript_plugin)
        self.md.use(doflavor_plugin, rules=selection)
        LOG(f"Renderer ready: rules={self.rules} options={self.options}", level=2)

    @classmethod
    def fromProfile(cls, profile: "Profile") -> "Renderer":
        """Build a renderer from a loaded YAML profile"""
        return cls(rules=profile.rules, **profile.options)

    def render(self, source: str) -> str:
        """
        Render Markdown source to HTML

        Args:
            source: Markdown text

        Returns:
            HTML string
        """
        return self.md.render(source)
