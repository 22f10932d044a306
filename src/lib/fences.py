"""
Fenced code blocks

Each ``fence`` token is rendered here, in full, into an html_block token:

    ```custom_prefix(mysql>)
    [label Query]
    SELECT * FROM <^>table<^>;
    ```

becomes

    <div class="code-label " title="Query">Query</div><pre class="code-pre
    custom_prefix prefixed"><code class="code-highlight language-bash"><ul
    class="prefixed"><li class="line" data-prefix="mysql&gt;">SELECT * FROM
    <span class="highlight">table</span>;
    </li></ul></code></pre>

(without the wrapping). The trailing space inside ``class="code-pre "`` and
the line breaks placed just before ``</li>`` are what the preview tool emits.
"""

import re
from typing import List, Optional, Tuple

from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from ..config import appsettings
from ..models.fence import CodeLabels, CommandDirective
from .escaping import code_escape, prose_escape
from .log import LOG
from .tokens import TokenCursor, htmlToken_make, tokens_walk
from .variables import vars_process


LINE_SPLIT_RE = re.compile(r"\r\n|\n|\r")
LABEL_RE = re.compile(r"^\[(label|secondary_label) (.+)\]$", re.IGNORECASE)

SPACING_RULE = "do_spacing"


def labels_extract(lines: List[str]) -> Tuple[CodeLabels, List[str]]:
    """
    Pull [label ...] / [secondary_label ...] lines out of a code block.

    The first line of each type is captured and dropped. Later lines of a
    type already captured, and anything that only looks like a directive,
    stay in the code.

    Args:
        lines: Physical lines of the fence content

    Returns:
        The captured labels and the remaining lines
    """
    labels = CodeLabels()
    remaining: List[str] = []
    for line in lines:
        match = None if labels.full else LABEL_RE.match(line)
        if match and labels.label_capture(match.group(1), match.group(2)):
            continue
        remaining.append(line)
    return labels, remaining


def _line_escape(line: str) -> str:
    return vars_process(line, code_escape, code_escape)


def commandLines_render(lines: List[str], directive: CommandDirective) -> str:
    """
    Wrap every line in a prefixed list item.

    Blank lines between other lines are kept as empty items; a single blank
    last line (what a fence body normally ends with) is not.

    Returns:
        The list markup without its final ``</li></ul>``, which goes right
        before ``</code>``
    """
    prefix = directive.prefix if directive.prefix == ">" else prose_escape(directive.prefix)
    item_open = f'<li class="line" data-prefix="{prefix}">'

    rendered = [f'<ul class="prefixed">{item_open}{_line_escape(lines[0])}']
    last = len(lines) - 1
    for index, line in enumerate(lines[1:], start=1):
        if index == last and not line:
            rendered.append(line)
        else:
            rendered.append(f"</li>{item_open}{_line_escape(line)}")
    return "\n".join(rendered)


def fence_render(token: Token, final_newline: bool = True) -> str:
    """
    Compose the HTML of one fence token.

    Args:
        token: A ``fence`` token
        final_newline: Whether a line break follows ``</pre>``

    Returns:
        Markup for an html_block token
    """
    labels, lines = labels_extract(LINE_SPLIT_RE.split(token.content))

    lang = token.info.strip()
    pre_classes: List[str] = []
    before_closing = ""

    directive = CommandDirective.fromInfo(lang)
    if directive.active:
        lang = appsettings.command_language
        pre_classes.extend([directive.kind.value, "prefixed"])
        body = commandLines_render(lines, directive)
        before_closing = "</li></ul>"
    else:
        body = vars_process("\n".join(lines), code_escape, code_escape)

    body = body.rstrip()

    if labels.secondary is not None:
        body = (
            f'<div class="secondary-code-label " title="{labels.secondary}">'
            f"{labels.secondary}</div>" + body
        )

    pre_open = f'<pre class="code-pre {" ".join(pre_classes)}">'
    code_open = f'<code class="code-highlight language-{lang}">' if lang else "<code>"

    html = (
        f"{pre_open}{code_open}{body}\n{before_closing}</code></pre>"
        + ("\n" if final_newline else "")
    )

    if labels.primary is not None:
        html = f'<div class="code-label " title="{labels.primary}">{labels.primary}</div>' + html

    return html


def _spacingRule_active(state: StateCore) -> bool:
    return SPACING_RULE in state.md.core.ruler.get_active_rules()


def codeBlocks_rule(state: StateCore) -> None:
    """
    Core rule ``do_code_blocks``: every fence becomes its final HTML.

    When do_spacing is active, a fence directly followed by another fence
    has no line break after its ``</pre>``.
    """
    spacing = _spacingRule_active(state)

    def visit(cursor: TokenCursor) -> None:
        token = cursor.token
        if token.type != "fence" or token.tag != "code":
            return

        following: Optional[Token] = cursor.peek(1)
        adjacent = following is not None and following.type == "fence"
        cursor.replaceCurrent(
            htmlToken_make(fence_render(token, not (spacing and adjacent)), token.nesting)
        )
        LOG(f"do_code_blocks: rendered fence '{token.info.strip()}'", level=3)

    tokens_walk(state, visit)
