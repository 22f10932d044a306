"""
Find/replace escaping profiles matching the preview tool's HTML output

Escaping is an ordered list of Replacement passes run over a string. Two
profiles are built from them:

- prose_escape(): what the preview tool does to ordinary text. HTML special
  characters first, then the smart-quote stages, then (R)/(C)/(TM) symbols.
- code_escape(): the much smaller set used inside code blocks, where quotes
  pass through untouched and tabs become four spaces.

The order of the passes is load-bearing. Every smart-quote stage emits
entities containing '&', and no later pass may touch those again, so '&' is
always escaped before any quote is curled. Each stage is named and exported
in SMART_QUOTE_STAGES so it can be pinned down on its own.

Patterns are written against whole strings: ``\\Z`` marks the end of the
input, never the end of a line.

Warning:
    Never run markdown-it's escapeHtml() over the output of these
    functions, it would double-escape the entities they produce.
"""

import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Pattern, Union


Replacer = Union[str, Callable[[re.Match], str]]


@dataclass(frozen=True)
class Replacement:
    """
    One find/replace pass

    Attributes:
        find: Literal string or compiled pattern; every occurrence is replaced
        replace: Literal replacement, or a function of the match
        stage: Short name used in docs and tests
    """
    find: Union[str, Pattern[str]]
    replace: Replacer
    stage: str = ""

    def apply(self, text: str) -> str:
        """Run this pass over ``text``"""
        if isinstance(self.find, str):
            if isinstance(self.replace, str):
                return text.replace(self.find, self.replace)
            pattern: Pattern[str] = re.compile(re.escape(self.find))
        else:
            pattern = self.find

        if isinstance(self.replace, str):
            # Literal replacement, no group expansion
            literal = self.replace
            return pattern.sub(lambda _m: literal, text)
        return pattern.sub(self.replace, text)


def replacers_run(text: str, replacements: Iterable[Replacement]) -> str:
    """
    Apply replacement passes in order, each to the output of the previous one.

    Args:
        text: Input string
        replacements: Ordered passes

    Returns:
        Rewritten string
    """
    for replacement in replacements:
        text = replacement.apply(text)
    return text


# ---------------------------------------------------------------------------
# HTML special characters
# ---------------------------------------------------------------------------

COMMENTS = Replacement(re.compile(r"<!--.*?-->"), "", "comments")
AMPERSAND = Replacement("&", "&amp;", "&")
GREATER_THAN = Replacement(">", "&gt;", ">")
LESS_THAN = Replacement("<", "&lt;", "<")
TABS = Replacement("\t", "    ", "tabs")

# Comments go first: once '<' is escaped a comment can no longer be found
HTML_REPLACEMENTS: List[Replacement] = [COMMENTS, AMPERSAND, GREATER_THAN, LESS_THAN]


# ---------------------------------------------------------------------------
# Smart quotes
# ---------------------------------------------------------------------------

def _doublePair_curl(match: re.Match) -> str:
    # Whitespace around the pair stays outside the entities
    inner = match.group(0).replace('"', "").strip()
    return f"{match.group(1) or ''}&ldquo;{inner}&rdquo;{match.group(3) or ''}"


def _equalsPair_curl(match: re.Match) -> str:
    if match.group(1) == "=":
        return f"=&ldquo;{match.group(2)}&rdquo;"
    return f"&ldquo;{match.group(3)}&rdquo;="


def _quotes_sub(quote_pattern: str, entity: str) -> Callable[[re.Match], str]:
    """Build a replacer that swaps quote characters inside the match only"""
    quote_re = re.compile(quote_pattern)

    def replacer(match: re.Match) -> str:
        return quote_re.sub(entity, match.group(0))

    return replacer


SMART_QUOTE_STAGES: List[Replacement] = [
    # 1. Double-quote pairs: surrounded by spaces, or the whole string
    Replacement(
        re.compile(r'( )"([^"]*?)"( )|^"([^"]*?)"\Z'),
        _doublePair_curl,
        "double-pair",
    ),
    #    ... or touching '=' on either side, as in attr="value"
    Replacement(
        re.compile(r'(=)"([^"]*?)"|"([^"]*?)"(=)'),
        _equalsPair_curl,
        "double-pair-equals",
    ),
    # 2. Stray doubles: opening side, or at the very start
    Replacement(
        re.compile(r'“|[\r\n ]"[^\r\n ]|^"'),
        _quotes_sub('[“"]', "&ldquo;"),
        "double-open",
    ),
    #    ... closing side, or at the very end
    Replacement(
        re.compile(r'”|[^\r\n ]"[\r\n ]|"\Z'),
        _quotes_sub('[”"]', "&rdquo;"),
        "double-close",
    ),
    # 3. Two singles after whitespace: right then left, in that order
    Replacement(
        re.compile(r"[\r\n ]''[^\r\n ]"),
        _quotes_sub("''", "&rsquo;&lsquo;"),
        "single-pair-left",
    ),
    # 4. Two singles touching text on the left become a left double, unless
    #    they end the string (a ')'-prefixed pair at the end still counts)
    Replacement(
        re.compile(r"[^\r\n ]''(?!\Z)|\)''\Z"),
        _quotes_sub("''", "&ldquo;"),
        "single-pair-right",
    ),
    Replacement(re.compile(r"''\Z"), "&rdquo;", "single-pair-end"),
    # 5. Single on the right edge of a word, or alone
    Replacement(
        re.compile(r"[^']+' |[^']+'\Z|^'\Z"),
        _quotes_sub("'", "&rsquo;"),
        "single-right-edge",
    ),
    # 6. Singles touching parentheses
    Replacement("('", "(&lsquo;", "single-paren-open"),
    Replacement("')", "&rsquo;)", "single-paren-close"),
    # 7. Singles after $, & or &amp;, and the 'll / 's contractions
    Replacement(
        re.compile(r"[&$]'|&amp;'|'ll|'s"),
        _quotes_sub("'", "&rsquo;"),
        "single-contraction",
    ),
    # 8. Whatever double is left; leftover singles stay as they are
    Replacement('"', "&quot;", "double-fallback"),
]


# ---------------------------------------------------------------------------
# Symbol shorthand
# ---------------------------------------------------------------------------

SYMBOL_REPLACEMENTS: List[Replacement] = [
    Replacement(re.compile(r"\(R\)", re.IGNORECASE), "&reg;", "registered"),
    Replacement(re.compile(r"\(C\)", re.IGNORECASE), "&copy;", "copyright"),
    Replacement(re.compile(r"\(TM\)", re.IGNORECASE), "&trade;", "trademark"),
]


PROSE_REPLACEMENTS: List[Replacement] = [
    *HTML_REPLACEMENTS,
    *SMART_QUOTE_STAGES,
    *SYMBOL_REPLACEMENTS,
]

CODE_REPLACEMENTS: List[Replacement] = [AMPERSAND, GREATER_THAN, LESS_THAN, TABS]


def prose_escape(text: str) -> str:
    """
    Escape ordinary text the way the preview tool does.

    Leftover HTML comments are dropped, '&', '>', '<' become entities,
    quotes are curled, and (R), (C), (TM) become symbol entities.

    Example:
        >>> prose_escape("('hello')")
        '(&lsquo;hello&rsquo;)'
    """
    return replacers_run(text, PROSE_REPLACEMENTS)


def code_escape(text: str) -> str:
    """
    Minimal escaping for code: '&', '>', '<' only, tabs to four spaces.

    Example:
        >>> code_escape('if (a < b) {\\n\\tsay("hi");\\n}')
        'if (a &lt; b) {\\n    say("hi");\\n}'
    """
    return replacers_run(text, CODE_REPLACEMENTS)


def comments_strip(text: str) -> str:
    """Remove every complete <!-- ... --> comment (single line each)"""
    return COMMENTS.apply(text)


def brackets_unescape(text: str) -> str:
    """Turn &lt; / &gt; back into angle brackets"""
    return text.replace("&lt;", "<").replace("&gt;", ">")
