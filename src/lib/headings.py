"""
Heading anchors with the preview tool's slugs

The id attributes are produced by the anchors extension of mdit-py-plugins;
only the slug function is ours. The extension registers its work as a core
rule through ``md.core.ruler.push()``, which is too late for us: by the time
it would run, later rules have replaced text tokens with html_block tokens
and the heading text is gone. ImmediateRuler inverts that protocol and runs
the callback the moment it is registered, from inside do_headings.
"""

import re
from typing import Callable

from markdown_it.rules_core import StateCore
from mdit_py_plugins.anchors import anchors_plugin

from .log import LOG


CoreRule = Callable[[StateCore], None]

# Removed outright, without replacement
SLUG_STRIPPED_CHARS = "!@#$%^*()+=~`"

# Order matters: these run before anything is stripped or lowercased
SLUG_REPLACEMENTS = (
    ("&", "-amp"),
    ('"', "-quot"),
    ("'", "-39"),
)

_STRIP_TABLE = str.maketrans("", "", SLUG_STRIPPED_CHARS)
_SPACES_RE = re.compile(r" +")
_DASHES_RE = re.compile(r"-{2,}")


def slug_make(title: str) -> str:
    """
    Build a heading id the way the preview tool does.

    Args:
        title: Plain heading text

    Returns:
        Slug

    Example:
        >>> slug_make("Step 1 - Install (Ubuntu)")
        'step-1-install-ubuntu'
    """
    slug = title
    for find, replace in SLUG_REPLACEMENTS:
        slug = slug.replace(find, replace)
    slug = slug.translate(_STRIP_TABLE)
    slug = slug.replace(" - ", "-")
    slug = slug.lower()
    slug = _SPACES_RE.sub("-", slug)
    slug = _DASHES_RE.sub("-", slug)
    return slug


class ImmediateRuler:
    """
    Stand-in for a core ruler that runs rules as soon as they are registered

    Only meant for extensions that register exactly the rules they want run
    against ``state`` right now. Nothing is kept.
    """

    def __init__(self, state: StateCore) -> None:
        self.state = state

    def register(self, name: str, callback: CoreRule, options: object = None) -> None:
        LOG(f"do_headings: running '{name}' immediately", level=3)
        callback(self.state)

    push = register


class _ImmediateCore:
    def __init__(self, state: StateCore) -> None:
        self.ruler = ImmediateRuler(state)


class RuleInterceptor:
    """
    The part of a MarkdownIt instance an extension touches when it calls
    ``md.core.ruler.push()``, wired to an ImmediateRuler
    """

    def __init__(self, state: StateCore) -> None:
        self.core = _ImmediateCore(state)


def headings_rule(state: StateCore) -> None:
    """
    Core rule ``do_headings``: id attributes on all heading levels, with
    ``-1``, ``-2`` suffixes for repeated slugs.
    """
    anchors_plugin(
        RuleInterceptor(state),  # type: ignore[arg-type]
        min_level=1,
        max_level=6,
        slug_func=slug_make,
    )
