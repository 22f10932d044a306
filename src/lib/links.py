"""
Links: rel attribute and stricter link recognition

do_links itself only stamps ``rel`` onto every link. Which text becomes a
link in the first place is decided by markdown-it while parsing, long before
any core rule of ours runs, so that part is a setup hook patching the
MarkdownIt instance once, when the rule is installed:

- ``[text](dest)`` only accepts http(s) URLs and #fragments; anything else
  stays literal text
- bare links need a scheme or a ``www.`` prefix (no bare ``example.com``)
- nothing is linkified inside a hand-written ``<a ...>`` tag
"""

import re
from types import SimpleNamespace
from typing import Any, List, Optional

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore

from ..config import appsettings
from .log import LOG
from .tokens import TokenCursor, tokens_walk


DESTINATION_ALLOWED_RE = re.compile(r"^(https?://|#)", re.IGNORECASE)
ANCHOR_START_RE = re.compile(r"^<a[>\s]", re.IGNORECASE)
ANCHOR_UNCLOSED_RE = re.compile(r"<a[\s>][^<]*$", re.IGNORECASE)

_PATCHED_FLAG = "_doflavor_links_patched"


def destination_allowed(url: str) -> bool:
    """True for explicit http/https URLs and internal #fragment references"""
    return DESTINATION_ALLOWED_RE.match(url) is not None


def _parseLinkDestination_wrap(original: Any) -> Any:
    def parseLinkDestination(string: str, pos: int, maximum: int) -> Any:
        result = original(string, pos, maximum)
        if result.ok and not destination_allowed(result.str):
            result.ok = False
            result.pos = 0
            result.str = ""
        return result

    return parseLinkDestination


def _linkifyMatch_wrap(original: Any) -> Any:
    def match(text: str) -> Optional[List[Any]]:
        found = original(text)
        if not found:
            return found
        return [
            link for link in found
            if (link.schema != "" or link.raw.startswith("www."))
            and not ANCHOR_UNCLOSED_RE.search(text[:link.index])
        ]

    return match


def _linkifyTest_wrap(original: Any) -> Any:
    def test(text: str) -> bool:
        if ANCHOR_START_RE.match(text):
            return False
        return original(text)

    return test


def links_patchInternals(md: MarkdownIt) -> None:
    """
    Tighten link recognition on one MarkdownIt instance.

    ``md.helpers`` is a module shared by every instance in the process, so
    it is replaced by a copy on this instance before being patched. Running
    this twice on the same instance is a no-op.

    Args:
        md: Instance to patch
    """
    if getattr(md, _PATCHED_FLAG, False):
        return

    helpers = SimpleNamespace(
        **{name: getattr(md.helpers, name) for name in md.helpers.__all__}
    )
    helpers.parseLinkDestination = _parseLinkDestination_wrap(helpers.parseLinkDestination)
    md.helpers = helpers  # type: ignore[assignment]

    if md.linkify is not None:
        md.linkify.match = _linkifyMatch_wrap(md.linkify.match)  # type: ignore[method-assign]
        md.linkify.test = _linkifyTest_wrap(md.linkify.test)  # type: ignore[method-assign]

    # The inline linkify rule bypasses the filters above
    md.inline.ruler.disable("linkify", True)

    setattr(md, _PATCHED_FLAG, True)
    LOG("do_links: link recognition patched", level=2)


def links_rule(state: StateCore) -> None:
    """Core rule ``do_links``: ``rel`` on every link_open token"""
    def visit(cursor: TokenCursor) -> None:
        if cursor.token.type == "link_open":
            cursor.token.attrSet("rel", appsettings.link_rel)

    tokens_walk(state, visit)
