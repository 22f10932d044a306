"""
Rule specification and metadata models

Defines the structure and categories of the token-rewriting rules for
selection, registration and documentation.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Any, Callable, Optional


class RuleCategory(Enum):
    """
    Categories of rewriting rules

    Used for organization and documentation generation.
    """
    STRUCTURE = "structure"    # do_headings, do_links
    CLEANUP = "cleanup"        # do_html_comments
    INLINE = "inline"          # do_notes, do_variable_highlights
    BLOCK = "block"            # do_code_blocks
    LAYOUT = "layout"          # do_spacing


@dataclass(frozen=True)
class RuleSpec:
    """
    Specification for a token-rewriting rule

    Frozen so the ordered rule table built from these specs cannot be
    mutated after startup.

    Attributes:
        name: Registration name in markdown-it's core ruler (e.g. "do_notes")
        category: Category for organization
        description: Human-readable description
        handler: markdown-it core rule, (state) -> None
        in_default: Whether the rule is part of the "default" selection
        setup: Optional one-time hook run against the MarkdownIt instance
               when the rule is installed (e.g. patching link parsing)
    """
    name: str
    category: RuleCategory
    description: str
    handler: Callable[[Any], None]
    in_default: bool = True
    setup: Optional[Callable[[Any], None]] = None


# Keywords accepted in place of an explicit list of rule names
SELECTION_DEFAULT = "default"
SELECTION_ALL = "all"
