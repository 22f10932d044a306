"""
Fenced code block models

Type-safe structures for the directives recognised inside fenced code:
the [label ...] / [secondary_label ...] lines and the command-style
language tags.
"""

import re
from enum import Enum
from dataclasses import dataclass
from typing import Optional


class CommandKind(Enum):
    """
    Command-style fence tags

    The value is the class name injected into <pre> for that kind.
    """
    NONE = ""
    COMMAND = "command"              # ```command     -> $ prefix
    SUPER_USER = "super_user"        # ```super_user  -> # prefix
    CUSTOM_PREFIX = "custom_prefix"  # ```custom_prefix(mysql>)


CUSTOM_PREFIX_RE = re.compile(r"^custom_prefix\((.+)\)$", re.IGNORECASE)


@dataclass
class CodeLabels:
    """
    Labels captured from a fenced code block

    Each label type is set at most once; the first occurrence wins.

    Attributes:
        primary: Text of [label ...], rendered above the <pre> wrapper
        secondary: Text of [secondary_label ...], rendered inside <code>

    Example:
        For the fence body "[label app.js]\\nrun()":
        CodeLabels(primary="app.js", secondary=None)
    """
    primary: Optional[str] = None
    secondary: Optional[str] = None

    @property
    def full(self) -> bool:
        """True once both label types have been captured"""
        return self.primary is not None and self.secondary is not None

    def label_capture(self, keyword: str, value: str) -> bool:
        """
        Store a label unless one of the same type was already captured.

        Args:
            keyword: "label" or "secondary_label", any case
            value: Label text

        Returns:
            True if the label was stored (and its line should be dropped)
        """
        if keyword.lower() == "label":
            if self.primary is not None:
                return False
            self.primary = value
        else:
            if self.secondary is not None:
                return False
            self.secondary = value
        return True


@dataclass
class CommandDirective:
    """
    Command-style rendering derived from a fence's language tag

    Attributes:
        kind: Which command tag was used (NONE for ordinary fences)
        prefix: Prefix shown before each line ("$", "#" or the custom text)

    Example:
        CommandDirective.fromInfo("custom_prefix(node>)")
        -> CommandDirective(kind=CommandKind.CUSTOM_PREFIX, prefix="node>")
    """
    kind: CommandKind = CommandKind.NONE
    prefix: str = ""

    @property
    def active(self) -> bool:
        return self.kind is not CommandKind.NONE

    @classmethod
    def fromInfo(cls, info: str) -> "CommandDirective":
        """
        Derive the command directive from a fence info string.

        Only the exact tags ``command`` and ``super_user`` and the
        ``custom_prefix(...)`` form are recognised; anything else is an
        ordinary language tag.
        """
        if info == "command":
            return cls(kind=CommandKind.COMMAND, prefix="$")
        if info == "super_user":
            return cls(kind=CommandKind.SUPER_USER, prefix="#")
        match = CUSTOM_PREFIX_RE.match(info)
        if match:
            return cls(kind=CommandKind.CUSTOM_PREFIX, prefix=match.group(1))
        return cls()
