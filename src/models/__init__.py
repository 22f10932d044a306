"""
Models package for doflavor

Contains data structures and type definitions for the rendering pipeline.
"""

from .state import ProgramState, pipeline
from .rules import RuleSpec, RuleCategory, SELECTION_ALL, SELECTION_DEFAULT
from .fence import CodeLabels, CommandDirective, CommandKind

__all__ = [
    "ProgramState",
    "pipeline",
    "RuleSpec",
    "RuleCategory",
    "SELECTION_ALL",
    "SELECTION_DEFAULT",
    "CodeLabels",
    "CommandDirective",
    "CommandKind",
]
