"""
doflavor - Markdown renderer matching a documentation preview tool

Reproduces the tutorial preview tool's HTML on top of markdown-it-py.
"""

__version__ = "1.0.0"

from .lib import Renderer, doflavor_plugin, RuleRegistry, RuleSelectionError, LOG, state_connectToLogger

__all__ = [
    "Renderer",
    "doflavor_plugin",
    "RuleRegistry",
    "RuleSelectionError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
