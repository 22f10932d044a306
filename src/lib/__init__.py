"""
doflavor - Markdown renderer matching a documentation preview tool

Token-rewriting rules for markdown-it that reproduce the preview tool's HTML.
"""

__version__ = "1.0.0"

from .renderer import Renderer, doflavor_plugin, lowLevelDefaults_apply
from .registry import RuleRegistry, RuleSelectionError, registry
from .profile import Profile, ProfileError
from .log import LOG, state_connectToLogger

__all__ = [
    "Renderer",
    "doflavor_plugin",
    "lowLevelDefaults_apply",
    "RuleRegistry",
    "RuleSelectionError",
    "registry",
    "Profile",
    "ProfileError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
