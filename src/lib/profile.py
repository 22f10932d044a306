"""
Render profiles for doflavor

A profile is a small YAML file pinning the rule selection and the
markdown-it options for a set of documents:

    # tutorial.yaml
    rules: all
    options:
      html: false
      breaks: true
      superscript: true

``rules`` may also be a list of rule names. Options not given fall back to
AppSettings.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Union

from .log import LOG
from .registry import RuleSelectionError, registry


PROFILE_OPTIONS = ("html", "breaks", "linkify", "xhtml_out", "superscript")


class ProfileError(Exception):
    """Raised when profile loading or validation fails"""
    pass


class Profile:
    """
    A loaded render profile

    Attributes:
        name: Profile file stem
        rules: Rule selection as written in the profile
        options: Renderer keyword options given in the profile
    """

    def __init__(self, path: Union[str, Path]) -> None:
        """
        Load and validate a profile.

        Args:
            path: Path to the YAML file

        Raises:
            ProfileError: If the file is missing, is not valid YAML, or holds
                unknown keys, non-boolean options or unknown rule names
        """
        self.path = Path(path)
        self.name = self.path.stem

        if not self.path.is_file():
            raise ProfileError(f"Profile not found: {self.path}")

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ProfileError(f"Invalid YAML in {self.path}: {e}")

        if not isinstance(config, dict):
            raise ProfileError(f"Profile {self.path} must be a mapping")

        unknown = set(config) - {"rules", "options"}
        if unknown:
            raise ProfileError(f"Unknown profile keys in {self.path}: {', '.join(sorted(unknown))}")

        self.rules: Union[str, List[str]] = self.rules_validate(config.get("rules", "default"))
        self.options: Dict[str, bool] = self.options_validate(config.get("options") or {})
        LOG(f"Loaded profile {self.name}: rules={self.rules} options={self.options}", level=2)

    def rules_validate(self, rules: Any) -> Union[str, List[str]]:
        """Check the rule selection resolves against the registry"""
        if not isinstance(rules, (str, list)):
            raise ProfileError(f"'rules' in {self.path} must be a string or a list")
        try:
            registry.names_select(rules)
        except RuleSelectionError as e:
            raise ProfileError(f"{self.path}: {e}")
        return rules

    def options_validate(self, options: Any) -> Dict[str, bool]:
        """Check options are known and boolean"""
        if not isinstance(options, dict):
            raise ProfileError(f"'options' in {self.path} must be a mapping")
        for key, value in options.items():
            if key not in PROFILE_OPTIONS:
                raise ProfileError(
                    f"Unknown option '{key}' in {self.path}. "
                    f"Available: {', '.join(PROFILE_OPTIONS)}"
                )
            if not isinstance(value, bool):
                raise ProfileError(f"Option '{key}' in {self.path} must be true or false")
        return dict(options)
