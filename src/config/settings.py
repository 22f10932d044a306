"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use DOFLAVOR_ prefix (e.g., DOFLAVOR_RULES=all).

Settings can also be loaded from a .env file in the project root.
"""

from typing import Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use DOFLAVOR_ prefix.

    Examples:
        DOFLAVOR_RULES=all
        DOFLAVOR_HTML=true
        DOFLAVOR_LINKIFY=true
    """

    model_config = SettingsConfigDict(
        env_prefix="DOFLAVOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Rule selection
    rules: str = Field(
        default="default",
        description="Rule selection: 'default', 'all', or comma-separated rule names",
    )

    # markdown-it options
    html: bool = Field(
        default=False,
        description="Let literal HTML through the parser (disables the HTML comment rule)",
    )

    breaks: bool = Field(
        default=True,
        description="Render single line breaks inside paragraphs as <br>",
    )

    linkify: bool = Field(
        default=False,
        description="Turn bare URLs into links (requires explicit scheme or www.)",
    )

    xhtml_out: bool = Field(
        default=False,
        description="Close void elements XHTML style (<br />)",
    )

    superscript: bool = Field(
        default=False,
        description="Load the ^superscript^ inline extension",
    )

    # Markup vocabulary
    note_kinds: Tuple[str, ...] = Field(
        default=("note", "warning", "info", "draft"),
        description="Kinds accepted inside <$>[kind] ... <$> note blocks",
    )

    highlight_class: str = Field(
        default="highlight",
        description="CSS class of the span wrapping <^>variables<^>",
    )

    command_language: str = Field(
        default="bash",
        description="Display language forced onto command / super_user / custom_prefix fences",
    )

    link_rel: str = Field(
        default="nofollow",
        description="Value of the rel attribute stamped onto every link",
    )

    def noteKind_accepts(self, kind: str) -> bool:
        """
        Check whether a note kind is one of the configured kinds.

        Args:
            kind: Kind keyword found between the brackets of <$>[kind]

        Returns:
            True if the kind is accepted (case-sensitive)

        Example:
            >>> settings = AppSettings()
            >>> settings.noteKind_accepts('warning')
            True
            >>> settings.noteKind_accepts('Warning')
            False
        """
        return kind in self.note_kinds


# Singleton instance - import this in your code
appsettings = AppSettings()
