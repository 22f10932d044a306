"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the rendering pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as rendering progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, rules, profile, outputSubdir
        - env_check: inputSourceFile, profileFile, htmlOutputdir, envOK
        - source_read: sourceText
        - markdown_render: renderResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the source .md file
        outputdir: Base output directory for rendered files
        verbosity: Logging verbosity level (1-3)
        inputFile: Input .md filename (relative to inputdir)
        rules: Rule selection from the CLI ("default", "all" or comma-separated names)
        profile: Optional YAML render profile (relative to inputdir or absolute)
        outputSubdir: Subdirectory within outputdir for output
        envOK: Environment validation passed
        inputSourceFile: Resolved path to input .md file
        profileFile: Resolved path to the profile, if any
        htmlOutputdir: Final output directory (outputdir + outputSubdir)
        sourceText: Markdown source read from disk
        renderResult: Render results (output_file, characters, rules, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    rules: Optional[str] = field(default=None)
    profile: Optional[str] = field(default=None)
    outputSubdir: str = field(default=".")

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    profileFile: Optional[Path] = field(default=None)
    htmlOutputdir: Path = field(default=Path("/"))
    sourceText: Optional[str] = field(default=None)
    renderResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Merges CLI options with explicitly provided directories to create
        the initial program state for the rendering pipeline.

        Args:
            options: Parsed CLI arguments (inputFile, rules, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for rendered output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Positional directories arrive separately; drop unknown argparse keys
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            markdown_render,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
