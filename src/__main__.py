#!/usr/bin/env python3
"""
doflavor - Markdown renderer matching a documentation preview tool

Renders Markdown the way the vendor's tutorial preview tool does, down to
the byte: smart quotes, <^>variable<^> highlights, <$>[note] callouts,
labelled and command-prefixed code fences, and its spacing between blocks.

Usage:
    doflavor inputdir/ outputdir/ --inputFile tutorial.md

    The rendered HTML is written to outputdir/ as tutorial.html.

Examples:
    # Default rules (everything except spacing)
    doflavor . output/ --inputFile tutorial.md

    # Every rule, including the spacing rule
    doflavor . output/ --inputFile tutorial.md --rules all

    # Settings from a YAML profile, into a subdirectory
    doflavor . output/ --inputFile tutorial.md --profile strict.yaml --outputSubdir html/

    # Verbose output, per-rule traces with -vv
    doflavor . output/ --inputFile tutorial.md -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import List, Optional

from .lib import Renderer, Profile, ProfileError, RuleSelectionError, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
     _        __ _
  __| | ___  / _| | __ ___   _____  _ __
 / _` |/ _ \| |_| |/ _` \ \ / / _ \| '__|
| (_| | (_) |  _| | (_| |\ V / (_) | |
 \__,_|\___/|_| |_|\__,_| \_/ \___/|_|

  Markdown to preview-tool HTML
"""

# Define CLI arguments
parser = ArgumentParser(
    description="doflavor - Markdown renderer matching a documentation preview tool",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument("inputdir", type=str, help="Directory containing the Markdown source")

parser.add_argument("outputdir", type=str, help="Directory for the rendered HTML")

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input Markdown (.md) file (relative to inputdir)"
)

parser.add_argument(
    "--rules",
    default=None,
    type=str,
    help="Rule selection: 'default', 'all' or comma-separated rule names. Overrides the profile",
)

parser.add_argument(
    "--profile",
    default=None,
    type=str,
    help="YAML render profile (relative to inputdir, or absolute)",
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the rendered HTML",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Verifies that the input file (and profile, if given) exist, then
    creates the output directory.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to .md input file
            - profileFile: Resolved path to the profile, or None
            - htmlOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if input file or profile not found
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile

    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    if state.profile:
        profile_file = Path(state.profile)
        if not profile_file.is_absolute():
            profile_file = state.inputdir / profile_file
        if not profile_file.is_file():
            print(f"Error: Profile not found: {profile_file}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        state.profileFile = profile_file
        LOG(f"Profile: {profile_file}", level=2)

    state.htmlOutputdir = state.outputdir / state.outputSubdir
    state.htmlOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.htmlOutputdir}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the Markdown source from disk.

    Args:
        inputstate: Program state with inputSourceFile path set

    Returns:
        ProgramState with added field:
            - sourceText: The Markdown source

    Exits:
        1 if the file cannot be read
    """

    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        state.sourceText = state.inputSourceFile.read_text(encoding="utf-8")
        LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)
    return state


def markdown_render(inputstate: ProgramState) -> ProgramState:
    """
    Render the Markdown source to HTML and write it out.

    The rule selection comes from --rules, else from the profile, else from
    AppSettings. Other options come from the profile, else AppSettings.

    Args:
        inputstate: Program state with sourceText

    Returns:
        ProgramState with added field:
            - renderResult: Dict containing:
                - status: bool (render success)
                - output_file: str (path to the written .html file)
                - characters: int (length of the HTML)
                - rules: list of rule names applied

    Exits:
        1 if sourceText is None, or the profile or rule selection is invalid
    """

    state = inputstate.copy()

    LOG("Rendering Markdown to HTML...", level=1)

    if state.sourceText is None:
        print("Error: No source text available", file=sys.stderr)
        sys.exit(1)

    try:
        if state.profileFile:
            profile = Profile(state.profileFile)
            renderer = Renderer(
                rules=state.rules if state.rules else profile.rules,
                **profile.options,
            )
        else:
            renderer = Renderer(rules=state.rules)
    except (ProfileError, RuleSelectionError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    html = renderer.render(state.sourceText)

    output_file = state.htmlOutputdir / f"{Path(state.inputFile).stem}.html"
    output_file.write_text(html, encoding="utf-8")
    LOG(f"Wrote {output_file}", level=2)

    state.renderResult = {
        "status": True,
        "output_file": str(output_file),
        "characters": len(html),
        "rules": renderer.rules,
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display render results to the user.

    Args:
        inputstate: Program state with renderResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Rendering successful!", level=1)
    LOG(f"  Output: {state.renderResult['output_file']}", level=1)
    LOG(f"  Characters: {state.renderResult['characters']}", level=1)
    LOG(f"  Rules: {', '.join(state.renderResult['rules'])}", level=1)
    return state


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point - render a Markdown file to preview-tool HTML.

    Orchestrates the full pipeline:
        1. env_check: Validate paths and environment
        2. source_read: Read the .md file
        3. markdown_render: Render and write the .html file
        4. results_report: Display results to user

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])
    """
    options: Namespace = parser.parse_args(argv)

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=Path(options.inputdir), outputdir=Path(options.outputdir)
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, source_read, markdown_render, results_report)


if __name__ == "__main__":
    main()
