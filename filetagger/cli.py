"""
File Tagger - CLI Interface.

A command-line interface for tagging media files by renaming working copies.
Every input file is copied once into a flat output directory; toggling a tag
renames the copy so its name lists the tags, e.g. ``photo__nature-sky.jpg``.
Re-running on the same output directory resumes the previous session.

Usage Examples:
    # Tag jpg and png files, keys from ./tagkeys.json
    python -m filetagger tag photos tagged jpg png

    # Preview the catalog and resumed tags without copying anything
    python -m filetagger scan photos tagged jpg png

    # Use a custom key map and write a session log
    python -m filetagger tag photos tagged jpg --keys my_keys.json --log-file session.log
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from filetagger import __version__
from filetagger.config import KeyMap, default_key_map_path
from filetagger.exceptions import ConfigError, TaggerError
from filetagger.orchestration import TagOrchestrator
from filetagger.ui import TaggerTUI

app = typer.Typer(
    name="filetagger",
    help="File Tagger - Tag media files by encoding tags into their names.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"File Tagger v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logging through Rich; DEBUG when verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def split_extensions(values: List[str]) -> List[str]:
    """Accept extensions given separately or comma separated.

    Example:
        >>> split_extensions(["jpg,png", ".GIF"])
        ['jpg', 'png', '.GIF']
    """
    result: List[str] = []
    for value in values:
        result.extend(part.strip() for part in value.split(",") if part.strip())
    return result


def fail(message: str, code: int = 1) -> None:
    """Print a single-line error and exit without a traceback."""
    console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(code)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """File Tagger - Tag media files by encoding tags into their names."""
    pass


@app.command()
def tag(
    input_dir: Path = typer.Argument(..., help="Directory to search for media files."),
    output_dir: Path = typer.Argument(..., help="Directory to save tagged copies to."),
    extensions: List[str] = typer.Argument(
        ..., help="Extensions to include, e.g. 'jpg png' or 'jpg,png'."
    ),
    maximize: bool = typer.Option(
        False,
        "--max",
        "-m",
        help="Stretch the display to the full terminal width.",
    ),
    resize: bool = typer.Option(
        False,
        "--resize",
        "-r",
        help="Shorten long file locators to fit the terminal.",
    ),
    keys: Optional[Path] = typer.Option(
        None,
        "--keys",
        "-k",
        help="Key-to-tag JSON file (default: ./tagkeys.json).",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Path for the session log file.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose output.",
    ),
) -> None:
    """
    Interactive tagging session.

    Copies new input files into the output directory, resumes tags found in
    existing output file names, then reads one key at a time: bound keys
    toggle their tag on the current file, Enter/n moves to the next file,
    p to the previous one, and x exits.
    """
    configure_logging(verbose)

    key_map_path = keys if keys is not None else default_key_map_path()
    try:
        key_map = KeyMap.load(key_map_path)
    except ConfigError as e:
        fail(str(e))

    try:
        orchestrator = TagOrchestrator(
            input_dir=input_dir,
            output_dir=output_dir,
            extensions=split_extensions(extensions),
            key_map=key_map,
            log_file_path=log_file,
            verbose=verbose,
            tui=TaggerTUI(console=console, maximize=maximize, fit_locators=resize),
        )
        summary = orchestrator.run_session()

    except KeyboardInterrupt:
        console.print("\n[yellow]Session interrupted by user.[/yellow]")
        raise typer.Exit(130)

    except (TaggerError, ValueError) as e:
        fail(str(e))

    if summary.interrupted:
        raise typer.Exit(130)
    if summary.errors:
        console.print(f"\n[yellow]Completed with {len(summary.errors)} error(s).[/yellow]")
        raise typer.Exit(1)


@app.command()
def scan(
    input_dir: Path = typer.Argument(..., help="Directory to search for media files."),
    output_dir: Path = typer.Argument(..., help="Directory holding tagged copies."),
    extensions: List[str] = typer.Argument(
        ..., help="Extensions to include, e.g. 'jpg png' or 'jpg,png'."
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Path for the scan log file.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose output.",
    ),
) -> None:
    """
    Show the catalog without changing any files.

    Lists every matching input file in navigation order together with the
    tags resumed from the output directory.
    """
    configure_logging(verbose)

    try:
        orchestrator = TagOrchestrator(
            input_dir=input_dir,
            output_dir=output_dir,
            extensions=split_extensions(extensions),
            log_file_path=log_file,
            verbose=verbose,
            tui=TaggerTUI(console=console),
        )
        orchestrator.scan()

    except KeyboardInterrupt:
        console.print("\n[yellow]Scan interrupted by user.[/yellow]")
        raise typer.Exit(130)

    except (TaggerError, ValueError) as e:
        fail(str(e))


if __name__ == "__main__":
    app()
