"""Terminal User Interface for filetagger sessions.

This module provides the TaggerTUI class, a Rich-based interactive TUI
that reads one key at a time, turns it into a session command, and shows
the file under the cursor together with its tags.

Example:
    from filetagger.ui import TaggerTUI

    tui = TaggerTUI()
    tui.display_key_map(key_map)
    command, tag, key = tui.read_command(key_map)
"""

from typing import List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from filetagger.catalog import Catalog
from filetagger.config import KeyMap
from filetagger.models import ScanSummary, SessionCommand, SessionSummary, TagChange

NEXT_KEYS = ("", "n", ">", ".", "right")
PREVIOUS_KEYS = ("p", "<", ",", "left")
EXIT_KEYS = ("x", "esc", "escape")


class TaggerTUI:
    """Rich-based Terminal User Interface for tagging sessions.

    Args:
        console: Optional Rich Console instance for output. Pass a Console
            writing to a StringIO to capture output in tests.
        maximize: Stretch panels to the full console width.
        fit_locators: Shorten long locators so they fit the console width.

    Attributes:
        console: The Rich Console instance used for all output.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        maximize: bool = False,
        fit_locators: bool = False,
    ) -> None:
        self.console = console or Console()
        self.maximize = maximize
        self.fit_locators = fit_locators

    def resolve_key(self, key: str, key_map: KeyMap) -> Tuple[SessionCommand, Optional[str]]:
        """Translate a key into a session command.

        Navigation keys take precedence over tag bindings.

        Args:
            key: Raw key text as typed.
            key_map: Key-to-tag mapping of the session.

        Returns:
            Tuple of (command, tag). The tag is only set for TOGGLE.
        """
        normalized = key.strip().lower()
        if normalized in NEXT_KEYS:
            return SessionCommand.NEXT, None
        if normalized in PREVIOUS_KEYS:
            return SessionCommand.PREVIOUS, None
        if normalized in EXIT_KEYS:
            return SessionCommand.EXIT, None

        tag = key_map.tag_for(normalized)
        if tag is None:
            return SessionCommand.UNKNOWN, None
        return SessionCommand.TOGGLE, tag

    def read_command(self, key_map: KeyMap) -> Tuple[SessionCommand, Optional[str], str]:
        """Prompt for one key and resolve it.

        Returns:
            Tuple of (command, tag, raw key).

        Raises:
            KeyboardInterrupt: Propagated so the caller can end the session.
        """
        key = Prompt.ask("[dim]key[/dim]", console=self.console, default="", show_default=False)
        command, tag = self.resolve_key(key, key_map)
        return command, tag, key

    def shadowed_keys(self, key_map: KeyMap) -> List[str]:
        """Keys bound in the key map that navigation keys take over."""
        reserved = set(NEXT_KEYS + PREVIOUS_KEYS + EXIT_KEYS)
        return [key for key, _ in key_map.items() if KeyMap.normalize_key(key) in reserved]

    def display_key_map(self, key_map: KeyMap) -> None:
        """Show the tag bindings and the navigation keys."""
        table = Table(title="Keys", expand=self.maximize)
        table.add_column("Key", style="cyan", no_wrap=True)
        table.add_column("Action", style="white")

        for key, tag in key_map.items():
            table.add_row(escape(key), f"toggle [magenta]{escape(tag)}[/magenta]")
        table.add_row("Enter / n / >", "next file")
        table.add_row("p / <", "previous file")
        table.add_row("x / esc", "exit")

        self.console.print(table)

        shadowed = self.shadowed_keys(key_map)
        if shadowed:
            self.console.print(
                f"[yellow]Warning:[/yellow] navigation keys override tag keys: "
                f"{', '.join(shadowed)}"
            )

    def display_scan_summary(self, scan: ScanSummary) -> None:
        """Show how the catalog was built."""
        header_text = (
            f"Input: {escape(str(scan.input_dir))}\n"
            f"Output: {escape(str(scan.output_dir))}\n"
            f"Extensions: {', '.join(scan.extensions)}\n"
            f"Files found: {scan.files_found:,}\n"
            f"Resumed from previous session: {scan.files_resumed:,}\n"
            f"Copied: {scan.files_copied:,}"
        )
        self.console.print(
            Panel(header_text, title="Scan Results", border_style="blue", expand=self.maximize)
        )

        if scan.name_collisions:
            self.console.print(
                f"[yellow]Warning:[/yellow] {len(scan.name_collisions)} input name(s) "
                f"appear more than once; later copies get numbered names: "
                f"{escape(', '.join(scan.name_collisions))}"
            )
        if scan.orphaned_outputs:
            self.console.print(
                f"[dim]{len(scan.orphaned_outputs)} output file(s) have no matching input "
                f"and were ignored.[/dim]"
            )
        if scan.duplicate_outputs:
            self.console.print(
                f"[yellow]Warning:[/yellow] ignored duplicate output file(s): "
                f"{', '.join(scan.duplicate_outputs)}"
            )

    def display_catalog(self, catalog: Catalog) -> None:
        """Show every record with its tags, in navigation order."""
        if not len(catalog):
            self.console.print("[yellow]No matching files found.[/yellow]")
            return

        table = Table(title="Catalog", expand=self.maximize)
        table.add_column("#", justify="right", style="cyan", no_wrap=True)
        table.add_column("File", style="white")
        table.add_column("Tags", style="magenta")
        table.add_column("Output", style="dim")

        for idx, record in enumerate(catalog.records(), start=1):
            tags = ", ".join(record.tags) if record.tags else "-"
            output = "(not copied)" if record.pending_copy else record.current_path.name
            table.add_row(
                str(idx), escape(self._truncate_name(record.file_name)), escape(tags), escape(output)
            )

        self.console.print(table)

    def display_current(self, locator: str, summary: str, index: int, total: int) -> None:
        """Show the file under the cursor."""
        if self.fit_locators:
            locator = self._truncate_name(locator, max_length=max(self.console.width - 4, 10))
        body = f"{escape(summary)}\n[dim]{escape(locator)}[/dim]"
        self.console.print(
            Panel(
                body,
                title=f"File {index + 1}/{total}",
                border_style="cyan",
                expand=self.maximize,
            )
        )

    def display_tag_change(self, change: TagChange) -> None:
        if change.added:
            self.console.print(f"[green]+ {change.tag}[/green] -> {escape(change.new_name)}")
        else:
            self.console.print(f"[red]- {change.tag}[/red] -> {escape(change.new_name)}")

    def display_unknown_key(self, key: str) -> None:
        self.console.print(f"[dim]Key {escape(repr(key))} is not bound to a tag.[/dim]")

    def display_error(self, message: str) -> None:
        self.console.print(f"[red]Error:[/red] {escape(message)}")

    def display_session_summary(self, summary: SessionSummary) -> None:
        """Show final statistics after the session ends."""
        table = Table(title="Session Summary", show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Files visited", f"{summary.files_visited:,}")
        table.add_row("Files tagged", f"{summary.files_tagged:,}")
        table.add_row("Tag changes", f"{len(summary.tag_changes):,}")
        table.add_row("Duration", summary.formatted_duration())

        self.console.print(table)

        if summary.errors:
            self._display_errors(summary.errors)

    def _display_errors(self, errors: List[str]) -> None:
        max_display = 10
        error_text = "\n".join(f"- {escape(e)}" for e in errors[:max_display])
        remaining = len(errors) - max_display
        if remaining > 0:
            error_text += f"\n\n... and {remaining} more errors"

        self.console.print(
            Panel(error_text, title=f"Errors ({len(errors)})", border_style="red")
        )

    def _truncate_name(self, name: str, max_length: int = 60) -> str:
        if len(name) > max_length:
            return name[: max_length - 3] + "..."
        return name
