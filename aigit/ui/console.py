"""
Console interface with Rich components.
"""

from typing import List, Optional, Iterable, Tuple
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text
from rich.theme import Theme
from rich import box

from ..utils.review_parser import classify_line


class AigitConsole:
    """Console interface for aigit commands."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize console, optionally wrapping an existing Rich console."""
        self._setup_styles()
        self.console = console or Console()
        self.console.push_theme(self.theme)

    def _setup_styles(self) -> None:
        """Setup custom styles for consistent theming."""
        self.styles = {
            "title": "bold blue",
            "success": "bold green",
            "warning": "bold yellow",
            "error": "bold red",
            "info": "blue",
            "muted": "dim",
            "commit_type": "bold magenta",
            "severity_high": "bold red",
            "severity_medium": "bold yellow",
            "severity_low": "cyan",
            "severity_ok": "bold green",
        }

        self.theme = Theme(self.styles)

    def print_success(self, message: str) -> None:
        """Print success message."""
        self.console.print(f"[success]✓ {message}[/success]")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self.console.print(f"[warning]⚠ {message}[/warning]")

    def print_error(self, message: str) -> None:
        """Print error message."""
        self.console.print(f"[error]✗ {message}[/error]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self.console.print(f"[info]ℹ {message}[/info]")

    def print_staged_files(self, files: List[str]) -> None:
        """List staged files before generating a message."""
        if not files:
            return

        self.console.print("[title]Staged files:[/title]")
        for file_path in files:
            self.console.print(f"  • {file_path}", markup=False, highlight=False)
        self.console.print()

    def show_commit_message_preview(self, message: str) -> None:
        """Show the generated commit message in a panel."""
        first_line, _, rest = message.partition("\n")
        text = Text()

        prefix, sep, description = first_line.partition(":")
        if sep:
            text.append(prefix, style="commit_type")
            text.append(sep + description)
        else:
            text.append(first_line)
        if rest:
            text.append("\n" + rest)

        self.console.print(Panel(text, title="Generated Commit Message", box=box.ROUNDED, style="green"))

    def show_review_results(self, result: str) -> None:
        """Print a review with each line coloured by severity."""
        self.console.print()
        self.console.print("[title]=== Code Review Results ===[/title]")
        for line in result.splitlines():
            severity = classify_line(line)
            style = f"severity_{severity}" if severity else None
            self.console.print(Text(line, style=style or ""))
        self.console.print("[title]===========================[/title]")

    def show_configuration(self, items: Iterable[Tuple[str, str]]) -> None:
        """Show configuration key/value pairs."""
        table = Table(title="Current Configuration", box=box.SIMPLE_HEAD)
        table.add_column("Key", style="bold")
        table.add_column("Value")
        for key, value in items:
            table.add_row(key, Text(value or ""))
        self.console.print(table)

    def prompt_commit_action(self) -> str:
        """Ask whether to commit, abort or edit. Returns "y", "n" or "e"."""
        answer = Prompt.ask(
            "\nCommit with this message? [Y/n/e(dit)]",
            default="y",
            show_default=False,
            console=self.console,
        )
        answer = answer.strip().lower()
        if answer in ("", "y", "yes"):
            return "y"
        if answer in ("e", "edit"):
            return "e"
        return "n"

    def prompt_new_message(self) -> str:
        """Ask for a replacement commit message."""
        return Prompt.ask("Enter new message", default="", show_default=False, console=self.console).strip()

    def ask(self, question: str, default: str = "", password: bool = False) -> str:
        """Ask a free-form question with a bracketed default."""
        return Prompt.ask(
            question,
            default=default,
            password=password,
            console=self.console,
        ).strip()

    def choose(self, question: str, options: List[str], default: int = 1) -> int:
        """Show a numbered menu and return the 1-based choice."""
        for i, option in enumerate(options, 1):
            self.console.print(f"  {i}. {option}")
        choices = [str(i) for i in range(1, len(options) + 1)]
        answer = Prompt.ask(question, choices=choices, default=str(default), console=self.console)
        return int(answer)

    def show_progress_spinner(self, description: str):
        """Create a progress spinner context manager."""
        return self.console.status(f"[blue]{description}...[/blue]", spinner="dots")
