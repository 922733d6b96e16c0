"""
CLI interface using Typer with Rich integration.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional, List
import typer
from rich.console import Console
from rich.markup import escape
from loguru import logger

from .core import AiGit
from .config.settings import log_file
from .exceptions import AigitError


app = typer.Typer(
    name="aigit",
    help="AI-powered git commit message generator and code reviewer",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

hooks_app = typer.Typer(
    help="Install or uninstall git hooks for automatic code review on commit",
    no_args_is_help=True,
)
app.add_typer(hooks_app, name="hooks")

# Global console for error handling
console = Console(stderr=True)


def setup_logging(log_level: str = "WARNING", log_path: Optional[Path] = None):
    """Setup logging configuration."""
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        colorize=True
    )

    if log_path:
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"File logging disabled: {e}")
            return
        logger.add(
            log_path,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation="1 MB",
            retention="7 days"
        )


def _run(action, *args):
    """Run a handler, turning aigit errors into a printed message and exit code 1."""
    try:
        result = action(*args)
        if asyncio.iscoroutine(result):
            result = asyncio.run(result)
        return result
    except AigitError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        logger.exception("Unexpected error occurred")
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)


def _version_callback(value: bool):
    if value:
        from . import __version__
        Console().print(f"[bold blue]aigit[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Enable verbose logging"
    ),
    debug: bool = typer.Option(
        False, "--debug", "-d",
        help="Enable debug logging (includes verbose)"
    ),
    version: bool = typer.Option(
        False, "--version",
        callback=_version_callback, is_eager=True,
        help="Show version information"
    ),
):
    """
    aigit uses AI to generate meaningful git commit messages
    and review code changes for potential bugs.

    Supported AI providers: OpenAI, Claude, Google Gemini, OpenRouter

    [bold blue]Examples:[/bold blue]

    [green]aigit config[/green]                       # Interactive setup
    [green]aigit config provider claude[/green]       # Set a single value
    [green]aigit commit --all[/green]                 # Stage everything and generate a message
    [green]aigit review --staged[/green]              # Review staged changes
    [green]aigit hooks install[/green]                # Review automatically before each commit
    """
    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"
    setup_logging(log_level, log_file())


@app.command()
def config(
    args: Optional[List[str]] = typer.Argument(
        None, metavar="[KEY] [VALUE]",
        help="Key and value to set (provider, api_key, model, language, base_url)"
    ),
    show: bool = typer.Option(
        False, "--show",
        help="Show current configuration"
    ),
):
    """
    Configure AI provider, API key, model, and language settings.

    [bold blue]Examples:[/bold blue]

    [green]aigit config[/green]                       # Interactive setup (full configuration)
    [green]aigit config --show[/green]                # Show current configuration
    [green]aigit config language zh[/green]           # Set a specific config value
    """
    aigit = AiGit()
    args = args or []

    if show:
        _run(aigit.show_configuration)
    elif len(args) >= 2:
        _run(aigit.set_config_value, args[0], args[1])
    elif len(args) == 1:
        console.print(f"[red]Error:[/red] missing value for key '{escape(args[0])}'", highlight=False)
        raise typer.Exit(1)
    else:
        _run(aigit.run_interactive_config)


@app.command()
def commit(
    yes: bool = typer.Option(
        False, "--yes", "-y",
        help="Auto commit without confirmation"
    ),
    all_changes: bool = typer.Option(
        False, "--all", "-a",
        help="Stage all changes before commit"
    ),
):
    """Analyze staged changes and generate a commit message using AI."""
    _run(AiGit().run_commit, yes, all_changes)


@app.command()
def review(
    staged: bool = typer.Option(
        False, "--staged", "-s",
        help="Review only staged changes (default: all changes)"
    ),
    hook: bool = typer.Option(
        False, "--hook",
        help="Run in hook mode (exit with error if high-severity issues found)"
    ),
):
    """Review code changes for potential bugs, security issues and code quality problems."""
    passed = _run(AiGit().run_review, staged, hook)
    if not passed:
        raise typer.Exit(1)


@hooks_app.command("install")
def hooks_install():
    """Install pre-commit hook for auto review."""
    _run(AiGit().install_hooks)


@hooks_app.command("uninstall")
def hooks_uninstall():
    """Uninstall pre-commit hook."""
    _run(AiGit().uninstall_hooks)


def main():
    """Main entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
