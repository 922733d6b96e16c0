"""
Core aigit engine that orchestrates config, git and the AI backend.
"""

from pathlib import Path
from typing import Optional
from loguru import logger
from rich.markup import escape

from .config.settings import Settings, load_settings, default_config_path, mask_api_key
from .git_ops.repository import GitRepository
from .git_ops.hooks import HookManager
from .ai_backends.factory import BackendFactory
from .ai_backends.base import AIBackend, with_deadline
from .exceptions import ConfigMissingError, ConfigInvalidError, EmptyResponseError, NoChangesError
from .utils.message_extractor import clean_commit_message
from .utils.review_parser import has_high_severity_issues
from .ui.console import AigitConsole


COMMIT_TIMEOUT = 60
REVIEW_TIMEOUT = 120

PROVIDER_CHOICES = [
    ("openai", "OpenAI (GPT-4)"),
    ("claude", "Claude (Anthropic)"),
    ("google", "Google (Gemini)"),
    ("openrouter", "OpenRouter"),
]
LANGUAGE_CHOICES = [
    ("en", "English"),
    ("zh", "Chinese (中文)"),
]


class AiGit:
    """Command handlers for aigit.

    Every handler loads the configuration fresh from disk, talks to git
    and the AI backend once, and reports through the console. Errors are
    raised to the CLI layer.
    """

    def __init__(
        self,
        console: Optional[AigitConsole] = None,
        config_path: Optional[Path] = None,
        repo_path: Optional[Path] = None,
    ):
        self.console = console or AigitConsole()
        self.config_path = config_path or default_config_path()
        self.repo_path = repo_path

    def _load(self) -> Settings:
        return load_settings(self.config_path)

    def _backend(self, settings: Settings) -> AIBackend:
        return BackendFactory.create_backend(settings)

    def _repository(self) -> GitRepository:
        return GitRepository(self.repo_path)

    async def run_commit(self, auto_commit: bool = False, stage_all: bool = False) -> bool:
        """Generate a commit message for staged changes and optionally commit.

        Returns True when a commit was created.
        """
        git_repo = self._repository()
        settings = self._load()

        if stage_all:
            git_repo.stage_all()
            self.console.print_success("Staged all changes")

        diff = git_repo.get_staged_diff()
        if not diff.strip():
            raise NoChangesError("no staged changes to commit")

        self.console.print_staged_files(git_repo.get_staged_files())

        backend = self._backend(settings)
        with self.console.show_progress_spinner("Generating commit message"):
            raw_message = await with_deadline(
                backend.generate_commit_message(diff, settings.language),
                COMMIT_TIMEOUT,
            )

        message = clean_commit_message(raw_message)
        if not message:
            raise EmptyResponseError("AI returned an empty commit message")
        logger.debug(f"Generated commit message: {message}")
        self.console.show_commit_message_preview(message)

        if auto_commit:
            return self._do_commit(git_repo, message)

        action = self.console.prompt_commit_action()
        if action == "y":
            return self._do_commit(git_repo, message)
        if action == "e":
            new_message = self.console.prompt_new_message()
            if new_message:
                return self._do_commit(git_repo, new_message)
            self.console.print_warning("Empty message, commit aborted.")
            return False

        self.console.print_info("Commit aborted.")
        return False

    def _do_commit(self, git_repo: GitRepository, message: str) -> bool:
        git_repo.commit(message)
        self.console.print_success("Committed successfully!")
        return True

    async def run_review(self, staged_only: bool = False, hook_mode: bool = False) -> bool:
        """Review staged or all changes.

        Returns False only in hook mode when high-severity issues were found.
        """
        git_repo = self._repository()
        settings = self._load()

        if staged_only:
            diff = git_repo.get_staged_diff()
            if not diff.strip():
                raise NoChangesError("no staged changes to review")
            self.console.print_info("Reviewing staged changes...")
        else:
            diff = git_repo.get_all_diff()
            if not diff.strip():
                self.console.print_info("No changes to review.")
                return True
            self.console.print_info("Reviewing all changes...")

        backend = self._backend(settings)
        with self.console.show_progress_spinner("Reviewing code"):
            result = await with_deadline(
                backend.review_code(diff, settings.language),
                REVIEW_TIMEOUT,
            )

        self.console.show_review_results(result)

        if hook_mode and has_high_severity_issues(result):
            logger.info("Review reported high-severity issues")
            return False
        return True

    def show_configuration(self) -> None:
        """Show current configuration with the API key masked."""
        settings = self._load()
        self.console.show_configuration(settings.display_items())

    def _load_or_default(self) -> Settings:
        # No API key requirement here: this is how a key gets set in the first place
        try:
            if self.config_path.exists():
                return Settings.from_file(self.config_path)
        except ConfigInvalidError as e:
            logger.debug(f"Starting from default configuration: {e}")
        return Settings()

    def set_config_value(self, key: str, value: str) -> None:
        """Set a single configuration value and persist it."""
        settings = self._load_or_default()
        settings.set_value(key, value)
        settings.save_to_file(self.config_path)
        shown = mask_api_key(value) if key == "api_key" else value
        self.console.print_success(f"Set {key} = {shown}")

    def run_interactive_config(self) -> None:
        """Walk the user through provider, key, model, language and base URL."""
        settings = self._load_or_default()
        console = self.console

        console.console.print("[title]=== aigit Configuration ===[/title]\n")

        provider_names = [name for name, _ in PROVIDER_CHOICES]
        current = provider_names.index(settings.provider) + 1 if settings.provider in provider_names else 1
        console.console.print("Select AI provider:")
        choice = console.choose("Enter choice", [label for _, label in PROVIDER_CHOICES], default=current)
        provider_changed = provider_names[choice - 1] != settings.provider
        settings.provider = provider_names[choice - 1]

        api_key = console.ask(
            f"\nEnter API key for {settings.provider} {escape('[' + mask_api_key(settings.api_key) + ']')}",
            password=True,
        )
        if api_key:
            settings.api_key = api_key
        if not settings.api_key:
            raise ConfigMissingError("API key is required")

        default_model = settings.model
        if not default_model or provider_changed:
            default_model = BackendFactory.default_model(settings.provider)
        settings.model = console.ask("\nEnter model name", default=default_model) or default_model

        language_codes = [code for code, _ in LANGUAGE_CHOICES]
        console.console.print("\nSelect language for commit messages:")
        lang_choice = console.choose(
            "Enter choice",
            [label for _, label in LANGUAGE_CHOICES],
            default=language_codes.index(settings.language) + 1,
        )
        settings.language = language_codes[lang_choice - 1]

        base_url = console.ask("\nEnter custom base URL", default=settings.base_url or "default")
        if base_url and base_url != "default":
            settings.base_url = base_url

        settings.save_to_file(self.config_path)
        console.print_success("Configuration saved successfully!")

    def install_hooks(self) -> None:
        """Install the pre-commit review hook."""
        manager = HookManager(self._repository().hooks_dir)
        backup = manager.install()
        if backup:
            self.console.print_info(f"Existing pre-commit hook backed up to: {backup}")
        self.console.print_success("Pre-commit hook installed successfully!")
        self.console.console.print("  Code will be reviewed automatically before each commit.")
        self.console.console.print("  Use 'git commit --no-verify' to skip the review.")

    def uninstall_hooks(self) -> None:
        """Remove the pre-commit review hook if it is ours."""
        manager = HookManager(self._repository().hooks_dir)
        result = manager.uninstall()
        if not result["removed"]:
            self.console.print_info("No pre-commit hook found.")
            return

        if result["restored"]:
            self.console.print_info("Restored previous pre-commit hook from backup.")
        elif result["restore_error"]:
            self.console.print_warning(f"Failed to restore backup hook: {result['restore_error']}")
        self.console.print_success("Pre-commit hook uninstalled successfully!")
