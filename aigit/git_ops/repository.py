"""
Git repository operations used as the diff source.
"""

from pathlib import Path
from typing import List, Optional
from git import Repo, InvalidGitRepositoryError, NoSuchPathError, GitCommandError
from loguru import logger

from ..exceptions import GitUnavailableError


STAGED_HEADER = "=== Staged Changes ===\n"
UNSTAGED_HEADER = "=== Unstaged Changes ===\n"


class GitRepository:
    """Thin wrapper over the git commands aigit needs."""

    def __init__(self, repo_path: Optional[Path] = None):
        """Open the repository containing repo_path (default: current directory)."""
        self.repo_path = repo_path or Path.cwd()
        self.repo: Optional[Repo] = None
        self._initialize_repo()

    def _initialize_repo(self) -> None:
        try:
            self.repo = Repo(self.repo_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError):
            raise GitUnavailableError("not a git repository")

        if self.repo.bare:
            raise GitUnavailableError("not a git repository")
        logger.debug(f"Initialized Git repository at {self.repo.working_dir}")

    def _git(self, *args: str) -> str:
        """Run a git command, mapping failures to GitUnavailableError."""
        try:
            return self.repo.git.execute(["git", *args])
        except GitCommandError as e:
            logger.error(f"git {' '.join(args)} failed: {e}")
            raise GitUnavailableError(f"git {args[0]} failed: {e.stderr.strip() if e.stderr else e}")

    def get_staged_diff(self) -> str:
        """Diff of the index against HEAD."""
        return self._git("diff", "--cached")

    def get_unstaged_diff(self) -> str:
        """Diff of the working tree against the index."""
        return self._git("diff")

    def get_all_diff(self) -> str:
        """Staged and unstaged changes in labelled sections; empty when clean."""
        staged = self.get_staged_diff()
        unstaged = self.get_unstaged_diff()

        sections = []
        if staged:
            sections.append(STAGED_HEADER + staged)
        if unstaged:
            sections.append(UNSTAGED_HEADER + unstaged)
        return "\n\n".join(sections)

    def get_staged_files(self) -> List[str]:
        """Paths of files with staged changes."""
        output = self._git("diff", "--cached", "--name-only")
        return [line for line in output.splitlines() if line.strip()]

    def stage_all(self) -> None:
        """Stage every change, including deletions and untracked files."""
        self._git("add", "-A")
        logger.info("Staged all changes")

    def commit(self, message: str) -> None:
        """Commit the index with `git commit` so repository hooks run."""
        self._git("commit", "-m", message)
        logger.info(f"Created commit: {message.splitlines()[0] if message else ''}")

    @property
    def git_dir(self) -> Path:
        return Path(self.repo.git_dir)

    @property
    def hooks_dir(self) -> Path:
        return self.git_dir / "hooks"
