"""
Install and uninstall the aigit pre-commit hook.
"""

import os
from pathlib import Path
from typing import Optional
from loguru import logger

from ..exceptions import HookModifiedError


PRE_COMMIT_HOOK = """#!/bin/sh
# aigit pre-commit hook - auto review code before commit

echo "Running aigit code review..."
aigit review --staged --hook

if [ $? -ne 0 ]; then
    echo ""
    echo "Code review found issues. Commit aborted."
    echo "Use 'git commit --no-verify' to skip this check."
    exit 1
fi
"""

HOOK_NAME = "pre-commit"
BACKUP_SUFFIX = ".backup"


class HookManager:
    """Manage the pre-commit hook inside a repository's hooks directory."""

    def __init__(self, hooks_dir: Path):
        self.hooks_dir = hooks_dir
        self.hook_path = hooks_dir / HOOK_NAME
        self.backup_path = hooks_dir / (HOOK_NAME + BACKUP_SUFFIX)

    def is_installed(self) -> bool:
        """True when the hook file exists and is byte-identical to ours."""
        return self.hook_path.is_file() and self.hook_path.read_bytes() == PRE_COMMIT_HOOK.encode()

    def install(self) -> Optional[Path]:
        """Write the hook, backing up any existing one. Returns the backup path if made."""
        self.hooks_dir.mkdir(mode=0o755, parents=True, exist_ok=True)

        backup = None
        if self.hook_path.exists():
            os.replace(self.hook_path, self.backup_path)
            backup = self.backup_path
            logger.info(f"Backed up existing hook to {self.backup_path}")

        self.hook_path.write_bytes(PRE_COMMIT_HOOK.encode())
        os.chmod(self.hook_path, 0o755)
        logger.info(f"Installed pre-commit hook at {self.hook_path}")
        return backup

    def uninstall(self) -> dict:
        """Remove our hook and restore the backup.

        Refuses to touch a hook whose contents differ from what aigit
        installed. Returns a dict describing what happened.
        """
        result = {"removed": False, "restored": False, "restore_error": None}

        if not self.hook_path.exists():
            return result

        if self.hook_path.read_bytes() != PRE_COMMIT_HOOK.encode():
            raise HookModifiedError("pre-commit hook was not installed by aigit, refusing to remove")

        self.hook_path.unlink()
        result["removed"] = True
        logger.info(f"Removed pre-commit hook at {self.hook_path}")

        if self.backup_path.exists():
            try:
                os.replace(self.backup_path, self.hook_path)
                result["restored"] = True
            except OSError as e:
                logger.warning(f"Failed to restore backup hook: {e}")
                result["restore_error"] = str(e)

        return result
