# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

import subprocess
from pathlib import Path

from loguru import logger

from .interface import GitInterface


class SubprocessGitInterface(GitInterface):
    def __init__(self, repo_path: str | Path = ".") -> None:
        self.repo_path = repo_path if isinstance(repo_path, Path) else Path(repo_path)

    def run_git_text_out(
        self,
        args: list[str],
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> str | None:
        result = self.run_git_text(args, env, cwd)
        return result.stdout if result else None

    def run_git_text(
        self,
        args: list[str],
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> subprocess.CompletedProcess[str] | None:
        effective_cwd = str(cwd) if cwd is not None else str(self.repo_path)
        cmd = ["git"] + args
        logger.debug(f"Running git command: {' '.join(cmd)} cwd={effective_cwd}")
        try:
            result = subprocess.run(
                cmd,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
                check=True,
                env=env,
                cwd=effective_cwd,
            )
        except subprocess.CalledProcessError as e:
            logger.debug(
                f"Git command failed: {' '.join(e.cmd)} code={e.returncode} stderr={e.stderr}"
            )
            return None
        except FileNotFoundError as e:
            # git binary missing or cwd does not exist
            logger.warning(f"Unable to run git in {effective_cwd}: {e}")
            return None

        if result.stdout:
            logger.trace(
                f"git stdout: {result.stdout[:2000]}"
                + ("...(truncated)" if len(result.stdout) > 2000 else "")
            )
        if result.stderr:
            logger.debug(f"git stderr: {result.stderr[:2000]}")
        return result
