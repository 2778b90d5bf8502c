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

import os
import shutil
import subprocess
from pathlib import Path

import pytest

AUTHOR = "Jim Schubert"


class GitRepo:
    """Small driver for building deterministic histories in a temp dir."""

    def __init__(self, path: Path):
        self.path = path

    def git(self, *args: str, timestamp: int | None = None) -> str:
        env = {
            **os.environ,
            "GIT_AUTHOR_NAME": AUTHOR,
            "GIT_AUTHOR_EMAIL": "jim@example.com",
            "GIT_COMMITTER_NAME": AUTHOR,
            "GIT_COMMITTER_EMAIL": "jim@example.com",
        }
        if timestamp is not None:
            env["GIT_AUTHOR_DATE"] = f"@{timestamp} +0000"
            env["GIT_COMMITTER_DATE"] = f"@{timestamp} +0000"
        result = subprocess.run(
            ["git", "-c", "commit.gpgsign=false", *args],
            cwd=self.path,
            env=env,
            check=True,
            capture_output=True,
            text=True,
        )
        return result.stdout.strip()

    def commit(self, message: str, timestamp: int) -> str:
        self.git("commit", "--allow-empty", "-q", "-m", message, timestamp=timestamp)
        return self.git("rev-parse", "HEAD")


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    # keep git from discovering a repository above the temp dir
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))

    path = tmp_path / "repo"
    path.mkdir()
    repo = GitRepo(path)
    repo.git("init", "-q")
    repo.git("symbolic-ref", "HEAD", "refs/heads/master")
    return repo


@pytest.fixture
def history(git_repo):
    """
    v0.0.0 -> #12 -> wip -> (feature: docs | master: typo) -> merge (v0.0.1)
    """
    shas = {}
    shas["initial"] = git_repo.commit("Initial commit", 1583008420)
    git_repo.git("tag", "v0.0.0")
    shas["pull"] = git_repo.commit("Add placeholder args (#12)", 1583008987)
    shas["wip"] = git_repo.commit("wip: scratch changes", 1583009000)
    git_repo.git("checkout", "-q", "-b", "feature")
    shas["docs"] = git_repo.commit("Add docs\n\nLonger description", 1583009100)
    git_repo.git("checkout", "-q", "master")
    shas["typo"] = git_repo.commit("Fix typo", 1583009200)
    git_repo.git(
        "merge", "-q", "--no-ff", "--no-edit", "-m", "Merge branch 'feature'", "feature",
        timestamp=1583009300,
    )
    git_repo.git("tag", "v0.0.1")
    return shas
