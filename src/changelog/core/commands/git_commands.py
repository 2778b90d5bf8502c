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

from dataclasses import dataclass
from datetime import datetime, timezone

from loguru import logger

from ..git_interface.interface import GitInterface

# unit/record separators keep multi-line commit bodies intact
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = "%H%x1f%P%x1f%an%x1f%ct%x1f%B%x1e"


@dataclass(frozen=True)
class LocalCommit:
    sha: str
    parents: tuple[str, ...]
    author_name: str | None
    committer_time: datetime | None
    message: str


class GitCommands:
    def __init__(self, git: GitInterface):
        self.git = git

    def is_git_repo(self) -> bool:
        out = self.git.run_git_text_out(["rev-parse", "--is-inside-work-tree"])
        return out is not None and out.strip() == "true"

    def resolve_commit(self, ref: str) -> str | None:
        """Full sha of the commit ref points to, or None if it does not resolve."""
        out = self.git.run_git_text_out(
            ["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"]
        )
        if not out or not out.strip():
            return None
        return out.strip()

    def read_commits(self, shas: list[str]) -> dict[str, LocalCommit]:
        """
        Metadata for each sha in a single git call, keyed by sha.

        Shas git cannot read are missing from the result.
        """
        if not shas:
            return {}
        out = self.git.run_git_text_out(
            ["log", "--no-walk=unsorted", f"--format={_LOG_FORMAT}", *shas]
        )
        if out is None:
            logger.warning(f"Unable to read {len(shas)} commits from git")
            return {}

        commits: dict[str, LocalCommit] = {}
        for raw in out.split(_RECORD_SEP):
            raw = raw.lstrip("\n")
            if not raw:
                continue
            commit = _parse_commit(raw)
            if commit is not None:
                commits[commit.sha] = commit
        return commits


def _parse_commit(raw: str) -> LocalCommit | None:
    parts = raw.split(_FIELD_SEP, 4)
    if len(parts) != 5:
        logger.debug(f"Skipping malformed git log record: {raw[:80]!r}")
        return None

    sha, parents, author_name, committer_ts, message = parts
    try:
        committer_time = datetime.fromtimestamp(int(committer_ts), tz=timezone.utc)
    except ValueError:
        committer_time = None

    return LocalCommit(
        sha=sha.strip(),
        parents=tuple(parents.split()),
        author_name=author_name or None,
        committer_time=committer_time,
        # %B always ends with a newline
        message=message.rstrip("\n"),
    )
