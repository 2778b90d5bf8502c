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

"""
History from a local clone, walked breadth-first from `to` back to `from`.
"""

import asyncio

from loguru import logger

from changelog.context import ChangelogConfig
from changelog.core.classification.classifier import CommitClassifier
from changelog.core.commands.git_commands import GitCommands, LocalCommit
from changelog.core.coordination.coordinator import RetrievalCoordinator
from changelog.core.exceptions import not_git_repository, ref_not_found
from changelog.core.github.client import web_base_url
from changelog.core.sources.interface import CommitSnapshot, SourceBackend


class LocalGitSource(SourceBackend):
    def __init__(
        self,
        git_commands: GitCommands,
        config: ChangelogConfig,
        classifier: CommitClassifier,
        repo_path: str = ".",
    ):
        self.git_commands = git_commands
        self.config = config
        self.classifier = classifier
        self.repo_path = repo_path

    def commit_url(self, sha: str) -> str:
        base = web_base_url(self.config.enterprise)
        return f"{base}/{self.config.owner}/{self.config.repo}/commit/{sha}"

    def snapshot(self, commit: LocalCommit) -> CommitSnapshot:
        """Local commits are dated by committer date and attributed by author name."""
        return CommitSnapshot(
            sha=commit.sha,
            message=commit.message,
            parent_count=len(commit.parents),
            timestamp=commit.committer_time,
            author=commit.author_name,
            author_url=None,
            commit_url=self.commit_url(commit.sha),
        )

    async def process(
        self, coordinator: RetrievalCoordinator, from_ref: str, to_ref: str
    ) -> None:
        # git runs in worker threads so spawned tasks keep making progress
        is_repo = await asyncio.to_thread(self.git_commands.is_git_repo)
        if not is_repo:
            raise not_git_repository(str(self.repo_path))

        from_sha = await asyncio.to_thread(self.git_commands.resolve_commit, from_ref)
        if from_sha is None:
            raise ref_not_found(from_ref, "from")
        to_sha = await asyncio.to_thread(self.git_commands.resolve_commit, to_ref)
        if to_sha is None:
            raise ref_not_found(to_ref, "to")

        logger.debug(f"Walking local history {to_sha[:10]} -> {from_sha[:10]}")

        seen: set[str] = {to_sha}
        level = [to_sha]
        scheduled = 0

        while level:
            if from_sha in level:
                # `from` is the stop marker; its level-mates are still new
                level = [sha for sha in level if sha != from_sha]
                found_from = True
            else:
                found_from = False

            commits = await asyncio.to_thread(self.git_commands.read_commits, level)
            next_level: list[str] = []
            for sha in level:
                commit = commits.get(sha)
                if commit is None:
                    logger.debug(f"Commit {sha} could not be read, skipping")
                    continue
                if scheduled >= self.config.max_commits:
                    logger.debug(f"Reached max commits ({self.config.max_commits})")
                    return
                coordinator.spawn(self._classify(coordinator, self.snapshot(commit)))
                scheduled += 1
                for parent in commit.parents:
                    if parent not in seen:
                        seen.add(parent)
                        next_level.append(parent)

            if found_from:
                break
            level = next_level

        logger.debug(f"Scheduled {scheduled} local commits")

    async def _classify(
        self, coordinator: RetrievalCoordinator, snapshot: CommitSnapshot
    ) -> None:
        record = await self.classifier.classify(snapshot)
        if record is not None:
            await coordinator.emit(record)
