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

import asyncio
from datetime import datetime, timezone

from loguru import logger
from pydantic import ValidationError

from changelog.constants import GITHUB_COMPARE_LIMIT
from changelog.context import ChangelogConfig
from changelog.core.classification.classifier import CommitClassifier
from changelog.core.coordination.coordinator import RetrievalCoordinator
from changelog.core.exceptions import compare_failed
from changelog.core.github.client import GitHubAPIError, GitHubClient
from changelog.core.github.models import RepositoryCommit
from changelog.core.sources.interface import CommitSnapshot, SourceBackend


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def snapshot_from_api(commit: RepositoryCommit) -> CommitSnapshot:
    """Remote commits are dated by author date and attributed to the linked account."""
    git_commit = commit.commit
    message = git_commit.message if git_commit else None
    timestamp = None
    if git_commit is not None and git_commit.author is not None:
        timestamp = _as_utc(git_commit.author.date)

    author = commit.author.login if commit.author else None
    author_url = commit.author.html_url if commit.author else None

    return CommitSnapshot(
        sha=commit.sha,
        message=message,
        parent_count=len(commit.parents),
        timestamp=timestamp,
        author=author,
        author_url=author_url,
        commit_url=commit.html_url,
    )


class GitHubSource(SourceBackend):
    """Reads the from...to range through the compare API."""

    def __init__(
        self,
        client: GitHubClient,
        config: ChangelogConfig,
        classifier: CommitClassifier,
    ):
        self.client = client
        self.config = config
        self.classifier = classifier

    async def process(
        self, coordinator: RetrievalCoordinator, from_ref: str, to_ref: str
    ) -> None:
        owner, repo = self.config.owner, self.config.repo
        try:
            async with asyncio.timeout(self.config.timeout):
                comparison = await self.client.compare_commits(
                    owner, repo, from_ref, to_ref
                )
        except TimeoutError as e:
            raise compare_failed(
                from_ref, to_ref, f"timed out after {self.config.timeout}s"
            ) from e
        except (GitHubAPIError, ValidationError) as e:
            raise compare_failed(from_ref, to_ref, str(e)) from e

        limit = min(len(comparison.commits), self.config.max_commits, GITHUB_COMPARE_LIMIT)
        logger.debug(
            f"Compare {from_ref}...{to_ref} returned {len(comparison.commits)} commits "
            f"(total {comparison.total_commits}), processing {limit}"
        )

        for commit in comparison.commits[:limit]:
            coordinator.spawn(self._classify(coordinator, snapshot_from_api(commit)))

    async def _classify(
        self, coordinator: RetrievalCoordinator, snapshot: CommitSnapshot
    ) -> None:
        # the pull lookup inside classify carries its own timeout
        record = await self.classifier.classify(snapshot)
        if record is not None:
            await coordinator.emit(record)
