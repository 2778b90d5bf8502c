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

from loguru import logger

from changelog.context import ChangelogRange, GlobalContext
from changelog.core.aggregation.aggregator import ChangelogData, aggregate
from changelog.core.classification.classifier import CommitClassifier
from changelog.core.classification.pull_lookup import PullRequestLookup
from changelog.core.classification.rules import ClassificationRules
from changelog.core.commands.git_commands import GitCommands
from changelog.core.coordination.coordinator import RetrievalCoordinator
from changelog.core.data.change_record import ChangeRecord
from changelog.core.git_interface.SubprocessGitInterface import SubprocessGitInterface
from changelog.core.github.client import GitHubClient
from changelog.core.logging.utils import log_records, time_block
from changelog.core.rendering.renderer import Renderer
from changelog.core.sources.github_source import GitHubSource
from changelog.core.sources.interface import SourceBackend
from changelog.core.sources.local_git_source import LocalGitSource


class ChangelogPipeline:
    """
    Core orchestration for building a changelog.

    Retrieval and classification run concurrently on one event loop; sorting,
    grouping and rendering happen once every record has been collected.
    """

    def __init__(
        self,
        global_context: GlobalContext,
        changelog_range: ChangelogRange,
        renderer: Renderer | None = None,
        client: GitHubClient | None = None,
    ):
        self.global_context = global_context
        self.changelog_range = changelog_range
        self.renderer = renderer or Renderer()
        self._client = client

    @property
    def config(self):
        return self.global_context.config

    def run(self) -> str:
        data = asyncio.run(self.collect_data())
        with time_block("Rendering"):
            return self.renderer.render(data, self.config.template)

    async def collect_data(self) -> ChangelogData:
        records = await self.collect_records()
        return aggregate(
            records,
            self.config,
            self.changelog_range.from_ref,
            self.changelog_range.to_ref,
        )

    async def collect_records(self) -> list[ChangeRecord]:
        from_ref = self.changelog_range.from_ref
        to_ref = self.changelog_range.to_ref
        client = self._client or self._create_client()

        try:
            backend = self.create_backend(client)
            logger.debug(
                "Collecting changes {from_ref}...{to_ref} via {backend}",
                from_ref=from_ref,
                to_ref=to_ref,
                backend=type(backend).__name__,
            )
            with time_block("Retrieval and classification"):
                records = await RetrievalCoordinator().run(backend, from_ref, to_ref)
        finally:
            if self._client is None:
                await client.aclose()

        log_records("collected", records)
        return records

    def _create_client(self) -> GitHubClient:
        if not self.global_context.token:
            logger.warning(
                "GITHUB_TOKEN is not set; using unauthenticated GitHub API requests"
            )
        return GitHubClient(
            token=self.global_context.token,
            enterprise=self.config.enterprise,
            timeout=self.config.timeout,
        )

    def create_backend(self, client: GitHubClient) -> SourceBackend:
        config = self.config
        rules = ClassificationRules(config.exclude, config.groupings)
        pull_lookup = PullRequestLookup(
            client, config.owner, config.repo, rules, config.timeout
        )
        classifier = CommitClassifier(rules, pull_lookup)

        if config.local:
            git = SubprocessGitInterface(self.global_context.repo_path)
            return LocalGitSource(
                GitCommands(git),
                config,
                classifier,
                repo_path=str(self.global_context.repo_path),
            )
        return GitHubSource(client, config, classifier)
