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
from pydantic import ValidationError

from changelog.core.classification.rules import ClassificationRules
from changelog.core.github.client import GitHubAPIError, GitHubClient
from changelog.core.github.models import PullRequest


class PullRequestLookup:
    """
    Secondary, pull-level exclusion check.

    This is extra filtering rather than an authoritative gate: any failure to
    fetch the pull (error, timeout, not found, unauthorized) means "not
    excluded" so that valid history is never dropped silently.
    """

    def __init__(
        self,
        client: GitHubClient,
        owner: str,
        repo: str,
        rules: ClassificationRules,
        timeout: float,
    ):
        self.client = client
        self.owner = owner
        self.repo = repo
        self.rules = rules
        self.timeout = timeout

    async def check(self, pull_id: int) -> tuple[PullRequest | None, bool]:
        """Returns the fetched pull (or None) and whether it is excluded."""
        logger.debug(f"Checking pull request {pull_id}")
        try:
            async with asyncio.timeout(self.timeout):
                pull = await self.client.get_pull_request(self.owner, self.repo, pull_id)
        except TimeoutError:
            logger.debug(f"Pull request {pull_id} lookup timed out, not excluding")
            return None, False
        except (GitHubAPIError, ValidationError) as e:
            logger.debug(f"Pull request {pull_id} lookup failed, not excluding: {e}")
            return None, False

        if pull is None:
            return None, False

        # title first, then labels; stops at the first match
        texts = [pull.title, *(label.name for label in pull.labels)]
        return pull, self.rules.should_exclude_any(texts)
