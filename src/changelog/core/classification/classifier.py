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
Per-commit classification shared by every history backend.
"""

from loguru import logger

from changelog.core.classification.pull_lookup import PullRequestLookup
from changelog.core.classification.rules import (
    ClassificationRules,
    detect_pull_request,
    first_line,
)
from changelog.core.data.change_record import ChangeRecord
from changelog.core.sources.interface import CommitSnapshot


class CommitClassifier:
    """
    Turns a CommitSnapshot into a ChangeRecord, or drops it.

    A commit is dropped when it is a merge, when its title or its group
    name matches an exclusion pattern, or when the pull request it landed
    through is excluded by title or label.
    """

    def __init__(
        self,
        rules: ClassificationRules,
        pull_lookup: PullRequestLookup | None = None,
    ):
        self.rules = rules
        self.pull_lookup = pull_lookup

    async def classify(self, snapshot: CommitSnapshot) -> ChangeRecord | None:
        sha = snapshot.sha or ""

        if snapshot.parent_count > 1:
            logger.debug(f"Skipping merge commit {sha[:10]}")
            return None

        title = first_line(snapshot.message)
        if self.rules.should_exclude(title):
            return None

        group = self.rules.find_group(snapshot.message)
        if group is not None and self.rules.should_exclude(group):
            return None

        record = ChangeRecord(
            author=snapshot.author,
            author_url=snapshot.author_url,
            message=snapshot.message,
            timestamp=snapshot.timestamp,
            commit_hash=snapshot.sha,
            commit_url=snapshot.commit_url,
            group=group,
        )

        reference = detect_pull_request(title, snapshot.commit_url)
        if reference is None:
            return record

        record.is_pull_request = True
        record.pull_url = reference.url

        if self.pull_lookup is None:
            return record

        try:
            pull_id = int(record.pull_id())
        except ValueError:
            logger.debug(
                f"No pull id in {record.pull_url!r}, keeping commit {sha[:10]} as is"
            )
            return record

        pull, excluded = await self.pull_lookup.check(pull_id)
        if excluded:
            logger.debug(f"Excluding commit {sha[:10]} via pull request #{pull_id}")
            return None

        if pull is not None:
            if pull.user is not None:
                record.author = pull.user.login
                record.author_url = pull.user.html_url
            record.pull_url = pull.html_url or record.pull_url

        return record
