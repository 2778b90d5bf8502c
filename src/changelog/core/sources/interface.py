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


from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from changelog.core.coordination.coordinator import RetrievalCoordinator


@dataclass(frozen=True)
class CommitSnapshot:
    """
    Raw commit metadata as read from a backend, before classification.

    Backends decide where each field comes from (author date vs committer
    date, account login vs author name); the classifier treats them alike.
    """

    sha: str | None
    message: str | None
    parent_count: int
    timestamp: datetime | None = None
    author: str | None = None
    author_url: str | None = None
    commit_url: str | None = None


class SourceBackend(ABC):
    """
    Abstract source of commit history for a from..to range.
    """

    @abstractmethod
    async def process(
        self, coordinator: "RetrievalCoordinator", from_ref: str, to_ref: str
    ) -> None:
        """
        Schedule one classification task per commit in the range.

        Raises a SourceError if the range cannot be resolved; in that case no
        task has been scheduled.
        """
