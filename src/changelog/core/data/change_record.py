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
from datetime import datetime

from changelog.constants import ZERO_INSTANT


@dataclass
class ChangeRecord:
    """
    One qualifying commit, normalized for changelog output.

    Every field is optional because backends cannot always resolve them
    (e.g. a commit email not associated with any account). The accessors
    below define what "absent" means for each field.
    """

    author: str | None = None
    author_url: str | None = None
    # Full commit message; title is derived from its first line
    message: str | None = None
    timestamp: datetime | None = None
    is_pull_request: bool | None = None
    # Only set when is_pull_request is True
    pull_url: str | None = None
    commit_hash: str | None = None
    commit_url: str | None = None
    # First matching grouping rule name
    group: str | None = None

    @property
    def title(self) -> str:
        if self.message is None:
            return ""
        idx = self.message.find("\n")
        if idx > 0:
            return self.message[:idx]
        return self.message

    @property
    def date(self) -> datetime:
        """Commit timestamp, or ZERO_INSTANT when unknown (not the epoch)."""
        return self.timestamp if self.timestamp is not None else ZERO_INSTANT

    @property
    def is_pull(self) -> bool:
        return bool(self.is_pull_request)

    @property
    def commit_hash_short(self) -> str:
        return (self.commit_hash or "")[:10]

    def pull_id(self) -> str:
        """
        The trailing path segment of pull_url.

        Raises:
            ValueError: if no pull URL is available
        """
        if not self.pull_url:
            raise ValueError("no pull url available")
        return self.pull_url.rstrip("/").rsplit("/", 1)[-1]

    def template_view(self) -> dict:
        """Field values with absent defaults applied, as seen by templates."""
        return {
            "author": self.author or "",
            "author_url": self.author_url or "",
            "title": self.title,
            "message": self.message or "",
            "date": self.date,
            "is_pull": self.is_pull,
            "pull_url": self.pull_url or "",
            "commit_hash": self.commit_hash or "",
            "commit_hash_short": self.commit_hash_short,
            "commit_url": self.commit_url or "",
            "group": self.group or "",
        }

    def __repr__(self) -> str:
        return (
            f"ChangeRecord(commit={self.commit_hash_short!r}, author={self.author!r}, "
            f"date={self.date.isoformat()}, title={self.title!r})"
        )
