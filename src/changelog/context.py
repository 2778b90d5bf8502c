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

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from changelog.constants import DEFAULT_TIMEOUT_S, GITHUB_COMPARE_LIMIT


class SortDirection(str, Enum):
    DESCENDING = "desc"
    ASCENDING = "asc"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str) and value.strip().lower() in ("asc", "ascending"):
            return cls.ASCENDING
        # anything unrecognized keeps the most recent changes on top
        return cls.DESCENDING


class ResolveType(str, Enum):
    COMMITS = "commits"
    PULLS = "pulls"

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        if normalized == "commits":
            return cls.COMMITS
        if normalized in ("pulls", "pullrequest", "prs"):
            return cls.PULLS
        return None


@dataclass
class Grouping:
    name: str
    patterns: list[str] = field(default_factory=list)


@dataclass
class ChangelogConfig:
    owner: str = ""
    repo: str = ""
    resolve: ResolveType = ResolveType.COMMITS
    groupings: list[Grouping] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    enterprise: str | None = None
    template: str | None = None
    sort: SortDirection = SortDirection.DESCENDING
    local: bool = False
    max_commits: int = GITHUB_COMPARE_LIMIT
    timeout: float = DEFAULT_TIMEOUT_S
    verbose: bool = False
    silent: bool = False

    descriptions = {
        "owner": "GitHub owner (user or organization) of the target repository",
        "repo": "Name of the target repository",
        "resolve": "Recorded resolve mode (commits or pulls); a readable pull request always supplies the author and pull link",
        "groupings": "Ordered list of {name, patterns}; a commit joins the first group whose pattern matches its title",
        "exclude": "Regex or plain-text patterns; matching commit titles, group names, pull titles or labels are dropped",
        "enterprise": "API base URL when targeting GitHub Enterprise",
        "template": "Path to a custom Jinja2 changelog template",
        "sort": "Order of entries by date (desc or asc)",
        "local": "Read commits from the local clone instead of the compare API",
        "max_commits": "Maximum number of commits to process",
        "timeout": "Seconds allowed for each remote API call",
        "verbose": "Enable verbose logging output",
        "silent": "Do not log anything to the console",
    }


@dataclass(frozen=True)
class ChangelogRange:
    from_ref: str
    to_ref: str


@dataclass(frozen=True)
class GlobalContext:
    repo_path: Path
    config: ChangelogConfig
    token: str | None = None

    @classmethod
    def from_config(
        cls, config: ChangelogConfig, repo_path: Path, token: str | None = None
    ):
        return GlobalContext(repo_path.resolve(), config, token)


@dataclass(frozen=True)
class LoadedConfig:
    """Merged configuration plus the source name that supplied each key."""

    config: ChangelogConfig
    sources: list[str]
    provenance: dict[str, str]
