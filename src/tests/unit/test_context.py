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

from pathlib import Path

import pytest

from changelog.context import (
    ChangelogConfig,
    GlobalContext,
    ResolveType,
    SortDirection,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("asc", SortDirection.ASCENDING),
        ("ascending", SortDirection.ASCENDING),
        ("ASC", SortDirection.ASCENDING),
        ("desc", SortDirection.DESCENDING),
        ("DESCENDING", SortDirection.DESCENDING),
        ("anything", SortDirection.DESCENDING),
    ],
)
def test_sort_direction_parsing(value, expected):
    assert SortDirection(value) is expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("commits", ResolveType.COMMITS),
        ("pulls", ResolveType.PULLS),
        ("PullRequest", ResolveType.PULLS),
        ("prs", ResolveType.PULLS),
    ],
)
def test_resolve_type_parsing(value, expected):
    assert ResolveType(value) is expected


def test_resolve_type_rejects_unknown():
    with pytest.raises(ValueError):
        ResolveType("tags")


def test_config_defaults():
    config = ChangelogConfig()
    assert config.max_commits == 250
    assert config.sort is SortDirection.DESCENDING
    assert config.resolve is ResolveType.COMMITS
    assert config.local is False
    assert set(ChangelogConfig.descriptions) >= {"owner", "repo", "exclude", "groupings"}


def test_global_context_resolves_repo_path(tmp_path):
    context = GlobalContext.from_config(ChangelogConfig(), tmp_path / "sub" / "..", token=None)
    assert context.repo_path == Path(tmp_path).resolve()
