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

from datetime import datetime, timedelta, timezone

from changelog.constants import ZERO_INSTANT
from changelog.context import ChangelogConfig, Grouping, SortDirection
from changelog.core.aggregation.aggregator import (
    aggregate,
    compare_urls,
    group_records,
    sort_records,
)
from changelog.core.data.change_record import ChangeRecord

NOW = datetime(2020, 3, 1, tzinfo=timezone.utc)


def record(title, hours=0, group=None):
    return ChangeRecord(message=title, timestamp=NOW + timedelta(hours=hours), group=group)


def test_sort_descending():
    past, present, future = record("past", -5), record("present"), record("future", 12)

    result = sort_records([present, past, future], SortDirection.DESCENDING)

    assert [r.title for r in result] == ["future", "present", "past"]


def test_sort_ascending():
    past, present, future = record("past", -5), record("present"), record("future", 12)

    result = sort_records([future, present, past], SortDirection.ASCENDING)

    assert [r.title for r in result] == ["past", "present", "future"]


def test_sort_is_idempotent():
    records = [record(str(i), hours=(i * 7) % 5) for i in range(10)]
    for direction in SortDirection:
        once = sort_records(records, direction)
        assert sort_records(once, direction) == once


def test_unknown_date_sorts_as_oldest():
    unknown = ChangeRecord(message="unknown")
    result = sort_records([unknown, record("known")], SortDirection.DESCENDING)

    assert result[-1] is unknown
    assert unknown.date == ZERO_INSTANT


def test_group_records_follows_declaration_order():
    records = [record("a", group="Other"), record("b", group="Features"), record("c")]
    groupings = [Grouping("Features", ["add"]), Grouping("Other", [".?"])]

    groups = group_records(records, groupings)

    assert [g.name for g in groups] == ["Features", "Other"]
    assert [r.title for r in groups[0].items] == ["b"]


def test_group_records_skips_empty_nameless_and_duplicate_groups():
    records = [record("a", group="Docs")]
    groupings = [
        Grouping("", ["x"]),
        Grouping("Features", ["add"]),
        Grouping("Docs", ["^docs"]),
        Grouping("Docs", ["^doc"]),
    ]

    groups = group_records(records, groupings)

    assert [(g.name, len(g.items)) for g in groups] == [("Docs", 1)]


def test_group_flatten_round_trip():
    records = [
        record("a", 1, "Features"),
        record("b", 2, "Other"),
        record("c", 3, "Features"),
        record("d", 4),
    ]
    groupings = [Grouping("Features", ["x"]), Grouping("Other", ["y"])]

    groups = group_records(records, groupings)
    flattened = [r for g in groups for r in g.items]

    assert sorted(r.title for r in flattened) == sorted(
        r.title for r in records if r.group
    )


def test_compare_urls():
    config = ChangelogConfig(owner="jimschubert", repo="changelog")

    urls = compare_urls(config, "v0.0.0", "v0.0.1")

    assert urls.compare_url == "https://github.com/jimschubert/changelog/compare/v0.0.0...v0.0.1"
    assert urls.diff_url == urls.compare_url + ".diff"
    assert urls.patch_url == urls.compare_url + ".patch"


def test_compare_urls_enterprise():
    config = ChangelogConfig(
        owner="team", repo="svc", enterprise="https://ghe.example.com/api/v3"
    )

    urls = compare_urls(config, "v1", "v2")

    assert urls.compare_url == "https://ghe.example.com/team/svc/compare/v1...v2"


def test_aggregate_sets_versions():
    config = ChangelogConfig(owner="o", repo="r", groupings=[Grouping("Other", [".?"])])

    data = aggregate([record("a", group="Other"), record("b")], config, "v1", "v2")

    assert data.version == "v2"
    assert data.previous_version == "v1"
    assert len(data.items) == 2
    assert [g.name for g in data.grouped] == ["Other"]
