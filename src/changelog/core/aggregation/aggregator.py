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
Sorting, grouping and URL assembly for collected change records.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from loguru import logger

from changelog.context import ChangelogConfig, Grouping, SortDirection
from changelog.core.data.change_record import ChangeRecord
from changelog.core.github.client import web_base_url


@dataclass
class RecordGroup:
    name: str
    items: list[ChangeRecord] = field(default_factory=list)


@dataclass(frozen=True)
class GitURLs:
    compare_url: str
    diff_url: str
    patch_url: str


@dataclass
class ChangelogData:
    version: str
    previous_version: str
    items: list[ChangeRecord]
    grouped: list[RecordGroup]
    compare_url: str
    diff_url: str
    patch_url: str


def sort_records(
    records: Iterable[ChangeRecord], direction: SortDirection
) -> list[ChangeRecord]:
    """
    Order records by date.

    Records with equal dates have no guaranteed relative order.
    """
    return sorted(
        records,
        key=lambda record: record.date,
        reverse=direction != SortDirection.ASCENDING,
    )


def group_records(
    records: Sequence[ChangeRecord], groupings: Sequence[Grouping]
) -> list[RecordGroup]:
    """
    Bucket records by group name, in grouping declaration order.

    Nameless groupings and repeated names are skipped, as are groups that end
    up empty. Records without a group only appear in the flat list.
    """
    groups: dict[str, RecordGroup] = {}
    for grouping in groupings:
        if not grouping.name or grouping.name in groups:
            continue
        groups[grouping.name] = RecordGroup(grouping.name)

    for record in records:
        if record.group and record.group in groups:
            groups[record.group].items.append(record)

    return [group for group in groups.values() if group.items]


def compare_urls(config: ChangelogConfig, from_ref: str, to_ref: str) -> GitURLs:
    base = web_base_url(config.enterprise)
    compare_url = f"{base}/{config.owner}/{config.repo}/compare/{from_ref}...{to_ref}"
    return GitURLs(
        compare_url=compare_url,
        diff_url=f"{compare_url}.diff",
        patch_url=f"{compare_url}.patch",
    )


def aggregate(
    records: Iterable[ChangeRecord],
    config: ChangelogConfig,
    from_ref: str,
    to_ref: str,
) -> ChangelogData:
    items = sort_records(records, config.sort)
    grouped = group_records(items, config.groupings)
    urls = compare_urls(config, from_ref, to_ref)
    logger.debug(f"Aggregated {len(items)} records into {len(grouped)} groups")

    return ChangelogData(
        version=to_ref,
        previous_version=from_ref,
        items=items,
        grouped=grouped,
        compare_url=urls.compare_url,
        diff_url=urls.diff_url,
        patch_url=urls.patch_url,
    )
