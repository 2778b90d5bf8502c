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
Pure text and URL heuristics used to classify commits.

Patterns are regular expressions searched anywhere in the text; a pattern that
is not a valid expression is matched as plain text.
"""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from loguru import logger

from changelog.context import Grouping

# "Fix CI tests (#5540)" and "Merge pull request #523 from x/y"
PULL_REFERENCE_RE = re.compile(r".+?#(\d+).+?")


def compile_pattern(pattern: str) -> re.Pattern:
    try:
        return re.compile(pattern)
    except re.error:
        logger.debug(f"Pattern {pattern!r} is not a valid regex, matching as plain text")
        return re.compile(re.escape(pattern))


def first_line(message: str | None) -> str:
    if not message:
        return ""
    return message.split("\n", 1)[0]


@dataclass(frozen=True)
class CompiledGrouping:
    name: str
    patterns: tuple[re.Pattern, ...]


@dataclass(frozen=True)
class PullReference:
    number: str
    url: str | None


class ClassificationRules:
    """Exclusion and grouping rules compiled once per run."""

    def __init__(self, exclude: Sequence[str] = (), groupings: Sequence[Grouping] = ()):
        self.exclude = tuple(compile_pattern(p) for p in exclude)
        self.groupings = tuple(
            CompiledGrouping(g.name, tuple(compile_pattern(p) for p in g.patterns))
            for g in groupings
        )

    def should_exclude(self, text: str | None) -> bool:
        """True if any exclusion pattern matches text. Absent text is never excluded."""
        if text is None or not self.exclude:
            return False
        for pattern in self.exclude:
            if pattern.search(text):
                logger.debug(
                    "exclude via pattern: text={text!r} pattern={pattern!r}",
                    text=text,
                    pattern=pattern.pattern,
                )
                return True
        return False

    def should_exclude_any(self, texts: Iterable[str | None]) -> bool:
        return any(self.should_exclude(text) for text in texts)

    def find_group(self, message: str | None) -> str | None:
        """Name of the first grouping rule with a pattern matching the title."""
        if not self.groupings:
            return None
        title = first_line(message)
        for grouping in self.groupings:
            for pattern in grouping.patterns:
                if pattern.search(title):
                    logger.debug(
                        "found group name for commit: grouping={grouping!r} title={title!r}",
                        grouping=grouping.name,
                        title=title,
                    )
                    return grouping.name
        return None


def detect_pull_request(title: str, commit_url: str | None) -> PullReference | None:
    """
    Detect a pull request reference in a commit title.

    The pull URL is derived from the commit URL by replacing everything from
    its last "commit" segment with "pull/<number>". When the commit URL has no
    such segment the reference is still returned, without a URL.
    """
    match = PULL_REFERENCE_RE.search(title)
    if match is None:
        return None

    number = match.group(1)
    base_url = commit_url or ""
    idx = base_url.rfind("commit")
    if idx <= 0:
        return PullReference(number, None)

    pull_url = f"{base_url[:idx]}pull/{number}"
    logger.debug(
        "detected pull request: base_url={base_url} pull_url={pull_url}",
        base_url=base_url,
        pull_url=pull_url,
    )
    return PullReference(number, pull_url)
