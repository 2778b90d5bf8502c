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

"""Subset of the GitHub REST payloads the changelog pipeline reads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class User(_Payload):
    login: str | None = None
    html_url: str | None = None


class Label(_Payload):
    name: str | None = None


class GitActor(_Payload):
    name: str | None = None
    email: str | None = None
    date: datetime | None = None


class CommitRef(_Payload):
    sha: str | None = None


class GitCommit(_Payload):
    message: str | None = None
    author: GitActor | None = None
    committer: GitActor | None = None


class RepositoryCommit(_Payload):
    sha: str | None = None
    html_url: str | None = None
    commit: GitCommit | None = None
    # account linked to the commit email, absent when unassociated
    author: User | None = None
    parents: list[CommitRef] = Field(default_factory=list)


class Comparison(_Payload):
    html_url: str | None = None
    diff_url: str | None = None
    patch_url: str | None = None
    total_commits: int | None = None
    commits: list[RepositoryCommit] = Field(default_factory=list)


class PullRequest(_Payload):
    number: int | None = None
    title: str | None = None
    html_url: str | None = None
    user: User | None = None
    labels: list[Label] = Field(default_factory=list)
