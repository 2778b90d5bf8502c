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

import pytest
import typer

from changelog.core.exceptions import (
    ChangelogError,
    GitError,
    RefNotFoundError,
    SourceError,
    handle_changelog_exception,
    missing_required,
    ref_not_found,
)


def test_source_errors_share_a_base():
    assert issubclass(GitError, SourceError)
    assert issubclass(RefNotFoundError, SourceError)
    assert issubclass(SourceError, ChangelogError)


def test_ref_not_found_names_the_role():
    error = ref_not_found("v9.9", "from")
    assert "from" in error.message
    assert "v9.9" in error.message
    assert error.details


def test_missing_required_names_flags():
    error = missing_required("--owner", "--repo-name")
    assert "--owner and --repo-name" in error.message


def test_handler_exits_with_code_one():
    with pytest.raises(typer.Exit) as excinfo:
        with handle_changelog_exception():
            raise GitError("broken", "details")

    assert excinfo.value.exit_code == 1


def test_handler_can_reraise():
    with pytest.raises(GitError):
        with handle_changelog_exception(exit_on_fail=False):
            raise GitError("broken")


def test_handler_ignores_other_exceptions():
    with pytest.raises(KeyError):
        with handle_changelog_exception():
            raise KeyError("x")
