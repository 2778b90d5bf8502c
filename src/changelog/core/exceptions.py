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
Custom exception hierarchy for the changelog CLI application.

Setup failures (the history range cannot be resolved, the repository cannot be
opened, a ref is missing) are raised as SourceError subclasses and abort the
run before any commit is classified. Per-commit heuristics never raise; they
drop the commit or fail open instead.
"""

import contextlib

import typer
from loguru import logger


class ChangelogError(Exception):
    """
    Base exception for all changelog-related errors.

    All changelog-specific exceptions should inherit from this class
    to enable consistent error handling throughout the application.
    """

    def __init__(self, message: str, details: str | None = None):
        """
        Initialize a ChangelogError.

        Args:
            message: Main error message for the user
            details: Additional technical details for logging
        """
        self.message = message
        self.details = details
        super().__init__(message)


class SourceError(ChangelogError):
    """
    A history backend could not be set up.

    Raised before any classification task is scheduled, so no partial
    changelog is ever rendered.
    """

    pass


class GitError(SourceError):
    """Errors related to local git operations."""

    pass


class RefNotFoundError(SourceError):
    """Raised when a from/to reference cannot be resolved to a commit."""

    pass


class RemoteAPIError(SourceError):
    """
    Errors talking to the hosted repository API.

    Only raised for the compare call; pull request lookups fail open.
    """

    pass


class ConfigurationError(ChangelogError):
    """
    Configuration-related errors.

    Raised when configuration files are invalid, missing,
    or contain incompatible settings.
    """

    pass


class RenderError(ChangelogError):
    """Raised when a changelog template cannot be parsed or rendered."""

    pass


class ClassificationError(ChangelogError):
    """An unexpected failure escaped a classification task."""

    pass


# Convenience functions for creating common errors
def not_git_repository(path: str = ".") -> GitError:
    """Create a GitError for when not in a git repository."""
    return GitError(
        f"Not a git repository: {path}",
        "Run from inside a clone or pass --repo, or drop --local to query the API instead",
    )


def ref_not_found(ref: str, role: str) -> RefNotFoundError:
    """Create a RefNotFoundError for an unresolvable from/to reference."""
    return RefNotFoundError(
        f"Unable to find '{role}' reference: {ref}",
        "Check that the tag, branch or commit exists (and is fetched locally when using --local)",
    )


def compare_failed(base: str, head: str, reason: str) -> RemoteAPIError:
    """Create a RemoteAPIError for a failed compare call."""
    return RemoteAPIError(
        f"Unable to compare {base}...{head}",
        reason,
    )


def missing_required(*flags: str) -> ConfigurationError:
    """Create a ConfigurationError naming required flags that were not provided."""
    if len(flags) == 1:
        joined = flags[0]
    else:
        joined = ", ".join(flags[:-1]) + f" and {flags[-1]}"
    return ConfigurationError(
        f"The required arguments {joined} were not provided",
        "Pass them on the command line, set GITHUB_OWNER/GITHUB_REPO, or add owner/repo to a config file",
    )


@contextlib.contextmanager
def handle_changelog_exception(exit_on_fail: bool = True):
    """
    Log ChangelogErrors raised inside the block and exit with code 1.

    With exit_on_fail=False the error is logged and re-raised instead.
    """
    try:
        yield
    except ChangelogError as e:
        logger.error(e.message)
        if e.details:
            logger.debug(f"Details: {e.details}")
        if exit_on_fail:
            raise typer.Exit(1) from e
        raise
