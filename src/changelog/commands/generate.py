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

import typer

from changelog.constants import DEFAULT_FROM_REF, DEFAULT_TO_REF
from changelog.context import ChangelogRange, GlobalContext
from changelog.core.exceptions import ChangelogError, handle_changelog_exception
from changelog.core.logging.utils import time_block


def run_generate(
    global_context: GlobalContext,
    from_ref: str,
    to_ref: str,
    output: Path | None,
) -> str:
    from loguru import logger

    from changelog.pipelines.changelog_pipeline import ChangelogPipeline

    changelog_range = ChangelogRange(from_ref=from_ref, to_ref=to_ref)
    logger.debug(
        "Generate command started",
        from_ref=from_ref,
        to_ref=to_ref,
        local=global_context.config.local,
    )

    with time_block("Changelog E2E"):
        changelog = ChangelogPipeline(global_context, changelog_range).run()

    if output is None:
        typer.echo(changelog, nl=False)
    else:
        try:
            output.write_text(changelog, encoding="utf-8")
        except OSError as e:
            raise ChangelogError(f"Unable to write changelog to {output}", str(e)) from e
        logger.success(f"Changelog written to {output}")

    return changelog


def main(
    ctx: typer.Context,
    from_ref: str = typer.Option(
        DEFAULT_FROM_REF,
        "--from",
        "-f",
        help="Beginning of the changelog range (tag, branch or commit), exclusive.",
    ),
    to_ref: str = typer.Option(
        DEFAULT_TO_REF,
        "--to",
        "-t",
        help="End of the changelog range (tag, branch or commit), inclusive.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-O",
        help="Write the changelog to this file instead of stdout.",
    ),
) -> None:
    """
    Generate a changelog for the commits between --from and --to.

    Examples:
        # Changelog between two tags using the GitHub API
        changelog -o jimschubert -r changelog generate --from v0.1 --to v0.2

        # Same range, read from the local clone
        changelog -o jimschubert -r changelog --local generate -f v0.1 -t v0.2
    """
    global_context: GlobalContext = ctx.obj
    with handle_changelog_exception():
        run_generate(global_context, from_ref, to_ref, output)
