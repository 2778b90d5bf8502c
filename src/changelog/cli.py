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

import os
import sys
from pathlib import Path

import typer
from colorama import init
from dotenv import load_dotenv
from loguru import logger

from changelog.commands import config, generate
from changelog.constants import (
    APP_NAME,
    ENV_APP_PREFIX,
    GITHUB_TOKEN_ENV,
    GLOBAL_CONFIG_FILE,
    LOCAL_CONFIG_FILE,
)
from changelog.context import ChangelogConfig, GlobalContext, LoadedConfig
from changelog.core.config.config_loader import ConfigLoader
from changelog.core.exceptions import handle_changelog_exception, missing_required
from changelog.core.logging.logging import setup_logger
from changelog.runtimeutil import (
    ensure_utf8_output,
    get_log_dir_callback,
    setup_signal_handlers,
    version_callback,
)

# Initialize colorama (colored output in terminal)
init(autoreset=True)

# main cli app
app = typer.Typer(
    help=f"{APP_NAME}: Generate a changelog between two points in your git history",
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    add_completion=False,
)

# Main cli commands
app.command(name="generate")(generate.main)
app.command(name="config")(config.main)

# commands that only need the merged config, not owner/repo
no_context_commands = {"config"}


def load_config(custom_config_path: str | None, **input_args) -> LoadedConfig:
    # input args are the "runtime overrides" for configs
    config_args = {key: item for key, item in input_args.items() if item is not None}

    model, used_sources, _, provenance = ConfigLoader.get_full_config(
        ChangelogConfig,
        config_args,
        local_config_path=LOCAL_CONFIG_FILE,
        env_app_prefix=ENV_APP_PREFIX,
        global_config_path=GLOBAL_CONFIG_FILE,
        custom_config_path=Path(custom_config_path)
        if custom_config_path is not None
        else None,
    )
    return LoadedConfig(model, used_sources, provenance)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_path: bool = typer.Option(
        False,
        "--log-dir",
        callback=get_log_dir_callback,
        is_eager=True,
        help="Show log path (where logs for changelog live) and exit",
    ),
    repo_path: str = typer.Option(
        ".",
        "--repo",
        help="Path to the local clone (used with --local).",
    ),
    custom_config: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a custom config file (YAML, JSON or TOML)",
    ),
    owner: str | None = typer.Option(
        None,
        "--owner",
        "-o",
        envvar="GITHUB_OWNER",
        help="GitHub owner (user or organization)",
    ),
    repo_name: str | None = typer.Option(
        None,
        "--repo-name",
        "-r",
        envvar="GITHUB_REPO",
        help="GitHub repository name",
    ),
    local: bool = typer.Option(
        False,
        "--local",
        "-l",
        help="Read commits from the local clone instead of the GitHub compare API",
    ),
    max_commits: int | None = typer.Option(
        None,
        "--max",
        min=1,
        help="Maximum number of commits to process",
    ),
    sort: str | None = typer.Option(
        None,
        "--sort",
        help="Sort entries by date: asc or desc",
    ),
    resolve: str | None = typer.Option(
        None,
        "--resolve",
        help="Resolve mode to record: commits or pulls",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging output",
    ),
    silent: bool = typer.Option(
        False,
        "--silent",
        "-s",
        help="Do not log anything to the console",
    ),
) -> None:
    """
    Global setup callback. Initialize global context/config used by commands
    """
    with handle_changelog_exception(exit_on_fail=True):
        # conditions to not create global context
        if ctx.invoked_subcommand is None:
            print(ctx.get_help())
            raise typer.Exit()

        # skip --help in subcommands
        if any(arg in ctx.help_option_names for arg in sys.argv):
            return

        setup_logger(ctx.invoked_subcommand, debug=verbose, silent=silent)

        # flags only override config when they are switched on
        loaded = load_config(
            custom_config,
            owner=owner,
            repo=repo_name,
            local=local or None,
            max_commits=max_commits,
            sort=sort,
            resolve=resolve,
            verbose=verbose or None,
            silent=silent or None,
        )
        cfg = loaded.config

        if (cfg.verbose, cfg.silent) != (verbose, silent):
            # config files may change console verbosity
            setup_logger(ctx.invoked_subcommand, debug=cfg.verbose, silent=cfg.silent)
        logger.debug(f"Used {loaded.sources} to build global context.")

        if ctx.invoked_subcommand in no_context_commands:
            ctx.obj = loaded
            return

        missing = [
            flag
            for flag, value in (("--owner", cfg.owner), ("--repo-name", cfg.repo))
            if not value
        ]
        if missing:
            raise missing_required(*missing)

        ctx.obj = GlobalContext.from_config(
            cfg, Path(repo_path), token=os.environ.get(GITHUB_TOKEN_ENV) or None
        )

        setup_signal_handlers()


def run_app():
    """Run the application with global exception handling."""
    # force stdout to be utf8
    ensure_utf8_output()
    # load any .env files (config values possibly set through env)
    load_dotenv()
    # launch cli
    app(prog_name=APP_NAME)


if __name__ == "__main__":
    run_app()
