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

from dataclasses import fields
from enum import Enum
from textwrap import shorten
from typing import Any

import typer
from colorama import Fore, Style, init

from changelog.context import ChangelogConfig, LoadedConfig

# Initialize colorama
init(autoreset=True)


def display_config(
    data: list[dict],
    description_field: str = "Description",
    key_field: str = "Key",
    value_field: str = "Value",
    source_field: str = "Source",
    max_value_length: int = 50,
) -> None:
    """
    Display config data in a two-line format:
    Key: Description
      Value (Source)
    """
    for item in data:
        key = str(item.get(key_field, ""))
        description = str(item.get(description_field, ""))
        value = str(item.get(value_field, ""))
        source = str(item.get(source_field, ""))

        value_display = shorten(value, width=max_value_length, placeholder="...")

        print(
            f"{Fore.CYAN}{Style.BRIGHT}{key}{Style.RESET_ALL}: "
            f"{Fore.WHITE}{description}{Style.RESET_ALL}"
        )
        print(
            f"  {Fore.GREEN}{value_display}{Style.RESET_ALL} "
            f"{Fore.YELLOW}({source}){Style.RESET_ALL}"
        )
        print()


def _format_value(value: Any) -> str:
    if value is None:
        return "None"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, list):
        return ", ".join(
            getattr(item, "name", None) or str(item) for item in value
        ) or "[]"
    return str(value)


def _get_config_schema() -> dict[str, dict[str, Any]]:
    """Get the schema of available config options from ChangelogConfig."""
    schema = {}
    defaults = ChangelogConfig()

    for field in fields(ChangelogConfig):
        schema[field.name] = {
            "description": ChangelogConfig.descriptions.get(
                field.name, "No description available"
            ),
            "default": getattr(defaults, field.name),
        }

    return schema


def print_describe_options():
    schema = _get_config_schema()

    print(
        f"{Fore.WHITE}{Style.BRIGHT}Available configuration options:{Style.RESET_ALL}\n"
    )

    table_data = [
        {
            "Key": key,
            "Description": info["description"],
            "Value": _format_value(info["default"]),
            "Source": "Default",
        }
        for key, info in sorted(schema.items())
    ]
    display_config(table_data, max_value_length=80)


def print_effective_config(loaded: LoadedConfig) -> None:
    schema = _get_config_schema()

    print(
        f"{Fore.WHITE}{Style.BRIGHT}Effective configuration "
        f"(priority: args > custom config > local config > env > global config):{Style.RESET_ALL}\n"
    )

    table_data = [
        {
            "Key": key,
            "Description": info["description"],
            "Value": _format_value(getattr(loaded.config, key)),
            "Source": loaded.provenance.get(key, "Default"),
        }
        for key, info in sorted(schema.items())
    ]
    display_config(table_data)


def describe_callback(ctx: typer.Context, param, value: bool):
    if not value or ctx.resilient_parsing:
        return

    print_describe_options()
    raise typer.Exit()


def main(
    ctx: typer.Context,
    describe: bool = typer.Option(
        False,
        "--describe",
        callback=describe_callback,
        is_eager=True,
        help="Describe available configuration options and exit.",
    ),
) -> None:
    """
    Show the merged changelog configuration and where each value came from.

    Priority order: program arguments > custom config > local config > environment variables > global config

    Examples:
        # Show all configuration
        changelog config

        # Show available options with defaults
        changelog config --describe
    """
    loaded: LoadedConfig = ctx.obj
    print_effective_config(loaded)
