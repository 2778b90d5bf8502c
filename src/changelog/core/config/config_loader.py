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


import dataclasses
import json
import os
from pathlib import Path

import tomllib
import yaml
from loguru import logger
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from changelog.core.exceptions import ConfigurationError


class ConfigLoader:
    """Handles loading and merging configuration from multiple sources into a unified model."""

    @staticmethod
    def get_full_config(
        config_model: type,
        input_args: dict,
        local_config_path: Path,
        env_app_prefix: str,
        global_config_path: Path,
        custom_config_path: Path | None = None,
    ):
        """Merges configuration from multiple sources with priority: input args, custom config, local config, environment variables, global config."""

        source_names = [
            "Input Args",
            "Local Config",
            "Environment Variables",
            "Global Config",
        ]
        sources = [
            input_args,
            ConfigLoader.load_file(local_config_path),
            ConfigLoader.load_env(env_app_prefix),
            ConfigLoader.load_file(global_config_path),
        ]

        if custom_config_path is not None:
            if not custom_config_path.exists():
                raise ConfigurationError(
                    f"Config file not found: {custom_config_path}",
                    "Check the path passed to --config",
                )
            custom_config = ConfigLoader.load_file(custom_config_path)
            # custom config is priority #2
            sources.insert(1, custom_config)
            source_names.insert(1, "Custom Config")

        for name, source in zip(source_names, sources, strict=True):
            logger.debug(f"{name=} keys={sorted(source)}")

        type_adapter = TypeAdapter(config_model)
        built_model, used_indexes, used_defaults, provenance = ConfigLoader.build(
            config_model, type_adapter, sources
        )

        used_names = [source_names[i] for i in sorted(used_indexes)]
        provenance = {key: source_names[i] for key, i in provenance.items()}

        return built_model, used_names, used_defaults, provenance

    @staticmethod
    def load_file(path: Path) -> dict:
        """Loads a JSON, TOML or YAML config file, returning an empty dict if the file doesn't exist or is invalid."""

        if not path.exists():
            logger.debug(f"{path} does not exist")
            return {}

        suffix = path.suffix.lower()
        data = None
        try:
            if suffix == ".json":
                data = json.loads(path.read_text(encoding="utf-8"))
            elif suffix == ".toml":
                with open(path, "rb") as f:
                    data = tomllib.load(f)
            else:
                data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load {path}: {e}")
            return {}
        except OSError as e:
            logger.warning(f"Failed to read {path}: {e}")
            return {}

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring {path}: expected a mapping at the top level")
            return {}

        return data

    @staticmethod
    def load_env(app_prefix: str) -> dict:
        """Extracts configuration values from environment variables prefixed with the app prefix, converting keys to lowercase."""

        data = {}
        for k, v in os.environ.items():
            if k.lower().startswith(app_prefix.lower()):
                key_clean = k[len(app_prefix) :].lower()
                data[key_clean] = v

        return data

    @staticmethod
    def build(
        config_model: type,
        type_adapter: TypeAdapter,
        sources: list[dict],
    ):
        """Builds the configuration model by merging data from sources in priority order, filling in defaults where needed."""

        remaining_keys = {f.name for f in dataclasses.fields(config_model)}

        final_data = {}
        used_indices = set()
        provenance = {}

        # Iterate in order of highest-lowest preference
        for i, d in enumerate(sources):
            if not remaining_keys:
                break

            contributions = d.keys() & remaining_keys

            if contributions:
                used_indices.add(i)

                for key in contributions:
                    final_data[key] = d[key]
                    provenance[key] = i

                # Remove found keys so lower priority sources cannot override them
                remaining_keys -= contributions

        try:
            model = type_adapter.validate_python(final_data)
        except PydanticValidationError as e:
            raise ConfigurationError("Invalid configuration", str(e)) from e

        # built model, what sources we used, if we used any defaults, and where each key came from
        return model, used_indices, bool(remaining_keys), provenance
