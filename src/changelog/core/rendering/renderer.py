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
Jinja2 rendering of aggregated changelog data.

Built-in templates live in the package's templates directory. A custom
template is looked up beside its own file first, so it can import the
built-in macros or ship its own.
"""

from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
)
from loguru import logger

from changelog.constants import DEFAULT_TEMPLATE, TEMPLATE_DIR
from changelog.core.aggregation.aggregator import ChangelogData
from changelog.core.exceptions import RenderError


@dataclass
class TemplateGroup:
    name: str
    items: list[dict] = field(default_factory=list)


def template_context(data: ChangelogData) -> dict:
    return {
        "version": data.version,
        "previous_version": data.previous_version,
        "items": [record.template_view() for record in data.items],
        "grouped": [
            TemplateGroup(group.name, [record.template_view() for record in group.items])
            for group in data.grouped
        ],
        "compare_url": data.compare_url,
        "diff_url": data.diff_url,
        "patch_url": data.patch_url,
    }


class Renderer:
    def __init__(
        self,
        default_template: str = DEFAULT_TEMPLATE,
        template_dir: Path = TEMPLATE_DIR,
    ):
        self.default_template = default_template
        self.template_dir = template_dir

    def _environment(self, extra_dir: Path | None = None) -> Environment:
        loaders = [FileSystemLoader(str(self.template_dir))]
        if extra_dir is not None:
            loaders.insert(0, FileSystemLoader(str(extra_dir)))
        return Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render(self, data: ChangelogData, custom_template: str | Path | None = None) -> str:
        """
        Render data with the custom template when one is given and readable,
        otherwise with the default template.

        Raises:
            RenderError: if the selected template cannot be parsed or rendered
        """
        env = self._environment()
        name = self.default_template

        if custom_template is not None:
            path = Path(custom_template).expanduser()
            if path.is_file():
                logger.debug(f"Using custom template {path}")
                env = self._environment(path.parent.resolve())
                name = path.name
            else:
                logger.warning(f"Unable to load template {path}. Using default.")
        else:
            logger.debug("Using default template.")

        try:
            template = env.get_template(name)
            return template.render(**template_context(data))
        except TemplateSyntaxError as e:
            raise RenderError(
                f"Template {e.name or name} has a syntax error",
                f"line {e.lineno}: {e.message}",
            ) from e
        except TemplateNotFound as e:
            raise RenderError(f"Template {e.name} not found") from e
        except TemplateError as e:
            raise RenderError(f"Unable to render template {name}", str(e)) from e
