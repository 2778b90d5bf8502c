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

from datetime import datetime, timezone

import pytest

from changelog.context import ChangelogConfig, Grouping
from changelog.core.aggregation.aggregator import aggregate
from changelog.core.data.change_record import ChangeRecord
from changelog.core.exceptions import RenderError
from changelog.core.rendering.renderer import Renderer

COMPARE = "https://github.com/jimschubert/changelog/compare/v0.0.0...v0.0.1"
FOOTER = f'<em>For more details, see <a href="{COMPARE}">v0.0.0..v0.0.1</a></em>\n'


def first(group=None):
    return ChangeRecord(
        author="jimschubert",
        author_url="https://github.com/jimschubert",
        message="Initial commit",
        commit_hash="ae494dca96571b5cf8cd6ad8c9fccf86d8455982",
        commit_url="https://github.com/jimschubert/changelog/commit/ae494dca96571b5cf8cd6ad8c9fccf86d8455982",
        timestamp=datetime.fromtimestamp(1583008420, tz=timezone.utc),
        group=group,
    )


def second(group=None):
    return ChangeRecord(
        author="jimschubert",
        author_url="https://github.com/jimschubert",
        message="Add some placeholder command line args",
        commit_hash="d707829d23b58326182c3c17fb5f52d275feda6b",
        commit_url="https://github.com/jimschubert/changelog/commit/d707829d23b58326182c3c17fb5f52d275feda6b",
        timestamp=datetime.fromtimestamp(1583008987, tz=timezone.utc),
        group=group,
    )


FIRST_LINE = (
    "* [ae494dca96](https://github.com/jimschubert/changelog/commit/ae494dca96571b5cf8cd6ad8c9fccf86d8455982)"
    " Initial commit ([jimschubert](https://github.com/jimschubert))\n"
)
SECOND_LINE = (
    "* [d707829d23](https://github.com/jimschubert/changelog/commit/d707829d23b58326182c3c17fb5f52d275feda6b)"
    " Add some placeholder command line args ([jimschubert](https://github.com/jimschubert))\n"
)


def render(records, config=None, custom_template=None):
    config = config or ChangelogConfig(owner="jimschubert", repo="changelog")
    data = aggregate(records, config, "v0.0.0", "v0.0.1")
    return Renderer().render(data, custom_template)


def test_flat_output():
    assert render([first()]) == "## v0.0.1\n\n" + FIRST_LINE + "\n" + FOOTER


def test_grouped_output():
    config = ChangelogConfig(
        owner="jimschubert",
        repo="changelog",
        groupings=[Grouping("Features", [r"(?i)\badd\b"]), Grouping("Other", [".?"])],
    )

    output = render([first("Other"), second("Features")], config)

    assert output == (
        "## v0.0.1\n"
        "\n### Features\n\n" + SECOND_LINE + "\n### Other\n\n" + FIRST_LINE + "\n" + FOOTER
    )


def test_pull_entry_credits_contribution():
    item = first()
    item.is_pull_request = True
    item.pull_url = "https://github.com/jimschubert/changelog/pull/12"

    output = render([item])

    assert (
        "Initial commit ([contributed](https://github.com/jimschubert/changelog/pull/12)"
        " by [jimschubert](https://github.com/jimschubert))"
    ) in output


def test_missing_urls_render_plain_text():
    item = ChangeRecord(
        author="Jim", message="Local change", commit_hash="0123456789abcdef", is_pull_request=True
    )

    output = render([item])

    assert "* 0123456789 Local change (contributed by Jim)\n" in output


def test_custom_template(tmp_path):
    template = tmp_path / "custom.md.j2"
    template.write_text(
        '{% import "macros.md.j2" as m %}'
        "# {{ previous_version }} -> {{ version }}\n"
        "{% for item in items %}- {{ item.title }}\n{% endfor %}"
    )

    output = render([first(), second()], custom_template=str(template))

    assert output == (
        "# v0.0.0 -> v0.0.1\n"
        "- Add some placeholder command line args\n"
        "- Initial commit\n"
    )


def test_missing_custom_template_falls_back_to_default(tmp_path):
    output = render([first()], custom_template=str(tmp_path / "missing.j2"))
    assert output.startswith("## v0.0.1\n")


def test_custom_template_syntax_error(tmp_path):
    template = tmp_path / "broken.md.j2"
    template.write_text("{% for item in items %}never closed")

    with pytest.raises(RenderError):
        render([first()], custom_template=str(template))


def test_custom_template_undefined_value(tmp_path):
    template = tmp_path / "undefined.md.j2"
    template.write_text("{{ no_such_value }}")

    with pytest.raises(RenderError):
        render([first()], custom_template=str(template))
