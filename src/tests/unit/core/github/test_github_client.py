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

import asyncio

import httpx
import pytest

from changelog.core.github.client import (
    GitHubAPIError,
    GitHubClient,
    api_base_url,
    web_base_url,
)

COMPARE_PAYLOAD = {
    "html_url": "https://github.com/jimschubert/changelog/compare/v0.0.0...v0.0.1",
    "total_commits": 1,
    "commits": [
        {
            "sha": "ae494dca96571b5cf8cd6ad8c9fccf86d8455982",
            "html_url": "https://github.com/jimschubert/changelog/commit/ae494dca96571b5cf8cd6ad8c9fccf86d8455982",
            "commit": {
                "message": "Initial commit",
                "author": {"name": "Jim", "date": "2020-02-29T20:33:40Z"},
            },
            "author": {"login": "jimschubert", "html_url": "https://github.com/jimschubert"},
            "parents": [],
            "files": [],
        }
    ],
}


def run_with(handler, call, token=None):
    async def scenario():
        client = GitHubClient(token=token, transport=httpx.MockTransport(handler))
        try:
            return await call(client)
        finally:
            await client.aclose()

    return asyncio.run(scenario())


def test_api_base_url():
    assert api_base_url(None) == "https://api.github.com"
    assert api_base_url("https://ghe.example.com") == "https://ghe.example.com/api/v3"
    assert api_base_url("https://ghe.example.com/api/v3/") == "https://ghe.example.com/api/v3"


def test_web_base_url():
    assert web_base_url(None) == "https://github.com"
    assert web_base_url("https://ghe.example.com/api/v3") == "https://ghe.example.com"
    assert web_base_url("https://ghe.example.com/api") == "https://ghe.example.com"


def test_compare_commits_parses_payload():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=COMPARE_PAYLOAD)

    comparison = run_with(
        handler,
        lambda c: c.compare_commits("jimschubert", "changelog", "v0.0.0", "v0.0.1"),
        token="secret",
    )

    assert requests[0].url.path == "/repos/jimschubert/changelog/compare/v0.0.0...v0.0.1"
    assert requests[0].headers["Authorization"] == "Bearer secret"
    commit = comparison.commits[0]
    assert commit.commit.message == "Initial commit"
    assert commit.author.login == "jimschubert"
    assert commit.commit.author.date.timestamp() == 1583008420


def test_unauthenticated_client_sends_no_token():
    seen = []

    def handler(request):
        seen.append(request.headers.get("Authorization"))
        return httpx.Response(200, json={"number": 1, "title": "t"})

    pull = run_with(handler, lambda c: c.get_pull_request("o", "r", 1))

    assert seen == [None]
    assert pull.title == "t"
    assert pull.labels == []


def test_error_status_raises():
    def handler(request):
        return httpx.Response(404, json={"message": "Not Found"})

    with pytest.raises(GitHubAPIError) as excinfo:
        run_with(handler, lambda c: c.get_pull_request("o", "r", 99))

    assert excinfo.value.status_code == 404
    assert "Not Found" in str(excinfo.value)


def test_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(GitHubAPIError):
        run_with(handler, lambda c: c.compare_commits("o", "r", "a", "b"))


def test_non_json_body_raises():
    def handler(request):
        return httpx.Response(200, text="<html>proxy</html>")

    with pytest.raises(GitHubAPIError):
        run_with(handler, lambda c: c.compare_commits("o", "r", "a", "b"))


def test_error_status_with_list_body_raises():
    def handler(request):
        return httpx.Response(502, json=["bad gateway"])

    with pytest.raises(GitHubAPIError) as excinfo:
        run_with(handler, lambda c: c.get_pull_request("o", "r", 5))

    assert excinfo.value.status_code == 502
