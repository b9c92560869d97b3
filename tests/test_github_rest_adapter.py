"""Tests for the GitHub REST adapter using a mocked transport."""

import httpx
import pytest

from code_mentor.domain.entities import EntryType
from code_mentor.domain.exceptions import RemoteAPIError, ValidationError
from code_mentor.infrastructure.github_rest_adapter import (
    GitHubRestAdapter,
    rate_limit_from_headers,
)

from conftest import VALID_TOKEN


def adapter_for(github, token=None):
    client = httpx.AsyncClient(transport=github.transport)
    return GitHubRestAdapter(client, token=token)


class TestReads:
    """Test mapping of GitHub payloads to domain entities."""

    @pytest.mark.asyncio
    async def test_get_repository(self, github):
        github.repo(default_branch="develop")

        info = await adapter_for(github).get_repository("acme", "shop")

        assert info.full_name == "acme/shop"
        assert info.default_branch == "develop"
        assert info.language == "TypeScript"
        assert info.topics == ("react",)

    @pytest.mark.asyncio
    async def test_list_directory(self, github):
        github.directory("src", [("components", "dir"), ("index.ts", "file")])

        entries = await adapter_for(github).list_directory("acme", "shop", "src", "main")

        assert [(e.path, e.type) for e in entries] == [
            ("src/components", EntryType.DIR),
            ("src/index.ts", EntryType.FILE),
        ]

    @pytest.mark.asyncio
    async def test_file_content_is_base64_decoded(self, github):
        github.file("src/index.ts", "export const answer = 42;\n")

        content = await adapter_for(github).get_file_content("acme", "shop", "src/index.ts", "main")

        assert content.content == "export const answer = 42;\n"
        assert content.name == "index.ts"

    @pytest.mark.asyncio
    async def test_directory_is_not_a_file(self, github):
        github.directory("src", [("index.ts", "file")])

        with pytest.raises(ValidationError):
            await adapter_for(github).get_file_content("acme", "shop", "src", "main")

    @pytest.mark.asyncio
    async def test_rate_limit(self, github):
        github.rate_limit(remaining=12, limit=60, reset=1700000500)

        rate = await adapter_for(github).get_rate_limit()

        assert (rate.remaining, rate.limit, rate.reset_epoch) == (12, 60, 1700000500)


class TestErrors:
    """Test HTTP status translation."""

    @pytest.mark.asyncio
    async def test_not_found(self, github):
        with pytest.raises(RemoteAPIError) as info:
            await adapter_for(github).get_repository("acme", "missing")

        assert info.value.status_code == 404
        assert info.value.is_not_found
        assert not info.value.retryable
        assert info.value.rate_limit.remaining == 4999

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status,fragment,retryable",
        [
            (401, "Authentication failed", False),
            (403, "rate limit", False),
            (502, "HTTP 502", True),
        ],
    )
    async def test_status_mapping(self, github, status, fragment, retryable):
        github.add("/repos/acme/shop", {"message": "nope"}, status=status)

        with pytest.raises(RemoteAPIError) as info:
            await adapter_for(github).get_repository("acme", "shop")

        assert fragment in info.value.message
        assert info.value.retryable is retryable

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self):
        def refuse(request):
            raise httpx.ConnectError("refused", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(refuse))
        with pytest.raises(httpx.ConnectError):
            await GitHubRestAdapter(client).get_rate_limit()


class TestHeaders:
    @pytest.mark.asyncio
    async def test_sends_bearer_token(self, github):
        seen = {}

        def capture(request):
            seen.update(request.headers)
            return github.handler(request)

        github.rate_limit()
        client = httpx.AsyncClient(transport=httpx.MockTransport(capture))
        await GitHubRestAdapter(client, token=VALID_TOKEN).get_rate_limit()

        assert seen["authorization"] == f"Bearer {VALID_TOKEN}"
        assert seen["user-agent"].startswith("code-mentor/")

    def test_missing_rate_limit_headers(self):
        assert rate_limit_from_headers(httpx.Headers({})) is None
