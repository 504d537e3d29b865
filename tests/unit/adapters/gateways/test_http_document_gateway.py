from __future__ import annotations

import httpx
import pytest
import respx

from chainrecord_api.adapters.gateways.document_gateway import HttpDocumentGateway

URL = "https://docs.example.test/record.pdf"


@pytest.mark.asyncio
@respx.mock
async def test_fetch_returns_body_bytes() -> None:
    respx.get(URL).mock(return_value=httpx.Response(200, content=b"%PDF-1.7 data"))
    async with httpx.AsyncClient() as http:
        gw = HttpDocumentGateway(http, timeout_s=1.0)
        assert await gw.fetch(URL) == b"%PDF-1.7 data"


@pytest.mark.asyncio
@respx.mock
async def test_fetch_follows_redirects() -> None:
    moved = "https://cdn.example.test/record.pdf"
    respx.get(URL).mock(return_value=httpx.Response(302, headers={"Location": moved}))
    respx.get(moved).mock(return_value=httpx.Response(200, content=b"moved"))
    async with httpx.AsyncClient() as http:
        assert await HttpDocumentGateway(http).fetch(URL) == b"moved"


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [404, 500, 204])
@respx.mock
async def test_non_200_status_is_unavailable(status: int) -> None:
    respx.get(URL).mock(return_value=httpx.Response(status))
    async with httpx.AsyncClient() as http:
        assert await HttpDocumentGateway(http).fetch(URL) is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc",
    [httpx.ConnectError("refused"), httpx.ReadTimeout("slow")],
)
@respx.mock
async def test_transport_failure_is_unavailable(exc: Exception) -> None:
    respx.get(URL).mock(side_effect=exc)
    async with httpx.AsyncClient() as http:
        assert await HttpDocumentGateway(http).fetch(URL) is None


@pytest.mark.asyncio
async def test_closed_client_is_unavailable() -> None:
    http = httpx.AsyncClient()
    await http.aclose()
    assert await HttpDocumentGateway(http).fetch(URL) is None


@pytest.mark.asyncio
async def test_invalid_url_is_unavailable() -> None:
    async with httpx.AsyncClient() as http:
        assert await HttpDocumentGateway(http).fetch("https://exa mple.test:notaport/x.pdf") is None
