"""
Tests for the Gandi LiveDNS client
"""

import asyncio
from unittest.mock import AsyncMock, Mock, patch

import aiohttp
import pytest

from gandi_ddns.dns.livedns import GandiLiveDNSClient
from gandi_ddns.errors import ReadError, WriteTransportError

RECORD_URL = "https://api.gandi.net/v5/livedns/domains/example.com/records/home/A"


class MockAsyncContext:
    """Mock async context manager for aiohttp response"""

    def __init__(self, response):
        self._response = response

    async def __aenter__(self):
        return self._response

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None


def make_response(status: int, text: str = ""):
    response = Mock()
    response.status = status
    response.text = AsyncMock(return_value=text)
    return response


@pytest.fixture
def livedns_client():
    """Create LiveDNS client with mocked aiohttp session"""
    with patch("gandi_ddns.dns.livedns.aiohttp.ClientSession"):
        client = GandiLiveDNSClient("secret-token")
        return client


def test_authorization_header():
    with patch("gandi_ddns.dns.livedns.aiohttp.ClientSession") as session_cls:
        GandiLiveDNSClient("secret-token")
        GandiLiveDNSClient("legacy-key", auth_scheme="Apikey")

    first, second = session_cls.call_args_list
    assert first.kwargs["headers"] == {"Authorization": "Bearer secret-token"}
    assert second.kwargs["headers"] == {"Authorization": "Apikey legacy-key"}


class TestGetRecord:
    @pytest.mark.asyncio
    async def test_returns_values(self, livedns_client):
        livedns_client._send_request = AsyncMock(
            return_value=(200, '{"rrset_values": ["1.2.3.4"], "rrset_ttl": 1800}')
        )

        values = await livedns_client.get_record("example.com", "home", "A")

        assert values == ["1.2.3.4"]
        livedns_client._send_request.assert_called_once_with("GET", RECORD_URL)

    @pytest.mark.asyncio
    async def test_empty_rrset(self, livedns_client):
        livedns_client._send_request = AsyncMock(
            return_value=(200, '{"rrset_values": []}')
        )

        assert await livedns_client.get_record("example.com", "home", "A") == []

    @pytest.mark.asyncio
    async def test_missing_field_means_absent(self, livedns_client):
        livedns_client._send_request = AsyncMock(return_value=(200, '{"object": "x"}'))

        assert await livedns_client.get_record("example.com", "home", "A") is None

    @pytest.mark.asyncio
    async def test_not_found_means_absent(self, livedns_client):
        livedns_client._send_request = AsyncMock(
            return_value=(404, '{"code": 404, "message": "Can\'t find the DNS record"}')
        )

        assert await livedns_client.get_record("example.com", "home", "A") is None

    @pytest.mark.asyncio
    async def test_error_status_raises(self, livedns_client, caplog):
        livedns_client._send_request = AsyncMock(return_value=(403, ""))

        with pytest.raises(ReadError) as exc_info:
            await livedns_client.get_record("example.com", "home", "A")

        assert exc_info.value.status == 403
        assert "A record for home@example.com" in caplog.text
        assert "403" in caplog.text

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, livedns_client):
        livedns_client._session.request = Mock(
            side_effect=aiohttp.ClientConnectionError("connection refused")
        )

        with pytest.raises(ReadError) as exc_info:
            await livedns_client.get_record("example.com", "home", "A")

        assert exc_info.value.status is None

    @pytest.mark.asyncio
    async def test_plain_text_not_found_means_absent(self, livedns_client):
        response = make_response(404, "Not Found")
        livedns_client._session.request = Mock(return_value=MockAsyncContext(response))

        assert await livedns_client.get_record("example.com", "home", "A") is None

    @pytest.mark.asyncio
    async def test_html_error_page_keeps_status(self, livedns_client, caplog):
        """A proxy error page still reports the HTTP status"""
        response = make_response(502, "<html>Bad Gateway</html>")
        livedns_client._session.request = Mock(return_value=MockAsyncContext(response))

        with pytest.raises(ReadError) as exc_info:
            await livedns_client.get_record("example.com", "home", "A")

        assert exc_info.value.status == 502
        assert "Status Code: 502" in caplog.text

    @pytest.mark.asyncio
    async def test_non_json_success_body_raises(self, livedns_client):
        response = make_response(200, "<html>maintenance</html>")
        livedns_client._session.request = Mock(return_value=MockAsyncContext(response))

        with pytest.raises(ReadError) as exc_info:
            await livedns_client.get_record("example.com", "home", "A")

        assert exc_info.value.status == 200

    @pytest.mark.asyncio
    async def test_reads_through_session(self, livedns_client):
        response = make_response(200, '{"rrset_values": ["9.9.9.9"]}')
        livedns_client._session.request = Mock(return_value=MockAsyncContext(response))

        values = await livedns_client.get_record("example.com", "home", "A")

        assert values == ["9.9.9.9"]
        livedns_client._session.request.assert_called_once_with(
            "GET", RECORD_URL, json=None
        )


class TestUpdateRecord:
    @pytest.mark.asyncio
    async def test_created(self, livedns_client):
        livedns_client._send_request = AsyncMock(
            return_value=(201, '{"message": "DNS Record Created"}')
        )

        changed = await livedns_client.update_record(
            "example.com", "home", "A", "1.2.3.4"
        )

        assert changed is True
        livedns_client._send_request.assert_called_once_with(
            "PUT",
            RECORD_URL,
            json={"rrset_ttl": 1800, "rrset_values": ["1.2.3.4"]},
        )

    @pytest.mark.asyncio
    async def test_ok_is_not_a_change(self, livedns_client, caplog):
        livedns_client._send_request = AsyncMock(return_value=(200, ""))

        changed = await livedns_client.update_record(
            "example.com", "home", "A", "1.2.3.4"
        )

        assert changed is False
        assert "A -> home@example.com: 200" in caplog.text

    @pytest.mark.asyncio
    async def test_client_error_status_does_not_raise(self, livedns_client):
        livedns_client._send_request = AsyncMock(
            return_value=(400, '{"status": "error"}')
        )

        assert (
            await livedns_client.update_record("example.com", "home", "A", "bogus")
            is False
        )

    @pytest.mark.asyncio
    async def test_timeout_raises(self, livedns_client):
        livedns_client._send_request = AsyncMock(side_effect=asyncio.TimeoutError())

        with pytest.raises(WriteTransportError):
            await livedns_client.update_record("example.com", "home", "A", "1.2.3.4")

    @pytest.mark.asyncio
    async def test_plain_text_ok_is_not_a_change(self, livedns_client, caplog):
        """A non-201 answer with a non-JSON body is rejected, not a failure"""
        response = make_response(200, "OK")
        livedns_client._session.request = Mock(return_value=MockAsyncContext(response))

        changed = await livedns_client.update_record(
            "example.com", "home", "A", "1.2.3.4"
        )

        assert changed is False
        assert "A -> home@example.com: 200" in caplog.text

    @pytest.mark.asyncio
    async def test_created_with_non_json_body(self, livedns_client):
        response = make_response(201, "<html>created</html>")
        livedns_client._session.request = Mock(return_value=MockAsyncContext(response))

        assert (
            await livedns_client.update_record("example.com", "home", "A", "1.2.3.4")
            is True
        )

    @pytest.mark.asyncio
    async def test_undecodable_body_raises(self, livedns_client):
        response = make_response(201)
        response.text = AsyncMock(
            side_effect=UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        )
        livedns_client._session.request = Mock(return_value=MockAsyncContext(response))

        with pytest.raises(WriteTransportError):
            await livedns_client.update_record("example.com", "home", "A", "1.2.3.4")


@pytest.mark.asyncio
async def test_context_manager_closes_session(livedns_client):
    livedns_client._session.close = AsyncMock()

    async with livedns_client as client:
        assert client is livedns_client

    livedns_client._session.close.assert_awaited_once()
