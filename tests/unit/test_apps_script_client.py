"""Unit tests for the AppsScriptClient."""

import json

import httpx
import pytest

from insole_tracker.domain.exceptions import (
    ApplicationError,
    NotConfiguredError,
    TransportError,
)
from insole_tracker.infrastructure.remote.apps_script_client import AppsScriptClient

BASE_URL = "https://script.example.com/macros/s/abc/exec"


# ── Helpers ──


def _make_client(handler) -> AppsScriptClient:
    transport = httpx.MockTransport(handler)
    return AppsScriptClient(
        base_url=BASE_URL,
        http_client=httpx.AsyncClient(transport=transport),
    )


class _Recorder:
    """Records requests and answers each one with the next queued response."""

    def __init__(self, *responses):
        self.requests: list[httpx.Request] = []
        self._responses = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


# ── Reads ──


@pytest.mark.asyncio
async def test_list_returns_records():
    recorder = _Recorder(httpx.Response(200, json={
        "success": True,
        "data": [{"id": "1", "serialNumber": "AB12"}, "junk"],
    }))
    client = _make_client(recorder)

    records = await client.fetch_insoles()

    assert records == [{"id": "1", "serialNumber": "AB12"}]
    request = recorder.requests[0]
    assert request.method == "GET"
    assert request.url.params["action"] == "getInsoles"


@pytest.mark.asyncio
async def test_list_http_error_raises_transport_error():
    client = _make_client(_Recorder(httpx.Response(500, text="boom")))

    with pytest.raises(TransportError) as exc_info:
        await client.fetch_insoles()
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_list_network_failure_raises_transport_error():
    client = _make_client(_Recorder(httpx.ConnectError("unreachable")))

    with pytest.raises(TransportError):
        await client.fetch_insoles()


@pytest.mark.asyncio
async def test_list_unsuccessful_envelope_raises_application_error():
    client = _make_client(_Recorder(httpx.Response(200, json={"success": False, "error": "Sheet missing"})))

    with pytest.raises(ApplicationError) as exc_info:
        await client.fetch_insoles()
    assert exc_info.value.message == "Sheet missing"


@pytest.mark.asyncio
async def test_unsuccessful_envelope_without_message_uses_default():
    client = _make_client(_Recorder(httpx.Response(200, json={"success": False})))

    with pytest.raises(ApplicationError, match="Unknown API error"):
        await client.fetch_insoles()


@pytest.mark.asyncio
async def test_read_detail_sends_key_param():
    recorder = _Recorder(httpx.Response(200, json={"success": True, "data": []}))
    client = _make_client(recorder)

    assert await client.fetch_history("abc") == []

    params = recorder.requests[0].url.params
    assert params["action"] == "getHistory"
    assert params["insoleId"] == "abc"


@pytest.mark.asyncio
async def test_unconfigured_client_makes_no_request():
    recorder = _Recorder()
    transport = httpx.MockTransport(recorder)
    client = AppsScriptClient(base_url="  ", http_client=httpx.AsyncClient(transport=transport))

    assert client.is_configured is False
    with pytest.raises(NotConfiguredError):
        await client.fetch_insoles()
    with pytest.raises(NotConfiguredError):
        await client.delete_insole("1")
    assert recorder.requests == []


# ── Writes ──


@pytest.mark.asyncio
async def test_write_posts_plain_text_json_body():
    recorder = _Recorder(httpx.Response(200, json={"success": True, "data": {"id": "srv-1"}}))
    client = _make_client(recorder)

    result = await client.add_insole({"serialNumber": "AB12"})

    assert result["data"]["id"] == "srv-1"
    request = recorder.requests[0]
    assert request.method == "POST"
    assert request.headers["content-type"] == "text/plain"
    assert json.loads(request.content) == {"action": "addInsole", "data": {"serialNumber": "AB12"}}


@pytest.mark.asyncio
async def test_write_includes_id_at_top_level():
    recorder = _Recorder(httpx.Response(200, json={"success": True}))
    client = _make_client(recorder)

    await client.delete_insole("abc")

    body = json.loads(recorder.requests[0].content)
    assert body == {"action": "deleteInsole", "data": {"id": "abc"}, "id": "abc"}


@pytest.mark.asyncio
async def test_write_falls_back_to_get_when_post_raises():
    recorder = _Recorder(
        httpx.ConnectError("redirect refused"),
        httpx.Response(200, json={"success": True}),
    )
    client = _make_client(recorder)

    result = await client.update_insole({"id": "abc", "location": "Spire"})

    assert result == {"success": True}
    assert [r.method for r in recorder.requests] == ["POST", "GET"]
    params = recorder.requests[1].url.params
    assert params["action"] == "updateInsole"
    assert params["id"] == "abc"
    assert json.loads(params["data"]) == {"id": "abc", "location": "Spire"}


@pytest.mark.asyncio
async def test_write_falls_back_when_post_returns_non_json():
    recorder = _Recorder(
        httpx.Response(200, text="<html>Moved</html>"),
        httpx.Response(200, json={"success": True}),
    )
    client = _make_client(recorder)

    await client.add_insole({"serialNumber": "AB12"})

    assert [r.method for r in recorder.requests] == ["POST", "GET"]


@pytest.mark.asyncio
async def test_fallback_failure_is_reported():
    recorder = _Recorder(
        httpx.ConnectError("down"),
        httpx.ConnectError("still down"),
    )
    client = _make_client(recorder)

    with pytest.raises(TransportError):
        await client.add_insole({"serialNumber": "AB12"})
    assert len(recorder.requests) == 2


@pytest.mark.asyncio
async def test_write_unsuccessful_envelope_raises_without_fallback():
    recorder = _Recorder(httpx.Response(200, json={"success": False, "error": "Duplicate serial"}))
    client = _make_client(recorder)

    with pytest.raises(ApplicationError, match="Duplicate serial"):
        await client.add_insole({"serialNumber": "AB12"})
    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_write_http_error_status_raises_transport_error():
    recorder = _Recorder(httpx.Response(403, text="Forbidden"))
    client = _make_client(recorder)

    with pytest.raises(TransportError) as exc_info:
        await client.add_insole({"serialNumber": "AB12"})
    assert exc_info.value.status_code == 403
