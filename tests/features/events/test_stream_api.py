"""
Tests for the SSE endpoints, driven through the ASGI app.

TestClient buffers a whole response body, which never ends for an event
stream, so these tests call the app directly and disconnect explicitly.
"""
import asyncio
import json

import pytest
from sse_starlette.sse import AppStatus

from app.features.events.schemas.event import ScanEventIn
from app.features.phones.schemas.phone import PhoneUpdate


@pytest.fixture(autouse=True)
def reset_sse_exit_event(monkeypatch):
    # the shutdown event is bound to the loop that created it
    monkeypatch.setattr(AppStatus, "should_exit_event", None, raising=False)


class StreamingRequest:
    def __init__(self, app, path):
        self.app = app
        self.path = path
        self.sent = []
        self._disconnected = asyncio.Event()
        self._task = None

    async def _receive(self):
        await self._disconnected.wait()
        return {"type": "http.disconnect"}

    async def _send(self, message):
        self.sent.append(message)

    def start(self):
        scope = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": "GET",
            "scheme": "http",
            "path": self.path,
            "raw_path": self.path.encode(),
            "root_path": "",
            "query_string": b"",
            "headers": [(b"host", b"testserver"), (b"accept", b"text/event-stream")],
            "client": ("testclient", 50000),
            "server": ("testserver", 80),
        }
        self._task = asyncio.create_task(self.app(scope, self._receive, self._send))

    @property
    def status(self):
        for message in self.sent:
            if message["type"] == "http.response.start":
                return message["status"]
        return None

    def messages(self):
        body = b"".join(m.get("body", b"") for m in self.sent if m["type"] == "http.response.body")
        return [
            json.loads(line[len("data:"):].strip())
            for line in body.decode().splitlines()
            if line.startswith("data:")
        ]

    async def wait_for_messages(self, count, timeout=2.0):
        for _ in range(int(timeout / 0.01)):
            messages = self.messages()
            if len(messages) >= count:
                return messages
            await asyncio.sleep(0.01)
        raise AssertionError(f"expected {count} messages, got {self.messages()}")

    async def disconnect(self):
        self._disconnected.set()
        await asyncio.wait_for(self._task, timeout=2.0)


@pytest.mark.asyncio
async def test_event_stream_sends_connected_then_state_updates(test_app):
    event_store = test_app.state.event_store
    request = StreamingRequest(test_app, "/api/v1/stream")
    request.start()

    connected, initial = await request.wait_for_messages(2)
    assert request.status == 200
    assert connected["type"] == "connected"
    assert initial["type"] == "state"
    assert initial["data"]["totalEvents"] == 0
    assert len(event_store.subscriptions) == 1

    event_store.record(ScanEventIn(language="en", hour=10, device_type="mobile"))

    update = (await request.wait_for_messages(3))[2]
    assert update["type"] == "state"
    assert update["data"]["averageHour"] == 10
    assert update["data"]["languages"] == ["en"]

    await request.disconnect()
    assert len(event_store.subscriptions) == 0


@pytest.mark.asyncio
async def test_phone_stream_polls_phone_store(test_app):
    phone_store = test_app.state.phone_store
    request = StreamingRequest(test_app, "/api/v1/phone/stream")
    request.start()

    connected, initial = await request.wait_for_messages(2)
    assert connected["type"] == "connected"
    assert initial["data"]["total"] == 0

    phone_store.upsert("phone-1", PhoneUpdate(name="Ana"))

    for _ in range(100):
        latest = request.messages()[-1]
        if latest["data"]["total"] == 1:
            break
        await asyncio.sleep(0.01)
    assert latest["type"] == "state"
    assert latest["data"]["phones"][0]["name"] == "Ana"

    await request.disconnect()
    assert len(phone_store.subscriptions) == 0
