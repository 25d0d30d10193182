import asyncio

from aiohttp import test_utils

import config
from conftest import FakeWindow, FakeWindowSource
from server_main import OperationRegistry, create_app
from window_service import OPERATIONS, WindowDetailsService

PATH = config.OBJECT_PATH


def exported_registry(fake_proc, *windows) -> OperationRegistry:
    registry = OperationRegistry()
    registry.export(WindowDetailsService(source=FakeWindowSource(windows), reader=fake_proc.reader()))
    return registry


def run_with_client(registry, scenario):
    """Start the app on a test server, run scenario(client), tear down."""

    async def go():
        client = test_utils.TestClient(test_utils.TestServer(create_app(registry)))
        await client.start_server()
        try:
            return await scenario(client)
        finally:
            await client.close()

    return asyncio.run(go())


class TestOperationRegistry:

    def test_export_unexport(self, fake_proc):
        registry = exported_registry(fake_proc)
        assert registry.exported
        assert registry.get("getWinClass") is not None
        registry.unexport()
        assert not registry.exported
        assert registry.get("getWinClass") is None
        registry.unexport()  # second unexport is a no-op

    def test_introspect(self):
        info = OperationRegistry().introspect()
        assert info["interface"] == config.DBUS_INTERFACE
        assert info["objectPath"] == PATH
        assert info["exported"] is False
        assert info["methods"] == list(OPERATIONS)


class TestHttp:

    def test_introspection(self, fake_proc):
        async def scenario(client):
            resp = await client.get("/")
            return resp.status, await resp.json()

        status, body = run_with_client(exported_registry(fake_proc), scenario)
        assert status == 200
        assert body["exported"] is True
        assert "getAllWindowData" in body["methods"]

    def test_call(self, fake_proc):
        async def scenario(client):
            get = await client.get(f"{PATH}/getWinClass")
            post = await client.post(f"{PATH}/getWinFocusData")
            return get.status, await get.text(), get.content_type, await post.text()

        status, text, content_type, title = run_with_client(
            exported_registry(fake_proc, FakeWindow("Inbox - Mozilla Firefox", "Firefox")), scenario,
        )
        assert status == 200
        assert text == "Firefox"
        assert content_type == "text/plain"
        assert title == "Inbox - Mozilla Firefox"

    def test_no_focus_is_empty_body(self, fake_proc):
        async def scenario(client):
            resp = await client.get(f"{PATH}/getWinPID")
            return resp.status, await resp.text()

        assert run_with_client(exported_registry(fake_proc), scenario) == (200, "")

    def test_unknown_method(self, fake_proc):
        async def scenario(client):
            resp = await client.get(f"{PATH}/getEverything")
            return resp.status, await resp.json()

        status, body = run_with_client(exported_registry(fake_proc), scenario)
        assert status == 404
        assert "getEverything" in body["error"]

    def test_unexported(self, fake_proc):
        registry = exported_registry(fake_proc, FakeWindow("t", "Firefox"))

        async def scenario(client):
            before = await client.get(f"{PATH}/getWinClass")
            registry.unexport()
            after = await client.get(f"{PATH}/getWinClass")
            return before.status, after.status

        assert run_with_client(registry, scenario) == (200, 503)


class TestWebSocket:

    def test_call_and_errors(self, fake_proc):
        async def scenario(client):
            ws = await client.ws_connect("/ws")
            await ws.send_json({"method": "getWinClass", "id": 1})
            ok = await ws.receive_json()
            await ws.send_json({"method": "nope", "id": 2})
            unknown = await ws.receive_json()
            await ws.send_str("{not json")
            bad = await ws.receive_json()
            await ws.send_json({"id": 3})
            missing = await ws.receive_json()
            await ws.close()
            return ok, unknown, bad, missing

        ok, unknown, bad, missing = run_with_client(
            exported_registry(fake_proc, FakeWindow("t", "Gnome-terminal")), scenario,
        )
        assert ok == {"id": 1, "method": "getWinClass", "result": "Gnome-terminal"}
        assert unknown["id"] == 2
        assert "error" in unknown and "result" not in unknown
        assert bad == {"error": "Invalid JSON"}
        assert "error" in missing
