#!/usr/bin/env python3
"""
Active Window Details server - exports the window/process operations over HTTP + WebSocket.

Each operation takes no arguments and returns one string:
  - GET|POST /org/gnome/Shell/Extensions/ActiveWindowDetails/<method>  -> text/plain result
  - GET /                                                           -> introspection (method list)
  - WebSocket /ws: send {"method": "getAppContext", "id": 1}, receive {"id", "method", "result"}

Usage:
  python server_main.py                  # 127.0.0.1:8790
  python server_main.py --port 9000
  python server_main.py --host 0.0.0.0   # expose to other machines (no auth!)
"""

import argparse
import asyncio
import json
import logging
import signal
import sys
from pathlib import Path
from typing import Callable, Optional

sys.path.insert(0, str(Path(__file__).resolve().parent))

from aiohttp import WSMsgType, web

import config
from window_service import OPERATIONS, WindowDetailsService, exported_operations

logger = logging.getLogger(__name__)


class OperationRegistry:
    """
    The exported operation surface. export() publishes a service's operations,
    unexport() withdraws them; between the two every call is served, outside it calls get 503.
    """

    def __init__(self, interface: str = config.DBUS_INTERFACE, object_path: str = config.OBJECT_PATH):
        self.interface = interface
        self.object_path = object_path.rstrip("/")
        self._operations: dict[str, Callable[[], str]] = {}

    @property
    def exported(self) -> bool:
        return bool(self._operations)

    def export(self, service: WindowDetailsService):
        if not self._operations:
            self._operations = exported_operations(service)
            logger.info("Exported %d operations at %s", len(self._operations), self.object_path)

    def unexport(self):
        if self._operations:
            self._operations = {}
            logger.info("Unexported %s", self.object_path)

    def names(self) -> list[str]:
        return list(OPERATIONS)

    def get(self, name: str) -> Optional[Callable[[], str]]:
        return self._operations.get(name)

    def introspect(self) -> dict:
        return {
            "interface": self.interface,
            "objectPath": self.object_path,
            "exported": self.exported,
            "methods": self.names(),
        }


REGISTRY_KEY = web.AppKey("registry", OperationRegistry)


class OperationUnavailable(Exception):
    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


async def _invoke(registry: OperationRegistry, name: str) -> str:
    """Run an operation off the event loop (xprop / process record reads block briefly)."""
    if name not in OPERATIONS:
        raise OperationUnavailable(f"Unknown method: {name}", 404)
    op = registry.get(name)
    if op is None:
        raise OperationUnavailable("Operations are not exported", 503)
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, op)


async def http_introspect(req: web.Request) -> web.Response:
    return web.json_response(req.app[REGISTRY_KEY].introspect())


async def http_call(req: web.Request) -> web.Response:
    name = req.match_info["method"]
    try:
        result = await _invoke(req.app[REGISTRY_KEY], name)
    except OperationUnavailable as e:
        return web.json_response({"error": str(e)}, status=e.status)
    return web.Response(text=result, content_type="text/plain")


async def websocket_handler(req: web.Request) -> web.WebSocketResponse:
    """Call operations by name over one connection."""
    ws = web.WebSocketResponse()
    await ws.prepare(req)
    registry = req.app[REGISTRY_KEY]
    logger.debug("WebSocket client connected")
    try:
        async for msg in ws:
            if msg.type != WSMsgType.TEXT:
                continue
            try:
                data = json.loads(msg.data)
            except json.JSONDecodeError:
                await ws.send_json({"error": "Invalid JSON"})
                continue
            if not isinstance(data, dict) or not isinstance(data.get("method"), str):
                await ws.send_json({"error": "Expected {\"method\": <name>}"})
                continue
            name = data["method"]
            reply = {"id": data.get("id"), "method": name}
            try:
                reply["result"] = await _invoke(registry, name)
            except OperationUnavailable as e:
                reply["error"] = str(e)
            await ws.send_json(reply)
    finally:
        logger.debug("WebSocket client disconnected")
    return ws


def create_app(registry: OperationRegistry) -> web.Application:
    app = web.Application()
    app[REGISTRY_KEY] = registry
    app.router.add_get("/", http_introspect)
    app.router.add_get("/ws", websocket_handler)
    app.router.add_get(registry.object_path + "/{method}", http_call)
    app.router.add_post(registry.object_path + "/{method}", http_call)
    return app


def run_server(host: str, port: int):
    """Export the service and serve until SIGINT / SIGTERM."""
    registry = OperationRegistry()
    registry.export(WindowDetailsService())
    app = create_app(registry)

    async def main_loop():
        stop = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, stop.set)

        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, host, port)
        await site.start()
        print(f"Active Window Details on {host}:{port}")
        print(f"  GET  /                          - list of methods")
        print(f"  GET  {registry.object_path}/<method>")
        print(f"  WS   /ws                        - {{\"method\": <name>}} -> {{\"result\": ...}}\n")
        try:
            await stop.wait()
        finally:
            registry.unexport()
            await runner.cleanup()

    try:
        asyncio.run(main_loop())
    except KeyboardInterrupt:
        pass
    print("\nShutting down.")


def main():
    p = argparse.ArgumentParser(description="Export focused window / process details over HTTP + WebSocket")
    p.add_argument("--host", default=config.SERVER_HOST, help="Bind address")
    p.add_argument("--port", type=int, default=config.SERVER_PORT, help="Port for HTTP + WebSocket")
    p.add_argument("--log-level", default=config.LOG_LEVEL, help="DEBUG, INFO, WARNING, ...")
    args = p.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_server(args.host, args.port)


if __name__ == "__main__":
    main()
    sys.exit(0)
