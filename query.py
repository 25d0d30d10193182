#!/usr/bin/env python3
"""
Call Active Window Details operations from the command line.

Usage:
  python query.py getAppContext                 # HTTP, raw result
  python query.py getAllWindowData --pretty     # pretty-print JSON results
  python query.py getWinClass --ws              # over the WebSocket instead of HTTP
  python query.py --list                        # methods the server exports
  python query.py --all                         # call every method, with timings
  python query.py --url http://HOST:8790 getWinFocusData
"""

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Tuple

sys.path.insert(0, str(Path(__file__).resolve().parent))

import requests
import websocket

import config


class QueryError(Exception):
    pass


def call_http(base: str, method: str, timeout: float = 5.0) -> str:
    """GET <base><object path>/<method> -> result string."""
    url = f"{base.rstrip('/')}{config.OBJECT_PATH}/{method}"
    try:
        r = requests.get(url, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise QueryError(f"Connection failed: {e}") from e
    if r.status_code != 200:
        try:
            detail = r.json().get("error", r.text)
        except ValueError:
            detail = r.text
        raise QueryError(f"{method}: HTTP {r.status_code}: {detail[:200]}")
    return r.text


def list_methods(base: str, timeout: float = 5.0) -> list[str]:
    try:
        r = requests.get(f"{base.rstrip('/')}/", timeout=timeout)
        r.raise_for_status()
        return r.json().get("methods", [])
    except (requests.exceptions.RequestException, ValueError) as e:
        raise QueryError(f"Introspection failed: {e}") from e


def call_ws(ws_url: str, method: str, timeout: float = 5.0) -> str:
    """One request/reply over the WebSocket endpoint."""
    try:
        ws = websocket.create_connection(ws_url, timeout=timeout)
    except (websocket.WebSocketException, OSError) as e:
        raise QueryError(f"WebSocket connection failed: {e}") from e
    try:
        ws.send(json.dumps({"method": method, "id": 1}))
        reply = json.loads(ws.recv())
    except (websocket.WebSocketException, OSError, json.JSONDecodeError) as e:
        raise QueryError(f"WebSocket call failed: {e}") from e
    finally:
        ws.close()
    if "error" in reply:
        raise QueryError(f"{method}: {reply['error']}")
    return reply.get("result", "")


def format_result(result: str, pretty: bool) -> str:
    if not pretty or not result:
        return result
    try:
        return json.dumps(json.loads(result), indent=2, ensure_ascii=False)
    except json.JSONDecodeError:
        return result


def timed(fn, *args) -> Tuple[str, float]:
    t0 = time.perf_counter()
    out = fn(*args)
    return out, (time.perf_counter() - t0) * 1000


def main():
    p = argparse.ArgumentParser(description="Query the focused window details service")
    p.add_argument("method", nargs="?", help="Operation name, e.g. getAppContext")
    p.add_argument("--url", default=config.SERVER_URL, help="Server base URL (HTTP)")
    p.add_argument("--ws-url", default=config.WS_URL, help="Server WebSocket URL")
    p.add_argument("--ws", action="store_true", help="Call over WebSocket instead of HTTP")
    p.add_argument("--pretty", action="store_true", help="Pretty-print JSON results")
    p.add_argument("--list", action="store_true", help="List exported methods")
    p.add_argument("--all", action="store_true", help="Call every exported method")
    args = p.parse_args()

    def call(method: str) -> str:
        if args.ws:
            return call_ws(args.ws_url, method)
        return call_http(args.url, method)

    try:
        if args.list:
            for name in list_methods(args.url):
                print(name)
            return 0
        if args.all:
            failed = 0
            for name in list_methods(args.url):
                try:
                    out, ms = timed(call, name)
                    print(f"  {name} ({ms:.0f}ms): {format_result(out, args.pretty) or '(empty)'}")
                except QueryError as e:
                    failed += 1
                    print(f"  {name}: FAILED - {e}")
            return 1 if failed else 0
        if not args.method:
            p.error("method required (or --list / --all)")
        print(format_result(call(args.method), args.pretty))
        return 0
    except QueryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
