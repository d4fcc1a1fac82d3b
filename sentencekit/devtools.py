"""Drive a Chrome or Edge browser through its DevTools remote debugging protocol."""

from __future__ import annotations

import http.client
import json
import shutil
import subprocess
import threading
import time
from collections.abc import Mapping
from concurrent.futures import Future
from pathlib import Path
from typing import Any

import websocket

from .network import JSONParseError, http_request, parse_json

DEBUGGING_PORT = 9222
CACHE_DIR_NAME = "devtoolscache"
_PORT_FLAG = "--remote-debugging-port="


def chrome_command(chrome_path: str | Path, cache_dir: str | Path, headless: bool = True) -> list[str]:
    """Command line that starts the browser with remote debugging enabled."""
    command = [
        str(chrome_path),
        "--proxy-server=direct://",
        "--disable-extensions",
        "--disable-gpu",
        "--no-first-run",
        f"--user-data-dir={cache_dir}",
        f"{_PORT_FLAG}{DEBUGGING_PORT}",
    ]
    if headless:
        command += ["--window-size=1920,1080", "--headless"]
    else:
        command += ["--window-size=850,900"]
    return command


def find_debugger_url(pages: Any) -> str | None:
    """The WebSocket debugger URL of the first page target in a ``/json/list`` reply."""
    if not isinstance(pages, list):
        return None
    for page in pages:
        if not isinstance(page, dict):
            continue
        url = page.get("webSocketDebuggerUrl")
        if page.get("type") == "page" and isinstance(url, str):
            return url
    return None


class DevTools:
    """A browser process and the WebSocket connection used to send it commands.

    ``status`` follows the connection: ``"Stopped"``, ``"StartupFailed"``,
    ``"ConnectingFailed"``, ``"ConnectedState"`` or ``"UnconnectedState"``.
    """

    def __init__(self, port: int = DEBUGGING_PORT):
        self.port = port
        self.cache_dir = Path.cwd() / CACHE_DIR_NAME
        self.timeout: float | None = None
        self.status = "Stopped"
        self._process: subprocess.Popen | None = None
        self._socket: Any = None
        self._pending: dict[int, Future] = {}
        self._counter = 0
        self._lock = threading.Lock()
        self._send_lock = threading.Lock()

    def start(self, chrome_path: str | Path, headless: bool = True) -> bool:
        """Start the browser and connect to its first page; True once connected."""
        if self._process is not None:
            self.close()

        command = [
            f"{_PORT_FLAG}{self.port}" if arg.startswith(_PORT_FLAG) else arg
            for arg in chrome_command(chrome_path, self.cache_dir, headless)
        ]
        try:
            self._process = subprocess.Popen(command)
        except OSError:
            self.status = "StartupFailed"
            return False

        try:
            response = http_request("127.0.0.1", "POST", "/json/list", port=self.port, secure=False)
            url = find_debugger_url(parse_json(response.text))
        except (OSError, JSONParseError, http.client.HTTPException):
            url = None
        if url is None:
            self.status = "ConnectingFailed"
            return False

        try:
            sock = websocket.create_connection(url)
        except (websocket.WebSocketException, OSError):
            self.status = "ConnectingFailed"
            return False
        with self._lock:
            self._socket = sock
        self.status = "ConnectedState"
        threading.Thread(target=self._receive, args=(sock,), daemon=True).start()
        return True

    def _receive(self, sock: Any) -> None:
        while True:
            try:
                message = sock.recv()
            except (websocket.WebSocketException, OSError):
                break
            if isinstance(message, bytes):
                message = message.decode("utf-8", errors="replace")
            if not message:
                if not getattr(sock, "connected", False):
                    break
                continue
            self._handle(message)
        with self._lock:
            still_current = self._socket is sock
        if still_current:
            self.status = "UnconnectedState"

    def _handle(self, message: str) -> None:
        try:
            result = parse_json(message)
        except JSONParseError:
            return
        if not isinstance(result, dict):
            return
        request_id = result.get("id")
        if not isinstance(request_id, float):
            return
        with self._lock:
            future = self._pending.pop(int(request_id), None)
        if future is not None and not future.done():
            future.set_result(result)

    def close(self) -> None:
        """Disconnect, fail every pending request and stop the browser."""
        with self._lock:
            sock, self._socket = self._socket, None
            pending, self._pending = self._pending, {}
        if sock is not None:
            try:
                sock.close()
            except (websocket.WebSocketException, OSError):
                pass
        for future in pending.values():
            if not future.done():
                future.set_exception(RuntimeError("closed"))

        process, self._process = self._process, None
        if process is not None:
            process.terminate()
            try:
                process.wait(timeout=1)
            except subprocess.TimeoutExpired:
                pass
            for _ in range(19):
                try:
                    shutil.rmtree(self.cache_dir)
                    break
                except FileNotFoundError:
                    break
                except OSError:
                    time.sleep(0.1)
        self.status = "Stopped"

    def connected(self) -> bool:
        """True while the WebSocket connection is open."""
        with self._lock:
            sock = self._socket
        return sock is not None and bool(getattr(sock, "connected", False))

    def send_request(self, method: str, params: str | Mapping[str, Any] | None = None) -> Any:
        """Send one command and wait for its ``result``; ``None`` if it fails."""
        with self._lock:
            self._counter += 1
            request_id = self._counter
            sock = self._socket
        if sock is None or not self.connected():
            return None
        if isinstance(params, str):
            params_text = params
        else:
            params_text = json.dumps(dict(params) if params is not None else {}, ensure_ascii=False)
        message = f'{{"id":{request_id},"method":{json.dumps(method)},"params":{params_text}}}'

        future: Future = Future()
        with self._lock:
            self._pending[request_id] = future
        try:
            with self._send_lock:
                sock.send(message)
            response = future.result(timeout=self.timeout)
        except Exception:
            with self._lock:
                self._pending.pop(request_id, None)
            return None
        if isinstance(response, dict) and "result" in response:
            return response["result"]
        return None