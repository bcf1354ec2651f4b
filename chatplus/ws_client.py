"""A websocket client wrapper that serialises writes and tracks closing."""

from __future__ import annotations

import json
import threading
from typing import Any, Protocol


class ConnectionClosedError(ConnectionError):
    """Raised when using a client whose connection was closed."""

    def __init__(self, message: str = "connection Closed") -> None:
        super().__init__(message)


class Connection(Protocol):
    def send(self, data: bytes | str) -> Any: ...

    def receive(self) -> bytes | str: ...

    def close(self) -> Any: ...


class WsClient:
    """Wraps a websocket connection; writes are sent as binary frames."""

    def __init__(self, conn: Connection) -> None:
        self.conn = conn
        self.closed = False
        self._lock = threading.Lock()

    def send(self, message: bytes | str) -> None:
        data = message.encode("utf-8") if isinstance(message, str) else bytes(message)
        with self._lock:
            if self.closed:
                raise ConnectionClosedError()
            self.conn.send(data)

    def send_json(self, value: Any) -> None:
        text = json.dumps(value, ensure_ascii=False)
        with self._lock:
            if self.closed:
                raise ConnectionClosedError()
            self.conn.send(text)

    def receive(self) -> bytes | str:
        if self.closed:
            raise ConnectionClosedError()
        return self.conn.receive()

    def close(self) -> None:
        with self._lock:
            if self.closed:
                return
            try:
                self.conn.close()
            except Exception:
                pass
            self.closed = True