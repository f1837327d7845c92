"""Shared fixtures: a local HTTP server that answers one request very slowly."""
import socket
import threading
import time

import pytest

SLOW_HEADERS = (
    b"HTTP/1.1 200 OK\r\n"
    b"Content-Type: application/json\r\n"
    + b"X-Padding: " + b"a" * 4000 + b"\r\n"
    + b"Content-Length: 2\r\n\r\n{}"
)
SLOW_BODY_HEAD = b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\nContent-Length: 4000\r\n\r\n"


def _serve_slowly(listener, stop, head, trickle, interval):
    while not stop.is_set():
        try:
            conn, _ = listener.accept()
        except socket.timeout:
            continue
        except OSError:
            return
        with conn:
            try:
                conn.recv(65536)
                conn.sendall(head)
                for i in range(len(trickle)):
                    if stop.is_set():
                        break
                    conn.sendall(trickle[i:i + 1])
                    time.sleep(interval)
            except OSError:
                pass
        return


@pytest.fixture
def slow_server():
    """Start a server that trickles its response one byte per `interval` seconds.

    Yields a function (mode, interval) -> base URL; mode is "headers" to
    trickle the status line and headers, "body" to trickle a 4000-byte body.
    """
    stop = threading.Event()
    listeners = []
    threads = []

    def start(mode="headers", interval=0.02):
        if mode == "headers":
            head, trickle = b"", SLOW_HEADERS
        else:
            head, trickle = SLOW_BODY_HEAD, b"x" * 4000
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        listener.settimeout(0.2)
        thread = threading.Thread(
            target=_serve_slowly,
            args=(listener, stop, head, trickle, interval),
            daemon=True,
        )
        thread.start()
        listeners.append(listener)
        threads.append(thread)
        return f"http://127.0.0.1:{listener.getsockname()[1]}/weather"

    yield start

    stop.set()
    for thread in threads:
        thread.join(timeout=2)
    for listener in listeners:
        listener.close()
