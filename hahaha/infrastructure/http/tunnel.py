"""
One-shot HTTP/1.1 exchange over an already connected socket.

Used to talk to a sidecar's control endpoint through a port-forward
tunnel, where there is no host to connect to: httpcore is handed the
tunnel socket as its network stream.
"""

import socket
from typing import Optional

import httpcore

from hahaha.domain.value_objects import HttpReply


TUNNEL_HOST = "127.0.0.1"

# Errors httpcore raises for a broken exchange
HTTP_EXCHANGE_ERRORS = (
    httpcore.NetworkError,
    httpcore.TimeoutException,
    httpcore.ProtocolError,
)


class SocketStream(httpcore.NetworkStream):
    """httpcore network stream on top of a plain (already connected) socket."""

    def __init__(self, sock: socket.socket):
        self._sock = sock

    def read(self, max_bytes: int, timeout: Optional[float] = None) -> bytes:
        try:
            self._sock.settimeout(timeout)
            return self._sock.recv(max_bytes)
        except socket.timeout as exc:
            raise httpcore.ReadTimeout(exc) from exc
        except OSError as exc:
            raise httpcore.ReadError(exc) from exc

    def write(self, buffer: bytes, timeout: Optional[float] = None) -> None:
        if not buffer:
            return
        try:
            self._sock.settimeout(timeout)
            self._sock.sendall(buffer)
        except socket.timeout as exc:
            raise httpcore.WriteTimeout(exc) from exc
        except OSError as exc:
            raise httpcore.WriteError(exc) from exc

    def close(self) -> None:
        self._sock.close()


def send_request(
    sock: socket.socket,
    port: int,
    method: str,
    path: str,
    timeout: Optional[float] = None,
) -> HttpReply:
    """
    Send a single request over ``sock`` and read the full response.

    The request carries ``Connection: close`` and ``Host: 127.0.0.1`` and an
    empty body. The socket is closed when the exchange is over.

    Args:
        sock: Connected socket, e.g. the local end of a port-forward
        port: Remote port, only used to build the request URL
        method: HTTP method
        path: Request target
        timeout: Read/write timeout in seconds

    Returns:
        HttpReply with the status code and decoded body

    Raises:
        httpcore.NetworkError, httpcore.TimeoutException, httpcore.ProtocolError
    """
    origin = httpcore.Origin(scheme=b"http", host=TUNNEL_HOST.encode("ascii"), port=port)
    connection = httpcore.HTTP11Connection(origin=origin, stream=SocketStream(sock))
    with connection:
        response = connection.request(
            method,
            f"http://{TUNNEL_HOST}:{port}{path}",
            headers={"Host": TUNNEL_HOST, "Connection": "close"},
            content=b"",
            extensions={"timeout": {"read": timeout, "write": timeout}},
        )
    return HttpReply(
        status=response.status,
        body=response.content.decode("utf-8", errors="replace"),
    )
