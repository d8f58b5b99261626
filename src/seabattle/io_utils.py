# io_utils.py
"""
Low-level connection helpers used by the CLI and TurnSession
–––––––––––––––––––––––––––––––––––––––––––––––––––––––––––––
• listen_and_accept() – host role: accept exactly one peer on a port
• connect()           – joining role: resolve host/port and connect
• open_streams()      – socket → (buffered reader, buffered writer)
• read_exact()        – read n bytes or raise IncompleteError
• write_exact()       – write + flush, False if the peer went away
"""

from __future__ import annotations

import logging
import socket
from typing import BinaryIO, Tuple

from . import config as _cfg
from .protocol import IncompleteError

logger = logging.getLogger("seabattle.io_utils")


def listen_and_accept(port: int, bind: str = _cfg.BIND_ADDRESS) -> socket.socket:
    """Listen on *bind*:*port*, accept a single peer and close the listener."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as srv:
        srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        srv.bind((bind, port))
        srv.listen(1)
        logger.info("Waiting for an opponent on %s:%d", bind, port)
        conn, addr = srv.accept()
    logger.info("Opponent connected from %s:%d", addr[0], addr[1])
    return conn


def connect(host: str, port: int) -> socket.socket:
    """Resolve *host* and open a TCP connection to it."""
    logger.info("Connecting to %s:%d", host, port)
    sock = socket.create_connection((host, port))
    logger.info("Connected to %s:%d", host, port)
    return sock


def open_streams(sock: socket.socket) -> Tuple[BinaryIO, BinaryIO]:
    """Wrap *sock* in a buffered binary reader and an unbuffered writer.

    Every message is flushed as soon as it is written, so the writer keeps no
    buffer that closing it could try to flush to a dead peer.
    """
    return sock.makefile("rb"), sock.makefile("wb", buffering=0)


def read_exact(r: BinaryIO, n: int) -> bytes:
    """Blocking read of exactly *n* bytes from *r*."""
    data = r.read(n)
    if data is None or len(data) < n:
        got = 0 if data is None else len(data)
        logger.debug("read_exact() short read – wanted=%d got=%d", n, got)
        raise IncompleteError(f"stream closed after {got} of {n} bytes")
    logger.debug("read_exact() – %r", data)
    return data


def write_exact(w: BinaryIO, data: bytes) -> bool:
    """Write all of *data* to *w* and flush; return False if the peer is gone."""
    logger.debug("write_exact() – %r", data)
    view = memoryview(data)
    try:
        # Raw socket writers may accept only part of the data
        while view:
            written = w.write(view)
            view = view[len(view) if written is None else written:]
        w.flush()
    except (BrokenPipeError, ConnectionResetError, ConnectionAbortedError) as exc:
        logger.debug("write_exact() failed – %s", exc)
        return False
    return True
