"""Utilities to execute coroutines on the main asyncio loop from sync contexts.

Flask views and Socket.IO handlers are synchronous; server actions are
coroutines bound to the loop owning the database pool. The loop runs in a
dedicated daemon thread and views hand coroutines to it.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Awaitable, Optional, TypeVar


_loop: Optional[asyncio.AbstractEventLoop] = None
_thread: Optional[threading.Thread] = None
T = TypeVar("T")


def set_main_loop(loop: Optional[asyncio.AbstractEventLoop]) -> None:
    global _loop
    _loop = loop


def start_background_loop() -> asyncio.AbstractEventLoop:
    """Start a new event loop in a daemon thread and make it the main loop."""
    global _thread
    loop = asyncio.new_event_loop()
    ready = threading.Event()

    def _run() -> None:
        asyncio.set_event_loop(loop)
        loop.call_soon(ready.set)
        loop.run_forever()

    _thread = threading.Thread(target=_run, name="asyncio-main-loop", daemon=True)
    _thread.start()
    ready.wait()
    set_main_loop(loop)
    return loop


def stop_background_loop() -> None:
    """Stop the loop started by :func:`start_background_loop`."""
    global _thread
    loop = _loop
    if loop is None:
        return
    loop.call_soon_threadsafe(loop.stop)
    if _thread is not None:
        _thread.join(timeout=5)
        _thread = None
    loop.close()
    set_main_loop(None)


def run_coroutine_sync(coro: Awaitable[T], timeout: Optional[float] = None) -> T:
    if _loop is None:
        raise RuntimeError("Asyncio loop is not initialized")
    future = asyncio.run_coroutine_threadsafe(coro, _loop)
    return future.result(timeout)
