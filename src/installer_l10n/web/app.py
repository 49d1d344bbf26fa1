"""aiohttp application exposing the localization manager.

Routes (all JSON, encoded with orjson):

    GET        /api/l10n/locales
    GET        /api/l10n/timezones
    GET        /api/l10n/keymaps
    GET        /api/l10n/config
    PUT/PATCH  /api/l10n/config
    GET        /api/ws              (WebSocket stream of change events)

Manager calls block on its lock and, for keymap changes, on external
commands, so handlers run them in the loop's default thread pool.
WebSocket forwarders never occupy that pool: the publishing thread wakes
them on the loop with ``call_soon_threadsafe``.
"""

from __future__ import annotations

import asyncio
import contextlib
import weakref
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import orjson
from aiohttp import WSMsgType, web

from installer_l10n.core.events import BroadcastChannel, EventReceiver
from installer_l10n.core.manager import L10nManager
from installer_l10n.domain.types import UpdateRequest
from installer_l10n.exceptions import (
    CommitError,
    InvalidRequestError,
    L10nError,
    ValidationFailure,
)
from installer_l10n.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

MANAGER_KEY = web.AppKey("manager", L10nManager)
CHANNEL_KEY = web.AppKey("channel", BroadcastChannel)
WEBSOCKETS_KEY = web.AppKey("websockets", weakref.WeakSet)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def _json(data: Any, status: int = 200) -> web.Response:  # noqa: ANN401
    return web.Response(
        body=orjson.dumps(data),
        status=status,
        content_type="application/json",
    )


async def _in_executor(func: Callable[..., T], *args: Any) -> T:  # noqa: ANN401
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func, *args)


def _error_body(error: L10nError) -> dict[str, Any]:
    return {"error": str(error), "field": error.field, "value": error.value}


@web.middleware
async def error_middleware(
    request: web.Request, handler: Handler
) -> web.StreamResponse:
    """Map validation failures to 400 and commit failures to 500."""
    try:
        return await handler(request)
    except ValidationFailure as e:
        logger.debug("%s %s rejected: %s", request.method, request.path, e)
        return _json(_error_body(e), status=400)
    except CommitError as e:
        return _json(_error_body(e), status=500)


async def list_locales(request: web.Request) -> web.Response:
    entries = await _in_executor(request.app[MANAGER_KEY].locales)
    return _json([entry.to_dict() for entry in entries])


async def list_timezones(request: web.Request) -> web.Response:
    entries = await _in_executor(request.app[MANAGER_KEY].timezones)
    return _json([entry.to_dict() for entry in entries])


async def list_keymaps(request: web.Request) -> web.Response:
    entries = await _in_executor(request.app[MANAGER_KEY].keymaps)
    return _json([entry.to_dict() for entry in entries])


async def get_config(request: web.Request) -> web.Response:
    config = await _in_executor(request.app[MANAGER_KEY].get_config)
    return _json(config)


async def set_config(request: web.Request) -> web.Response:
    """Apply a partial update; the body is a JSON object with optional keys."""
    body = await request.read()
    try:
        data = orjson.loads(body)
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON body: {e}"
        raise InvalidRequestError(msg) from e

    update = UpdateRequest.from_mapping(data)
    await _in_executor(request.app[MANAGER_KEY].apply, update)
    return _json(None)


async def _forward_events(
    ws: web.WebSocketResponse, receiver: EventReceiver, wake: asyncio.Event
) -> None:
    """Send every event from ``receiver`` to ``ws`` until either closes."""
    reported_lag = 0
    while not ws.closed and not receiver.closed:
        await wake.wait()
        wake.clear()
        while (event := receiver.try_recv()) is not None:
            if receiver.lagged > reported_lag:
                logger.debug(
                    "WebSocket client lagging, %d event(s) dropped",
                    receiver.lagged - reported_lag,
                )
                reported_lag = receiver.lagged
            try:
                await ws.send_str(orjson.dumps(event.to_dict()).decode())
            except ConnectionResetError:
                logger.debug("WebSocket client went away")
                return


def _waker(
    loop: asyncio.AbstractEventLoop, wake: asyncio.Event
) -> Callable[[], None]:
    """Return a callback that sets ``wake`` from any thread."""

    def notify() -> None:
        if not loop.is_closed():
            loop.call_soon_threadsafe(wake.set)

    return notify


async def events_websocket(request: web.Request) -> web.WebSocketResponse:
    """Stream change notifications to a WebSocket client."""
    ws = web.WebSocketResponse(heartbeat=30)
    await ws.prepare(request)
    request.app[WEBSOCKETS_KEY].add(ws)

    wake = asyncio.Event()
    notify = _waker(asyncio.get_running_loop(), wake)
    with request.app[CHANNEL_KEY].subscribe(on_push=notify) as receiver:
        sender = asyncio.create_task(_forward_events(ws, receiver, wake))
        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    logger.debug("WebSocket error: %s", ws.exception())
        finally:
            sender.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sender
    return ws


async def _close_websockets(app: web.Application) -> None:
    for ws in set(app[WEBSOCKETS_KEY]):
        await ws.close(code=1001, message=b"Server shutdown")


def create_app(
    manager: L10nManager, channel: BroadcastChannel
) -> web.Application:
    """Build the aiohttp application.

    Args:
        manager: Localization manager serving the requests
        channel: Channel the manager publishes change events to

    Returns:
        Configured application

    """
    app = web.Application(middlewares=[error_middleware])
    app[MANAGER_KEY] = manager
    app[CHANNEL_KEY] = channel
    app[WEBSOCKETS_KEY] = weakref.WeakSet()
    app.on_shutdown.append(_close_websockets)

    app.router.add_get("/api/l10n/locales", list_locales)
    app.router.add_get("/api/l10n/timezones", list_timezones)
    app.router.add_get("/api/l10n/keymaps", list_keymaps)
    app.router.add_get("/api/l10n/config", get_config)
    app.router.add_put("/api/l10n/config", set_config)
    app.router.add_patch("/api/l10n/config", set_config)
    app.router.add_get("/api/ws", events_websocket)
    return app
