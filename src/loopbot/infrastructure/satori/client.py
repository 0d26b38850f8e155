"""Satori websocket event client."""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import aiohttp

from loopbot.config import SatoriConfig
from loopbot.domain.entities import IncomingEvent, ReadyEvent
from loopbot.infrastructure.satori.event_adapter import (
    to_incoming_event,
    to_ready_event,
)

logger = logging.getLogger(__name__)

# Satori signal opcodes
OP_EVENT = 0
OP_PING = 1
OP_PONG = 2
OP_IDENTIFY = 3
OP_READY = 4

EventHandler = Callable[[IncomingEvent], Awaitable[None]]
ReadyHandler = Callable[[ReadyEvent], Awaitable[None]]


class SatoriClient:
    """Receives events from a Satori server over a websocket.

    Handlers run as separate tasks so a long reasoning cycle never stalls
    the receive loop. A dropped connection is re-established after
    ``reconnect_delay`` seconds until stop() is called.
    """

    def __init__(
        self,
        config: SatoriConfig,
        *,
        heartbeat_interval: float = 10.0,
        reconnect_delay: float = 5.0,
    ) -> None:
        """Initialize the client.

        Args:
            config: Satori connection configuration.
            heartbeat_interval: Seconds between PING signals.
            reconnect_delay: Seconds to wait before reconnecting.
        """
        self._config = config
        self._heartbeat_interval = heartbeat_interval
        self._reconnect_delay = reconnect_delay
        self._handlers: dict[str, list[EventHandler]] = {}
        self._ready_handlers: list[ReadyHandler] = []
        self._tasks: set[asyncio.Task[None]] = set()
        self._stop_event = asyncio.Event()
        self._ws: aiohttp.ClientWebSocketResponse | None = None
        self._last_sn: int | None = None

    def on(self, event_type: str, handler: EventHandler) -> None:
        """Register a handler for an event type (e.g. "message-created")."""
        self._handlers.setdefault(event_type, []).append(handler)

    def on_ready(self, handler: ReadyHandler) -> None:
        """Register a handler for the READY signal."""
        self._ready_handlers.append(handler)

    @property
    def is_connected(self) -> bool:
        """Check if the websocket is open."""
        return self._ws is not None and not self._ws.closed

    async def start(self) -> None:
        """Connect and receive events until stop() is called."""
        self._stop_event.clear()
        async with aiohttp.ClientSession() as session:
            while not self._stop_event.is_set():
                try:
                    await self._connect_and_receive(session)
                except asyncio.CancelledError:
                    raise
                except Exception:
                    logger.exception("Satori connection error")

                if self._stop_event.is_set():
                    break
                logger.info("Reconnecting in %.1fs...", self._reconnect_delay)
                try:
                    await asyncio.wait_for(
                        self._stop_event.wait(), timeout=self._reconnect_delay
                    )
                except asyncio.TimeoutError:
                    pass

        logger.info("SatoriClient stopped")

    async def stop(self) -> None:
        """Close the connection and stop reconnecting."""
        logger.info("Stopping SatoriClient")
        self._stop_event.set()
        if self._ws is not None and not self._ws.closed:
            await self._ws.close()
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def _connect_and_receive(self, session: aiohttp.ClientSession) -> None:
        logger.info("Connecting to Satori: %s", self._config.ws_url)
        async with session.ws_connect(self._config.ws_url) as ws:
            self._ws = ws
            await self._identify(ws)
            heartbeat = asyncio.create_task(self._heartbeat(ws))
            try:
                async for msg in ws:
                    if msg.type == aiohttp.WSMsgType.TEXT:
                        self._handle_signal(msg.data)
                    elif msg.type == aiohttp.WSMsgType.ERROR:
                        logger.error("Satori websocket error: %s", ws.exception())
                        break
            finally:
                heartbeat.cancel()
                self._ws = None
        logger.warning("Satori websocket closed")

    async def _identify(self, ws: aiohttp.ClientWebSocketResponse) -> None:
        body: dict[str, Any] = {}
        if self._config.token:
            body["token"] = self._config.token
        if self._last_sn is not None:
            body["sn"] = self._last_sn
        await ws.send_json({"op": OP_IDENTIFY, "body": body})

    async def _heartbeat(self, ws: aiohttp.ClientWebSocketResponse) -> None:
        while not ws.closed:
            await asyncio.sleep(self._heartbeat_interval)
            if ws.closed:
                break
            try:
                await ws.send_json({"op": OP_PING})
            except ConnectionResetError:
                logger.debug("Heartbeat stopped: connection reset")
                break

    def _handle_signal(self, data: str) -> None:
        try:
            signal = json.loads(data)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed Satori signal: %s", data[:200])
            return

        op = signal.get("op")
        body = signal.get("body") or {}
        if op == OP_READY:
            ready = to_ready_event(body)
            logger.info("Satori ready: %d login(s)", len(ready.logins))
            for handler in self._ready_handlers:
                self._spawn(handler(ready))
        elif op == OP_EVENT:
            self._dispatch_event(body)
        elif op == OP_PONG:
            logger.debug("Received PONG")

    def _dispatch_event(self, body: dict[str, Any]) -> None:
        sn = body.get("sn", body.get("id"))
        if isinstance(sn, int):
            self._last_sn = sn

        event_type = body.get("type", "")
        handlers = self._handlers.get(event_type)
        if not handlers:
            logger.debug("No handler for Satori event: %s", event_type)
            return

        event = to_incoming_event(body)
        if event is None:
            logger.debug("Ignoring %s event without channel", event_type)
            return

        for handler in handlers:
            self._spawn(handler(event))

    def _spawn(self, coro: Awaitable[None]) -> None:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_handler_done)

    def _on_handler_done(self, task: "asyncio.Future[None]") -> None:
        self._tasks.discard(task)  # type: ignore[arg-type]
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Satori event handler failed", exc_info=exc)
