"""
Live program log stream over Solana's websocket ``logsSubscribe``.

One listener watches one program id. Each notification becomes a
``TransactionLogs`` record that is handed to the listener's own
``EventDispatcher``. Failed transactions are skipped. Reconnecting is left
to the caller.
"""

import asyncio
import json
from typing import Any

import websockets
from solders.pubkey import Pubkey
from websockets.exceptions import ConnectionClosed, WebSocketException

from config_loader import StreamConfig
from core.errors import (
    ConnectionFailedError,
    ConnectionTimeoutError,
    SubscribeError,
)
from interfaces.events import EventKind
from monitoring.event_dispatcher import EventDispatcher, TransactionLogs
from monitoring.handler import EventHandler
from utils.logger import get_logger

logger = get_logger(__name__)


class ProgramLogsListener:
    """Subscribes to the logs of one program and dispatches decoded events."""

    def __init__(
        self,
        program_id: Pubkey | str,
        handler: EventHandler,
        config: StreamConfig | None = None,
    ):
        """Initialize the listener.

        Args:
            program_id: Program whose logs to subscribe to
            handler: Receives decoded events; may be shared between listeners
            config: Endpoint, timeouts and event filter (defaults if omitted)
        """
        self.config = config or StreamConfig()
        self.program_id = str(program_id)
        self.dispatcher = EventDispatcher(handler, self.config.event_filter)
        self.subscription_id: int | None = None
        self.transactions_seen = 0
        self.failed_skipped = 0

    def build_subscribe_request(self) -> str:
        return json.dumps({
            "jsonrpc": "2.0",
            "id": 1,
            "method": "logsSubscribe",
            "params": [
                {"mentions": [self.program_id]},
                {"commitment": self.config.commitment},
            ],
        })

    async def _connect(self):
        try:
            return await websockets.connect(
                self.config.wss_endpoint,
                open_timeout=self.config.connect_timeout,
                ping_interval=self.config.ping_interval if self.config.keep_alive else None,
                max_size=None,
            )
        except asyncio.TimeoutError as e:
            raise ConnectionTimeoutError(
                f"Connect to {self.config.wss_endpoint} timed out after {self.config.connect_timeout}s"
            ) from e
        except (OSError, WebSocketException) as e:
            raise ConnectionFailedError(f"Connect to {self.config.wss_endpoint} failed: {e}") from e

    async def _recv(self, websocket) -> str:
        try:
            return await asyncio.wait_for(websocket.recv(), timeout=self.config.timeout)
        except asyncio.TimeoutError as e:
            raise SubscribeError(f"No message for {self.config.timeout}s") from e
        except ConnectionClosed as e:
            raise SubscribeError(f"Stream closed: {e}") from e

    async def _subscribe(self, websocket) -> None:
        await websocket.send(self.build_subscribe_request())
        response = json.loads(await self._recv(websocket))
        if "error" in response:
            raise SubscribeError(f"logsSubscribe rejected: {response['error']}")
        self.subscription_id = response.get("result")
        logger.info(f"Subscribed to logs for {self.program_id} (subscription {self.subscription_id})")

    def parse_notification(self, message: str | dict[str, Any]) -> TransactionLogs | None:
        """Convert a ``logsNotification`` into a record.

        Returns:
            None for other messages and for failed transactions
        """
        try:
            data = json.loads(message) if isinstance(message, str) else message
            if data.get("method") != "logsNotification":
                return None
            result = data["params"]["result"]
            value = result["value"]
            slot = result["context"]["slot"]
            signature = value["signature"]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise SubscribeError(f"Malformed notification: {e}") from e

        if value.get("err") is not None:
            self.failed_skipped += 1
            return None

        return TransactionLogs(slot=slot, signature=signature, logs=value.get("logs") or [])

    def handle_message(self, message: str | dict[str, Any]) -> set[EventKind]:
        """Parse one websocket message and dispatch its events.

        Raises:
            SignatureParseError: if the notification carries a malformed signature
        """
        record = self.parse_notification(message)
        if record is None:
            return set()
        self.transactions_seen += 1
        return self.dispatcher.process(record)

    async def subscribe(self) -> None:
        """Run the subscription until it fails or the task is cancelled.

        Raises:
            ConnectionTimeoutError: connect exceeded ``connect_timeout``
            ConnectionFailedError: connect or handshake failed
            SubscribeError: subscription rejected, stream closed or went silent
            SignatureParseError: a notification had a malformed signature
        """
        logger.info(f"Connecting to {self.config.wss_endpoint} for {self.program_id}")
        websocket = await self._connect()
        try:
            await self._subscribe(websocket)
            while True:
                self.handle_message(await self._recv(websocket))
        finally:
            await websocket.close()
            logger.info(
                f"Log stream for {self.program_id} stopped after "
                f"{self.transactions_seen} transactions ({self.failed_skipped} failed skipped)"
            )
