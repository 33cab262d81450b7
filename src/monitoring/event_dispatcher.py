"""
Turns transaction log records into handler callbacks.

Per transaction each event kind is delivered at most once: the newest
decodable payload of that kind. Scanning stops as soon as every kind of
interest has been delivered.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from time import monotonic

from solders.signature import Signature

from core.codec import LogScratchBuffer
from core.errors import EventDecodeError, SignatureParseError
from interfaces.events import KIND_BY_DISCRIMINATOR, EventKind
from monitoring.handler import EventContext, EventFilter, EventHandler
from monitoring.program_logs import iter_program_data
from platforms import decode_event
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class TransactionLogs:
    """One transaction's log messages as delivered by the stream."""

    slot: int
    signature: bytes | str
    logs: Sequence[str] = field(default_factory=list)
    tx_index: int = 0


def parse_signature(raw: bytes | str | Signature) -> Signature:
    """Accept raw 64 bytes or base58 text.

    Raises:
        SignatureParseError: if the value is not a valid signature
    """
    if isinstance(raw, Signature):
        return raw
    try:
        if isinstance(raw, str):
            return Signature.from_string(raw)
        return Signature.from_bytes(raw)
    except (ValueError, TypeError) as e:
        raise SignatureParseError(f"Invalid transaction signature: {e}") from e


class EventDispatcher:
    """Decodes events from log lines and calls the matching handler method.

    Owns a scratch buffer, so each concurrently running subscription needs
    its own dispatcher. The handler may be shared.
    """

    def __init__(
        self,
        handler: EventHandler,
        kinds: Iterable[EventKind] | EventFilter | None = None,
    ):
        self.handler = handler
        if kinds is None:
            self.kinds = frozenset(EventKind)
        elif isinstance(kinds, EventFilter):
            self.kinds = kinds.enabled_kinds()
        else:
            self.kinds = frozenset(kinds)
        self._buffer = LogScratchBuffer()

    def dispatch(self, logs: Sequence[str], context: EventContext) -> set[EventKind]:
        """Deliver the newest event of each kind of interest found in ``logs``.

        Handler exceptions propagate to the caller.

        Returns:
            The kinds that were delivered
        """
        delivered: set[EventKind] = set()
        if not self.kinds:
            return delivered

        for discriminator, body in iter_program_data(logs, self._buffer):
            kind = KIND_BY_DISCRIMINATOR.get(discriminator)
            if kind is None or kind not in self.kinds or kind in delivered:
                continue
            try:
                event = decode_event(kind, body)
            except EventDecodeError as e:
                logger.debug(f"Skipping undecodable {kind.label} event: {e}")
                continue
            ctx = replace(context, elapsed=monotonic() - context.timestamp)
            getattr(self.handler, kind.handler_method)(event, ctx)
            delivered.add(kind)
            if delivered == self.kinds:
                break
        return delivered

    def process(self, record: TransactionLogs) -> set[EventKind]:
        """Dispatch one transaction record.

        Raises:
            SignatureParseError: if the record's signature is malformed
        """
        if not record.logs:
            return set()
        context = EventContext(
            slot=record.slot,
            tx_index=record.tx_index,
            signature=parse_signature(record.signature),
            timestamp=monotonic(),
        )
        return self.dispatch(record.logs, context)
