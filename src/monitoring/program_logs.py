"""
Extraction of Anchor event payloads from transaction log lines.

Events are emitted as ``Program data: <base64>`` lines where the decoded
payload is an 8-byte discriminator followed by the Borsh body. Lines are
walked newest-first so the most recent event of a kind wins.
"""

from collections.abc import Iterator, Sequence

from core.codec import LogScratchBuffer
from core.errors import EventDecodeError
from interfaces.events import KIND_BY_DISCRIMINATOR, Event, EventKind
from platforms import decode_event
from utils.logger import get_logger

logger = get_logger(__name__)

PROGRAM_DATA_PREFIX = "Program data: "
DISCRIMINATOR_SIZE = 8


def iter_program_data(
    logs: Sequence[str], buffer: LogScratchBuffer | None = None
) -> Iterator[tuple[bytes, bytes]]:
    """Yield ``(discriminator, body)`` for each event line, last line first.

    Lines with bad base64 or fewer than 8 decoded bytes are skipped.
    """
    if buffer is None:
        buffer = LogScratchBuffer()
    for line in reversed(logs):
        if not line.startswith(PROGRAM_DATA_PREFIX):
            continue
        if not buffer.decode(line[len(PROGRAM_DATA_PREFIX):]):
            continue
        if len(buffer) < DISCRIMINATOR_SIZE:
            continue
        yield buffer.head(DISCRIMINATOR_SIZE), buffer.tail(DISCRIMINATOR_SIZE)


def iter_events(
    logs: Sequence[str],
    kinds: frozenset[EventKind] | None = None,
    buffer: LogScratchBuffer | None = None,
) -> Iterator[tuple[EventKind, Event]]:
    """Yield every decodable event, newest first, optionally limited to ``kinds``."""
    for discriminator, body in iter_program_data(logs, buffer):
        kind = KIND_BY_DISCRIMINATOR.get(discriminator)
        if kind is None or (kinds is not None and kind not in kinds):
            continue
        try:
            event = decode_event(kind, body)
        except EventDecodeError as e:
            logger.debug(f"Skipping undecodable {kind.label} event: {e}")
            continue
        yield kind, event


def find_event(
    logs: Sequence[str], kind: EventKind, buffer: LogScratchBuffer | None = None
) -> Event | None:
    """Return the newest decodable event of ``kind`` in ``logs``, or None."""
    for _, event in iter_events(logs, frozenset([kind]), buffer):
        return event
    return None
