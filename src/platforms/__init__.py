"""
Platform registry.

Maps each platform, and each event kind, to the implementation that
handles it.
"""

from interfaces.core import EventParser, Platform
from interfaces.events import EventKind
from platforms.pumpfun.event_parser import PumpFunEventParser
from platforms.pumpswap.event_parser import PumpSwapEventParser

_EVENT_PARSERS: dict[Platform, EventParser] = {
    Platform.PUMP_FUN: PumpFunEventParser(),
    Platform.PUMP_SWAP: PumpSwapEventParser(),
}


def get_supported_platforms() -> list[Platform]:
    return list(_EVENT_PARSERS)


def get_event_parser(platform: Platform) -> EventParser:
    return _EVENT_PARSERS[platform]


def decode_event(kind: EventKind, body: bytes):
    """Decode an event body with the parser of the kind's platform.

    Raises:
        EventDecodeError: if the body does not match the schema
    """
    return _EVENT_PARSERS[kind.platform].decode_event(kind, body)
