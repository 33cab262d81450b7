"""
Event handler interface and the stock logging handlers.

Subclass ``EventHandler`` and override only the callbacks you care about;
the rest are no-ops. One handler instance may be shared by several
subscriptions running concurrently on the same event loop.
"""

from dataclasses import dataclass, fields

from solders.signature import Signature

from interfaces.core import Platform
from interfaces.events import (
    BuyEvent,
    CompleteEvent,
    CreateEvent,
    CreatePoolEvent,
    CreateV2Event,
    Event,
    EventKind,
    SellEvent,
    TradeEvent,
)
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class EventContext:
    """Where and when an event was seen.

    ``timestamp`` is the monotonic clock reading taken when the transaction
    was picked up; ``elapsed`` is the time from then until this event was
    handed to the handler.
    """

    slot: int
    tx_index: int
    signature: Signature
    timestamp: float
    elapsed: float = 0.0


class EventHandler:
    """Base handler. Every callback defaults to doing nothing."""

    def on_create_event(self, event: CreateEvent, ctx: EventContext) -> None:
        pass

    def on_create_v2_event(self, event: CreateV2Event, ctx: EventContext) -> None:
        pass

    def on_complete_event(self, event: CompleteEvent, ctx: EventContext) -> None:
        pass

    def on_trade_event(self, event: TradeEvent, ctx: EventContext) -> None:
        pass

    def on_buy_event(self, event: BuyEvent, ctx: EventContext) -> None:
        pass

    def on_sell_event(self, event: SellEvent, ctx: EventContext) -> None:
        pass

    def on_create_pool_event(self, event: CreatePoolEvent, ctx: EventContext) -> None:
        pass

    def handle(self, kind: EventKind, event: Event, ctx: EventContext) -> None:
        """Route an event to its callback."""
        getattr(self, kind.handler_method)(event, ctx)


@dataclass(frozen=True)
class EventFilter:
    """Which event kinds to act on."""

    create: bool = True
    create_v2: bool = True
    complete: bool = True
    trade: bool = True
    buy: bool = True
    sell: bool = True
    create_pool: bool = True

    @classmethod
    def all(cls) -> "EventFilter":
        return cls()

    @classmethod
    def none(cls) -> "EventFilter":
        return cls(**{f.name: False for f in fields(cls)})

    @classmethod
    def pump_only(cls) -> "EventFilter":
        """Bonding curve events only: create, create_v2, complete, trade."""
        return cls.from_kinds(k for k in EventKind if k.platform is Platform.PUMP_FUN)

    @classmethod
    def pumpamm_only(cls) -> "EventFilter":
        """AMM events only: buy, sell, create_pool."""
        return cls.from_kinds(k for k in EventKind if k.platform is Platform.PUMP_SWAP)

    @classmethod
    def from_kinds(cls, kinds) -> "EventFilter":
        enabled = {kind.label for kind in kinds}
        return cls(**{f.name: f.name in enabled for f in fields(cls)})

    def allows(self, kind: EventKind) -> bool:
        return getattr(self, kind.label)

    def enabled_kinds(self) -> frozenset[EventKind]:
        return frozenset(kind for kind in EventKind if self.allows(kind))


def format_event_line(event: Event, ctx: EventContext) -> str:
    return (
        f"{type(event).__name__} {{ elapsed:{ctx.elapsed * 1000:.3f}ms, slot:{ctx.slot}, "
        f"tx_index:{ctx.tx_index}, signature:{ctx.signature}, event:{event!r} }}"
    )


class LoggingEventHandler(EventHandler):
    """Logs every event at INFO."""

    def _log(self, kind: EventKind, event: Event, ctx: EventContext) -> None:
        logger.info(format_event_line(event, ctx))

    def on_create_event(self, event, ctx):
        self._log(EventKind.CREATE, event, ctx)

    def on_create_v2_event(self, event, ctx):
        self._log(EventKind.CREATE_V2, event, ctx)

    def on_complete_event(self, event, ctx):
        self._log(EventKind.COMPLETE, event, ctx)

    def on_trade_event(self, event, ctx):
        self._log(EventKind.TRADE, event, ctx)

    def on_buy_event(self, event, ctx):
        self._log(EventKind.BUY, event, ctx)

    def on_sell_event(self, event, ctx):
        self._log(EventKind.SELL, event, ctx)

    def on_create_pool_event(self, event, ctx):
        self._log(EventKind.CREATE_POOL, event, ctx)


class FilteredLoggingEventHandler(LoggingEventHandler):
    """Logs only the event kinds enabled in its filter."""

    def __init__(self, event_filter: EventFilter | None = None):
        self.event_filter = event_filter or EventFilter.all()

    def _log(self, kind: EventKind, event: Event, ctx: EventContext) -> None:
        if self.event_filter.allows(kind):
            super()._log(kind, event, ctx)
