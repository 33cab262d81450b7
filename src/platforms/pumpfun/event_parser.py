"""
pump.fun implementation of EventParser interface.

Decodes the bonding curve events found in ``Program data:`` log lines:
CreateEvent, CreateV2Event (Token-2022 / mayhem launches), CompleteEvent
(curve finished, ready to migrate) and TradeEvent.
"""

from construct import Int64sl, Int64ul

from interfaces.core import EventParser, Platform
from interfaces.events import (
    CompleteEvent,
    CreateEvent,
    CreateV2Event,
    EventKind,
    TradeEvent,
)
from utils.borsh import BorshBool, BorshPubkey, BorshString, decode_into, strict_struct

_CREATE_FIELDS = (
    "name" / BorshString,
    "symbol" / BorshString,
    "uri" / BorshString,
    "mint" / BorshPubkey,
    "bonding_curve" / BorshPubkey,
    "user" / BorshPubkey,
    "creator" / BorshPubkey,
    "timestamp" / Int64sl,
    "virtual_token_reserves" / Int64ul,
    "virtual_sol_reserves" / Int64ul,
    "real_token_reserves" / Int64ul,
    "token_total_supply" / Int64ul,
)

CREATE_EVENT = strict_struct(*_CREATE_FIELDS)

CREATE_V2_EVENT = strict_struct(
    *_CREATE_FIELDS,
    "token_program" / BorshPubkey,
    "is_mayhem_mode" / BorshBool,
)

COMPLETE_EVENT = strict_struct(
    "user" / BorshPubkey,
    "mint" / BorshPubkey,
    "bonding_curve" / BorshPubkey,
    "timestamp" / Int64sl,
)

TRADE_EVENT = strict_struct(
    "mint" / BorshPubkey,
    "sol_amount" / Int64ul,
    "token_amount" / Int64ul,
    "is_buy" / BorshBool,
    "user" / BorshPubkey,
    "timestamp" / Int64sl,
    "virtual_sol_reserves" / Int64ul,
    "virtual_token_reserves" / Int64ul,
    "real_sol_reserves" / Int64ul,
    "real_token_reserves" / Int64ul,
    "fee_recipient" / BorshPubkey,
    "fee_basis_points" / Int64ul,
    "fee" / Int64ul,
    "creator" / BorshPubkey,
    "creator_fee_basis_points" / Int64ul,
    "creator_fee" / Int64ul,
    "track_volume" / BorshBool,
    "total_unclaimed_tokens" / Int64ul,
    "total_claimed_tokens" / Int64ul,
    "current_sol_volume" / Int64ul,
    "last_update_timestamp" / Int64sl,
    "ix_name" / BorshString,
)

_SCHEMAS = {
    EventKind.CREATE: (CREATE_EVENT, CreateEvent),
    EventKind.CREATE_V2: (CREATE_V2_EVENT, CreateV2Event),
    EventKind.COMPLETE: (COMPLETE_EVENT, CompleteEvent),
    EventKind.TRADE: (TRADE_EVENT, TradeEvent),
}


class PumpFunEventParser(EventParser):
    """pump.fun implementation of EventParser interface."""

    @property
    def platform(self) -> Platform:
        return Platform.PUMP_FUN

    @property
    def event_kinds(self) -> frozenset[EventKind]:
        return frozenset(_SCHEMAS)

    def decode_event(self, kind: EventKind, body: bytes):
        schema, event_cls = _SCHEMAS[kind]
        return decode_into(schema, body, event_cls)
