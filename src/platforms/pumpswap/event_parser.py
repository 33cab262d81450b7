"""
PumpSwap implementation of EventParser interface.

Decodes the AMM events: BuyEvent, SellEvent and CreatePoolEvent.
"""

from construct import Int8ul, Int16ul, Int64sl, Int64ul

from interfaces.core import EventParser, Platform
from interfaces.events import BuyEvent, CreatePoolEvent, EventKind, SellEvent
from utils.borsh import BorshBool, BorshPubkey, BorshString, decode_into, strict_struct

# Field groups shared by buy and sell
_RESERVES = (
    "user_base_token_reserves" / Int64ul,
    "user_quote_token_reserves" / Int64ul,
    "pool_base_token_reserves" / Int64ul,
    "pool_quote_token_reserves" / Int64ul,
)
_PARTIES = (
    "pool" / BorshPubkey,
    "user" / BorshPubkey,
    "user_base_token_account" / BorshPubkey,
    "user_quote_token_account" / BorshPubkey,
    "protocol_fee_recipient" / BorshPubkey,
    "protocol_fee_recipient_token_account" / BorshPubkey,
    "coin_creator" / BorshPubkey,
    "coin_creator_fee_basis_points" / Int64ul,
    "coin_creator_fee" / Int64ul,
)

BUY_EVENT = strict_struct(
    "timestamp" / Int64sl,
    "base_amount_out" / Int64ul,
    "max_quote_amount_in" / Int64ul,
    *_RESERVES,
    "quote_amount_in" / Int64ul,
    "lp_fee_basis_points" / Int64ul,
    "lp_fee" / Int64ul,
    "protocol_fee_basis_points" / Int64ul,
    "protocol_fee" / Int64ul,
    "quote_amount_in_with_lp_fee" / Int64ul,
    "user_quote_amount_in" / Int64ul,
    *_PARTIES,
    "track_volume" / BorshBool,
    "total_unclaimed_tokens" / Int64ul,
    "total_claimed_tokens" / Int64ul,
    "current_sol_volume" / Int64ul,
    "last_update_timestamp" / Int64sl,
    "min_base_amount_out" / Int64ul,
    "ix_name" / BorshString,
)

SELL_EVENT = strict_struct(
    "timestamp" / Int64sl,
    "base_amount_in" / Int64ul,
    "min_quote_amount_out" / Int64ul,
    *_RESERVES,
    "quote_amount_out" / Int64ul,
    "lp_fee_basis_points" / Int64ul,
    "lp_fee" / Int64ul,
    "protocol_fee_basis_points" / Int64ul,
    "protocol_fee" / Int64ul,
    "quote_amount_out_without_lp_fee" / Int64ul,
    "user_quote_amount_out" / Int64ul,
    *_PARTIES,
)

CREATE_POOL_EVENT = strict_struct(
    "timestamp" / Int64sl,
    "index" / Int16ul,
    "creator" / BorshPubkey,
    "base_mint" / BorshPubkey,
    "quote_mint" / BorshPubkey,
    "base_mint_decimals" / Int8ul,
    "quote_mint_decimals" / Int8ul,
    "base_amount_in" / Int64ul,
    "quote_amount_in" / Int64ul,
    "pool_base_amount" / Int64ul,
    "pool_quote_amount" / Int64ul,
    "minimum_liquidity" / Int64ul,
    "initial_liquidity" / Int64ul,
    "lp_token_amount_out" / Int64ul,
    "pool_bump" / Int8ul,
    "pool" / BorshPubkey,
    "lp_mint" / BorshPubkey,
    "user_base_token_account" / BorshPubkey,
    "user_quote_token_account" / BorshPubkey,
    "coin_creator" / BorshPubkey,
)

_SCHEMAS = {
    EventKind.BUY: (BUY_EVENT, BuyEvent),
    EventKind.SELL: (SELL_EVENT, SellEvent),
    EventKind.CREATE_POOL: (CREATE_POOL_EVENT, CreatePoolEvent),
}


class PumpSwapEventParser(EventParser):
    """PumpSwap implementation of EventParser interface."""

    @property
    def platform(self) -> Platform:
        return Platform.PUMP_SWAP

    @property
    def event_kinds(self) -> frozenset[EventKind]:
        return frozenset(_SCHEMAS)

    def decode_event(self, kind: EventKind, body: bytes):
        schema, event_cls = _SCHEMAS[kind]
        return decode_into(schema, body, event_cls)
