"""
Typed events emitted by the pump.fun bonding curve and the PumpSwap AMM.

Each event arrives in a ``Program data:`` log line as an 8-byte
discriminator followed by its Borsh-encoded body. The discriminator table
here is the only place the byte values are defined.
"""

from dataclasses import dataclass
from enum import Enum

from solders.pubkey import Pubkey

from interfaces.core import Platform


class EventKind(Enum):
    """Event kinds with their handler callback and source platform."""

    CREATE = ("create", "on_create_event", Platform.PUMP_FUN)
    CREATE_V2 = ("create_v2", "on_create_v2_event", Platform.PUMP_FUN)
    COMPLETE = ("complete", "on_complete_event", Platform.PUMP_FUN)
    TRADE = ("trade", "on_trade_event", Platform.PUMP_FUN)
    BUY = ("buy", "on_buy_event", Platform.PUMP_SWAP)
    SELL = ("sell", "on_sell_event", Platform.PUMP_SWAP)
    CREATE_POOL = ("create_pool", "on_create_pool_event", Platform.PUMP_SWAP)

    def __init__(self, label: str, handler_method: str, platform: Platform):
        self.label = label
        self.handler_method = handler_method
        self.platform = platform

    @property
    def discriminator(self) -> bytes:
        return EVENT_DISCRIMINATORS[self]

    @classmethod
    def from_label(cls, label: str) -> "EventKind":
        for kind in cls:
            if kind.label == label:
                return kind
        raise ValueError(f"Unknown event kind: {label}")


EVENT_DISCRIMINATORS: dict[EventKind, bytes] = {
    EventKind.CREATE: bytes([27, 114, 169, 77, 222, 235, 99, 118]),
    EventKind.CREATE_V2: bytes([214, 144, 76, 236, 95, 139, 49, 180]),
    EventKind.COMPLETE: bytes([95, 114, 97, 156, 212, 46, 152, 8]),
    EventKind.TRADE: bytes([189, 219, 127, 211, 78, 230, 97, 238]),
    EventKind.BUY: bytes([103, 244, 82, 31, 44, 245, 119, 119]),
    EventKind.SELL: bytes([62, 47, 55, 10, 165, 3, 220, 42]),
    EventKind.CREATE_POOL: bytes([177, 49, 12, 210, 160, 118, 167, 116]),
}

# Instruction selectors, shared by both programs
BUY_INSTRUCTION_DISCRIMINATOR = bytes([102, 6, 61, 18, 1, 218, 235, 234])
SELL_INSTRUCTION_DISCRIMINATOR = bytes([51, 230, 133, 164, 1, 127, 131, 173])

KIND_BY_DISCRIMINATOR: dict[bytes, EventKind] = {
    disc: kind for kind, disc in EVENT_DISCRIMINATORS.items()
}


def _check_discriminators() -> None:
    values = list(EVENT_DISCRIMINATORS.values()) + [
        BUY_INSTRUCTION_DISCRIMINATOR,
        SELL_INSTRUCTION_DISCRIMINATOR,
    ]
    if any(len(v) != 8 for v in values):
        raise RuntimeError("discriminators must be 8 bytes")
    if len(set(values)) != len(values):
        raise RuntimeError("duplicate discriminator in event/instruction table")
    if set(EVENT_DISCRIMINATORS) != set(EventKind):
        raise RuntimeError("every EventKind needs a discriminator")


_check_discriminators()


@dataclass(frozen=True)
class CreateEvent:
    name: str
    symbol: str
    uri: str
    mint: Pubkey
    bonding_curve: Pubkey
    user: Pubkey
    creator: Pubkey
    timestamp: int
    virtual_token_reserves: int
    virtual_sol_reserves: int
    real_token_reserves: int
    token_total_supply: int


@dataclass(frozen=True)
class CreateV2Event:
    name: str
    symbol: str
    uri: str
    mint: Pubkey
    bonding_curve: Pubkey
    user: Pubkey
    creator: Pubkey
    timestamp: int
    virtual_token_reserves: int
    virtual_sol_reserves: int
    real_token_reserves: int
    token_total_supply: int
    token_program: Pubkey
    is_mayhem_mode: bool


@dataclass(frozen=True)
class CompleteEvent:
    user: Pubkey
    mint: Pubkey
    bonding_curve: Pubkey
    timestamp: int


@dataclass(frozen=True)
class TradeEvent:
    mint: Pubkey
    sol_amount: int
    token_amount: int
    is_buy: bool
    user: Pubkey
    timestamp: int
    virtual_sol_reserves: int
    virtual_token_reserves: int
    real_sol_reserves: int
    real_token_reserves: int
    fee_recipient: Pubkey
    fee_basis_points: int
    fee: int
    creator: Pubkey
    creator_fee_basis_points: int
    creator_fee: int
    track_volume: bool
    total_unclaimed_tokens: int
    total_claimed_tokens: int
    current_sol_volume: int
    last_update_timestamp: int
    ix_name: str


@dataclass(frozen=True)
class BuyEvent:
    timestamp: int
    base_amount_out: int
    max_quote_amount_in: int
    user_base_token_reserves: int
    user_quote_token_reserves: int
    pool_base_token_reserves: int
    pool_quote_token_reserves: int
    quote_amount_in: int
    lp_fee_basis_points: int
    lp_fee: int
    protocol_fee_basis_points: int
    protocol_fee: int
    quote_amount_in_with_lp_fee: int
    user_quote_amount_in: int
    pool: Pubkey
    user: Pubkey
    user_base_token_account: Pubkey
    user_quote_token_account: Pubkey
    protocol_fee_recipient: Pubkey
    protocol_fee_recipient_token_account: Pubkey
    coin_creator: Pubkey
    coin_creator_fee_basis_points: int
    coin_creator_fee: int
    track_volume: bool
    total_unclaimed_tokens: int
    total_claimed_tokens: int
    current_sol_volume: int
    last_update_timestamp: int
    min_base_amount_out: int
    ix_name: str


@dataclass(frozen=True)
class SellEvent:
    timestamp: int
    base_amount_in: int
    min_quote_amount_out: int
    user_base_token_reserves: int
    user_quote_token_reserves: int
    pool_base_token_reserves: int
    pool_quote_token_reserves: int
    quote_amount_out: int
    lp_fee_basis_points: int
    lp_fee: int
    protocol_fee_basis_points: int
    protocol_fee: int
    quote_amount_out_without_lp_fee: int
    user_quote_amount_out: int
    pool: Pubkey
    user: Pubkey
    user_base_token_account: Pubkey
    user_quote_token_account: Pubkey
    protocol_fee_recipient: Pubkey
    protocol_fee_recipient_token_account: Pubkey
    coin_creator: Pubkey
    coin_creator_fee_basis_points: int
    coin_creator_fee: int


@dataclass(frozen=True)
class CreatePoolEvent:
    timestamp: int
    index: int
    creator: Pubkey
    base_mint: Pubkey
    quote_mint: Pubkey
    base_mint_decimals: int
    quote_mint_decimals: int
    base_amount_in: int
    quote_amount_in: int
    pool_base_amount: int
    pool_quote_amount: int
    minimum_liquidity: int
    initial_liquidity: int
    lp_token_amount_out: int
    pool_bump: int
    pool: Pubkey
    lp_mint: Pubkey
    user_base_token_account: Pubkey
    user_quote_token_account: Pubkey
    coin_creator: Pubkey


Event = (
    CreateEvent
    | CreateV2Event
    | CompleteEvent
    | TradeEvent
    | BuyEvent
    | SellEvent
    | CreatePoolEvent
)

EVENT_TYPES: dict[EventKind, type] = {
    EventKind.CREATE: CreateEvent,
    EventKind.CREATE_V2: CreateV2Event,
    EventKind.COMPLETE: CompleteEvent,
    EventKind.TRADE: TradeEvent,
    EventKind.BUY: BuyEvent,
    EventKind.SELL: SellEvent,
    EventKind.CREATE_POOL: CreatePoolEvent,
}
