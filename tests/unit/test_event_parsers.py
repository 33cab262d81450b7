"""Tests for pump.fun / PumpSwap event body decoding"""
import struct

import pytest

from core.errors import EventDecodeError
from interfaces.events import (
    EVENT_DISCRIMINATORS,
    BUY_INSTRUCTION_DISCRIMINATOR,
    SELL_INSTRUCTION_DISCRIMINATOR,
    CompleteEvent,
    EventKind,
    TradeEvent,
)
from platforms import decode_event, get_event_parser, get_supported_platforms
from platforms.pumpfun import PumpFunEventParser
from platforms.pumpswap import PumpSwapEventParser

from conftest import event_body, make_address, sample_event_fields


def test_discriminators_are_unique():
    values = list(EVENT_DISCRIMINATORS.values()) + [
        BUY_INSTRUCTION_DISCRIMINATOR,
        SELL_INSTRUCTION_DISCRIMINATOR,
    ]
    assert len(set(values)) == len(values) == 9
    assert all(len(v) == 8 for v in values)


def test_trade_discriminator_bytes():
    assert EventKind.TRADE.discriminator == bytes([189, 219, 127, 211, 78, 230, 97, 238])
    assert EventKind.CREATE_POOL.discriminator == bytes([177, 49, 12, 210, 160, 118, 167, 116])


@pytest.mark.parametrize("kind", list(EventKind))
def test_decode_sample_event(kind):
    """Test: each schema decodes a body built from its own field list"""
    expected = sample_event_fields(kind)
    event = decode_event(kind, event_body(kind))
    for name, value in expected.items():
        assert getattr(event, name) == value


def test_complete_event_hand_packed():
    """Test: byte layout of CompleteEvent (3 pubkeys + i64)"""
    user, mint, curve = make_address(1), make_address(2), make_address(3)
    body = bytes(user) + bytes(mint) + bytes(curve) + struct.pack("<q", -5)
    event = PumpFunEventParser().decode_event(EventKind.COMPLETE, body)
    assert event == CompleteEvent(user=user, mint=mint, bonding_curve=curve, timestamp=-5)


def test_trade_event_hand_packed_prefix():
    """Test: TradeEvent field order for the leading fields"""
    fields = sample_event_fields(EventKind.TRADE)
    fields.update(sol_amount=1_000_000_000, token_amount=35_000_000_000, is_buy=True)
    body = event_body(EventKind.TRADE, **fields)

    assert body[:32] == bytes(fields["mint"])
    assert struct.unpack_from("<QQ", body, 32) == (1_000_000_000, 35_000_000_000)
    assert body[48] == 1

    event = decode_event(EventKind.TRADE, body)
    assert isinstance(event, TradeEvent)
    assert event.is_buy is True
    assert event.ix_name == fields["ix_name"]


def test_create_v2_event_mayhem_flag():
    body = event_body(EventKind.CREATE_V2, is_mayhem_mode=True)
    event = decode_event(EventKind.CREATE_V2, body)
    assert event.is_mayhem_mode is True


def test_trailing_bytes_rejected():
    body = event_body(EventKind.COMPLETE) + b"\x00"
    with pytest.raises(EventDecodeError):
        decode_event(EventKind.COMPLETE, body)


def test_truncated_body_rejected():
    body = event_body(EventKind.SELL)[:-1]
    with pytest.raises(EventDecodeError):
        decode_event(EventKind.SELL, body)


def test_invalid_bool_rejected():
    fields = sample_event_fields(EventKind.TRADE)
    body = bytearray(event_body(EventKind.TRADE, **fields))
    body[48] = 2  # is_buy
    with pytest.raises(EventDecodeError):
        decode_event(EventKind.TRADE, bytes(body))


def test_invalid_utf8_rejected():
    # name: length 2, bytes ff fe
    body = bytearray(event_body(EventKind.CREATE, name="ab"))
    body[4:6] = b"\xff\xfe"
    with pytest.raises(EventDecodeError):
        decode_event(EventKind.CREATE, bytes(body))


def test_string_length_past_end_rejected():
    body = struct.pack("<I", 1000) + b"abc"
    with pytest.raises(EventDecodeError):
        decode_event(EventKind.CREATE, body)


def test_decode_error_is_value_error():
    with pytest.raises(ValueError):
        decode_event(EventKind.COMPLETE, b"")


def test_parsers_cover_all_kinds():
    pump = PumpFunEventParser().event_kinds
    amm = PumpSwapEventParser().event_kinds
    assert pump | amm == frozenset(EventKind)
    assert not pump & amm


def test_platform_registry():
    for platform in get_supported_platforms():
        parser = get_event_parser(platform)
        assert parser.platform is platform
        assert all(kind.platform is platform for kind in parser.event_kinds)


def test_create_pool_small_int_fields():
    body = event_body(EventKind.CREATE_POOL, index=513, base_mint_decimals=6, quote_mint_decimals=9, pool_bump=254)
    event = decode_event(EventKind.CREATE_POOL, body)
    assert (event.index, event.base_mint_decimals, event.quote_mint_decimals, event.pool_bump) == (513, 6, 9, 254)
