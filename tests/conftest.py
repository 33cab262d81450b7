"""
Pytest fixtures for pump-stream tests
"""
import base64
import os
from dataclasses import fields

import pytest
from solders.pubkey import Pubkey
from solders.signature import Signature

from interfaces.events import EVENT_TYPES, EventKind

# No real network access in tests
os.environ['TESTING'] = '1'


def make_address(n: int) -> Pubkey:
    """Deterministic test address: 32 copies of byte ``n``."""
    return Pubkey.from_bytes(bytes([n % 256]) * 32)


def sample_event_fields(kind: EventKind) -> dict:
    """Field values for an event of ``kind``; each field gets a distinct small value."""
    values = {}
    for i, f in enumerate(fields(EVENT_TYPES[kind]), start=1):
        if f.type is Pubkey:
            values[f.name] = make_address(i)
        elif f.type is bool:
            values[f.name] = i % 2 == 0
        elif f.type is str:
            values[f.name] = f"{f.name}-{i}"
        else:
            values[f.name] = i
    return values


def event_body(kind: EventKind, **overrides) -> bytes:
    """Borsh body (no discriminator) for a sample event of ``kind``."""
    from platforms.pumpfun import event_parser as pump_schemas
    from platforms.pumpswap import event_parser as amm_schemas

    schemas = {
        EventKind.CREATE: pump_schemas.CREATE_EVENT,
        EventKind.CREATE_V2: pump_schemas.CREATE_V2_EVENT,
        EventKind.COMPLETE: pump_schemas.COMPLETE_EVENT,
        EventKind.TRADE: pump_schemas.TRADE_EVENT,
        EventKind.BUY: amm_schemas.BUY_EVENT,
        EventKind.SELL: amm_schemas.SELL_EVENT,
        EventKind.CREATE_POOL: amm_schemas.CREATE_POOL_EVENT,
    }
    values = sample_event_fields(kind)
    values.update(overrides)
    return schemas[kind].build(values)


def account_keys(ix) -> list:
    return [meta.pubkey for meta in ix.accounts]


def signer_keys(ix) -> list:
    return [meta.pubkey for meta in ix.accounts if meta.is_signer]


def program_data_line(payload: bytes) -> str:
    return "Program data: " + base64.b64encode(payload).decode("ascii")


def event_line(kind: EventKind, **overrides) -> str:
    """A ``Program data:`` log line carrying a sample event."""
    return program_data_line(kind.discriminator + event_body(kind, **overrides))


class RecordingHandler:
    """Handler that records every callback as (method, event, ctx)."""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        if not name.startswith("on_"):
            raise AttributeError(name)

        def record(event, ctx):
            self.calls.append((name, event, ctx))

        return record

    @property
    def methods(self):
        return [name for name, _, _ in self.calls]


@pytest.fixture
def recording_handler():
    return RecordingHandler()


@pytest.fixture
def user():
    return make_address(201)


@pytest.fixture
def mint():
    return make_address(202)


@pytest.fixture
def signature_text():
    """Base58 of 64 bytes of 0x07."""
    return str(Signature.from_bytes(bytes([7]) * 64))
