"""
Borsh building blocks for ``construct`` schemas.

Event bodies are decoded strictly: the whole body must be consumed and
bools must be exactly 0 or 1, the same rules Borsh's ``try_from_slice``
applies.
"""

from dataclasses import fields
from typing import Any, TypeVar

from construct import (
    Adapter,
    Bytes,
    ConstructError,
    ExprAdapter,
    Int8ul,
    Int32ul,
    OneOf,
    PascalString,
    Struct,
    Terminated,
)
from solders.pubkey import Pubkey

from core.errors import EventDecodeError

T = TypeVar("T")


class PubkeyAdapter(Adapter):
    """32 raw bytes <-> Pubkey."""

    def _decode(self, obj, context, path):
        return Pubkey.from_bytes(obj)

    def _encode(self, obj, context, path):
        return bytes(obj)


BorshPubkey = PubkeyAdapter(Bytes(32))
BorshString = PascalString(Int32ul, "utf8")
BorshBool = ExprAdapter(
    OneOf(Int8ul, [0, 1]),
    decoder=lambda obj, ctx: bool(obj),
    encoder=lambda obj, ctx: int(obj),
)


def strict_struct(*subcons) -> Struct:
    """Struct that rejects trailing bytes."""
    return Struct(*subcons, Terminated)


def decode_into(schema: Struct, data: bytes, cls: type[T]) -> T:
    """Parse ``data`` with ``schema`` and build ``cls`` from the named fields.

    Raises:
        EventDecodeError: on short, over-long or otherwise invalid input
    """
    try:
        parsed: Any = schema.parse(data)
    except (ConstructError, ValueError) as e:
        # UnicodeDecodeError is a ValueError
        raise EventDecodeError(f"{cls.__name__}: {e}") from e
    return cls(**{f.name: parsed[f.name] for f in fields(cls)})
