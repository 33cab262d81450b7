"""
Binary primitives shared by the instruction encoders and the log decoder.

Everything on the wire is little-endian.
"""

import base64
import binascii
import struct
from enum import Enum


def pack_u16(value: int) -> bytes:
    return struct.pack("<H", value)


def pack_u64(value: int) -> bytes:
    return struct.pack("<Q", value)


class OptionBool(Enum):
    """Tri-state optional flag as the programs expect it (Borsh ``Option<bool>``)."""

    ABSENT = "absent"
    PRESENT_TRUE = "present_true"
    PRESENT_FALSE = "present_false"

    @classmethod
    def from_optional(cls, value: bool | None) -> "OptionBool":
        if value is None:
            return cls.ABSENT
        return cls.PRESENT_TRUE if value else cls.PRESENT_FALSE

    def to_bytes(self) -> bytes:
        if self is OptionBool.ABSENT:
            return b"\x00"
        if self is OptionBool.PRESENT_TRUE:
            return b"\x01\x01"
        return b"\x01\x00"


class LogScratchBuffer:
    """Reusable decode buffer for base64 log payloads.

    One instance belongs to one decoding loop; it is not safe to share
    between concurrently running subscriptions.
    """

    def __init__(self):
        self._buf = bytearray()

    def decode(self, payload: str) -> bool:
        """Decode standard base64 into the buffer.

        Returns:
            False (buffer left empty) if the payload is not valid base64
        """
        try:
            self._buf[:] = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            self._buf.clear()
            return False
        return True

    def __len__(self) -> int:
        return len(self._buf)

    def head(self, size: int) -> bytes:
        return bytes(self._buf[:size])

    def tail(self, start: int) -> bytes:
        return bytes(self._buf[start:])
