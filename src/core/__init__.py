"""Core primitives: system addresses, binary codec, PDA derivation, errors."""

from core.codec import LogScratchBuffer, OptionBool
from core.errors import (
    ConfigError,
    ConnectionFailedError,
    ConnectionTimeoutError,
    DerivationError,
    EventDecodeError,
    PumpStreamError,
    SignatureParseError,
    SubscribeError,
)
from core.pda import find_program_address
from core.pubkeys import SystemAddresses

__all__ = [
    # Addresses
    "SystemAddresses",
    "find_program_address",
    # Codec
    "LogScratchBuffer",
    "OptionBool",
    # Errors
    "PumpStreamError",
    "ConnectionFailedError",
    "ConnectionTimeoutError",
    "SubscribeError",
    "SignatureParseError",
    "EventDecodeError",
    "DerivationError",
    "ConfigError",
]
