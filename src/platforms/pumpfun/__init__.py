"""
pump.fun platform exports.

Bonding curve program: 6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P
"""

from .address_provider import PumpFunAddresses, PumpFunAddressProvider
from .event_parser import PumpFunEventParser
from .instruction_builder import PumpFunInstructionBuilder

__all__ = [
    "PumpFunAddresses",
    "PumpFunAddressProvider",
    "PumpFunEventParser",
    "PumpFunInstructionBuilder",
]
