"""
PumpSwap platform exports.

AMM program: pAMMBay6oceH9fJKBRHGP5D4bD4sWpmSwMn52FMfXEA
"""

from .address_provider import PumpSwapAddresses, PumpSwapAddressProvider, uses_buy_selector
from .event_parser import PumpSwapEventParser
from .instruction_builder import PumpSwapInstructionBuilder

__all__ = [
    "PumpSwapAddresses",
    "PumpSwapAddressProvider",
    "PumpSwapEventParser",
    "PumpSwapInstructionBuilder",
    "uses_buy_selector",
]
