"""
Build pump.fun and PumpSwap buy/sell instructions and print a summary.

Nothing is signed or sent; this only shows what the builders produce.

Usage:
    uv run learning-examples/build_trade_instructions.py
"""

import os
import sys

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from solders.instruction import Instruction
from solders.pubkey import Pubkey

from core.codec import OptionBool
from core.pubkeys import SystemAddresses
from platforms.pumpfun import PumpFunInstructionBuilder
from platforms.pumpswap import PumpSwapInstructionBuilder

# Placeholder keys; any 32 bytes work
USER = Pubkey.from_bytes(bytes([1]) * 32)
MINT = Pubkey.from_bytes(bytes([2]) * 32)
POOL = Pubkey.from_bytes(bytes([3]) * 32)
COIN_CREATOR = Pubkey.from_bytes(bytes([4]) * 32)
PROTOCOL_FEE_RECIPIENT = Pubkey.from_bytes(bytes([5]) * 32)


def describe(title: str, ix: Instruction) -> None:
    print(f"{title}")
    print(f"  program:  {ix.program_id}")
    print(f"  accounts: {len(ix.accounts)}")
    print(f"  data:     {len(ix.data)} bytes ({ix.data[:8].hex()}...)")
    print()


def main() -> None:
    pump = PumpFunInstructionBuilder()
    amm = PumpSwapInstructionBuilder()

    for mayhem in (False, True):
        label = "mayhem" if mayhem else "normal"
        describe(
            f"pump.fun buy ({label})",
            pump.build_buy_instruction(
                USER, MINT, amount=1_000_000, max_sol_cost=10_000_000,
                track_volume=OptionBool.PRESENT_TRUE, mayhem_mode=mayhem,
            ),
        )
        describe(
            f"pump.fun sell ({label})",
            pump.build_sell_instruction(
                USER, MINT, amount=1_000_000, min_sol_output=0, mayhem_mode=mayhem,
            ),
        )
        describe(
            f"PumpSwap buy ({label})",
            amm.build_buy_instruction(
                USER, POOL, MINT, SystemAddresses.SOL_MINT, COIN_CREATOR, PROTOCOL_FEE_RECIPIENT,
                base_amount_out=1_000_000, max_quote_amount_in=10_000_000,
                track_volume=OptionBool.PRESENT_TRUE, mayhem_mode=mayhem,
            ),
        )
        describe(
            f"PumpSwap sell ({label})",
            amm.build_sell_instruction(
                USER, POOL, MINT, SystemAddresses.SOL_MINT, COIN_CREATOR, PROTOCOL_FEE_RECIPIENT,
                base_amount_in=1_000_000, min_quote_amount_out=0, mayhem_mode=mayhem,
            ),
        )


if __name__ == "__main__":
    main()
