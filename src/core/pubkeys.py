"""
Well-known Solana addresses shared by both platforms.
"""

from dataclasses import dataclass
from typing import Final

from solders.pubkey import Pubkey


@dataclass
class SystemAddresses:
    """Solana system program addresses shared by both platforms."""

    SYSTEM_PROGRAM: Final[Pubkey] = Pubkey.from_string(
        "11111111111111111111111111111111"
    )
    TOKEN_PROGRAM: Final[Pubkey] = Pubkey.from_string(
        "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
    )
    TOKEN_2022_PROGRAM: Final[Pubkey] = Pubkey.from_string(
        "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"
    )
    ASSOCIATED_TOKEN_PROGRAM: Final[Pubkey] = Pubkey.from_string(
        "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
    )
    # Wrapped SOL mint
    SOL_MINT: Final[Pubkey] = Pubkey.from_string(
        "So11111111111111111111111111111111111111112"
    )
    USDC_MINT: Final[Pubkey] = Pubkey.from_string(
        "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
    )

    @classmethod
    def get_all_system_addresses(cls) -> dict[str, Pubkey]:
        """Get all system addresses keyed by name."""
        return {
            "system_program": cls.SYSTEM_PROGRAM,
            "token_program": cls.TOKEN_PROGRAM,
            "token_2022_program": cls.TOKEN_2022_PROGRAM,
            "associated_token_program": cls.ASSOCIATED_TOKEN_PROGRAM,
            "sol_mint": cls.SOL_MINT,
            "usdc_mint": cls.USDC_MINT,
        }

    @classmethod
    def is_core_quote_mint(cls, mint: Pubkey) -> bool:
        """True for the quote assets PumpSwap treats as the pricing side (WSOL, USDC)."""
        return mint == cls.SOL_MINT or mint == cls.USDC_MINT
