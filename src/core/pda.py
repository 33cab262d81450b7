"""
Program derived addresses (PDAs) of the bonding curve and PumpSwap programs.

The bump search itself is ``Pubkey.find_program_address``. Seeds are
checked here first: an over-long seed makes the native search panic
instead of raising.
"""

from typing import Sequence

from solders.pubkey import Pubkey

from core.codec import pack_u16
from core.errors import DerivationError

MAX_SEEDS = 16
MAX_SEED_LENGTH = 32

# Second seed component of the fee-config PDAs
PUMP_FEE_CONFIG_SEED = bytes([
    1, 86, 224, 246, 147, 102, 90, 207, 68, 219, 21, 104, 191, 23, 91, 170,
    81, 137, 203, 151, 245, 210, 255, 59, 101, 93, 43, 182, 253, 109, 24, 176,
])
PUMP_AMM_FEE_CONFIG_SEED = bytes([
    12, 20, 222, 252, 130, 94, 198, 118, 148, 37, 8, 24, 187, 101, 64, 101,
    244, 41, 141, 49, 86, 213, 113, 180, 212, 248, 9, 12, 24, 233, 168, 99,
])


def _check_seeds(seeds: Sequence[bytes]) -> None:
    # The bump counts against the seed limit
    if len(seeds) + 1 > MAX_SEEDS:
        raise DerivationError(f"too many seeds: {len(seeds)} (max {MAX_SEEDS - 1})")
    for seed in seeds:
        if len(seed) > MAX_SEED_LENGTH:
            raise DerivationError(
                f"seed of {len(seed)} bytes exceeds {MAX_SEED_LENGTH}"
            )


def find_program_address(
    seeds: Sequence[bytes], program_id: Pubkey
) -> tuple[Pubkey, int]:
    """Return the highest-bump off-curve address for ``seeds`` with its bump.

    Raises:
        DerivationError: if there are too many seeds or a seed is over 32 bytes
    """
    seeds = [bytes(s) for s in seeds]
    _check_seeds(seeds)
    return Pubkey.find_program_address(seeds, program_id)


# Bonding curve program

def derive_global_pda(program_id: Pubkey) -> tuple[Pubkey, int]:
    return find_program_address([b"global"], program_id)


def derive_bonding_curve_pda(mint: Pubkey, program_id: Pubkey) -> tuple[Pubkey, int]:
    return find_program_address([b"bonding-curve", bytes(mint)], program_id)


def derive_creator_vault_pda(creator: Pubkey, program_id: Pubkey) -> tuple[Pubkey, int]:
    return find_program_address([b"creator-vault", bytes(creator)], program_id)


def derive_event_authority_pda(program_id: Pubkey) -> tuple[Pubkey, int]:
    return find_program_address([b"__event_authority"], program_id)


def derive_global_volume_accumulator_pda(program_id: Pubkey) -> tuple[Pubkey, int]:
    return find_program_address([b"global_volume_accumulator"], program_id)


def derive_user_volume_accumulator_pda(
    user: Pubkey, program_id: Pubkey
) -> tuple[Pubkey, int]:
    return find_program_address([b"user_volume_accumulator", bytes(user)], program_id)


def derive_fee_config_pda(
    fee_recipient: Pubkey, fee_program: Pubkey
) -> tuple[Pubkey, int]:
    """Fee config of the bonding curve program.

    ``fee_recipient`` is accepted for call-site symmetry but does not take
    part in the derivation; the second seed is fixed.
    """
    del fee_recipient
    return find_program_address([b"fee_config", PUMP_FEE_CONFIG_SEED], fee_program)


# PumpSwap AMM program

def derive_amm_global_config_pda(program_id: Pubkey) -> tuple[Pubkey, int]:
    return find_program_address([b"global_config"], program_id)


def derive_amm_pool_pda(
    index: int,
    creator: Pubkey,
    base_mint: Pubkey,
    quote_mint: Pubkey,
    program_id: Pubkey,
) -> tuple[Pubkey, int]:
    return find_program_address(
        [b"pool", pack_u16(index), bytes(creator), bytes(base_mint), bytes(quote_mint)],
        program_id,
    )


def derive_amm_coin_creator_vault_authority_pda(
    coin_creator: Pubkey, program_id: Pubkey
) -> tuple[Pubkey, int]:
    return find_program_address([b"creator_vault", bytes(coin_creator)], program_id)


def derive_amm_fee_config_pda(fee_program: Pubkey) -> tuple[Pubkey, int]:
    return find_program_address([b"fee_config", PUMP_AMM_FEE_CONFIG_SEED], fee_program)
