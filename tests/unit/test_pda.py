"""Tests for program derived address derivation"""
import pytest
from solders.pubkey import Pubkey
from spl.token.instructions import get_associated_token_address

from core.errors import DerivationError
from core.pda import (
    derive_amm_coin_creator_vault_authority_pda,
    derive_amm_fee_config_pda,
    derive_amm_global_config_pda,
    derive_amm_pool_pda,
    derive_bonding_curve_pda,
    derive_event_authority_pda,
    derive_fee_config_pda,
    derive_global_pda,
    find_program_address,
)
from core.pubkeys import SystemAddresses
from platforms.pumpfun.address_provider import PumpFunAddresses
from platforms.pumpswap.address_provider import PumpSwapAddresses

from conftest import make_address

PUMP = PumpFunAddresses.PROGRAM
PUMP_AMM = PumpSwapAddresses.PROGRAM
FEE_PROGRAM = PumpFunAddresses.FEE_PROGRAM


def test_known_pump_pdas():
    """Test: derivation matches live mainnet accounts"""
    assert str(derive_global_pda(PUMP)[0]) == "4wTV1YmiEkRvAtNtsSGPtUrqRYQMe5SKy2uB4Jjaxnjf"
    assert str(derive_event_authority_pda(PUMP)[0]) == "Ce6TQqeHC9p8KetsN6JsjHK7UTZk7nasjjnr7XxXp9F1"


def test_known_pumpswap_pdas():
    assert str(derive_amm_global_config_pda(PUMP_AMM)[0]) == "ADyA8hdefvWN2dbGGWFotbzWxrAvLW83WG6QCVXvJKqw"
    assert str(derive_event_authority_pda(PUMP_AMM)[0]) == "GS4CU59F31iL7aR2Q8zVS8DRrcRnXX1yjQ66TqNVQnaR"


def test_derivation_is_deterministic():
    mint = make_address(9)
    assert derive_bonding_curve_pda(mint, PUMP) == derive_bonding_curve_pda(mint, PUMP)


def test_derived_address_is_off_curve_and_not_a_seed():
    mint = make_address(9)
    address, bump = derive_bonding_curve_pda(mint, PUMP)
    assert 0 <= bump <= 255
    assert not address.is_on_curve()
    assert address != mint
    assert address != PUMP


def test_bump_reproduces_address():
    mint = make_address(11)
    address, bump = find_program_address([b"bonding-curve", bytes(mint)], PUMP)
    assert Pubkey.create_program_address([b"bonding-curve", bytes(mint), bytes([bump])], PUMP) == address


def test_different_programs_give_different_addresses():
    assert derive_global_pda(PUMP)[0] != derive_global_pda(PUMP_AMM)[0]


def test_seed_too_long():
    with pytest.raises(DerivationError):
        find_program_address([b"x" * 33], PUMP)


def test_too_many_seeds():
    """Test: the bump counts toward the 16-seed limit"""
    find_program_address([b"s"] * 15, PUMP)
    with pytest.raises(DerivationError):
        find_program_address([b"s"] * 16, PUMP)


def test_derivation_error_is_value_error():
    with pytest.raises(ValueError):
        find_program_address([b"x" * 40], PUMP)


def test_fee_config_ignores_recipient():
    a = derive_fee_config_pda(make_address(1), FEE_PROGRAM)
    b = derive_fee_config_pda(make_address(2), FEE_PROGRAM)
    assert a == b


def test_fee_configs_differ_between_programs():
    assert derive_fee_config_pda(make_address(1), FEE_PROGRAM)[0] != derive_amm_fee_config_pda(FEE_PROGRAM)[0]


def test_fee_config_seeds_are_program_ids():
    pump_fee_config, _ = find_program_address([b"fee_config", bytes(PUMP)], FEE_PROGRAM)
    amm_fee_config, _ = find_program_address([b"fee_config", bytes(PUMP_AMM)], FEE_PROGRAM)
    assert derive_fee_config_pda(make_address(1), FEE_PROGRAM)[0] == pump_fee_config
    assert derive_amm_fee_config_pda(FEE_PROGRAM)[0] == amm_fee_config


def test_ata_depends_on_token_program():
    owner, mint = make_address(3), make_address(4)
    classic = get_associated_token_address(owner, mint)
    token_2022 = get_associated_token_address(owner, mint, SystemAddresses.TOKEN_2022_PROGRAM)
    assert classic == get_associated_token_address(owner, mint, SystemAddresses.TOKEN_PROGRAM)
    assert classic != token_2022


def test_pool_pda_depends_on_index():
    creator, base = make_address(5), make_address(6)
    quote = SystemAddresses.SOL_MINT
    assert derive_amm_pool_pda(0, creator, base, quote, PUMP_AMM)[0] != derive_amm_pool_pda(1, creator, base, quote, PUMP_AMM)[0]


def test_pool_pda_uses_u16_index_seed():
    creator, base = make_address(5), make_address(6)
    quote = SystemAddresses.SOL_MINT
    expected, _ = find_program_address(
        [b"pool", b"\x02\x01", bytes(creator), bytes(base), bytes(quote)], PUMP_AMM
    )
    assert derive_amm_pool_pda(0x0102, creator, base, quote, PUMP_AMM)[0] == expected


def test_coin_creator_vault_authority_seed():
    creator = make_address(7)
    expected, _ = find_program_address([b"creator_vault", bytes(creator)], PUMP_AMM)
    assert derive_amm_coin_creator_vault_authority_pda(creator, PUMP_AMM)[0] == expected
    assert isinstance(expected, Pubkey)


@pytest.mark.parametrize("n", [0, 1, 17, 128, 200, 255])
def test_bonding_curve_matches_native_search(n):
    mint = make_address(n)
    assert derive_bonding_curve_pda(mint, PUMP) == Pubkey.find_program_address(
        [b"bonding-curve", bytes(mint)], PUMP
    )
