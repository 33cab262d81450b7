"""Tests for pump.fun bonding curve instruction building"""
import struct

import pytest
from spl.token.instructions import get_associated_token_address

from core.codec import OptionBool
from core.pda import (
    derive_bonding_curve_pda,
    derive_creator_vault_pda,
    derive_fee_config_pda,
)
from core.pubkeys import SystemAddresses
from interfaces.core import Platform
from platforms.pumpfun import PumpFunAddresses, PumpFunAddressProvider, PumpFunInstructionBuilder

from conftest import account_keys, make_address, signer_keys

BUY_SELECTOR = bytes([102, 6, 61, 18, 1, 218, 235, 234])
SELL_SELECTOR = bytes([51, 230, 133, 164, 1, 127, 131, 173])


@pytest.fixture
def builder():
    return PumpFunInstructionBuilder()


def test_buy_data_layout(builder, user, mint):
    ix = builder.build_buy_instruction(user, mint, amount=1_000, max_sol_cost=2_000,
                                       track_volume=OptionBool.PRESENT_TRUE)
    assert ix.data[:8] == BUY_SELECTOR
    assert ix.data[:8].hex() == "66063d1201daebea"
    assert struct.unpack_from("<QQ", ix.data, 8) == (1_000, 2_000)
    assert ix.data[24:] == b"\x01\x01"
    assert ix.program_id == PumpFunAddresses.PROGRAM


def test_buy_default_track_volume_absent(builder, user, mint):
    ix = builder.build_buy_instruction(user, mint, 1, 1)
    assert len(ix.data) == 25
    assert ix.data[-1:] == b"\x00"


def test_buy_has_16_accounts_in_order(builder, user, mint):
    ix = builder.build_buy_instruction(user, mint, 1, 1)
    keys = account_keys(ix)
    assert len(keys) == 16

    bonding_curve, _ = derive_bonding_curve_pda(mint, PumpFunAddresses.PROGRAM)
    assert str(keys[0]) == "4wTV1YmiEkRvAtNtsSGPtUrqRYQMe5SKy2uB4Jjaxnjf"
    assert keys[1] == PumpFunAddresses.FEE_RECIPIENT
    assert keys[2] == mint
    assert keys[3] == bonding_curve
    assert keys[4] == get_associated_token_address(bonding_curve, mint)
    assert keys[5] == get_associated_token_address(user, mint)
    assert keys[6] == user
    assert keys[7] == SystemAddresses.SYSTEM_PROGRAM
    assert keys[8] == SystemAddresses.TOKEN_PROGRAM
    assert str(keys[10]) == "Ce6TQqeHC9p8KetsN6JsjHK7UTZk7nasjjnr7XxXp9F1"
    assert keys[11] == PumpFunAddresses.PROGRAM
    assert keys[14] == derive_fee_config_pda(PumpFunAddresses.FEE_RECIPIENT, PumpFunAddresses.FEE_PROGRAM)[0]
    assert keys[15] == PumpFunAddresses.FEE_PROGRAM


def test_buy_flags(builder, user, mint):
    ix = builder.build_buy_instruction(user, mint, 1, 1)
    writable = [meta.is_writable for meta in ix.accounts]
    assert writable == [
        False, True, False, True, True, True, True, False,
        False, True, False, False, True, True, False, False,
    ]
    assert signer_keys(ix) == [user]


def test_sell_has_14_accounts_and_no_tail(builder, user, mint):
    ix = builder.build_sell_instruction(user, mint, amount=500, min_sol_output=7)
    assert len(ix.accounts) == 14
    assert ix.data[:8] == SELL_SELECTOR
    assert ix.data[8:] == struct.pack("<QQ", 500, 7)


def test_sell_accounts_are_buy_without_volume_accumulators(builder, user, mint):
    buy = account_keys(builder.build_buy_instruction(user, mint, 1, 1))
    sell = account_keys(builder.build_sell_instruction(user, mint, 1, 1))
    assert sell == buy[:12] + buy[14:]


def test_mayhem_mode_switches_recipient_and_token_program(builder, user, mint):
    ix = builder.build_buy_instruction(user, mint, 1, 1, mayhem_mode=True)
    keys = account_keys(ix)
    assert keys[1] == PumpFunAddresses.MAYHEM_FEE_RECIPIENT
    assert keys[8] == SystemAddresses.TOKEN_2022_PROGRAM
    # ATAs stay on the classic token program
    bonding_curve, _ = derive_bonding_curve_pda(mint, PumpFunAddresses.PROGRAM)
    assert keys[4] == get_associated_token_address(bonding_curve, mint, SystemAddresses.TOKEN_PROGRAM)


def test_mayhem_recipient_address():
    assert str(PumpFunAddresses.MAYHEM_FEE_RECIPIENT) == "GesfTA3X2arioaHp8bbKdjG9vJtskViWACZoYvxp4twS"


def test_fee_recipient_address():
    """Test: the fee recipient is the documented base58 key, not the 0x3e... byte array"""
    assert str(PumpFunAddresses.FEE_RECIPIENT) == "62qc2CNXwrYqQScmEdiZFFAnJR262PxWEuNQtxfafNgV"
    assert bytes(PumpFunAddresses.FEE_RECIPIENT)[0] == 0x4A


def test_creator_vault_defaults_to_fee_recipient(builder, user, mint):
    keys = account_keys(builder.build_buy_instruction(user, mint, 1, 1))
    expected, _ = derive_creator_vault_pda(PumpFunAddresses.FEE_RECIPIENT, PumpFunAddresses.PROGRAM)
    assert keys[9] == expected


def test_explicit_creator_vault(builder, user, mint):
    creator = make_address(77)
    keys = account_keys(builder.build_sell_instruction(user, mint, 1, 1, creator=creator))
    expected, _ = derive_creator_vault_pda(creator, PumpFunAddresses.PROGRAM)
    assert keys[9] == expected


def test_custom_program_id(user, mint):
    program = make_address(88)
    ix = PumpFunInstructionBuilder(program_id=program).build_buy_instruction(user, mint, 1, 1)
    assert ix.program_id == program
    assert account_keys(ix)[11] == program


def test_builder_is_stateless(builder, user, mint):
    first = builder.build_buy_instruction(user, mint, 1, 2)
    builder.build_buy_instruction(make_address(1), make_address(2), 3, 4, mayhem_mode=True)
    assert builder.build_buy_instruction(user, mint, 1, 2) == first


def test_address_provider_maps(user, mint):
    provider = PumpFunAddressProvider()
    assert provider.platform is Platform.PUMP_FUN
    buy = provider.get_buy_instruction_accounts(user, mint)
    sell = provider.get_sell_instruction_accounts(user, mint)
    assert len(buy) == 16
    assert len(sell) == 14
    assert set(buy) - set(sell) == {"global_volume_accumulator", "user_volume_accumulator"}
    system = provider.get_system_addresses()
    assert system["program"] == PumpFunAddresses.PROGRAM
    assert system["token_program"] == SystemAddresses.TOKEN_PROGRAM


def test_required_accounts(builder, user, mint):
    accounts = builder.get_required_accounts_for_buy(user, mint)
    assert mint in accounts
    assert PumpFunAddresses.PROGRAM in accounts
    assert builder.get_required_accounts_for_sell(user, mint) == accounts
