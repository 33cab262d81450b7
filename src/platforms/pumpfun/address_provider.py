"""
pump.fun implementation of the AddressProvider interface.

Holds the bonding curve program addresses and every PDA a buy or sell
on the bonding curve references.

- Program ID: 6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P
- Fee program: pfeeUxB6jkeY1Hxd7CsFCAjcbHA9rWtchMGdZ6VojVZ
- Mayhem mode: trades route fees to a separate recipient and use Token-2022
"""

from dataclasses import dataclass
from typing import Final

from solders.pubkey import Pubkey
from spl.token.instructions import get_associated_token_address

from core.pda import (
    derive_bonding_curve_pda,
    derive_creator_vault_pda,
    derive_event_authority_pda,
    derive_fee_config_pda,
    derive_global_pda,
    derive_global_volume_accumulator_pda,
    derive_user_volume_accumulator_pda,
)
from core.pubkeys import SystemAddresses
from interfaces.core import AddressProvider, Platform


@dataclass
class PumpFunAddresses:
    """pump.fun program addresses."""

    PROGRAM: Final[Pubkey] = Pubkey.from_string(
        "6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P"
    )
    # Shared with PumpSwap
    FEE_PROGRAM: Final[Pubkey] = Pubkey.from_string(
        "pfeeUxB6jkeY1Hxd7CsFCAjcbHA9rWtchMGdZ6VojVZ"
    )
    FEE_RECIPIENT: Final[Pubkey] = Pubkey.from_string(
        "62qc2CNXwrYqQScmEdiZFFAnJR262PxWEuNQtxfafNgV"
    )
    MAYHEM_FEE_RECIPIENT: Final[Pubkey] = Pubkey.from_string(
        "GesfTA3X2arioaHp8bbKdjG9vJtskViWACZoYvxp4twS"
    )


def select_fee_recipient(mayhem_mode: bool) -> Pubkey:
    return PumpFunAddresses.MAYHEM_FEE_RECIPIENT if mayhem_mode else PumpFunAddresses.FEE_RECIPIENT


def select_token_program(mayhem_mode: bool) -> Pubkey:
    return SystemAddresses.TOKEN_2022_PROGRAM if mayhem_mode else SystemAddresses.TOKEN_PROGRAM


class PumpFunAddressProvider(AddressProvider):
    """pump.fun implementation of AddressProvider interface."""

    def __init__(self, program_id: Pubkey = PumpFunAddresses.PROGRAM):
        self._program_id = program_id

    @property
    def platform(self) -> Platform:
        return Platform.PUMP_FUN

    @property
    def program_id(self) -> Pubkey:
        return self._program_id

    def get_system_addresses(self) -> dict[str, Pubkey]:
        """Get all system addresses required for pump.fun.

        Returns:
            Dictionary mapping address names to Pubkey objects
        """
        system_addresses = SystemAddresses.get_all_system_addresses()
        pumpfun_addresses = {
            "program": self._program_id,
            "global": self.derive_global(),
            "event_authority": self.derive_event_authority(),
            "fee_program": PumpFunAddresses.FEE_PROGRAM,
            "fee_recipient": PumpFunAddresses.FEE_RECIPIENT,
            "mayhem_fee_recipient": PumpFunAddresses.MAYHEM_FEE_RECIPIENT,
        }
        return {**system_addresses, **pumpfun_addresses}

    def derive_global(self) -> Pubkey:
        return derive_global_pda(self._program_id)[0]

    def derive_bonding_curve(self, mint: Pubkey) -> Pubkey:
        return derive_bonding_curve_pda(mint, self._program_id)[0]

    def derive_associated_bonding_curve(self, mint: Pubkey) -> Pubkey:
        """Token account holding the curve's unsold supply."""
        return get_associated_token_address(self.derive_bonding_curve(mint), mint)

    def derive_creator_vault(self, creator: Pubkey) -> Pubkey:
        return derive_creator_vault_pda(creator, self._program_id)[0]

    def derive_event_authority(self) -> Pubkey:
        return derive_event_authority_pda(self._program_id)[0]

    def derive_global_volume_accumulator(self) -> Pubkey:
        return derive_global_volume_accumulator_pda(self._program_id)[0]

    def derive_user_volume_accumulator(self, user: Pubkey) -> Pubkey:
        return derive_user_volume_accumulator_pda(user, self._program_id)[0]

    def derive_fee_config(self, fee_recipient: Pubkey) -> Pubkey:
        return derive_fee_config_pda(fee_recipient, PumpFunAddresses.FEE_PROGRAM)[0]

    def _get_common_accounts(
        self, user: Pubkey, mint: Pubkey, mayhem_mode: bool, creator: Pubkey | None
    ) -> dict[str, Pubkey]:
        fee_recipient = select_fee_recipient(mayhem_mode)
        bonding_curve = self.derive_bonding_curve(mint)
        # Vault owner defaults to the selected fee recipient
        vault_owner = creator if creator is not None else fee_recipient

        return {
            "global": self.derive_global(),
            "fee_recipient": fee_recipient,
            "mint": mint,
            "bonding_curve": bonding_curve,
            "associated_bonding_curve": get_associated_token_address(bonding_curve, mint),
            "associated_user": get_associated_token_address(user, mint),
            "user": user,
            "system_program": SystemAddresses.SYSTEM_PROGRAM,
            "token_program": select_token_program(mayhem_mode),
            "creator_vault": self.derive_creator_vault(vault_owner),
            "event_authority": self.derive_event_authority(),
            "program": self._program_id,
        }

    def get_buy_instruction_accounts(
        self,
        user: Pubkey,
        mint: Pubkey,
        mayhem_mode: bool = False,
        creator: Pubkey | None = None,
    ) -> dict[str, Pubkey]:
        """Get all accounts needed for a bonding curve buy, in instruction order.

        Args:
            user: Buyer wallet (signer)
            mint: Token mint
            mayhem_mode: Route fees to the mayhem recipient and use Token-2022
            creator: Creator-vault owner (defaults to the selected fee recipient)

        Returns:
            Ordered dictionary of account name to address
        """
        accounts = self._get_common_accounts(user, mint, mayhem_mode, creator)
        accounts["global_volume_accumulator"] = self.derive_global_volume_accumulator()
        accounts["user_volume_accumulator"] = self.derive_user_volume_accumulator(user)
        accounts["fee_config"] = self.derive_fee_config(accounts["fee_recipient"])
        accounts["fee_program"] = PumpFunAddresses.FEE_PROGRAM
        return accounts

    def get_sell_instruction_accounts(
        self,
        user: Pubkey,
        mint: Pubkey,
        mayhem_mode: bool = False,
        creator: Pubkey | None = None,
    ) -> dict[str, Pubkey]:
        """Get all accounts needed for a bonding curve sell, in instruction order."""
        accounts = self._get_common_accounts(user, mint, mayhem_mode, creator)
        accounts["fee_config"] = self.derive_fee_config(accounts["fee_recipient"])
        accounts["fee_program"] = PumpFunAddresses.FEE_PROGRAM
        return accounts
