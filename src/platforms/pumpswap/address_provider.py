"""
PumpSwap implementation of the AddressProvider interface.

PumpSwap is the AMM that pump.fun tokens migrate to once their bonding
curve completes.

- Program ID: pAMMBay6oceH9fJKBRHGP5D4bD4sWpmSwMn52FMfXEA
- Pools trade a base mint against a quote mint. When the quote is a core
  asset (WSOL or USDC) the caller's direction is used as is; for any other
  quote the program's buy and sell roles are swapped.
"""

from dataclasses import dataclass
from typing import Final

from solders.pubkey import Pubkey
from spl.token.instructions import get_associated_token_address

from core.pda import (
    derive_amm_coin_creator_vault_authority_pda,
    derive_amm_fee_config_pda,
    derive_amm_global_config_pda,
    derive_amm_pool_pda,
    derive_event_authority_pda,
    derive_global_volume_accumulator_pda,
    derive_user_volume_accumulator_pda,
)
from core.pubkeys import SystemAddresses
from interfaces.core import AddressProvider, Platform
from platforms.pumpfun.address_provider import PumpFunAddresses, select_fee_recipient


@dataclass
class PumpSwapAddresses:
    """PumpSwap program addresses."""

    PROGRAM: Final[Pubkey] = Pubkey.from_string(
        "pAMMBay6oceH9fJKBRHGP5D4bD4sWpmSwMn52FMfXEA"
    )


def uses_buy_selector(is_buy: bool, quote_mint: Pubkey) -> bool:
    """Resolve which program instruction a swap maps to.

    Core quote assets keep the requested direction; any other quote mint
    flips it.
    """
    if SystemAddresses.is_core_quote_mint(quote_mint):
        return is_buy
    return not is_buy


class PumpSwapAddressProvider(AddressProvider):
    """PumpSwap implementation of AddressProvider interface."""

    def __init__(self, program_id: Pubkey = PumpSwapAddresses.PROGRAM):
        self._program_id = program_id

    @property
    def platform(self) -> Platform:
        return Platform.PUMP_SWAP

    @property
    def program_id(self) -> Pubkey:
        return self._program_id

    def get_system_addresses(self) -> dict[str, Pubkey]:
        system_addresses = SystemAddresses.get_all_system_addresses()
        pumpswap_addresses = {
            "program": self._program_id,
            "global_config": self.derive_global_config(),
            "event_authority": self.derive_event_authority(),
            "fee_program": PumpFunAddresses.FEE_PROGRAM,
            "fee_config": self.derive_fee_config(),
        }
        return {**system_addresses, **pumpswap_addresses}

    def derive_global_config(self) -> Pubkey:
        return derive_amm_global_config_pda(self._program_id)[0]

    def derive_event_authority(self) -> Pubkey:
        return derive_event_authority_pda(self._program_id)[0]

    def derive_pool(
        self,
        index: int,
        creator: Pubkey,
        base_mint: Pubkey,
        quote_mint: Pubkey = SystemAddresses.SOL_MINT,
    ) -> Pubkey:
        """Derive a pool address from its creation parameters."""
        return derive_amm_pool_pda(index, creator, base_mint, quote_mint, self._program_id)[0]

    def derive_coin_creator_vault_authority(self, coin_creator: Pubkey) -> Pubkey:
        return derive_amm_coin_creator_vault_authority_pda(coin_creator, self._program_id)[0]

    def derive_global_volume_accumulator(self) -> Pubkey:
        return derive_global_volume_accumulator_pda(self._program_id)[0]

    def derive_user_volume_accumulator(self, user: Pubkey) -> Pubkey:
        return derive_user_volume_accumulator_pda(user, self._program_id)[0]

    def derive_fee_config(self) -> Pubkey:
        return derive_amm_fee_config_pda(PumpFunAddresses.FEE_PROGRAM)[0]

    def get_swap_instruction_accounts(
        self,
        user: Pubkey,
        pool: Pubkey,
        base_mint: Pubkey,
        quote_mint: Pubkey,
        coin_creator: Pubkey,
        protocol_fee_recipient: Pubkey,
        buy_selector: bool,
        mayhem_mode: bool = False,
    ) -> dict[str, Pubkey]:
        """Get the accounts of a PumpSwap swap, in instruction order.

        Args:
            user: Trader wallet (signer)
            pool: Pool address
            base_mint: Pool base mint
            quote_mint: Pool quote mint
            coin_creator: Coin creator recorded on the pool
            protocol_fee_recipient: Protocol fee recipient from the global config
            buy_selector: True when the resolved instruction is the program's buy;
                adds the volume accumulators
            mayhem_mode: Use the mayhem fee recipient

        Returns:
            Ordered dictionary of account name to address
        """
        vault_authority = self.derive_coin_creator_vault_authority(coin_creator)

        accounts = {
            "pool": pool,
            "user": user,
            "global_config": self.derive_global_config(),
            "base_mint": base_mint,
            "quote_mint": quote_mint,
            "user_base_token_account": get_associated_token_address(user, base_mint),
            "user_quote_token_account": get_associated_token_address(user, quote_mint),
            "pool_base_token_account": get_associated_token_address(pool, base_mint),
            "pool_quote_token_account": get_associated_token_address(pool, quote_mint),
            "fee_recipient": select_fee_recipient(mayhem_mode),
            "protocol_fee_recipient_token_account": get_associated_token_address(
                protocol_fee_recipient, quote_mint
            ),
            "base_token_program": SystemAddresses.TOKEN_PROGRAM,
            "quote_token_program": SystemAddresses.TOKEN_PROGRAM,
            "system_program": SystemAddresses.SYSTEM_PROGRAM,
            "associated_token_program": SystemAddresses.ASSOCIATED_TOKEN_PROGRAM,
            "event_authority": self.derive_event_authority(),
            "program": self._program_id,
            "coin_creator_vault_ata": get_associated_token_address(vault_authority, quote_mint),
            "coin_creator_vault_authority": vault_authority,
        }
        if buy_selector:
            accounts["global_volume_accumulator"] = self.derive_global_volume_accumulator()
            accounts["user_volume_accumulator"] = self.derive_user_volume_accumulator(user)
        accounts["fee_config"] = self.derive_fee_config()
        accounts["fee_program"] = PumpFunAddresses.FEE_PROGRAM
        return accounts

    def get_buy_instruction_accounts(
        self,
        user: Pubkey,
        pool: Pubkey,
        base_mint: Pubkey,
        quote_mint: Pubkey,
        coin_creator: Pubkey,
        protocol_fee_recipient: Pubkey,
        mayhem_mode: bool = False,
    ) -> dict[str, Pubkey]:
        return self.get_swap_instruction_accounts(
            user, pool, base_mint, quote_mint, coin_creator, protocol_fee_recipient,
            buy_selector=uses_buy_selector(True, quote_mint),
            mayhem_mode=mayhem_mode,
        )

    def get_sell_instruction_accounts(
        self,
        user: Pubkey,
        pool: Pubkey,
        base_mint: Pubkey,
        quote_mint: Pubkey,
        coin_creator: Pubkey,
        protocol_fee_recipient: Pubkey,
        mayhem_mode: bool = False,
    ) -> dict[str, Pubkey]:
        return self.get_swap_instruction_accounts(
            user, pool, base_mint, quote_mint, coin_creator, protocol_fee_recipient,
            buy_selector=uses_buy_selector(False, quote_mint),
            mayhem_mode=mayhem_mode,
        )
