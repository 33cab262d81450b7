"""
PumpSwap implementation of InstructionBuilder interface.

The AMM exposes ``buy`` (exact base out) and ``sell`` (exact base in).
Which one a caller's buy or sell maps to depends on the pool's quote mint,
see ``uses_buy_selector``.

Data layout:
- buy selector:  selector (8) + u64 + u64 + track_volume (Option<bool>)
- sell selector: selector (8) + u64 + u64
"""

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from core.codec import OptionBool, pack_u64
from interfaces.core import InstructionBuilder, Platform
from interfaces.events import BUY_INSTRUCTION_DISCRIMINATOR, SELL_INSTRUCTION_DISCRIMINATOR
from platforms.pumpswap.address_provider import (
    PumpSwapAddresses,
    PumpSwapAddressProvider,
    uses_buy_selector,
)


class PumpSwapInstructionBuilder(InstructionBuilder):
    """Builds buy/sell instructions for PumpSwap pools."""

    def __init__(self, program_id: Pubkey = PumpSwapAddresses.PROGRAM):
        self.address_provider = PumpSwapAddressProvider(program_id)

    @property
    def platform(self) -> Platform:
        return Platform.PUMP_SWAP

    @property
    def program_id(self) -> Pubkey:
        return self.address_provider.program_id

    def build_buy_instruction(
        self,
        user: Pubkey,
        pool: Pubkey,
        base_mint: Pubkey,
        quote_mint: Pubkey,
        coin_creator: Pubkey,
        protocol_fee_recipient: Pubkey,
        base_amount_out: int,
        max_quote_amount_in: int,
        track_volume: OptionBool = OptionBool.ABSENT,
        mayhem_mode: bool = False,
    ) -> Instruction:
        """Build a PumpSwap buy of ``base_amount_out`` base tokens.

        With a non-core quote mint this becomes the program's sell with the
        amounts swapped and no track_volume tail.

        Returns:
            Instruction with 23 accounts (buy selector) or 21 (sell selector)
        """
        buy_selector = uses_buy_selector(True, quote_mint)
        if buy_selector:
            data = (
                BUY_INSTRUCTION_DISCRIMINATOR
                + pack_u64(base_amount_out)  # base_amount_out (u64)
                + pack_u64(max_quote_amount_in)  # max_quote_amount_in (u64)
                + track_volume.to_bytes()  # track_volume (Option<bool>)
            )
        else:
            data = (
                SELL_INSTRUCTION_DISCRIMINATOR
                + pack_u64(max_quote_amount_in)
                + pack_u64(base_amount_out)
            )

        accounts_info = self.address_provider.get_swap_instruction_accounts(
            user, pool, base_mint, quote_mint, coin_creator, protocol_fee_recipient,
            buy_selector=buy_selector,
            mayhem_mode=mayhem_mode,
        )
        return Instruction(
            self.program_id, data, self._account_metas(accounts_info, buy_selector)
        )

    def build_sell_instruction(
        self,
        user: Pubkey,
        pool: Pubkey,
        base_mint: Pubkey,
        quote_mint: Pubkey,
        coin_creator: Pubkey,
        protocol_fee_recipient: Pubkey,
        base_amount_in: int,
        min_quote_amount_out: int,
        mayhem_mode: bool = False,
    ) -> Instruction:
        """Build a PumpSwap sell of ``base_amount_in`` base tokens.

        With a non-core quote mint this becomes the program's buy with the
        amounts swapped, an absent track_volume and the volume accumulators.
        """
        buy_selector = uses_buy_selector(False, quote_mint)
        if buy_selector:
            data = (
                BUY_INSTRUCTION_DISCRIMINATOR
                + pack_u64(min_quote_amount_out)
                + pack_u64(base_amount_in)
                + OptionBool.ABSENT.to_bytes()
            )
        else:
            data = (
                SELL_INSTRUCTION_DISCRIMINATOR
                + pack_u64(base_amount_in)  # base_amount_in (u64)
                + pack_u64(min_quote_amount_out)  # min_quote_amount_out (u64)
            )

        accounts_info = self.address_provider.get_swap_instruction_accounts(
            user, pool, base_mint, quote_mint, coin_creator, protocol_fee_recipient,
            buy_selector=buy_selector,
            mayhem_mode=mayhem_mode,
        )
        return Instruction(
            self.program_id, data, self._account_metas(accounts_info, buy_selector)
        )

    @staticmethod
    def _account_metas(accounts_info: dict[str, Pubkey], buy_selector: bool) -> list[AccountMeta]:
        accounts = [
            AccountMeta(pubkey=accounts_info["pool"], is_signer=False, is_writable=True),  # pool
            AccountMeta(pubkey=accounts_info["user"], is_signer=True, is_writable=True),  # user
            AccountMeta(pubkey=accounts_info["global_config"], is_signer=False, is_writable=False),  # global_config
            AccountMeta(pubkey=accounts_info["base_mint"], is_signer=False, is_writable=False),  # base_mint
            AccountMeta(pubkey=accounts_info["quote_mint"], is_signer=False, is_writable=False),  # quote_mint
            AccountMeta(pubkey=accounts_info["user_base_token_account"], is_signer=False, is_writable=True),  # user_base_token_account
            AccountMeta(pubkey=accounts_info["user_quote_token_account"], is_signer=False, is_writable=True),  # user_quote_token_account
            AccountMeta(pubkey=accounts_info["pool_base_token_account"], is_signer=False, is_writable=True),  # pool_base_token_account
            AccountMeta(pubkey=accounts_info["pool_quote_token_account"], is_signer=False, is_writable=True),  # pool_quote_token_account
            AccountMeta(pubkey=accounts_info["fee_recipient"], is_signer=False, is_writable=False),  # protocol_fee_recipient
            AccountMeta(pubkey=accounts_info["protocol_fee_recipient_token_account"], is_signer=False, is_writable=True),  # protocol_fee_recipient_token_account
            AccountMeta(pubkey=accounts_info["base_token_program"], is_signer=False, is_writable=False),  # base_token_program
            AccountMeta(pubkey=accounts_info["quote_token_program"], is_signer=False, is_writable=False),  # quote_token_program
            AccountMeta(pubkey=accounts_info["system_program"], is_signer=False, is_writable=False),  # system_program
            AccountMeta(pubkey=accounts_info["associated_token_program"], is_signer=False, is_writable=False),  # associated_token_program
            AccountMeta(pubkey=accounts_info["event_authority"], is_signer=False, is_writable=False),  # event_authority
            AccountMeta(pubkey=accounts_info["program"], is_signer=False, is_writable=False),  # program
            AccountMeta(pubkey=accounts_info["coin_creator_vault_ata"], is_signer=False, is_writable=True),  # coin_creator_vault_ata
            AccountMeta(pubkey=accounts_info["coin_creator_vault_authority"], is_signer=False, is_writable=False),  # coin_creator_vault_authority
        ]
        if buy_selector:
            accounts.append(AccountMeta(pubkey=accounts_info["global_volume_accumulator"], is_signer=False, is_writable=True))  # global_volume_accumulator
            accounts.append(AccountMeta(pubkey=accounts_info["user_volume_accumulator"], is_signer=False, is_writable=True))  # user_volume_accumulator
        accounts.append(AccountMeta(pubkey=accounts_info["fee_config"], is_signer=False, is_writable=False))  # fee_config
        accounts.append(AccountMeta(pubkey=accounts_info["fee_program"], is_signer=False, is_writable=False))  # fee_program
        return accounts

    def get_required_accounts_for_buy(
        self,
        user: Pubkey,
        pool: Pubkey,
        base_mint: Pubkey,
        quote_mint: Pubkey,
        coin_creator: Pubkey,
        protocol_fee_recipient: Pubkey,
    ) -> list[Pubkey]:
        """Accounts a buy touches, e.g. for priority fee estimation."""
        accounts_info = self.address_provider.get_buy_instruction_accounts(
            user, pool, base_mint, quote_mint, coin_creator, protocol_fee_recipient
        )
        return [
            pool,
            accounts_info["pool_base_token_account"],
            accounts_info["pool_quote_token_account"],
            accounts_info["user_base_token_account"],
            accounts_info["user_quote_token_account"],
            accounts_info["coin_creator_vault_ata"],
            self.program_id,
        ]

    def get_required_accounts_for_sell(
        self,
        user: Pubkey,
        pool: Pubkey,
        base_mint: Pubkey,
        quote_mint: Pubkey,
        coin_creator: Pubkey,
        protocol_fee_recipient: Pubkey,
    ) -> list[Pubkey]:
        accounts_info = self.address_provider.get_sell_instruction_accounts(
            user, pool, base_mint, quote_mint, coin_creator, protocol_fee_recipient
        )
        return [
            pool,
            accounts_info["pool_base_token_account"],
            accounts_info["pool_quote_token_account"],
            accounts_info["user_base_token_account"],
            accounts_info["user_quote_token_account"],
            accounts_info["coin_creator_vault_ata"],
            self.program_id,
        ]
