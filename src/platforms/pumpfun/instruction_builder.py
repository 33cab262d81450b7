"""
pump.fun implementation of InstructionBuilder interface.

Builds bonding curve buy and sell instructions.

Data layout:
- buy:  selector (8) + amount (u64) + max_sol_cost (u64) + track_volume (Option<bool>)
- sell: selector (8) + amount (u64) + min_sol_output (u64)
"""

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from core.codec import OptionBool, pack_u64
from interfaces.core import InstructionBuilder, Platform
from interfaces.events import BUY_INSTRUCTION_DISCRIMINATOR, SELL_INSTRUCTION_DISCRIMINATOR
from platforms.pumpfun.address_provider import PumpFunAddresses, PumpFunAddressProvider


class PumpFunInstructionBuilder(InstructionBuilder):
    """Builds buy/sell instructions for the pump.fun bonding curve.

    Holds no state beyond the program id; every call derives its accounts
    from the arguments.
    """

    def __init__(self, program_id: Pubkey = PumpFunAddresses.PROGRAM):
        self.address_provider = PumpFunAddressProvider(program_id)

    @property
    def platform(self) -> Platform:
        return Platform.PUMP_FUN

    @property
    def program_id(self) -> Pubkey:
        return self.address_provider.program_id

    def build_buy_instruction(
        self,
        user: Pubkey,
        mint: Pubkey,
        amount: int,
        max_sol_cost: int,
        track_volume: OptionBool = OptionBool.ABSENT,
        mayhem_mode: bool = False,
        creator: Pubkey | None = None,
    ) -> Instruction:
        """Build a bonding curve buy.

        Args:
            user: Buyer wallet (signer)
            mint: Token mint
            amount: Token amount to receive (raw units)
            max_sol_cost: Maximum lamports to spend
            track_volume: Volume tracking flag
            mayhem_mode: Use the mayhem fee recipient and Token-2022
            creator: Creator-vault owner (defaults to the selected fee recipient)

        Returns:
            Instruction with 16 accounts
        """
        accounts_info = self.address_provider.get_buy_instruction_accounts(
            user, mint, mayhem_mode=mayhem_mode, creator=creator
        )

        accounts = [
            AccountMeta(pubkey=accounts_info["global"], is_signer=False, is_writable=False),  # global
            AccountMeta(pubkey=accounts_info["fee_recipient"], is_signer=False, is_writable=True),  # fee_recipient
            AccountMeta(pubkey=accounts_info["mint"], is_signer=False, is_writable=False),  # mint
            AccountMeta(pubkey=accounts_info["bonding_curve"], is_signer=False, is_writable=True),  # bonding_curve
            AccountMeta(pubkey=accounts_info["associated_bonding_curve"], is_signer=False, is_writable=True),  # associated_bonding_curve
            AccountMeta(pubkey=accounts_info["associated_user"], is_signer=False, is_writable=True),  # associated_user
            AccountMeta(pubkey=accounts_info["user"], is_signer=True, is_writable=True),  # user
            AccountMeta(pubkey=accounts_info["system_program"], is_signer=False, is_writable=False),  # system_program
            AccountMeta(pubkey=accounts_info["token_program"], is_signer=False, is_writable=False),  # token_program
            AccountMeta(pubkey=accounts_info["creator_vault"], is_signer=False, is_writable=True),  # creator_vault
            AccountMeta(pubkey=accounts_info["event_authority"], is_signer=False, is_writable=False),  # event_authority
            AccountMeta(pubkey=accounts_info["program"], is_signer=False, is_writable=False),  # program
            AccountMeta(pubkey=accounts_info["global_volume_accumulator"], is_signer=False, is_writable=True),  # global_volume_accumulator
            AccountMeta(pubkey=accounts_info["user_volume_accumulator"], is_signer=False, is_writable=True),  # user_volume_accumulator
            AccountMeta(pubkey=accounts_info["fee_config"], is_signer=False, is_writable=False),  # fee_config
            AccountMeta(pubkey=accounts_info["fee_program"], is_signer=False, is_writable=False),  # fee_program
        ]

        data = (
            BUY_INSTRUCTION_DISCRIMINATOR
            + pack_u64(amount)  # amount (u64) - tokens out
            + pack_u64(max_sol_cost)  # max_sol_cost (u64) - slippage cap
            + track_volume.to_bytes()  # track_volume (Option<bool>)
        )

        return Instruction(self.program_id, data, accounts)

    def build_sell_instruction(
        self,
        user: Pubkey,
        mint: Pubkey,
        amount: int,
        min_sol_output: int,
        mayhem_mode: bool = False,
        creator: Pubkey | None = None,
    ) -> Instruction:
        """Build a bonding curve sell. Same accounts as buy minus the volume accumulators."""
        accounts_info = self.address_provider.get_sell_instruction_accounts(
            user, mint, mayhem_mode=mayhem_mode, creator=creator
        )

        accounts = [
            AccountMeta(pubkey=accounts_info["global"], is_signer=False, is_writable=False),  # global
            AccountMeta(pubkey=accounts_info["fee_recipient"], is_signer=False, is_writable=True),  # fee_recipient
            AccountMeta(pubkey=accounts_info["mint"], is_signer=False, is_writable=False),  # mint
            AccountMeta(pubkey=accounts_info["bonding_curve"], is_signer=False, is_writable=True),  # bonding_curve
            AccountMeta(pubkey=accounts_info["associated_bonding_curve"], is_signer=False, is_writable=True),  # associated_bonding_curve
            AccountMeta(pubkey=accounts_info["associated_user"], is_signer=False, is_writable=True),  # associated_user
            AccountMeta(pubkey=accounts_info["user"], is_signer=True, is_writable=True),  # user
            AccountMeta(pubkey=accounts_info["system_program"], is_signer=False, is_writable=False),  # system_program
            AccountMeta(pubkey=accounts_info["token_program"], is_signer=False, is_writable=False),  # token_program
            AccountMeta(pubkey=accounts_info["creator_vault"], is_signer=False, is_writable=True),  # creator_vault
            AccountMeta(pubkey=accounts_info["event_authority"], is_signer=False, is_writable=False),  # event_authority
            AccountMeta(pubkey=accounts_info["program"], is_signer=False, is_writable=False),  # program
            AccountMeta(pubkey=accounts_info["fee_config"], is_signer=False, is_writable=False),  # fee_config
            AccountMeta(pubkey=accounts_info["fee_program"], is_signer=False, is_writable=False),  # fee_program
        ]

        data = (
            SELL_INSTRUCTION_DISCRIMINATOR
            + pack_u64(amount)  # amount (u64) - tokens in
            + pack_u64(min_sol_output)  # min_sol_output (u64)
        )

        return Instruction(self.program_id, data, accounts)

    def get_required_accounts_for_buy(
        self, user: Pubkey, mint: Pubkey, mayhem_mode: bool = False
    ) -> list[Pubkey]:
        """Accounts a buy touches, e.g. for priority fee estimation."""
        accounts_info = self.address_provider.get_buy_instruction_accounts(
            user, mint, mayhem_mode=mayhem_mode
        )
        return [
            mint,
            accounts_info["bonding_curve"],
            accounts_info["associated_bonding_curve"],
            accounts_info["associated_user"],
            accounts_info["fee_recipient"],
            accounts_info["creator_vault"],
            self.program_id,
        ]

    def get_required_accounts_for_sell(
        self, user: Pubkey, mint: Pubkey, mayhem_mode: bool = False
    ) -> list[Pubkey]:
        accounts_info = self.address_provider.get_sell_instruction_accounts(
            user, mint, mayhem_mode=mayhem_mode
        )
        return [
            mint,
            accounts_info["bonding_curve"],
            accounts_info["associated_bonding_curve"],
            accounts_info["associated_user"],
            accounts_info["fee_recipient"],
            accounts_info["creator_vault"],
            self.program_id,
        ]
