"""
Platform interfaces shared by the pump.fun and PumpSwap implementations.

Each platform provides an address provider (PDAs and account maps), an
instruction builder (buy/sell payloads) and an event parser (log body
decoding).
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any

from solders.instruction import Instruction
from solders.pubkey import Pubkey

if TYPE_CHECKING:
    from interfaces.events import EventKind


class Platform(Enum):
    """Programs this package understands."""

    PUMP_FUN = "pump_fun"
    PUMP_SWAP = "pump_swap"


class AddressProvider(ABC):
    """Derives the fixed accounts a platform instruction references."""

    @property
    @abstractmethod
    def platform(self) -> Platform:
        pass

    @property
    @abstractmethod
    def program_id(self) -> Pubkey:
        pass

    @abstractmethod
    def get_system_addresses(self) -> dict[str, Pubkey]:
        """All fixed addresses used by this platform, keyed by name."""
        pass

    @abstractmethod
    def get_buy_instruction_accounts(self, *args: Any, **kwargs: Any) -> dict[str, Pubkey]:
        pass

    @abstractmethod
    def get_sell_instruction_accounts(self, *args: Any, **kwargs: Any) -> dict[str, Pubkey]:
        pass


class InstructionBuilder(ABC):
    """Builds buy and sell instructions for one platform."""

    @property
    @abstractmethod
    def platform(self) -> Platform:
        pass

    @abstractmethod
    def build_buy_instruction(self, *args: Any, **kwargs: Any) -> Instruction:
        pass

    @abstractmethod
    def build_sell_instruction(self, *args: Any, **kwargs: Any) -> Instruction:
        pass


class EventParser(ABC):
    """Decodes event bodies emitted by one platform."""

    @property
    @abstractmethod
    def platform(self) -> Platform:
        pass

    @property
    @abstractmethod
    def event_kinds(self) -> frozenset["EventKind"]:
        """Event kinds this parser can decode."""
        pass

    @abstractmethod
    def decode_event(self, kind: "EventKind", body: bytes) -> Any:
        """Decode an event body (discriminator already stripped).

        Raises:
            EventDecodeError: if the body does not match the schema
        """
        pass
