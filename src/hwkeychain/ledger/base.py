"""Base interface for ledger devices.

A ledger holds the keys. Callers never see private material; they ask the
device for addresses and signatures by derivation index:

1. Resolve addresses for a set of indices
2. Submit a payload together with the index of the signing key
3. Device returns signature bytes
"""

from abc import ABC, abstractmethod
from enum import Enum

from hwkeychain.ids import ShortID


class LedgerType(str, Enum):
    """Type of ledger backend."""
    SIMULATED = "simulated"   # Deterministic in-process stand-in
    HID = "hid"               # Hardware device over USB HID


class Ledger(ABC):
    """Abstract base class for ledger devices.

    Implementations own their transport session. Every method may raise
    LedgerError (or anything the transport raises); callers get it unchanged.
    """

    def __init__(self, ledger_type: LedgerType):
        self.ledger_type = ledger_type

    @abstractmethod
    def address(self, display_hrp: str, index: int) -> ShortID:
        """Get the address for a derivation index.

        Args:
            display_hrp: Human-readable part to show on the device screen.
                An empty string skips on-device confirmation.
            index: Derivation index

        Returns:
            Address derived at the index
        """
        pass

    @abstractmethod
    def get_addresses(self, indices: list[int]) -> list[ShortID]:
        """Get addresses for a batch of derivation indices.

        Returns:
            Addresses in the same order and count as indices
        """
        pass

    @abstractmethod
    def sign_hash(self, digest: bytes, index: int) -> bytes:
        """Sign a pre-hashed digest with the key at index."""
        pass

    @abstractmethod
    def sign(self, message: bytes, index: int) -> bytes:
        """Sign raw message bytes with the key at index."""
        pass

    @abstractmethod
    def sign_transaction(self, unsigned_tx: bytes, indices: list[int]) -> list[bytes]:
        """Sign an unsigned transaction with every key in indices.

        Returns:
            One signature per index, in index order
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release the device session."""
        pass

    def health_check(self) -> bool:
        """Check if the device is available.

        Returns:
            True if the device can serve requests
        """
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.ledger_type.value})"


class LedgerError(Exception):
    """Exception raised when a device operation fails."""
    pass


class LedgerDisconnectedError(LedgerError):
    """Exception raised when the device session is closed."""
    pass


class UserRejectedError(LedgerError):
    """Exception raised when the user refuses the request on the device."""
    pass


class LedgerStatusError(LedgerError):
    """Exception raised when the device answers with an error status word."""

    def __init__(self, status: int, message: str = ""):
        self.status = status
        super().__init__(message or f"Ledger returned status 0x{status:04X}")
