"""Keychain interfaces.

A keychain maps a fixed set of addresses to signers. A signer produces
signatures for exactly one address and never exposes key material.
"""

from abc import ABC, abstractmethod
from typing import Optional

from hwkeychain.ids import ShortID


class Signer(ABC):
    """Signs on behalf of a single address."""

    @property
    @abstractmethod
    def address(self) -> ShortID:
        """Address this signer signs for."""
        pass

    @abstractmethod
    def sign_hash(self, digest: bytes) -> bytes:
        """Sign a pre-hashed digest."""
        pass

    @abstractmethod
    def sign(self, message: bytes) -> bytes:
        """Sign raw message bytes."""
        pass


class Keychain(ABC):
    """Set of addresses together with their signers."""

    @abstractmethod
    def get(self, address: ShortID) -> Optional[Signer]:
        """Get the signer for an address.

        Returns:
            Signer for the address, or None if the keychain does not hold it
        """
        pass

    @abstractmethod
    def addresses(self) -> frozenset[ShortID]:
        """Addresses for which the keychain holds a signer."""
        pass

    def __contains__(self, address: object) -> bool:
        return address in self.addresses()

    def __len__(self) -> int:
        return len(self.addresses())


class KeychainError(Exception):
    """Exception raised when a keychain cannot be built or used."""
    pass


class InvalidIndicesLengthError(KeychainError):
    """Exception raised when no derivation indices are given."""

    def __init__(self, message: str = "number of indices should be greater than 0"):
        super().__init__(message)


class InvalidNumAddrsToDeriveError(KeychainError):
    """Exception raised when asked to derive a non-positive number of addresses."""

    def __init__(self, message: str = "number of addresses to derive should be greater than 0"):
        super().__init__(message)


class InvalidAddressCountDerivedError(KeychainError):
    """Exception raised when the device returns the wrong number of addresses."""

    def __init__(self, message: str = "incorrect number of ledger derived addresses"):
        super().__init__(message)


class InvalidNumSignaturesError(KeychainError):
    """Exception raised when the device returns the wrong number of signatures."""

    def __init__(self, message: str = "incorrect number of signatures"):
        super().__init__(message)


class UnknownAddressError(KeychainError):
    """Exception raised when an address is not held by the keychain."""

    def __init__(self, address: ShortID):
        self.address = address
        super().__init__(f"address {address} is not managed by this keychain")
