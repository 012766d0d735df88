"""Keychains and signers over ledger devices."""

from hwkeychain.keychain.base import (
    InvalidAddressCountDerivedError,
    InvalidIndicesLengthError,
    InvalidNumAddrsToDeriveError,
    InvalidNumSignaturesError,
    Keychain,
    KeychainError,
    Signer,
    UnknownAddressError,
)
from hwkeychain.keychain.ledger import (
    LedgerKeychain,
    LedgerSigner,
    new_ledger_keychain,
    new_ledger_keychain_from_count,
    new_ledger_keychain_from_indices,
)
from hwkeychain.keychain.transaction import sign_transaction

__all__ = [
    "Keychain",
    "Signer",
    "LedgerKeychain",
    "LedgerSigner",
    "new_ledger_keychain",
    "new_ledger_keychain_from_indices",
    "new_ledger_keychain_from_count",
    "sign_transaction",
    "KeychainError",
    "InvalidIndicesLengthError",
    "InvalidNumAddrsToDeriveError",
    "InvalidAddressCountDerivedError",
    "InvalidNumSignaturesError",
    "UnknownAddressError",
]
