"""Keychain over ledger-held keys.

Derives a fixed set of addresses from a ledger device and hands out
per-address signers that delegate signing back to the device.
"""

from hwkeychain.ids import ShortID
from hwkeychain.keychain import (
    InvalidAddressCountDerivedError,
    InvalidIndicesLengthError,
    InvalidNumAddrsToDeriveError,
    InvalidNumSignaturesError,
    Keychain,
    KeychainError,
    LedgerKeychain,
    LedgerSigner,
    Signer,
    UnknownAddressError,
    new_ledger_keychain,
    new_ledger_keychain_from_count,
    new_ledger_keychain_from_indices,
    sign_transaction,
)
from hwkeychain.ledger import Ledger, LedgerError, SimulatedLedger

__version__ = "0.1.0"

__all__ = [
    "ShortID",
    "Keychain",
    "Signer",
    "LedgerKeychain",
    "LedgerSigner",
    "new_ledger_keychain",
    "new_ledger_keychain_from_indices",
    "new_ledger_keychain_from_count",
    "sign_transaction",
    "Ledger",
    "LedgerError",
    "SimulatedLedger",
    "KeychainError",
    "InvalidIndicesLengthError",
    "InvalidNumAddrsToDeriveError",
    "InvalidAddressCountDerivedError",
    "InvalidNumSignaturesError",
    "UnknownAddressError",
]
