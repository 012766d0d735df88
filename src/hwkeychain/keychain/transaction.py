"""Batch transaction signing through a ledger keychain."""

from typing import Iterable

from hwkeychain.ids import ShortID
from hwkeychain.keychain.base import (
    InvalidIndicesLengthError,
    InvalidNumSignaturesError,
    UnknownAddressError,
)
from hwkeychain.keychain.ledger import LedgerKeychain


def sign_transaction(
    keychain: LedgerKeychain,
    unsigned_tx: bytes,
    addresses: Iterable[ShortID],
) -> list[bytes]:
    """Sign an unsigned transaction with the keys behind addresses.

    The device is asked once for all signatures.

    Args:
        keychain: Keychain holding every address
        unsigned_tx: Raw unsigned transaction bytes
        addresses: Addresses that must sign, in signature order

    Returns:
        Signatures in the same order as addresses

    Raises:
        InvalidIndicesLengthError: If addresses is empty
        UnknownAddressError: If an address is not held by the keychain
        InvalidNumSignaturesError: If the device returns a different number
            of signatures than addresses requested
    """
    addresses = list(addresses)
    if not addresses:
        raise InvalidIndicesLengthError()

    indices = []
    for address in addresses:
        signer = keychain.get(address)
        if signer is None:
            raise UnknownAddressError(address)
        indices.append(signer.index)

    signatures = keychain.ledger.sign_transaction(unsigned_tx, indices)
    if len(signatures) != len(indices):
        raise InvalidNumSignaturesError()
    return signatures
