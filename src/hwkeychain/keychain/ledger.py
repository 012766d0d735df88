"""Keychain backed by a ledger device.

The device is queried once for the addresses of a fixed list of derivation
indices. Signers returned by the keychain route every signing request back
to the device with the index that produced their address.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from hwkeychain.ids import ShortID
from hwkeychain.keychain.base import (
    InvalidAddressCountDerivedError,
    InvalidIndicesLengthError,
    InvalidNumAddrsToDeriveError,
    Keychain,
    Signer,
)
from hwkeychain.ledger.base import Ledger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerSigner(Signer):
    """Signer bound to one derivation index on a ledger device."""

    ledger: Ledger = field(repr=False)
    index: int
    _address: ShortID

    @property
    def address(self) -> ShortID:
        return self._address

    def sign_hash(self, digest: bytes) -> bytes:
        return self.ledger.sign_hash(digest, self.index)

    def sign(self, message: bytes) -> bytes:
        return self.ledger.sign(message, self.index)


class LedgerKeychain(Keychain):
    """Immutable keychain over a finite set of ledger-derived addresses.

    Use new_ledger_keychain() to build one.
    """

    def __init__(self, ledger: Ledger, addr_to_idx: Mapping[ShortID, int]):
        self.ledger = ledger
        self._addr_to_idx = MappingProxyType(dict(addr_to_idx))
        self._addrs = frozenset(self._addr_to_idx)

    def get(self, address: ShortID) -> Optional[LedgerSigner]:
        idx = self._addr_to_idx.get(address)
        if idx is None:
            return None
        return LedgerSigner(self.ledger, idx, address)

    def addresses(self) -> frozenset[ShortID]:
        return self._addrs

    def __repr__(self) -> str:
        return f"LedgerKeychain(ledger={self.ledger!r}, addresses={len(self._addrs)})"


def new_ledger_keychain(ledger: Ledger, indices: Iterable[int]) -> LedgerKeychain:
    """Build a keychain from the addresses the device derives for indices.

    Args:
        ledger: Device to derive addresses and sign with
        indices: Derivation indices, at least one

    Returns:
        LedgerKeychain holding one signer per derived address

    Raises:
        InvalidIndicesLengthError: If indices is empty
        InvalidAddressCountDerivedError: If the device returns a different
            number of addresses than indices requested
    """
    indices = list(indices)
    if not indices:
        raise InvalidIndicesLengthError()

    addresses = ledger.get_addresses(indices)
    if len(addresses) != len(indices):
        raise InvalidAddressCountDerivedError()

    # Later indices win if the device maps two indices to one address.
    addr_to_idx = {}
    for idx, addr in zip(indices, addresses):
        addr_to_idx[addr] = idx

    logger.debug(f"Derived {len(addr_to_idx)} addresses from {len(indices)} indices")
    return LedgerKeychain(ledger, addr_to_idx)


new_ledger_keychain_from_indices = new_ledger_keychain


def new_ledger_keychain_from_count(ledger: Ledger, num_addrs: int) -> LedgerKeychain:
    """Build a keychain for indices 0..num_addrs-1.

    Raises:
        InvalidNumAddrsToDeriveError: If num_addrs is not positive
    """
    if num_addrs <= 0:
        raise InvalidNumAddrsToDeriveError()
    return new_ledger_keychain(ledger, range(num_addrs))
