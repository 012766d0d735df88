"""Pytest configuration and fixtures."""

import os
from typing import Optional

import pytest

# Set test environment
os.environ["LEDGER_DISPLAY_HRP"] = "avax"
os.environ["LEDGER_BACKEND"] = "simulated"
os.environ["LEDGER_SIMULATED_SEED"] = "test-seed"
os.environ["KEYCHAIN_INDICES"] = "0,1,2"
os.environ["DEBUG"] = "false"

from hwkeychain.config import get_settings
from hwkeychain.ids import ShortID
from hwkeychain.ledger.base import Ledger, LedgerType
from hwkeychain.ledger.factory import reset_ledger
from hwkeychain.ledger.simulated import SimulatedLedger


def short_id(n: int) -> ShortID:
    """ShortID whose first byte is n."""
    return ShortID(bytes([n]) + bytes(19))


class RecordingLedger(Ledger):
    """Ledger double that records the index of every call.

    Addresses come from the addresses mapping, defaulting to short_id(index).
    """

    def __init__(
        self,
        addresses: Optional[dict[int, ShortID]] = None,
        drop_addresses: int = 0,
        drop_signatures: int = 0,
        error: Optional[Exception] = None,
    ):
        super().__init__(LedgerType.SIMULATED)
        self.addresses = addresses or {}
        self.drop_addresses = drop_addresses
        self.drop_signatures = drop_signatures
        self.error = error
        self.calls: list[tuple] = []

    def _maybe_fail(self):
        if self.error is not None:
            raise self.error

    def address(self, display_hrp: str, index: int) -> ShortID:
        return self.addresses.get(index, short_id(index))

    def get_addresses(self, indices: list[int]) -> list[ShortID]:
        self.calls.append(("get_addresses", list(indices)))
        self._maybe_fail()
        result = [self.address("", idx) for idx in indices]
        return result[:len(result) - self.drop_addresses]

    def sign_hash(self, digest: bytes, index: int) -> bytes:
        self.calls.append(("sign_hash", digest, index))
        self._maybe_fail()
        return b"hash-sig-" + bytes([index])

    def sign(self, message: bytes, index: int) -> bytes:
        self.calls.append(("sign", message, index))
        self._maybe_fail()
        return b"msg-sig-" + bytes([index])

    def sign_transaction(self, unsigned_tx: bytes, indices: list[int]) -> list[bytes]:
        self.calls.append(("sign_transaction", unsigned_tx, list(indices)))
        self._maybe_fail()
        sigs = [b"tx-sig-" + bytes([idx]) for idx in indices]
        return sigs[:len(sigs) - self.drop_signatures]

    def disconnect(self) -> None:
        self.calls.append(("disconnect",))


@pytest.fixture(autouse=True)
def clean_state():
    """Reset cached settings and the ledger singleton around each test."""
    get_settings.cache_clear()
    reset_ledger()
    yield
    reset_ledger()
    get_settings.cache_clear()


@pytest.fixture
def simulated_ledger() -> SimulatedLedger:
    """Simulated ledger with a fixed seed."""
    return SimulatedLedger(seed="test-seed")


@pytest.fixture
def recording_ledger() -> RecordingLedger:
    """Recording ledger with one distinct address per index."""
    return RecordingLedger()


@pytest.fixture
def make_ledger():
    """Factory for recording ledgers with custom behavior."""
    return RecordingLedger


@pytest.fixture
def make_id():
    """Factory for ShortIDs keyed by their first byte."""
    return short_id
