"""Simulated ledger backend.

Deterministic in-process stand-in for a hardware device. Suitable for:
- Development without a device attached
- Reproducible tests

Addresses and signatures are pure functions of the seed, the index and the
payload. They are NOT real signatures.
"""

import hashlib
import logging

from hwkeychain.ids import SHORT_ID_LEN, ShortID, validate_index
from hwkeychain.ledger.base import Ledger, LedgerDisconnectedError, LedgerType

logger = logging.getLogger(__name__)


class SimulatedLedger(Ledger):
    """Simulated ledger for testing (no real derivation)."""

    def __init__(self, seed: str = "hwkeychain"):
        super().__init__(LedgerType.SIMULATED)
        self._seed = seed.encode()
        self._connected = True

    def _ensure_connected(self):
        if not self._connected:
            raise LedgerDisconnectedError("Simulated ledger is disconnected")

    def _digest(self, kind: bytes, index: int, payload: bytes = b"") -> bytes:
        validate_index(index)
        return hashlib.sha512(
            self._seed + kind + index.to_bytes(4, "big") + payload
        ).digest()

    def address(self, display_hrp: str, index: int) -> ShortID:
        """Generate simulated address."""
        self._ensure_connected()
        validate_index(index)
        raw = hashlib.sha256(self._seed + b"addr" + index.to_bytes(4, "big")).digest()
        return ShortID(raw[:SHORT_ID_LEN])

    def get_addresses(self, indices: list[int]) -> list[ShortID]:
        return [self.address("", idx) for idx in indices]

    def sign_hash(self, digest: bytes, index: int) -> bytes:
        self._ensure_connected()
        return self._digest(b"hash", index, digest)

    def sign(self, message: bytes, index: int) -> bytes:
        self._ensure_connected()
        return self._digest(b"msg", index, message)

    def sign_transaction(self, unsigned_tx: bytes, indices: list[int]) -> list[bytes]:
        self._ensure_connected()
        return [self._digest(b"tx", idx, unsigned_tx) for idx in indices]

    def disconnect(self) -> None:
        if self._connected:
            logger.info("Simulated ledger disconnected")
        self._connected = False

    def health_check(self) -> bool:
        return self._connected
