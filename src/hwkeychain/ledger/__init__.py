"""Ledger device backends.

Provides device implementations:
- SimulatedLedger: Deterministic stand-in for development and tests
- HIDLedger: Hardware device over USB HID (ledgercomm)
"""

from hwkeychain.ledger.base import (
    Ledger,
    LedgerDisconnectedError,
    LedgerError,
    LedgerStatusError,
    LedgerType,
    UserRejectedError,
)
from hwkeychain.ledger.factory import get_ledger, reset_ledger
from hwkeychain.ledger.simulated import SimulatedLedger

__all__ = [
    "Ledger",
    "LedgerType",
    "LedgerError",
    "LedgerDisconnectedError",
    "LedgerStatusError",
    "UserRejectedError",
    "SimulatedLedger",
    "get_ledger",
    "reset_ledger",
]
