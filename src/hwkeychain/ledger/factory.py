"""Ledger factory.

Creates the appropriate ledger backend based on configuration.
"""

import logging
from typing import Optional

from hwkeychain.config import get_settings
from hwkeychain.ledger.base import Ledger, LedgerType

logger = logging.getLogger(__name__)


def get_ledger_type() -> LedgerType:
    """Determine which ledger backend to use from settings.

    Returns:
        LedgerType enum
    """
    return LedgerType(get_settings().ledger_backend)


_ledger_instance: Optional[Ledger] = None


def create_ledger(ledger_type: LedgerType) -> Ledger:
    """Create a new ledger of the given type using configured options."""
    settings = get_settings()
    logger.info(f"Initializing {ledger_type.value} ledger")

    if ledger_type == LedgerType.HID:
        from hwkeychain.ledger.hid import HIDLedger
        return HIDLedger(
            coin_type=settings.ledger_coin_type,
            account=settings.ledger_account,
            debug=settings.ledger_transport_debug,
        )

    from hwkeychain.ledger.simulated import SimulatedLedger
    return SimulatedLedger(seed=settings.ledger_simulated_seed)


def get_ledger() -> Ledger:
    """Get the configured ledger instance.

    Returns singleton instance for the configured ledger type.
    """
    global _ledger_instance

    if _ledger_instance is None:
        _ledger_instance = create_ledger(get_ledger_type())

    return _ledger_instance


def reset_ledger():
    """Disconnect and drop the ledger instance."""
    global _ledger_instance
    ledger, _ledger_instance = _ledger_instance, None
    if ledger is not None:
        ledger.disconnect()


def get_ledger_info() -> dict:
    """Get information about the current ledger configuration.

    Returns:
        Dict with ledger type, health status and implementing class
    """
    ledger = get_ledger()

    return {
        "type": ledger.ledger_type.value,
        "healthy": ledger.health_check(),
        "class": ledger.__class__.__name__,
    }
