"""Hardware ledger backend over USB HID.

Talks to the wallet app on a Ledger device through ledgercomm.

Setup:
1. Install with the hid extra: pip install "ledgercomm[hid]"
2. Connect the device and open the wallet app
3. Set LEDGER_BACKEND=hid

APDU layout:
- CLA 0x80
- INS 0x02 get address, 0x03 sign hash, 0x04 sign message, 0x05 sign tx
- Derivation path m/44'/coin'/account'/0/index as a component count byte
  followed by big-endian uint32 components
- Signing payloads are sent in chunks: the path first (P1=0x00), then
  payload chunks (P1=0x01), the last one flagged with P1=0x02
"""

import logging
import struct

from hwkeychain.ids import SHORT_ID_LEN, ShortID, validate_index
from hwkeychain.ledger.base import (
    Ledger,
    LedgerDisconnectedError,
    LedgerError,
    LedgerStatusError,
    LedgerType,
    UserRejectedError,
)

logger = logging.getLogger(__name__)

CLA = 0x80
INS_GET_ADDR = 0x02
INS_SIGN_HASH = 0x03
INS_SIGN_MSG = 0x04
INS_SIGN_TX = 0x05

P1_NO_CONFIRM = 0x00
P1_CONFIRM = 0x01

P1_INIT = 0x00
P1_ADD = 0x01
P1_LAST = 0x02

CHUNK_SIZE = 250

SW_OK = 0x9000
SW_REJECTED = (0x6985, 0x6986)

HARDENED = 0x80000000


def serialize_path(coin_type: int, account: int, index: int) -> bytes:
    """Serialize m/44'/coin_type'/account'/0/index for the device."""
    components = [
        44 | HARDENED,
        coin_type | HARDENED,
        account | HARDENED,
        0,
        validate_index(index),
    ]
    return bytes([len(components)]) + b"".join(struct.pack(">I", c) for c in components)


def chunk_payload(path: bytes, payload: bytes) -> list[tuple[int, bytes]]:
    """Split a signing payload into (P1, data) chunks."""
    chunks = [(P1_INIT, path)]
    pieces = [payload[i:i + CHUNK_SIZE] for i in range(0, len(payload), CHUNK_SIZE)] or [b""]
    for i, piece in enumerate(pieces):
        p1 = P1_LAST if i == len(pieces) - 1 else P1_ADD
        chunks.append((p1, piece))
    return chunks


class HIDLedger(Ledger):
    """Ledger device backend using a ledgercomm transport.

    The transport is opened lazily on first use unless one is injected.
    """

    def __init__(
        self,
        transport=None,
        coin_type: int = 9000,
        account: int = 0,
        debug: bool = False,
    ):
        """Initialize HID ledger.

        Args:
            transport: Object with exchange(cla, ins, p1, p2, cdata) and close().
                Defaults to a ledgercomm HID transport.
            coin_type: BIP44 coin type
            account: BIP44 account
            debug: Enable ledgercomm APDU tracing
        """
        super().__init__(LedgerType.HID)

        self.coin_type = coin_type
        self.account = account
        self.debug = debug

        self._transport = transport
        self._closed = False

    def _get_transport(self):
        """Get or open the device transport."""
        if self._closed:
            raise LedgerDisconnectedError("Ledger transport is closed")

        if self._transport is not None:
            return self._transport

        try:
            from ledgercomm import Transport
        except ImportError:
            raise LedgerError(
                "ledgercomm library not installed. Install with: pip install \"ledgercomm[hid]\""
            )

        self._transport = Transport(interface="hid", debug=self.debug)
        logger.info("Opened Ledger HID transport")
        return self._transport

    def _exchange(self, ins: int, p1: int = 0, p2: int = 0, cdata: bytes = b"") -> bytes:
        transport = self._get_transport()
        logger.debug(f"APDU ins=0x{ins:02x} p1=0x{p1:02x} len={len(cdata)}")
        sw, response = transport.exchange(cla=CLA, ins=ins, p1=p1, p2=p2, cdata=cdata)

        if sw == SW_OK:
            return bytes(response)
        if sw in SW_REJECTED:
            raise UserRejectedError(f"User rejected the request on the device (0x{sw:04X})")
        raise LedgerStatusError(sw)

    def _sign_chunked(self, ins: int, index: int, payload: bytes) -> bytes:
        path = serialize_path(self.coin_type, self.account, index)
        response = b""
        for p1, data in chunk_payload(path, payload):
            response = self._exchange(ins, p1=p1, cdata=data)
        return response

    def address(self, display_hrp: str, index: int) -> ShortID:
        """Get address from the device, confirming on screen if an HRP is given."""
        path = serialize_path(self.coin_type, self.account, index)
        hrp = display_hrp.encode()
        p1 = P1_CONFIRM if hrp else P1_NO_CONFIRM

        response = self._exchange(INS_GET_ADDR, p1=p1, cdata=bytes([len(hrp)]) + hrp + path)
        if len(response) < SHORT_ID_LEN:
            raise LedgerError(f"Short address response from device: {len(response)} bytes")
        return ShortID(response[-SHORT_ID_LEN:])

    def get_addresses(self, indices: list[int]) -> list[ShortID]:
        return [self.address("", idx) for idx in indices]

    def sign_hash(self, digest: bytes, index: int) -> bytes:
        return self._sign_chunked(INS_SIGN_HASH, index, digest)

    def sign(self, message: bytes, index: int) -> bytes:
        return self._sign_chunked(INS_SIGN_MSG, index, message)

    def sign_transaction(self, unsigned_tx: bytes, indices: list[int]) -> list[bytes]:
        return [self._sign_chunked(INS_SIGN_TX, idx, unsigned_tx) for idx in indices]

    def disconnect(self) -> None:
        """Close the device transport."""
        transport = self._transport
        self._transport = None
        self._closed = True
        if transport is not None:
            transport.close()
            logger.info("Closed Ledger HID transport")

    def health_check(self) -> bool:
        """Check if the device is reachable."""
        try:
            self._get_transport()
            return True
        except Exception as e:
            logger.warning(f"Ledger health check failed: {e}")
            return False
