"""Address identifiers.

A ShortID is the fixed-width 20-byte handle a device returns for a
derivation index. The canonical string form is CB58: base58 over the raw
bytes followed by the last 4 bytes of their sha256 digest.
"""

import hashlib
from dataclasses import dataclass
from typing import ClassVar, Optional

import base58

SHORT_ID_LEN = 20
CHECKSUM_LEN = 4
MAX_INDEX = 0xFFFFFFFF


def validate_index(index: int) -> int:
    """Check that a derivation index fits in an unsigned 32-bit slot.

    Raises:
        ValueError: If index is not an int in 0..2**32-1
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise ValueError(f"Derivation index must be an int, got {type(index).__name__}")
    if index < 0 or index > MAX_INDEX:
        raise ValueError(f"Derivation index must be between 0 and {MAX_INDEX}, got {index}")
    return index


def _checksum(raw: bytes) -> bytes:
    return hashlib.sha256(raw).digest()[-CHECKSUM_LEN:]


@dataclass(frozen=True)
class ShortID:
    """20-byte address identifier."""

    raw: bytes

    EMPTY: ClassVar["ShortID"]

    def __post_init__(self):
        if not isinstance(self.raw, (bytes, bytearray)):
            raise ValueError(f"ShortID expects bytes, got {type(self.raw).__name__}")
        if len(self.raw) != SHORT_ID_LEN:
            raise ValueError(f"ShortID must be {SHORT_ID_LEN} bytes, got {len(self.raw)}")
        object.__setattr__(self, "raw", bytes(self.raw))

    @classmethod
    def from_hex(cls, text: str) -> "ShortID":
        """Parse a hex string, with or without 0x prefix."""
        return cls(bytes.fromhex(text.lower().removeprefix("0x")))

    @classmethod
    def from_string(cls, text: str) -> "ShortID":
        """Parse the CB58 string form.

        Raises:
            ValueError: On bad alphabet, bad checksum or bad length
        """
        decoded = base58.b58decode(text)
        if len(decoded) != SHORT_ID_LEN + CHECKSUM_LEN:
            raise ValueError(f"Invalid CB58 length for ShortID: {len(decoded)}")
        raw, checksum = decoded[:-CHECKSUM_LEN], decoded[-CHECKSUM_LEN:]
        if _checksum(raw) != checksum:
            raise ValueError("Invalid CB58 checksum")
        return cls(raw)

    def hex(self) -> str:
        return self.raw.hex()

    def prefixed(self, hrp: Optional[str] = None) -> str:
        """Return "hrp-cb58", or the plain CB58 string without an HRP."""
        if not hrp:
            return str(self)
        return f"{hrp}-{self}"

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return base58.b58encode(self.raw + _checksum(self.raw)).decode()

    def __repr__(self) -> str:
        return f"ShortID({self})"


ShortID.EMPTY = ShortID(bytes(SHORT_ID_LEN))
