"""Tests for address identifiers."""

import base58
import pytest

from hwkeychain.ids import MAX_INDEX, ShortID, validate_index


class TestShortID:
    """Tests for ShortID."""

    def test_requires_twenty_bytes(self):
        """Test wrong lengths are rejected."""
        with pytest.raises(ValueError):
            ShortID(bytes(19))
        with pytest.raises(ValueError):
            ShortID(bytes(21))

    def test_rejects_non_bytes(self):
        """Test non-bytes input is rejected."""
        with pytest.raises(ValueError):
            ShortID("a" * 20)

    def test_empty(self):
        """Test the empty id is all zeros."""
        assert bytes(ShortID.EMPTY) == bytes(20)

    def test_hashable_and_equal(self):
        """Test ids with equal bytes are interchangeable as keys."""
        a = ShortID(bytes(range(20)))
        b = ShortID(bytearray(range(20)))

        assert a == b
        assert {a: 1}[b] == 1

    def test_hex(self):
        """Test hex encoding and parsing."""
        sid = ShortID(bytes(range(20)))

        assert sid.hex() == "000102030405060708090a0b0c0d0e0f10111213"
        assert ShortID.from_hex("0x" + sid.hex()) == sid

    def test_hex_prefix_only_stripped_at_start(self):
        """Test 0x is stripped as a prefix, in either case."""
        sid = ShortID(bytes(range(20)))

        assert ShortID.from_hex("0X" + sid.hex().upper()) == sid
        with pytest.raises(ValueError):
            ShortID.from_hex(sid.hex()[:2] + "0x" + sid.hex()[2:])

    def test_cb58_string(self):
        """Test the string form parses back to the same id."""
        sid = ShortID(bytes(range(1, 21)))

        assert ShortID.from_string(str(sid)) == sid

    def test_cb58_bad_checksum(self):
        """Test a corrupted checksum is rejected."""
        raw = bytes(range(1, 21))
        text = base58.b58encode(raw + b"\x00\x00\x00\x00").decode()

        with pytest.raises(ValueError, match="checksum"):
            ShortID.from_string(text)

    def test_cb58_bad_length(self):
        """Test strings of the wrong decoded length are rejected."""
        with pytest.raises(ValueError):
            ShortID.from_string(base58.b58encode(b"short").decode())

    def test_prefixed(self):
        """Test HRP prefixing."""
        sid = ShortID(bytes(range(20)))

        assert sid.prefixed("avax") == f"avax-{sid}"
        assert sid.prefixed() == str(sid)


class TestValidateIndex:
    """Tests for derivation index validation."""

    @pytest.mark.parametrize("index", [0, 1, MAX_INDEX])
    def test_valid(self, index):
        assert validate_index(index) == index

    @pytest.mark.parametrize("index", [-1, MAX_INDEX + 1, True, "1", 1.0])
    def test_invalid(self, index):
        with pytest.raises(ValueError):
            validate_index(index)
