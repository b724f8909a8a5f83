"""Tests for the CRC-16 used to derive RNG seeds."""

from chip8vm.crc16 import Crc16


def test_check_value():
    assert Crc16.at_once(b"123456789") == 0x29B1


def test_empty_input_is_initial_value():
    assert Crc16.at_once(b"") == 0xFFFF


def test_incremental_matches_at_once():
    crc = Crc16()
    crc.update(b"1234")
    crc.update(b"56789")
    assert crc.digest() == Crc16.at_once(b"123456789")


def test_accepts_integer_sequences():
    assert Crc16.at_once([0x31, 0x32, 0x33]) == Crc16.at_once(b"123")
