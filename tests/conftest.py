"""
srec2inc Test Configuration
===========================

Shared fixtures for building SREC records in tests.

It provides:
- make_s2: factory for well-formed S2 records with a valid checksum
- select_*: S0 records selecting each memory space
"""

import pytest


def _checksum(data: bytes) -> int:
    """SREC checksum: one's complement of the low byte of the sum."""
    return (~sum(data)) & 0xFF


def build_s2(address: int, data: bytes) -> str:
    """Build an S2 record token for a 24-bit address and payload."""
    length = len(data) + 4
    body = bytes([length]) + address.to_bytes(3, "big") + data
    return f"S2{body.hex().upper()}{_checksum(body):02X}"


def build_s0(space_code: int) -> str:
    """Build an S0 record token selecting a memory space code."""
    body = bytes([3, 0x00, space_code])
    return f"S0{body.hex().upper()}{_checksum(body):02X}"


@pytest.fixture
def make_s2():
    """Fixture: factory building S2 tokens, make_s2(address, data)."""
    return build_s2


@pytest.fixture
def make_s0():
    """Fixture: factory building S0 tokens, make_s0(space_code)."""
    return build_s0


@pytest.fixture
def select_x() -> str:
    return build_s0(1)


@pytest.fixture
def select_y() -> str:
    return build_s0(2)


@pytest.fixture
def select_p() -> str:
    return build_s0(4)


@pytest.fixture
def eighteen_bytes() -> bytes:
    """Payload 0x0A..0x1B, six DSP words."""
    return bytes(range(0x0A, 0x1C))
