"""
PPP Packet Construction
=======================

This module splits the payload of an S2 record into the fixed-size packets
that the DSP563xx bootstrap loader accepts in PPP mode.

Packet Layout
-------------
Every packet starts with a 6-byte header followed by the data bytes:

    Byte 0:    Opcode (0xC5 = X, 0xC6 = Y, 0xC4 = P)
    Byte 1:    0x00
    Byte 2:    Number of 24-bit words carried
    Byte 3-5:  Base address of the packet (24-bit, big-endian)
    Byte 6+:   Data bytes

Splitting
---------
A packet holds at most packet_size bytes including its header. A record
whose payload does not fit is continued in further packets; each one
starts at the previous base address plus the number of 3-byte words
written in the previous packet, because the DSP addresses memory in words.

The declared length of a packet is min(remaining + 6, packet_size). When
the remaining payload fits, its word count is remaining // 3; otherwise
the full packet word count (packet_size - 6) // 3 is used.

Symbol Naming
-------------
Each packet is named PPP_<space><label>, where label is the 6-digit
uppercase hex base address with its leading '0' characters stripped.
Address 0x000400 gives PPP_X400; address 0 gives PPP_X.

Copyright (c) 2009 Sam Grove, MIT License
"""

from dataclasses import dataclass, field
from typing import Iterator, Sequence
import logging

from srec2inc.errors import AddressOverflowError
from srec2inc.srec.records import MemorySpace, SPACE_TABLE

# Logger for this module
logger = logging.getLogger(__name__)

# Opcode, reserved byte, word count, 3 address bytes
PACKET_HEADER_BYTES = 6

# DSP563xx word size in bytes
WORD_BYTES = 3

MAX_ADDRESS = 0xFFFFFF


# =============================================================================
# Label Helpers
# =============================================================================

def strip_label(address_text: str) -> str:
    """
    Strip the leading '0' characters of a 6-digit address.

    Stripping stops at the first non-'0' character, so an all-zero
    address collapses to an empty label.

    Examples:
        >>> strip_label("000400")
        '400'
        >>> strip_label("000000")
        ''
        >>> strip_label("ABCDEF")
        'ABCDEF'
    """
    return address_text.lstrip("0")


def address_label(address: int) -> str:
    """Label for a 24-bit address: uppercase 6-digit hex, zeros stripped."""
    return strip_label(f"{address:06X}")


# =============================================================================
# Packet
# =============================================================================

@dataclass(frozen=True)
class Packet:
    """
    A single PPP transfer packet.

    Attributes:
        space: Memory space the packet loads into (X, Y or P)
        address: 24-bit base address of the packet
        declared_length: Total bytes in the packet, header included
        word_count: Word count written into header byte 2
        data: Payload bytes of this packet, as 2-digit hex text
    """
    space: MemorySpace
    address: int
    declared_length: int
    word_count: int
    data: tuple[str, ...] = field(default_factory=tuple)

    @property
    def label(self) -> str:
        """Stripped address label used in symbol names."""
        return address_label(self.address)

    @property
    def symbol(self) -> str:
        """Base symbol name, e.g. PPP_X400."""
        return f"PPP_{SPACE_TABLE[self.space].letter}{self.label}"

    @property
    def header_bytes(self) -> tuple[int, int, int]:
        """Opcode, reserved zero byte, word count."""
        return (SPACE_TABLE[self.space].opcode, 0x00, self.word_count)

    @property
    def address_bytes(self) -> tuple[int, int, int]:
        """Base address as three big-endian bytes."""
        return (
            (self.address >> 16) & 0xFF,
            (self.address >> 8) & 0xFF,
            self.address & 0xFF,
        )

    @property
    def data_bytes(self) -> tuple[int, ...]:
        """Payload bytes as integers."""
        return tuple(int(pair, 16) for pair in self.data)

    def to_bytes(self) -> bytes:
        """Serialize the whole packet (header, address, data)."""
        return bytes(self.header_bytes + self.address_bytes + self.data_bytes)


# =============================================================================
# Payload Splitting
# =============================================================================

def split_payload(
    space: MemorySpace,
    address: int,
    payload: Sequence[str],
    packet_size: int,
) -> Iterator[Packet]:
    """
    Split a record payload into PPP packets.

    An empty payload still produces one header-only packet so the record
    stays visible in the output.

    Args:
        space: Active memory space (must not be NONE)
        address: 24-bit load address of the record
        payload: Payload bytes as 2-digit hex text
        packet_size: Maximum packet size in bytes, header included

    Yields:
        Packets in address order

    Raises:
        AddressOverflowError: If a continuation packet starts past 0xFFFFFF
    """
    capacity = packet_size - PACKET_HEADER_BYTES
    remaining = len(payload)
    offset = 0

    while True:
        if remaining + PACKET_HEADER_BYTES <= packet_size:
            declared_length = remaining + PACKET_HEADER_BYTES
            word_count = remaining // WORD_BYTES
        else:
            declared_length = packet_size
            word_count = capacity // WORD_BYTES

        taken = declared_length - PACKET_HEADER_BYTES
        packet = Packet(
            space=space,
            address=address,
            declared_length=declared_length,
            word_count=word_count,
            data=tuple(payload[offset:offset + taken]),
        )
        logger.debug(
            f"Packet {packet.symbol}: {declared_length} bytes, "
            f"{word_count} words"
        )
        yield packet

        offset += taken
        remaining -= taken
        if remaining <= 0:
            return

        address += taken // WORD_BYTES
        if address > MAX_ADDRESS:
            raise AddressOverflowError(address)
