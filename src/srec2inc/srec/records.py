"""
SREC Record Type Definitions
============================

This module defines the data structures for the Motorola S-records that
the transcoder understands. The DSP563xx toolchain is expected to produce
them with:

    srec -S -R -A3 program.cld

    -S   emits an S0 record in front of each block to select the DSP
         memory space (X, Y or P)
    -R   reverses the byte order of each 24-bit word (hi -> lo)
    -A3  forces S2 records with 24-bit addressing

Record Layout
-------------
All fields are ASCII hex digits following the two-character tag:

**S0** (memory space select):
    Chars 0-1:   "S0"
    Chars 2-3:   Record length
    Chars 4-7:   Address field; the low byte (chars 6-7) is the space code
    ...          Checksum

**S2** (24-bit data):
    Chars 0-1:   "S2"
    Chars 2-3:   Record length (address + payload + checksum bytes)
    Chars 4-9:   24-bit address
    Chars 10-n:  Payload bytes
    Last 2:      Checksum (not validated)

**S8** (end of block):
    Resets the active memory space.

Memory Space Codes
------------------
- 0: No space selected
- 1: X data memory
- 2: Y data memory
- 4: P program memory

Reference
---------
- Freescale DSP56300 Family Manual, appendix on SREC output
- Motorola S-record format: srec(5)

Copyright (c) 2009 Sam Grove, MIT License
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import NamedTuple, Optional


# Bytes of an S2 record's declared length that are not payload:
# 3 address bytes + 1 checksum byte.
S2_OVERHEAD_BYTES = 4


# =============================================================================
# Enumeration Types
# =============================================================================

class MemorySpace(IntEnum):
    """
    DSP563xx memory spaces, valued by their S0 space code.

    NONE means no space is active; S2 records are rejected until an S0
    record selects X, Y or P.
    """
    NONE = 0
    X = 1
    Y = 2
    P = 4

    @classmethod
    def from_code(cls, code: int) -> "MemorySpace":
        """
        Convert an S0 space code to a MemorySpace.

        Raises:
            ValueError: If the code is not 0, 1, 2 or 4
        """
        return cls(code)


class RecordKind(Enum):
    """SREC record tags recognized by the transcoder."""
    S0 = "S0"
    S2 = "S2"
    S8 = "S8"
    OTHER = "other"

    @classmethod
    def from_token(cls, token: str) -> "RecordKind":
        """Classify a record by its two-character tag prefix."""
        tag = token[:2]
        for kind in (cls.S0, cls.S2, cls.S8):
            if tag == kind.value:
                return kind
        return cls.OTHER


class SpaceInfo(NamedTuple):
    """Per-space protocol constants."""
    opcode: int
    letter: str


# Opcode and symbol letter of each loadable memory space.
SPACE_TABLE: dict[MemorySpace, SpaceInfo] = {
    MemorySpace.X: SpaceInfo(opcode=0xC5, letter="X"),
    MemorySpace.Y: SpaceInfo(opcode=0xC6, letter="Y"),
    MemorySpace.P: SpaceInfo(opcode=0xC4, letter="P"),
}


# =============================================================================
# Record Data Structure
# =============================================================================

@dataclass(frozen=True)
class SrecRecord:
    """
    One parsed SREC record.

    Only the fields relevant to the record kind are populated: S0 records
    carry space_code, S2 records carry byte_length, address, address_text
    and payload. S8 and OTHER records carry nothing beyond the token.

    Attributes:
        kind: Record tag
        token: The raw record text
        position: 1-based index of the record in the input (0 if unknown)
        space_code: Memory space code of an S0 record
        byte_length: Declared length of an S2 record, including the
                     3 address bytes and the checksum byte
        address: 24-bit load address of an S2 record
        address_text: The 6 address hex digits as written in the record
        payload: Payload bytes of an S2 record, still as 2-digit hex text
    """
    kind: RecordKind
    token: str
    position: int = 0
    space_code: Optional[int] = None
    byte_length: int = 0
    address: int = 0
    address_text: str = ""
    payload: tuple[str, ...] = field(default_factory=tuple)

    @property
    def payload_length(self) -> int:
        """Usable payload byte count (declared length minus overhead)."""
        return self.byte_length - S2_OVERHEAD_BYTES

    def __str__(self) -> str:
        if self.kind is RecordKind.S2:
            return (f"S2 @ 0x{self.address:06X}, "
                    f"{self.payload_length} bytes")
        if self.kind is RecordKind.S0:
            return f"S0 space code {self.space_code}"
        return f"{self.kind.name} record"
