"""
SREC Input Handling
===================

This package reads Motorola S-record text produced by the DSP563xx
toolchain and turns it into typed records for the packet transcoder.

- **records**: MemorySpace, RecordKind, SrecRecord and the per-space
  opcode table
- **reader**: token stream and fixed-field record parser

Quick Start
-----------
    >>> from srec2inc.srec import iter_records
    >>> with open("program.s") as f:
    ...     for record in iter_records(f):
    ...         print(record)
"""

from srec2inc.srec.records import (
    MemorySpace,
    RecordKind,
    SpaceInfo,
    SrecRecord,
    SPACE_TABLE,
    S2_OVERHEAD_BYTES,
)
from srec2inc.srec.reader import (
    iter_tokens,
    iter_records,
    parse_record,
    read_records,
)

__all__ = [
    "MemorySpace",
    "RecordKind",
    "SpaceInfo",
    "SrecRecord",
    "SPACE_TABLE",
    "S2_OVERHEAD_BYTES",
    "iter_tokens",
    "iter_records",
    "parse_record",
    "read_records",
]
