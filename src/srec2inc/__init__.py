"""
srec2inc - SREC to C Include Converter for DSP563xx ROM Images
==============================================================

This package converts Motorola S-record images of Freescale DSP563xx
programs into C include files. Each data record becomes one or more PPP
packets, rendered as a ``uint8_t`` array plus a ``_LEN`` constant, so an
MCU without a filesystem can boot the DSP by streaming the arrays over the
host port.

The SREC input should be generated with:

    srec -S -R -A3 program.cld

Main Components
---------------
- **srec**: SREC token reader and record parser
- **ppp**: Packet splitting, C rendering and the transcoder state machine
- **config**: Run configuration (packet size, output path, header fields)
- **cli**: The ``srec2inc`` command

Quick Start
-----------
Convert a file from Python:
    >>> from srec2inc import OutputSink, iter_records, transcode
    >>> with open("program.s") as src, open("program.inc", "w") as dst:
    ...     stats = transcode(iter_records(src), 18, OutputSink(dst))

Or use the command-line tool:
    $ srec2inc -N18 -I program.s -O program.inc

Copyright (c) 2009 Sam Grove, MIT License
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from srec2inc.errors import (
    Srec2IncError,
    ConfigurationError,
    SrecParseError,
    HexFieldError,
    UnknownMemorySpaceError,
    NoMemorySpaceError,
    TranscodeError,
    AddressOverflowError,
)
from srec2inc.srec import (
    MemorySpace,
    RecordKind,
    SrecRecord,
    SPACE_TABLE,
    iter_tokens,
    iter_records,
    parse_record,
    read_records,
)
from srec2inc.ppp import (
    Packet,
    OutputSink,
    TranscodeStats,
    Transcoder,
    render_file_header,
    render_packet,
    split_payload,
    strip_label,
    transcode,
)
from srec2inc.config import (
    DEFAULT_PACKET_SIZE,
    TranscoderConfig,
    normalize_packet_size,
)

__all__ = [
    "__version__",
    # Errors
    "Srec2IncError",
    "ConfigurationError",
    "SrecParseError",
    "HexFieldError",
    "UnknownMemorySpaceError",
    "NoMemorySpaceError",
    "TranscodeError",
    "AddressOverflowError",
    # Records
    "MemorySpace",
    "RecordKind",
    "SrecRecord",
    "SPACE_TABLE",
    "iter_tokens",
    "iter_records",
    "parse_record",
    "read_records",
    # Packets
    "Packet",
    "OutputSink",
    "TranscodeStats",
    "Transcoder",
    "render_file_header",
    "render_packet",
    "split_payload",
    "strip_label",
    "transcode",
    # Configuration
    "DEFAULT_PACKET_SIZE",
    "TranscoderConfig",
    "normalize_packet_size",
]
