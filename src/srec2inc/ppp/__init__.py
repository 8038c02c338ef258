"""
PPP Packet Generation
=====================

This package converts SREC data records into the packets sent to a
DSP563xx booted in PPP mode, rendered as C declarations.

- **packets**: Packet structure and payload splitting
- **render**: C text formatting and the output sink
- **transcoder**: the record-by-record state machine

Quick Start
-----------
    >>> from srec2inc.ppp import OutputSink, transcode
    >>> from srec2inc.srec import iter_records
    >>> with open("program.s") as src, open("program.inc", "w") as dst:
    ...     transcode(iter_records(src), 18, OutputSink(dst))
"""

from srec2inc.ppp.packets import (
    Packet,
    PACKET_HEADER_BYTES,
    WORD_BYTES,
    address_label,
    split_payload,
    strip_label,
)
from srec2inc.ppp.render import (
    OutputSink,
    format_byte,
    render_file_header,
    render_packet,
)
from srec2inc.ppp.transcoder import (
    TranscodeStats,
    Transcoder,
    transcode,
)

__all__ = [
    "Packet",
    "PACKET_HEADER_BYTES",
    "WORD_BYTES",
    "address_label",
    "split_payload",
    "strip_label",
    "OutputSink",
    "format_byte",
    "render_file_header",
    "render_packet",
    "TranscodeStats",
    "Transcoder",
    "transcode",
]
