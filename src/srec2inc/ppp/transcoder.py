"""
SREC to PPP Packet Transcoder
=============================

This module implements the single-pass state machine that turns a stream
of SREC records into rendered PPP packet declarations.

State
-----
The only state carried between records is the active memory space:

- S0 selects the space (1 = X, 2 = Y, 4 = P, 0 = none)
- S8 resets it to none
- any other unsupported record also resets it to none
- S2 data records are rejected while no space is active

Unsupported record types (S1, S3, S5, S7, S9...) resetting the space
matches the behavior of the original DSP563xx tool: data following such a
record needs a fresh S0 before it is accepted.

Each record is fully processed before the next one is read, and the
packets of a record are all built before any of them is written, so a
failing record never leaves half of its packets in the output.

Usage
-----
    >>> from io import StringIO
    >>> from srec2inc.ppp import OutputSink, transcode
    >>> out = StringIO()
    >>> stats = transcode(["S0030001FB", "S20A00040001020304050699"],
    ...                   18, OutputSink(out))
    >>> stats.packets
    1

Copyright (c) 2009 Sam Grove, MIT License
"""

from dataclasses import dataclass
from typing import Iterable, Union
import logging

from srec2inc.errors import (
    HexFieldError,
    NoMemorySpaceError,
    UnknownMemorySpaceError,
)
from srec2inc.ppp.packets import Packet, split_payload
from srec2inc.ppp.render import OutputSink
from srec2inc.srec.reader import parse_record
from srec2inc.srec.records import MemorySpace, RecordKind, SrecRecord

# Logger for this module
logger = logging.getLogger(__name__)


@dataclass
class TranscodeStats:
    """
    Counters for one transcoding run.

    Attributes:
        records: Records consumed
        data_records: S2 records converted
        space_switches: S0 records processed
        packets: Packets written
        payload_bytes: Data bytes written across all packets
    """
    records: int = 0
    data_records: int = 0
    space_switches: int = 0
    packets: int = 0
    payload_bytes: int = 0


class Transcoder:
    """
    Converts SREC records into PPP packet declarations.

    The transcoder owns the active memory space for the duration of one
    run. Create a new instance for every input file.

    Attributes:
        packet_size: Maximum packet size in bytes, header included
        sink: Destination for rendered text
        space: Currently active memory space
        stats: Counters for this run

    Example:
        >>> transcoder = Transcoder(18, OutputSink(out))
        >>> for token in tokens:
        ...     transcoder.feed(token)
    """

    def __init__(self, packet_size: int, sink: OutputSink):
        self.packet_size = packet_size
        self.sink = sink
        self.space = MemorySpace.NONE
        self.stats = TranscodeStats()

    def feed(self, record: Union[SrecRecord, str]) -> list[Packet]:
        """
        Process one record.

        Args:
            record: A parsed record, or a raw token to parse

        Returns:
            The packets written for this record (empty unless S2)

        Raises:
            SrecParseError: If the record cannot be interpreted
            TranscodeError: If the record's packets cannot be built
        """
        self.stats.records += 1
        if isinstance(record, str):
            record = parse_record(record, self.stats.records)

        if record.kind is RecordKind.S0:
            self._select_space(record)
            return []

        if record.kind is RecordKind.S2:
            return self._convert_data(record)

        if record.kind is RecordKind.OTHER:
            logger.debug(
                f"Unsupported record '{record.token[:2]}' "
                f"resets memory space"
            )
        self.space = MemorySpace.NONE
        return []

    def _select_space(self, record: SrecRecord) -> None:
        if record.space_code is None:
            raise HexFieldError(
                "memory space", record.token[6:8], position=record.position,
                token=record.token,
            )
        try:
            self.space = MemorySpace.from_code(record.space_code)
        except ValueError:
            raise UnknownMemorySpaceError(
                record.space_code, position=record.position,
                token=record.token,
            ) from None
        self.stats.space_switches += 1
        logger.debug(f"Memory space {self.space.name}")

    def _convert_data(self, record: SrecRecord) -> list[Packet]:
        if self.space is MemorySpace.NONE:
            raise NoMemorySpaceError(position=record.position,
                                     token=record.token)

        packets = list(split_payload(
            self.space, record.address, record.payload, self.packet_size
        ))
        for packet in packets:
            self.sink.write_packet(packet)
            self.stats.packets += 1
            self.stats.payload_bytes += len(packet.data)
        self.stats.data_records += 1
        return packets


def transcode(
    records: Iterable[Union[SrecRecord, str]],
    packet_size: int,
    sink: OutputSink,
) -> TranscodeStats:
    """
    Transcode a whole record stream into the sink.

    Args:
        records: Parsed records or raw SREC tokens, in input order
        packet_size: Maximum packet size in bytes, header included
        sink: Destination for rendered text

    Returns:
        Counters for the run

    Raises:
        SrecParseError: On the first record that cannot be interpreted
        TranscodeError: If a record's packets cannot be built
    """
    transcoder = Transcoder(packet_size, sink)
    for record in records:
        transcoder.feed(record)
    logger.debug(
        f"Transcoded {transcoder.stats.records} records into "
        f"{transcoder.stats.packets} packets"
    )
    return transcoder.stats
