"""
SREC Record Reader
==================

This module turns an SREC text stream into typed records.

iter_tokens
-----------
Produces the whitespace-delimited tokens of a text stream, one record per
step. The sequence is lazy, finite and single-pass: it reads the stream
line by line and stops at end of input. No shape validation happens here.

parse_record
------------
Interprets one token as an SrecRecord. Fields are read from validated
fixed-width slices so a short or corrupt record raises a HexFieldError
instead of reading past its end.

Usage Examples
--------------
    >>> from io import StringIO
    >>> from srec2inc.srec import iter_records
    >>> for record in iter_records(StringIO("S0030001FB S804000000FB")):
    ...     print(record.kind)
    RecordKind.S0
    RecordKind.S8

Copyright (c) 2009 Sam Grove, MIT License
"""

from pathlib import Path
from typing import Iterable, Iterator, Optional, Union
import logging
import string

from srec2inc.errors import HexFieldError
from srec2inc.srec.records import (
    RecordKind,
    SrecRecord,
    S2_OVERHEAD_BYTES,
)

# Logger for this module
logger = logging.getLogger(__name__)

HEX_DIGITS = frozenset(string.hexdigits)

# Character offsets of the fixed-width fields
LENGTH_SLICE = slice(2, 4)
S0_SPACE_SLICE = slice(6, 8)
S2_ADDRESS_SLICE = slice(4, 10)
S2_PAYLOAD_START = 10
CHECKSUM_WIDTH = 2


# =============================================================================
# Tokenizer
# =============================================================================

def iter_tokens(stream: Iterable[str]) -> Iterator[str]:
    """
    Yield the whitespace-delimited tokens of a text stream.

    Args:
        stream: An open text file, or any iterable of lines

    Yields:
        Each run of non-whitespace characters, in input order
    """
    for line in stream:
        yield from line.split()


# =============================================================================
# Record Parser
# =============================================================================

def _hex_field(
    token: str,
    where: slice,
    field_name: str,
    position: int,
) -> tuple[str, int]:
    """
    Extract a fixed-width hex field and its value.

    Raises:
        HexFieldError: If the slice runs past the token or is not hex
    """
    text = token[where]
    width = where.stop - where.start
    if len(text) != width or not set(text) <= HEX_DIGITS:
        raise HexFieldError(field_name, text, position=position, token=token)
    return text, int(text, 16)


def parse_record(token: str, position: int = 0) -> SrecRecord:
    """
    Parse one SREC token into a typed record.

    Args:
        token: A single whitespace-free SREC record
        position: 1-based index of the record in the input, for errors

    Returns:
        The parsed SrecRecord

    Raises:
        HexFieldError: If a field the record kind needs is malformed, or
                       the declared length disagrees with the record text
    """
    kind = RecordKind.from_token(token)

    if kind is RecordKind.S0:
        _, code = _hex_field(token, S0_SPACE_SLICE, "memory space", position)
        return SrecRecord(kind=kind, token=token, position=position,
                          space_code=code)

    if kind is not RecordKind.S2:
        return SrecRecord(kind=kind, token=token, position=position)

    _, byte_length = _hex_field(token, LENGTH_SLICE, "length", position)
    address_text, address = _hex_field(
        token, S2_ADDRESS_SLICE, "address", position
    )

    if byte_length < S2_OVERHEAD_BYTES:
        raise HexFieldError(
            "length", token[LENGTH_SLICE], position=position, token=token,
            hint=f"an S2 record is at least {S2_OVERHEAD_BYTES} bytes long",
        )

    expected_chars = 4 + 2 * byte_length
    if len(token) != expected_chars:
        raise HexFieldError(
            "length", token[LENGTH_SLICE], position=position, token=token,
            hint=f"declared length needs {expected_chars} characters, "
                 f"record has {len(token)}",
        )

    body = token[S2_PAYLOAD_START:-CHECKSUM_WIDTH]
    if not set(body) <= HEX_DIGITS:
        raise HexFieldError("payload", body, position=position, token=token)

    checksum = token[-CHECKSUM_WIDTH:]
    if not set(checksum) <= HEX_DIGITS:
        raise HexFieldError("checksum", checksum, position=position,
                            token=token)

    payload = tuple(body[i:i + 2] for i in range(0, len(body), 2))

    return SrecRecord(
        kind=kind,
        token=token,
        position=position,
        byte_length=byte_length,
        address=address,
        address_text=address_text,
        payload=payload,
    )


def iter_records(
    stream: Iterable[str],
    start: int = 1,
) -> Iterator[SrecRecord]:
    """
    Yield parsed records from a text stream.

    Records are parsed one at a time as the stream is consumed, so a
    malformed record raises only when it is reached.

    Args:
        stream: An open text file, or any iterable of lines
        start: Position assigned to the first record

    Yields:
        SrecRecord for each token in the stream
    """
    for position, token in enumerate(iter_tokens(stream), start=start):
        record = parse_record(token, position)
        logger.debug(f"Record {position}: {record}")
        yield record


def read_records(
    path: Union[str, Path],
    encoding: Optional[str] = "latin-1",
) -> list[SrecRecord]:
    """
    Read and parse every record of an SREC file.

    Args:
        path: Path to the SREC file
        encoding: Text encoding of the file. latin-1 decodes every byte,
                  so a stray non-ASCII byte is reported as a malformed
                  hex field

    Returns:
        List of parsed records

    Raises:
        SrecParseError: On the first record that cannot be interpreted
    """
    with open(path, "r", encoding=encoding) as f:
        return list(iter_records(f))
