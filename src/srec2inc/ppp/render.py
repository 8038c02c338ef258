"""
C Source Rendering
==================

Formats PPP packets as C declarations and writes them to an output sink.

Each packet becomes a length constant followed by a byte array:

    uint32_t const PPP_X400_LEN = 18;
    uint8_t  const PPP_X400[] = {0xC5,0x00,0x04,0x00,0x04,0x00,0x0A,...};

The generated file starts with a Doxygen comment block describing the
data; its @file, @author and @version fields are filled from the run
configuration or left as placeholders.

Copyright (c) 2009 Sam Grove, MIT License
"""

from typing import Optional, TextIO

from srec2inc.ppp.packets import Packet


FILENAME_PLACEHOLDER = "<filename>"
AUTHOR_PLACEHOLDER = "<author>"
VERSION_PLACEHOLDER = "<version>"


def format_byte(value: int) -> str:
    """Format a byte as a C literal, e.g. 0x0A."""
    return f"0x{value:02X}"


def render_packet(packet: Packet) -> str:
    """
    Render one packet as a length constant and a byte array declaration.

    The returned text ends with a blank line separating it from the next
    packet.
    """
    values = packet.header_bytes + packet.address_bytes + packet.data_bytes
    body = ",".join(format_byte(value) for value in values)
    return (
        f"uint32_t const {packet.symbol}_LEN = {packet.declared_length};\n"
        f"uint8_t  const {packet.symbol}[] = {{{body}}};\n"
        "\n"
    )


def render_file_header(
    filename: Optional[str] = None,
    author: Optional[str] = None,
    version: Optional[str] = None,
) -> str:
    """
    Render the comment block and includes that open a generated file.

    Args:
        filename: Name written in the @file tag
        author: Name written in the @author tag
        version: Text written in the @version tag

    Returns:
        Header text ending with the stdint.h include and a blank line
    """
    lines = [
        "// $Id$",
        "",
        "/**",
        f" * @file {filename or FILENAME_PLACEHOLDER}",
        " * ",
        " * This include file is for Freescale DSP (DSP563xx).  The data is transfered",
        " * via CHIRP commands when the device is booted into PPP operational mode.",
        " *",
        " * @brief This file contains the data to be transfered into a DSP563xx's",
        " *         RAM and is registered as a SLOT PPP ",
        " *",
        f" * @author {author or AUTHOR_PLACEHOLDER}  ",
        " * ",
        f" * @version {version or VERSION_PLACEHOLDER} ",
        " * ",
        " */ ",
        "",
        "// $Log$ ",
        "",
        "#include <stdint.h>",
        "",
    ]
    return "\n".join(lines) + "\n"


class OutputSink:
    """
    Append-only writer for generated text.

    Fragments are written to the underlying stream in the order they are
    received; the sink keeps counters for reporting.

    Example:
        >>> from io import StringIO
        >>> buffer = StringIO()
        >>> sink = OutputSink(buffer)
        >>> sink.write("#include <stdint.h>\\n")
        >>> sink.fragments
        1
    """

    def __init__(self, stream: TextIO):
        self._stream = stream
        self.fragments = 0
        self.chars_written = 0

    def write(self, fragment: str) -> None:
        """Append a text fragment."""
        self._stream.write(fragment)
        self.fragments += 1
        self.chars_written += len(fragment)

    def write_packet(self, packet: Packet) -> None:
        """Render and append one packet."""
        self.write(render_packet(packet))
