"""
Transcoder Unit Tests
=====================

Tests for the record-by-record transcoder, C rendering and the output sink.

Test Categories
---------------
1. Rendering helpers and file header
2. Memory space tracking
3. End-to-end scenarios
4. Fatal errors
"""

from io import StringIO

import pytest

from srec2inc.errors import (
    AddressOverflowError,
    HexFieldError,
    NoMemorySpaceError,
    SrecParseError,
    UnknownMemorySpaceError,
)
from srec2inc.ppp import (
    OutputSink,
    Packet,
    Transcoder,
    format_byte,
    render_file_header,
    render_packet,
    transcode,
)
from srec2inc.srec import (
    MemorySpace,
    RecordKind,
    SrecRecord,
    iter_records,
    parse_record,
)


S8 = "S804000000FB"


@pytest.fixture
def buffer() -> StringIO:
    return StringIO()


@pytest.fixture
def sink(buffer) -> OutputSink:
    return OutputSink(buffer)


# =============================================================================
# Rendering Tests
# =============================================================================

class TestRendering:
    """Tests for C text generation."""

    def test_format_byte(self):
        assert format_byte(0) == "0x00"
        assert format_byte(0xa) == "0x0A"
        assert format_byte(0xC5) == "0xC5"

    def test_render_packet(self):
        packet = Packet(
            space=MemorySpace.P,
            address=0x40,
            declared_length=9,
            word_count=1,
            data=("0a", "0B", "FF"),
        )
        assert render_packet(packet) == (
            "uint32_t const PPP_P40_LEN = 9;\n"
            "uint8_t  const PPP_P40[] = "
            "{0xC4,0x00,0x01,0x00,0x00,0x40,0x0A,0x0B,0xFF};\n"
            "\n"
        )

    def test_file_header_placeholders(self):
        header = render_file_header()
        assert header.startswith("// $Id$\n\n/**\n")
        assert " * @file <filename>\n" in header
        assert " * @author <author>  \n" in header
        assert " * @version <version> \n" in header
        assert header.endswith("#include <stdint.h>\n\n")

    def test_file_header_fields(self):
        header = render_file_header("dsp.inc", "J. Doe", "1.2")
        assert " * @file dsp.inc\n" in header
        assert " * @author J. Doe  \n" in header
        assert " * @version 1.2 \n" in header
        assert "DSP563xx" in header

    def test_sink_counts(self, sink, buffer):
        sink.write("abc")
        sink.write("de")
        assert buffer.getvalue() == "abcde"
        assert sink.fragments == 2
        assert sink.chars_written == 5


# =============================================================================
# Memory Space Tests
# =============================================================================

class TestMemorySpaceTracking:
    """Tests for the active memory space state."""

    def test_initially_none(self, sink):
        assert Transcoder(18, sink).space is MemorySpace.NONE

    @pytest.mark.parametrize("code,space", [
        (1, MemorySpace.X),
        (2, MemorySpace.Y),
        (4, MemorySpace.P),
    ])
    def test_s0_selects(self, sink, make_s0, code, space):
        transcoder = Transcoder(18, sink)
        assert transcoder.feed(make_s0(code)) == []
        assert transcoder.space is space

    def test_s0_zero_resets(self, sink, select_x, make_s0):
        transcoder = Transcoder(18, sink)
        transcoder.feed(select_x)
        transcoder.feed(make_s0(0))
        assert transcoder.space is MemorySpace.NONE

    def test_s8_resets(self, sink, buffer, select_y):
        transcoder = Transcoder(18, sink)
        transcoder.feed(select_y)
        transcoder.feed(S8)
        assert transcoder.space is MemorySpace.NONE
        assert buffer.getvalue() == ""

    @pytest.mark.parametrize("token", ["S1130000", "S9030000FC", "S5030001FB"])
    def test_unsupported_record_resets(self, sink, buffer, select_p, token):
        """Unsupported records drop the space, as the original tool does."""
        transcoder = Transcoder(18, sink)
        transcoder.feed(select_p)
        assert transcoder.feed(token) == []
        assert transcoder.space is MemorySpace.NONE
        assert buffer.getvalue() == ""

    def test_data_after_unsupported_record_rejected(
        self, sink, select_x, make_s2
    ):
        """Data following an S1/S3/... record needs a fresh S0."""
        transcoder = Transcoder(18, sink)
        transcoder.feed(select_x)
        transcoder.feed("S30500000000FA")
        with pytest.raises(NoMemorySpaceError):
            transcoder.feed(make_s2(0x10, bytes(3)))

    def test_space_persists_across_data_records(
        self, sink, buffer, select_y, make_s2
    ):
        transcoder = Transcoder(18, sink)
        transcoder.feed(select_y)
        transcoder.feed(make_s2(0x10, bytes(3)))
        transcoder.feed(make_s2(0x20, bytes(3)))
        assert transcoder.space is MemorySpace.Y
        assert "PPP_Y10[]" in buffer.getvalue()
        assert "PPP_Y20[]" in buffer.getvalue()

    def test_independent_runs(self, select_x, make_s2):
        """State does not leak between transcoder instances."""
        first = Transcoder(18, OutputSink(StringIO()))
        first.feed(select_x)
        second = Transcoder(18, OutputSink(StringIO()))
        with pytest.raises(NoMemorySpaceError):
            second.feed(make_s2(0, bytes(3)))


# =============================================================================
# Scenario Tests
# =============================================================================

class TestScenarios:
    """End-to-end conversions of small SREC streams."""

    def test_record_split_in_two(self, sink, buffer, select_x, make_s2,
                                 eighteen_bytes):
        stats = transcode(
            [select_x, make_s2(0x000400, eighteen_bytes)], 18, sink
        )
        assert buffer.getvalue() == (
            "uint32_t const PPP_X400_LEN = 18;\n"
            "uint8_t  const PPP_X400[] = {0xC5,0x00,0x04,0x00,0x04,0x00,"
            "0x0A,0x0B,0x0C,0x0D,0x0E,0x0F,0x10,0x11,0x12,0x13,0x14,0x15};\n"
            "\n"
            "uint32_t const PPP_X404_LEN = 12;\n"
            "uint8_t  const PPP_X404[] = {0xC5,0x00,0x02,0x00,0x04,0x04,"
            "0x16,0x17,0x18,0x19,0x1A,0x1B};\n"
            "\n"
        )
        assert stats.packets == 2
        assert stats.data_records == 1
        assert stats.payload_bytes == 18
        assert stats.space_switches == 1
        assert stats.records == 2

    def test_zero_address_label(self, sink, buffer, select_y, make_s2):
        transcode([select_y, make_s2(0, bytes([1, 2, 3]))], 18, sink)
        text = buffer.getvalue()
        assert "uint32_t const PPP_Y_LEN = 9;\n" in text
        assert "uint8_t  const PPP_Y[] = {0xC6,0x00,0x01,0x00,0x00,0x00," \
               "0x01,0x02,0x03};\n" in text

    def test_p_space(self, sink, buffer, select_p, make_s2):
        transcode([select_p, make_s2(0x1234, bytes(6))], 18, sink)
        assert buffer.getvalue().startswith(
            "uint32_t const PPP_P1234_LEN = 12;\n"
            "uint8_t  const PPP_P1234[] = {0xC4,0x00,0x02,0x00,0x12,0x34,"
        )

    def test_empty_data_record(self, sink, buffer, select_x):
        transcode([select_x, "S204000400F7"], 18, sink)
        assert buffer.getvalue() == (
            "uint32_t const PPP_X400_LEN = 6;\n"
            "uint8_t  const PPP_X400[] = {0xC5,0x00,0x00,0x00,0x04,0x00};\n"
            "\n"
        )

    def test_multiple_spaces(self, sink, buffer, select_x, select_p,
                             make_s2):
        tokens = [
            select_p, make_s2(0x0, bytes(3)), S8,
            select_x, make_s2(0x100, bytes(3)), S8,
        ]
        stats = transcode(tokens, 18, sink)
        text = buffer.getvalue()
        assert text.index("PPP_P_LEN") < text.index("PPP_X100_LEN")
        assert stats.packets == 2

    def test_parsed_records_accepted(self, sink, buffer, select_x, make_s2):
        stream = StringIO(f"{select_x}\n{make_s2(0x10, bytes(3))}\n{S8}\n")
        stats = transcode(iter_records(stream), 18, sink)
        assert stats.packets == 1
        assert "PPP_X10[]" in buffer.getvalue()

    def test_feed_returns_packets(self, sink, select_x, make_s2,
                                  eighteen_bytes):
        transcoder = Transcoder(9, sink)
        transcoder.feed(select_x)
        packets = transcoder.feed(parse_record(make_s2(0x10, eighteen_bytes)))
        assert len(packets) == 6
        assert [p.address for p in packets] == [0x10 + i for i in range(6)]

    def test_empty_stream(self, sink, buffer):
        stats = transcode([], 18, sink)
        assert buffer.getvalue() == ""
        assert stats.records == 0


# =============================================================================
# Error Tests
# =============================================================================

class TestErrors:
    """Fatal error conditions."""

    def test_data_before_s0(self, sink, buffer, make_s2):
        with pytest.raises(NoMemorySpaceError) as exc_info:
            transcode([make_s2(0x400, bytes(3))], 18, sink)
        assert exc_info.value.position == 1
        assert buffer.getvalue() == ""

    def test_data_after_s8(self, sink, buffer, select_x, make_s2):
        tokens = [select_x, make_s2(0x0, bytes(3)), S8, make_s2(0x3, bytes(3))]
        with pytest.raises(NoMemorySpaceError) as exc_info:
            transcode(tokens, 18, sink)
        assert exc_info.value.position == 4
        assert "PPP_X3" not in buffer.getvalue()

    @pytest.mark.parametrize("code", [3, 5, 8, 0x10, 0xFF])
    def test_unknown_space_code(self, sink, make_s0, code):
        with pytest.raises(UnknownMemorySpaceError) as exc_info:
            transcode([make_s0(code)], 18, sink)
        assert exc_info.value.code == code
        assert f"0x{code:02X}" in str(exc_info.value)

    def test_s0_record_without_space_code(self, sink):
        """A hand-built S0 record lacking its code is a field error."""
        record = SrecRecord(kind=RecordKind.S0, token="S003", position=5)
        transcoder = Transcoder(18, sink)
        with pytest.raises(HexFieldError) as exc_info:
            transcoder.feed(record)
        assert exc_info.value.position == 5
        assert transcoder.space is MemorySpace.NONE

    def test_malformed_record_stops_run(self, sink, buffer, select_x,
                                        make_s2):
        tokens = [select_x, make_s2(0x0, bytes(3)), "S2070000GG01020300",
                  make_s2(0x10, bytes(3))]
        with pytest.raises(HexFieldError):
            transcode(tokens, 18, sink)
        assert "PPP_X10" not in buffer.getvalue()

    def test_error_message_format(self, sink, make_s2):
        token = make_s2(0x400, bytes(3))
        with pytest.raises(SrecParseError) as exc_info:
            transcode([token], 18, sink)
        message = str(exc_info.value)
        assert message.startswith("record 1: error: ")
        assert token in message
        assert "hint:" in message

    def test_overflow_writes_nothing_for_record(self, sink, buffer,
                                                select_x, make_s2):
        with pytest.raises(AddressOverflowError):
            transcode([select_x, make_s2(0xFFFFFE, bytes(9))], 9, sink)
        assert buffer.getvalue() == ""
