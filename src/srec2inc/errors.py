"""
srec2inc Error Hierarchy
========================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from Srec2IncError, allowing callers to catch all
transcoder-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
Srec2IncError (base)
├── ConfigurationError - unreadable input, unwritable output
├── SrecParseError (record-level parse errors)
│   ├── HexFieldError - malformed, truncated or non-hex field
│   ├── UnknownMemorySpaceError - S0 code outside {0, 1, 2, 4}
│   └── NoMemorySpaceError - S2 record with no active memory space
└── TranscodeError (packet building)
    └── AddressOverflowError - packet address past 24 bits

Every parse error is fatal to the run: a silently wrong ROM image is worse
than a failed build, so the transcoder never emits a record it cannot
interpret.

Error messages follow this format:
    record 12: error: description
        S2100004000A0B0C...
    hint: suggestion for fixing (when available)
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Srec2IncError(Exception):
    """
    Base exception for all srec2inc errors.

    All exceptions in the package inherit from this class, allowing callers
    to catch every transcoder error with a single except clause:

        try:
            transcode(tokens, 18, sink)
        except Srec2IncError as e:
            print(f"Error: {e}")
    """
    pass


class ConfigurationError(Srec2IncError):
    """
    Invalid run configuration.

    Raised before any transcoding begins when:
    - The input source cannot be opened
    - The output sink cannot be created
    """
    pass


# =============================================================================
# Parse Exceptions
# =============================================================================

class SrecParseError(Srec2IncError):
    """
    Base exception for errors found while interpreting an SREC record.

    Attributes:
        message: The error description
        position: 1-based index of the record in the input (0 if unknown)
        token: The raw record text (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        position: int = 0,
        token: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.position = position
        self.token = token
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with record position, token and hint.

        Example output:
            record 3: error: S2 record before any memory space selection
                S2100004000A0B0C0D0E0F101112131415161718
            hint: add an S0 record selecting X, Y or P space
        """
        if self.position:
            parts = [f"record {self.position}: error: {self.message}"]
        else:
            parts = [f"error: {self.message}"]

        if self.token is not None:
            parts.append(f"    {self.token}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class HexFieldError(SrecParseError):
    """
    Malformed hexadecimal field.

    Raised when a fixed-width field of a record is missing, truncated,
    or contains characters that are not hexadecimal digits, or when the
    declared record length disagrees with the record text.
    """

    def __init__(
        self,
        field_name: str,
        text: str,
        position: int = 0,
        token: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.field_name = field_name
        self.text = text
        super().__init__(
            f"malformed {field_name} field '{text}'",
            position=position,
            token=token,
            hint=hint,
        )


class UnknownMemorySpaceError(SrecParseError):
    """
    S0 record carrying a memory-space code that is not X, Y or P.

    Valid codes are 1 (X), 2 (Y), 4 (P) and 0 (no space selected).
    """

    def __init__(self, code: int, position: int = 0, token: Optional[str] = None):
        self.code = code
        super().__init__(
            f"unknown memory space code 0x{code:02X}",
            position=position,
            token=token,
            hint="expected 01 (X), 02 (Y) or 04 (P); "
                 "generate the SREC file with 'srec -S'",
        )


class NoMemorySpaceError(SrecParseError):
    """
    S2 data record found while no memory space is active.

    This happens when the file does not start with an S0 record, or when
    an S8 or unsupported record reset the space before more data arrived.
    """

    def __init__(self, position: int = 0, token: Optional[str] = None):
        super().__init__(
            "S2 record before any memory space selection",
            position=position,
            token=token,
            hint="add an S0 record selecting X, Y or P space",
        )


# =============================================================================
# Transcoder Exceptions
# =============================================================================

class TranscodeError(Srec2IncError):
    """Base exception for failures while building packets."""
    pass


class AddressOverflowError(TranscodeError):
    """
    Packet base address does not fit in 24 bits.

    Continuation packets advance the address by whole DSP words; a record
    near the top of memory can push the next packet past 0xFFFFFF.
    """

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"packet address 0x{address:X} exceeds 24 bits")
