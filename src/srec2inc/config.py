"""
Run Configuration
=================

Configuration for one srec2inc run. Values come from, in increasing order
of precedence:
- Default values (defined here)
- Environment variables
- Command-line options

Packet Size
-----------
The packet size counts the 6-byte PPP header plus data bytes. It must be a
multiple of 3 (the DSP word size) and at least 9 (one word per packet).
Any other value falls back to the default of 18 with a warning.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging
import os

# Logger for this module
logger = logging.getLogger(__name__)

DEFAULT_PACKET_SIZE = 18
MIN_PACKET_SIZE = 9
DEFAULT_OUTPUT = Path("default.inc")

ENV_PACKET_SIZE = "SREC2INC_PACKET_SIZE"
ENV_OUTPUT = "SREC2INC_OUTPUT"


def is_valid_packet_size(size: int) -> bool:
    """Return True if size is a multiple of 3 and at least 9."""
    return size % 3 == 0 and size >= MIN_PACKET_SIZE


def normalize_packet_size(size: Optional[int]) -> int:
    """
    Return the packet size to use for a requested value.

    Args:
        size: Requested packet size, or None for the default

    Returns:
        size if valid, otherwise DEFAULT_PACKET_SIZE
    """
    if size is None:
        return DEFAULT_PACKET_SIZE
    if not is_valid_packet_size(size):
        logger.warning(
            f"Invalid packet size {size} (must be a multiple of 3, "
            f"minimum {MIN_PACKET_SIZE}); using default value of "
            f"{DEFAULT_PACKET_SIZE}"
        )
        return DEFAULT_PACKET_SIZE
    return size


@dataclass
class TranscoderConfig:
    """
    Settings for one transcoding run.

    Attributes:
        packet_size: Maximum packet size in bytes (default: 18)
        output_path: Output file, "-" for stdout (default: default.inc)
        author: Text for the @author tag of the file header
        file_version: Text for the @version tag of the file header
        write_header: Emit the comment block and include (default: True)
    """
    packet_size: int = DEFAULT_PACKET_SIZE
    output_path: Path = DEFAULT_OUTPUT
    author: Optional[str] = None
    file_version: Optional[str] = None
    write_header: bool = True

    def __post_init__(self) -> None:
        self.packet_size = normalize_packet_size(self.packet_size)

    @property
    def to_stdout(self) -> bool:
        return str(self.output_path) == "-"

    @classmethod
    def from_env(cls) -> "TranscoderConfig":
        """
        Create TranscoderConfig from environment variables.

        Environment variables (all optional):
            SREC2INC_PACKET_SIZE: Packet size (integer)
            SREC2INC_OUTPUT: Output file path

        Returns:
            TranscoderConfig with values from environment variables
        """
        config = cls()

        if size := os.environ.get(ENV_PACKET_SIZE):
            try:
                config.packet_size = normalize_packet_size(int(size))
            except ValueError:
                logger.warning(f"Ignoring non-integer {ENV_PACKET_SIZE}={size!r}")

        if output := os.environ.get(ENV_OUTPUT):
            config.output_path = Path(output)

        return config

    def merge(
        self,
        packet_size: Optional[int] = None,
        output_path: Optional[Path] = None,
        author: Optional[str] = None,
        file_version: Optional[str] = None,
        write_header: Optional[bool] = None,
    ) -> "TranscoderConfig":
        """Return a copy with every non-None argument overriding this config."""
        return TranscoderConfig(
            packet_size=self.packet_size if packet_size is None else packet_size,
            output_path=self.output_path if output_path is None else output_path,
            author=self.author if author is None else author,
            file_version=self.file_version if file_version is None else file_version,
            write_header=self.write_header if write_header is None else write_header,
        )
