"""
srec2inc Command-Line Interface
===============================

This package provides the ``srec2inc`` command, a Click-based front end
to the SREC to PPP packet transcoder with consistent error reporting and
exit codes.
"""

__all__ = ["main"]

from srec2inc.cli.main import main
