"""
HP82240B Emulator Error Hierarchy
=================================

All exceptions raised by the package inherit from PrinterError, so callers
can catch everything with a single except clause.

Exception Hierarchy
-------------------
PrinterError (base)
├── ConfigurationError - invalid paper geometry or limits
└── CommsError (serial input)
    └── ConnectionError - cannot open the serial port

The protocol decoder itself never raises for byte input: malformed or
unknown sequences are dropped silently. Errors only come from the layers
around it (configuration, serial ports, file output).
"""

from typing import Optional


class PrinterError(Exception):
    """
    Base exception for all emulator errors.

        try:
            paper = Paper(PaperConfig.from_env())
        except PrinterError as e:
            print(f"Error: {e}")
    """
    pass


class ConfigurationError(PrinterError):
    """
    Raised when a PaperConfig holds values the renderer cannot use.

    Attributes:
        field: Name of the offending configuration field (optional)
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        if field:
            message = f"{field}: {message}"
        super().__init__(message)


class CommsError(PrinterError):
    """Base exception for serial input errors."""
    pass


class ConnectionError(CommsError):
    """
    Raised when the serial port cannot be opened.

    Common causes:
    - Port does not exist
    - Permission denied (Linux users need the dialout group)
    - Port already in use by another program
    """
    pass
