"""
Serial Input for the Printer Emulator
=====================================

Reads the printer byte stream from a serial port and feeds it to a Paper.

Real HP82240B printers receive data over a one-way infrared link. To print
from a calculator or another program onto the emulator, the stream is
usually bridged to a serial port (an IR receiver with a USB-serial adapter,
or a virtual null-modem pair). This module handles:

- Port enumeration and detection of likely USB-serial adapters
- Opening the port with the settings the bridges use (8N1, no flow control)
- Capturing bytes until the sender goes quiet or a byte limit is reached

Serial Port Settings
--------------------
- Baud Rate: 2400 (configurable: 1200, 2400, 4800, 9600, 19200)
- Data Bits: 8
- Parity: None
- Stop Bits: 1
- Flow Control: None (the printer protocol is one-way)
"""

import logging
import time
from dataclasses import dataclass
from typing import Final, Optional

import serial
import serial.tools.list_ports

from hp82240b.errors import ConnectionError
from hp82240b.printer.paper import Paper

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

VALID_BAUD_RATES: Final[tuple[int, ...]] = (1200, 2400, 4800, 9600, 19200)

DEFAULT_BAUD_RATE: Final[int] = 2400

# Read timeout in seconds; also the granularity of the idle check
DEFAULT_TIMEOUT: Final[float] = 0.2

# Stop capturing after this many seconds without data
DEFAULT_IDLE_TIMEOUT: Final[float] = 5.0

# Upper bound for a single read
READ_CHUNK_SIZE: Final[int] = 256

# USB Vendor IDs for common USB-serial adapters
USB_VENDOR_IDS: Final[dict[int, str]] = {
    0x0403: "FTDI",
    0x10C4: "Silicon Labs",
    0x067B: "Prolific",
    0x1A86: "QinHeng",
}


# =============================================================================
# Port Information
# =============================================================================

@dataclass(frozen=True)
class PortInfo:
    """
    Information about an available serial port.

    Attributes:
        device: System device path (e.g., '/dev/ttyUSB0', 'COM3')
        description: Human-readable description from the driver
        manufacturer: Device manufacturer (if available)
        vid: USB Vendor ID (None for non-USB ports)
        pid: USB Product ID (None for non-USB ports)
    """

    device: str
    description: str
    manufacturer: Optional[str]
    vid: Optional[int]
    pid: Optional[int]

    @property
    def is_usb(self) -> bool:
        return self.vid is not None

    @property
    def vendor_name(self) -> Optional[str]:
        """Return the vendor name for known USB adapters."""
        if self.vid is not None:
            return USB_VENDOR_IDS.get(self.vid)
        return None

    def __str__(self) -> str:
        parts = [self.device]
        if self.description:
            parts.append(f"- {self.description}")
        if self.vendor_name:
            parts.append(f"({self.vendor_name})")
        return " ".join(parts)


# =============================================================================
# Port Enumeration
# =============================================================================

def list_serial_ports() -> list[PortInfo]:
    """
    List all serial ports detected by the system.

    Returns:
        List of PortInfo objects describing available ports.
    """
    ports = []

    for port in serial.tools.list_ports.comports():
        ports.append(PortInfo(
            device=port.device,
            description=port.description or "",
            manufacturer=port.manufacturer,
            vid=port.vid,
            pid=port.pid,
        ))
        logger.debug("Found port: %s (vid=%s)", port.device, port.vid)

    return ports


def find_printer_port() -> Optional[str]:
    """
    Pick the most likely serial port for a printer bridge.

    FTDI and Silicon Labs adapters are preferred, then any other USB-serial
    adapter. Hardware ports are never chosen automatically.

    Returns:
        Device path of the detected port, or None if not found.
    """
    usb_ports = [p for p in list_serial_ports() if p.is_usb]

    if not usb_ports:
        logger.debug("No USB serial ports found")
        return None

    for vid in (0x0403, 0x10C4):  # FTDI, Silicon Labs
        for port in usb_ports:
            if port.vid == vid:
                logger.info("Auto-detected port: %s (%s)", port.device, port.vendor_name)
                return port.device

    logger.info("Using first USB serial port: %s", usb_ports[0].device)
    return usb_ports[0].device


def format_port_list(ports: list[PortInfo]) -> str:
    """Format ports one per line for display."""
    if not ports:
        return "No serial ports found."
    return "\n".join(f"  {port}" for port in ports)


# =============================================================================
# Port Configuration
# =============================================================================

def open_serial_port(
    device: str,
    baud_rate: int = DEFAULT_BAUD_RATE,
    timeout: float = DEFAULT_TIMEOUT,
) -> serial.Serial:
    """
    Open a serial port for receiving printer data.

    Args:
        device: Serial port device path (e.g., '/dev/ttyUSB0', 'COM3').
        baud_rate: One of VALID_BAUD_RATES.
        timeout: Read timeout in seconds.

    Returns:
        Opened serial.Serial object. The caller closes it.

    Raises:
        ConnectionError: If the port cannot be opened.
        ValueError: If baud_rate is not a valid value.
    """
    if baud_rate not in VALID_BAUD_RATES:
        valid_str = ", ".join(str(b) for b in VALID_BAUD_RATES)
        raise ValueError(f"Invalid baud rate: {baud_rate}. Valid rates: {valid_str}")

    logger.info("Opening serial port: %s at %d baud", device, baud_rate)

    try:
        port = serial.Serial(
            port=device,
            baudrate=baud_rate,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
            timeout=timeout,
            xonxoff=False,
            rtscts=False,
            dsrdtr=False,
        )
        port.reset_input_buffer()
        return port

    except serial.SerialException as e:
        error_msg = str(e)

        if "Permission denied" in error_msg:
            raise ConnectionError(
                f"Permission denied accessing {device}. "
                "You may need to add your user to the 'dialout' group: "
                "sudo usermod -a -G dialout $USER"
            )
        elif "No such file" in error_msg or "not found" in error_msg.lower():
            raise ConnectionError(
                f"Serial port not found: {device}. "
                "Use 'hp82240b ports' to list available ports."
            )
        elif "busy" in error_msg.lower() or "in use" in error_msg.lower():
            raise ConnectionError(
                f"Serial port {device} is busy. "
                "Close any other programs using the port."
            )
        else:
            raise ConnectionError(f"Cannot open {device}: {e}")


def close_serial_port(port: Optional[serial.Serial]) -> None:
    """Close a serial port, logging (not raising) errors during close."""
    if port is None:
        return

    try:
        if port.is_open:
            port.close()
            logger.debug("Serial port closed")
    except serial.SerialException as e:
        logger.warning("Error closing serial port: %s", e)


# =============================================================================
# Capture
# =============================================================================

def capture(
    port: serial.Serial,
    paper: Paper,
    idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
    max_bytes: Optional[int] = None,
) -> int:
    """
    Feed bytes from a serial port into a Paper.

    Each non-empty read is appended as one chunk, so listeners get one
    printed notification per chunk. Capture stops when no data has arrived
    for ``idle_timeout`` seconds, or once ``max_bytes`` bytes were read.

    Args:
        port: Open serial port (its read timeout sets the polling interval)
        paper: Destination paper
        idle_timeout: Seconds of silence that end the capture
        max_bytes: Byte limit (None for no limit)

    Returns:
        Number of bytes captured
    """
    total = 0
    last_data = time.monotonic()

    while max_bytes is None or total < max_bytes:
        size = READ_CHUNK_SIZE
        if max_bytes is not None:
            size = min(size, max_bytes - total)

        data = port.read(size)
        if data:
            paper.append(data)
            total += len(data)
            last_data = time.monotonic()
            logger.debug("Received %d bytes (%d total)", len(data), total)
        elif time.monotonic() - last_data >= idle_timeout:
            logger.debug("No data for %.1f s, stopping capture", idle_timeout)
            break

    logger.info("Captured %d bytes, %d lines", total, paper.line_count)
    return total
