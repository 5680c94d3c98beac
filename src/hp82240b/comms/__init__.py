"""
Printer Input Module
====================

Serial port helpers for receiving HP82240B print data from a bridge
(IR receiver, USB-serial adapter or virtual null-modem pair).

Quick Start
-----------
    from hp82240b import Paper
    from hp82240b.comms import capture, close_serial_port, open_serial_port

    paper = Paper()
    port = open_serial_port('/dev/ttyUSB0', baud_rate=2400)
    try:
        capture(port, paper, idle_timeout=5.0)
    finally:
        close_serial_port(port)
    paper.save_png("printout.png")
"""

from hp82240b.comms.serial import (
    DEFAULT_BAUD_RATE,
    DEFAULT_IDLE_TIMEOUT,
    VALID_BAUD_RATES,
    PortInfo,
    capture,
    close_serial_port,
    find_printer_port,
    format_port_list,
    list_serial_ports,
    open_serial_port,
)

__all__ = [
    "DEFAULT_BAUD_RATE",
    "DEFAULT_IDLE_TIMEOUT",
    "VALID_BAUD_RATES",
    "PortInfo",
    "capture",
    "close_serial_port",
    "find_printer_port",
    "format_port_list",
    "list_serial_ports",
    "open_serial_port",
]
