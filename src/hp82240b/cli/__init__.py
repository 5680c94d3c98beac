"""
HP82240B Emulator Command-Line Interface
========================================

The ``hp82240b`` command renders captured print streams to PNG, lists the
decoded protocol actions, and captures live output from a serial bridge.
"""

__all__ = ["main"]
