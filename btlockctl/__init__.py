"""Disconnect paired Bluetooth devices on screen lock, reconnect on unlock."""

__version__ = "0.1.0"
