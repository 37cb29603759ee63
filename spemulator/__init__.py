"""Emulated gantry and robot services with configurable delay, failure and failure cause."""

__version__ = "0.1.0"