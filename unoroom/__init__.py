"""Authoritative rule engine for multiplayer UNO rooms."""

__version__ = "0.1.0"
