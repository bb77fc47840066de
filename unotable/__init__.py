"""Authoritative server for a four-player UNO-style card game."""

__version__ = "0.1.0"
