"""Starlane: travel and random-event engine for a space trading game."""

__version__ = "0.1.0"
