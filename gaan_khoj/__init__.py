"""Gaan Khoj: Bengali song search and suggestions."""

__version__ = "0.1.0"
