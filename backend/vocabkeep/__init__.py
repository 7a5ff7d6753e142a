"""Vocab Keep: spaced-repetition scheduling backend."""

__version__ = "1.0.0"
