"""dumpcheck - verify game dumps against No-Intro style reference databases."""

__version__ = "0.1.0"
