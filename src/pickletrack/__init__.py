"""Pickle Track: live pickleball scoring and round-robin standings."""

__version__ = "0.1.0"
