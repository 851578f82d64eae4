"""Admin account bootstrap for a rank-based site database."""

__version__ = "0.1.0"
