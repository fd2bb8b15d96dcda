"""Blocks, Bristol circuit evaluation, channels, Chou-Orlandi oblivious transfer and half-gate garbling."""

__version__ = "0.1.0"