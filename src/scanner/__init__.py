"""Perp signal scanner -- ranks perpetual futures by a composite interestingness score."""

__version__ = "0.1.0"
