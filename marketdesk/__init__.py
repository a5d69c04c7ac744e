"""Supermarket desk: stock, customers, shopping carts, billing and plain or compressed storage."""

__version__ = "1.0.0"