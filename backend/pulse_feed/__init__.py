"""Synthetic live memecoin feed: token factory, tick simulator and HTTP service."""

__version__ = "1.0.0"
