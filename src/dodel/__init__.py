"""Dodel: a small ranked social feed backed by an in-memory post/vote store."""

__version__ = "0.1.0"
