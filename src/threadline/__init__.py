"""Threadline: posts, replies and likes with reply summaries."""

__version__ = "0.1.0"
