"""Decoders for MySQL binary log column values and binary JSON documents."""

__version__ = "0.1.0"