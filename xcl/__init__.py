"""Containers, handle tables, a JSON tree and a rotating file logger."""

__version__ = "2.2.2"