"""Parsing and loading of HOCON, JSON and properties configuration into raw syntax trees."""

__version__ = "0.1.0"