"""Linearise Victoria II leader personalities and backgrounds into composite traits."""

__version__ = "0.1.0"
