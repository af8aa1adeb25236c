"""Turn-based territory-control simulation."""

__version__ = "0.1.0"
