"""Mine pathway models for state changes and compare index cards."""

__version__ = "0.1.0"
