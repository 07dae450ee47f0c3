"""Interactive editor for small vector symbols."""

__version__ = "0.1.0"
