"""navroute — interactive flight route model."""

__version__ = "0.1.0"
