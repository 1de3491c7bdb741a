"""Equipment load resolution and warm-up planning."""

__version__ = "0.1.0"
