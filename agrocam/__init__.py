"""Field camera station controller for a cellular module driven by AT commands."""

__version__ = "0.1.0"