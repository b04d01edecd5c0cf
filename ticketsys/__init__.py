"""Train ticket booking system driven by text commands, holding its data in memory."""

__version__ = "0.1.0"
__all__ = ["__version__"]