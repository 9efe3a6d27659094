"""A small mobile-wallet console: members, transfers, cash-in/out and bill payments."""

__version__ = "0.1.0"
__all__ = ["__version__"]