"""ecomcon: conditional comment activator."""

__version__ = "0.1.0"
