"""Storage layer for a small e-commerce storefront."""

__version__ = "0.1.0"
