"""Console application launcher with desktop-entry search and an inline calculator."""

__version__ = "0.1.0"
__all__ = ["__version__"]