"""url-splitter: split URLs into their component parts as CSV."""

__version__ = "0.3.0"

__all__ = ["__version__"]
