"""vidhost - video hosting demo: upload API, analytics API and dashboard client."""

__version__ = "0.1.0"
