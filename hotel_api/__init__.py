"""Hotel management REST API backed by a JSON document store."""

__version__ = "0.1.0"
