"""Concrete adapters for the interfaces in ``sentiment_gateway.interfaces``."""
