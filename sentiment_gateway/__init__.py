"""Sentiment gateway: a caching HTTP front-end for remote sentiment analysis."""

__version__ = "0.1.0"
