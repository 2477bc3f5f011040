"""Configuration module: exports Settings and the layered load_settings()."""

from sentiment_gateway.config.loader import load_settings
from sentiment_gateway.config.settings import Settings

__all__ = ["Settings", "load_settings"]
