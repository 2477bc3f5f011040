"""Command-line tools for the sentiment gateway.

- ``python -m sentiment_gateway.cli`` (or the ``sentiment-gateway`` console
  script): run the HTTP server; see :mod:`sentiment_gateway.cli.serve`.
"""
