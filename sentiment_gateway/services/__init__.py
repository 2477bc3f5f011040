"""Stateless services shared by the pipeline."""

from sentiment_gateway.services.result_codec import decode_result, encode_result

__all__ = ["decode_result", "encode_result"]
