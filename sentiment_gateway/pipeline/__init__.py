"""Request pipeline components: context, orchestrator, and shaper."""

from sentiment_gateway.pipeline.context import RequestContext
from sentiment_gateway.pipeline.orchestrator import SentimentPipeline
from sentiment_gateway.pipeline.shaper import shape_result

__all__ = [
    "RequestContext",
    "SentimentPipeline",
    "shape_result",
]
