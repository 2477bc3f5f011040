"""Result shaping: sort, truncate, project.

Turns the provider's sentence list into the response callers see: a list of
single-key ``{text: score}`` mappings ordered by score and cut to the
requested limit.
"""

from __future__ import annotations

from typing import Sequence

from sentiment_gateway.models.sentiment import Sentence, ShapedResponse, SortOrder


def _score(sentence: Sentence) -> float:
    return sentence.score


def shape_result(
    sentences: Sequence[Sentence] | None,
    sort_order: SortOrder,
    limit: int,
) -> ShapedResponse:
    """Sort *sentences* by score, keep the first *limit*, and project them.

    ``sorted`` is stable in both directions (``reverse=True`` keeps equal
    elements in input order), so ties keep their provider order.  A
    negative *limit* keeps everything.  Duplicate texts are preserved as
    separate entries.  The input sequence is not modified.
    """
    if not sentences:
        return []

    ordered = sorted(sentences, key=_score, reverse=sort_order is SortOrder.DESCENDING)
    if limit >= 0:
        ordered = ordered[:limit]

    return [{sentence.text: sentence.score} for sentence in ordered]
