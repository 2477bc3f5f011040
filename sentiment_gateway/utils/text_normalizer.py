"""Cache key normalization for raw request text.

The cache key decides what counts as "the same request".  The policy is
deliberately narrow: surrounding whitespace and letter case are ignored,
everything else is significant.  ``"  Hello "`` and ``"hello"`` share an
entry; ``"hi there"`` and ``"hi   there"`` do not, and neither do inputs that
differ only in punctuation.
"""


def normalize_cache_key(text: str) -> str:
    """Derive the cache key for *text*.

    Strips leading/trailing whitespace and lowercases the remainder.  The
    original text (not the key) is what gets sent to the provider.

    Args:
        text: Raw request content.

    Returns:
        The normalized key.
    """
    return text.strip().lower()
