"""
Text helpers for comparing issue descriptions.

Descriptions are compared as bags of lower-cased, whitespace-separated words
collapsed to sets. No stemming or stop-word removal: "pothole" and
"potholes" are different words.
"""

from typing import Optional


def tokenize(text: Optional[str]) -> set[str]:
    """
    Lower-case and split on whitespace.

    Examples:
        "Broken  Street light" -> {"broken", "street", "light"}
        None -> set()
    """
    if not text:
        return set()
    return set(text.lower().split())


def text_similarity(text1: Optional[str], text2: Optional[str]) -> float:
    """
    Jaccard similarity of the two word sets: |intersection| / |union|.

    Returns 0.0 when either side has no words.

    Args:
        text1: First description
        text2: Second description

    Returns:
        Similarity in [0, 1]; 1.0 for identical non-empty word sets
    """
    words1 = tokenize(text1)
    words2 = tokenize(text2)
    if not words1 or not words2:
        return 0.0
    return len(words1 & words2) / len(words1 | words2)
