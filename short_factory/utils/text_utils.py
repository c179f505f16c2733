"""Text utility functions for narration processing."""

import re

# A sentence is a run of non-terminal characters plus any terminal punctuation.
# Punctuation opening the text (an ellipsis, say) leads the first sentence.
_SENTENCE_PATTERN = re.compile(r"[.!?]*[^.!?]+[.!?]*")


def estimate_spoken_duration(text: str, chars_per_second: float = 13.0) -> float:
    """
    Estimate the spoken duration of text in seconds.

    Args:
        text: Text to estimate duration for.
        chars_per_second: Average speaking rate in characters per second.

    Returns:
        Estimated duration in seconds.
    """
    return len(text) / chars_per_second


def split_sentences(text: str) -> list[str]:
    """
    Split text into sentences on terminal punctuation.

    Trailing text without punctuation counts as a sentence. Whitespace-only
    fragments are dropped and each sentence is stripped.

    Args:
        text: Narration text.

    Returns:
        Sentences in their original order.
    """
    sentences = [match.group(0).strip() for match in _SENTENCE_PATTERN.finditer(text)]
    sentences = [s for s in sentences if s]
    if not sentences and text.strip():
        return [text.strip()]
    return sentences
