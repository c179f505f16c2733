"""Tests for text utility functions."""

from short_factory.utils.text_utils import estimate_spoken_duration, split_sentences


def test_estimate_spoken_duration_default_rate():
    """Test duration estimate uses 13 characters per second."""
    assert estimate_spoken_duration("a" * 26) == 2.0


def test_estimate_spoken_duration_custom_rate():
    """Test duration estimate honours a custom rate."""
    assert estimate_spoken_duration("a" * 30, chars_per_second=10.0) == 3.0


def test_split_sentences_on_terminal_punctuation():
    """Test text is split on full stops, exclamation and question marks."""
    assert split_sentences("One. Two! Three? Four") == ["One.", "Two!", "Three?", "Four"]


def test_split_sentences_keeps_repeated_punctuation():
    """Test runs of punctuation stay with their sentence."""
    assert split_sentences("Really?! Yes...") == ["Really?!", "Yes..."]


def test_split_sentences_without_punctuation():
    """Test text without punctuation is a single sentence."""
    assert split_sentences("  just some words  ") == ["just some words"]


def test_split_sentences_empty_text():
    """Test empty text yields no sentences."""
    assert split_sentences("   ") == []


def test_split_sentences_keeps_leading_punctuation():
    """Test punctuation opening the text stays with the first sentence."""
    assert split_sentences("...Well. Yes.") == ["...Well.", "Yes."]
    assert split_sentences("?! Who knows") == ["?! Who knows"]


def test_split_sentences_punctuation_only():
    """Test text made only of punctuation is kept whole."""
    assert split_sentences("...") == ["..."]
