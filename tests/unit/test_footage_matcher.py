"""Tests for Footage Matcher service."""

import random
from unittest.mock import MagicMock

import pytest

from short_factory.core.exceptions import (
    FootageNotFoundError,
    FootageTimeoutError,
    TerminalProviderError,
    TransientProviderError,
)
from short_factory.models.schemas import Orientation
from short_factory.services.footage_matcher import FootageMatcher


@pytest.fixture
def provider():
    """Mock footage provider."""
    return MagicMock()


@pytest.fixture
def footage_matcher(settings, logger, provider, rng):
    """Create FootageMatcher instance for testing."""
    return FootageMatcher(settings, logger, provider, rng=rng)


def test_low_fps_footage_is_normalized_and_accepted(footage_matcher, provider, make_candidate):
    """Test 10s of 24fps footage counts as 9.6s and clears a 2.4s scene plus buffer."""
    candidate = make_candidate("dog-1", duration=10.0, fps=24.0)
    provider.search.return_value = [candidate]

    assert footage_matcher.normalized_duration(candidate) == pytest.approx(9.6)

    asset = footage_matcher.find_footage(["dog"], 2.4, set())

    assert asset.id == "dog-1"
    assert (asset.width, asset.height) == (1080, 1920)
    assert asset.url == "https://videos.example.com/dog-1.mp4"
    assert asset.media_type == "video"
    provider.search.assert_called_once_with("dog", Orientation.PORTRAIT, 5.0)


def test_high_fps_duration_is_not_scaled(footage_matcher, make_candidate):
    """Test footage at or above the reference frame rate keeps its duration."""
    assert footage_matcher.normalized_duration(make_candidate("a", duration=10.0, fps=60.0)) == 10.0


def test_two_timeouts_then_success(footage_matcher, provider, make_candidate):
    """Test the search recovers when the third attempt answers."""
    provider.search.side_effect = [
        FootageTimeoutError("timeout"),
        FootageTimeoutError("timeout"),
        [make_candidate("dog-1")],
    ]

    asset = footage_matcher.find_footage(["dog"], 5.0, set(), max_retries=3)

    assert asset.id == "dog-1"
    assert provider.search.call_count == 3


def test_timeouts_exhaust_retries(footage_matcher, provider):
    """Test persistent timeouts raise after the retry limit."""
    provider.search.side_effect = FootageTimeoutError("timeout")

    with pytest.raises(FootageTimeoutError):
        footage_matcher.find_footage(["dog"], 5.0, set(), max_retries=3)

    # initial attempt plus three restarts
    assert provider.search.call_count == 4


def test_nothing_found_raises(footage_matcher, provider):
    """Test an empty search everywhere raises FootageNotFoundError."""
    provider.search.return_value = []

    with pytest.raises(FootageNotFoundError):
        footage_matcher.find_footage(["dog", "cat"], 5.0, set())

    # both scene terms plus the four joker terms
    assert provider.search.call_count == 6


def test_scene_terms_are_tried_before_jokers(footage_matcher, provider):
    """Test joker terms are only used after every scene term."""
    provider.search.return_value = []

    with pytest.raises(FootageNotFoundError):
        footage_matcher.find_footage(["dog", "cat", "bird"], 5.0, set())

    searched = [c.args[0] for c in provider.search.call_args_list]
    assert set(searched[:3]) == {"dog", "cat", "bird"}
    assert set(searched[3:]) == {"nature", "globe", "space", "ocean"}


def test_joker_term_used_when_scene_terms_miss(footage_matcher, provider, make_candidate):
    """Test a joker term can supply the footage."""
    provider.search.side_effect = lambda term, orientation, timeout: (
        [make_candidate(f"{term}-1")] if term in {"nature", "globe", "space", "ocean"} else []
    )

    asset = footage_matcher.find_footage(["xyzzy"], 5.0, set())

    assert asset.id.split("-")[0] in {"nature", "globe", "space", "ocean"}


def test_excluded_footage_is_skipped(footage_matcher, provider, make_candidate):
    """Test ids already used in the job are never returned."""
    provider.search.return_value = [make_candidate("used"), make_candidate("fresh")]

    for _ in range(10):
        asset = footage_matcher.find_footage(["dog"], 5.0, {"used"})
        assert asset.id == "fresh"


def test_terminal_error_aborts_immediately(footage_matcher, provider):
    """Test a rejected request is not retried with other terms."""
    provider.search.side_effect = TerminalProviderError("401")

    with pytest.raises(TerminalProviderError):
        footage_matcher.find_footage(["dog", "cat"], 5.0, set())

    assert provider.search.call_count == 1


def test_transient_error_moves_to_next_term(footage_matcher, provider, make_candidate):
    """Test a transient failure on one term falls through to the next one."""
    provider.search.side_effect = [TransientProviderError("503"), [make_candidate("ok-1")]]

    asset = footage_matcher.find_footage(["dog"], 5.0, set())

    assert asset.id == "ok-1"
    assert provider.search.call_count == 2


@pytest.mark.parametrize(
    "overrides",
    [
        {"width": 1920, "height": 1080},
        {"quality": "sd"},
        {"duration": 10.0, "fps": 30.0},
    ],
)
def test_unsuitable_footage_is_filtered(footage_matcher, make_candidate, overrides):
    """Test wrong size, wrong quality and too-short footage are rejected."""
    candidate = make_candidate("bad", **overrides)

    assert footage_matcher.filter_candidates([candidate], 8.0, set(), Orientation.PORTRAIT) == []


def test_candidate_without_encodings_is_filtered(footage_matcher, make_candidate):
    """Test results with no downloadable files are rejected."""
    candidate = make_candidate("empty").model_copy(update={"encodings": []})

    assert footage_matcher.filter_candidates([candidate], 1.0, set(), Orientation.PORTRAIT) == []


def test_landscape_requires_landscape_encoding(footage_matcher, provider, make_candidate):
    """Test landscape jobs only accept 1920x1080 footage."""
    provider.search.return_value = [
        make_candidate("portrait"),
        make_candidate("landscape", width=1920, height=1080),
    ]

    asset = footage_matcher.find_footage(["city"], 5.0, set(), orientation=Orientation.LANDSCAPE)

    assert asset.id == "landscape"
    provider.search.assert_called_once_with("city", Orientation.LANDSCAPE, 5.0)


def test_seeded_rng_gives_repeatable_choice(settings, logger, make_candidate):
    """Test the same seed picks the same asset."""
    candidates = [make_candidate(f"clip-{i}") for i in range(20)]
    picks = []
    for _ in range(2):
        provider = MagicMock()
        provider.search.return_value = candidates
        matcher = FootageMatcher(settings, logger, provider, rng=random.Random(42))
        picks.append(matcher.find_footage(["dog", "cat", "sea"], 5.0, set()).id)

    assert picks[0] == picks[1]
