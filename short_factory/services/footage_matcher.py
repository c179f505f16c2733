"""Footage Matcher - finds stock footage that fits a scene."""

import random
from typing import Any, Optional, Protocol

from short_factory.core.config import Settings
from short_factory.core.exceptions import (
    FootageNotFoundError,
    FootageTimeoutError,
    TerminalProviderError,
    TransientProviderError,
)
from short_factory.models.schemas import FootageAsset, FootageCandidate, Orientation


class FootageProvider(Protocol):
    """Search API the matcher queries."""

    def search(self, term: str, orientation: Orientation, timeout: float) -> list[FootageCandidate]: ...


class FootageMatcher:
    """Picks footage that is long enough, the right shape, and not used yet in the job."""

    def __init__(
        self,
        settings: Settings,
        logger: Any,
        provider: FootageProvider,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the footage matcher.

        Args:
            settings: Application settings
            logger: Logger instance
            provider: Footage search provider
            rng: Randomness source for term order and asset choice
        """
        self.settings = settings
        self.logger = logger
        self.provider = provider
        self.rng = rng or random.Random()
        self.joker_terms = list(settings.footage_joker_terms)
        self.duration_buffer = settings.footage_duration_buffer_seconds
        self.reference_fps = settings.footage_reference_fps
        self.required_quality = settings.footage_quality

    def find_footage(
        self,
        search_terms: list[str],
        min_duration_seconds: float,
        exclude_ids: set[str],
        orientation: Orientation = Orientation.PORTRAIT,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
    ) -> FootageAsset:
        """
        Find footage for one scene.

        Scene terms are tried first, then the joker terms, each group in random
        order. A provider timeout restarts the whole term list.

        Args:
            search_terms: Scene-specific search terms
            min_duration_seconds: Scene duration the footage must cover
            exclude_ids: Asset ids already used in this job
            orientation: Target frame orientation
            timeout: Per-request timeout in seconds
            max_retries: Restarts allowed after a timeout

        Returns:
            The chosen asset; the caller adds its id to `exclude_ids`

        Raises:
            FootageTimeoutError: If the provider still times out after all retries
            FootageNotFoundError: If no term produced a usable asset
            TerminalProviderError: If the provider rejects the request outright
        """
        timeout = timeout if timeout is not None else self.settings.footage_search_timeout_seconds
        max_retries = max_retries if max_retries is not None else self.settings.footage_max_retries

        attempt = 0
        while True:
            try:
                asset = self._search_terms(search_terms, min_duration_seconds, exclude_ids, orientation, timeout)
            except FootageTimeoutError as e:
                if attempt >= max_retries:
                    self.logger.error(f"Footage search timed out, retry limit reached ({max_retries})")
                    raise
                attempt += 1
                self.logger.warning(f"Footage search timed out ({e}), retrying {attempt}/{max_retries}...")
                continue

            if asset is None:
                self.logger.error(f"No footage found for terms {search_terms}")
                raise FootageNotFoundError(f"No footage found for search terms {search_terms}")
            return asset

    def _search_terms(
        self,
        search_terms: list[str],
        min_duration_seconds: float,
        exclude_ids: set[str],
        orientation: Orientation,
        timeout: float,
    ) -> Optional[FootageAsset]:
        terms = list(search_terms)
        jokers = list(self.joker_terms)
        self.rng.shuffle(terms)
        self.rng.shuffle(jokers)

        for term in terms + jokers:
            self.logger.debug(f"Searching footage: term='{term}', min_duration={min_duration_seconds:.2f}s")
            try:
                candidates = self.provider.search(term, orientation, timeout)
            except (FootageTimeoutError, TerminalProviderError):
                raise
            except TransientProviderError as e:
                self.logger.warning(f"Footage search failed for '{term}': {e}")
                continue

            matches = self.filter_candidates(candidates, min_duration_seconds, exclude_ids, orientation)
            if not matches:
                self.logger.debug(f"No usable footage for '{term}' ({len(candidates)} results)")
                continue

            asset = self.rng.choice(matches)
            self.logger.info(f"Found footage {asset.id} for '{term}' ({len(matches)} candidates)")
            return asset

        return None

    def normalized_duration(self, candidate: FootageCandidate) -> float:
        """Duration rescaled to the reference frame rate for slow footage."""
        if candidate.fps < self.reference_fps:
            return candidate.duration_seconds * (candidate.fps / self.reference_fps)
        return candidate.duration_seconds

    def filter_candidates(
        self,
        candidates: list[FootageCandidate],
        min_duration_seconds: float,
        exclude_ids: set[str],
        orientation: Orientation,
    ) -> list[FootageAsset]:
        """
        Keep candidates that are unused, long enough and have an exact-size encoding.

        Args:
            candidates: Provider search results
            min_duration_seconds: Scene duration
            exclude_ids: Ids used earlier in the job
            orientation: Target frame orientation

        Returns:
            Usable assets, one per candidate
        """
        width, height = orientation.dimensions
        required = min_duration_seconds + self.duration_buffer
        assets = []
        for candidate in candidates:
            if candidate.id in exclude_ids or not candidate.encodings:
                continue
            if self.normalized_duration(candidate) < required:
                continue
            for encoding in candidate.encodings:
                if (
                    encoding.quality == self.required_quality
                    and encoding.width == width
                    and encoding.height == height
                ):
                    assets.append(
                        FootageAsset(
                            id=candidate.id,
                            url=encoding.url,
                            width=encoding.width,
                            height=encoding.height,
                        )
                    )
                    break
        return assets
