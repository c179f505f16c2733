"""Pexels API client for stock footage search."""

from typing import Any, Optional

import requests

from short_factory.core.config import Settings
from short_factory.core.exceptions import (
    FootageTimeoutError,
    TerminalProviderError,
    TransientProviderError,
)
from short_factory.models.schemas import FootageCandidate, FootageEncoding, Orientation


class PexelsClient:
    """Footage provider backed by the Pexels video search API."""

    SEARCH_PATH = "/videos/search"
    PAGE_SIZE = 80

    def __init__(self, settings: Settings, logger: Any, session: Optional[requests.Session] = None):
        """
        Initialize the Pexels client.

        Args:
            settings: Application settings
            logger: Logger instance
            session: Optional requests session (for connection reuse)
        """
        self.settings = settings
        self.logger = logger
        self.api_key = settings.pexels_api_key
        self.base_url = settings.pexels_api_url.rstrip("/")
        self.session = session or requests.Session()

    def search(self, term: str, orientation: Orientation, timeout: float) -> list[FootageCandidate]:
        """
        Search videos for a term.

        Args:
            term: Search query
            orientation: Orientation filter
            timeout: Request timeout in seconds

        Returns:
            Search results, possibly empty

        Raises:
            FootageTimeoutError: If the request times out
            TerminalProviderError: If the API key is missing or rejected
            TransientProviderError: On connection errors and other non-2xx answers
        """
        if not self.api_key:
            raise TerminalProviderError("Pexels API key not configured. Set PEXELS_API_KEY in .env file.")

        params = {
            "query": term,
            "orientation": orientation.value,
            "size": "medium",
            "per_page": self.PAGE_SIZE,
        }
        headers = {"Authorization": self.api_key}

        try:
            response = self.session.get(
                f"{self.base_url}{self.SEARCH_PATH}",
                params=params,
                headers=headers,
                timeout=timeout,
            )
        except requests.exceptions.Timeout as e:
            raise FootageTimeoutError(f"Pexels search for '{term}' timed out after {timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise TransientProviderError(f"Network error calling Pexels API: {e}") from e

        if response.status_code == 401:
            raise TerminalProviderError(
                "Invalid Pexels API key (401) - get a valid key from https://www.pexels.com/api "
                "and set it in PEXELS_API_KEY"
            )
        if response.status_code != 200:
            raise TransientProviderError(f"Pexels API returned status {response.status_code}: {response.text[:200]}")

        try:
            payload = response.json()
        except ValueError as e:
            raise TransientProviderError(f"Pexels API returned a non-JSON body: {response.text[:200]}") from e
        if not isinstance(payload, dict):
            raise TransientProviderError(f"Pexels API returned an unexpected body: {response.text[:200]}")

        videos = payload.get("videos") or []
        return [self._parse_video(video) for video in videos]

    @staticmethod
    def _parse_video(video: dict) -> FootageCandidate:
        files = video.get("video_files") or []
        # Pexels reports fps per file; the first file speaks for the clip
        fps = files[0].get("fps") if files else None
        return FootageCandidate(
            id=str(video["id"]),
            duration_seconds=float(video.get("duration") or 0),
            fps=float(fps) if fps else 25.0,
            encodings=[
                FootageEncoding(
                    quality=f.get("quality") or "",
                    width=int(f.get("width") or 0),
                    height=int(f.get("height") or 0),
                    url=f["link"],
                )
                for f in files
                if f.get("link")
            ],
        )
