"""Caption Paginator - groups timed tokens into caption lines and pages."""

from typing import Optional

from short_factory.models.schemas import CaptionLine, CaptionPage, CaptionToken


def create_caption_pages(
    tokens: list[CaptionToken],
    max_line_chars: int,
    max_lines_per_page: int,
    max_gap_ms: int,
) -> list[CaptionPage]:
    """
    Group a flat token stream into pages of lines.

    A silence longer than `max_gap_ms` always starts a new page. Otherwise
    tokens fill the current line until the next one would push its text past
    `max_line_chars`; a page holds at most `max_lines_per_page` lines.
    A token that is longer than a whole line on its own gets a line to itself.

    Args:
        tokens: Tokens in playback order
        max_line_chars: Longest allowed line text
        max_lines_per_page: Lines per page
        max_gap_ms: Silence that forces a page break

    Returns:
        Time-ordered, non-overlapping caption pages
    """
    pages: list[CaptionPage] = []
    page_lines: list[CaptionLine] = []
    line = CaptionLine()
    page_start: Optional[int] = None
    page_end = 0

    def flush_page() -> None:
        nonlocal page_lines, page_start
        if page_lines:
            pages.append(CaptionPage(start_ms=page_start, end_ms=page_end, lines=page_lines))
        page_lines = []
        page_start = None

    for index, token in enumerate(tokens):
        if index > 0 and token.start_ms - page_end > max_gap_ms:
            if line.tokens:
                page_lines.append(line)
                line = CaptionLine()
            flush_page()
        elif line.tokens and len(line.text) + 1 + len(token.text.strip()) > max_line_chars:
            page_lines.append(line)
            line = CaptionLine()
            if len(page_lines) >= max_lines_per_page:
                flush_page()

        line.tokens.append(token)
        if page_start is None:
            page_start = token.start_ms
        page_end = token.end_ms

    if line.tokens:
        page_lines.append(line)
    flush_page()

    return pages


class CaptionPaginator:
    """Paginates captions with the configured layout limits."""

    def __init__(self, max_line_chars: int = 20, max_lines_per_page: int = 1, max_gap_ms: int = 1000):
        self.max_line_chars = max_line_chars
        self.max_lines_per_page = max_lines_per_page
        self.max_gap_ms = max_gap_ms

    @classmethod
    def from_settings(cls, settings) -> "CaptionPaginator":
        return cls(
            max_line_chars=settings.caption_line_max_chars,
            max_lines_per_page=settings.caption_lines_per_page,
            max_gap_ms=settings.caption_max_gap_ms,
        )

    def paginate(self, tokens: list[CaptionToken]) -> list[CaptionPage]:
        return create_caption_pages(
            tokens,
            max_line_chars=self.max_line_chars,
            max_lines_per_page=self.max_lines_per_page,
            max_gap_ms=self.max_gap_ms,
        )
