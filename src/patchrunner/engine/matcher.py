"""Literal substring matching.

Search text is always matched character for character with ``str.find`` and
``str.count``, and replacements are spliced in by slicing. Regex
metacharacters in the needle and ``$&`` or ``\\1`` in the replacement carry no
special meaning here.

Occurrences are non-overlapping: the scan runs left to right and every match
consumes its span before the search resumes, so "aa" occurs twice in "aaaaa".
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MatchOutcome:
    """Occurrence count of a needle, plus its span when it occurs exactly once."""

    count: int
    span: tuple[int, int] | None = None

    @property
    def is_unique(self) -> bool:
        return self.count == 1


def _require_needle(needle: str) -> None:
    if not needle:
        raise ValueError("Search text must not be empty")


def count_occurrences(content: str, needle: str) -> int:
    """Number of non-overlapping literal occurrences of ``needle`` in ``content``."""
    _require_needle(needle)
    return content.count(needle)


def find_occurrences(content: str, needle: str) -> list[tuple[int, int]]:
    """Spans of every non-overlapping literal occurrence, left to right."""
    _require_needle(needle)

    spans = []
    start = 0
    while True:
        pos = content.find(needle, start)
        if pos == -1:
            break
        end = pos + len(needle)
        spans.append((pos, end))
        start = end

    return spans


def locate_unique(content: str, needle: str) -> MatchOutcome:
    """Count occurrences and locate the match if there is exactly one."""
    count = count_occurrences(content, needle)
    if count != 1:
        return MatchOutcome(count=count)

    pos = content.find(needle)
    return MatchOutcome(count=1, span=(pos, pos + len(needle)))


def replace_span(content: str, span: tuple[int, int], replacement: str) -> str:
    start, end = span
    return content[:start] + replacement + content[end:]


def replace_every(content: str, needle: str, replacement: str) -> tuple[str, int]:
    """Replace all non-overlapping occurrences.

    Returns:
        Tuple of (new_content, replacement_count)
    """
    spans = find_occurrences(content, needle)
    if not spans:
        return content, 0

    parts = []
    start = 0
    for pos, end in spans:
        parts.append(content[start:pos])
        parts.append(replacement)
        start = end
    parts.append(content[start:])

    return "".join(parts), len(spans)
