"""Change statistics for a completed edit."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ChangeReport:
    """Before/after line counts and replacement totals.

    ``lines_added`` and ``lines_removed`` are net line-count deltas, not a line
    diff: at most one of them is non-zero, and both are zero when an edit
    rewrites lines without changing how many there are.
    """

    lines_before: int
    lines_after: int
    lines_added: int
    lines_removed: int
    replacement_counts: tuple[int, ...]
    total_replacements: int

    @property
    def edit_count(self) -> int:
        return len(self.replacement_counts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "lines_before": self.lines_before,
            "lines_after": self.lines_after,
            "lines_added": self.lines_added,
            "lines_removed": self.lines_removed,
            "replacement_counts": list(self.replacement_counts),
            "total_replacements": self.total_replacements,
            "edit_count": self.edit_count,
        }

    def summary_lines(self) -> list[str]:
        return [
            f"Total edits: {self.edit_count}",
            f"Total replacements: {self.total_replacements}",
            f"Lines added: {self.lines_added}",
            f"Lines removed: {self.lines_removed}",
        ]


def count_lines(content: str) -> int:
    # "" is one (empty) line and a trailing newline starts another
    return len(content.split("\n"))


def summarize(
    initial_content: str, final_content: str, replacement_counts: Sequence[int]
) -> ChangeReport:
    """Build a ChangeReport from the two snapshots and per-operation counts."""
    before = count_lines(initial_content)
    after = count_lines(final_content)
    counts = tuple(replacement_counts)

    return ChangeReport(
        lines_before=before,
        lines_after=after,
        lines_added=max(0, after - before),
        lines_removed=max(0, before - after),
        replacement_counts=counts,
        total_replacements=sum(counts),
    )
