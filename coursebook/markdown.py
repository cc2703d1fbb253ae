"""Markdown helpers: relative links, durations and tables."""

from __future__ import annotations

import os
from pathlib import PurePosixPath
from typing import Iterable


def _starts_with(path: PurePosixPath, prefix: PurePosixPath) -> bool:
    prefix_parts = prefix.parts
    return path.parts[: len(prefix_parts)] == prefix_parts


def relative_link(doc_path: str | os.PathLike, target_path: str | os.PathLike) -> str:
    """Return a link to ``target_path`` relative to the document at ``doc_path``."""
    doc = PurePosixPath(os.fspath(doc_path))
    target = PurePosixPath(os.fspath(target_path))

    dotdot = -1
    for ancestor in (doc, *doc.parents):
        if _starts_with(target, ancestor):
            break
        dotdot += 1
    if dotdot > 0:
        return "../" * dotdot + str(target)
    return f"./{target}"


def duration(minutes: int) -> str:
    """Describe a duration in words, rounding anything over 5 minutes up to 5."""
    if minutes < 0:
        raise ValueError("duration cannot be negative")
    if minutes > 5:
        minutes += 4
        minutes -= minutes % 5

    hours, minutes = divmod(minutes, 60)
    if hours == 0:
        return "1 minute" if minutes == 1 else f"{minutes} minutes"
    hour_text = "1 hour" if hours == 1 else f"{hours} hours"
    if minutes == 0:
        return hour_text
    return f"{hour_text} and {minutes} minutes"


class Table:
    """A table with a fixed number of columns, rendered as Markdown."""

    def __init__(self, header: Iterable[str]) -> None:
        self.header = list(header)
        self.rows: list[list[str]] = []

    def add_row(self, row: Iterable[str]) -> None:
        """Append a row; it must have as many cells as the header."""
        cells = list(row)
        if len(cells) != len(self.header):
            raise ValueError(
                f"row has {len(cells)} cells, table has {len(self.header)} columns"
            )
        self.rows.append(cells)

    @staticmethod
    def _render_row(cells: Iterable[str]) -> str:
        return "|" + "".join(f" {cell} |" for cell in cells) + "\n"

    def __str__(self) -> str:
        lines = [
            self._render_row(self.header),
            self._render_row("-" for _ in self.header),
        ]
        lines.extend(self._render_row(row) for row in self.rows)
        return "".join(lines)