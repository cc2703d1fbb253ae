"""Split YAML frontmatter from chapter contents."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import yaml

from coursebook.book import Chapter

_FRONTMATTER = re.compile(
    r"\A\s*---[ \t]*\r?\n(?P<matter>.*?)^---[ \t]*(?:\r?\n|\Z)(?P<content>.*)\Z",
    re.DOTALL | re.MULTILINE,
)


class FrontmatterError(ValueError):
    """The frontmatter of a chapter could not be parsed."""


@dataclass
class Frontmatter:
    """Course annotations found in a chapter's frontmatter."""

    minutes: int | None = None
    target_minutes: int | None = None
    course: str | None = None
    session: str | None = None


def _optional_int(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise TypeError(f"'{key}' must be a non-negative integer, got {value!r}")
    return value


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {value!r}")
    return value


def _parse(text: str) -> Frontmatter:
    data = yaml.safe_load(text)
    if data is None:
        return Frontmatter()
    if not isinstance(data, dict):
        raise TypeError("frontmatter must be a mapping")
    return Frontmatter(
        minutes=_optional_int(data, "minutes"),
        target_minutes=_optional_int(data, "target_minutes"),
        course=_optional_str(data, "course"),
        session=_optional_str(data, "session"),
    )


def split_frontmatter(chapter: Chapter) -> tuple[Frontmatter, str]:
    """Return the chapter's frontmatter and its contents without it."""
    match = _FRONTMATTER.match(chapter.content)
    if match is None:
        return Frontmatter(), chapter.content
    try:
        frontmatter = _parse(match.group("matter").strip())
    except (yaml.YAMLError, TypeError) as exc:
        raise FrontmatterError(
            f"error parsing frontmatter in {chapter.source_path!r}: {exc}"
        ) from exc
    return frontmatter, match.group("content").strip()