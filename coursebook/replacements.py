"""Expansion of ``{{% ... }}`` directives in chapter contents."""

from __future__ import annotations

import re

from coursebook.book import Chapter
from coursebook.course import Course, Courses, Segment, Session

DIRECTIVE = re.compile(r"\{\{%([^}]*)}}")


def replace(
    courses: Courses,
    course: Course | None,
    session: Session | None,
    segment: Segment | None,
    chapter: Chapter,
) -> None:
    """Replace supported directives in ``chapter`` with generated content.

    Supported directives are ``session outline``, ``segment outline``,
    ``course outline`` and ``course outline <name>``. Any other directive is
    replaced by its own text.
    """
    if chapter.source_path is None:
        return

    def substitute(match: re.Match[str]) -> str:
        directive_str = match.group(1).strip()
        words = directive_str.split()
        if words == ["session", "outline"] and session is not None:
            return session.outline()
        if words == ["segment", "outline"] and segment is not None:
            return segment.outline()
        if words == ["course", "outline"] and course is not None:
            return course.schedule()
        if len(words) == 3 and words[:2] == ["course", "outline"]:
            found = courses.find_course(words[2])
            if found is None:
                return f"not found - {match.group(0)}"
            return found.schedule()
        return directive_str

    chapter.content = DIRECTIVE.sub(substitute, chapter.content)