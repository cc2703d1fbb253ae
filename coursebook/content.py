"""Dump the source of every slide, in course order."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from coursebook.book import load_book
from coursebook.course import Courses


def course_content(courses: Courses, src_dir: str | Path) -> str:
    """Return all slide sources, headed by course, session, segment and slide."""
    src = Path(src_dir)
    lines: list[str] = []
    for course in courses:
        lines.append(f"# COURSE: {course.name}")
        for session in course:
            lines.append(f"# SESSION: {session.name}")
            for segment in session:
                lines.append(f"# SEGMENT: {segment.name}")
                for slide in segment:
                    lines.append(f"# SLIDE: {slide.name}")
                    lines.extend(
                        (src / path).read_text(encoding="utf-8")
                        for path in slide.source_paths
                    )
    return "".join(f"{line}\n" for line in lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Print the content of the book in the current directory."""
    parser = argparse.ArgumentParser(
        prog="course-content",
        description="Print the source of every slide in course order",
    )
    parser.parse_args(argv)
    try:
        courses, _ = Courses.extract_structure(load_book("."))
        text = course_content(courses, "src")
    except (OSError, ValueError) as exc:
        print(f"Unable to read the course content: {exc}", file=sys.stderr)
        return 1
    sys.stdout.write(text)
    return 0