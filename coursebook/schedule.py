"""Summaries of course timing, for review and for pull requests."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from coursebook.book import load_book
from coursebook.course import Courses
from coursebook.markdown import duration


def timediff(actual: int, target: int, slop: int) -> str:
    """Describe ``actual`` against ``target``, noting differences beyond ``slop``."""
    if actual > target + slop:
        return (
            f"{duration(actual)} (\u23f0 *{duration(actual - target)} too long*)"
        )
    if actual + slop < target:
        return f"{duration(actual)}: ({duration(target - actual)} short)"
    return duration(actual)


def session_summary(courses: Courses) -> str:
    """Markdown summary of every session and its segments."""
    lines: list[str] = []
    for course in courses:
        if course.target_minutes() == 0:
            break
        for session in course:
            lines.append(f"### {course.name} // {session.name}")
            lines.append(
                f"_{timediff(session.minutes(), session.target_minutes(), 15)}_"
            )
            lines.append("")
            for segment in session:
                lines.append(f"* {segment.name} - _{duration(segment.minutes())}_")
            lines.append("")
    return "".join(f"{line}\n" for line in lines)


def pr_summary(courses: Courses) -> str:
    """Markdown summary of courses and sessions for a pull request."""
    lines = [
        "## Course Schedule",
        "With this pull request applied, the course schedule is as follows:",
    ]
    for course in courses:
        if course.target_minutes() == 0:
            break
        lines.append(f"### {course.name}")
        lines.append(f"_{timediff(course.minutes(), course.target_minutes(), 15)}_")
        for session in course:
            lines.append(
                f"* {session.name} - "
                f"_{timediff(session.minutes(), session.target_minutes(), 5)}_"
            )
    return "".join(f"{line}\n" for line in lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Print a schedule summary of the book in the current directory."""
    parser = argparse.ArgumentParser(
        prog="course-schedule",
        description="Show the course schedule of the book",
    )
    subcommands = parser.add_subparsers(dest="command")
    subcommands.add_parser("sessions", help="Show session summary (default)")
    subcommands.add_parser("segments", help="Show segment summary")
    subcommands.add_parser("pr", help="Show summary for a PR")
    args = parser.parse_args(argv)

    if args.command == "segments":
        print("the segment summary is not supported", file=sys.stderr)
        return 1

    try:
        courses, _ = Courses.extract_structure(load_book("."))
    except (OSError, ValueError) as exc:
        print(f"Unable to load the course structure: {exc}", file=sys.stderr)
        return 1

    if args.command == "pr":
        sys.stdout.write(pr_summary(courses))
    else:
        sys.stdout.write(session_summary(courses))
    return 0