"""Book preprocessor that adds course outlines and timing notes."""

from __future__ import annotations

import argparse
import json
import sys
from typing import IO, Sequence

from coursebook.book import Book, Chapter
from coursebook.course import Courses
from coursebook.replacements import replace
from coursebook.timing_info import insert_timing_info


def preprocess(input_stream: IO[str], output_stream: IO[str]) -> None:
    """Read ``[context, book]`` JSON, process the book and write it back as JSON."""
    data = json.load(input_stream)
    if not isinstance(data, list) or len(data) != 2:
        raise ValueError("expected a JSON array of [context, book]")
    _, book_data = data
    courses, book = Courses.extract_structure(Book.from_json(book_data))

    def handle(chapter: Chapter) -> None:
        found = courses.find_slide(chapter)
        if found is None:
            replace(courses, None, None, None, chapter)
            return
        course, session, segment, slide = found
        insert_timing_info(slide, chapter)
        replace(courses, course, session, segment, chapter)

    book.for_each_chapter(handle)
    json.dump(book.to_json(), output_stream)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the preprocessor on standard input and output."""
    parser = argparse.ArgumentParser(
        prog="mdbook-course",
        description="Book preprocessor for course material",
    )
    subcommands = parser.add_subparsers(dest="command")
    supports = subcommands.add_parser("supports")
    supports.add_argument("renderer")
    args = parser.parse_args(argv)

    if args.command == "supports":
        return 0

    try:
        preprocess(sys.stdin, sys.stdout)
    except (ValueError, KeyError, TypeError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0