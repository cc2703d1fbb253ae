"""Extract starter code for exercises from Markdown chapters.

A code block is written to a file when it is preceded by an HTML comment of
the form ``<!-- File path/to/file.rs -->``. Code blocks without such a
comment are ignored, as are comments that no code block follows.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Sequence

from markdown_it import MarkdownIt

from coursebook.book import Book

FILENAME_START = "<!-- File "
FILENAME_END = " -->"

_log = logging.getLogger(__name__)
_CODE_TOKENS = frozenset({"fence", "code_block"})


def _filename_from_html(line: str) -> str | None:
    html = line.strip()
    if (
        html.startswith(FILENAME_START)
        and html.endswith(FILENAME_END)
        and len(html) >= len(FILENAME_START) + len(FILENAME_END)
    ):
        return html[len(FILENAME_START) : len(html) - len(FILENAME_END)]
    return None


def process(output_directory: str | os.PathLike, input_contents: str) -> None:
    """Write every annotated code block in ``input_contents`` under ``output_directory``."""
    output_dir = Path(output_directory)
    next_filename: str | None = None

    for token in MarkdownIt("commonmark").parse(input_contents):
        _log.debug("%s", token.type)
        if token.type == "html_block":
            for line in token.content.splitlines():
                filename = _filename_from_html(line)
                if filename is not None:
                    next_filename = filename
                    _log.info("Next file: %r", next_filename)
        elif token.type in _CODE_TOKENS:
            _log.info("Code block %r", token.info)
            if next_filename is None:
                continue
            full_filename = output_dir / next_filename
            _log.info("Writing %s", full_filename)
            full_filename.parent.mkdir(parents=True, exist_ok=True)
            full_filename.write_text(token.content, encoding="utf-8")
            next_filename = None


def process_all(book: Book, output_directory: str | os.PathLike) -> None:
    """Extract exercises from every chapter, one subdirectory per chapter file."""
    output_dir = Path(output_directory)
    for chapter in book.iter_chapters():
        _log.debug("Chapter %r / %r", chapter.path, chapter.source_path)
        if chapter.path is None:
            continue
        stem = Path(chapter.path).stem
        if not stem:
            raise ValueError(f"Chapter {chapter.path!r} has no file stem")
        process(output_dir / stem, chapter.content)


def _output_directory(context: dict) -> Path:
    try:
        config = context["config"]["output"]["exerciser"]
    except (KeyError, TypeError) as exc:
        raise ValueError("Missing output.exerciser configuration") from exc
    if not isinstance(config, dict) or "output-directory" not in config:
        raise ValueError(
            "Missing output.exerciser.output-directory configuration value"
        )
    value = config["output-directory"]
    if not isinstance(value, str):
        raise ValueError("Expected a string for output.exerciser.output-directory")
    return Path(value)


def main(argv: Sequence[str] | None = None) -> int:
    """Read a render context from standard input and write the exercises."""
    parser = argparse.ArgumentParser(
        prog="mdbook-exerciser",
        description="Extract starter code for exercises from the book",
    )
    parser.parse_args(argv)
    logging.basicConfig(level=os.environ.get("RUST_LOG", "WARNING").upper()
                        if os.environ.get("RUST_LOG", "").upper() in
                        {"DEBUG", "INFO", "WARNING", "ERROR"} else "WARNING")

    try:
        try:
            context = json.load(sys.stdin)
        except ValueError as exc:
            raise ValueError(f"Parsing stdin: {exc}") from exc
        if not isinstance(context, dict):
            raise ValueError("Parsing stdin: expected a JSON object")
        output_directory = _output_directory(context)
        book = Book.from_json(context.get("book"))

        shutil.rmtree(output_directory, ignore_errors=True)
        try:
            output_directory.mkdir()
        except OSError as exc:
            raise OSError(
                f"Failed to create output directory {str(output_directory)!r}: {exc}"
            ) from exc

        process_all(book, output_directory)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0