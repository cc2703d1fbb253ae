"""In-memory model of a book: chapters, separators and part titles.

The JSON form matches the one exchanged with the book build tool, so a
book can be read from a preprocessor's input and written back unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, Union
from urllib.parse import unquote


@dataclass
class Chapter:
    """A chapter of the book, possibly with nested sub-items."""

    name: str
    content: str = ""
    number: list[int] | None = None
    sub_items: list[BookItem] = field(default_factory=list)
    path: str | None = None
    source_path: str | None = None
    parent_names: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Separator:
    """A horizontal separator between chapters."""


@dataclass
class PartTitle:
    """A heading that starts a new part of the book."""

    title: str


BookItem = Union[Chapter, Separator, PartTitle]


def _walk_pre(items: Iterable[BookItem]) -> Iterator[Chapter]:
    for item in items:
        if isinstance(item, Chapter):
            yield item
            yield from _walk_pre(item.sub_items)


def _walk_post(items: Iterable[BookItem]) -> Iterator[Chapter]:
    for item in items:
        if isinstance(item, Chapter):
            yield from _walk_post(item.sub_items)
            yield item


@dataclass
class Book:
    """A sequence of top-level book items."""

    sections: list[BookItem] = field(default_factory=list)

    def iter_chapters(self) -> Iterator[Chapter]:
        """Yield every chapter, parents before their sub-chapters."""
        return _walk_pre(self.sections)

    def for_each_chapter(self, func: Callable[[Chapter], Any]) -> None:
        """Call ``func`` on every chapter, sub-chapters before their parent."""
        for chapter in list(_walk_post(self.sections)):
            func(chapter)

    def to_json(self) -> dict[str, Any]:
        """Return the book as JSON-compatible data."""
        return {
            "sections": [item_to_json(item) for item in self.sections],
            "__non_exhaustive": None,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Book:
        """Build a book from JSON-compatible data."""
        try:
            sections = data["sections"]
        except (KeyError, TypeError) as exc:
            raise ValueError("book data has no 'sections'") from exc
        return cls([item_from_json(item) for item in sections])


def item_to_json(item: BookItem) -> Any:
    """Encode one book item."""
    if isinstance(item, Chapter):
        return {
            "Chapter": {
                "name": item.name,
                "content": item.content,
                "number": None if item.number is None else list(item.number),
                "sub_items": [item_to_json(sub) for sub in item.sub_items],
                "path": item.path,
                "source_path": item.source_path,
                "parent_names": list(item.parent_names),
            }
        }
    if isinstance(item, Separator):
        return "Separator"
    if isinstance(item, PartTitle):
        return {"PartTitle": item.title}
    raise TypeError(f"not a book item: {item!r}")


def item_from_json(data: Any) -> BookItem:
    """Decode one book item."""
    if data == "Separator":
        return Separator()
    if isinstance(data, dict) and len(data) == 1:
        ((kind, body),) = data.items()
        if kind == "PartTitle" and isinstance(body, str):
            return PartTitle(body)
        if kind == "Chapter" and isinstance(body, dict):
            number = body.get("number")
            return Chapter(
                name=body["name"],
                content=body.get("content", ""),
                number=None if number is None else list(number),
                sub_items=[item_from_json(sub) for sub in body.get("sub_items", [])],
                path=body.get("path"),
                source_path=body.get("source_path"),
                parent_names=list(body.get("parent_names", [])),
            )
    raise ValueError(f"invalid book item: {data!r}")


_LINK = r"\[(?P<name>[^\]]*)\]\((?P<path>[^)]*)\)"
_LIST_ITEM = re.compile(r"^(?P<indent>[ \t]*)[-*+]\s+" + _LINK)
_PLAIN_LINK = re.compile(r"^\s*" + _LINK)
_HEADING = re.compile(r"^#{1,6}\s+(?P<title>.*?)\s*#*\s*$")
_SEPARATOR = re.compile(r"^\s*(?:-{3,}|\*{3,}|_{3,})\s*$")


def _indent_width(indent: str) -> int:
    return len(indent.replace("\t", "    "))


def _make_chapter(name: str, link: str, parents: list[str]) -> Chapter:
    link = unquote(link.strip())
    path = link or None
    return Chapter(
        name=name.strip(),
        path=path,
        source_path=path,
        parent_names=parents,
    )


def parse_summary(text: str) -> list[BookItem]:
    """Parse the table of contents into book items (without content)."""
    sections: list[BookItem] = []
    stack: list[tuple[int, Chapter]] = []
    top_number = 0
    seen_item = False

    for line in text.splitlines():
        if not line.strip():
            continue
        if _SEPARATOR.match(line):
            sections.append(Separator())
            stack.clear()
            seen_item = True
            continue
        heading = _HEADING.match(line)
        if heading:
            if seen_item:
                sections.append(PartTitle(heading.group("title")))
            stack.clear()
            continue
        list_item = _LIST_ITEM.match(line)
        if list_item:
            indent = _indent_width(list_item.group("indent"))
            while stack and stack[-1][0] >= indent:
                stack.pop()
            if stack:
                parent = stack[-1][1]
                chapter = _make_chapter(
                    list_item.group("name"),
                    list_item.group("path"),
                    [*parent.parent_names, parent.name],
                )
                position = sum(
                    1 for sub in parent.sub_items if isinstance(sub, Chapter)
                )
                chapter.number = [*(parent.number or []), position + 1]
                parent.sub_items.append(chapter)
            else:
                top_number += 1
                chapter = _make_chapter(
                    list_item.group("name"), list_item.group("path"), []
                )
                chapter.number = [top_number]
                sections.append(chapter)
            stack.append((indent, chapter))
            seen_item = True
            continue
        plain = _PLAIN_LINK.match(line)
        if plain:
            sections.append(
                _make_chapter(plain.group("name"), plain.group("path"), [])
            )
            stack.clear()
            seen_item = True
    return sections


def load_book(root: str | Path) -> Book:
    """Load the book rooted at ``root``, reading ``src/SUMMARY.md`` and chapters."""
    src_dir = Path(root) / "src"
    summary = (src_dir / "SUMMARY.md").read_text(encoding="utf-8")
    book = Book(parse_summary(summary))
    for chapter in book.iter_chapters():
        if chapter.source_path is not None:
            chapter.content = (src_dir / chapter.source_path).read_text(
                encoding="utf-8"
            )
    return book