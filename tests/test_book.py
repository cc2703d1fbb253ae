import json

import pytest

from coursebook.book import (
    Book,
    Chapter,
    PartTitle,
    Separator,
    item_from_json,
    item_to_json,
    load_book,
    parse_summary,
)

SUMMARY = """# Summary

[Intro](intro.md)

# First Part

- [Alpha](alpha.md)
  - [Beta](alpha/beta.md)
    - [Gamma](alpha/beta/gamma.md)
- [Draft]()

---

[Outro](outro.md)
"""


def _sample_book():
    return Book(parse_summary(SUMMARY))


def test_parse_summary_item_kinds():
    items = parse_summary(SUMMARY)
    kinds = [type(item) for item in items]
    assert kinds == [Chapter, PartTitle, Chapter, Chapter, Separator, Chapter]
    assert items[1].title == "First Part"


def test_parse_summary_nesting_and_parents():
    items = parse_summary(SUMMARY)
    alpha = items[2]
    assert alpha.name == "Alpha"
    assert alpha.path == "alpha.md"
    assert alpha.source_path == "alpha.md"
    beta = alpha.sub_items[0]
    assert beta.name == "Beta"
    assert beta.parent_names == ["Alpha"]
    gamma = beta.sub_items[0]
    assert gamma.parent_names == ["Alpha", "Beta"]
    assert beta.number[:-1] == alpha.number
    assert gamma.number[:-1] == beta.number


def test_parse_summary_prefix_chapter_unnumbered():
    items = parse_summary(SUMMARY)
    assert items[0].name == "Intro"
    assert items[0].number is None
    assert items[-1].name == "Outro"
    assert items[-1].number is None


def test_parse_summary_draft_has_no_path():
    items = parse_summary(SUMMARY)
    draft = items[3]
    assert draft.name == "Draft"
    assert draft.path is None
    assert draft.source_path is None


def test_iter_chapters_is_preorder():
    names = [c.name for c in _sample_book().iter_chapters()]
    assert names == ["Intro", "Alpha", "Beta", "Gamma", "Draft", "Outro"]


def test_for_each_chapter_visits_children_first():
    visited = []
    _sample_book().for_each_chapter(lambda c: visited.append(c.name))
    assert visited == ["Intro", "Gamma", "Beta", "Alpha", "Draft", "Outro"]


def test_for_each_chapter_can_modify():
    book = _sample_book()
    book.for_each_chapter(lambda c: setattr(c, "content", c.name.upper()))
    assert [c.content for c in book.iter_chapters()] == [
        c.name.upper() for c in book.iter_chapters()
    ]


def test_json_round_trip():
    book = _sample_book()
    encoded = json.loads(json.dumps(book.to_json()))
    assert Book.from_json(encoded) == book


def test_separator_encoding():
    assert item_to_json(Separator()) == "Separator"
    assert item_from_json("Separator") == Separator()


def test_part_title_round_trip():
    assert item_from_json(item_to_json(PartTitle("Part"))) == PartTitle("Part")


def test_invalid_item_raises():
    with pytest.raises(ValueError):
        item_from_json({"Unknown": 1})


def test_book_without_sections_raises():
    with pytest.raises(ValueError):
        Book.from_json({})


def test_load_book_reads_contents(tmp_path):
    src = tmp_path / "src"
    (src / "alpha").mkdir(parents=True)
    (src / "SUMMARY.md").write_text(
        "# Summary\n\n- [Alpha](alpha.md)\n  - [Beta](alpha/beta.md)\n",
        encoding="utf-8",
    )
    (src / "alpha.md").write_text("alpha body", encoding="utf-8")
    (src / "alpha" / "beta.md").write_text("beta body", encoding="utf-8")
    book = load_book(tmp_path)
    contents = {c.name: c.content for c in book.iter_chapters()}
    assert contents == {"Alpha": "alpha body", "Beta": "beta body"}


def test_load_book_missing_chapter_raises(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "SUMMARY.md").write_text("- [Missing](missing.md)\n", encoding="utf-8")
    with pytest.raises(FileNotFoundError):
        load_book(tmp_path)