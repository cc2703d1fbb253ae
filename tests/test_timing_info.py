from coursebook.book import Chapter
from coursebook.course import Slide
from coursebook.timing_info import insert_timing_info

NOTES = "Intro\n<details>\nNotes\n</details>"


def test_inserts_plural_minutes():
    slide = Slide(name="a", minutes=5, source_paths=["a.md"])
    chapter = Chapter(name="a", content=NOTES, source_path="a.md")
    insert_timing_info(slide, chapter)
    assert "<details>\nThis slide should take about 5 minutes. \nNotes" in chapter.content
    assert chapter.content.startswith("Intro\n<details>\n")


def test_inserts_singular_minute():
    slide = Slide(name="a", minutes=1, source_paths=["a.md"])
    chapter = Chapter(name="a", content=NOTES, source_path="a.md")
    insert_timing_info(slide, chapter)
    assert "This slide should take about 1 minute. " in chapter.content


def test_mentions_sub_slides():
    slide = Slide(name="a", minutes=10, source_paths=["a.md", "a/b.md"])
    chapter = Chapter(name="a", content=NOTES, source_path="a.md")
    insert_timing_info(slide, chapter)
    assert "This slide and its sub-slides should take about 10 minutes. " in (
        chapter.content
    )


def test_sub_chapter_is_untouched():
    slide = Slide(name="a", minutes=10, source_paths=["a.md", "a/b.md"])
    chapter = Chapter(name="b", content=NOTES, source_path="a/b.md")
    insert_timing_info(slide, chapter)
    assert chapter.content == NOTES


def test_zero_minutes_is_untouched():
    slide = Slide(name="a", minutes=0, source_paths=["a.md"])
    chapter = Chapter(name="a", content=NOTES, source_path="a.md")
    insert_timing_info(slide, chapter)
    assert chapter.content == NOTES


def test_without_details_is_untouched():
    slide = Slide(name="a", minutes=5, source_paths=["a.md"])
    chapter = Chapter(name="a", content="No notes here", source_path="a.md")
    insert_timing_info(slide, chapter)
    assert chapter.content == "No notes here"


def test_every_details_block_gets_the_note():
    slide = Slide(name="a", minutes=7, source_paths=["a.md"])
    content = "<details>x</details>\n<details>y</details>"
    chapter = Chapter(name="a", content=content, source_path="a.md")
    insert_timing_info(slide, chapter)
    before = Chapter(name="a", content="<details>", source_path="a.md")
    insert_timing_info(slide, before)
    assert chapter.content.count(before.content) == 2