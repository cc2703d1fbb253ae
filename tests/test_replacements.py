from coursebook.book import Book, Chapter
from coursebook.course import Courses
from coursebook.replacements import replace


def _chapter(name, path, frontmatter="", body="", sub_items=()):
    content = f"---\n{frontmatter}\n---\n{body}" if frontmatter else body
    return Chapter(
        name=name,
        content=content,
        path=path,
        source_path=path,
        sub_items=list(sub_items),
    )


def _courses():
    book = Book(
        [
            _chapter(
                "Welcome",
                "welcome.md",
                "course: Fundamentals\nsession: Morning\ntarget_minutes: 60",
                sub_items=[_chapter("Hello", "hello.md", "minutes: 5")],
            ),
            _chapter(
                "Types",
                "types.md",
                "minutes: 10",
                sub_items=[_chapter("Ints", "ints.md", "minutes: 20")],
            ),
        ]
    )
    courses, _ = Courses.extract_structure(book)
    return courses


def _parts(courses):
    course = courses.courses[0]
    session = course.sessions[0]
    segment = session.segments[1]
    return course, session, segment


def test_session_outline():
    courses = _courses()
    course, session, segment = _parts(courses)
    chapter = Chapter(name="x", content="{{%session outline}}", source_path="x.md")
    replace(courses, course, session, segment, chapter)
    assert chapter.content == session.outline()


def test_segment_outline_with_surrounding_text():
    courses = _courses()
    course, session, segment = _parts(courses)
    chapter = Chapter(
        name="x", content="before {{% segment outline }} after", source_path="x.md"
    )
    replace(courses, course, session, segment, chapter)
    assert chapter.content == f"before {segment.outline()} after"


def test_course_outline_current_course():
    courses = _courses()
    course, session, segment = _parts(courses)
    chapter = Chapter(name="x", content="{{%course outline}}", source_path="x.md")
    replace(courses, course, session, segment, chapter)
    assert chapter.content == course.schedule()


def test_course_outline_by_name_outside_course():
    courses = _courses()
    chapter = Chapter(
        name="x", content="{{% course outline Fundamentals }}", source_path="x.md"
    )
    replace(courses, None, None, None, chapter)
    assert chapter.content == courses.courses[0].schedule()


def test_course_outline_unknown_name():
    courses = _courses()
    chapter = Chapter(
        name="x", content="{{%course outline Missing}}", source_path="x.md"
    )
    replace(courses, None, None, None, chapter)
    assert chapter.content == "not found - {{%course outline Missing}}"


def test_session_outline_without_session_leaves_directive_text():
    courses = _courses()
    chapter = Chapter(name="x", content="{{% session  outline }}", source_path="x.md")
    replace(courses, None, None, None, chapter)
    assert chapter.content == "session  outline"


def test_unknown_directive_is_replaced_by_its_text():
    courses = _courses()
    course, session, segment = _parts(courses)
    chapter = Chapter(name="x", content="a {{% foo bar }} b", source_path="x.md")
    replace(courses, course, session, segment, chapter)
    assert chapter.content == "a foo bar b"


def test_chapter_without_source_path_is_untouched():
    courses = _courses()
    course, session, segment = _parts(courses)
    chapter = Chapter(name="x", content="{{%session outline}}")
    replace(courses, course, session, segment, chapter)
    assert chapter.content == "{{%session outline}}"