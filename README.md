# coursebook

Tools for mdBook-style Markdown books that are organised into courses. A
course is split into sessions, sessions into segments, and segments into
slides. The structure comes from the chapter order in `src/SUMMARY.md` and
from YAML frontmatter at the top of each chapter:

```markdown
---
course: Fundamentals
session: Day 1 Morning
target_minutes: 180
minutes: 5
---

# Welcome
```

- `course` starts a new course; `course: none` leaves course material.
  A chapter that sets `course` must also set `session`.
- `session` selects the session within the current course.
- `minutes` is how long a slide takes to teach.
- `target_minutes` adds to the planned length of the session.

Each top-level chapter inside a session is a segment and its first slide.
Each sub-chapter is a further slide, and everything nested below a
sub-chapter belongs to that slide. Nested chapters may not set `course` or
`session`. Sessions are given 10-minute breaks between segments that have a
duration.

## Installation

```sh
pip install .
```

## Commands

### `coursebook-preprocess`

A book preprocessor. It reads the `[context, book]` JSON pair on standard
input, strips frontmatter from the chapters, adds timing notes after each
`<details>` tag of a slide's first chapter, expands directives, and writes
the book as JSON to standard output. It exits with status 1 and a message on
standard error if the input or the course structure is invalid.
`coursebook-preprocess supports <renderer>` exits with success for every
renderer.

Directives have the form `{{%...}}`:

- `{{%session outline}}`: a table of the segments in the current session.
- `{{%segment outline}}`: a table of the slides in the current segment.
- `{{%course outline}}`: the schedule of the current course.
- `{{%course outline NAME}}`: the schedule of the course called `NAME`, or
  `not found - ...` if there is none.

Any other directive is replaced by its own text.

### `coursebook-schedule`

Run from the book's root directory. It prints, for each session, its length
against its target and the length of each segment. `coursebook-schedule pr`
prints a course and session summary meant for a pull-request comment.
`coursebook-schedule sessions` is the same as giving no subcommand.

### `coursebook-content`

Run from the book's root directory. It prints the source of every slide,
under `# COURSE:`, `# SESSION:`, `# SEGMENT:` and `# SLIDE:` headings.

### `coursebook-exerciser`

A book renderer. It reads the render context JSON on standard input and, for
every code block preceded by a comment such as

```markdown
<!-- File src/main.rs -->
```

writes the block's contents to that file below the directory set by
`output.exerciser.output-directory`. That directory is removed and created
afresh on each run, and each chapter gets its own subdirectory named after
the stem of its file name.

## Library use

```python
from coursebook.book import load_book
from coursebook.course import Courses
from coursebook.markdown import duration

courses, book = Courses.extract_structure(load_book("."))
for course in courses:
    print(course.name, duration(course.minutes()))
    print(course.schedule())
```

The modules are:

- `coursebook.book`: `Book`, `Chapter`, `Separator`, `PartTitle`, the JSON
  form of a book (`Book.to_json`, `Book.from_json`), `parse_summary` and
  `load_book`.
- `coursebook.frontmatter`: `Frontmatter`, `split_frontmatter` and
  `FrontmatterError`.
- `coursebook.course`: `Courses`, `Course`, `Session`, `Segment`, `Slide` and
  `CourseStructureError`.
- `coursebook.markdown`: `relative_link`, `duration` and `Table`.
- `coursebook.replacements`: `replace`, which expands directives.
- `coursebook.timing_info`: `insert_timing_info`.
- `coursebook.schedule`: `timediff`, `session_summary` and `pr_summary`.
- `coursebook.content`: `course_content`.
- `coursebook.exerciser`: `process` and `process_all`.

## Limitations

- `load_book` reads only `src/SUMMARY.md` and the chapter files it links to;
  it does not read `book.toml` or any other book configuration.
- `coursebook-schedule segments` is not supported: it prints a message and
  exits with status 1.
- The schedule summaries stop at the first course whose target length is
  zero.

## Tests

```sh
pip install .[test]
pytest
```