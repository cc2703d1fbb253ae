"""Course structure, schedules, directive expansion and exercise extraction for Markdown books."""

__version__ = "0.1.0"