"""Defines classes for representing courses and planned notes."""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
import os.path
from typing import Optional

from noter.names import split_course_dirname


@dataclass
class Course:
    """A course, which is represented on disk as a single directory under the notes root."""

    code: str
    """Short identifier such as ``EAS103``. Unique within a notes root."""

    title: Optional[str]
    """The title, if any.

    When a course is loaded from an existing directory this is the slugified title from the directory name,
    since the original human-readable title is not stored anywhere.
    """

    path: str
    """The resolved, absolute path of the course's directory."""

    note_count: int = 0
    """The number of Markdown files directly inside the directory, when loaded via :meth:`noter.api.Noter.courses`."""

    @classmethod
    def from_path(cls, path: str, note_count: int = 0) -> Course:
        """Creates an instance for an existing course directory, taking the code and title from its name."""
        code, slug = split_course_dirname(os.path.basename(path))
        return cls(code=code, title=slug, path=path, note_count=note_count)

    def as_json(self) -> dict:
        """Returns a dict representing the instance, suitable for serializing as json."""
        return {
            'code': self.code,
            'title': self.title,
            'path': self.path,
            'notes': self.note_count
        }


@dataclass
class NotePlan:
    """Describes a note file that :meth:`noter.api.Noter.create_note` is about to create."""

    course: Course
    title: Optional[str]
    path: str
    created: datetime
    contents: str = ''

    def as_json(self) -> dict:
        return {
            'course': self.course.code,
            'title': self.title,
            'path': self.path
        }
