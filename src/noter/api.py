"""Provides the main entry point for using the library, :class:`Noter`"""

from __future__ import annotations
from datetime import datetime
from io import StringIO
import logging
import os
import os.path
from typing import List, Optional
from mako.template import Template
import yaml
from noter.conf import NoterConf
from noter.models import Course, NotePlan
from noter.names import slugify, is_valid_code, course_dirname, course_matches, note_filename, next_untitled_name,\
    NOTE_SUFFIX

logger = logging.getLogger(__name__)


class Error(Exception):
    pass


class AlreadyExistsError(Error):
    """Raised instead of overwriting an existing course directory or note file."""


class CourseNotFoundError(Error):
    def __init__(self, code: str):
        super().__init__(f'Could not find notes folder for course {code}')
        self.code = code


class InvalidArgumentError(Error):
    pass


class Noter:
    """Main entry point for creating courses and notes.

    Generally, you should get an instance using the :meth:`Noter.for_user` method.

    .. attribute:: conf
       :type: noter.conf.NoterConf

    .. attribute:: root

       The resolved, absolute path of the notes root; see :meth:`noter.conf.NoterConf.find_root`.

    Here's an example of how to use this class:

    .. code-block:: python

       from noter.api import Noter
       nt = Noter.for_user()
       nt.create_course('CSC263', 'Data Structures and Analysis')
       nt.create_note('CSC263', 'Binomial Heaps')
    """

    @staticmethod
    def for_user() -> Noter:
        """Creates an instance using the user's ``~/.noter.conf.py`` file, or the defaults if there is none."""
        return NoterConf.for_user().instantiate()

    def __init__(self, conf: NoterConf):
        self.conf = conf
        self.root = conf.find_root()

    def _course_dirs(self) -> List[os.DirEntry]:
        with os.scandir(self.root) as entries:
            return sorted((e for e in entries if e.is_dir() and not e.name.startswith('.')),
                          key=lambda e: e.name)

    def _check_code(self, code: str) -> None:
        if not is_valid_code(code):
            raise InvalidArgumentError(f'Invalid course code {code!r}: use only letters, digits, "_" and "."')

    def courses(self) -> List[Course]:
        """Returns every course directory under the root, sorted by directory name."""
        result = []
        for entry in self._course_dirs():
            with os.scandir(entry.path) as children:
                count = sum(1 for c in children if c.is_file() and c.name.endswith(NOTE_SUFFIX))
            result.append(Course.from_path(entry.path, count))
        return result

    def find_course(self, code: str) -> Course:
        """Returns the course whose directory belongs to the given code.

        Raises :exc:`CourseNotFoundError` if there is no such directory. If there are several (which can only
        happen if they were created by hand), the first by name is used.
        """
        self._check_code(code)
        matches = [e for e in self._course_dirs() if course_matches(e.name, code)]
        if not matches:
            raise CourseNotFoundError(code)
        if len(matches) > 1:
            logger.warning('Multiple folders for course %s, using %s', code, matches[0].name)
        return Course.from_path(matches[0].path)

    def create_course(self, code: str, title: Optional[str]) -> Course:
        """Creates the directory for a new course, named like ``EAS103-premodern-east-asia``.

        Raises :exc:`AlreadyExistsError` if the root already contains a directory for the code, even if it was
        created with a different title. Raises :exc:`InvalidArgumentError` for an empty or unsafe code.

        Returns the course, whose path is the created directory.
        """
        self._check_code(code)
        for entry in self._course_dirs():
            if course_matches(entry.name, code):
                raise AlreadyExistsError(f'Folder for course {code} already exists: {entry.path}')
        course = Course(code=code, title=title, path=os.path.join(self.root, course_dirname(code, title)))
        if self.conf.preview_mode:
            return course
        try:
            os.mkdir(course.path)
        except FileExistsError as ex:
            raise AlreadyExistsError(f'Folder for course {code} already exists: {course.path}') from ex
        logger.debug('Created directory %s', course.path)
        return course

    def render_note(self, course: Course, title: Optional[str], created: datetime) -> str:
        """Returns the initial contents for a new note, based on :attr:`noter.conf.NoterConf.note_template`
        and :attr:`noter.conf.NoterConf.front_matter`."""
        if self.conf.note_template:
            if not os.path.isfile(self.conf.note_template):
                raise FileNotFoundError(f'Template does not exist: {self.conf.note_template}')
            template = Template(filename=os.path.abspath(self.conf.note_template))
            return template.render(course=course, title=title, created=created, conf=self.conf)
        if self.conf.front_matter:
            meta = {'course': course.code, 'created': created}
            if title:
                meta['title'] = title
            sio = StringIO()
            yaml.safe_dump(meta, sio)
            return f'---\n{sio.getvalue()}...\n'
        return ''

    def plan_note(self, code: str, title: Optional[str] = None) -> NotePlan:
        """Works out where a new note would go and what it would contain, without creating it.

        For an untitled note, the path is the lowest-numbered untitled name currently free, which may already be
        taken by the time the file is created; :meth:`create_note` handles that.
        """
        course = self.find_course(code)
        created = datetime.now()
        day = created.date() if self.conf.date_prefix else None
        if not slugify(title):
            title = None
        if title:
            filename = note_filename(title, day)
        else:
            filename = next_untitled_name(os.listdir(course.path), day)
        contents = self.render_note(course, title, created)
        return NotePlan(course=course, title=title, path=os.path.join(course.path, filename), created=created,
                        contents=contents)

    def create_note(self, code: str, title: Optional[str] = None) -> str:
        """Creates a new note file in the directory of the course with the given code.

        With a title, the file is named after it, like ``binomial-heaps.md``, and :exc:`AlreadyExistsError`
        is raised if that file exists. Without one (or if the title has no usable characters), the file is the
        lowest-numbered free ``untitled-<n>.md``, starting at 1.

        Raises :exc:`CourseNotFoundError` if no directory belongs to the code.

        Returns the path of the created file.
        """
        plan = self.plan_note(code, title)
        if self.conf.preview_mode:
            return plan.path
        if plan.title:
            try:
                _write_new(plan.path, plan.contents)
            except FileExistsError as ex:
                raise AlreadyExistsError(f'{code}::{os.path.basename(plan.path)} already exists') from ex
            return plan.path

        taken = set()
        dirname, filename = os.path.split(plan.path)
        day = plan.created.date() if self.conf.date_prefix else None
        while True:
            path = os.path.join(dirname, filename)
            try:
                _write_new(path, plan.contents)
                return path
            except FileExistsError:
                logger.debug('%s was created concurrently, trying another name', path)
                taken.add(filename)
                taken.update(os.listdir(dirname))
                filename = next_untitled_name(taken, day)

    def init_root(self) -> str:
        """Creates the marker file in the root so later invocations from subdirectories can find it.

        Returns the path of the marker file. Does nothing if it already exists.
        """
        path = os.path.join(self.root, self.conf.marker)
        if not (self.conf.preview_mode or os.path.exists(path)):
            with open(path, 'w'):
                pass
        return path


def _write_new(path: str, contents: str) -> None:
    # raises FileExistsError rather than overwriting
    with open(path, 'x') as file:
        file.write(contents)
    logger.debug('Created file %s', path)
