"""Pure functions for turning course codes and titles into directory names and filenames.

Nothing in this module touches the filesystem; callers pass in directory listings where needed.
Generally, you should use :class:`noter.api.Noter` instead of using anything in this module directly.
"""

from datetime import date
import re
from typing import Iterable, Optional

CODE_RE = re.compile(r'[A-Za-z0-9][A-Za-z0-9_.]*')
NOTE_SUFFIX = '.md'
UNTITLED = 'untitled'


def slugify(text: Optional[str]) -> str:
    """Converts arbitrary text into a string that is safe to use in a filename.

    The following adjustments are made:

    * Text is truncated to 60 characters
    * Characters are converted to lowercase
    * Only the letters a-z and digits 0-9 are kept; all other characters are replaced with dashes
    * Consecutive dashes are collapsed to a single dash
    * Leading and trailing dashes are removed

    For example, "Premodern East Asia" becomes ``premodern-east-asia``. The result may be empty.
    Applying this function to its own output returns the output unchanged.
    """
    if not text:
        return ''
    slug = text.lower()[:60]
    slug = re.sub(r'[^a-z0-9]', '-', slug)
    slug = re.sub(r'-+', '-', slug)
    return slug.strip('-')


def is_valid_code(code: Optional[str]) -> bool:
    """Returns True if the course code is non-empty and consists only of filename-safe characters.

    Dashes are not allowed, since the first dash in a course directory's name separates the code from the title.
    """
    return bool(code) and CODE_RE.fullmatch(code) is not None


def course_dirname(code: str, title: Optional[str]) -> str:
    """Returns the directory name for a course, like ``EAS103-premodern-east-asia``.

    If the title has no usable characters, the code alone is used.
    """
    slug = slugify(title)
    return f'{code}-{slug}' if slug else code


def course_matches(dirname: str, code: str) -> bool:
    """Returns True if the directory name belongs to the course with the given code."""
    return dirname == code or dirname.startswith(f'{code}-')


def split_course_dirname(dirname: str) -> (str, Optional[str]):
    """Splits a course directory name into its code and title slug (None if there is no slug)."""
    code, _, slug = dirname.partition('-')
    return code, slug or None


def _date_prefix(day: Optional[date]) -> str:
    return f'{day.isoformat()}-' if day else ''


def note_filename(title: str, day: Optional[date] = None) -> str:
    """Returns the filename for a titled note, like ``binomial-heaps.md``.

    If day is given, the filename is prefixed with it, like ``2020-03-04-binomial-heaps.md``.
    """
    return f'{_date_prefix(day)}{slugify(title)}{NOTE_SUFFIX}'


def untitled_filename(n: int, day: Optional[date] = None) -> str:
    return f'{_date_prefix(day)}{UNTITLED}-{n}{NOTE_SUFFIX}'


def next_untitled_name(existing: Iterable[str], day: Optional[date] = None) -> str:
    """Returns the lowest-numbered untitled note filename that is not in existing.

    Numbering starts at 1, so for an empty directory this returns ``untitled-1.md``.
    Gaps are reused: if only ``untitled-2.md`` exists, ``untitled-1.md`` is returned.
    """
    taken = set(existing)
    n = 1
    while untitled_filename(n, day) in taken:
        n += 1
    return untitled_filename(n, day)
