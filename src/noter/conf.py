from __future__ import annotations
from dataclasses import dataclass, replace
import logging
import os
import os.path
from typing import Optional

logger = logging.getLogger(__name__)

ROOT_ENV_VAR = 'NOTER_ROOT'


@dataclass
class NoterConf:
    """Configures where courses live and how new notes are named and filled in.

    Typically loaded from the variable ``conf`` in the file ``~/.noter.conf.py``, for example:

    .. code-block:: python

       from noter.conf import *
       conf = NoterConf(
           root_path='~/school/notes',
           date_prefix=True,
       )
    """

    root_path: Optional[str] = None
    """The folder under which all course directories live.

    If this is not set (here, via the ``NOTER_ROOT`` environment variable, or via the ``--root`` command-line
    argument), the root is discovered by :meth:`find_root`.
    """

    marker: str = '.noter'
    """Name of the file that marks a directory as the notes root.

    The ``init`` command creates it. When no root is configured, the nearest ancestor of the current directory
    containing this file is used as the root, so ``noter new`` works from inside any course folder.
    """

    date_prefix: bool = False
    """If True, new note filenames start with today's date, like ``2020-03-04-binomial-heaps.md``."""

    front_matter: bool = False
    """If True (and no :attr:`note_template` is set), new notes begin with a YAML metadata header containing
    the title, course code, and creation time."""

    note_template: Optional[str] = None
    """Path to a Mako template used for the contents of new notes.

    The following names are defined in the template's namespace:

    * ``course``: the :class:`noter.models.Course` the note belongs to
    * ``title``: the title given on the command line, or None
    * ``created``: a :class:`datetime.datetime` for the current time
    * ``conf``: this configuration
    """

    preview_mode: bool = False
    """If True, operations should report the paths they would create without changing anything.

    Instead of setting this in your ``.noter.conf.py``, you can pass a ``--preview`` command-line argument to
    relevant commands.
    """

    @classmethod
    def user_config_path(cls) -> str:
        return os.path.expanduser(os.path.join('~', '.noter.conf.py'))

    @classmethod
    def for_user(cls) -> NoterConf:
        """Loads the user's ``~/.noter.conf.py`` file, if it exists, and applies the ``NOTER_ROOT`` variable.

        Raises :exc:`Exception` if the file exists but does not define configuration.
        """
        path = cls.user_config_path()
        if os.path.exists(path):
            with open(path, 'r') as file:
                conf_script = file.read()
            context = {}
            exec(conf_script, context)
            if 'conf' not in context or not isinstance(context['conf'], cls):
                raise Exception('You need to assign an instance of NoterConf to the variable `conf` '
                                f'in your config file: {path}')
            conf = context['conf']
        else:
            logger.debug('No config file at %s, using defaults', path)
            conf = cls()
        env_root = os.environ.get(ROOT_ENV_VAR)
        if env_root:
            conf = replace(conf, root_path=env_root)
        return conf

    def find_root(self, cwd: str = None) -> str:
        """Returns the resolved, absolute path of the notes root.

        If :attr:`root_path` is set, that is used. Otherwise this searches upward from cwd (the process's working
        directory, by default) for a directory containing the :attr:`marker` file. If none is found, cwd itself
        is the root.
        """
        if self.root_path:
            return os.path.realpath(os.path.expanduser(self.root_path))
        start = os.path.realpath(cwd or os.getcwd())
        prev = None
        candidate = start
        while not candidate == prev:
            if os.path.isfile(os.path.join(candidate, self.marker)):
                logger.debug('Found %s in %s', self.marker, candidate)
                return candidate
            prev = candidate
            candidate = os.path.dirname(candidate)
        return start

    def standardize(self, cwd: str = None) -> NoterConf:
        """Returns a copy with the root resolved and the template path made absolute."""
        return replace(
            self,
            root_path=self.find_root(cwd),
            note_template=os.path.realpath(os.path.expanduser(self.note_template)) if self.note_template else None
        )

    def instantiate(self, cwd: str = None):
        from noter.api import Noter
        return Noter(self.standardize(cwd))
