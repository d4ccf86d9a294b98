"""Command-line interface for noter."""


import argparse
from dataclasses import replace
import json
import logging
import os.path
import sys
from terminaltables import AsciiTable
from noter.api import Noter, Error
from noter.conf import NoterConf


def _created(args, path: str) -> None:
    if args.json:
        print(json.dumps({'path': path, 'created': not args.preview}))
    elif args.preview:
        print(f'Would create {path}')
    else:
        print(f'Created {path}')


def _course(args, nt: Noter) -> int:
    course = nt.create_course(args.code[0], args.title[0])
    _created(args, course.path)
    return 0


def _new(args, nt: Noter) -> int:
    path = nt.create_note(args.code[0], args.title)
    _created(args, path)
    return 0


def _courses(args, nt: Noter) -> int:
    courses = nt.courses()
    if args.json:
        print(json.dumps([c.as_json() for c in courses]))
    else:
        data = [('Code', 'Folder', 'Notes')]
        data.extend((c.code, os.path.basename(c.path), c.note_count) for c in courses)
        table = AsciiTable(data)
        table.justify_columns[2] = 'right'
        print(table.table)
    return 0


def _init(args, nt: Noter) -> int:
    path = nt.init_root()
    if not args.preview:
        print(f'Notes root is {nt.root}')
    else:
        print(f'Would create {path}')
    return 0


def argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='noter', description='Organize plain-text notes into course folders.')
    parser.set_defaults(func=None, preview=False, json=False)
    parser.add_argument('-r', '--root', nargs=1,
                        help='Folder containing all course folders. Overrides the NOTER_ROOT environment variable '
                             'and root_path in ~/.noter.conf.py. If none of those are set, the nearest parent '
                             'folder containing a .noter file is used, or else the current folder.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log details of what is being done.')

    subs = parser.add_subparsers(title='Commands')

    p_course = subs.add_parser(
        'course',
        help='Create a folder for a course, named after its code and title (for example, '
             '"EAS103-premodern-east-asia"). Fails if the course already has a folder. '
             'This command will print the path of the new folder.')
    p_course.add_argument('code', nargs=1, help='Course code, such as EAS103.')
    p_course.add_argument('title', nargs=1, help='Course title, such as "Premodern East Asia".')
    p_course.add_argument('-j', '--json', action='store_true', help='Output as JSON.')
    p_course.add_argument('-p', '--preview', action='store_true', help='Print plan but do not create folder')
    p_course.set_defaults(func=_course)

    p_new = subs.add_parser(
        'new',
        help='Create a new note in the folder of the given course. The filename is based on the title, or '
             'is the next free "untitled-<n>.md" if no title is given. '
             'This command will print the path of the newly created file.')
    p_new.add_argument('code', nargs=1, help='Code of an existing course.')
    p_new.add_argument('title', nargs='?', help='Title of the note.')
    p_new.add_argument('-j', '--json', action='store_true', help='Output as JSON.')
    p_new.add_argument('-p', '--preview', action='store_true', help='Print plan but do not create file')
    p_new.set_defaults(func=_new)

    p_courses = subs.add_parser('courses', help='Show a table of courses and the number of notes in each.')
    p_courses.add_argument('-j', '--json', action='store_true', help='Output as JSON.')
    p_courses.set_defaults(func=_courses)

    p_init = subs.add_parser(
        'init',
        help='Mark the root (by default, the current folder) as the root of all course folders, so that '
             'commands run from inside a course folder can find it.')
    p_init.add_argument('-p', '--preview', action='store_true', help='Print plan but do not create marker file')
    p_init.set_defaults(func=_init)

    return parser


def main(args=None) -> int:
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.
    """
    parser = argparser()
    args = parser.parse_args(args)
    if not args.func:
        parser.print_help()
        return 1
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')
    try:
        conf = NoterConf.for_user()
        if args.root:
            conf = replace(conf, root_path=args.root[0])
        if args.func is _init and not args.root:
            conf = replace(conf, root_path=os.getcwd())
        if args.preview:
            conf = replace(conf, preview_mode=True)
        return args.func(args, conf.instantiate())
    except (Error, OSError) as ex:
        print(f'Error: {ex}', file=sys.stderr)
        return 1
