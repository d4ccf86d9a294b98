import json
import os
from pathlib import Path
from freezegun import freeze_time
from noter import cli


def nt_setup(fs, extra_conf=None):
    fs.create_dir('/notes')
    os.chdir('/notes')
    if extra_conf is not None:
        Path('~').expanduser().mkdir(parents=True, exist_ok=True)
        Path('~/.noter.conf.py').expanduser().write_text("""
from noter.conf import *
conf = NoterConf(
""" + extra_conf + """
)
""")


def test_no_command(fs, capsys):
    nt_setup(fs)
    assert cli.main([]) == 1
    out, err = capsys.readouterr()
    assert 'usage:' in out


def test_course(fs, capsys):
    nt_setup(fs)
    assert cli.main(['course', 'EAS103', 'Premodern East Asia']) == 0
    out, err = capsys.readouterr()
    assert out == 'Created /notes/EAS103-premodern-east-asia\n'
    assert Path('/notes/EAS103-premodern-east-asia').is_dir()

    assert cli.main(['course', 'EAS103', 'Premodern East Asia']) == 1
    out, err = capsys.readouterr()
    assert out == ''
    assert err == 'Error: Folder for course EAS103 already exists: /notes/EAS103-premodern-east-asia\n'


def test_course_invalid_code(fs, capsys):
    nt_setup(fs)
    assert cli.main(['course', 'EAS 103', 'Premodern East Asia']) == 1
    out, err = capsys.readouterr()
    assert err.startswith("Error: Invalid course code 'EAS 103'")
    assert os.listdir('/notes') == []


def test_course_json_preview(fs, capsys):
    nt_setup(fs)
    assert cli.main(['course', '-j', '-p', 'EAS103', 'Premodern East Asia']) == 0
    out, err = capsys.readouterr()
    assert json.loads(out) == {'path': '/notes/EAS103-premodern-east-asia', 'created': False}
    assert os.listdir('/notes') == []

    assert cli.main(['course', '-p', 'EAS103', 'Premodern East Asia']) == 0
    out, err = capsys.readouterr()
    assert out == 'Would create /notes/EAS103-premodern-east-asia\n'

    assert cli.main(['course', '--json', 'EAS103', 'Premodern East Asia']) == 0
    out, err = capsys.readouterr()
    assert json.loads(out) == {'path': '/notes/EAS103-premodern-east-asia', 'created': True}


def test_new(fs, capsys):
    nt_setup(fs)
    fs.create_dir('/notes/CSC263-data-structures')
    assert cli.main(['new', 'CSC263', 'Binomial Heaps']) == 0
    out, err = capsys.readouterr()
    assert out == 'Created /notes/CSC263-data-structures/binomial-heaps.md\n'

    assert cli.main(['new', 'CSC263']) == 0
    out, err = capsys.readouterr()
    assert out == 'Created /notes/CSC263-data-structures/untitled-1.md\n'
    assert cli.main(['new', 'CSC263']) == 0
    out, err = capsys.readouterr()
    assert out == 'Created /notes/CSC263-data-structures/untitled-2.md\n'

    assert cli.main(['new', 'CSC263', 'Binomial Heaps']) == 1
    out, err = capsys.readouterr()
    assert err == 'Error: CSC263::binomial-heaps.md already exists\n'


def test_new_course_not_found(fs, capsys):
    nt_setup(fs)
    assert cli.main(['new', 'NOPE', 'Anything']) == 1
    out, err = capsys.readouterr()
    assert out == ''
    assert err == 'Error: Could not find notes folder for course NOPE\n'
    assert os.listdir('/notes') == []


def test_new_json_preview(fs, capsys):
    nt_setup(fs)
    fs.create_dir('/notes/CSC263-data-structures')
    assert cli.main(['new', '--preview', '--json', 'CSC263']) == 0
    out, err = capsys.readouterr()
    assert json.loads(out) == {'path': '/notes/CSC263-data-structures/untitled-1.md', 'created': False}
    assert os.listdir('/notes/CSC263-data-structures') == []


def test_new_from_course_folder(fs, capsys):
    nt_setup(fs)
    assert cli.main(['init']) == 0
    out, err = capsys.readouterr()
    assert out == 'Notes root is /notes\n'
    assert Path('/notes/.noter').is_file()

    assert cli.main(['course', 'EAS330', 'Modern Japan']) == 0
    capsys.readouterr()
    os.chdir('/notes/EAS330-modern-japan')
    assert cli.main(['new', 'EAS330', 'Meiji Restoration']) == 0
    out, err = capsys.readouterr()
    assert out == 'Created /notes/EAS330-modern-japan/meiji-restoration.md\n'


def test_init_preview(fs, capsys):
    nt_setup(fs)
    assert cli.main(['init', '-p']) == 0
    out, err = capsys.readouterr()
    assert out == 'Would create /notes/.noter\n'
    assert not Path('/notes/.noter').exists()


def test_root_argument(fs, capsys):
    nt_setup(fs)
    fs.create_dir('/school')
    assert cli.main(['--root', '/school', 'course', 'EAS103', 'Premodern East Asia']) == 0
    out, err = capsys.readouterr()
    assert out == 'Created /school/EAS103-premodern-east-asia\n'
    assert cli.main(['-r', '/school', 'new', 'EAS103']) == 0
    out, err = capsys.readouterr()
    assert out == 'Created /school/EAS103-premodern-east-asia/untitled-1.md\n'


def test_root_env_var(fs, monkeypatch, capsys):
    nt_setup(fs)
    fs.create_dir('/school/CSC263-data-structures')
    monkeypatch.setenv('NOTER_ROOT', '/school')
    assert cli.main(['new', 'CSC263', 'Heaps']) == 0
    out, err = capsys.readouterr()
    assert out == 'Created /school/CSC263-data-structures/heaps.md\n'


def test_missing_root(fs, capsys):
    nt_setup(fs)
    assert cli.main(['-r', '/nowhere', 'course', 'EAS103', 'Premodern East Asia']) == 1
    out, err = capsys.readouterr()
    assert err.startswith('Error: ')
    assert '/nowhere' in err


@freeze_time('2012-05-02T03:04:05Z')
def test_config_file(fs, capsys):
    nt_setup(fs, extra_conf="""
    root_path='/school',
    date_prefix=True,
    front_matter=True,
""")
    fs.create_dir('/school/CSC263-data-structures')
    assert cli.main(['new', 'CSC263', 'Binomial Heaps']) == 0
    out, err = capsys.readouterr()
    assert out == 'Created /school/CSC263-data-structures/2012-05-02-binomial-heaps.md\n'
    assert Path('/school/CSC263-data-structures/2012-05-02-binomial-heaps.md').read_text() == """---
course: CSC263
created: 2012-05-02 03:04:05
title: Binomial Heaps
...
"""


def test_courses(fs, capsys):
    nt_setup(fs)
    fs.create_file('/notes/CSC263-data-structures/heaps.md')
    fs.create_file('/notes/CSC263-data-structures/untitled-1.md')
    fs.create_dir('/notes/EAS103')

    assert cli.main(['courses', '--json']) == 0
    out, err = capsys.readouterr()
    assert json.loads(out) == [
        {'code': 'CSC263', 'title': 'data-structures', 'path': '/notes/CSC263-data-structures', 'notes': 2},
        {'code': 'EAS103', 'title': None, 'path': '/notes/EAS103', 'notes': 0},
    ]

    assert cli.main(['courses']) == 0
    out, err = capsys.readouterr()
    assert out == """+--------+------------------------+-------+
| Code   | Folder                 | Notes |
+--------+------------------------+-------+
| CSC263 | CSC263-data-structures |     2 |
| EAS103 | EAS103                 |     0 |
+--------+------------------------+-------+
"""
