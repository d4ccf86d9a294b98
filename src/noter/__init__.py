"""Organizes plain-text notes into one folder per course.

If you installed via ``pip``, run ``noter -h`` to get help.

To use the Python API, look at :class:`noter.api.Noter`
"""
