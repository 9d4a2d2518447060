# -*- coding: utf-8 -*-

# This file is part of Ligase.
#
# Licensed under MIT License.

"""Pretty stdout output for the Ligase CLI.

Separate from Python logging (which goes to stderr). The Console writes
human-readable results and progress to stdout.
"""

import sys


class Console:
    """Pretty stdout output for the Ligase CLI."""

    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3

    def __init__(self, level=NORMAL, stream=None):
        self.level = level
        self.stream = stream or sys.stdout
        self._use_color = hasattr(self.stream, 'isatty') and self.stream.isatty()

    def banner(self, version):
        """Print product banner."""
        if self.level < self.VERBOSE:
            return
        if self._use_color:
            self._write('\033[1mLigase v{}\033[0m -- Flattened genome coordinates'.format(version))
        else:
            self._write('Ligase v{} -- Flattened genome coordinates'.format(version))

    def section(self, title):
        """Print section header."""
        if self.level < self.VERBOSE:
            return
        self._write('# {}'.format(title))

    def item(self, label, value):
        """Print key: value pair as a comment line."""
        if self.level < self.VERBOSE:
            return
        self._write('#   {:<14}{}'.format(label + ':', value))

    def row(self, *fields):
        """Print one tab separated result row."""
        if self.level < self.NORMAL:
            return
        self._write('\t'.join(str(f) for f in fields))

    def verbose(self, message):
        """Print only in verbose/debug mode."""
        if self.level < self.VERBOSE:
            return
        self._write('#   {}'.format(message))

    def _write(self, text):
        print(text, file=self.stream)
