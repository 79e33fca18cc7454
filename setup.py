#!/usr/bin/env python
# Copyright 2005-2009,2011 Joe Wreschnig
#           2026 The id3edit authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

import os
import sys

from setuptools import setup, Command


class test_cmd(Command):
    description = "run automated tests"
    user_options = [
        ("to-run=", None, "comma separated test name patterns"),
        ("exitfirst", "x", "stop after first failing test"),
        ("no-quality", None, "skip flake8/pycodestyle/pyflakes checks"),
    ]
    boolean_options = ["exitfirst", "no-quality"]

    def initialize_options(self):
        self.to_run = None
        self.exitfirst = False
        self.no_quality = False

    def finalize_options(self):
        self.to_run = self.to_run.split(",") if self.to_run else []

    def run(self):
        import tests

        status = tests.unit(
            self.to_run, self.exitfirst, quality=not self.no_quality)
        if status != 0:
            raise SystemExit(status)


class coverage_cmd(test_cmd):
    description = "run the tests and write a html coverage report"

    def run(self):
        try:
            from coverage import Coverage
        except ImportError:
            raise SystemExit("Missing 'coverage' module")

        # modules imported by setup() would otherwise count as untested
        for key in list(sys.modules):
            if key == "id3edit" or key.startswith("id3edit."):
                del sys.modules[key]

        dest = os.path.join(os.getcwd(), "coverage")
        cov = Coverage(source=["id3edit"])
        cov.start()
        try:
            test_cmd.run(self)
        finally:
            cov.stop()
            cov.html_report(directory=dest)
            print("Coverage summary: file://%s/index.html" % dest)


if __name__ == "__main__":
    # required for PEP 517
    sys.path.insert(0, os.path.dirname(os.path.realpath(__file__)))

    from id3edit import version_string

    with open('README.rst', encoding='utf-8') as h:
        long_description = h.read()

    setup(
        cmdclass={"test": test_cmd, "coverage": coverage_cmd},
        name="id3edit",
        version=version_string,
        description="read, query and rewrite ID3v2.3 tags of MP3 files",
        long_description=long_description,
        license="GPL-2.0-or-later",
        classifiers=[
            'Operating System :: OS Independent',
            'Programming Language :: Python :: 3',
            ('License :: OSI Approved :: '
             'GNU General Public License v2 or later (GPLv2+)'),
            'Topic :: Multimedia :: Sound/Audio',
        ],
        packages=["id3edit", "id3edit._tools"],
        python_requires='>=3.9',
        extras_require={
            "tests": [
                "pytest",
                "hypothesis",
                "flake8",
                "pycodestyle",
                "pyflakes",
                "coverage",
            ],
            "docs": ["sphinx", "sphinx_rtd_theme"],
            "fuzzing": ["python-afl"],
        },
        entry_points={
            'console_scripts': [
                'id3edit=id3edit._tools.id3edit:entry_point',
            ],
        },
    )
