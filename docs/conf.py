import os
import sys

sys.path.insert(
    0, os.path.join(os.path.dirname(os.path.realpath(__file__)), ".."))

import id3edit

project = "id3edit"
version = release = id3edit.version_string
copyright = (
    u"2005-2016 Joe Wreschnig, Michael Urman, Lukáš Lalinský, "
    u"Christoph Reiter, Ben Ockmore & others; 2026 The id3edit authors")

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
]
intersphinx_mapping = {"python": ("https://docs.python.org/3", None)}

master_doc = "index"
exclude_patterns = ["_build"]
default_role = "obj"
autodoc_member_order = "bysource"

html_theme = "sphinx_rtd_theme"
html_title = "%s %s" % (project, version)

# sphinx-build -b man docs build/man
man_pages = [
    ("man", "id3edit", "show, query and set ID3v2.3 frames", [], 1),
]
