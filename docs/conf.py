# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Sphinx configuration for glin documentation."""

import os
import sys

sys.path.insert(0, os.path.abspath("../src"))

from glin import __version__  # noqa: E402

project = "glin"
copyright = "2025, Softwell S.r.l."
release = __version__

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
    "sphinx_autodoc_typehints",
    "myst_parser",
]

# Google-style docstrings throughout the package
napoleon_numpy_docstring = False
autodoc_member_order = "bysource"
autodoc_typehints = "description"

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "httpx": ("https://www.python-httpx.org", None),
    "pydantic": ("https://docs.pydantic.dev/latest", None),
}

html_theme = "furo"
html_title = "glin"

source_suffix = {".md": "markdown"}
root_doc = "index"
exclude_patterns = ["_build"]
