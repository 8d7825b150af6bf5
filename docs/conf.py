"""Sphinx configuration for charlabel documentation."""

import charlabel

project = "charlabel"
copyright = "2025, charlabel contributors"
author = "charlabel contributors"
release = charlabel.__version__
version = ".".join(release.split(".")[:2])

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.intersphinx",
    "sphinx_copybutton",
]

autosummary_generate = True
exclude_patterns = ["_build"]

html_theme = "furo"
html_title = f"charlabel {release}"

# The stdlib codec docs are where CodecInfo and the error handlers live.
intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
}

autodoc_member_order = "bysource"
autodoc_typehints = "description"
autodoc_default_options = {
    "members": True,
    "show-inheritance": True,
}
