# Sphinx configuration of the ddgkit API documentation.
#
# Build with ``sphinx-build -b html docs/source docs/build`` from the
# repository root after installing the ``docs`` extra.

import os
import sys

# Import the package from the source tree.
sys.path.insert(0, os.path.abspath('../..'))


# -- Project information -----------------------------------------------------

project = 'ddgkit'
copyright = '2024, ddgkit developers'
author = 'ddgkit developers'

# Keep in sync with pyproject.toml.
release = '1.0.0'
version = '1.0'


# -- General configuration ---------------------------------------------------

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.autosummary',
    'sphinx.ext.intersphinx',
    'sphinx.ext.mathjax',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
]

# Cross references to array and sparse matrix types in docstrings.
intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'numpy': ('https://numpy.org/doc/stable', None),
    'scipy': ('https://docs.scipy.org/doc/scipy', None),
}

# One page per module listed in index.rst.
autosummary_generate = True

# Docstrings follow the NumPy convention.
napoleon_google_docstring = False
napoleon_numpy_docstring = True
napoleon_use_rtype = False

exclude_patterns = []

toc_object_entries = False


# -- Options for AutoDoc output ----------------------------------------------

autodoc_member_order = 'bysource'


def skip(app, what, name, obj, skip, options):
    # Mesh items are created by the mesh, their constructors are internal.
    if name in ('__init__', '__new__'):
        return True

    return None


def setup(app):
    app.connect('autodoc-skip-member', skip)


# -- Options for HTML output -------------------------------------------------

html_theme = 'sphinx_rtd_theme'
html_show_sourcelink = False
