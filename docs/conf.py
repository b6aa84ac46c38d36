import os
import sys

# Add the project root (one level up from docs/) to sys.path
sys.path.insert(0, os.path.abspath(".."))

from gemini_api import get_version

# -- Project information -----------------------------------------------------

project = "gemini_api"
author = "gemini_api contributors"

release = get_version()
if "unknown" in release:
    raise RuntimeError(f"Unknown version {release=}")

# -- General configuration ---------------------------------------------------
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
]

# Napoleon settings
napoleon_google_docstring = True
napoleon_numpy_docstring = False

# Suppress warnings for duplicate cross-references (classes exported from multiple modules)
suppress_warnings = ["ref.python"]

## Templates
templates_path = ["_templates"]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

## Http
html_theme = "sphinx_rtd_theme"
html_static_path = ["_static"]

# Rendering
autodoc_default_options = {
    "members": True,
    "undoc-members": True,
    "show-inheritance": True,
}
