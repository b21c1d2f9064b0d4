# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for declgen documentation."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

project = "declgen"
author = "Declgen Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]

# Docstrings follow the Google style.
napoleon_google_docstring = True
napoleon_numpy_docstring = False

html_theme = "alabaster"
