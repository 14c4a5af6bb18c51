# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for TopModel documentation."""

project = "TopModel"
author = "TopModel Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc"]

autodoc_typehints = "description"

html_theme = "alabaster"
