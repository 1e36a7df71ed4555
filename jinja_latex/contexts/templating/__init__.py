"""
Templating Context

Responsibilities:
- Installs the latex filter into Jinja2 environments
- Captures process-wide defaults (program paths, format) at registration
- Merges call-time filter arguments over registered defaults
- Provides a LaTeX-friendly Jinja2 environment and extension

Owns: Filter registration, settings snapshots, template output files
Never: Runs the TeX toolchain directly
"""

from jinja_latex.contexts.templating.defaults import (
    DEFAULT_FILTER_NAME,
    LatexSettings,
    load_settings,
    load_settings_file,
)
from jinja_latex.contexts.templating.environment import (
    LATEX_DELIMITERS,
    LatexEnvironment,
    LatexExtension,
)
from jinja_latex.contexts.templating.filter import LatexFilter, define_filter

__all__ = [
    # Registration
    "define_filter",
    "LatexFilter",
    "DEFAULT_FILTER_NAME",
    # Settings
    "LatexSettings",
    "load_settings",
    "load_settings_file",
    # Jinja2 integration
    "LatexEnvironment",
    "LatexExtension",
    "LATEX_DELIMITERS",
]
