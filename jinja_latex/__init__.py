"""
jinja_latex - LaTeX document generation filter for Jinja2

Renders template output through latex, pdflatex and dvips to produce
PDF, PostScript or DVI documents.

Architecture:
- Rendering Context: Format resolution, toolchain runs, document output
- Templating Context: Filter registration and Jinja2 integration

Diagnostics are silent by default; set LATEX_DEBUG=true or call
enable_debug() to see the [latex] stream.
"""

import os

from loguru import logger

from jinja_latex.contexts.rendering import (
    FORMATS,
    ChdirRestoreFailed,
    DocumentReadFailed,
    FilterConfig,
    FormatNotSpecified,
    InvalidFormat,
    LatexFilterError,
    OutputPathUnset,
    OutputWriteFailed,
    ProgramNotFound,
    ResolvedJob,
    SourceWriteFailed,
    TempDirCreationFailed,
    ToolchainError,
    UnresolvableFormat,
    UnsupportedPlatform,
    compile_document,
    resolve_format,
    resolve_job,
)
from jinja_latex.contexts.rendering.logger import enable_debug
from jinja_latex.contexts.templating import (
    LatexEnvironment,
    LatexExtension,
    LatexFilter,
    LatexSettings,
    define_filter,
    load_settings,
    load_settings_file,
)

__version__ = "0.1.0"

logger.disable("jinja_latex")
if os.getenv("LATEX_DEBUG", "false").lower() == "true":
    enable_debug()

__all__ = [
    "compile_document",
    "define_filter",
    "enable_debug",
    "resolve_format",
    "resolve_job",
    "load_settings",
    "load_settings_file",
    "FORMATS",
    "FilterConfig",
    "ResolvedJob",
    "LatexSettings",
    "LatexFilter",
    "LatexEnvironment",
    "LatexExtension",
    "LatexFilterError",
    "UnsupportedPlatform",
    "FormatNotSpecified",
    "InvalidFormat",
    "UnresolvableFormat",
    "ProgramNotFound",
    "TempDirCreationFailed",
    "SourceWriteFailed",
    "ChdirRestoreFailed",
    "ToolchainError",
    "OutputPathUnset",
    "DocumentReadFailed",
    "OutputWriteFailed",
]
