"""
Rendering Context

Responsibilities:
- Resolves the output format and toolchain program for a request
- Runs latex/pdflatex/dvips in an isolated working directory
- Extracts error excerpts from TeX logs
- Returns document bytes or writes them to a destination

Owns: Toolchain invocation, working directories, document output
Never: Parses or evaluates templates
"""

from jinja_latex.contexts.rendering.compiler import compile_document
from jinja_latex.contexts.rendering.exceptions import (
    ChdirRestoreFailed,
    DocumentReadFailed,
    FormatNotSpecified,
    InvalidFormat,
    LatexFilterError,
    OutputPathUnset,
    OutputWriteFailed,
    ProgramNotFound,
    SourceWriteFailed,
    TempDirCreationFailed,
    ToolchainError,
    UnresolvableFormat,
    UnsupportedPlatform,
)
from jinja_latex.contexts.rendering.formats import (
    FORMATS,
    FilterConfig,
    ResolvedJob,
    resolve_format,
    resolve_job,
)

__all__ = [
    "compile_document",
    "resolve_format",
    "resolve_job",
    "FORMATS",
    "FilterConfig",
    "ResolvedJob",
    # Errors
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
