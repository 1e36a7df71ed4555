"""
Output Format Resolution

Maps a requested format and/or output file name onto the toolchain
program that produces it.
"""

import re
from dataclasses import dataclass, fields
from typing import NamedTuple, Optional

from jinja_latex.contexts.rendering.exceptions import (
    FormatNotSpecified,
    InvalidFormat,
    ProgramNotFound,
    UnresolvableFormat,
)

# Valid output formats and the program that generates each
FORMATS = {
    "pdf": "pdflatex",
    "ps": "latex",
    "dvi": "latex",
}

PROGRAMS = ("latex", "pdflatex", "dvips")

EXTENSION_PATTERN = re.compile(r"\.(\w+)$")


@dataclass(frozen=True)
class FilterConfig:
    """
    Options for a single filter invocation.

    Attributes:
        format: Output format (pdf, ps or dvi), case-insensitive
        output: Destination file name, relative to output_path
        latex: Path to the latex program
        pdflatex: Path to the pdflatex program
        dvips: Path to the dvips program
        output_path: Root directory that output is written under
    """

    format: Optional[str] = None
    output: Optional[str] = None
    latex: Optional[str] = None
    pdflatex: Optional[str] = None
    dvips: Optional[str] = None
    output_path: Optional[str] = None

    @classmethod
    def merge(cls, defaults: "FilterConfig", overrides: dict) -> "FilterConfig":
        """
        Overlay call-time options onto registration defaults.

        A key from overrides wins only when its value is present (not None
        and not empty); unknown keys are ignored.
        """
        values = {}
        for f in fields(cls):
            value = overrides.get(f.name)
            values[f.name] = value if value else getattr(defaults, f.name)
        return cls(**values)

    def program_path(self, program: str) -> Optional[str]:
        return getattr(self, program)


class OutputFormat(NamedTuple):
    format: str
    program_name: str
    destination: Optional[str]


@dataclass(frozen=True)
class ResolvedJob:
    """Format, program and destination for one compile call."""

    format: str
    program_name: str
    program_path: str
    destination: Optional[str] = None
    dvips_path: Optional[str] = None


def _extension(output: str) -> Optional[str]:
    match = EXTENSION_PATTERN.search(output)
    return match.group(1) if match else None


def resolve_format(format: Optional[str] = None, output: Optional[str] = None) -> OutputFormat:
    """
    Determine the output format and primary program.

    Precedence: explicit format, then the output file's extension, then a
    bare format keyword passed as output (e.g. ``latex('pdf')``), in which
    case no destination file is written.

    Args:
        format: Explicit format (pdf, ps, dvi)
        output: Destination file name

    Returns:
        OutputFormat with lower-cased format, program name and destination

    Raises:
        InvalidFormat: Explicit format is unknown
        UnresolvableFormat: Output name implies no known format
        FormatNotSpecified: Neither format nor output given
    """
    if format:
        program_name = FORMATS.get(format.lower())
        if program_name is None:
            raise InvalidFormat(format)
        return OutputFormat(format.lower(), program_name, output or None)

    if not output:
        raise FormatNotSpecified()

    ext = _extension(output)
    if ext is not None and ext.lower() in FORMATS:
        return OutputFormat(ext.lower(), FORMATS[ext.lower()], output)

    if output.lower() in FORMATS:
        return OutputFormat(output.lower(), FORMATS[output.lower()], None)

    raise UnresolvableFormat(output)


def resolve_job(config: FilterConfig) -> ResolvedJob:
    """
    Resolve the format and check the programs it needs are configured.

    Raises:
        ProgramNotFound: The primary program (or dvips, for ps) has no path
    """
    resolved = resolve_format(config.format, config.output)

    program_path = config.program_path(resolved.program_name)
    if not program_path:
        raise ProgramNotFound(resolved.program_name)

    # PostScript needs dvips as a second stage
    dvips_path = None
    if resolved.format == "ps":
        dvips_path = config.dvips
        if not dvips_path:
            raise ProgramNotFound("dvips")

    return ResolvedJob(
        format=resolved.format,
        program_name=resolved.program_name,
        program_path=program_path,
        destination=resolved.destination,
        dvips_path=dvips_path,
    )
