"""Exceptions raised by the latex filter, one class per failure kind."""

from pathlib import Path
from typing import Optional


class LatexFilterError(Exception):
    """
    Base class for every error raised while generating a document.

    Subclasses keep the structured fields (format, program, log excerpt)
    as attributes and build a readable message from them.
    """

    pass


class UnsupportedPlatform(LatexFilterError):
    """Raised when the platform cannot run child processes with their own working directory."""

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"not available on {platform}")


class FormatNotSpecified(LatexFilterError):
    """Raised when neither a format nor an output file name was given."""

    def __init__(self):
        super().__init__("output format not specified")


class InvalidFormat(LatexFilterError):
    """Raised when an explicit format is not one of pdf, ps or dvi."""

    def __init__(self, format: str):
        self.format = format
        super().__init__(f"invalid output format: {format}")


class UnresolvableFormat(LatexFilterError):
    """Raised when the output file name does not imply a known format."""

    def __init__(self, output: str):
        self.output = output
        super().__init__(f"cannot determine output format from file name: {output}")


class ProgramNotFound(LatexFilterError):
    """
    Raised when a toolchain program is not configured or cannot be launched.

    Attributes:
        program: Program name (latex, pdflatex or dvips)
        path: Configured path, if any
    """

    def __init__(self, program: str, path: Optional[str] = None):
        self.program = program
        self.path = path

        message = f"{program} cannot be found, please specify its location"
        if path:
            message += f" (tried {path})"
        super().__init__(message)


class OutputPathUnset(LatexFilterError):
    """Raised when an output file was requested but no output root is configured."""

    def __init__(self):
        super().__init__("output path is not set")


class _FileError(LatexFilterError):
    """Shared shape for local I/O failures."""

    template = "failed to access {path}"

    def __init__(self, path: Path, original_error: Optional[Exception] = None):
        self.path = Path(path)
        self.original_error = original_error

        message = self.template.format(path=path)
        if original_error:
            message += f": {original_error}"
        super().__init__(message)


class TempDirCreationFailed(_FileError):
    """Raised when the per-call working directory cannot be created."""

    template = "failed to create temporary directory {path}"


class SourceWriteFailed(_FileError):
    """Raised when the .tex source cannot be written into the working directory."""

    template = "failed to open {path} for output"


class DocumentReadFailed(_FileError):
    """Raised when the generated document cannot be read back."""

    template = "failed to open {path} for input"


class OutputWriteFailed(_FileError):
    """Raised when the document cannot be written to its destination."""

    template = "failed to write output to {path}"


class ChdirRestoreFailed(LatexFilterError):
    """
    Raised when the working directory is gone after the toolchain ran.

    This fails the call even though the toolchain itself succeeded.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"lost track of working directory {path}")


class ToolchainError(LatexFilterError):
    """
    Raised when latex, pdflatex or dvips exits with a non-zero status.

    Attributes:
        program: Program name that failed
        detail: Lines scraped from the TeX log, or a fallback message
        returncode: Exit status of the process
    """

    def __init__(
        self,
        program: str,
        detail: str,
        returncode: Optional[int] = None,
        message: Optional[str] = None,
    ):
        self.program = program
        self.detail = detail
        self.returncode = returncode
        super().__init__(message or f"{program} exited with errors:\n{detail}")
