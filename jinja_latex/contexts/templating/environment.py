"""
Jinja2 environment and extension with the latex filter preinstalled.
"""

from typing import Any, Dict, Optional

from jinja2 import Environment
from jinja2.ext import Extension

from jinja_latex.contexts.rendering.compiler import DOCUMENT_ENCODING, output_destination
from jinja_latex.contexts.rendering.exceptions import OutputWriteFailed
from jinja_latex.contexts.rendering.logger import _log_debug
from jinja_latex.contexts.templating.defaults import LatexSettings, load_settings
from jinja_latex.contexts.templating.filter import define_filter

# Delimiters that stay clear of LaTeX braces and percent comments
LATEX_DELIMITERS = {
    "variable_start_string": "<<<",
    "variable_end_string": ">>>",
    "block_start_string": "<%%",
    "block_end_string": "%%>",
    "comment_start_string": "<#",
    "comment_end_string": "#>",
}


class LatexEnvironment(Environment):
    """
    Jinja2 environment for LaTeX templates that defines the latex filter.

    Uses LaTeX-safe delimiters (unless overridden) and preserves whitespace:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>

    Example:
        env = LatexEnvironment(
            loader=FileSystemLoader("templates"),
            output_path="outs/pdf",
            latex_format="pdf",
        )
        env.process("example.tex.jinja", {"title": "Hello World"}, "example.pdf")
    """

    def __init__(
        self,
        latex_format: Optional[str] = None,
        latex_path: Optional[str] = None,
        pdflatex_path: Optional[str] = None,
        dvips_path: Optional[str] = None,
        output_path: Optional[str] = None,
        settings: Optional[LatexSettings] = None,
        filter_name: Optional[str] = None,
        **options,
    ):
        options = {**LATEX_DELIMITERS, "keep_trailing_newline": True, **options}
        super().__init__(**options)

        if settings is None:
            settings = load_settings()
        self.latex_settings = settings.override(
            format=latex_format,
            latex=latex_path,
            pdflatex=pdflatex_path,
            dvips=dvips_path,
            output_path=str(output_path) if output_path else None,
        )
        self.latex_filter = define_filter(self, name=filter_name, settings=self.latex_settings)

    def latex_paths(self) -> Dict[str, Optional[str]]:
        """Return the latex, pdflatex and dvips paths the filter was defined with."""
        return self.latex_settings.paths()

    def process(
        self,
        template_name: str,
        context: Optional[Dict[str, Any]] = None,
        output: Optional[str] = None,
    ) -> str:
        """
        Render a template, optionally writing the result to a file.

        The output file is written as UTF-8 with surrogate escapes, so a
        document returned by the latex filter is reproduced byte for byte
        and the surrounding template text is ordinary UTF-8.

        Args:
            template_name: Name of the template to load
            context: Template variables
            output: File name relative to output_path

        Returns:
            The rendered text, or "" if it was written to output

        Raises:
            OutputPathUnset: output given but no output_path configured
            OutputWriteFailed: The output file could not be written
        """
        rendered = self.get_template(template_name).render(context or {})
        if not output:
            return rendered

        dest = output_destination(self.latex_settings.output_path, output)

        _log_debug(f"writing {template_name} output to {dest}")
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_bytes(rendered.encode(*DOCUMENT_ENCODING))
        except (OSError, UnicodeEncodeError) as e:
            raise OutputWriteFailed(dest, e) from e
        return ""


class LatexExtension(Extension):
    """
    Extension that installs the latex filter using environment settings.

        env = Environment(extensions=["jinja_latex.LatexExtension"])
    """

    def __init__(self, environment: Environment):
        super().__init__(environment)
        define_filter(environment)
