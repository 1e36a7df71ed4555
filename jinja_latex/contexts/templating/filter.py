"""
Latex filter registration for Jinja2 environments.

    env = Environment()
    define_filter(env, format="pdf", output_path="outs")

    {% filter latex("example.pdf") %}
    \\documentclass{article} ...
    {% endfilter %}
"""

from typing import Optional

from jinja2 import Environment
from markupsafe import Markup

from jinja_latex.contexts.rendering.compiler import DOCUMENT_ENCODING, compile_document
from jinja_latex.contexts.rendering.formats import FilterConfig
from jinja_latex.contexts.rendering.logger import _log_debug, enable_debug
from jinja_latex.contexts.templating.defaults import (
    DEFAULT_FILTER_NAME,
    LatexSettings,
    load_settings,
)


class LatexFilter:
    """
    Callable installed as the Jinja2 filter.

    Holds the defaults captured at registration. Each call overlays its own
    arguments, compiles the filtered text, and returns the document as a
    string (UTF-8 decoded, with undecodable bytes kept as surrogate
    escapes so they encode back unchanged), or "" when the document was
    written to an output file.
    """

    def __init__(self, defaults: FilterConfig, tmp_root: Optional[str] = None):
        self.defaults = defaults
        self.tmp_root = tmp_root

    def config_for(self, output: Optional[str] = None, **options) -> FilterConfig:
        """Merge call-time options over the registration defaults."""
        return FilterConfig.merge(self.defaults, {**options, "output": output})

    def __call__(
        self,
        text,
        output: Optional[str] = None,
        format: Optional[str] = None,
        latex: Optional[str] = None,
        pdflatex: Optional[str] = None,
        dvips: Optional[str] = None,
    ) -> Markup:
        config = self.config_for(
            output=output, format=format, latex=latex, pdflatex=pdflatex, dvips=dvips
        )
        document = compile_document(str(text), config, tmp_root=self.tmp_root)
        return Markup(document.decode(*DOCUMENT_ENCODING))


def define_filter(
    environment: Environment,
    name: Optional[str] = None,
    settings: Optional[LatexSettings] = None,
    **defaults,
) -> LatexFilter:
    """
    Install the latex filter in a Jinja2 environment.

    Args:
        environment: Environment to register the filter with
        name: Filter name (default: "latex")
        settings: Process-wide defaults (default: loaded from the environment now)
        **defaults: Overrides for format, latex, pdflatex, dvips, output_path

    Returns:
        The installed LatexFilter
    """
    if settings is None:
        settings = load_settings()
    settings = settings.override(**defaults)
    if settings.debug:
        enable_debug()

    latex_filter = LatexFilter(settings.filter_config(), tmp_root=settings.tmp_root)
    environment.filters[name or DEFAULT_FILTER_NAME] = latex_filter
    _log_debug(f"defined filter '{name or DEFAULT_FILTER_NAME}' (format: {settings.format})")
    return latex_filter
