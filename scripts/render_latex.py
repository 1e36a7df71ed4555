#!/usr/bin/env python3
"""
LaTeX Template Rendering CLI

Renders a Jinja2 LaTeX template through the latex filter into a PDF,
PostScript or DVI document.

Commands:
    render - Render a template file to a document
    paths  - Show the configured program paths and default format

Examples:\n

    render_latex.py render letter.tex.jinja --output letter.pdf --output-path outs

    render_latex.py render letter.tex.jinja --vars letter.yaml --format ps -o letter.ps

    render_latex.py paths --config latex.yaml
"""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from jinja2 import FileSystemLoader, StrictUndefined
from omegaconf import OmegaConf
from typing_extensions import Annotated

from jinja_latex import LatexEnvironment, LatexFilterError, load_settings, load_settings_file
from jinja_latex.contexts.rendering.logger import enable_debug, setup_rendering_logger

load_dotenv()

app = typer.Typer(
    help="Render LaTeX templates to PDF, PostScript or DVI documents",
    add_completion=False,
    invoke_without_command=True,
)


def _settings(config: Optional[Path]):
    return load_settings_file(config) if config else load_settings()


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("render")
def render_command(
    template: Annotated[
        Path,
        typer.Argument(help="Template file containing a latex filter block", exists=True),
    ],
    vars_file: Annotated[
        Optional[Path],
        typer.Option("--vars", help="YAML file with template variables", exists=True),
    ] = None,
    output: Annotated[
        Optional[str],
        typer.Option("--output", "-o", help="Output file name, relative to --output-path"),
    ] = None,
    output_format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Default output format (pdf, ps, dvi)"),
    ] = None,
    output_path: Annotated[
        Optional[Path],
        typer.Option("--output-path", help="Directory output files are written under"),
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML settings file", exists=True),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Print [latex] diagnostics to stderr"),
    ] = False,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Also write diagnostics to a log file in this directory"),
    ] = None,
):
    """
    Render a LaTeX template into a document.

    The template is rendered with a LatexEnvironment, so the latex filter is
    available and the <<< var >>> / <%% block %%> delimiters apply.

    Examples:\n

        $ render_latex.py render letter.tex.jinja -o letter.pdf --output-path outs

        $ render_latex.py render letter.tex.jinja --vars letter.yaml --debug
    """
    settings = _settings(config)

    if log_dir:
        log_file = setup_rendering_logger(log_dir, programs=settings.paths())
        typer.echo(f"Log: {log_file}")
    elif debug or settings.debug:
        enable_debug()

    context = OmegaConf.to_container(OmegaConf.load(vars_file), resolve=True) if vars_file else {}
    # Output files land in the working directory unless a root is configured
    if not (output_path or settings.output_path):
        output_path = Path.cwd()

    env = LatexEnvironment(
        loader=FileSystemLoader(str(template.parent)),
        undefined=StrictUndefined,
        latex_format=output_format,
        output_path=output_path,
        settings=settings,
    )

    typer.secho(f"\nRendering: {template}", fg=typer.colors.BLUE, bold=True)
    try:
        rendered = env.process(template.name, context, output)
    except LatexFilterError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output:
        dest = Path(env.latex_settings.output_path) / output
        typer.secho("✓ Document written", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Output: {dest}")
    else:
        typer.echo(rendered, nl=False)


@app.command("paths")
def paths_command(
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML settings file", exists=True),
    ] = None,
):
    """Show program paths and the default format the filter would use."""
    settings = _settings(config)

    for program, path in settings.paths().items():
        if path:
            typer.echo(f"  {program:<9} {path}")
        else:
            typer.secho(f"  {program:<9} <not found>", fg=typer.colors.YELLOW)
    typer.echo(f"  {'format':<9} {settings.format or '<from output name>'}")
    typer.echo(f"  {'output':<9} {settings.output_path or '<unset>'}")


if __name__ == "__main__":
    app()
