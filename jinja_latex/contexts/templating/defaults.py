"""
Default settings for the latex filter.

Program paths, default format and output root are read from the
environment (a .env file is honoured) when settings are loaded, not when
this module is imported, so every registration sees current values:

    LATEX_PATH, PDFLATEX_PATH, DVIPS_PATH   program locations (PATH lookup if unset)
    LATEX_FORMAT                            default output format
    LATEX_OUTPUT_PATH                       root directory for output files
    LATEX_TMPDIR                            parent of per-call working directories
    LATEX_DEBUG                             "true" enables the [latex] diagnostic stream
"""

import os
import shutil
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import load_dotenv
from omegaconf import OmegaConf

from jinja_latex.contexts.rendering.formats import PROGRAMS, FilterConfig

load_dotenv()

DEFAULT_FILTER_NAME = "latex"

# Environment variable consulted for each program path
PROGRAM_ENV_VARS = {
    "latex": "LATEX_PATH",
    "pdflatex": "PDFLATEX_PATH",
    "dvips": "DVIPS_PATH",
}


@dataclass(frozen=True)
class LatexSettings:
    """
    Snapshot of process-wide filter defaults.

    Registration copies these values, so changing the environment afterwards
    only affects filters registered later.
    """

    format: Optional[str] = None
    latex: Optional[str] = None
    pdflatex: Optional[str] = None
    dvips: Optional[str] = None
    output_path: Optional[str] = None
    tmp_root: Optional[str] = None
    debug: bool = False

    def paths(self) -> Dict[str, Optional[str]]:
        """Return the latex, pdflatex and dvips paths."""
        return {program: getattr(self, program) for program in PROGRAMS}

    def filter_config(self) -> FilterConfig:
        """Return these settings as filter defaults."""
        return FilterConfig(
            format=self.format,
            latex=self.latex,
            pdflatex=self.pdflatex,
            dvips=self.dvips,
            output_path=self.output_path,
        )

    def override(self, **values) -> "LatexSettings":
        """Return a copy with every non-empty value in values applied."""
        return replace(self, **{key: value for key, value in values.items() if value})


def _locate(program: str) -> Optional[str]:
    return os.getenv(PROGRAM_ENV_VARS[program]) or shutil.which(program)


def load_settings() -> LatexSettings:
    """
    Build settings from the current environment.

    Returns:
        LatexSettings with paths from LATEX_PATH/PDFLATEX_PATH/DVIPS_PATH,
        falling back to a PATH lookup for each program
    """
    return LatexSettings(
        format=os.getenv("LATEX_FORMAT") or None,
        latex=_locate("latex"),
        pdflatex=_locate("pdflatex"),
        dvips=_locate("dvips"),
        output_path=os.getenv("LATEX_OUTPUT_PATH") or None,
        tmp_root=os.getenv("LATEX_TMPDIR") or None,
        debug=os.getenv("LATEX_DEBUG", "false").lower() == "true",
    )


def load_settings_file(
    config_path: Union[str, Path], base: Optional[LatexSettings] = None
) -> LatexSettings:
    """
    Load settings from a YAML file on top of base settings.

    The file holds any of the LatexSettings fields at top level:

        format: pdf
        pdflatex: /usr/local/texlive/bin/pdflatex
        output_path: outs/documents

    Args:
        config_path: Path to the YAML file
        base: Settings to start from (defaults to load_settings())

    Returns:
        Merged LatexSettings

    Raises:
        ValueError: If the file contains unknown keys
    """
    if base is None:
        base = load_settings()

    values = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True) or {}

    valid = {f.name for f in fields(LatexSettings)}
    unknown = sorted(set(values) - valid)
    if unknown:
        raise ValueError(f"Unknown latex settings {unknown}. Valid settings: {sorted(valid)}")

    merged = asdict(base)
    merged.update({key: value for key, value in values.items() if value is not None})
    return LatexSettings(**merged)
