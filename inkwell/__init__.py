"""Inkwell - small template engine with conditional blocks."""

from .delimiters import DEFAULT_DELIMITER, Delimiters, split_delimiter
from .errors import (
    ContextError,
    ExitCode,
    InkwellError,
    OutputWriteError,
    TemplateLoadError,
    ValidationError,
)
from .template import Renderer, TemplateReport, render, scan_template
from .values import UNDEFINED

__version__ = "0.1.0"

__all__ = [
    "render",
    "Renderer",
    "scan_template",
    "TemplateReport",
    "split_delimiter",
    "Delimiters",
    "DEFAULT_DELIMITER",
    "UNDEFINED",
    "InkwellError",
    "TemplateLoadError",
    "ContextError",
    "OutputWriteError",
    "ValidationError",
    "ExitCode",
]
