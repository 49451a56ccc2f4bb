"""Inkwell error types and exit codes.

The rendering engine itself never raises for malformed templates; these
errors belong to the surfaces around it (loading templates and data,
validating directive balance from the command line).
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes used by the command line."""
    SUCCESS = 0
    RUNTIME_ERROR = 1
    VALIDATION_ERROR = 2
    INPUT_ERROR = 3


class InkwellError(Exception):
    """Base error for all Inkwell errors."""
    exit_code: ExitCode = ExitCode.RUNTIME_ERROR


class TemplateLoadError(InkwellError):
    """Template source could not be read."""
    exit_code = ExitCode.INPUT_ERROR


class ContextError(InkwellError):
    """Data context is not a JSON object."""
    exit_code = ExitCode.INPUT_ERROR


class OutputWriteError(InkwellError):
    """Rendered output could not be written."""
    exit_code = ExitCode.INPUT_ERROR


class ValidationError(InkwellError):
    """Template has unbalanced conditional directives."""
    exit_code = ExitCode.VALIDATION_ERROR

    def __init__(self, message: str, problems: list[str] | None = None):
        super().__init__(message)
        self.problems = problems or []
