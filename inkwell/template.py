"""Template rendering: conditionals first, then variable substitution."""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .blocks import iter_markers
from .conditionals import process_conditionals
from .delimiters import DEFAULT_DELIMITER, Delimiters, split_delimiter
from .values import UNDEFINED, resolve_path, to_text

logger = logging.getLogger(__name__)

# Three or more line breaks, possibly with horizontal whitespace between them.
_BLANK_RUN_RE = re.compile(r"\n(?:[ \t\r]*\n){2,}")


def substitute_variables(text: str, data: Any, delimiters: Delimiters) -> str:
    """Replace variable markers with their resolved values.

    Supports:
        - &name& - direct variable
        - &user.address.city& - nested access
        - & name & - surrounding spaces are ignored

    Unknown variables render as the empty string. Directive markers
    (body starting with # or /) and empty markers are left as-is.
    """
    out: list[str] = []
    pos = 0
    for marker in iter_markers(text, delimiters):
        if not marker.is_variable:
            continue
        path = marker.body.strip()
        value = resolve_path(path, data)
        if value is UNDEFINED:
            logger.debug("Variable %r is undefined", path)
        out.append(text[pos:marker.start])
        out.append(to_text(value))
        pos = marker.end
    out.append(text[pos:])
    return "".join(out)


def normalize_blank_lines(text: str) -> str:
    """Collapse runs of blank lines down to a single blank line."""
    return _BLANK_RUN_RE.sub("\n\n", text)


@dataclass(frozen=True)
class Renderer:
    """Renders templates with a fixed delimiter.

    Example:
        renderer = Renderer("{{}}")
        renderer.render("Hi {{user.name}}", {"user": {"name": "Ann"}})
    """

    delimiter: str = DEFAULT_DELIMITER
    delimiters: Delimiters = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "delimiters", split_delimiter(self.delimiter))

    def render(self, template: str, data: Mapping[str, Any] | None = None) -> str:
        """Render a template against a data context.

        Never raises on malformed templates: unknown variables become empty
        strings, unterminated blocks stay in the output, and a delimiter
        that cannot bracket anything leaves the template untouched.
        """
        if data is None:
            data = {}
        if not self.delimiters.usable:
            logger.debug("Delimiter %r brackets no markers; template unchanged", self.delimiter)
            return template

        resolved = process_conditionals(template, data, self.delimiters)
        result = substitute_variables(resolved, data, self.delimiters)
        if result != template:
            result = normalize_blank_lines(result)
        return result


def render(
    template: str,
    data: Mapping[str, Any] | None = None,
    delimiter: str = DEFAULT_DELIMITER,
) -> str:
    """Render a template with conditional blocks and variable substitution.

    Args:
        template: Template text
        data: Nested data context (None means empty)
        delimiter: Marker token; even length splits into open/close halves,
            odd length is used on both sides

    Returns:
        Rendered text
    """
    return Renderer(delimiter).render(template, data)


@dataclass
class TemplateReport:
    """What a template references, and what is wrong with its directives."""
    variables: list[str] = field(default_factory=list)
    conditions: list[str] = field(default_factory=list)
    problems: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.problems


def scan_template(template: str, delimiter: str = DEFAULT_DELIMITER) -> TemplateReport:
    """Inspect a template without rendering it.

    Rendering tolerates unbalanced directives by leaving them in the
    output; this reports them instead, with 1-based line numbers.
    """
    report = TemplateReport()
    open_blocks: list[tuple[int, bool]] = []  # (header line, else seen)

    for marker in iter_markers(template, split_delimiter(delimiter)):
        line = template.count("\n", 0, marker.start) + 1
        kind = marker.directive

        if kind == "if":
            open_blocks.append((line, False))
            report.conditions.append(marker.argument)
        elif kind == "elseif":
            if not open_blocks:
                report.problems.append(f"line {line}: #elseif outside of an #if block")
            elif open_blocks[-1][1]:
                report.problems.append(f"line {line}: #elseif after #else")
            report.conditions.append(marker.argument)
        elif kind == "else":
            if not open_blocks:
                report.problems.append(f"line {line}: #else outside of an #if block")
            elif open_blocks[-1][1]:
                report.problems.append(f"line {line}: duplicate #else")
            else:
                open_blocks[-1] = (open_blocks[-1][0], True)
        elif kind == "endif":
            if not open_blocks:
                report.problems.append(f"line {line}: /if without a matching #if")
            else:
                open_blocks.pop()
        elif marker.is_variable:
            path = marker.body.strip()
            if path not in report.variables:
                report.variables.append(path)
        elif marker.body:
            report.problems.append(f"line {line}: unknown directive {marker.body.strip()!r}")

    for line, _ in open_blocks:
        report.problems.append(f"line {line}: #if is never closed")
    return report
