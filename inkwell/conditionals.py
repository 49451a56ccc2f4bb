"""Conditional block resolution.

Blocks are resolved innermost first: each pass locates one block without
nested #if markers, picks its section and splices the section content
back into the text. Each pass removes at least the header and footer
markers, so the text shrinks until no block is left.
"""

import logging
from typing import Any

from .blocks import Section, locate_block, split_sections
from .conditions import evaluate
from .delimiters import Delimiters

logger = logging.getLogger(__name__)

_PADDING = " \t"


def select_section(sections: list[Section], data: Any) -> Section | None:
    """First section whose condition holds, or the else section."""
    for section in sections:
        if section.type == "else" or evaluate(section.condition, data):
            return section
    return None


def _line_before(text: str) -> str:
    return text[text.rfind("\n") + 1:]


def _line_after(text: str) -> str:
    return text.split("\n", 1)[0]


def _starts_with_break(text: str) -> bool:
    return text.startswith(("\n", "\r\n"))


def _drop_leading_break(text: str) -> str:
    return text[2:] if text.startswith("\r\n") else text[1:]


def _drop_trailing_break(text: str) -> str:
    if text.endswith("\r\n"):
        return text[:-2]
    return text[:-1] if text.endswith("\n") else text


def splice(before: str, content: str, after: str) -> str:
    """Put the selected content where a block stood.

    Inline blocks (text on the same line and single-line content) are
    replaced verbatim. A block on its own line that selects nothing takes
    its line with it. Block-level content keeps its own lines: the blank
    remainder of the header and footer lines is dropped, and a line break
    is added where the content would otherwise run into its neighbours.
    """
    line_has_text = bool(_line_before(before).strip() or _line_after(after).strip())
    if line_has_text and "\n" not in content:
        return before + content + after

    head = before.rstrip(_PADDING)
    tail = after.lstrip(_PADDING)
    opens_line = not head or head.endswith("\n")
    closes_line = not tail or _starts_with_break(tail)

    if not content.strip():
        if not (opens_line and closes_line):
            return before + after
        if tail:
            return head + _drop_leading_break(tail)
        return _drop_trailing_break(head)

    if opens_line:
        first, sep, rest = content.partition("\n")
        if sep and not first.strip():
            before, content = head, rest
    if closes_line:
        rest, sep, last = content.rpartition("\n")
        if sep and not last.strip():
            content, after = rest.removesuffix("\r"), tail

    if not opens_line and not content.startswith("\n"):
        content = "\n" + content
    if not closes_line and not content.endswith("\n"):
        content += "\n"
    return before + content + after


def process_conditionals(text: str, data: Any, delimiters: Delimiters) -> str:
    """Resolve every complete conditional block in the text.

    Unterminated #if markers are never located and stay in the output.
    """
    while True:
        block = locate_block(text, delimiters)
        if block is None:
            return text

        sections = split_sections(text, block)
        section = select_section(sections, data)
        if section is None:
            logger.debug("Block at %d-%d: no section selected", block.start, block.end)
            content = ""
        else:
            logger.debug(
                "Block at %d-%d: selected %s section (%r)",
                block.start, block.end, section.type, section.condition,
            )
            content = section.content

        text = splice(text[:block.start], content, text[block.end:])
