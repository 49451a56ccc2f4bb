"""Marker scanning, conditional block location and section splitting."""

from collections.abc import Iterator
from dataclasses import dataclass

from .delimiters import Delimiters


@dataclass(frozen=True)
class Marker:
    """A delimited span of template text."""
    body: str
    start: int
    end: int  # index right after the closing token(s)

    @property
    def directive(self) -> str | None:
        """Directive keyword (if, elseif, else, endif), None for variables."""
        body = self.body
        for keyword in ("elseif", "if"):
            head = "#" + keyword
            if body.startswith(head) and body[len(head):len(head) + 1].isspace():
                return keyword
        stripped = body.rstrip()
        if stripped == "#else":
            return "else"
        if stripped == "/if":
            return "endif"
        return None

    @property
    def argument(self) -> str:
        """Condition text of an #if/#elseif marker."""
        parts = self.body.split(None, 1)
        return parts[1].strip() if len(parts) > 1 else ""

    @property
    def is_variable(self) -> bool:
        return bool(self.body) and self.body[0] not in "#/"


@dataclass(frozen=True)
class Section:
    """One clause of a conditional block."""
    type: str  # "if", "elseif", "else"
    condition: str | None
    content: str


@dataclass(frozen=True)
class Block:
    """An innermost #if ... /if block."""
    header: Marker
    branches: tuple[Marker, ...]  # #elseif / #else markers in document order
    footer: Marker

    @property
    def start(self) -> int:
        return self.header.start

    @property
    def end(self) -> int:
        return self.footer.end


def iter_markers(text: str, delimiters: Delimiters, start: int = 0) -> Iterator[Marker]:
    """Yield markers left to right.

    An opening token repeated back to back (``&&`` for an ``&`` pair) must
    be closed by the closing token repeated as many times. An opening run
    with no matching close is literal text.
    """
    if not delimiters.usable:
        return

    opener, closer = delimiters.open, delimiters.close
    pos = start
    while True:
        open_idx = text.find(opener, pos)
        if open_idx == -1:
            return

        repeat = 1
        body_start = open_idx + len(opener)
        while text.startswith(opener, body_start):
            repeat += 1
            body_start += len(opener)

        fence = closer * repeat
        close_idx = text.find(fence, body_start)
        if close_idx == -1:
            pos = body_start
            continue

        end = close_idx + len(fence)
        yield Marker(body=text[body_start:close_idx], start=open_idx, end=end)
        pos = end


def _close_block(markers: list[Marker], index: int) -> Block | None:
    """Walk from the header at index to its footer.

    Returns None when the header is never closed or when its body holds
    another #if, i.e. the block is not innermost.
    """
    depth = 0
    branches: list[Marker] = []
    for marker in markers[index:]:
        kind = marker.directive
        if kind == "if":
            depth += 1
            if depth > 1:
                return None
        elif kind == "endif":
            depth -= 1
            if depth == 0:
                return Block(header=markers[index], branches=tuple(branches), footer=marker)
        elif kind in ("elseif", "else"):
            branches.append(marker)
    return None


def locate_block(text: str, delimiters: Delimiters) -> Block | None:
    """Find an innermost complete conditional block.

    Every #if header is tried left to right; the last one that closes
    without nesting wins. Returns None when no complete block remains.
    """
    markers = list(iter_markers(text, delimiters))
    found = None
    for index, marker in enumerate(markers):
        if marker.directive != "if":
            continue
        block = _close_block(markers, index)
        if block is not None:
            found = block
    return found


def split_sections(text: str, block: Block) -> list[Section]:
    """Slice a block body into its if/elseif/else sections.

    Sections cover the body between header and footer exactly, in
    document order, with the marker text itself excluded.
    """
    clauses = [block.header, *sorted(block.branches, key=lambda m: m.start)]
    stops = [marker.start for marker in clauses[1:]] + [block.footer.start]

    sections = []
    for marker, stop in zip(clauses, stops):
        kind = marker.directive
        condition = None if kind == "else" else marker.argument
        sections.append(Section(type=kind, condition=condition, content=text[marker.end:stop]))
    return sections
