"""
Table boundary detection and row reconstruction.

Report text arrives as a flat sequence of lines. A TableScanner walks them
once, top to bottom, tracking whether it is inside the contaminant table and
whether a row is open. Every line is classified first, then the
(state, line kind) pair is looked up in TRANSITIONS:

    state          line kind          next state     row action
    -------------  -----------------  -------------  ----------
    OUTSIDE_TABLE  TABLE_START        INSIDE_TABLE   -
    INSIDE_TABLE   TABLE_START        INSIDE_TABLE   -
    INSIDE_TABLE   EXIT_SECTION       OUTSIDE_TABLE  -
    INSIDE_TABLE   CATEGORY_HEADING   INSIDE_TABLE   -
    INSIDE_TABLE   CONTAMINANT        INSIDE_TABLE   open row
    INSIDE_TABLE   OTHER              INSIDE_TABLE   append (if a row is open)
    OUTSIDE_TABLE  anything else      OUTSIDE_TABLE  -

Any kind other than OTHER closes an open row before its own transition runs.
End of input closes whatever row is still open.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .name_matcher import match_contaminant_name, normalise_whitespace

TABLE_START_PATTERN = re.compile(r"table of detected contaminants", re.IGNORECASE)
HEADER_LINE_PATTERN = re.compile(r"^contaminant(\s+violation.*)?$", re.IGNORECASE)
CATEGORY_LINE_PATTERN = re.compile(
    r"(Inorganic Contaminants|Radioactive Contaminants|Microbiological Contaminants|"
    r"Synthetic Organic Contaminants|Disinfectants|Lead and Copper|Unregulated Detected Substances)",
    re.IGNORECASE,
)
EXIT_SECTION_PATTERN = re.compile(r"^(definitions|notes|additional|footnotes|terminology)", re.IGNORECASE)
HORIZONTAL_RULE_PATTERN = re.compile(r"^[-–]{4,}$")

LINE_BREAK_PATTERN = re.compile(r"\r?\n")


class TableState(str, Enum):
    OUTSIDE_TABLE = "outside_table"
    INSIDE_TABLE = "inside_table"


class LineKind(str, Enum):
    TABLE_START = "table_start"  # Table title or column header line
    EXIT_SECTION = "exit_section"  # Section after the table, or a horizontal rule
    CATEGORY_HEADING = "category_heading"
    CONTAMINANT = "contaminant"
    OTHER = "other"


class RowAction(str, Enum):
    NONE = "none"
    OPEN = "open"
    APPEND = "append"


TRANSITIONS: Dict[Tuple[TableState, LineKind], Tuple[TableState, RowAction]] = {
    (TableState.OUTSIDE_TABLE, LineKind.TABLE_START): (TableState.INSIDE_TABLE, RowAction.NONE),
    (TableState.INSIDE_TABLE, LineKind.TABLE_START): (TableState.INSIDE_TABLE, RowAction.NONE),
    (TableState.INSIDE_TABLE, LineKind.EXIT_SECTION): (TableState.OUTSIDE_TABLE, RowAction.NONE),
    (TableState.INSIDE_TABLE, LineKind.CATEGORY_HEADING): (TableState.INSIDE_TABLE, RowAction.NONE),
    (TableState.INSIDE_TABLE, LineKind.CONTAMINANT): (TableState.INSIDE_TABLE, RowAction.OPEN),
    (TableState.INSIDE_TABLE, LineKind.OTHER): (TableState.INSIDE_TABLE, RowAction.APPEND),
}


@dataclass
class RowCandidate:
    """A contaminant row: its canonical name and the physical lines it spans."""

    name: str
    lines: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(self.lines)


def split_lines(text: str) -> List[str]:
    """Split text into whitespace-normalised, non-empty lines."""
    lines = (normalise_whitespace(line) for line in LINE_BREAK_PATTERN.split(text))
    return [line for line in lines if line]


def classify_line(line: str) -> Tuple[LineKind, Optional[str]]:
    """
    Classify a normalised line.

    Returns:
        (kind, canonical name); the name is only set for CONTAMINANT lines
    """
    if TABLE_START_PATTERN.search(line) or HEADER_LINE_PATTERN.search(line):
        return LineKind.TABLE_START, None
    if EXIT_SECTION_PATTERN.search(line) or HORIZONTAL_RULE_PATTERN.search(line):
        return LineKind.EXIT_SECTION, None
    if CATEGORY_LINE_PATTERN.search(line):
        return LineKind.CATEGORY_HEADING, None
    name = match_contaminant_name(line)
    if name:
        return LineKind.CONTAMINANT, name
    return LineKind.OTHER, None


class TableScanner:
    """Single-pass state machine that turns lines into RowCandidates."""

    def __init__(self):
        self.state = TableState.OUTSIDE_TABLE
        self._row: Optional[RowCandidate] = None

    @property
    def row_open(self) -> bool:
        return self._row is not None

    def feed(self, line: str) -> Optional[RowCandidate]:
        """
        Process one normalised line.

        Returns:
            The row closed by this line, if any
        """
        kind, name = classify_line(line)

        closed = None
        if self._row is not None:
            if kind is LineKind.OTHER:
                self._row.lines.append(line)
                return None
            closed = self.finish()

        self.state, action = TRANSITIONS.get((self.state, kind), (self.state, RowAction.NONE))
        if action is RowAction.OPEN:
            self._row = RowCandidate(name=name, lines=[line])
        # APPEND without an open row: stray text inside the table, ignored.

        return closed

    def finish(self) -> Optional[RowCandidate]:
        """Close and return the open row, if any."""
        row, self._row = self._row, None
        return row


def assemble_rows(lines: Iterable[str]) -> Iterator[RowCandidate]:
    """
    Yield one RowCandidate per contaminant row, in document order.

    Args:
        lines: Normalised, non-empty lines (see split_lines)
    """
    scanner = TableScanner()
    for line in lines:
        row = scanner.feed(line)
        if row is not None:
            yield row
    row = scanner.finish()
    if row is not None:
        yield row
