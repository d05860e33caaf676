"""
IDN report parsing: rebuilds wrapped lines from the scanner's text export and
scans them into a ScanReport.

The export has no schema. Each finding starts on a line carrying "Date :",
and the fields that follow (Scale, Real/Brain Instruction Freq., Scantype)
belong to the most recent finding until the next date line.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from models import Condition, ScanReport

logger = logging.getLogger(__name__)

DATE_MARKER = "Date :"
SCALE_MARKER = "Scale:"
SCANTYPE_MARKER = "Scantype:"
REAL_FREQ_LABEL = "Real Instruction Freq."
# The exporter is inconsistent about whitespace inside this label
BRAIN_FREQ_LABELS = (
    "Brain Instruction Freq.",
    "Brain InstructionFreq.",
    "Brain  Instruction Freq.",
)
# Known points where the exporter wraps a logical line
WRAP_SUFFIXES = (",", "Brain Instruction", "Brain Instruction Freq.")
MAX_CONTINUATION_MERGES = 2

SCALE_RE = re.compile(r"Scale:\s*(\d+)")
PERCENTAGE_RE = re.compile(r"\((\d+(?:\.\d+)?%)\)\s*Scale:", re.IGNORECASE)
SCANTYPE_RE = re.compile(r"Scantype:\s*(\d+)")
PAREN_GROUP_RE = re.compile(r"\(([^)]+)\)")


class ReportReadError(Exception):
    """The report text could not be read; nothing was parsed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not read IDN report {path}: {reason}")
        self.path = path
        self.reason = reason


# =============================================================================
# Line reassembly
# =============================================================================

def is_continuation_line(line: str) -> bool:
    """True when the exporter wrapped this line and the next one belongs to it"""
    return line.rstrip().endswith(WRAP_SUFFIXES)


def _inside_open_group(text: str) -> bool:
    return text.rfind("(") > text.rfind(")")


def join_continuation(line: str, next_line: str) -> str:
    """
    Append the wrapped remainder to a line.

    A trailing comma inside an unclosed "(...)" list separates frequency
    tokens and is kept. Anywhere else it is a wrap artifact and is dropped.
    """
    head = line.rstrip()
    if head.endswith(",") and not _inside_open_group(head):
        head = head[:-1]
    return f"{head}{next_line.strip()}"


def reassemble_lines(raw_lines: List[str]) -> List[str]:
    """
    Merge wrapped physical lines into logical lines.

    A wrapped line pulls in its successor; if the result still ends with a
    comma, one more line is pulled in. Two merges is the deepest wrap seen in
    exports. A wrap marker on the last line is kept as-is.
    """
    lines: List[str] = []
    i = 0
    total = len(raw_lines)
    while i < total:
        line = raw_lines[i]
        if is_continuation_line(line):
            merges = 0
            while merges < MAX_CONTINUATION_MERGES and i + 1 < total:
                if merges > 0 and not line.rstrip().endswith(","):
                    break
                line = join_continuation(line, raw_lines[i + 1])
                i += 1
                merges += 1
        lines.append(line)
        i += 1
    return lines


# =============================================================================
# Parser state
# =============================================================================

@dataclass
class NoOpenCondition:
    pass


@dataclass
class OpenCondition:
    """A finding still collecting fields from the lines below its date line"""
    fields: Dict[str, Any] = field(default_factory=dict)

    def to_condition(self) -> Condition:
        return Condition(**self.fields)


ParserState = Union[NoOpenCondition, OpenCondition]


def finalize_condition(state: ParserState, conditions: List[Condition]) -> NoOpenCondition:
    """Close the open finding, if any, appending it to conditions"""
    if isinstance(state, OpenCondition):
        conditions.append(state.to_condition())
    return NoOpenCondition()


def open_condition(state: ParserState, line: str, conditions: List[Condition]) -> OpenCondition:
    """Start a new finding from a date line, closing the previous one first"""
    finalize_condition(state, conditions)
    name = line.split("  ")[0].strip()
    return OpenCondition(fields={"name": name or None})


# =============================================================================
# Field extraction
# =============================================================================

def extract_scale(line: str) -> Optional[int]:
    match = SCALE_RE.search(line)
    return int(match.group(1)) if match else None


def extract_percentage(line: str) -> Optional[str]:
    """The "(45%)" that sits right before "Scale:", keeping its % sign"""
    match = PERCENTAGE_RE.search(line)
    return match.group(1) if match else None


def extract_frequencies(line: str, label: str) -> List[str]:
    """Comma-separated tokens of the first "(...)" group after label"""
    _, _, remainder = line.partition(label)
    match = PAREN_GROUP_RE.search(remainder)
    if not match:
        return []
    return [token.strip() for token in match.group(1).split(",")]


def extract_scan_type(line: str) -> Optional[int]:
    match = SCANTYPE_RE.search(line)
    return int(match.group(1)) if match else None


def _apply_field_markers(state: OpenCondition, line: str) -> Optional[int]:
    """
    Record every field marker found on line into the open finding.
    Returns the scan type when the line carries one.
    """
    fields = state.fields
    if SCALE_MARKER in line:
        scale = extract_scale(line)
        if scale is not None:
            fields["scale"] = scale
        percentage = extract_percentage(line)
        if percentage is not None:
            fields["percentage"] = percentage
    if REAL_FREQ_LABEL in line:
        fields["realFreq"] = tuple(extract_frequencies(line, REAL_FREQ_LABEL))
    for label in BRAIN_FREQ_LABELS:
        if label in line:
            fields["brainFreq"] = tuple(extract_frequencies(line, label))
    if SCANTYPE_MARKER in line:
        return extract_scan_type(line)
    return None


# =============================================================================
# Entry points
# =============================================================================

def parse_idn_lines(raw_lines: List[str]) -> ScanReport:
    """Parse the physical lines of one IDN export into a ScanReport"""
    conditions: List[Condition] = []
    scan_type = 0
    state: ParserState = NoOpenCondition()

    for line in reassemble_lines(raw_lines):
        if DATE_MARKER in line:
            state = open_condition(state, line, conditions)
        if isinstance(state, OpenCondition):
            found = _apply_field_markers(state, line)
            if found is not None:
                scan_type = found

    finalize_condition(state, conditions)
    logger.debug("Parsed IDN report: scanType=%s, %d conditions", scan_type, len(conditions))
    return ScanReport(scanType=scan_type, report=conditions)


def parse_idn_text(content: str) -> ScanReport:
    return parse_idn_lines(content.split("\n"))


def parse_idn_report_file(path: str) -> ScanReport:
    """Read a UTF-8 IDN export from disk and parse it"""
    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to read IDN report %s: %s", path, exc)
        raise ReportReadError(path, str(exc)) from exc
    return parse_idn_text(content)
