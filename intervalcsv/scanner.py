"""
Envelope scanning.

The input is read as a flat sequence of trimmed lines. Each line is
classified once; known tags drive the state machine in rules.TRANSITIONS,
numeric records inside <CSVIntervalData> are routed into a ParsedDocument,
and everything else (blank lines, the XML declaration, unknown tags) is
ignored.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

from .errors import FormatError
from .models import ParsedDocument
from .rules import (
    GROUP_PREFIX,
    HEADER_PREFIX,
    TRAILER_PREFIX,
    TRANSITIONS,
    LineKind,
    ScanState,
)

logger = logging.getLogger(__name__)

RE_RECORD = re.compile(r"^[0-9]{3}")
RE_TRANSACTION = re.compile(
    r'<Transaction transactionDate="[^"]+" transactionID="[^"]+">'
)

_EXACT_TAGS = {
    kind.value: kind
    for kind in LineKind
    if kind.value.endswith(">")
}


def classify(line: str) -> LineKind:
    if line in _EXACT_TAGS:
        return _EXACT_TAGS[line]
    tag = LineKind.TRANSACTION_OPEN.value
    if line == tag + ">" or line.startswith(tag + " "):
        return LineKind.TRANSACTION_OPEN
    if line.startswith(LineKind.METER_DATA_OPEN.value):
        return LineKind.METER_DATA_OPEN
    if RE_RECORD.match(line):
        return LineKind.RECORD
    return LineKind.OTHER


def has_transaction_attributes(line: str) -> bool:
    return RE_TRANSACTION.fullmatch(line) is not None


def accumulate(document: ParsedDocument, record: str) -> None:
    """Route one numeric record into the header, trailer or body slot."""
    if record.startswith(HEADER_PREFIX):
        document.header = record
    elif record.startswith(TRAILER_PREFIX):
        document.trailer = record
    else:
        document.body.append(record)


class EnvelopeScanner:
    def __init__(self, source: Optional[str] = None):
        self.state = ScanState.EXPECT_HEADER
        self.document = ParsedDocument(source=source)

    def feed(self, raw: str) -> None:
        line = raw.strip()
        kind = classify(line)
        if kind is LineKind.OTHER:
            return

        next_state = TRANSITIONS.get((self.state, kind))
        if next_state is None:
            if kind is LineKind.RECORD:
                raise FormatError(line, "record outside <CSVIntervalData>")
            raise FormatError(line, f"unexpected in state {self.state.name}")

        if kind is LineKind.TRANSACTION_OPEN and not has_transaction_attributes(line):
            raise FormatError(line, "transactionDate and transactionID are required")

        if kind is LineKind.RECORD:
            self._route(line)

        if next_state is not self.state:
            logger.debug("%s -> %s on %r", self.state.name, next_state.name, line)
        self.state = next_state

    def _route(self, record: str) -> None:
        body = self.document.body
        is_body_record = not record.startswith((HEADER_PREFIX, TRAILER_PREFIX))
        # the first body record has to open a group
        if is_body_record and not body and not record.startswith(GROUP_PREFIX):
            raise FormatError(record, f"data record before the first {GROUP_PREFIX} record")
        accumulate(self.document, record)

    def finish(self) -> ParsedDocument:
        self.document.final_state = self.state
        if self.state is not ScanState.DONE:
            logger.warning(
                "envelope of %s not closed (stopped in %s)",
                self.document.source or "<input>",
                self.state.name,
            )
        logger.info(
            "scanned %s: %d body records",
            self.document.source or "<input>",
            len(self.document.body),
        )
        return self.document


def scan_lines(lines: Iterable[str], source: Optional[str] = None) -> ParsedDocument:
    """
    Validate the envelope and collect its records.

    Raises FormatError on the first offending line; nothing collected up to
    that point is returned.
    """
    scanner = EnvelopeScanner(source=source)
    for line in lines:
        scanner.feed(line)
    return scanner.finish()


def validate_lines(lines: Iterable[str]) -> ScanState:
    return scan_lines(lines).final_state
